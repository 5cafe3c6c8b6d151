"""
Configure pytest environment.

This file is automatically loaded by pytest and used to set up the test environment.
"""
import sys
import threading
from pathlib import Path
from typing import List

import pytest

# Add the project root directory to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from workpool.orchestration.core.parallel_worker import SharedState, SimulatedDelay
from workpool.orchestration.core.queue.queue_manager import QueueManager
from workpool.orchestration.core.queue.result_collector import ResultCollector


class RecordingSleep:
    """Stand-in for time.sleep that records requested durations."""

    def __init__(self):
        self.calls: List[float] = []
        self._lock = threading.Lock()

    def __call__(self, seconds: float) -> None:
        with self._lock:
            self.calls.append(seconds)


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    """A sleep replacement that returns immediately."""
    return RecordingSleep()


@pytest.fixture
def instant_delay() -> SimulatedDelay:
    """Simulated delay with a zero range."""
    return SimulatedDelay(0, 0)


@pytest.fixture
def shared_state() -> SharedState:
    """Input queue holding 0..4 and an empty result collection."""
    input_queue = QueueManager(name="input")
    input_queue.populate(range(5))
    return SharedState(input_queue=input_queue, results=ResultCollector(name="output"))


@pytest.fixture
def restore_thread_name():
    """Restore the main thread's name after a test renames it."""
    thread = threading.current_thread()
    original = thread.name
    yield
    thread.name = original
