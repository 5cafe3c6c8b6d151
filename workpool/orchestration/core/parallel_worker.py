"""Worker pool management for parallel processing pipelines.

This module provides the worker loop that drains the shared input queue and
the pool that runs a fixed number of those loops on their own threads and
joins all of them before returning.
"""

import logging
import os
import queue
import random
import threading
import time
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import Callable, List, Optional

from workpool.orchestration.core.queue.queue_manager import QueueManager
from workpool.orchestration.core.queue.result_collector import ResultCollector
from workpool.types.pipeline.worker import WorkerConfig, WorkerPoolMetrics, WorkerRunSummary, WorkerStatus

logger = logging.getLogger(__name__)

DEFAULT_DELAY_MIN_MS = 500
DEFAULT_DELAY_MAX_MS = 3000


class InvalidArgumentError(ValueError):
    """Raised when a worker is started without its shared state."""


@dataclass(frozen=True)
class SharedState:
    """The two shared resources every worker in a pool receives."""

    input_queue: QueueManager
    results: ResultCollector


def double(value: int) -> int:
    """Placeholder transform applied to every item."""
    return value * 2


class SimulatedDelay:
    """Variable-latency stand-in for real work.

    Durations are drawn uniformly from ``[min_ms, max_ms]`` using the caller's
    random source, and slept through ``sleep`` (seconds, like ``time.sleep``).
    """

    def __init__(
        self,
        min_ms: int = DEFAULT_DELAY_MIN_MS,
        max_ms: int = DEFAULT_DELAY_MAX_MS,
        sleep: Optional[Callable[[float], None]] = None,
    ):
        if min_ms < 0 or max_ms < 0:
            raise ValueError(f"Delay bounds must be non-negative, got {min_ms}..{max_ms}")
        if min_ms > max_ms:
            raise ValueError(f"Minimum delay {min_ms} ms exceeds maximum delay {max_ms} ms")
        self.min_ms = min_ms
        self.max_ms = max_ms
        self._sleep = sleep or time.sleep

    def draw(self, rng: random.Random) -> int:
        """Pick a duration in milliseconds."""
        if self.max_ms == 0:
            return 0
        return rng.randint(self.min_ms, self.max_ms)

    def wait(self, duration_ms: int) -> None:
        if duration_ms > 0:
            self._sleep(duration_ms / 1000.0)


def process_items(
    shared: Optional[SharedState],
    *,
    name: Optional[str] = None,
    transform: Callable[[int], int] = double,
    delay: Optional[SimulatedDelay] = None,
    rng: Optional[random.Random] = None,
    on_processed: Optional[Callable[[], None]] = None,
) -> int:
    """Drain the shared queue until it is observed empty.

    Each iteration takes one item under the queue lock, transforms it and
    waits out the simulated delay with no lock held, then appends the result
    under the collector lock.

    Args:
        shared: Input queue and result collection shared by the whole pool
        name: Worker name used in log messages (defaults to the thread name)
        transform: Function applied to every item
        delay: Simulated work delay (defaults to 500-3000 ms)
        rng: Random source for delay durations, owned by this worker
        on_processed: Called after each stored result

    Returns:
        Number of items this worker processed

    Raises:
        InvalidArgumentError: If ``shared`` or one of its handles is missing
    """
    if shared is None:
        raise InvalidArgumentError("Worker requires shared state, got None")
    if shared.input_queue is None or shared.results is None:
        raise InvalidArgumentError("Worker shared state is missing its input queue or result collection")

    name = name or threading.current_thread().name
    delay = delay or SimulatedDelay()
    rng = rng or random.Random()

    processed = 0
    status = WorkerStatus.FETCHING
    while status is not WorkerStatus.TERMINATED:
        try:
            item = shared.input_queue.dequeue()
        except queue.Empty:
            status = WorkerStatus.TERMINATED
            continue

        status = WorkerStatus.PROCESSING
        output = transform(item)
        duration = delay.draw(rng)
        logger.info(f"Processing data {item} for {duration} ms...")
        delay.wait(duration)

        shared.results.append(output)
        processed += 1
        if on_processed is not None:
            on_processed()
        status = WorkerStatus.FETCHING

    logger.info("Finished processing all data.")
    logger.debug(f"{name} terminated after processing {processed} items")
    return processed


class WorkerPool:
    """Manages a fixed-size pool of worker threads draining a shared queue."""

    def __init__(
        self,
        name: str = "Worker",
        max_workers: Optional[int] = None,
        config: Optional[WorkerConfig] = None,
        transform: Callable[[int], int] = double,
        sleep: Optional[Callable[[float], None]] = None,
    ):
        """Initialize worker pool with configuration.

        Args:
            name: Pool identifier name, also the prefix of worker names
            max_workers: Number of workers; falls back to ``config["count"]``
                and then to the host's CPU count. Zero or less runs nothing.
            config: Worker options (``count``, ``delay_min_ms``, ``delay_max_ms``, ``seed``)
            transform: Function each worker applies to its items
            sleep: Replacement for ``time.sleep`` used by the simulated delay
        """
        self.name = name
        self.config = config or {}

        if max_workers is None:
            max_workers = self.config.get("count")
        if max_workers is None:
            max_workers = os.cpu_count() or 1
        self.max_workers = max_workers

        self.transform = transform
        self.delay = SimulatedDelay(
            self.config.get("delay_min_ms", DEFAULT_DELAY_MIN_MS),
            self.config.get("delay_max_ms", DEFAULT_DELAY_MAX_MS),
            sleep=sleep,
        )
        self.seed = self.config.get("seed")

        # Monitoring attributes
        self.active_workers = 0
        self.completed_tasks = 0
        self.failed_tasks = 0
        self.runs = 0
        self.start_time = time.time()

        # Lock for thread-safe updates
        self._lock = threading.Lock()

    def worker_names(self) -> List[str]:
        return [f"{self.name} {i + 1}" for i in range(max(self.max_workers, 0))]

    def _worker_rngs(self) -> List[random.Random]:
        """Create one independent random source per worker."""
        count = max(self.max_workers, 0)
        if self.seed is None:
            return [random.Random() for _ in range(count)]
        master = random.Random(self.seed)
        return [random.Random(master.getrandbits(64)) for _ in range(count)]

    def _record_processed(self) -> None:
        with self._lock:
            self.completed_tasks += 1

    def _run_worker(self, shared: Optional[SharedState], name: str, rng: random.Random) -> int:
        thread = threading.current_thread()
        thread_name = thread.name
        thread.name = name
        with self._lock:
            self.active_workers += 1
        try:
            return process_items(
                shared,
                name=name,
                transform=self.transform,
                delay=self.delay,
                rng=rng,
                on_processed=self._record_processed,
            )
        finally:
            with self._lock:
                self.active_workers -= 1
            thread.name = thread_name

    def run(self, shared: Optional[SharedState]) -> List[WorkerRunSummary]:
        """Start every worker and block until the last one has terminated.

        Args:
            shared: Input queue and result collection handed to every worker

        Returns:
            One summary per worker, in worker order

        Raises:
            InvalidArgumentError: If a worker was started without shared state;
                raised only after every worker has finished
        """
        if self.max_workers <= 0:
            logger.warning(f"Worker pool '{self.name}' has {self.max_workers} workers; nothing to run")
            return []

        names = self.worker_names()
        rngs = self._worker_rngs()

        logger.info(f"Creating {self.max_workers} workers")
        with ThreadPoolExecutor(max_workers=self.max_workers,
                                thread_name_prefix=self.name) as executor:
            logger.info(f"Running {self.max_workers} workers...")
            futures = [
                executor.submit(self._run_worker, shared, name, rng)
                for name, rng in zip(names, rngs)
            ]
            logger.info(f"Waiting for {self.max_workers} workers finished working...")
            wait(futures)

        summaries: List[WorkerRunSummary] = []
        first_error: Optional[BaseException] = None
        for name, future in zip(names, futures):
            error = future.exception()
            if error is None:
                summaries.append({"name": name, "processed": future.result(), "status": WorkerStatus.TERMINATED})
                continue
            logger.error(f"{name} failed: {error}")
            with self._lock:
                self.failed_tasks += 1
            summaries.append({"name": name, "processed": 0, "status": WorkerStatus.ERROR, "error": str(error)})
            if first_error is None:
                first_error = error

        with self._lock:
            self.runs += 1

        if first_error is not None:
            raise first_error
        return summaries

    def get_metrics(self) -> WorkerPoolMetrics:
        """Get current worker pool metrics."""
        with self._lock:
            return {
                "name": self.name,
                "max_workers": self.max_workers,
                "active_workers": self.active_workers,
                "completed_tasks": self.completed_tasks,
                "failed_tasks": self.failed_tasks,
                "runs": self.runs,
                "uptime_seconds": time.time() - self.start_time
            }


# Export the classes
__all__ = [
    "InvalidArgumentError",
    "SharedState",
    "SimulatedDelay",
    "WorkerPool",
    "double",
    "process_items",
]
