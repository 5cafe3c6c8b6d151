"""Tests for the worker loop and the worker pool."""

import random
import threading
from unittest.mock import patch

import pytest

from workpool.orchestration.core.parallel_worker import (
    InvalidArgumentError,
    SharedState,
    SimulatedDelay,
    WorkerPool,
    double,
    process_items,
)
from workpool.orchestration.core.queue.queue_manager import QueueManager
from workpool.orchestration.core.queue.result_collector import ResultCollector
from workpool.types.pipeline.worker import WorkerConfig, WorkerStatus


def _shared(items):
    input_queue = QueueManager()
    input_queue.populate(items)
    return SharedState(input_queue=input_queue, results=ResultCollector())


class TestSimulatedDelay:
    """Tests for the simulated work delay."""

    def test_draw_stays_within_bounds(self):
        delay = SimulatedDelay(500, 3000)
        rng = random.Random(1)
        for _ in range(200):
            assert 500 <= delay.draw(rng) <= 3000

    def test_zero_range_never_sleeps(self, recording_sleep):
        delay = SimulatedDelay(0, 0, sleep=recording_sleep)
        duration = delay.draw(random.Random())
        delay.wait(duration)
        assert duration == 0
        assert recording_sleep.calls == []

    def test_wait_converts_milliseconds(self, recording_sleep):
        delay = SimulatedDelay(250, 250, sleep=recording_sleep)
        delay.wait(delay.draw(random.Random()))
        assert recording_sleep.calls == [0.25]

    @pytest.mark.parametrize("min_ms,max_ms", [(-1, 10), (10, -1), (20, 10)])
    def test_invalid_bounds_rejected(self, min_ms, max_ms):
        with pytest.raises(ValueError):
            SimulatedDelay(min_ms, max_ms)


class TestProcessItems:
    """Tests for a single worker loop."""

    def test_drains_queue_and_doubles(self, shared_state, instant_delay):
        processed = process_items(shared_state, delay=instant_delay)

        assert processed == 5
        assert shared_state.input_queue.empty()
        assert sorted(shared_state.results.snapshot()) == [0, 2, 4, 6, 8]

    def test_empty_queue_terminates_immediately(self, instant_delay):
        shared = _shared([])
        assert process_items(shared, delay=instant_delay) == 0
        assert len(shared.results) == 0

    def test_custom_transform(self, shared_state, instant_delay):
        process_items(shared_state, delay=instant_delay, transform=lambda x: x + 100)
        assert sorted(shared_state.results.snapshot()) == [100, 101, 102, 103, 104]

    def test_on_processed_called_per_item(self, shared_state, instant_delay):
        calls = []
        process_items(shared_state, delay=instant_delay, on_processed=lambda: calls.append(1))
        assert len(calls) == 5

    def test_missing_shared_state_fails_fast(self):
        with pytest.raises(InvalidArgumentError):
            process_items(None)

    def test_missing_handle_leaves_shared_resources_untouched(self):
        input_queue = QueueManager()
        input_queue.populate(range(5))
        shared = SharedState(input_queue=input_queue, results=None)

        with pytest.raises(InvalidArgumentError):
            process_items(shared)

        assert input_queue.snapshot() == [0, 1, 2, 3, 4]
        assert input_queue.get_metrics()["dequeued"] == 0

    def test_missing_queue_leaves_results_untouched(self):
        results = ResultCollector()
        results.append(1)

        with pytest.raises(InvalidArgumentError):
            process_items(SharedState(input_queue=None, results=results))

        assert results.snapshot() == [1]

    def test_invalid_argument_is_a_value_error(self):
        assert issubclass(InvalidArgumentError, ValueError)

    def test_no_lock_held_during_delay(self, shared_state):
        """Both shared locks are free while the worker waits."""
        observed = []

        def sleep(seconds):
            for lock in (shared_state.input_queue._lock, shared_state.results._lock):
                acquired = lock.acquire(blocking=False)
                observed.append(acquired)
                if acquired:
                    lock.release()

        process_items(shared_state, delay=SimulatedDelay(1, 5, sleep=sleep))

        assert len(observed) == 10
        assert all(observed)

    def test_logs_progress(self, shared_state, instant_delay, caplog):
        caplog.set_level("INFO")
        process_items(shared_state, delay=instant_delay)

        messages = [record.getMessage() for record in caplog.records]
        assert "Processing data 0 for 0 ms..." in messages
        assert messages[-1] == "Finished processing all data."


class TestWorkerPool:
    """Tests for the worker pool."""

    def test_defaults_to_cpu_count(self):
        with patch("workpool.orchestration.core.parallel_worker.os.cpu_count", return_value=6):
            pool = WorkerPool()
        assert pool.max_workers == 6

    def test_count_from_config(self):
        config: WorkerConfig = {"count": 3, "delay_min_ms": 0, "delay_max_ms": 0}
        pool = WorkerPool(config=config)
        assert pool.max_workers == 3
        assert pool.worker_names() == ["Worker 1", "Worker 2", "Worker 3"]

    def test_run_processes_everything(self):
        pool = WorkerPool(max_workers=4, config={"delay_min_ms": 0, "delay_max_ms": 0})
        shared = _shared(range(20))

        summaries = pool.run(shared)

        assert len(summaries) == 4
        assert sum(summary["processed"] for summary in summaries) == 20
        assert all(summary["status"] is WorkerStatus.TERMINATED for summary in summaries)
        assert sorted(shared.results.snapshot()) == [double(x) for x in range(20)]

    def test_workers_run_on_named_threads(self):
        seen = set()
        lock = threading.Lock()

        def transform(value):
            with lock:
                seen.add(threading.current_thread().name)
            return value * 2

        pool = WorkerPool(max_workers=2, config={"delay_min_ms": 0, "delay_max_ms": 0},
                          transform=transform)
        pool.run(_shared(range(10)))

        assert seen
        assert seen <= {"Worker 1", "Worker 2"}

    def test_zero_workers_runs_nothing(self):
        pool = WorkerPool(max_workers=0)
        shared = _shared(range(5))

        assert pool.run(shared) == []
        assert len(shared.input_queue) == 5
        assert len(shared.results) == 0

    def test_negative_workers_runs_nothing(self):
        assert WorkerPool(max_workers=-2).run(_shared([1])) == []

    def test_missing_shared_state_raised_after_join(self):
        pool = WorkerPool(max_workers=3)

        with pytest.raises(InvalidArgumentError):
            pool.run(None)

        metrics = pool.get_metrics()
        assert metrics["failed_tasks"] == 3
        assert metrics["active_workers"] == 0
        assert metrics["completed_tasks"] == 0

    def test_seeded_delays_are_reproducible(self):
        runs = []
        for _ in range(2):
            calls = []
            pool = WorkerPool(max_workers=1, sleep=calls.append,
                              config={"delay_min_ms": 10, "delay_max_ms": 1000, "seed": 42})
            pool.run(_shared(range(8)))
            runs.append(calls)

        assert len(runs[0]) == 8
        assert runs[0] == runs[1]

    def test_workers_get_distinct_seeds(self):
        config: WorkerConfig = {"count": 4, "seed": 42}

        first_draws = [rng.getrandbits(64) for rng in WorkerPool(config=config)._worker_rngs()]
        repeat_draws = [rng.getrandbits(64) for rng in WorkerPool(config=config)._worker_rngs()]

        assert len(first_draws) == 4
        assert len(set(first_draws)) == 4
        assert first_draws == repeat_draws

    def test_metrics_after_run(self):
        pool = WorkerPool(name="Worker", max_workers=2, config={"delay_min_ms": 0, "delay_max_ms": 0})
        pool.run(_shared(range(7)))

        metrics = pool.get_metrics()
        assert metrics["name"] == "Worker"
        assert metrics["max_workers"] == 2
        assert metrics["completed_tasks"] == 7
        assert metrics["failed_tasks"] == 0
        assert metrics["active_workers"] == 0
        assert metrics["runs"] == 1
        assert metrics["uptime_seconds"] >= 0
