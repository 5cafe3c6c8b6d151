"""Parallel pipeline that drains a shared queue with a worker pool.

The pipeline is the initiator of a run: it loads the input queue, hands the
same queue and result collection to every worker, joins the pool, sorts the
results and reports them.
"""

import logging
import time
from typing import Any, Callable, Dict, Iterable, List, Optional

from workpool.orchestration.core.monitoring import PipelineMonitor
from workpool.orchestration.core.parallel_worker import SharedState, WorkerPool, double
from workpool.orchestration.core.queue.queue_manager import QueueManager
from workpool.orchestration.core.queue.result_collector import ResultCollector
from workpool.types.pipeline.result import PipelineResult

logger = logging.getLogger(__name__)


def _format_values(values: Iterable[int]) -> str:
    return ", ".join(str(value) for value in values)


class ParallelPipeline:
    """Runs a batch of integers through a fixed-size worker pool."""

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        transform: Callable[[int], int] = double,
        sleep: Optional[Callable[[float], None]] = None,
    ):
        """Initialize parallel pipeline with configuration.

        Args:
            config: Pipeline options with ``name``, ``workers`` and ``monitoring`` sections
            transform: Function the workers apply to every item
            sleep: Replacement for ``time.sleep`` in the simulated delay
        """
        self.config = config or {}
        self.name = self.config.get("name", "parallel_pipeline")
        self.transform = transform
        self.sleep = sleep

        self.monitor = PipelineMonitor(self.config.get("monitoring", {}))

        worker_config = dict(self.config.get("workers", {}))
        self.worker_pool = WorkerPool(
            name="Worker",
            max_workers=worker_config.get("count"),
            config=worker_config,
            transform=transform,
            sleep=sleep,
        )
        self.monitor.register_component("worker", self.worker_pool.name, self.worker_pool)

    def process_batch(self, inputs: List[int]) -> PipelineResult:
        """Process a batch of inputs through the worker pool.

        Args:
            inputs: Items to process, loaded into the queue in this order

        Returns:
            Report with the sorted output and run metrics
        """
        start_time = time.time()

        input_queue = QueueManager(name="input")
        results = ResultCollector(name="output")
        self.monitor.register_component("queue", input_queue.name, input_queue)
        self.monitor.register_component("results", results.name, results)

        input_queue.populate(inputs)
        logger.info(f"Input data to be processed: {_format_values(input_queue.snapshot())}.")

        worker_count = self.worker_pool.max_workers
        if worker_count <= 0:
            logger.warning(f"Pipeline {self.name} has no workers; {len(inputs)} items left unprocessed")
            return {
                "pipeline": self.name,
                "worker_count": worker_count,
                "input_count": len(inputs),
                "processed_count": 0,
                "output": [],
                "duration_seconds": time.time() - start_time,
                "status": "skipped",
                "metrics": self.monitor.log_summary(),
            }

        self.worker_pool.run(SharedState(input_queue=input_queue, results=results))
        logger.info("All workers finished working.")

        # Completion order depends on scheduling, so sort before reporting
        output = results.sort()
        logger.info(f"Processed input data: {_format_values(output)}.")

        return {
            "pipeline": self.name,
            "worker_count": worker_count,
            "input_count": len(inputs),
            "processed_count": len(output),
            "output": output,
            "duration_seconds": time.time() - start_time,
            "status": "completed",
            "metrics": self.monitor.log_summary(),
        }


def run_pipeline(
    inputs: List[int],
    worker_count: Optional[int] = None,
    transform: Callable[[int], int] = double,
    delay_min_ms: int = 0,
    delay_max_ms: int = 0,
    seed: Optional[int] = None,
) -> PipelineResult:
    """Run a one-off pipeline over ``inputs``.

    Args:
        inputs: Items to process
        worker_count: Number of workers (default: CPU count)
        transform: Function applied to every item
        delay_min_ms: Lower bound of the simulated delay
        delay_max_ms: Upper bound of the simulated delay
        seed: Master seed for the per-worker random sources

    Returns:
        Pipeline report
    """
    config = {
        "workers": {
            "count": worker_count,
            "delay_min_ms": delay_min_ms,
            "delay_max_ms": delay_max_ms,
            "seed": seed,
        },
    }
    return ParallelPipeline(config, transform=transform).process_batch(inputs)


# Export the class
__all__ = ["ParallelPipeline", "run_pipeline"]
