"""Pipeline type definitions.

This module provides type definitions for the orchestration pipeline system.
"""

from workpool.types.pipeline.queue import *
from workpool.types.pipeline.worker import *
from workpool.types.pipeline.result import *

__all__ = [
    # Queue types
    "QueueConfig",
    "QueueMetrics",
    "ResultMetrics",

    # Worker types
    "WorkerConfig",
    "WorkerPoolMetrics",
    "WorkerRunSummary",
    "WorkerStatus",

    # Pipeline result
    "PipelineResult",
]
