"""Worker pool type definitions for orchestration pipeline.

This module defines TypedDict and other types related to worker state,
worker configuration, and worker pool metrics in the pipeline system.
"""

from typing import Optional, TypedDict
from enum import Enum


class WorkerStatus(str, Enum):
    """State of a worker loop."""

    FETCHING = "fetching"
    """Worker is taking the next item from the input queue."""

    PROCESSING = "processing"
    """Worker is transforming an item and storing the result."""

    TERMINATED = "terminated"
    """Worker observed an empty queue and exited."""

    ERROR = "error"
    """Worker failed before or during its loop."""


class WorkerConfig(TypedDict, total=False):
    """Configuration for worker pools in the pipeline system."""

    count: int
    """Number of workers in the pool."""

    delay_min_ms: int
    """Lower bound of the simulated work delay in milliseconds."""

    delay_max_ms: int
    """Upper bound of the simulated work delay in milliseconds."""

    seed: Optional[int]
    """Master seed the per-worker random sources are split from."""


class WorkerRunSummary(TypedDict, total=False):
    """Outcome of a single worker loop."""

    name: str
    """Human-readable worker name."""

    processed: int
    """Number of items the worker processed."""

    status: WorkerStatus
    """Final state of the worker (TERMINATED or ERROR)."""

    error: Optional[str]
    """Error message (if status is ERROR)."""


class WorkerPoolMetrics(TypedDict, total=False):
    """Metrics for a worker pool in the pipeline system."""

    name: str
    """Worker pool identifier name."""

    max_workers: int
    """Number of workers in the pool."""

    active_workers: int
    """Number of workers currently running their loop."""

    completed_tasks: int
    """Total number of items processed by all workers."""

    failed_tasks: int
    """Number of workers that ended with an error."""

    runs: int
    """Number of completed pool runs."""

    uptime_seconds: float
    """Time since the worker pool was created."""


__all__ = ["WorkerStatus", "WorkerConfig", "WorkerRunSummary", "WorkerPoolMetrics"]
