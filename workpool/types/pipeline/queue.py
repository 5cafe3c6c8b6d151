"""Queue type definitions for orchestration pipeline.

This module defines TypedDict types for the shared input queue and the
shared result collection, along with the metrics they report.
"""

from typing import List, TypedDict


class QueueConfig(TypedDict, total=False):
    """Configuration for the shared input queue."""

    name: str
    """Queue identifier name."""

    initial_items: List[int]
    """Items loaded into the queue before workers start."""


class QueueMetrics(TypedDict, total=False):
    """Metrics for the shared input queue."""

    name: str
    """Queue identifier name."""

    current_size: int
    """Current number of items waiting in the queue."""

    enqueued: int
    """Total number of items added to the queue since creation."""

    dequeued: int
    """Total number of items removed from the queue since creation."""

    last_put_time: float
    """Timestamp of last populate operation."""

    last_get_time: float
    """Timestamp of last successful dequeue."""


class ResultMetrics(TypedDict, total=False):
    """Metrics for the shared result collection."""

    name: str
    """Collection identifier name."""

    size: int
    """Number of results currently held."""

    appended: int
    """Total number of append operations since creation."""

    last_append_time: float
    """Timestamp of last append."""


__all__ = ["QueueConfig", "QueueMetrics", "ResultMetrics"]
