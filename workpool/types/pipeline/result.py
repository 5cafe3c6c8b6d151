"""Pipeline result type definitions."""

from typing import Any, Dict, List, Literal, TypedDict


class PipelineResult(TypedDict, total=False):
    """Report returned by a pipeline run."""

    pipeline: str
    worker_count: int
    input_count: int
    processed_count: int
    output: List[int]
    duration_seconds: float
    status: Literal["completed", "skipped"]
    metrics: Dict[str, Dict[str, Any]]


__all__ = ["PipelineResult"]
