"""Configuration for the workpool pipeline."""

from workpool.config.pipeline_config import (
    InputSettings,
    MonitoringSettings,
    PipelineConfig,
    WorkerSettings,
    load_pipeline_config,
)

__all__ = [
    "InputSettings",
    "MonitoringSettings",
    "PipelineConfig",
    "WorkerSettings",
    "load_pipeline_config",
]
