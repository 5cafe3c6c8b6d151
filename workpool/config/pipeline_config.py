"""Pipeline configuration loader.

This module provides the configuration model for the worker pool pipeline
and loads it from YAML, with support for named profiles that are merged
over the base settings before validation.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, model_validator

logger = logging.getLogger(__name__)

CONFIG_DIR = Path(__file__).parent
PIPELINE_CONFIG_PATH = CONFIG_DIR / "pipeline_config.yaml"


class WorkerSettings(BaseModel):
    """Configuration for the worker pool."""

    count: Optional[int] = None
    delay_min_ms: int = Field(default=500, ge=0)
    delay_max_ms: int = Field(default=3000, ge=0)
    seed: Optional[int] = None

    @model_validator(mode="after")
    def validate_delay_range(self) -> "WorkerSettings":
        """Validate that the delay range is not inverted."""
        if self.delay_min_ms > self.delay_max_ms:
            raise ValueError(
                f"delay_min_ms ({self.delay_min_ms}) must not exceed delay_max_ms ({self.delay_max_ms})"
            )
        return self

    def resolved_count(self) -> int:
        """Worker count with the CPU count filled in when unset."""
        if self.count is None:
            return os.cpu_count() or 1
        return self.count


class InputSettings(BaseModel):
    """Configuration for the generated input batch."""

    size: int = Field(default=50, ge=0)

    def values(self) -> List[int]:
        return list(range(self.size))


class MonitoringSettings(BaseModel):
    """Configuration for metrics collection."""

    enabled: bool = True
    log_metrics: bool = True


class PipelineConfig(BaseModel):
    """Configuration for the worker pool pipeline."""

    name: str = "threading_practice"
    workers: WorkerSettings = Field(default_factory=WorkerSettings)
    input: InputSettings = Field(default_factory=InputSettings)
    monitoring: MonitoringSettings = Field(default_factory=MonitoringSettings)

    model_config = ConfigDict(extra="ignore")

    def to_pipeline_dict(self) -> Dict[str, Any]:
        """Plain dictionary in the shape ParallelPipeline expects."""
        config = self.model_dump()
        config["workers"]["count"] = self.workers.resolved_count()
        return config


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge two dictionaries.

    Args:
        base: Base dictionary to merge into
        override: Dictionary with override values

    Returns:
        Merged dictionary (base is modified in-place)
    """
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value

    return base


def load_yaml_config(config_path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load a YAML configuration file.

    Args:
        config_path: Path to the YAML configuration file

    Returns:
        Dictionary with configuration values

    Raises:
        FileNotFoundError: If the configuration file does not exist
        yaml.YAMLError: If the YAML file is invalid
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with open(path, "r") as f:
        config = yaml.safe_load(f)

    return config or {}


def load_pipeline_config(
    config_path: Optional[Union[str, Path]] = None,
    profile: Optional[str] = None,
) -> PipelineConfig:
    """Load and validate the pipeline configuration.

    Args:
        config_path: Path to a YAML file (defaults to the bundled pipeline_config.yaml)
        profile: Name of a profile under ``profiles`` to merge over the base settings

    Returns:
        Validated pipeline configuration

    Raises:
        FileNotFoundError: If the configuration file does not exist
        ValueError: If the requested profile is not defined
        pydantic.ValidationError: If a value is invalid
    """
    path = Path(config_path) if config_path else PIPELINE_CONFIG_PATH
    config = load_yaml_config(path)
    profiles = config.pop("profiles", None) or {}

    if profile:
        if profile not in profiles:
            available = ", ".join(sorted(profiles)) or "none"
            raise ValueError(f"Unknown profile '{profile}'. Available: {available}")
        logger.info(f"Applying {profile} profile")
        _deep_merge(config, profiles[profile])

    return PipelineConfig.model_validate(config)


# Export the functions
__all__ = [
    "InputSettings",
    "MonitoringSettings",
    "PipelineConfig",
    "WorkerSettings",
    "load_pipeline_config",
    "load_yaml_config",
]
