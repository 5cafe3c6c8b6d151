"""Performance monitoring for the worker pool pipeline.

This module provides metrics collection for the shared queue, the result
collection and the worker pool so a run can be inspected and reported.
"""

import logging
import threading
import time
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class PipelineMonitor:
    """Monitors performance of pipeline components."""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """Initialize pipeline monitor with configuration.

        Args:
            config: Configuration options for monitoring
        """
        self.config = config or {}
        self.start_time = time.time()
        self.components: Dict[str, Dict[str, Any]] = {}
        self.enabled = self.config.get("enabled", True)
        self.log_metrics = self.config.get("log_metrics", True)

        # Lock for thread-safe updates
        self._lock = threading.Lock()

    def register_component(self, component_type: str, component_name: str,
                           component: Any) -> None:
        """Register a component to be monitored.

        Args:
            component_type: Type of component (queue, results, worker)
            component_name: Name of the component
            component: Component instance with get_metrics() method
        """
        with self._lock:
            component_id = f"{component_type}.{component_name}"
            self.components[component_id] = {
                "type": component_type,
                "name": component_name,
                "instance": component,
                "last_metrics": None,
                "registration_time": time.time()
            }
        logger.debug(f"Registered {component_type} '{component_name}' for monitoring")

    def get_all_metrics(self) -> Dict[str, Dict[str, Any]]:
        """Get metrics for all registered components."""
        metrics: Dict[str, Dict[str, Any]] = {}
        if not self.enabled:
            return metrics

        with self._lock:
            for component_id, component_info in self.components.items():
                instance = component_info["instance"]
                if hasattr(instance, "get_metrics") and callable(instance.get_metrics):
                    try:
                        metrics[component_id] = dict(instance.get_metrics())
                        component_info["last_metrics"] = metrics[component_id]
                    except Exception as e:
                        logger.error(f"Error getting metrics for {component_id}: {e}")
                        metrics[component_id] = {"error": str(e)}
            component_count = len(self.components)

        # Add overall metrics
        metrics["_overall"] = {
            "uptime_seconds": time.time() - self.start_time,
            "component_count": component_count,
            "timestamp": time.time()
        }

        return metrics

    def log_summary(self) -> Dict[str, Dict[str, Any]]:
        """Collect metrics and log them at debug level when enabled."""
        metrics = self.get_all_metrics()
        if self.log_metrics:
            for component_id, values in metrics.items():
                logger.debug(f"{component_id}: {values}")
        return metrics


# Export the class
__all__ = ["PipelineMonitor"]
