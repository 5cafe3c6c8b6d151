"""Lock-protected result collection for the worker pool.

Workers append results in whatever order they finish; the pipeline sorts
the collection once after every worker has been joined.
"""

import logging
import threading
import time
from typing import List, Optional

from workpool.types.pipeline.queue import ResultMetrics

logger = logging.getLogger(__name__)


class ResultCollector:
    """Collects worker output under its own lock."""

    def __init__(self, name: str = "output"):
        self.name = name
        self._results: List[int] = []
        self._lock = threading.Lock()
        self.appended = 0
        self.last_append_time: Optional[float] = None

    def append(self, value: int) -> None:
        """Store a single result."""
        with self._lock:
            self._results.append(value)
            self.appended += 1
            self.last_append_time = time.time()

    def sort(self) -> List[int]:
        """Sort the collection ascending in place and return a copy.

        Only meaningful once no worker is still appending.
        """
        with self._lock:
            self._results.sort()
            return list(self._results)

    def snapshot(self) -> List[int]:
        """Return a copy of the current results."""
        with self._lock:
            return list(self._results)

    def __len__(self) -> int:
        with self._lock:
            return len(self._results)

    def get_metrics(self) -> ResultMetrics:
        """Get current collection metrics."""
        with self._lock:
            metrics: ResultMetrics = {
                "name": self.name,
                "size": len(self._results),
                "appended": self.appended,
            }
            if self.last_append_time is not None:
                metrics["last_append_time"] = self.last_append_time
            return metrics


__all__ = ["ResultCollector"]
