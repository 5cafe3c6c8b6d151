"""Lock-protected FIFO input queue for the worker pool.

This module provides the queue that the pipeline populates once and the
workers drain to empty. Every read or mutation of the underlying deque
happens under the queue's own lock, and the emptiness check and removal of
an item share a single critical section.
"""

import logging
import queue
import threading
import time
from collections import deque
from typing import Deque, Iterable, List, Optional

from workpool.types.pipeline.queue import QueueConfig, QueueMetrics

logger = logging.getLogger(__name__)


class QueueManager:
    """Manages the shared input queue of pending items."""

    def __init__(self, name: str = "input", config: Optional[QueueConfig] = None):
        """Initialize queue with configuration.

        Args:
            name: Queue identifier name
            config: Configuration options; ``initial_items`` is loaded immediately
        """
        self.name = name
        self.config = config or {}

        self._items: Deque[int] = deque()
        self._lock = threading.Lock()

        self.enqueued = 0
        self.dequeued = 0
        self.last_put_time: Optional[float] = None
        self.last_get_time: Optional[float] = None

        initial_items = self.config.get("initial_items")
        if initial_items:
            self.populate(initial_items)

    def populate(self, items: Iterable[int]) -> int:
        """Append items to the tail of the queue, preserving their order.

        Args:
            items: Values to enqueue

        Returns:
            Number of items added
        """
        values = list(items)
        with self._lock:
            self._items.extend(values)
            self.enqueued += len(values)
            self.last_put_time = time.time()
        logger.debug(f"Queue '{self.name}' populated with {len(values)} items")
        return len(values)

    def dequeue(self) -> int:
        """Remove and return the item at the head of the queue.

        Raises:
            queue.Empty: If no items remain
        """
        with self._lock:
            if not self._items:
                raise queue.Empty
            item = self._items.popleft()
            self.dequeued += 1
            self.last_get_time = time.time()
        return item

    def snapshot(self) -> List[int]:
        """Return a copy of the pending items in queue order."""
        with self._lock:
            return list(self._items)

    def empty(self) -> bool:
        with self._lock:
            return not self._items

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def get_metrics(self) -> QueueMetrics:
        """Get current queue metrics."""
        with self._lock:
            metrics: QueueMetrics = {
                "name": self.name,
                "current_size": len(self._items),
                "enqueued": self.enqueued,
                "dequeued": self.dequeued,
            }
            if self.last_put_time is not None:
                metrics["last_put_time"] = self.last_put_time
            if self.last_get_time is not None:
                metrics["last_get_time"] = self.last_get_time
            return metrics


# Export the class
__all__ = ["QueueManager"]
