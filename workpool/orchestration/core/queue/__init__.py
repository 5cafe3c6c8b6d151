"""Shared resources for the orchestration system.

This module provides the lock-protected input queue and result collection
that every worker in a pool shares.
"""

from workpool.orchestration.core.queue.queue_manager import QueueManager
from workpool.orchestration.core.queue.result_collector import ResultCollector

__all__ = ["QueueManager", "ResultCollector"]
