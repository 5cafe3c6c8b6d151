"""Thread pool coordination over a shared, lock-protected work queue.

The package drains a FIFO queue of integers with a fixed number of worker
threads, collects the transformed results into a shared collection and
joins every worker before reporting.
"""

__version__ = "0.1.0"
