"""Type definitions shared across workpool modules."""
