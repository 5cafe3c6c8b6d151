"""Core components for orchestration pipelines.

This module provides the fundamental building blocks for constructing
parallel processing pipelines, including the shared queue and result
collection, the worker pool, and monitoring.
"""
