"""Orchestration module for running the worker pool pipeline.

This module provides the components for populating a shared work queue,
draining it with a pool of worker threads and collecting their results.
"""
