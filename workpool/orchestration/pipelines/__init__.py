"""Pipelines built on the orchestration core components."""
