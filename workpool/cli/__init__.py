"""Command line entry points for workpool."""
