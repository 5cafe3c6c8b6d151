"""
Command line interface for running the worker pool pipeline.

Populates the input queue with 0..size-1, drains it with one worker per CPU
(or ``--workers``), prints the sorted results and waits for Enter.
"""

import argparse
import logging
import sys
import threading
from typing import List, Optional

from pydantic import ValidationError

from workpool.config.pipeline_config import PipelineConfig, load_pipeline_config
from workpool.orchestration.core.parallel_worker import InvalidArgumentError
from workpool.orchestration.pipelines.parallel_pipeline import ParallelPipeline

LOG_FORMAT = "%(threadName)s: %(message)s"

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Process a batch of numbers with a pool of worker threads"
    )

    parser.add_argument(
        "--workers",
        type=int,
        help="Number of worker threads (default: number of CPUs)"
    )

    parser.add_argument(
        "--size",
        type=int,
        help="Number of input values, 0..size-1 (default: 50)"
    )

    parser.add_argument(
        "--min-delay-ms",
        type=int,
        help="Lower bound of the simulated work delay (default: 500)"
    )

    parser.add_argument(
        "--max-delay-ms",
        type=int,
        help="Upper bound of the simulated work delay (default: 3000)"
    )

    parser.add_argument(
        "--seed",
        type=int,
        help="Master seed for reproducible delays"
    )

    parser.add_argument(
        "--profile",
        type=str,
        help="Configuration profile to apply (e.g. instant, fast)"
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to configuration file"
    )

    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error", "critical"],
        default="info",
        help="Set the logging level (default: info)"
    )

    parser.add_argument(
        "--no-wait",
        action="store_true",
        help="Exit without waiting for Enter"
    )

    return parser.parse_args(argv)


def configure_logging(level: str = "info") -> None:
    """Log every message prefixed with the emitting thread's name."""
    logging.basicConfig(level=getattr(logging, level.upper()), format=LOG_FORMAT, force=True)


def build_config(args: argparse.Namespace) -> PipelineConfig:
    """Load the configuration file and apply command line overrides."""
    config = load_pipeline_config(args.config, profile=args.profile)

    worker_overrides = {
        "count": args.workers,
        "delay_min_ms": args.min_delay_ms,
        "delay_max_ms": args.max_delay_ms,
        "seed": args.seed,
    }
    worker_overrides = {key: value for key, value in worker_overrides.items() if value is not None}

    data = config.model_dump()
    data["workers"].update(worker_overrides)
    if args.size is not None:
        data["input"]["size"] = args.size

    return PipelineConfig.model_validate(data)


def main(argv: Optional[List[str]] = None) -> int:
    """Run the worker pool pipeline."""
    args = parse_args(argv)
    threading.current_thread().name = "Main Thread"
    configure_logging(args.log_level)

    try:
        config = build_config(args)
    except (FileNotFoundError, ValueError, ValidationError) as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    if config.workers.count is None:
        logger.info(f"Using {config.workers.resolved_count()} workers (based on your machine CPU count)")

    pipeline = ParallelPipeline(config.to_pipeline_dict())
    try:
        pipeline.process_batch(config.input.values())
    except InvalidArgumentError as e:
        logger.error(f"Worker pool was started with invalid arguments: {e}")
        return 1

    if not args.no_wait:
        logger.info("Press Enter to terminate this program.")
        try:
            input()
        except EOFError:
            pass

    return 0


if __name__ == "__main__":
    sys.exit(main())
