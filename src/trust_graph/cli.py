"""Command line entry point.

Usage:
    trust-graph batch_payment.csv stream_payment.csv output1.txt output2.txt output3.txt

Builds the payment graph from the batch file, then writes one trust label
per stream transaction to each of the three feature outputs.

Exit codes:
    0  all transactions classified
    1  setup failed (unreadable or empty input, unopenable output)
    2  invalid command line
"""

import argparse
import logging
import sys
from dataclasses import replace
from typing import List, Optional

from trust_graph import __version__
from trust_graph.agents.proximity.agent import ProximityAgent
from trust_graph.common.config import Config, LogLevel, get_config
from trust_graph.common.exceptions import (
    ConfigurationError,
    ConstructionError,
    OutputError,
    StreamError,
)
from trust_graph.common.logging import get_logger
from trust_graph.data.io import FeatureWriters, open_stream
from trust_graph.models.graph.builder import BuildResult, GraphBuilder
from trust_graph.orchestration.stream import StreamClassifier, StreamStats

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_SETUP_FAILURE = 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="trust-graph",
        description="Classify payments by social distance between payer and payee",
    )
    parser.add_argument("batch", help="Historical payments used to build the graph")
    parser.add_argument("stream", help="Payments to classify")
    parser.add_argument("output1", help="Feature 1 output (friends only)")
    parser.add_argument("output2", help="Feature 2 output (friends of friends)")
    parser.add_argument("output3", help="Feature 3 output (up to 4th degree)")
    parser.add_argument(
        "--workers", "-w",
        type=int,
        default=None,
        help="Parallel classification workers (default: from config, 1)"
    )
    parser.add_argument(
        "--progress-interval", "-p",
        type=int,
        default=None,
        help="Log progress every N transactions (default: from config, 100)"
    )
    parser.add_argument(
        "--log-level", "-l",
        choices=[level.value for level in LogLevel],
        default=None,
        help="Logging level (default: from config, INFO)"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def run(
    batch_path: str,
    stream_path: str,
    output_paths: List[str],
    config: Config,
) -> StreamStats:
    """Build the graph and classify the stream.

    Raises:
        ConstructionError: If the batch file is unreadable or empty
        StreamError: If the stream file is unreadable or empty
        OutputError: If an output file cannot be opened
    """
    build = GraphBuilder().build_from_file(batch_path)
    agent = ProximityAgent(build.graph)
    classifier = StreamClassifier(
        agent,
        workers=config.workers,
        progress_interval=config.progress_interval,
        chunk_size=config.chunk_size,
    )

    with open_stream(stream_path) as records:
        with FeatureWriters(output_paths) as writers:
            stats = classifier.run(records, writers)

    if config.metrics_enabled:
        _publish_metrics(build, stats, config)

    return stats


def _publish_metrics(build: BuildResult, stats: StreamStats, config: Config) -> None:
    from trust_graph.monitoring.metrics import MetricsCollector

    try:
        collector = MetricsCollector(
            namespace=config.metrics_namespace,
            region=config.aws_region,
        )
        collector.record_run(build, stats)
    except IOError as e:
        logger.warning(f"Metrics not published: {e}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    root_logger = get_logger("trust_graph")

    overrides = {}
    if args.workers is not None:
        overrides["workers"] = args.workers
    if args.progress_interval is not None:
        overrides["progress_interval"] = args.progress_interval
    if args.log_level is not None:
        overrides["log_level"] = LogLevel(args.log_level)

    try:
        config = replace(get_config(), **overrides)
    except ConfigurationError as e:
        root_logger.error(e.message)
        return EXIT_SETUP_FAILURE

    root_logger.setLevel(config.effective_log_level)

    try:
        stats = run(
            args.batch,
            args.stream,
            [args.output1, args.output2, args.output3],
            config,
        )
    except (ConstructionError, StreamError, OutputError) as e:
        root_logger.error(e.message)
        return EXIT_SETUP_FAILURE

    root_logger.debug(f"Run summary: {stats.to_dict()}")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
