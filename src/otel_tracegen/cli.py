#!/usr/bin/env python3
"""
Command-line entry point for generating synthetic trace load.

Usage examples:
- Ten workers, 100 traces each, exported over OTLP/HTTP:
  OTEL_EXPORTER_OTLP_ENDPOINT=http://localhost:4318 \
  tracegen --workers 10 --traces 100

- Four workers for 30 seconds over OTLP/gRPC:
  tracegen --workers 4 --duration 30s --trace-exporter otlp-grpc

- Print a single trace to stdout:
  tracegen --trace-exporter stdout --debug
"""

import argparse
import logging
import sys
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import ValidationError

from .exporters import EXPORTERS, create_tracer_provider
from .models import ScenarioConfig, InvalidConfiguration
from .runner import run
from .utils import parse_duration

logger = logging.getLogger("tracegen")


def _create_parser() -> argparse.ArgumentParser:
    """Create the argument parser"""
    parser = argparse.ArgumentParser(
        prog="tracegen",
        description="Generate a steady flow of synthetic traces for load testing a tracing backend",
    )
    parser.add_argument("--workers", type=int, default=1,
                        help="Number of workers (threads) to run")
    parser.add_argument("--traces", type=int, default=1,
                        help="Number of traces to generate in each worker (ignored if duration is provided)")
    parser.add_argument("--marshal", action="store_true",
                        help="Whether to marshal the parent context through a propagation carrier")
    parser.add_argument("--debug", action="store_true",
                        help="Whether to set DEBUG flag on the spans to force sampling")
    parser.add_argument("--firehose", action="store_true",
                        help="Whether to set FIREHOSE flag on the spans to skip indexing")
    parser.add_argument("--pause", type=parse_duration, default="1us",
                        help="How long to pause between traces (e.g. 1us, 10ms, 1s)")
    parser.add_argument("--duration", type=parse_duration, default="0s",
                        help="For how long to run the test (e.g. 30s, 5m)")
    parser.add_argument("--service", default="tracegen",
                        help="Service name to use")
    parser.add_argument("--trace-exporter", default="otlp-http", choices=EXPORTERS,
                        help="Trace exporter. OTLP exporters are configured via OTEL_EXPORTER_OTLP_* environment variables")
    parser.add_argument("--verbose", action="store_true",
                        help="Enable debug logging")
    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    logging.getLogger("opentelemetry").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    if verbose:
        logger.setLevel(logging.DEBUG)


def main(argv: Optional[List[str]] = None) -> int:
    """Parse flags, run the scenario and flush the exporter."""
    load_dotenv()

    args = _create_parser().parse_args(argv)
    _configure_logging(args.verbose)

    try:
        config = ScenarioConfig(
            workers=args.workers,
            traces=args.traces,
            marshal=args.marshal,
            debug=args.debug,
            firehose=args.firehose,
            pause=args.pause,
            duration=args.duration,
            service=args.service,
            trace_exporter=args.trace_exporter,
        )
    except ValidationError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    provider = create_tracer_provider(config.service, config.trace_exporter)
    tracer = provider.get_tracer("tracegen")
    try:
        run(config, tracer, logger)
    except InvalidConfiguration as e:
        logger.error(f"Invalid configuration: {e}")
        return 1
    finally:
        provider.shutdown()

    return 0


if __name__ == "__main__":
    sys.exit(main())
