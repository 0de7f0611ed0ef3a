"""Main entry point module.

Handles CLI arguments, logging setup, and the load, sample and report
pipeline.
"""

import argparse
import logging
import sys
from datetime import datetime
from typing import List, Optional

import config as config_module
import loader
import reporter
import sampler
from measurement import RangeError


logger = logging.getLogger(__name__)


def setup_logging(level: int = logging.INFO) -> None:
    """Configure logging for the application.

    Args:
        level: Logging level (default: INFO)
    """
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Sample physiological measurements into fixed intervals"
    )
    parser.add_argument("--config", help="Path to configuration YAML file")
    parser.add_argument(
        "--input", help="Path to a YAML or JSON measurement file (default: example data)"
    )
    parser.add_argument("--output", help="Path to write the sampled result as JSON")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point.

    Returns:
        Exit code (0 on success, 1 on invalid configuration or input)
    """
    args = parse_args(argv)

    # Setup logging
    log_level = logging.DEBUG if args.debug else logging.INFO
    setup_logging(log_level)

    # Load configuration
    if args.config:
        try:
            cfg = config_module.load_config(args.config)
            logger.info(f"Configuration loaded from {args.config}")
        except config_module.ConfigError as e:
            print(f"ERROR: Invalid configuration: {e}", file=sys.stderr)
            return 1
    else:
        cfg = config_module.default_config()

    input_path = args.input or cfg.input.path
    json_path = args.output or cfg.output.json_path

    # Load measurements
    try:
        if input_path:
            origin, measurements = loader.load_measurements(input_path)
        else:
            origin, measurements = loader.example_measurements()
            logger.info("No input file given, using example data")
    except (loader.LoaderError, RangeError) as e:
        print(f"ERROR: Invalid input: {e}", file=sys.stderr)
        return 1

    print(reporter.format_listing("INPUT", measurements))

    try:
        result = sampler.sample(origin, measurements, cfg.sampling.interval)
    except sampler.PrecedingTimeError as e:
        print(f"ERROR: Invalid input: {e}", file=sys.stderr)
        return 1

    print(reporter.format_listing("OUTPUT", reporter.flatten_result(result)))

    if json_path:
        output = reporter.build_output(
            origin, result, datetime.now(), cfg.sampling.interval
        )
        try:
            reporter.write_output(output, json_path)
        except OSError as e:
            logger.error(f"Failed to write output to {json_path}: {e}")
            return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
