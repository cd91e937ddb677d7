"""Command line entry point for the job match streamer."""

from dotenv import load_dotenv
load_dotenv()

import argparse
import json
import os
import signal
import sys
import time
from pathlib import Path
from typing import Any, List, Optional

import yaml

from jobmatch.classification.client import OpenAIClassifier
from jobmatch.classification.exceptions import ClassifierConfigurationError
from jobmatch.config.exceptions import ConfigurationError
from jobmatch.config.loader import load_config
from jobmatch.events.sink import LoggingEventSink
from jobmatch.logging import get_logger
from jobmatch.logging.config import configure_logging
from jobmatch.matching.engine import ItemMatcher
from jobmatch.pipeline import BatchCoordinator, CancelToken, InvalidInputError
from jobmatch.reporting import MatchReportRenderer, ReportRenderError

logger = get_logger(__name__, component="cli")

EXIT_OK = 0
EXIT_CANCELLED = 1
EXIT_INVALID = 2


def load_postings(path: Path) -> List[Any]:
    """
    Read postings from a JSON file.

    Accepts either a top-level list or an object with a ``jobs`` list, the
    shape the job search endpoint returns.

    Raises:
        InvalidInputError: If the file is unreadable or has the wrong shape
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise InvalidInputError(f"Could not read postings from {path}", errors=[str(e)]) from e

    if isinstance(data, dict) and isinstance(data.get("jobs"), list):
        data = data["jobs"]
    if not isinstance(data, list):
        raise InvalidInputError(f"Postings file {path} must contain a list of postings")
    return data


def load_profile(path: Path) -> Any:
    """
    Read a profile from a JSON or YAML file.

    Raises:
        InvalidInputError: If the file is unreadable or not parseable
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise InvalidInputError(f"Could not read profile from {path}", errors=[str(e)]) from e


def positive_int(value: str) -> int:
    """argparse type for options that must be at least 1."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Job Match Streamer - score job postings against a profile with an LLM"
    )
    parser.add_argument("--postings", type=Path, required=True, help="JSON file of postings")
    parser.add_argument("--profile", type=Path, required=True, help="JSON or YAML profile file")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: config.yaml if present)",
    )
    parser.add_argument(
        "--threshold",
        type=float,
        default=None,
        help="Streaming threshold 0-100 (overrides config and environment)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )
    parser.add_argument(
        "--limit",
        type=positive_int,
        default=None,
        help="Only list the top N postings in the report",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print sorted results as JSON instead of the text report",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        Exit code: 0 on success, 1 if the run was cancelled, 2 on
        configuration or input errors.
    """
    start_time = time.time()
    args = build_parser().parse_args(argv)

    try:
        app_config, env_config = load_config(args.config)
    except ConfigurationError as e:
        print(f"Configuration error:\n{e}", file=sys.stderr)
        return EXIT_INVALID

    log_level = args.log_level or app_config.logging.level
    environment = os.environ.get("ENVIRONMENT", "local")
    configure_logging(level=log_level, format_type=app_config.logging.format, environment=environment)

    threshold = args.threshold if args.threshold is not None else app_config.matching.threshold

    logger.info(
        "Job Match Streamer starting",
        extra={
            "event": "service.starting",
            "postings_path": str(args.postings),
            "profile_path": str(args.profile),
            "model": app_config.classifier.model,
            "threshold": threshold,
        },
    )

    try:
        classifier = OpenAIClassifier(
            api_key=env_config.api_key,
            model=app_config.classifier.model,
            base_url=app_config.classifier.base_url,
            max_tokens=app_config.classifier.max_tokens,
            temperature=app_config.classifier.temperature,
            timeout_seconds=app_config.classifier.timeout_seconds,
        )
    except ClassifierConfigurationError as e:
        logger.error(f"Classifier configuration error: {e}", extra={"event": "service.config_error"})
        return EXIT_INVALID

    coordinator = BatchCoordinator(
        item_matcher=ItemMatcher(
            classifier, description_limit=app_config.matching.description_limit
        ),
        progress_interval=app_config.matching.progress_interval,
    )

    cancel_token = CancelToken()

    def signal_handler(signum, frame):
        logger.info(
            f"Received signal {signum}, finishing current posting",
            extra={"event": "service.signal_received", "signal": signum},
        )
        cancel_token.cancel(reason=f"signal {signum}")

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    try:
        postings = load_postings(args.postings)
        profile = load_profile(args.profile)
        result = coordinator.run(
            postings,
            profile,
            threshold=threshold,
            sink=LoggingEventSink(),
            cancel_token=cancel_token,
        )
    except InvalidInputError as e:
        logger.error(f"Invalid input: {e}", extra={"event": "service.invalid_input"})
        return EXIT_INVALID

    if args.json:
        print(json.dumps([m.to_payload() for m in result.results], indent=2, ensure_ascii=False))
    else:
        try:
            print(MatchReportRenderer().render(result, limit=args.limit), end="")
        except ReportRenderError as e:
            logger.error(str(e), extra={"event": "service.report_failed"})
            print(json.dumps([m.to_payload() for m in result.results], indent=2, ensure_ascii=False))

    logger.info(
        "Job Match Streamer stopped",
        extra={
            "event": "service.stopping",
            "uptime_seconds": round(time.time() - start_time, 2),
            "cancelled": result.cancelled,
        },
    )
    return EXIT_CANCELLED if result.cancelled else EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
