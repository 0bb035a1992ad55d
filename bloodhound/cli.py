"""Command line entry point: read targets and rules, evaluate, write the ranking."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Iterable, Sequence
from pathlib import Path

from bloodhound.client import ClientConfig
from bloodhound.evaluator import evaluate
from bloodhound.pipeline import Context, RateLimitedError
from bloodhound.rules import RulesetError, load_ruleset

logger = logging.getLogger(__name__)

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

_LOG_LEVELS = {
    "trace": TRACE,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "fatal": logging.CRITICAL,
    "panic": logging.CRITICAL,
}


class _CliHandler(logging.StreamHandler):
    """Stream handler installed by the command; replaced on every run."""


def read_input_file(path) -> list[str]:
    """Return the non-blank, stripped lines of the input file."""
    try:
        handle = open(path, encoding="utf-8", errors="replace")
    except OSError as exc:
        raise OSError("unable to open input file") from exc
    with handle:
        try:
            return [line.strip() for line in handle if line.strip()]
        except OSError as exc:
            raise OSError("unable to read input file") from exc


def write_output_file(path, results: Iterable[Context]) -> None:
    """Write the URL of every result to ``path``, one per line."""
    try:
        handle = open(path, "w", encoding="utf-8", newline="\n")
    except OSError as exc:
        raise OSError("unable to create output file") from exc
    with handle:
        for result in results:
            handle.write(result.url)
            handle.write("\n")


def parse_log_level(level: str) -> int:
    """Map a level name to a logging level; raise ValueError if unknown."""
    try:
        return _LOG_LEVELS[level.lower()]
    except KeyError:
        raise ValueError(f"unknown log level: {level}") from None


def parse_custom_headers(headers: Iterable[str]) -> dict[str, str]:
    """Parse ``Key: Value`` strings into a header mapping."""
    result: dict[str, str] = {}
    for header in headers:
        key, sep, value = header.partition(":")
        key = key.strip()
        if not sep or not key:
            raise ValueError(f'invalid header format: "{header}", expected Key:Value')
        result[key] = value.strip()
    return result


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bloodhound", description="URL resource evaluator and sorter"
    )
    parser.add_argument(
        "-i", "--input", required=True,
        help="Input file with a list of URLs to process (required)",
    )
    parser.add_argument(
        "-r", "--rules", required=True,
        help="Ruleset file with rules and scores (required)",
    )
    parser.add_argument(
        "-o", "--output", default="output.txt",
        help="Output file to write sorted list",
    )
    parser.add_argument(
        "-l", "--log-level", default="info",
        help="Set log level: trace, debug, info, warn, error, fatal, panic",
    )
    parser.add_argument(
        "-R", "--rate", type=int, default=100,
        help="Number of HTTP requests allowed during a single second",
    )
    parser.add_argument(
        "-H", "--headers", action="append", default=[],
        help='Custom header used when sending HTTP requests (-H "User-Agent: Mozilla/5.0")',
    )
    parser.add_argument(
        "-P", "--proxy", default="",
        help="Proxy server in URL format (http://localhost:8080)",
    )
    return parser


def _configure_logging(level: int) -> None:
    package_logger = logging.getLogger("bloodhound")
    for handler in list(package_logger.handlers):
        if isinstance(handler, _CliHandler):
            package_logger.removeHandler(handler)
    handler = _CliHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)-8s %(message)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(level)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command; return the process exit status."""
    args = _build_parser().parse_args(argv)

    try:
        level = parse_log_level(args.log_level)
        level_valid = True
    except ValueError:
        level = logging.INFO
        level_valid = False
    _configure_logging(level)
    if not level_valid:
        logger.warning("Invalid log level %r, defaulting to INFO", args.log_level)

    try:
        targets = read_input_file(args.input)
    except OSError as exc:
        logger.critical("Failed to process input file. Reason: %s", exc)
        return 1
    logger.log(TRACE, "Finished reading input file (size=%d)", len(targets))

    try:
        ruleset = load_ruleset(args.rules)
    except RulesetError as exc:
        logger.critical("Failed to process ruleset file. Reason: %s", exc)
        return 1
    logger.log(TRACE, "Finished reading ruleset file (size=%d)", len(ruleset.rules))

    try:
        headers = parse_custom_headers(args.headers)
    except ValueError as exc:
        logger.critical("Failed to parse custom headers. Reason: %s", exc)
        return 1

    if args.rate <= 0:
        logger.critical("Invalid request rate %d, it must be positive", args.rate)
        return 1

    config = ClientConfig(rate=args.rate, headers=headers, proxy=args.proxy)
    logger.log(TRACE, "Finished creating HTTP client configurations: %s", config)

    try:
        results = evaluate(targets, ruleset, config)
    except RateLimitedError as exc:
        logger.critical("%s", exc)
        return 1

    try:
        write_output_file(args.output, results)
    except OSError as exc:
        logger.critical("Failed to write to output file. Reason: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())