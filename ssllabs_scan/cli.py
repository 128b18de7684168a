"""Command line interface and argument parsing."""

import argparse
import sys

from . import __version__
from .client import DEFAULT_API_URL, DEFAULT_TIMEOUT
from .poller import DEFAULT_MAX_WAIT, DEFAULT_POLL_INTERVAL

_TRUE_VALUES = ("1", "t", "true", "y", "yes", "on")
_FALSE_VALUES = ("0", "f", "false", "n", "no", "off")


def parse_bool(value: str) -> bool:
    """
    Parse a boolean flag value.

    Args:
        value: Text such as "true", "false", "1" or "0"

    Returns:
        The boolean value
    """
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise argparse.ArgumentTypeError(f"invalid boolean value: '{value}'")


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="ssllabs-scan",
        description="SSL Labs API Checker: run an SSL/TLS assessment of a domain.",
        formatter_class=argparse.RawTextHelpFormatter,
        epilog=(
            "Starts an assessment on the SSL Labs service, waits for it to "
            "complete and\nprints the grade of every endpoint."
        ),
    )

    parser.add_argument(
        "--domain",
        "-d",
        help="Domain to check (e.g., example.com)",
    )

    parser.add_argument(
        "--publish",
        nargs="?",
        type=parse_bool,
        const=True,
        default=False,
        metavar="BOOL",
        help="Publish results on SSL Labs board (default: false)",
    )

    parser.add_argument(
        "--api-url",
        default=DEFAULT_API_URL,
        help=f"SSL Labs API base URL (default: {DEFAULT_API_URL})",
    )

    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help=f"HTTP request timeout in seconds (default: {DEFAULT_TIMEOUT:g})",
    )

    parser.add_argument(
        "--poll-interval",
        type=float,
        default=DEFAULT_POLL_INTERVAL,
        help=f"Seconds between status checks (default: {DEFAULT_POLL_INTERVAL:g})",
    )

    parser.add_argument(
        "--max-wait",
        type=float,
        default=DEFAULT_MAX_WAIT,
        help=(
            "Give up if the assessment is not complete after this many seconds; "
            f"0 waits forever (default: {DEFAULT_MAX_WAIT:g})"
        ),
    )

    parser.add_argument(
        "--version",
        action="store_true",
        help="Show version and exit",
    )

    parser.add_argument("--no-color", action="store_true", help="Disable color output")

    parser.add_argument(
        "--json",
        action="store_true",
        help="Output the final assessment as JSON",
    )

    parser.add_argument(
        "--json-pretty",
        action="store_true",
        help="Pretty-print JSON output (requires --json)",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug output for troubleshooting",
    )

    return parser


def handle_version_check(args: argparse.Namespace) -> bool:
    """
    Handle version argument and exit if requested.

    Args:
        args: Parsed arguments

    Returns:
        True if version was printed and program should exit
    """
    if args.version:
        print(f"ssllabs-scan version {__version__}")
        sys.exit(0)
    return False


def validate_args(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    """
    Validate arguments and show help if needed.

    Args:
        args: Parsed arguments
        parser: Argument parser instance
    """
    if not args.domain or not args.domain.strip():
        parser.print_help()
        sys.exit(0)

    if getattr(args, "json_pretty", False) and not getattr(args, "json", False):
        parser.error("--json-pretty requires --json")

    if getattr(args, "timeout", 0.0) <= 0:
        parser.error("--timeout must be > 0")

    if getattr(args, "poll_interval", 0.0) <= 0:
        parser.error("--poll-interval must be > 0")

    if getattr(args, "max_wait", 0.0) < 0:
        parser.error("--max-wait must be >= 0")
