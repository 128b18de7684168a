"""Error types, exit codes and user-facing error handlers."""

import sys
import traceback

from termcolor import colored

EXIT_OK = 0
EXIT_OPERATIONAL_ERROR = 1
EXIT_INTERRUPTED = 130


class SSLLabsError(Exception):
    """Base class for every failure that ends a run."""

    #: Run step that failed, filled in by the orchestrator.
    stage = ""


class TransportError(SSLLabsError):
    """The HTTP request could not be completed (DNS, refused, timeout)."""


class UnexpectedStatusError(SSLLabsError):
    """The API answered with a non-success HTTP status."""

    def __init__(self, status_code: int, reason: str, details: str = ""):
        self.status_code = status_code
        self.reason = reason
        self.details = details
        message = f"API returned non-OK status: {status_code} {reason}".rstrip()
        if details:
            message += f" ({details})"
        super().__init__(message)


class DecodeError(SSLLabsError):
    """The response body was not JSON or did not have the expected shape."""


class CapacityExceededError(SSLLabsError):
    """The service is already running its maximum number of assessments."""

    def __init__(self, current: int, maximum: int):
        self.current = current
        self.maximum = maximum
        super().__init__(
            "Maximum number of concurrent assessments reached "
            f"({current}/{maximum}). Please try again later."
        )


class PollTimeoutError(SSLLabsError):
    """The assessment did not finish within the allowed polling time."""

    def __init__(self, host: str, waited: float):
        self.host = host
        self.waited = waited
        super().__init__(
            f"Assessment for '{host}' did not complete within {waited:.0f} seconds"
        )


def _paint(text: str, color: str, color_output: bool) -> str:
    return colored(text, color) if color_output else text


def _print_debug_traceback(label: str, error: BaseException) -> None:
    print(f"\n[DEBUG] {label}:", file=sys.stderr)
    print(error, file=sys.stderr)
    traceback.print_exception(type(error), error, error.__traceback__)


def handle_api_error(
    error: SSLLabsError, debug: bool = False, color_output: bool = True
) -> int:
    """
    Report a failed run step on stderr.

    Args:
        error: The error raised by the client or poller
        debug: Print the traceback as well
        color_output: Colour the error prefix

    Returns:
        The process exit code for the failure
    """
    prefix = f"Error {error.stage}:" if error.stage else "Error:"
    if isinstance(error, CapacityExceededError):
        print(_paint(str(error), "yellow", color_output), file=sys.stderr)
    elif isinstance(error, TransportError):
        print(
            f"{_paint(prefix, 'red', color_output)} {error}\n"
            "Please check your network connection and the API URL.",
            file=sys.stderr,
        )
    else:
        print(f"{_paint(prefix, 'red', color_output)} {error}", file=sys.stderr)

    if debug:
        _print_debug_traceback(type(error).__name__, error)
    return EXIT_OPERATIONAL_ERROR


def handle_general_error(
    error: Exception, debug: bool = False, color_output: bool = True
) -> int:
    """Report an unexpected exception and return the exit code."""
    print(f"{_paint('Error:', 'red', color_output)} {error}", file=sys.stderr)
    if debug:
        _print_debug_traceback("Exception", error)
    return EXIT_OPERATIONAL_ERROR


def handle_keyboard_interrupt() -> int:
    print("\nOperation cancelled by user.", file=sys.stderr)
    return EXIT_INTERRUPTED
