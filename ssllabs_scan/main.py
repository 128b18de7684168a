"""Main application logic and entry point."""

import json
import sys
from typing import Any, Callable, Optional, TypeVar

from .cli import create_parser, handle_version_check, validate_args
from .client import SSLLabsClient
from .display import print_progress_event, print_results, print_service_info
from .exceptions import (
    EXIT_OK,
    CapacityExceededError,
    SSLLabsError,
    handle_api_error,
    handle_general_error,
    handle_keyboard_interrupt,
)
from .formatting import DebugFormatter
from .models import Assessment
from .poller import AssessmentPoller

STAGE_INFO = "checking API status"
STAGE_START = "starting assessment"
STAGE_WAIT = "waiting for assessment"

T = TypeVar("T")


def _in_stage(stage: str, func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    """Call ``func`` and tag any API error it raises with the run step."""
    try:
        return func(*args, **kwargs)
    except SSLLabsError as exc:
        exc.stage = exc.stage or stage
        raise


def run_assessment(
    client: SSLLabsClient,
    poller: AssessmentPoller,
    domain: str,
    publish: bool = False,
    stream: Any = None,
) -> Assessment:
    """
    Check capacity, start the assessment and wait for a terminal result.

    Args:
        client: API client used for the capacity check
        poller: Poller used to start and follow the assessment
        domain: Host to assess
        publish: Publish the results on the SSL Labs boards
        stream: Where progress messages go (stdout when None)

    Returns:
        The terminal assessment (status READY or ERROR)

    Raises:
        SSLLabsError: Any step failed; nothing has been rendered
    """
    info = _in_stage(STAGE_INFO, client.info)
    print_service_info(info, stream=stream)

    if info.at_capacity:
        error = CapacityExceededError(
            info.current_assessments, info.max_concurrent_assessments
        )
        error.stage = STAGE_INFO
        raise error

    print(f"Checking SSL/TLS for domain: {domain}", file=stream)
    print("Starting Assessment ....", file=stream)
    assessment = _in_stage(STAGE_START, poller.start, domain, publish=publish)
    print(f"Assessment started for {assessment.target_host or domain}", file=stream)

    if assessment.is_terminal:
        return assessment

    return _in_stage(STAGE_WAIT, poller.wait_until_terminal, domain)


def _print_json(data: Any, pretty: bool) -> None:
    """Print JSON payload."""
    if pretty:
        print(json.dumps(data, indent=2, sort_keys=True))
    else:
        print(json.dumps(data, separators=(",", ":")))


def run(args: Any, client: Optional[SSLLabsClient] = None) -> int:
    """
    Run one assessment for parsed arguments and return the exit code.

    Args:
        args: Parsed command line arguments
        client: Client to use instead of one built from the arguments
    """
    debug = bool(args.debug)
    color_output = not bool(args.no_color)
    # Keep stdout clean for the JSON document.
    stream = sys.stderr if args.json else None
    debug_formatter = DebugFormatter(color_output, stream=stream) if debug else None

    if client is None:
        client = SSLLabsClient(
            base_url=args.api_url,
            timeout=args.timeout,
            debug_formatter=debug_formatter,
        )

    poller = AssessmentPoller(
        client,
        poll_interval=args.poll_interval,
        max_wait=args.max_wait,
        on_progress=lambda event: print_progress_event(event, stream=stream),
        debug_formatter=debug_formatter,
        stream=stream,
    )

    domain = args.domain.strip()
    try:
        assessment = run_assessment(
            client, poller, domain, publish=bool(args.publish), stream=stream
        )
        if args.json:
            _print_json(assessment.to_dict(), pretty=bool(args.json_pretty))
        else:
            print_results(assessment, color_output)
    except KeyboardInterrupt:
        return handle_keyboard_interrupt()
    except SSLLabsError as e:
        return handle_api_error(e, debug, color_output)
    except Exception as e:
        return handle_general_error(e, debug, color_output)
    finally:
        client.close()

    return EXIT_OK


def main() -> None:
    """Main application entry point."""
    parser = create_parser()
    args = parser.parse_args()

    handle_version_check(args)
    validate_args(args, parser)

    exit_code = run(args)
    if exit_code != 0:
        sys.exit(exit_code)


if __name__ == "__main__":
    main()
