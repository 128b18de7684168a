"""Human-readable output for service info, progress and results."""

from datetime import datetime
from typing import Any

from .formatting import OutputFormatter
from .models import (
    PROGRESS_NOT_STARTED,
    STATUS_ERROR,
    STATUS_READY,
    Assessment,
    ServiceInfo,
)
from .poller import EVENT_HEADER, ProgressEvent

TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_test_time(millis: int) -> str:
    """
    Convert an epoch timestamp in milliseconds to local time.

    Sub-second parts are truncated toward zero. Timestamps the platform
    cannot represent are shown as the raw millisecond value.
    """
    seconds = abs(millis) // 1000
    if millis < 0:
        seconds = -seconds
    try:
        return datetime.fromtimestamp(seconds).strftime(TIME_FORMAT)
    except (OverflowError, OSError, ValueError):
        return f"{millis} ms since epoch"


def print_service_info(info: ServiceInfo, stream: Any = None) -> None:
    print("SSL Labs API is reachable.", file=stream)
    print(f"Criteria Version: {info.criteria_version}", file=stream)
    print(
        f"Concurrent assessments allowed: {info.max_concurrent_assessments}",
        file=stream,
    )
    print(f"Current assessments: {info.current_assessments}", file=stream)
    for message in info.messages:
        print(f"  * {message}", file=stream)


def format_progress_event(event: ProgressEvent) -> str:
    if event.kind == EVENT_HEADER:
        return f"\n----- PROGRESS ON ENDPOINT {event.endpoint_number} -----"

    endpoint = event.endpoint
    if endpoint is None:
        raise ValueError("Progress event is missing its endpoint")
    if endpoint.progress_percent == PROGRESS_NOT_STARTED:
        progress = "pending"
    else:
        progress = f"{endpoint.progress_percent}%"
    return f"      {endpoint.ip_address}:{event.port} - {progress}"


def print_progress_event(event: ProgressEvent, stream: Any = None) -> None:
    print(format_progress_event(event), file=stream)


def format_results(assessment: Assessment, color_output: bool = True) -> str:
    """
    Build the final report for a terminal assessment.

    Args:
        assessment: Assessment with status READY or ERROR
        color_output: Whether to colour grades and statuses

    Returns:
        The report text

    Raises:
        ValueError: The assessment is not in a terminal status
    """
    if not assessment.is_terminal:
        raise ValueError(
            f"Cannot render assessment with non-terminal status "
            f"'{assessment.status or 'N/A'}'"
        )

    fmt = OutputFormatter(color_output)
    lines = [
        fmt.heading("Assessment Results:"),
        f"{fmt.field('Domain:')} {fmt.value(assessment.target_host)}",
        f"{fmt.field('Status:')} {fmt.status(assessment.status)}",
    ]

    if assessment.status == STATUS_READY:
        lines.append(
            f"{fmt.field('Test completed:')} "
            f"{format_test_time(assessment.test_time_millis)}"
        )
        for number, endpoint in enumerate(assessment.endpoints, start=1):
            lines.append(f"{fmt.field(f'Endpoint {number}:')}")
            lines.append(f"  {fmt.field('IP Address:')} {endpoint.ip_address}")
            lines.append(f"  {fmt.field('Grade:')} {fmt.grade(endpoint.grade)}")
            lines.append(f"  {fmt.field('Status Message:')} {endpoint.status_message}")
            lines.append(
                f"  {fmt.field('Has Warnings:')} "
                f"{fmt.warning_flag(endpoint.has_warnings)}"
            )
            lines.append("")
    elif assessment.status == STATUS_ERROR:
        lines.append(f"Assessment failed: {assessment.status_message}")

    return "\n".join(lines)


def print_results(assessment: Assessment, color_output: bool = True) -> None:
    print(format_results(assessment, color_output))
