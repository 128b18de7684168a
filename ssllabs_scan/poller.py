"""Assessment start/poll loop and per-endpoint progress tracking."""

import time
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Tuple

from .client import SSLLabsClient
from .exceptions import PollTimeoutError
from .formatting import DebugFormatter
from .models import Assessment, Endpoint

DEFAULT_POLL_INTERVAL = 10.0
DEFAULT_MAX_WAIT = 1800.0

EVENT_HEADER = "header"
EVENT_PROGRESS = "progress"


@dataclass(frozen=True)
class PollerCursor:
    """Which endpoint progress is being reported on, carried between polls."""

    endpoint_index: int = 0
    headers_shown: int = 0
    current_done: bool = False
    endpoint_count: int = 0


@dataclass(frozen=True)
class ProgressEvent:
    kind: str
    endpoint_number: int
    endpoint: Optional[Endpoint] = None
    port: int = 0


def advance(
    cursor: PollerCursor, assessment: Assessment
) -> Tuple[PollerCursor, List[ProgressEvent]]:
    """
    Compare a fresh snapshot against the cursor and work out what to report.

    Endpoints are reported one at a time in discovery order. The current
    endpoint gets a progress line on every poll until it reaches 100%, then
    reporting moves to the next known endpoint. When every known endpoint is
    finished nothing is reported until a new one shows up.

    Args:
        cursor: State left by the previous poll
        assessment: The snapshot just fetched

    Returns:
        Tuple of (new cursor, events to print)
    """
    endpoints = assessment.endpoints
    if not endpoints:
        # Still resolving DNS; nothing to report yet.
        return cursor, []

    count = len(endpoints)
    index = min(cursor.endpoint_index, count - 1)
    headers_shown = cursor.headers_shown
    done = cursor.current_done
    events: List[ProgressEvent] = []

    if done:
        if index + 1 >= count:
            return PollerCursor(index, headers_shown, True, count), events
        index += 1
        done = False

    while True:
        endpoint = endpoints[index]
        if index >= headers_shown:
            events.append(ProgressEvent(EVENT_HEADER, index + 1))
            headers_shown = index + 1
        events.append(
            ProgressEvent(EVENT_PROGRESS, index + 1, endpoint, assessment.port)
        )
        if not endpoint.is_complete:
            break
        if index + 1 >= count:
            done = True
            break
        index += 1

    return PollerCursor(index, headers_shown, done, count), events


class AssessmentPoller:
    """Drives an assessment from start until it reaches READY or ERROR."""

    def __init__(
        self,
        client: SSLLabsClient,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        max_wait: float = DEFAULT_MAX_WAIT,
        on_progress: Optional[Callable[[ProgressEvent], None]] = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
        debug_formatter: Optional[DebugFormatter] = None,
        stream: Any = None,
    ):
        self.client = client
        self.poll_interval = poll_interval
        self.max_wait = max_wait
        self.on_progress = on_progress
        self.sleep = sleep
        self.clock = clock
        self.debug_formatter = debug_formatter
        self.stream = stream

    def start(self, domain: str, publish: bool = False) -> Assessment:
        """
        Start a new assessment.

        The returned snapshot may already be terminal when the service has
        a cached result for the host.
        """
        return self.client.analyze(domain, start_new=True, publish=publish)

    def poll_once(self, domain: str) -> Assessment:
        return self.client.analyze(domain)

    def wait_until_terminal(self, domain: str) -> Assessment:
        """
        Poll until the assessment is READY or ERROR.

        Raises:
            PollTimeoutError: max_wait elapsed before a terminal status
        """
        print("Waiting for assessment to complete...", file=self.stream)
        cursor = PollerCursor()
        started = self.clock()

        while True:
            assessment = self.poll_once(domain)

            if self.debug_formatter and len(assessment.endpoints) > cursor.endpoint_count:
                self.debug_formatter.line(
                    f"Discovered {len(assessment.endpoints) - cursor.endpoint_count} "
                    f"new endpoint(s) for {domain}"
                )
            cursor, events = advance(cursor, assessment)
            if self.debug_formatter:
                self.debug_formatter.line(f"Status: {assessment.status or 'N/A'}")
                self.debug_formatter.print_cursor(cursor)
            if self.on_progress:
                for event in events:
                    self.on_progress(event)

            if assessment.is_terminal:
                print(file=self.stream)
                return assessment

            waited = self.clock() - started
            if self.max_wait and waited + self.poll_interval > self.max_wait:
                raise PollTimeoutError(domain, waited)
            self.sleep(self.poll_interval)
