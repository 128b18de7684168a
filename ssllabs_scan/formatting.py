"""Colour helpers and debug output."""

import json
import sys
import time
from typing import Any, Dict, Optional

from termcolor import colored


class OutputFormatter:
    """Applies colours to report text unless colour output is disabled."""

    def __init__(self, color_output: bool = True):
        self.color_output = color_output

    def _c(self, text: str, color: str) -> str:
        return colored(text, color) if self.color_output else text

    def field(self, text: str) -> str:
        return self._c(text, "white")

    def value(self, text: str) -> str:
        return self._c(text, "cyan")

    def heading(self, text: str) -> str:
        return self._c(text, "blue")

    def status(self, status: str) -> str:
        if status == "READY":
            return self._c(status, "green")
        if status == "ERROR":
            return self._c(status, "red")
        return self._c(status, "yellow")

    def grade(self, grade: str) -> str:
        if not grade:
            return "N/A"
        if grade.startswith("A"):
            return self._c(grade, "green")
        if grade[0] in ("B", "C"):
            return self._c(grade, "yellow")
        return self._c(grade, "red")

    def warning_flag(self, has_warnings: bool) -> str:
        text = "true" if has_warnings else "false"
        return self._c(text, "yellow") if has_warnings else text


class DebugFormatter:
    """Prints ``[DEBUG]`` sections for --debug."""

    def __init__(self, color_output: bool = True, stream: Any = None):
        self.color_output = color_output
        self.stream = stream

    def _out(self) -> Any:
        return self.stream if self.stream is not None else sys.stdout

    def header(self, text: str) -> str:
        if self.color_output:
            return "[" + colored("DEBUG", "red") + "] " + text
        return "[DEBUG] " + text

    def line(self, text: str) -> None:
        print(self.header(text), file=self._out())

    def print_request(self, url: str, params: Optional[Dict[str, str]]) -> None:
        self.line(f"GET {url}")
        if params:
            for key, value in params.items():
                print(f"  {key}={value}", file=self._out())

    def print_response(self, status_code: int, started: float) -> None:
        elapsed = time.monotonic() - started
        self.line(f"HTTP {status_code} in {elapsed:.3f} seconds")

    def print_payload(self, label: str, payload: Any) -> None:
        self.line(f"{label}:")
        print(json.dumps(payload, indent=2, sort_keys=True, default=str), file=self._out())

    def print_cursor(self, cursor: Any) -> None:
        self.line(
            f"Cursor: endpoint_index={cursor.endpoint_index} "
            f"headers_shown={cursor.headers_shown} "
            f"current_done={cursor.current_done} "
            f"endpoint_count={cursor.endpoint_count}"
        )
