"""HTTP access to the SSL Labs assessment API."""

import time
from typing import Any, Dict, Optional

import requests

from . import __version__
from .exceptions import DecodeError, TransportError, UnexpectedStatusError
from .formatting import DebugFormatter
from .models import Assessment, ServiceInfo

DEFAULT_API_URL = "https://api.ssllabs.com/api/v2"
DEFAULT_TIMEOUT = 30.0
USER_AGENT = f"ssllabs-scan/{__version__}"


def _error_details(response: requests.Response) -> str:
    """Extract the API's ``errors`` messages from a failed response, if any."""
    try:
        body = response.json()
    except ValueError:
        return ""
    if not isinstance(body, dict):
        return ""
    errors = body.get("errors")
    if not isinstance(errors, list):
        return ""

    messages: list[str] = []
    for item in errors:
        if not isinstance(item, dict) or not item.get("message"):
            continue
        if item.get("field"):
            messages.append(f"{item['field']}: {item['message']}")
        else:
            messages.append(str(item["message"]))
    return "; ".join(messages)


class SSLLabsClient:
    """
    Thin client over the SSL Labs API.

    Every call is a single GET with a fixed timeout; nothing is retried here.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
        debug_formatter: Optional[DebugFormatter] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()
        self.session.headers.update({"User-Agent": USER_AGENT})
        self.debug_formatter = debug_formatter

    def get(self, path: str, params: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        """
        Issue a GET request and return the decoded JSON object.

        Args:
            path: Path below the base URL (e.g. "info")
            params: Query parameters

        Returns:
            The JSON body as a dictionary

        Raises:
            TransportError: The request could not be completed
            UnexpectedStatusError: The API returned a non-success status
            DecodeError: The body is not a JSON object
        """
        url = f"{self.base_url}/{path.lstrip('/')}"
        if self.debug_formatter:
            self.debug_formatter.print_request(url, params)
        started = time.monotonic()

        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.exceptions.Timeout as exc:
            raise TransportError(
                f"Request to {url} timed out after {self.timeout:g} seconds"
            ) from exc
        except requests.exceptions.ConnectionError as exc:
            raise TransportError(f"Failed to reach SSL Labs API: {exc}") from exc
        except requests.exceptions.RequestException as exc:
            raise TransportError(f"Request to {url} failed: {exc}") from exc

        if self.debug_formatter:
            self.debug_formatter.print_response(response.status_code, started)

        if not response.ok:
            raise UnexpectedStatusError(
                response.status_code, response.reason or "", _error_details(response)
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise DecodeError(f"Failed to parse API response from {url}: {exc}") from exc

        if not isinstance(payload, dict):
            raise DecodeError(
                f"Unexpected API response from {url}: expected a JSON object"
            )

        if self.debug_formatter:
            self.debug_formatter.print_payload("Response body", payload)
        return payload

    def info(self) -> ServiceInfo:
        return ServiceInfo.from_dict(self.get("info"))

    def analyze(
        self, host: str, start_new: bool = False, publish: bool = False
    ) -> Assessment:
        """Start (``start_new``) or check an assessment of ``host``."""
        params = {"host": host, "all": "done"}
        if start_new:
            params["startNew"] = "on"
        if publish:
            params["publish"] = "on"
        return Assessment.from_dict(self.get("analyze", params))

    def close(self) -> None:
        self.session.close()
