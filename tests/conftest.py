"""Test configuration and fixtures."""

from typing import Any, Dict, List
from unittest.mock import MagicMock

import pytest

from ssllabs_scan.models import Assessment, Endpoint


def make_endpoint(ip: str = "93.184.216.34", progress: int = 100, **extra: Any) -> Endpoint:
    fields: Dict[str, Any] = {
        "ip_address": ip,
        "server_name": "example.com",
        "status_message": "Ready",
        "grade": "A",
        "progress_percent": progress,
    }
    fields.update(extra)
    return Endpoint(**fields)


def make_assessment(
    status: str = "IN_PROGRESS", endpoints: List[Endpoint] = None, **extra: Any
) -> Assessment:
    fields: Dict[str, Any] = {
        "target_host": "example.com",
        "port": 443,
        "protocol": "http",
        "status": status,
        "endpoints": list(endpoints or []),
    }
    fields.update(extra)
    return Assessment(**fields)


def make_response(payload: Any = None, status_code: int = 200, reason: str = "OK") -> MagicMock:
    """Mock of requests.Response returning ``payload`` from json()."""
    response = MagicMock()
    response.status_code = status_code
    response.reason = reason
    response.ok = 200 <= status_code < 400
    if isinstance(payload, Exception):
        response.json.side_effect = payload
    else:
        response.json.return_value = payload
    return response


@pytest.fixture
def info_payload() -> Dict[str, Any]:
    """Sample ``info`` response."""
    return {
        "version": "1.36.1",
        "criteriaVersion": "2009q",
        "maxAssessments": 25,
        "currentAssessments": 2,
        "newAssessmentCoolOff": 1000,
        "messages": [
            "This assessment service is provided free of charge by Qualys SSL Labs."
        ],
    }


@pytest.fixture
def ready_payload() -> Dict[str, Any]:
    """Sample ``analyze`` response for a finished assessment."""
    return {
        "host": "example.com",
        "port": 443,
        "protocol": "http",
        "isPublic": False,
        "status": "READY",
        "startTime": 1700000000000,
        "testTime": 1700000090000,
        "engineVersion": "2.2.0",
        "criteriaVersion": "2009q",
        "endpoints": [
            {
                "ipAddress": "93.184.216.34",
                "serverName": "example.com",
                "statusMessage": "Ready",
                "grade": "A",
                "gradeTrustIgnored": "A",
                "hasWarnings": False,
                "progress": 100,
                "duration": 85123,
                "eta": 0,
            }
        ],
    }


@pytest.fixture
def fake_client() -> MagicMock:
    """SSLLabsClient stand-in with info() and analyze() mocked."""
    client = MagicMock()
    return client
