"""Records returned by the SSL Labs API and their JSON mapping."""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from .exceptions import DecodeError

STATUS_READY = "READY"
STATUS_ERROR = "ERROR"

TERMINAL_STATUSES = (STATUS_READY, STATUS_ERROR)

PROGRESS_NOT_STARTED = -1


def _require_mapping(data: Any, record: str) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise DecodeError(
            f"Expected a JSON object for {record}, got {type(data).__name__}"
        )
    return data


def _get_str(data: Dict[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise DecodeError(f"Field '{key}' must be a string, got {value!r}")
    return value


def _get_int(data: Dict[str, Any], key: str) -> int:
    value = data.get(key)
    if value is None:
        return 0
    # bool is an int subclass; the API never sends one for a numeric field.
    if isinstance(value, bool) or not isinstance(value, int):
        raise DecodeError(f"Field '{key}' must be an integer, got {value!r}")
    return value


def _get_bool(data: Dict[str, Any], key: str) -> bool:
    value = data.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise DecodeError(f"Field '{key}' must be a boolean, got {value!r}")
    return value


def _get_list(data: Dict[str, Any], key: str) -> List[Any]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise DecodeError(f"Field '{key}' must be a list, got {value!r}")
    return value


@dataclass(frozen=True)
class ServiceInfo:
    """Capacity and version snapshot from the ``info`` call."""

    protocol_version: str = ""
    criteria_version: str = ""
    max_concurrent_assessments: int = 0
    current_assessments: int = 0
    new_assessment_cool_off_millis: int = 0
    messages: List[str] = field(default_factory=list)

    @property
    def at_capacity(self) -> bool:
        return self.current_assessments >= self.max_concurrent_assessments

    @classmethod
    def from_dict(cls, data: Any) -> "ServiceInfo":
        data = _require_mapping(data, "service info")
        messages = _get_list(data, "messages")
        for message in messages:
            if not isinstance(message, str):
                raise DecodeError(f"Service messages must be strings, got {message!r}")
        return cls(
            protocol_version=_get_str(data, "version"),
            criteria_version=_get_str(data, "criteriaVersion"),
            max_concurrent_assessments=_get_int(data, "maxAssessments"),
            current_assessments=_get_int(data, "currentAssessments"),
            new_assessment_cool_off_millis=_get_int(data, "newAssessmentCoolOff"),
            messages=list(messages),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.protocol_version,
            "criteriaVersion": self.criteria_version,
            "maxAssessments": self.max_concurrent_assessments,
            "currentAssessments": self.current_assessments,
            "newAssessmentCoolOff": self.new_assessment_cool_off_millis,
            "messages": list(self.messages),
        }


@dataclass(frozen=True)
class Endpoint:
    """One server (IP address) behind the assessed host."""

    ip_address: str = ""
    server_name: str = ""
    status_message: str = ""
    status_details: str = ""
    grade: str = ""
    grade_ignoring_trust_issues: str = ""
    has_warnings: bool = False
    progress_percent: int = 0
    duration_millis: int = 0
    eta_seconds: int = 0

    @property
    def is_complete(self) -> bool:
        return self.progress_percent >= 100

    @classmethod
    def from_dict(cls, data: Any) -> "Endpoint":
        data = _require_mapping(data, "endpoint")
        return cls(
            ip_address=_get_str(data, "ipAddress"),
            server_name=_get_str(data, "serverName"),
            status_message=_get_str(data, "statusMessage"),
            status_details=_get_str(data, "statusDetails"),
            grade=_get_str(data, "grade"),
            grade_ignoring_trust_issues=_get_str(data, "gradeTrustIgnored"),
            has_warnings=_get_bool(data, "hasWarnings"),
            progress_percent=_get_int(data, "progress"),
            duration_millis=_get_int(data, "duration"),
            eta_seconds=_get_int(data, "eta"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ipAddress": self.ip_address,
            "serverName": self.server_name,
            "statusMessage": self.status_message,
            "statusDetails": self.status_details,
            "grade": self.grade,
            "gradeTrustIgnored": self.grade_ignoring_trust_issues,
            "hasWarnings": self.has_warnings,
            "progress": self.progress_percent,
            "duration": self.duration_millis,
            "eta": self.eta_seconds,
        }


@dataclass(frozen=True)
class Assessment:
    """
    One assessment run for a host.

    Every poll returns a complete new snapshot, so instances are never
    updated in place.
    """

    target_host: str = ""
    port: int = 0
    protocol: str = ""
    is_public: bool = False
    status: str = ""
    status_message: str = ""
    start_time_millis: int = 0
    test_time_millis: int = 0
    engine_version: str = ""
    criteria_version: str = ""
    endpoints: List[Endpoint] = field(default_factory=list)

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    @classmethod
    def from_dict(cls, data: Any) -> "Assessment":
        data = _require_mapping(data, "assessment")
        return cls(
            target_host=_get_str(data, "host"),
            port=_get_int(data, "port"),
            protocol=_get_str(data, "protocol"),
            is_public=_get_bool(data, "isPublic"),
            status=_get_str(data, "status"),
            status_message=_get_str(data, "statusMessage"),
            start_time_millis=_get_int(data, "startTime"),
            test_time_millis=_get_int(data, "testTime"),
            engine_version=_get_str(data, "engineVersion"),
            criteria_version=_get_str(data, "criteriaVersion"),
            endpoints=[Endpoint.from_dict(item) for item in _get_list(data, "endpoints")],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "host": self.target_host,
            "port": self.port,
            "protocol": self.protocol,
            "isPublic": self.is_public,
            "status": self.status,
            "statusMessage": self.status_message,
            "startTime": self.start_time_millis,
            "testTime": self.test_time_millis,
            "engineVersion": self.engine_version,
            "criteriaVersion": self.criteria_version,
            "endpoints": [endpoint.to_dict() for endpoint in self.endpoints],
        }
