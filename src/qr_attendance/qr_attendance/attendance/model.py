from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(frozen=True)
class AttendanceEntry:
    """What the receiver knows about a request before it is written."""

    username: str
    device_id: str
    action: str
    token_timestamp: str
    request_timestamp: str


@dataclass(frozen=True)
class LogRecord:
    """One line of the append-only attendance log.

    Serialized with the camelCase keys used on disk, in this order.
    """

    timestamp: str
    username: str
    device_id: str
    action: str
    token_timestamp: str
    request_timestamp: str
    is_valid: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "username": self.username,
            "deviceId": self.device_id,
            "action": self.action,
            "tokenTimestamp": self.token_timestamp,
            "requestTimestamp": self.request_timestamp,
            "isValid": self.is_valid,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LogRecord":
        return cls(
            timestamp=data["timestamp"],
            username=data["username"],
            device_id=data["deviceId"],
            action=data["action"],
            token_timestamp=data["tokenTimestamp"],
            request_timestamp=data["requestTimestamp"],
            is_valid=bool(data["isValid"]),
        )
