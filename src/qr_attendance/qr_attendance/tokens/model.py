from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TokenBundle:
    """Unit passed from the issuer to the receiver inside the QR URL.

    `token` is never stored: the receiver recomputes it from the other three
    fields plus the device passkey and compares.
    """

    token: str
    device_id: str
    action_type: str
    timestamp: int

    def as_params(self) -> dict[str, str]:
        """Wire parameter mapping (`action_type` travels as `action`)."""
        return {
            "token": self.token,
            "deviceId": self.device_id,
            "action": self.action_type,
            "timestamp": str(self.timestamp),
        }
