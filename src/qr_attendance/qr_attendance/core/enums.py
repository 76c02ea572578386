from __future__ import annotations

from enum import Enum


class ActionType(str, Enum):
    """Attendance action carried in the QR code (wire values are fixed)."""

    CHECK_IN = "check-in"
    CHECK_OUT = "check-out"


ACTION_LABELS = {
    ActionType.CHECK_IN.value: "Check in",
    ActionType.CHECK_OUT.value: "Check out",
}


def action_label(action: str) -> str:
    """Human label for a wire action; unknown values are shown as-is."""
    return ACTION_LABELS.get(action, action)


class OutcomeKind(str, Enum):
    """Which log partition a verification outcome lands in."""

    VALID = "valid"
    INVALID = "invalid"

    @classmethod
    def of(cls, is_valid: bool) -> "OutcomeKind":
        return cls.VALID if is_valid else cls.INVALID
