from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import OutcomeKind
from .model import AttendanceEntry, LogRecord


class AttendanceLogStore(Protocol):
    """Append-only log partitioned by (outcome kind, year-month of write time)."""

    def append(
        self,
        kind: OutcomeKind,
        entry: AttendanceEntry,
        *,
        write_time: Optional[datetime] = None,
    ) -> LogRecord:
        raise NotImplementedError

    def read_partition(self, kind: OutcomeKind, year_month: str) -> Sequence[LogRecord]:
        """Records of one partition in append order (audit/inspection only)."""

        raise NotImplementedError
