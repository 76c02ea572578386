from __future__ import annotations

import json
import logging
import threading
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional, Union

from ..common.datetime_utils import now_utc, to_iso, year_month
from ..core.enums import OutcomeKind
from .model import AttendanceEntry, LogRecord

logger = logging.getLogger(__name__)


class FileAttendanceLogStore:
    """One newline-delimited JSON file per `<kind>_<YYYY-MM>.log`.

    Each append opens the partition file, writes a single line and closes it.
    Appends to the same partition are serialized with a per-partition lock;
    no file handle outlives the call.
    """

    def __init__(self, log_dir: Union[str, Path], *, clock: Callable[[], datetime] = now_utc):
        self._log_dir = Path(log_dir)
        self._clock = clock
        self._locks: dict[Path, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    @property
    def log_dir(self) -> Path:
        return self._log_dir

    def partition_path(self, kind: OutcomeKind, ym: str) -> Path:
        return self._log_dir / f"{OutcomeKind(kind).value}_{ym}.log"

    def _lock_for(self, path: Path) -> threading.Lock:
        with self._locks_guard:
            lock = self._locks.get(path)
            if lock is None:
                lock = self._locks[path] = threading.Lock()
            return lock

    def append(
        self,
        kind: OutcomeKind,
        entry: AttendanceEntry,
        *,
        write_time: Optional[datetime] = None,
    ) -> LogRecord:
        kind = OutcomeKind(kind)
        write_time = write_time or self._clock()
        record = LogRecord(
            timestamp=to_iso(write_time),
            username=entry.username,
            device_id=entry.device_id,
            action=entry.action,
            token_timestamp=entry.token_timestamp,
            request_timestamp=entry.request_timestamp,
            is_valid=kind is OutcomeKind.VALID,
        )
        line = json.dumps(record.to_dict(), ensure_ascii=False) + "\n"

        path = self.partition_path(kind, year_month(write_time))
        self._log_dir.mkdir(parents=True, exist_ok=True)
        with self._lock_for(path):
            with path.open("a", encoding="utf-8") as f:
                f.write(line)

        logger.info("attendance log appended: %s - %s - %s", kind.value, entry.username, entry.action)
        return record

    def read_partition(self, kind: OutcomeKind, ym: str) -> list[LogRecord]:
        path = self.partition_path(kind, ym)
        if not path.exists():
            return []
        with path.open("r", encoding="utf-8") as f:
            return [LogRecord.from_dict(json.loads(line)) for line in f if line.strip()]
