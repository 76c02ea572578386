"""Print one month of the attendance log.

Usage: python scripts/show_log.py 2025-01 [--kind invalid]
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for p in (REPO_ROOT, REPO_ROOT / "src" / "qr_attendance"):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

from qr_attendance.attendance.file_log_store import FileAttendanceLogStore
from qr_attendance.core.enums import OutcomeKind
from qr_attendance.settings import settings_from_env


def main() -> None:
    parser = argparse.ArgumentParser(description="Show attendance log records.")
    parser.add_argument("year_month", help="YYYY-MM")
    parser.add_argument("--kind", choices=[k.value for k in OutcomeKind], default=OutcomeKind.VALID.value)
    args = parser.parse_args()

    store = FileAttendanceLogStore(settings_from_env().log_dir)
    records = store.read_partition(OutcomeKind(args.kind), args.year_month)
    for r in records:
        print(f"{r.timestamp}  {r.username:<20} {r.action:<10} {r.device_id}")
    print(f"({len(records)} records in {store.partition_path(OutcomeKind(args.kind), args.year_month)})")


if __name__ == "__main__":
    main()
