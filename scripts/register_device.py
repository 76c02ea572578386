"""Add or replace a device passkey in the devices file.

Usage: python scripts/register_device.py device001 'a-long-passkey'
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for p in (REPO_ROOT, REPO_ROOT / "src" / "qr_attendance"):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

from qr_attendance.core.exceptions import ValidationError
from qr_attendance.devices.json_device_store import JsonDeviceKeyStore
from qr_attendance.settings import settings_from_env


def main() -> None:
    parser = argparse.ArgumentParser(description="Register a QR issuing device.")
    parser.add_argument("device_id")
    parser.add_argument("passkey")
    args = parser.parse_args()

    settings = settings_from_env()
    store = JsonDeviceKeyStore(settings.devices_file)
    try:
        store.register(args.device_id, args.passkey)
    except ValidationError as e:
        raise SystemExit(str(e))
    print(f"OK: {args.device_id} -> {store.path}")


if __name__ == "__main__":
    main()
