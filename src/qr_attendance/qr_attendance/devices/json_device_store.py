from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Optional, Union

from ..common.validators import require_min_length, require_non_empty
from ..core.constants import MIN_PASSKEY_LENGTH
from ..core.exceptions import DeviceStoreError

logger = logging.getLogger(__name__)


class JsonDeviceKeyStore:
    """`deviceId -> passkey` mapping kept in a JSON object file.

    The file is re-read on every lookup so an edited passkey takes effect on
    the next request.
    """

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)
        self._write_lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> dict[str, str]:
        if not self._path.exists():
            logger.warning("device passkey file not found: %s", self._path)
            return {}

        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise DeviceStoreError(f"Cannot read device passkey file {self._path}") from e

        if not isinstance(data, dict):
            raise DeviceStoreError(f"Device passkey file {self._path} must contain a JSON object")

        return {str(k): v for k, v in data.items() if isinstance(v, str) and v}

    def get_passkey(self, device_id: str) -> Optional[str]:
        return self.load().get(device_id)

    def register(self, device_id: str, passkey: str) -> None:
        """Add or replace a device entry."""
        device_id = require_non_empty(device_id, "Device ID")
        require_min_length(passkey, "Passkey", MIN_PASSKEY_LENGTH)

        with self._write_lock:
            devices = self.load()
            devices[device_id] = passkey
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp = self._path.with_suffix(self._path.suffix + ".tmp")
            tmp.write_text(json.dumps(devices, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
            tmp.replace(self._path)
        logger.info("device registered: %s", device_id)
