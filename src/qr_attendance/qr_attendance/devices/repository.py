from __future__ import annotations

from typing import Optional, Protocol


class DeviceKeyStore(Protocol):
    """Lookup of the shared passkey for an issuing device.

    Note: `None` means "device not registered" and must be handled separately
    from a failed token verification.
    """

    def get_passkey(self, device_id: str) -> Optional[str]:
        raise NotImplementedError
