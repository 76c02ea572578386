from __future__ import annotations

from dataclasses import dataclass

from .attendance.file_log_store import FileAttendanceLogStore
from .attendance.service import ReceiverService
from .devices.json_device_store import JsonDeviceKeyStore
from .issuer.renderer import QrRenderer
from .issuer.service import IssuerService
from .issuer.settings_store import JsonSettingsStore
from .settings import AppSettings
from .tokens.codec import TokenCodec
from .tokens.expiry import ExpiryPolicy


@dataclass(frozen=True)
class Container:
    settings: AppSettings

    codec: TokenCodec
    expiry: ExpiryPolicy
    devices: JsonDeviceKeyStore
    logs: FileAttendanceLogStore
    issuer_settings: JsonSettingsStore
    renderer: QrRenderer

    receiver_service: ReceiverService
    issuer_service: IssuerService


def build_container(*, settings: AppSettings) -> Container:
    codec = TokenCodec()
    expiry = ExpiryPolicy(settings.token_expiry_minutes)
    devices = JsonDeviceKeyStore(settings.devices_file)
    logs = FileAttendanceLogStore(settings.log_dir)
    issuer_settings = JsonSettingsStore(settings.issuer_settings_file)
    renderer = QrRenderer()

    receiver_service = ReceiverService(codec, expiry, devices, logs)
    issuer_service = IssuerService(issuer_settings, codec, expiry, renderer)

    return Container(
        settings=settings,
        codec=codec,
        expiry=expiry,
        devices=devices,
        logs=logs,
        issuer_settings=issuer_settings,
        renderer=renderer,
        receiver_service=receiver_service,
        issuer_service=issuer_service,
    )
