from __future__ import annotations

import json

import pytest

from qr_attendance.core.exceptions import SettingsDecodeError, ValidationError
from qr_attendance.issuer.settings_store import (
    IssuerSettings,
    JsonSettingsStore,
    decode_settings,
    validate_settings_form,
)

GOOD = IssuerSettings(device_id="device001", passkey="testpasskey123", target_url="https://example.com/receive")


def test_save_then_load(tmp_path):
    store = JsonSettingsStore(tmp_path / "instance" / "issuer.json")
    store.save(GOOD)

    assert store.load() == GOOD
    assert json.loads(store.path.read_text(encoding="utf-8")) == {
        "deviceId": "device001",
        "passkey": "testpasskey123",
        "targetUrl": "https://example.com/receive",
    }


def test_missing_file_gives_empty_settings(tmp_path):
    settings = JsonSettingsStore(tmp_path / "issuer.json").load()
    assert settings == IssuerSettings()
    assert settings.is_configured is False


def test_reset_clears_settings(tmp_path):
    store = JsonSettingsStore(tmp_path / "issuer.json")
    store.save(GOOD)
    store.reset()
    store.reset()
    assert store.load() == IssuerSettings()


def test_corrupt_file_falls_back_to_defaults(tmp_path):
    path = tmp_path / "issuer.json"
    path.write_text("{oops", encoding="utf-8")
    assert JsonSettingsStore(path).load() == IssuerSettings()


def test_corrupt_file_raises_when_fallback_disabled(tmp_path):
    path = tmp_path / "issuer.json"
    path.write_text("{oops", encoding="utf-8")
    with pytest.raises(SettingsDecodeError):
        JsonSettingsStore(path, fallback_on_corrupt=False).load()


@pytest.mark.parametrize("raw", ["[]", '"text"', '{"deviceId": 5}', "not json"])
def test_decode_rejects_bad_shapes(raw):
    with pytest.raises(SettingsDecodeError):
        decode_settings(raw)


def test_decode_fills_missing_keys():
    settings = decode_settings('{"deviceId": "device001"}')
    assert settings == IssuerSettings(device_id="device001")
    assert settings.is_configured is False


def test_validate_settings_form_trims_and_accepts():
    settings = validate_settings_form(" device001 ", "testpasskey123", " https://example.com/receive ")
    assert settings == GOOD


@pytest.mark.parametrize(
    "device_id, passkey, target_url",
    [
        ("", "testpasskey123", "https://example.com/receive"),
        ("device001", "short", "https://example.com/receive"),
        ("device001", "testpasskey123", ""),
        ("device001", "testpasskey123", "example.com/receive"),
        ("device001", "testpasskey123", "ftp://example.com/receive"),
    ],
)
def test_validate_settings_form_rejects(device_id, passkey, target_url):
    with pytest.raises(ValidationError):
        validate_settings_form(device_id, passkey, target_url)
