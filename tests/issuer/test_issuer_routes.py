from __future__ import annotations

import json

import pytest

from qr_attendance.issuer.settings_store import IssuerSettings, JsonSettingsStore
from qr_attendance.main import create_app
from qr_attendance.settings import AppSettings


def _settings(tmp_path, **overrides):
    values = dict(
        secret_key="test-secret",
        devices_file=tmp_path / "devices.json",
        log_dir=tmp_path / "logs",
        issuer_settings_file=tmp_path / "issuer.json",
        testing=True,
        log_level="WARNING",
    )
    values.update(overrides)
    return AppSettings(**values)


@pytest.fixture
def settings(tmp_path):
    return _settings(tmp_path)


@pytest.fixture
def client(settings):
    return create_app(settings).test_client()


def _configure(settings):
    JsonSettingsStore(settings.issuer_settings_file).save(
        IssuerSettings("device001", "testpasskey123", "http://localhost/receive")
    )


def test_home_warns_when_not_configured(client):
    resp = client.get("/issuer")
    html = resp.get_data(as_text=True)
    assert resp.status_code == 200
    assert "Settings are incomplete" in html
    assert "/issuer/show" not in html


def test_show_blocked_when_not_configured(client):
    resp = client.get("/issuer/show?action=check-in")
    assert resp.status_code == 400
    assert "data:image/png" not in resp.get_data(as_text=True)


def test_show_unknown_action(client, settings):
    _configure(settings)
    assert client.get("/issuer/show?action=nap").status_code == 400


def test_show_renders_qr_and_countdown(client, settings):
    _configure(settings)
    resp = client.get("/issuer/show?action=check-out")
    html = resp.get_data(as_text=True)

    assert resp.status_code == 200
    assert "data:image/png;base64," in html
    assert "http://localhost/receive?token=" in html
    assert 'id="timer"' in html
    assert "<h1>Check out</h1>" in html


def test_issued_url_is_accepted_by_receiver(client, settings):
    _configure(settings)
    settings.devices_file.write_text(json.dumps({"device001": "testpasskey123"}), encoding="utf-8")
    html = client.get("/issuer/show?action=check-in").get_data(as_text=True)

    start = html.index("http://localhost/receive?")
    url = html[start : html.index('"', start)].replace("&amp;", "&")
    client.set_cookie("username", "erin")
    resp = client.get(url[len("http://localhost") :])

    assert resp.status_code == 200
    assert "erin, your check in has been recorded." in resp.get_data(as_text=True)


def test_settings_form_saves_valid_input(client, settings):
    resp = client.post(
        "/issuer/settings",
        data={"deviceId": "device001", "passkey": "testpasskey123", "targetUrl": "https://example.com/receive"},
    )
    assert resp.status_code == 302
    assert JsonSettingsStore(settings.issuer_settings_file).load().is_configured


def test_settings_form_rejects_short_passkey(client, settings):
    resp = client.post(
        "/issuer/settings",
        data={"deviceId": "device001", "passkey": "short", "targetUrl": "https://example.com/receive"},
    )
    assert resp.status_code == 400
    assert "at least 8 characters" in resp.get_data(as_text=True)
    assert not settings.issuer_settings_file.exists()


def test_settings_reset(client, settings):
    _configure(settings)
    resp = client.post("/issuer/settings/reset")
    assert resp.status_code == 302
    assert not settings.issuer_settings_file.exists()


def test_issuer_routes_can_be_disabled(tmp_path):
    client = create_app(_settings(tmp_path, issuer_enabled=False)).test_client()
    assert client.get("/issuer").status_code == 404


def test_expired_countdown_returns_home_with_notice(client, settings):
    _configure(settings)
    show = client.get("/issuer/show?action=check-in").get_data(as_text=True)
    assert "/issuer?expired=1" in show

    assert "QR code expired." in client.get("/issuer?expired=1").get_data(as_text=True)
    assert "QR code expired." not in client.get("/issuer").get_data(as_text=True)
