from __future__ import annotations

import json

import pytest

from qr_attendance.common.datetime_utils import now_ms, now_utc, year_month
from qr_attendance.core.enums import ActionType
from qr_attendance.main import create_app
from qr_attendance.settings import AppSettings
from qr_attendance.tokens.codec import TokenCodec

PASSKEY = "testpasskey123"


@pytest.fixture
def settings(tmp_path):
    devices = tmp_path / "devices.json"
    devices.write_text(json.dumps({"device001": PASSKEY}), encoding="utf-8")
    return AppSettings(
        secret_key="test-secret",
        devices_file=devices,
        log_dir=tmp_path / "logs",
        issuer_settings_file=tmp_path / "issuer.json",
        testing=True,
        log_level="WARNING",
    )


@pytest.fixture
def client(settings):
    return create_app(settings).test_client()


def _query(device_id="device001", action=ActionType.CHECK_IN, ts=None):
    bundle = TokenCodec().generate(device_id, PASSKEY, action, now=now_ms() if ts is None else ts)
    return TokenCodec().encode(bundle)


def _log_lines(settings, kind):
    path = settings.log_dir / f"{kind}_{year_month(now_utc())}.log"
    if not path.exists():
        return []
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]


def test_valid_scan_with_cookie_is_recorded(client, settings):
    client.set_cookie("username", "alice")
    resp = client.get(f"/receive?{_query()}")

    assert resp.status_code == 200
    assert "alice, your check in has been recorded." in resp.get_data(as_text=True)
    lines = _log_lines(settings, "valid")
    assert len(lines) == 1
    assert lines[0]["username"] == "alice"
    assert lines[0]["isValid"] is True


def test_tampered_token_still_reaches_log(client, settings):
    client.set_cookie("username", "alice")
    query = _query().replace("token=", "token=0", 1)
    resp = client.get(f"/receive?{query}")

    assert resp.status_code == 200
    assert "the token is invalid" in resp.get_data(as_text=True)
    assert len(_log_lines(settings, "invalid")) == 1
    assert _log_lines(settings, "valid") == []


@pytest.mark.parametrize(
    "query",
    [
        "deviceId=device001&action=check-in",
        "token=abc&deviceId=device001&action=check-in&timestamp=soon",
    ],
)
def test_malformed_requests_are_400(client, settings, query):
    resp = client.get(f"/receive?{query}")
    assert resp.status_code == 400
    assert _log_lines(settings, "invalid") == []


def test_expired_is_400(client):
    resp = client.get(f"/receive?{_query(ts=now_ms() - 6 * 60 * 1000)}")
    assert resp.status_code == 400
    assert "expired" in resp.get_data(as_text=True)


def test_unknown_device_is_400_and_logged(client, settings):
    resp = client.get(f"/receive?{_query(device_id='ghost')}")
    assert resp.status_code == 400
    assert "not registered" in resp.get_data(as_text=True)
    lines = _log_lines(settings, "invalid")
    assert [line["username"] for line in lines] == ["unknown"]


def test_first_visit_shows_registration_form(client, settings):
    resp = client.get(f"/receive?{_query()}")
    html = resp.get_data(as_text=True)

    assert resp.status_code == 200
    assert 'name="username"' in html
    assert 'name="token"' in html
    assert "token is invalid" not in html
    assert _log_lines(settings, "valid") == []


def test_registration_form_warns_about_invalid_token(client):
    query = _query().replace("token=", "token=f", 1)
    html = client.get(f"/receive?{query}").get_data(as_text=True)
    assert "token is invalid" in html


def test_register_sets_identity_cookie_and_logs(client, settings):
    form = {**TokenCodec().decode(_query(action=ActionType.CHECK_OUT)).as_params(), "username": " carol "}
    resp = client.post("/register", data=form)

    assert resp.status_code == 200
    assert "carol, you are registered and your check out has been recorded." in resp.get_data(as_text=True)
    cookie = resp.headers["Set-Cookie"]
    assert cookie.startswith("username=carol")
    assert "HttpOnly" in cookie
    assert "Max-Age=31536000" in cookie
    assert _log_lines(settings, "valid")[0]["username"] == "carol"

    # Returning visitor goes straight to the log.
    resp = client.get(f"/receive?{_query()}")
    assert "carol, your check in has been recorded." in resp.get_data(as_text=True)


def test_register_keeps_identity_even_if_expired(client, settings):
    stale = TokenCodec().decode(_query(ts=now_ms() - 10 * 60 * 1000)).as_params()
    resp = client.post("/register", data={**stale, "username": "dave"})

    assert resp.status_code == 400
    assert resp.headers["Set-Cookie"].startswith("username=dave")
    assert _log_lines(settings, "valid") == []


def test_register_without_name_is_400(client):
    form = {**TokenCodec().decode(_query()).as_params(), "username": "   "}
    resp = client.post("/register", data=form)
    assert resp.status_code == 400
    assert "Set-Cookie" not in resp.headers


def test_user_input_is_escaped(client):
    client.set_cookie("username", "<script>x</script>")
    html = client.get(f"/receive?{_query()}").get_data(as_text=True)
    assert "<script>x</script>" not in html
    assert "&lt;script&gt;" in html


def test_internal_error_is_500_without_log(client, settings):
    settings.devices_file.write_text("{broken", encoding="utf-8")
    client.set_cookie("username", "alice")
    resp = client.get(f"/receive?{_query()}")

    assert resp.status_code == 500
    html = resp.get_data(as_text=True)
    assert "server error" in html
    assert "Traceback" not in html
    assert _log_lines(settings, "valid") == []
    assert _log_lines(settings, "invalid") == []


def test_oversized_timestamp_is_400(client, settings):
    resp = client.get(f"/receive?token={'a' * 32}&deviceId=device001&action=check-in&timestamp={'9' * 5000}")
    assert resp.status_code == 400
    assert "invalid" in resp.get_data(as_text=True).lower()
    assert _log_lines(settings, "invalid") == []


def test_register_with_unknown_device_is_400_but_keeps_identity(client, settings):
    form = {**TokenCodec().decode(_query(device_id="ghost")).as_params(), "username": "bob"}
    resp = client.post("/register", data=form)

    assert resp.status_code == 400
    assert "not registered" in resp.get_data(as_text=True)
    assert resp.headers["Set-Cookie"].startswith("username=bob")
    assert [line["username"] for line in _log_lines(settings, "invalid")] == ["bob"]
    assert _log_lines(settings, "valid") == []
