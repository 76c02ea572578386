from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, url_for

from ..common.datetime_utils import from_epoch_ms
from ..core.enums import ActionType, action_label
from ..core.exceptions import ConfigurationIncomplete, GenerationError, RenderError, ValidationError
from ..container import Container
from .countdown import format_remaining
from .renderer import png_data_uri
from .settings_store import validate_settings_form

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    issuer = container.issuer_service

    def _render_home(error: str | None = None, status: int = 200):
        settings = issuer.current_settings()
        return render_template(
            "issuer.html",
            configured=settings.is_configured,
            error=error,
            expired=request.args.get("expired") == "1",
            actions=[(a.value, action_label(a.value)) for a in ActionType],
        ), status

    @app.route("/issuer", methods=["GET"], endpoint="issuer_home")
    def issuer_home():
        if not issuer.current_settings().is_configured:
            return _render_home("Settings are incomplete. Configure the device ID, passkey and target URL.")
        return _render_home()

    @app.route("/issuer/show", methods=["GET"], endpoint="issuer_show")
    def issuer_show():
        try:
            action = ActionType(request.args.get("action", ""))
        except ValueError:
            return _render_home("Unknown action.", 400)

        try:
            code = issuer.issue(action)
        except ConfigurationIncomplete:
            return _render_home("Settings are incomplete. Please check the settings page.", 400)
        except GenerationError:
            logger.exception("token generation failed")
            return _render_home("Failed to generate the QR code.", 500)

        try:
            image = png_data_uri(issuer.render_png(code))
        except RenderError:
            logger.exception("QR rendering failed")
            return _render_home("Failed to draw the QR code.", 500)

        remaining = issuer.remaining_seconds(code)
        return render_template(
            "show.html",
            action=action.value,
            action_label=action_label(action.value),
            issued_at=from_epoch_ms(code.bundle.timestamp),
            image=image,
            url=code.url,
            remaining=remaining,
            remaining_text=format_remaining(remaining),
            window_seconds=issuer.expiry.expiry_minutes * 60,
        )

    @app.route("/issuer/settings", methods=["GET", "POST"], endpoint="issuer_settings")
    def issuer_settings():
        if request.method == "POST":
            try:
                settings = validate_settings_form(
                    request.form.get("deviceId", ""),
                    request.form.get("passkey", ""),
                    request.form.get("targetUrl", ""),
                )
                container.issuer_settings.save(settings)
                flash("Settings saved.", "success")
                return redirect(url_for("issuer_settings"))
            except ValidationError as e:
                flash(str(e), "error")
                return render_template("settings.html", settings=request.form), 400

        return render_template("settings.html", settings=issuer.current_settings().to_dict())

    @app.route("/issuer/settings/reset", methods=["POST"], endpoint="issuer_settings_reset")
    def issuer_settings_reset():
        container.issuer_settings.reset()
        flash("Settings cleared.", "info")
        return redirect(url_for("issuer_settings"))
