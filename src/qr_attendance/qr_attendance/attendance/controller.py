from __future__ import annotations

import logging
from datetime import timedelta

from flask import Flask, make_response, render_template, request

from ..core.constants import IDENTITY_COOKIE_DAYS, IDENTITY_COOKIE_NAME, USERNAME_MAX_LENGTH
from ..core.enums import action_label
from ..core.exceptions import BadRequestError
from ..container import Container
from .service import RegistrationRequired

logger = logging.getLogger(__name__)

GENERIC_ERROR = "A server error occurred. Please try again later."


def register(app: Flask, container: Container) -> None:
    receiver = container.receiver_service

    def _render_result(title: str, message: str, css_class: str, *, username=None, status: int = 200):
        body = render_template(
            "result.html",
            title=title,
            message=message,
            css_class=css_class,
            username=username,
        )
        return make_response(body, status)

    def _render_bad_request(e: BadRequestError, *, username=None):
        return _render_result("Error", str(e), "error", username=username, status=400)

    def _render_internal_error():
        return _render_result("Error", GENERIC_ERROR, "error", status=500)

    @app.route("/receive", methods=["GET"], endpoint="receive")
    def receive():
        username = request.cookies.get(IDENTITY_COOKIE_NAME)
        try:
            outcome = receiver.receive(request.args, username=username)
        except BadRequestError as e:
            return _render_bad_request(e)
        except Exception:
            logger.exception("receive failed")
            return _render_internal_error()

        if isinstance(outcome, RegistrationRequired):
            bundle = outcome.bundle
            return render_template(
                "register.html",
                bundle=bundle,
                action_label=action_label(bundle.action_type),
                token_valid=outcome.token_valid,
                username_max_length=USERNAME_MAX_LENGTH,
            )

        return _render_result("Recorded", outcome.message, outcome.css_class, username=outcome.username)

    @app.route("/register", methods=["POST"], endpoint="register")
    def register_user():
        try:
            username = receiver.normalize_username(request.form.get("username"))
        except BadRequestError as e:
            return _render_bad_request(e)
        except Exception:
            logger.exception("register failed")
            return _render_internal_error()

        # Identity is kept even when the token turns out to be stale or forged.
        try:
            outcome = receiver.register(request.form)
            response = _render_result("Registered", outcome.message, outcome.css_class, username=username)
        except BadRequestError as e:
            response = _render_bad_request(e, username=username)
        except Exception:
            logger.exception("register failed")
            return _render_internal_error()

        response.set_cookie(
            IDENTITY_COOKIE_NAME,
            username,
            max_age=int(timedelta(days=IDENTITY_COOKIE_DAYS).total_seconds()),
            httponly=True,
            samesite="Lax",
            secure=container.settings.cookie_secure,
        )
        return response
