"""Terminal kiosk: print a check-in/check-out QR code and count down to expiry.

Usage: qr-attendance-issue check-in
"""
from __future__ import annotations

import argparse
import logging
import sys
import threading
from typing import Optional, Sequence

from ..container import build_container
from ..core.enums import ActionType
from ..core.exceptions import ConfigurationIncomplete, GenerationError, RenderError
from ..settings import settings_from_env
from .countdown import CountdownTicker, IssuerDisplay, format_remaining


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="qr-attendance-issue", description="Show an attendance QR code.")
    parser.add_argument("action", choices=[a.value for a in ActionType])
    parser.add_argument("--no-wait", action="store_true", help="print the code and exit without a countdown")
    args = parser.parse_args(argv)

    settings = settings_from_env()
    logging.basicConfig(level=settings.log_level)
    container = build_container(settings=settings)
    issuer = container.issuer_service

    try:
        code = issuer.issue(args.action)
    except ConfigurationIncomplete as e:
        print(f"Settings are incomplete: {e}", file=sys.stderr)
        return 2
    except GenerationError:
        print("Failed to generate the QR code.", file=sys.stderr)
        return 1

    try:
        art = issuer.render_ascii(code)
    except RenderError:
        print("Failed to draw the QR code.", file=sys.stderr)
        return 1

    print(art)
    print(code.url)
    if args.no_wait:
        return 0

    done = threading.Event()

    def on_tick(remaining: int) -> None:
        print(f"\rexpires in {format_remaining(remaining)} ", end="", flush=True)

    def on_expire() -> None:
        print("\nThe QR code has expired.")
        done.set()

    display = IssuerDisplay(CountdownTicker(issuer.expiry), on_tick=on_tick, on_expire=on_expire)
    display.show(code)
    try:
        done.wait()
    except KeyboardInterrupt:
        display.close()
        print()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
