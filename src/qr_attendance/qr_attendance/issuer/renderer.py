from __future__ import annotations

import base64
import io

import qrcode

from ..core.constants import QR_BOX_SIZE, QR_MARGIN
from ..core.exceptions import RenderError


class QrRenderer:
    """Turns a URL into a QR image (PNG) or terminal text."""

    def __init__(self, *, box_size: int = QR_BOX_SIZE, border: int = QR_MARGIN):
        self._box_size = box_size
        self._border = border

    def _build(self, data: str) -> qrcode.QRCode:
        qr = qrcode.QRCode(
            version=None,
            error_correction=qrcode.constants.ERROR_CORRECT_M,
            box_size=self._box_size,
            border=self._border,
        )
        qr.add_data(data)
        qr.make(fit=True)
        return qr

    def render_png(self, data: str) -> bytes:
        try:
            img = self._build(data).make_image(fill_color="black", back_color="white")
            buf = io.BytesIO()
            img.save(buf, format="PNG")
        except Exception as e:
            raise RenderError("Failed to draw the QR code") from e
        return buf.getvalue()

    def render_ascii(self, data: str) -> str:
        try:
            out = io.StringIO()
            self._build(data).print_ascii(out=out, invert=True)
        except Exception as e:
            raise RenderError("Failed to draw the QR code") from e
        return out.getvalue()


def png_data_uri(png: bytes) -> str:
    return "data:image/png;base64," + base64.b64encode(png).decode("ascii")
