"""Token generation, wire encoding and verification.

The token is the first 32 hex characters of
``sha256(deviceId|action|timestamp|passkey)``. Bundles travel as a query
string ``token=..&deviceId=..&action=..&timestamp=..`` with every value fully
percent-encoded.
"""
from __future__ import annotations

import hashlib
import hmac
import re
from typing import Mapping, Optional, Union
from urllib.parse import parse_qs, quote, urlencode, urlsplit

from ..common.datetime_utils import from_epoch_ms, now_ms
from ..core.constants import TOKEN_LENGTH, TOKEN_SEPARATOR
from ..core.enums import ActionType
from ..core.exceptions import DecodeError, GenerationError
from .model import TokenBundle

_WIRE_FIELDS = ("token", "deviceId", "action", "timestamp")
# Epoch-ms values never need more than 20 digits.
_INT_RE = re.compile(r"-?[0-9]{1,20}")

MISSING_PARAMETERS = "missing_parameters"
INVALID_TIMESTAMP = "invalid_timestamp"


class TokenCodec:
    def __init__(self, *, token_length: int = TOKEN_LENGTH):
        self._token_length = int(token_length)

    @staticmethod
    def canonical_string(device_id: str, action: str, timestamp: int, passkey: str) -> str:
        return TOKEN_SEPARATOR.join((device_id, action, str(timestamp), passkey))

    def compute_token(self, device_id: str, action: str, timestamp: int, passkey: str) -> str:
        data = self.canonical_string(device_id, action, timestamp, passkey)
        try:
            digest = hashlib.sha256(data.encode("utf-8")).hexdigest()
        except (UnicodeEncodeError, ValueError) as e:
            raise GenerationError("Could not compute token") from e
        return digest[: self._token_length]

    def generate(
        self,
        device_id: str,
        passkey: str,
        action: Union[ActionType, str],
        *,
        now: Optional[int] = None,
    ) -> TokenBundle:
        action_value = ActionType(action).value
        timestamp = now_ms() if now is None else int(now)
        token = self.compute_token(device_id, action_value, timestamp, passkey)
        return TokenBundle(token=token, device_id=device_id, action_type=action_value, timestamp=timestamp)

    def verify(self, bundle: TokenBundle, passkey: str) -> bool:
        try:
            expected = self.compute_token(bundle.device_id, bundle.action_type, bundle.timestamp, passkey)
        except GenerationError:
            return False
        return hmac.compare_digest(expected.encode("utf-8"), bundle.token.encode("utf-8"))

    def encode(self, bundle: TokenBundle) -> str:
        return urlencode(bundle.as_params(), quote_via=quote, safe="")

    def build_url(self, base_url: str, bundle: TokenBundle) -> str:
        separator = "&" if "?" in base_url else "?"
        return f"{base_url}{separator}{self.encode(bundle)}"

    def decode(self, query: str) -> TokenBundle:
        parsed = parse_qs(query.lstrip("?"), keep_blank_values=True)
        return self.from_params({k: v[0] for k, v in parsed.items() if v})

    def parse_url(self, url: str) -> TokenBundle:
        return self.decode(urlsplit(url).query)

    def from_params(self, params: Mapping[str, str]) -> TokenBundle:
        """Build a bundle from an already-parsed query/form mapping."""
        values = {name: (params.get(name) or "") for name in _WIRE_FIELDS}
        if not all(values.values()):
            raise DecodeError(MISSING_PARAMETERS, "Required parameters are missing")

        return TokenBundle(
            token=values["token"],
            device_id=values["deviceId"],
            action_type=values["action"],
            timestamp=parse_timestamp(values["timestamp"]),
        )


def parse_timestamp(value: str) -> int:
    """Strict integer parse of an epoch-ms timestamp.

    Values outside the representable calendar range are rejected too, since
    they cannot be rendered into a log record.
    """
    text = value.strip()
    if not _INT_RE.fullmatch(text):
        raise DecodeError(INVALID_TIMESTAMP, "Timestamp is not an integer")
    timestamp = int(text)
    try:
        from_epoch_ms(timestamp)
    except OverflowError as e:
        raise DecodeError(INVALID_TIMESTAMP, "Timestamp is out of range") from e
    return timestamp
