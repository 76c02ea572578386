"""Example: issue and verify a token with the service layer (no Flask).

Shows that controllers are thin: tokens, expiry and logging live in services.
"""

from qr_attendance.core.enums import ActionType
from qr_attendance.tokens.codec import TokenCodec
from qr_attendance.tokens.expiry import ExpiryPolicy


def main():
    codec = TokenCodec()
    expiry = ExpiryPolicy(5)

    bundle = codec.generate("device001", "testpasskey123", ActionType.CHECK_IN)
    url = codec.build_url("https://attendance.example.com/receive", bundle)
    print(url)

    received = codec.parse_url(url)
    print("valid:", codec.verify(received, "testpasskey123"))
    print("expires in:", expiry.remaining_seconds(received.timestamp), "s")


if __name__ == "__main__":
    main()
