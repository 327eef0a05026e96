"""
rfcotp package
==============

HOTP / TOTP one-time password computation and verification per
RFC 4226 & RFC 6238, with SHA-1, SHA-256 or SHA-512 as the HMAC hash.

──────────────────────────────────────────────
Core algorithm
──────────────────────────────────────────────
- HOTP (HMAC-based One-Time Password):
  code = Truncate(HMAC(key=secret, msg=counter)) mod 10^digits
  → counter is an 8-byte big-endian integer.

- TOTP (Time-based One-Time Password):
  HOTP with counter = floor(time / step)
  → default step = 30 seconds, 6 digits, SHA-1.

- Dynamic Truncation:
  take 4 bytes of the HMAC at offset (last byte & 0x0F),
  clear the top bit → 31-bit integer.

- Verification:
  try every step of a small window around the reference time
  (TOTP: back/forward) or counter (HOTP: look-ahead only).

──────────────────────────────────────────────
Notes for callers
──────────────────────────────────────────────
- Secrets are raw bytes. Decode Base32 yourself (otp_cli has a helper).
- Codes are ints. Zero-pad for display: str(code).zfill(digits).
- digits must be 1..9, step > 0. Violations raise InvalidParameter.
- Keep skew small; every window position is one HMAC.
- Replay protection (remembering used counters/codes) is not done here.

──────────────────────────────────────────────
Quick example
──────────────────────────────────────────────
>>> from rfcotp import hotp, totp, check_totp
>>> secret = b"12345678901234567890"
>>> hotp(1, 6, secret)
287082
>>> totp(59, 30, 8, secret)
94287082
>>> check_totp(89, 30, secret, 8, (1, 0), 94287082)
True
"""

from .errors import InvalidDigestLength, InvalidParameter, InvalidWindow, OTPError
from .keyed_hash import DEFAULT_ALGORITHM, HashAlgorithm, keyed_hash
from .otp_core import (
    DEFAULT_DIGITS,
    DEFAULT_STEP,
    decimal_truncate,
    dynamic_truncate,
    hotp,
    hotp_raw,
    remaining_seconds,
    time_counter,
    totp,
    totp_raw,
)
from .otp_verify import check_hotp, check_totp, codes_equal, skew_window

__all__ = [
    "DEFAULT_ALGORITHM",
    "DEFAULT_DIGITS",
    "DEFAULT_STEP",
    "HashAlgorithm",
    "InvalidDigestLength",
    "InvalidParameter",
    "InvalidWindow",
    "OTPError",
    "check_hotp",
    "check_totp",
    "codes_equal",
    "decimal_truncate",
    "dynamic_truncate",
    "hotp",
    "hotp_raw",
    "keyed_hash",
    "remaining_seconds",
    "skew_window",
    "time_counter",
    "totp",
    "totp_raw",
]
