"""
otp_core.py — Core HOTP / TOTP computation (RFC 4226 / RFC 6238).

Goals:
- Pure functions only: every call is a deterministic computation of its
  arguments, no file I/O, no clock reads, no logging.
- Secrets are raw bytes. Base32 handling belongs to the caller (see otp_cli).
- Results are integers. Zero-padding for display is the caller's job too.

Numeric ranges:
- counter and time are unsigned 64-bit values, [0, 2**64 - 1]
- the truncated value is 31-bit, [0, 2**31 - 1]
- digits must be 1..9 so that 10**digits stays inside 32-bit arithmetic
"""

import struct

from .errors import InvalidDigestLength, InvalidParameter
from .keyed_hash import DEFAULT_ALGORITHM, AlgorithmLike, keyed_hash

# --- Config / constants ----------------------------------------------------
DEFAULT_DIGITS = 6          # standard: 6 digits
DEFAULT_STEP = 30           # TOTP step (seconds)
MIN_DIGITS = 1
MAX_DIGITS = 9
MAX_UINT64 = 2 ** 64 - 1


# --- Argument checks -------------------------------------------------------
def _require_uint64(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidParameter(f"{name} must be an int, got {type(value).__name__}")
    if not 0 <= value <= MAX_UINT64:
        raise InvalidParameter(f"{name} must be in [0, 2**64 - 1], got {value}")


def _require_step(step: int) -> None:
    if isinstance(step, bool) or not isinstance(step, int):
        raise InvalidParameter(f"step must be an int, got {type(step).__name__}")
    if step <= 0:
        raise InvalidParameter(f"step must be > 0, got {step}")


def _require_digits(digits: int) -> None:
    if isinstance(digits, bool) or not isinstance(digits, int):
        raise InvalidParameter(f"digits must be an int, got {type(digits).__name__}")
    if not MIN_DIGITS <= digits <= MAX_DIGITS:
        raise InvalidParameter(
            f"digits must be in {MIN_DIGITS}..{MAX_DIGITS}, got {digits}"
        )


# --- RFC helpers -----------------------------------------------------------
def int_to_bytes(i: int) -> bytes:
    """
    Convert the counter to the 8-byte big-endian message RFC 4226 requires.

    Example: int_to_bytes(1) -> b'\\x00\\x00\\x00\\x00\\x00\\x00\\x00\\x01'

    Raises:
        InvalidParameter: counter is not an int in [0, 2**64 - 1]
    """
    _require_uint64("counter", i)
    return struct.pack(">Q", i)


def dynamic_truncate(hmac_digest: bytes) -> int:
    """
    Dynamic truncation as in RFC 4226 section 5.3.

    - offset = last_byte & 0x0F (0..15)
    - read 4 bytes from offset, big-endian
    - clear the most significant bit -> 31-bit unsigned integer

    Arguments:
        hmac_digest: HMAC output (SHA1 -> 20 bytes, SHA256 -> 32, SHA512 -> 64)
    Raises:
        InvalidDigestLength: digest shorter than offset + 4
    """
    if not hmac_digest:
        raise InvalidDigestLength(0, 0)
    offset = hmac_digest[-1] & 0x0F
    if len(hmac_digest) < offset + 4:
        raise InvalidDigestLength(len(hmac_digest), offset)
    (code,) = struct.unpack(">I", hmac_digest[offset:offset + 4])
    return code & 0x7FFFFFFF


def decimal_truncate(value: int, digits: int = DEFAULT_DIGITS) -> int:
    """
    Reduce a truncated value to `digits` decimal digits: value % 10**digits.

    The result is a plain int; 7081804 with digits=8 is rendered "07081804"
    by whoever displays it.

    Raises:
        InvalidParameter: digits outside 1..9
    """
    _require_digits(digits)
    return value % (10 ** digits)


# --- HOTP ------------------------------------------------------------------
def hotp_raw(counter: int, secret: bytes,
             algorithm: AlgorithmLike = DEFAULT_ALGORITHM) -> int:
    """
    HOTP before decimal truncation: the full 31-bit dynamic-truncation value.

    Steps:
    1. message = 8-byte big-endian counter
    2. digest = HMAC(secret, message) with the chosen hash
    3. dynamic truncate -> 31-bit int

    Arguments:
        counter: moving factor, [0, 2**64 - 1]
        secret: raw key bytes, any length (b"" included)
        algorithm: HashAlgorithm.SHA1 / SHA256 / SHA512 or its name
    """
    digest = keyed_hash(secret, int_to_bytes(counter), algorithm)
    return dynamic_truncate(digest)


def hotp(counter: int, digits: int, secret: bytes,
         algorithm: AlgorithmLike = DEFAULT_ALGORITHM) -> int:
    """
    HOTP code per RFC 4226: hotp_raw(counter, secret) % 10**digits.

    Raises:
        InvalidParameter: counter out of range, digits outside 1..9,
            unknown algorithm
    """
    _require_digits(digits)
    return decimal_truncate(hotp_raw(counter, secret, algorithm), digits)


# --- TOTP ------------------------------------------------------------------
def time_counter(time: int, step: int = DEFAULT_STEP) -> int:
    """TOTP counter for a unix time: floor(time / step)."""
    _require_uint64("time", time)
    _require_step(step)
    return time // step


def remaining_seconds(time: int, step: int = DEFAULT_STEP) -> int:
    """Seconds left before the code for `time` rolls over (1..step)."""
    _require_uint64("time", time)
    _require_step(step)
    return step - (time % step)


def totp_raw(time: int, step: int, secret: bytes,
             algorithm: AlgorithmLike = DEFAULT_ALGORITHM) -> int:
    """
    TOTP before decimal truncation: hotp_raw(floor(time / step), secret).

    Arguments:
        time: unix seconds, [0, 2**64 - 1]
        step: time step X in seconds, must be > 0
        secret: raw key bytes
        algorithm: HashAlgorithm or its name
    Raises:
        InvalidParameter: step <= 0, time out of range
    """
    return hotp_raw(time_counter(time, step), secret, algorithm)


def totp(time: int, step: int, digits: int, secret: bytes,
         algorithm: AlgorithmLike = DEFAULT_ALGORITHM) -> int:
    """
    TOTP code per RFC 6238 with T0 = 0: HOTP(counter = floor(time / step)).

    RFC 6238 defaults are step=30 (DEFAULT_STEP) and 6 digits
    (DEFAULT_DIGITS); its test vectors use 8 digits.
    """
    _require_digits(digits)
    return decimal_truncate(totp_raw(time, step, secret, algorithm), digits)
