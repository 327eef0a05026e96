"""
otp_verify.py — Skew-tolerant verification of HOTP / TOTP codes.

A verifier accepts a code if it matches at any point of a small window around
the reference time (TOTP, RFC 6238 section 6) or the reference counter (HOTP
look-ahead, RFC 4226 section 7.4).

The size of the window is not capped here: each position costs one HMAC, so
callers must keep `skew` small.
"""

from typing import Tuple

from cryptography.hazmat.primitives import constant_time

from .errors import InvalidParameter, InvalidWindow
from .keyed_hash import DEFAULT_ALGORITHM, AlgorithmLike
from .otp_core import (
    MAX_UINT64,
    _require_digits,
    _require_step,
    _require_uint64,
    hotp,
    totp,
)

Skew = Tuple[int, int]


def _require_skew_part(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidParameter(f"{name} must be an int, got {type(value).__name__}")
    if value < 0:
        raise InvalidParameter(f"{name} must be >= 0, got {value}")


def skew_window(time: int, step: int, skew: Skew) -> range:
    """
    Timestamps (or counters) to try: time - step*back .. time + step*forward.

    Both ends are inclusive and the stride is `step`, e.g.
    skew_window(10000, 2, (2, 4)) -> 9996, 9998, ..., 10008.

    The result is a range, so it can be iterated any number of times.

    Raises:
        InvalidParameter: step <= 0, skew not a pair, negative skew
        InvalidWindow: start below 0 or end above 2**64 - 1
    """
    _require_uint64("time", time)
    _require_step(step)
    try:
        back, forward = skew
    except (TypeError, ValueError):
        raise InvalidParameter(f"skew must be a (back, forward) pair, got {skew!r}") from None
    _require_skew_part("skew back", back)
    _require_skew_part("skew forward", forward)

    start = time - step * back
    end = time + step * forward
    if start < 0:
        raise InvalidWindow(
            f"skew window starts before 0: time={time}, step={step}, back={back}"
        )
    if end > MAX_UINT64:
        raise InvalidWindow(
            f"skew window ends after 2**64 - 1: time={time}, step={step}, forward={forward}"
        )
    return range(start, end + 1, step)


def codes_equal(candidate: int, expected: object) -> bool:
    """
    Compare two codes without an early exit on the first differing digit.

    Anything that is not a non-negative int never matches.
    """
    if isinstance(expected, bool) or not isinstance(expected, int) or expected < 0:
        return False
    width = max(candidate.bit_length(), expected.bit_length(), 32)
    size = (width + 7) // 8
    return constant_time.bytes_eq(
        candidate.to_bytes(size, "big"), expected.to_bytes(size, "big")
    )


def check_totp(time: int, step: int, secret: bytes, digits: int,
               skew: Skew, expected: int,
               algorithm: AlgorithmLike = DEFAULT_ALGORITHM) -> bool:
    """
    Check a TOTP code allowing `skew = (back, forward)` steps of clock drift.

    Every timestamp of skew_window(time, step, skew) is tried in order and
    the first match wins.

    Arguments:
        time: verifier's unix time
        step: TOTP step in seconds
        secret: raw key bytes
        digits: code length
        skew: (steps accepted before, steps accepted after)
        expected: code entered by the user, as an int
        algorithm: HashAlgorithm or its name

    Returns:
        bool: True if any timestamp of the window yields `expected`
    """
    _require_digits(digits)
    return any(
        codes_equal(totp(t, step, digits, secret, algorithm), expected)
        for t in skew_window(time, step, skew)
    )


def check_hotp(time: int, secret: bytes, digits: int, skew: int,
               expected: int,
               algorithm: AlgorithmLike = DEFAULT_ALGORITHM) -> bool:
    """
    Check a HOTP code at counter `time` with a look-ahead of `skew` counters.

    Only counters time, time+1, ..., time+skew are tried: the token's counter
    is never behind the verifier's last accepted one. Advancing the stored
    counter after a match is the caller's business.
    """
    _require_digits(digits)
    return any(
        codes_equal(hotp(c, digits, secret, algorithm), expected)
        for c in skew_window(time, 1, (0, skew))
    )
