"""
errors.py — Exceptions raised by rfcotp.

Everything derives from OTPError (itself a ValueError), so callers that only
care about "bad input" can catch ValueError like they would for the Base32
decoding errors of the CLI.
"""


class OTPError(ValueError):
    """Base class for all rfcotp failures."""


class InvalidParameter(OTPError):
    """
    A precondition on the arguments was violated.

    Raised for step <= 0, digits outside 1..9, counter/time outside the
    unsigned 64-bit range, negative skew, or an unknown hash algorithm.
    """


class InvalidWindow(InvalidParameter):
    """The skew window would start below 0 or end above 2**64 - 1."""


class InvalidDigestLength(OTPError):
    """The digest is too short to read 4 bytes at the dynamic offset."""

    def __init__(self, length: int, offset: int):
        super().__init__(
            f"digest of {length} bytes is too short for offset {offset} "
            f"(need at least {offset + 4})"
        )
        self.length = length
        self.offset = offset
