"""
keyed_hash.py — HMAC provider for HOTP/TOTP.

The HMAC itself comes from the `cryptography` package; this module only picks
the underlying hash. RFC 6238 allows SHA-1, SHA-256 and SHA-512, so the set is
closed and modelled as an enum that callers pass at the call site.
"""

from enum import Enum
from typing import Union

from cryptography.hazmat.primitives import hashes, hmac

from .errors import InvalidParameter


class HashAlgorithm(Enum):
    SHA1 = "SHA1"
    SHA256 = "SHA256"
    SHA512 = "SHA512"

    @property
    def hash_class(self):
        return _HASH_CLASSES[self]

    @property
    def digest_size(self) -> int:
        """Digest length in bytes (20, 32 or 64)."""
        return self.hash_class.digest_size

    @classmethod
    def from_name(cls, name: str) -> "HashAlgorithm":
        """
        Lookup by name, case-insensitive, dashes ignored.

        "sha1", "SHA-256", "Sha512" are all accepted (otpauth URIs and most
        authenticator apps spell it "SHA1"/"SHA256"/"SHA512").

        Raises:
            InvalidParameter: unknown algorithm name
        """
        key = name.replace("-", "").upper()
        try:
            return cls(key)
        except ValueError:
            raise InvalidParameter(f"Unsupported hash algorithm: {name!r}") from None


_HASH_CLASSES = {
    HashAlgorithm.SHA1: hashes.SHA1,
    HashAlgorithm.SHA256: hashes.SHA256,
    HashAlgorithm.SHA512: hashes.SHA512,
}

DEFAULT_ALGORITHM = HashAlgorithm.SHA1

AlgorithmLike = Union[HashAlgorithm, str]


def resolve_algorithm(algorithm: AlgorithmLike) -> HashAlgorithm:
    if isinstance(algorithm, HashAlgorithm):
        return algorithm
    if isinstance(algorithm, str):
        return HashAlgorithm.from_name(algorithm)
    raise InvalidParameter(f"Unsupported hash algorithm: {algorithm!r}")


def keyed_hash(secret: bytes, message: bytes,
               algorithm: AlgorithmLike = DEFAULT_ALGORITHM) -> bytes:
    """
    HMAC(key=secret, msg=message) with the chosen hash.

    Keys of any length are accepted, including b"": HMAC pads short keys and
    hashes keys longer than the block size itself.

    Arguments:
        secret: raw key bytes (not Base32)
        message: message bytes (8-byte counter for HOTP)
        algorithm: HashAlgorithm or its name

    Returns:
        bytes: digest, 20/32/64 bytes depending on the algorithm

    Raises:
        InvalidParameter: secret is not bytes-like, unknown algorithm
    """
    if not isinstance(secret, (bytes, bytearray, memoryview)):
        raise InvalidParameter(
            f"secret must be bytes, got {type(secret).__name__} (decode Base32 first)"
        )
    algo = resolve_algorithm(algorithm)
    h = hmac.HMAC(secret, algo.hash_class())
    h.update(message)
    return h.finalize()
