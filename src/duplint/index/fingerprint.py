"""Content addressing: stable fingerprints of normalized text and opaque bytes."""

import hashlib
from typing import Callable

import mmh3

from ..errors import ConfigurationError

Fingerprint = str
"""Hex digest identifying a piece of content. Equal fingerprints mean identical content."""


def md5_fingerprint(data: bytes) -> Fingerprint:
    return hashlib.md5(data, usedforsecurity=False).hexdigest()


def sha256_fingerprint(data: bytes) -> Fingerprint:
    return hashlib.sha256(data).hexdigest()


def murmur3_fingerprint(data: bytes) -> Fingerprint:
    """128-bit MurmurHash3, rendered big-endian like the other digests."""
    return mmh3.hash128(data, signed=False).to_bytes(16, byteorder='big').hex()


# Every algorithm produces at least 128 bits so that collisions can be ignored.
HASH_ALGORITHMS: dict[str, Callable[[bytes], Fingerprint]] = {
    'md5': md5_fingerprint,
    'sha256': sha256_fingerprint,
    'murmur3': murmur3_fingerprint,
}
DEFAULT_HASH_ALGORITHM = 'md5'


class ContentAddresser:
    """Computes fingerprints with one configured algorithm.

    The same normalized input always yields the same fingerprint within and across runs: no
    salt and no per-run state are involved.
    """

    def __init__(self, hash_algorithm: str = DEFAULT_HASH_ALGORITHM):
        try:
            self._digest = HASH_ALGORITHMS[hash_algorithm]
        except KeyError:
            raise ConfigurationError(f"Unknown hash algorithm: {hash_algorithm!r}") from None
        self.hash_algorithm = hash_algorithm

    def fingerprint_text(self, normalized: str) -> Fingerprint:
        return self._digest(normalized.encode('utf-8'))

    def fingerprint_bytes(self, data: bytes) -> Fingerprint:
        return self._digest(data)
