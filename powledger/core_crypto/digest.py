"""
Digest helpers shared by the block, proof-of-work and wallet modules.

All hashing in powledger is SHA-256 (32-byte output). Proof-of-work treats a
digest as a big-endian unsigned integer and compares it against the target.
"""

import hashlib


DIGEST_SIZE = 32   # bytes
DIGEST_BITS = DIGEST_SIZE * 8


def sha256(data: bytes) -> bytes:
    """Return the SHA-256 digest of data."""
    return hashlib.sha256(data).digest()


def sha256_hex(data: bytes) -> str:
    """Return the SHA-256 digest of data as a hex string."""
    return hashlib.sha256(data).hexdigest()


def digest_to_int(digest: bytes) -> int:
    """Interpret a digest as an unsigned big-endian integer."""
    return int.from_bytes(digest, 'big')


def leading_zero_bits(digest: bytes) -> int:
    """Count leading zero bits in a digest."""
    value = digest_to_int(digest)
    if value == 0:
        return len(digest) * 8
    return len(digest) * 8 - value.bit_length()
