"""
Proof of Work

A block is admitted only if the SHA-256 digest of its mining transcript,
read as an unsigned 256-bit integer, is strictly below the target
2^(256 - difficulty).

Mining transcript layout:
    [prev_hash | data (UTF-8) | nonce (8 bytes, big-endian) | difficulty (8 bytes, big-endian)]

Mining and validation both go through compute_transcript(), so they always
observe the same bytes.
"""

import logging
import struct
from typing import Callable, Optional, Tuple, TYPE_CHECKING

from ..config import DEFAULT_DIFFICULTY, DEFAULT_PROGRESS_INTERVAL
from ..core_crypto.digest import DIGEST_BITS, sha256, digest_to_int, leading_zero_bits
from ..exceptions import ConfigError, MiningCancelled

if TYPE_CHECKING:
    from .block import Block


logger = logging.getLogger(__name__)

UINT64_MASK = (1 << 64) - 1

ProgressCallback = Callable[[int, bytes], None]


def compute_transcript(prev_hash: bytes, data: str, nonce: int, difficulty: int) -> bytes:
    """
    Build the byte transcript hashed during mining and validation.

    Nonce and difficulty are unsigned 64-bit fields; larger nonces wrap.
    """
    return (
        prev_hash +
        data.encode('utf-8') +
        struct.pack('>QQ', nonce & UINT64_MASK, difficulty & UINT64_MASK)
    )


def calculate_target(difficulty: int) -> int:
    """Target = 2^(256 - difficulty). Higher difficulty, smaller target."""
    return 2 ** (DIGEST_BITS - difficulty)


class ProofOfWork:
    """
    Proof of Work with a configurable difficulty.

    The nonce search is a single-threaded brute force with no upper bound.
    Callers that need to stop it pass a cancel signal (anything with an
    is_set() method, e.g. threading.Event) and can observe it through a
    progress callback.
    """

    def __init__(self, difficulty: int = DEFAULT_DIFFICULTY,
                 progress_interval: int = DEFAULT_PROGRESS_INTERVAL):
        """
        Args:
            difficulty: Target exponent, 1-256
            progress_interval: Attempts between progress callbacks
        """
        if not 1 <= difficulty <= DIGEST_BITS:
            raise ConfigError("Difficulty must be between 1 and 256")
        if progress_interval < 1:
            raise ConfigError("Progress interval must be positive")
        self.difficulty = difficulty
        self.progress_interval = progress_interval
        self._target = calculate_target(difficulty)

    @property
    def target(self) -> int:
        """Get current target as integer."""
        return self._target

    @property
    def target_hex(self) -> str:
        """Get current target as hex string (64 chars, padded)."""
        return format(self._target, '064x')

    def hash_meets_target(self, digest: bytes) -> bool:
        """Check if a digest is strictly below the target."""
        return digest_to_int(digest) < self._target

    def count_leading_zeros(self, digest: bytes) -> int:
        return leading_zero_bits(digest)

    def compute_transcript(self, prev_hash: bytes, data: str, nonce: int) -> bytes:
        return compute_transcript(prev_hash, data, nonce, self.difficulty)

    def compute_digest(self, prev_hash: bytes, data: str, nonce: int) -> bytes:
        return sha256(self.compute_transcript(prev_hash, data, nonce))

    def mine(
        self,
        prev_hash: bytes,
        data: str,
        start_nonce: int = 0,
        cancel=None,
        progress: Optional[ProgressCallback] = None
    ) -> Tuple[int, bytes]:
        """
        Search for a nonce whose digest falls below the target.

        Args:
            prev_hash: Hash of the predecessor block (empty for genesis)
            data: Block payload
            start_nonce: First nonce to try
            cancel: Optional signal with is_set(); checked between attempts
            progress: Optional callback(nonce, digest), called every
                progress_interval attempts and once for the winning nonce

        Returns:
            Tuple of (nonce, digest)

        Raises:
            MiningCancelled: If cancel was set before a nonce was found
        """
        logger.debug(
            "Mining %r at difficulty %d from nonce %d",
            data, self.difficulty, start_nonce
        )

        nonce = start_nonce
        attempts = 0
        while True:
            if cancel is not None and cancel.is_set():
                logger.info("Mining of %r cancelled after %d attempts", data, attempts)
                raise MiningCancelled(
                    f"Mining cancelled after {attempts} attempts (last nonce {nonce})"
                )

            digest = self.compute_digest(prev_hash, data, nonce)
            attempts += 1

            if self.hash_meets_target(digest):
                if progress is not None:
                    progress(nonce, digest)
                logger.debug(
                    "Found nonce %d for %r after %d attempts (%d leading zero bits)",
                    nonce, data, attempts, leading_zero_bits(digest)
                )
                return nonce, digest

            if progress is not None and attempts % self.progress_interval == 0:
                progress(nonce, digest)

            nonce += 1

    def validate(self, block: 'Block') -> bool:
        """
        Check a block's proof of work.

        Recomputes the transcript from the block's stored nonce and
        difficulty. Pure predicate: returns False instead of raising.
        """
        if block.difficulty != self.difficulty:
            return False
        digest = sha256(
            compute_transcript(block.prev_hash, block.data, block.nonce, block.difficulty)
        )
        if digest != block.hash:
            return False
        return self.hash_meets_target(digest)
