"""
Block Module

A Block is built only after its nonce has been mined, so every Block
instance already carries a (nonce, hash) pair that satisfies proof of work
at its difficulty. Blocks are frozen dataclasses and are never modified
once created.
"""

import random
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Tuple

from ..core_crypto.digest import sha256
from .proof import ProofOfWork, ProgressCallback
from .transaction import Transaction


GENESIS_DATA = "Genesis"
GENESIS_PREV_HASH = b''
GENESIS_RECEIVER = "Genesis"
MAX_START_NONCE = 10000  # start nonces are drawn from [0, MAX_START_NONCE)


def compute_hash(data: str, prev_hash: bytes) -> bytes:
    """SHA-256 over the block payload followed by the predecessor hash."""
    return sha256(data.encode('utf-8') + prev_hash)


@dataclass(frozen=True)
class Block:
    """Immutable, mined block."""
    hash: bytes
    data: str
    prev_hash: bytes
    nonce: int
    difficulty: int
    transactions: Tuple[Transaction, ...]

    @property
    def content_hash(self) -> bytes:
        """Digest of data and prev_hash, independent of the nonce."""
        return compute_hash(self.data, self.prev_hash)

    @property
    def is_genesis(self) -> bool:
        return self.prev_hash == GENESIS_PREV_HASH

    def to_dict(self) -> Dict[str, Any]:
        """Convert block to dictionary for serialization."""
        return {
            'hash': self.hash.hex(),
            'data': self.data,
            'prev_hash': self.prev_hash.hex(),
            'nonce': self.nonce,
            'difficulty': self.difficulty,
            'transactions': [tx.to_dict() for tx in self.transactions],
        }


def create_block(
    data: str,
    prev_hash: bytes,
    transactions: Iterable[Transaction],
    pow: ProofOfWork,
    rng: Optional[random.Random] = None,
    start_nonce: Optional[int] = None,
    cancel=None,
    progress: Optional[ProgressCallback] = None
) -> Block:
    """
    Mine and build a block.

    Args:
        data: Block payload
        prev_hash: Hash of the current chain tail (empty for genesis)
        transactions: Ordered transactions to include
        pow: Proof-of-work engine carrying the difficulty
        rng: Source for the starting nonce; a fresh unseeded Random if omitted
        start_nonce: Explicit starting nonce, overrides rng
        cancel: Optional cancel signal passed through to mining
        progress: Optional progress callback passed through to mining

    Returns:
        The mined block

    Raises:
        MiningCancelled: If cancel is set during the search
    """
    if start_nonce is None:
        if rng is None:
            rng = random.Random()
        start_nonce = rng.randrange(MAX_START_NONCE)

    txs = tuple(transactions)
    nonce, block_hash = pow.mine(
        prev_hash, data, start_nonce=start_nonce, cancel=cancel, progress=progress
    )

    return Block(
        hash=block_hash,
        data=data,
        prev_hash=prev_hash,
        nonce=nonce,
        difficulty=pow.difficulty,
        transactions=txs,
    )


def genesis(
    pow: ProofOfWork,
    rng: Optional[random.Random] = None,
    cancel=None,
    progress: Optional[ProgressCallback] = None
) -> Block:
    """Mine the genesis block: no predecessor, one zero-value coinbase."""
    coinbase = Transaction.reward(GENESIS_RECEIVER, 0)
    return create_block(
        GENESIS_DATA, GENESIS_PREV_HASH, [coinbase], pow,
        rng=rng, cancel=cancel, progress=progress
    )
