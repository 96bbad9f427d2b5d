"""
Blockchain Ledger Module

An append-only chain of proof-of-work blocks:
- Genesis block created on initialization
- Each new block carries a coinbase reward followed by caller transactions
- prev_hash linkage to the chain tail
- Full chain validation

A lock guards the block list but is never held while mining. add_block()
re-checks the tail before appending and mines again if it moved, so
concurrent callers still produce a linear chain and progress callbacks may
read the ledger.
"""

import json
import logging
import random
import threading
from typing import Any, Dict, Iterable, List, Optional

from ..config import LedgerConfig
from ..exceptions import ValidationError
from .block import (
    Block, create_block, genesis,
    GENESIS_DATA, GENESIS_PREV_HASH, GENESIS_RECEIVER, MAX_START_NONCE,
)
from .proof import ProofOfWork, ProgressCallback
from .transaction import Transaction


logger = logging.getLogger(__name__)


# ============================================================================
# Ledger
# ============================================================================

class Ledger:
    """
    A single-writer proof-of-work ledger.

    Features:
    - Configurable difficulty and block reward
    - Reproducible start nonces when config.seed is set
    - Coinbase rewards synthesized only by the ledger
    - Full chain validation
    """

    def __init__(self, config: Optional[LedgerConfig] = None):
        """
        Initialize a new ledger containing only the genesis block.

        Args:
            config: Ledger configuration (defaults to LedgerConfig())
        """
        self._config = config or LedgerConfig.default()
        self._pow = ProofOfWork(self._config.difficulty, self._config.progress_interval)
        self._rng = random.Random(self._config.seed)
        self._lock = threading.Lock()
        self._blocks: List[Block] = [genesis(self._pow, rng=self._rng)]
        logger.info(
            "Ledger initialized at difficulty %d, genesis %s",
            self._pow.difficulty, self._blocks[0].hash.hex()
        )

    @property
    def config(self) -> LedgerConfig:
        return self._config

    @property
    def proof_of_work(self) -> ProofOfWork:
        return self._pow

    @property
    def blocks(self) -> List[Block]:
        """Get the blocks (read-only view)."""
        with self._lock:
            return list(self._blocks)

    @property
    def length(self) -> int:
        with self._lock:
            return len(self._blocks)

    @property
    def last_block(self) -> Block:
        with self._lock:
            return self._blocks[-1]

    @property
    def difficulty(self) -> int:
        return self._pow.difficulty

    def __len__(self) -> int:
        return self.length

    def add_block(
        self,
        data: str,
        reward_recipient: str,
        transactions: Iterable[Transaction] = (),
        cancel=None,
        progress: Optional[ProgressCallback] = None
    ) -> Block:
        """
        Mine and append a block rewarding reward_recipient.

        A coinbase transaction for config.block_reward is placed first,
        followed by the caller's transactions in order. Mining runs without
        the lock held; if another append moved the tail meanwhile, the
        block is mined again on top of the new tail.

        Args:
            data: Block payload
            reward_recipient: Identity credited with the block reward
            transactions: Caller-supplied transactions
            cancel: Optional cancel signal for the nonce search
            progress: Optional progress callback for the nonce search

        Returns:
            The appended block

        Raises:
            ValidationError: If a caller transaction claims coinbase status
            MiningCancelled: If cancel is set during the search
        """
        txs = list(transactions)
        for tx in txs:
            if tx.claims_coinbase:
                logger.warning("Rejected forged coinbase transaction to %s", tx.receiver)
                raise ValidationError(
                    "Coinbase transactions are created by the ledger only"
                )

        coinbase = Transaction.reward(reward_recipient, self._config.block_reward)

        while True:
            with self._lock:
                prev_block = self._blocks[-1]
                start_nonce = self._rng.randrange(MAX_START_NONCE)

            block = create_block(
                data, prev_block.hash, [coinbase] + txs, self._pow,
                start_nonce=start_nonce, cancel=cancel, progress=progress
            )

            with self._lock:
                if self._blocks[-1] is prev_block:
                    self._blocks.append(block)
                    height = len(self._blocks) - 1
                    break

            logger.debug("Tail moved while mining %r, mining again", data)

        logger.info(
            "Appended block #%d %r (nonce %d, %d transactions)",
            height, data, block.nonce, len(block.transactions)
        )
        return block

    def validate_block(self, block: Block, prev_block: Optional[Block]) -> None:
        """
        Validate a block against its predecessor (None for genesis).

        Raises:
            ValidationError: If the block is invalid
        """
        if prev_block is None:
            if block.prev_hash != GENESIS_PREV_HASH:
                raise ValidationError("Genesis block must have empty prev_hash")
            expected = (Transaction.reward(GENESIS_RECEIVER, 0),)
            if block.data != GENESIS_DATA or block.transactions != expected:
                raise ValidationError("Invalid genesis block contents")
        else:
            if block.prev_hash != prev_block.hash:
                raise ValidationError("Previous hash mismatch")
            if not block.transactions or not block.transactions[0].coinbase:
                raise ValidationError("Block must start with a coinbase transaction")
            if block.transactions[0].amount != self._config.block_reward:
                raise ValidationError("Coinbase amount does not match block reward")
            if any(tx.claims_coinbase for tx in block.transactions[1:]):
                raise ValidationError("Only the first transaction may be a coinbase")

        if not self._pow.validate(block):
            raise ValidationError("Block does not satisfy proof of work")

    def validate_chain(self) -> bool:
        """
        Validate the entire chain.

        Returns:
            True if chain is valid

        Raises:
            ValidationError: If chain is invalid
        """
        blocks = self.blocks
        if not blocks:
            raise ValidationError("Chain is empty")

        prev_block = None
        for index, block in enumerate(blocks):
            try:
                self.validate_block(block, prev_block)
            except ValidationError as exc:
                raise ValidationError(f"Block #{index}: {exc}") from exc
            prev_block = block

        return True

    def to_dict(self) -> Dict[str, Any]:
        return {
            'difficulty': self._pow.difficulty,
            'block_reward': str(self._config.block_reward),
            'blocks': [block.to_dict() for block in self.blocks],
        }

    def to_json(self) -> str:
        """Export the chain as JSON."""
        return json.dumps(self.to_dict(), indent=2)


# ============================================================================
# Convenience Functions
# ============================================================================

def initialize(config: Optional[LedgerConfig] = None) -> Ledger:
    """Create a new ledger holding only the genesis block."""
    return Ledger(config)
