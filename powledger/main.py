"""
powledger - Main Entry Point

Walks through the ledger end to end: two wallets, one signed transfer,
one mined block, then prints every block with its proof-of-work status.
"""

import logging
import sys
from typing import Optional, TextIO

from .blockchain.ledger import Ledger
from .blockchain.transaction import Transaction
from .config import LedgerConfig
from .exceptions import LedgerError
from .wallet.signer import Wallet


def print_header(title, out=None):
    """Print a formatted section header"""
    out = out or sys.stdout
    print("\n" + "=" * 60, file=out)
    print(f"  {title}", file=out)
    print("=" * 60, file=out)


def print_ledger(ledger: Ledger, out: Optional[TextIO] = None) -> None:
    """Print every block with its transactions."""
    out = out or sys.stdout
    pow = ledger.proof_of_work

    for block in ledger.blocks:
        print(f"Previous hash: {block.prev_hash.hex()}", file=out)
        print(f"Data in Block: {block.data}", file=out)
        print(f"Hash of block: {block.hash.hex()}", file=out)
        print(f"IsValidPow: {str(pow.validate(block)).lower()}", file=out)
        print(file=out)

        print("Transactions:", file=out)
        for tx in block.transactions:
            print(f"Sender: {tx.sender}", file=out)
            print(f"Receiver: {tx.receiver}", file=out)
            print(f"Amount: {tx.amount:f}", file=out)
            print(f"Coinbase: {str(tx.coinbase).lower()}", file=out)
            print(file=out)
        print(file=out)


def run(config: Optional[LedgerConfig] = None, out: Optional[TextIO] = None) -> int:
    """
    Run the demo.

    Returns:
        Process exit status (0 on success)
    """
    out = out or sys.stdout
    config = config or LedgerConfig.from_env()

    print_header(f"powledger (difficulty={config.difficulty})", out)
    ledger = Ledger(config)

    try:
        alice = Wallet.generate(config.key_size)
        print("Alice's wallet created successfully", file=out)
        bob = Wallet.generate(config.key_size)
        print("Bob's wallet created successfully", file=out)

        tx = Transaction(alice.address, bob.address, 5.0)
        print("Alice to Bob transaction created successfully", file=out)

        signature = alice.sign(tx)
        alice.verify(tx, signature)
        print("Transaction verified successfully", file=out)

        def report(nonce, digest):
            out.write(f"\r{digest.hex()}")

        ledger.add_block("Block 1", "Alice", [tx], progress=report)
        print(file=out)
    except LedgerError as exc:
        print(f"Error: {exc}", file=out)
        return 1

    print_header("Chain", out)
    print_ledger(ledger, out)
    return 0


def main():
    """Main entry point for powledger."""
    logging.basicConfig(
        format='%(asctime)s %(levelname)s [%(name)s] %(message)s',
        level=logging.WARNING
    )
    sys.exit(run())


if __name__ == "__main__":
    main()
