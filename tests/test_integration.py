"""
Integration tests for powledger.

Tests the full flow:
- Wallets sign a transfer
- The transfer is mined into a block
- The demo driver renders the chain
"""

import io
from unittest.mock import patch

from powledger.blockchain.ledger import initialize
from powledger.blockchain.transaction import Transaction
from powledger.config import LedgerConfig
from powledger.exceptions import KeyGenerationError
from powledger.main import run, print_ledger
from powledger.wallet import Wallet, is_valid_signature


class TestEndToEnd:
    """Signed transfer through to an appended block."""

    def test_signed_transfer_mined(self):
        ledger = initialize(LedgerConfig(difficulty=6, seed=5))
        alice = Wallet.generate()
        bob = Wallet.generate()

        tx = Transaction(alice.address, bob.address, 5.0)
        signature = alice.sign(tx)
        alice.verify(tx, signature)

        block = ledger.add_block("Block 1", "Alice", [tx])

        assert ledger.length == 2
        assert block.prev_hash == ledger.blocks[0].hash
        assert block.transactions[0] == Transaction("Coinbase", "Alice", 10.0, coinbase=True)
        assert block.transactions[1] == tx
        assert is_valid_signature(block.transactions[1], alice.public_key, signature)
        assert ledger.validate_chain()

    def test_print_ledger(self):
        ledger = initialize(LedgerConfig(difficulty=4, seed=5))
        ledger.add_block("B1", "Alice")
        out = io.StringIO()

        print_ledger(ledger, out)

        text = out.getvalue()
        assert text.count("IsValidPow: true") == 2
        assert "Data in Block: Genesis" in text
        assert "Receiver: Alice" in text
        assert "Amount: 10.0" in text
        assert "Coinbase: true" in text


class TestDemo:
    """Tests for the demo driver."""

    def test_run(self):
        out = io.StringIO()
        status = run(LedgerConfig(difficulty=4, seed=0), out)

        text = out.getvalue()
        assert status == 0
        assert "Alice's wallet created successfully" in text
        assert "Transaction verified successfully" in text
        assert "Data in Block: Block 1" in text
        assert text.count("IsValidPow: true") == 2

    def test_run_reports_wallet_failure(self):
        out = io.StringIO()
        with patch("powledger.main.Wallet.generate",
                   side_effect=KeyGenerationError("no entropy")):
            status = run(LedgerConfig(difficulty=4, seed=0), out)

        assert status == 1
        assert "Error: no entropy" in out.getvalue()
