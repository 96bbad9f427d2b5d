"""
powledger - single-process proof-of-work ledger.

Modules:
- blockchain: transactions, blocks, proof of work, ledger
- wallet: RSA key pairs and transaction signatures
- core_crypto: SHA-256 digest helpers
"""

__version__ = "0.1.0"
