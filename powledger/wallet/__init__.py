# Wallet Module
"""
RSA wallets for signing and verifying transactions.
"""

from .signer import (
    KeyPair,
    Wallet,
    generate_key_pair,
    load_public_key,
    sign_transaction,
    verify_transaction,
    is_valid_signature,
)

__all__ = [
    'KeyPair',
    'Wallet',
    'generate_key_pair',
    'load_public_key',
    'sign_transaction',
    'verify_transaction',
    'is_valid_signature',
]
