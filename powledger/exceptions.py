"""
Exception hierarchy for powledger.

Every error raised by the ledger, the proof-of-work engine and the wallet
derives from LedgerError, so callers can catch the whole family at once
or pick out the specific failure they care about.
"""


class LedgerError(Exception):
    """Base exception for powledger."""


class ConfigError(LedgerError, ValueError):
    """Configuration value is missing or out of range."""


class KeyGenerationError(LedgerError):
    """Key pair could not be generated."""


class KeyFormatError(LedgerError):
    """Key has the wrong type or could not be decoded."""


class SigningError(LedgerError):
    """Transaction could not be signed."""


class InvalidSignatureError(LedgerError):
    """Signature does not match the transaction and public key."""


class ValidationError(LedgerError):
    """Block or chain failed validation."""


class MiningCancelled(LedgerError):
    """Nonce search was stopped through its cancel signal."""


class SignatureFormatError(LedgerError):
    """Signature argument is not a byte string."""
