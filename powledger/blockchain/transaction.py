"""
Transaction Module

A transaction records a transfer of value from a sender to a receiver.
Coinbase transactions are synthetic rewards created by the ledger itself.

Signing transcript (fixed, shared by sign and verify):

    b"powledger/tx/v1"
    | len(sender)   (4 bytes, big-endian) | sender   (UTF-8)
    | len(receiver) (4 bytes, big-endian) | receiver (UTF-8)
    | len(amount)   (4 bytes, big-endian) | amount   (ASCII, plain decimal)
    | coinbase      (1 byte, 0 or 1)

The amount is normalized before encoding, so 10, 10.0 and 10.00 produce the
same transcript.
"""

import struct
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Union


COINBASE_SENDER = "Coinbase"
TRANSCRIPT_TAG = b"powledger/tx/v1"

Amount = Union[Decimal, int, float, str]


def to_amount(value: Amount) -> Decimal:
    """
    Coerce a numeric value to a Decimal amount.

    Floats are converted through str() to avoid binary artifacts.

    Raises:
        ValueError: If the value is not a finite, non-negative number
    """
    try:
        if isinstance(value, float):
            amount = Decimal(str(value))
        else:
            amount = Decimal(value)
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise ValueError(f"Invalid amount: {value!r}") from exc

    if not amount.is_finite():
        raise ValueError(f"Amount must be finite, got {value!r}")
    if amount < 0:
        raise ValueError(f"Amount must be non-negative, got {value!r}")
    return amount


def encode_amount(amount: Decimal) -> bytes:
    """Canonical ASCII encoding of an amount ("10.0" -> b"10")."""
    return format(amount.normalize(), 'f').encode('ascii')


@dataclass(frozen=True)
class Transaction:
    """
    Immutable value-transfer record.

    frozen=True means a signed transaction cannot be altered in place;
    a modified copy no longer matches the original signature.
    """
    sender: str
    receiver: str
    amount: Decimal
    coinbase: bool = False

    def __post_init__(self):
        if not isinstance(self.sender, str) or not isinstance(self.receiver, str):
            raise TypeError("Sender and receiver must be strings")
        object.__setattr__(self, 'amount', to_amount(self.amount))
        object.__setattr__(self, 'coinbase', bool(self.coinbase))

    @classmethod
    def reward(cls, receiver: str, amount: Amount) -> 'Transaction':
        """Create a coinbase reward paying amount to receiver."""
        return cls(COINBASE_SENDER, receiver, amount, coinbase=True)

    @property
    def claims_coinbase(self) -> bool:
        """True if the transaction is, or poses as, a coinbase reward."""
        return self.coinbase or self.sender == COINBASE_SENDER

    def signing_payload(self) -> bytes:
        """Build the canonical byte transcript that gets signed."""
        parts = [TRANSCRIPT_TAG]
        for field_bytes in (
            self.sender.encode('utf-8'),
            self.receiver.encode('utf-8'),
            encode_amount(self.amount),
        ):
            parts.append(struct.pack('>I', len(field_bytes)))
            parts.append(field_bytes)
        parts.append(b'\x01' if self.coinbase else b'\x00')
        return b''.join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert transaction to dictionary for serialization."""
        return {
            'sender': self.sender,
            'receiver': self.receiver,
            'amount': str(self.amount),
            'coinbase': self.coinbase,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Transaction':
        """Create transaction from dictionary."""
        return cls(
            sender=data['sender'],
            receiver=data['receiver'],
            amount=data['amount'],
            coinbase=data.get('coinbase', False),
        )
