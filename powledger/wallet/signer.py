"""
Wallet / Signer Module

RSA key pairs and transaction signatures:
- RSA-2048 key generation (public exponent 65537)
- PKCS#1 v1.5 signatures over SHA-256 (deterministic padding)
- Verification against the same canonical transcript used for signing

Every signature covers Transaction.signing_payload(), so any change to
sender, receiver, amount or coinbase flag breaks verification.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from ..blockchain.transaction import Transaction
from ..config import DEFAULT_KEY_SIZE
from ..exceptions import (
    InvalidSignatureError, KeyFormatError, KeyGenerationError, SignatureFormatError,
    SigningError,
)


logger = logging.getLogger(__name__)

PUBLIC_EXPONENT = 65537


def _padding() -> padding.PKCS1v15:
    return padding.PKCS1v15()


@dataclass
class KeyPair:
    """RSA key pair container. private_key is None for public-only pairs."""
    private_key: Optional[rsa.RSAPrivateKey]
    public_key: rsa.RSAPublicKey

    @classmethod
    def generate(cls, key_size: int = DEFAULT_KEY_SIZE) -> 'KeyPair':
        """Generate a new RSA key pair."""
        return generate_key_pair(key_size)

    @property
    def address(self) -> str:
        """Identity string: the public modulus in decimal."""
        return str(self.public_key.public_numbers().n)

    @property
    def key_size(self) -> int:
        return self.public_key.key_size

    def public_pem(self) -> bytes:
        """Get public key as PEM (SubjectPublicKeyInfo)."""
        return self.public_key.public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo
        )

    @classmethod
    def from_public_pem(cls, data: bytes) -> 'KeyPair':
        """Create KeyPair from a PEM public key (public key only)."""
        return cls(None, load_public_key(data))


def generate_key_pair(key_size: int = DEFAULT_KEY_SIZE) -> KeyPair:
    """
    Generate an RSA key pair.

    Args:
        key_size: Modulus size in bits

    Returns:
        The new KeyPair

    Raises:
        KeyGenerationError: If the backend cannot produce a key
    """
    try:
        private_key = rsa.generate_private_key(
            public_exponent=PUBLIC_EXPONENT,
            key_size=key_size,
            backend=default_backend()
        )
    except (ValueError, OSError, UnsupportedAlgorithm) as exc:
        raise KeyGenerationError(f"Could not generate {key_size}-bit RSA key: {exc}") from exc

    return KeyPair(private_key, private_key.public_key())


def load_public_key(data: bytes) -> rsa.RSAPublicKey:
    """
    Load an RSA public key from PEM bytes.

    Raises:
        KeyFormatError: If the data is not a PEM-encoded RSA public key
    """
    try:
        key = serialization.load_pem_public_key(data, backend=default_backend())
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise KeyFormatError(f"Malformed public key: {exc}") from exc

    if not isinstance(key, rsa.RSAPublicKey):
        raise KeyFormatError("Public key is not an RSA key")
    return key


def sign_transaction(transaction: Transaction, private_key: rsa.RSAPrivateKey) -> bytes:
    """
    Sign a transaction's canonical transcript.

    Returns:
        RSA signature bytes (key_size / 8 long)

    Raises:
        SigningError: If the key is missing, not RSA, or signing fails
    """
    if not isinstance(private_key, rsa.RSAPrivateKey):
        raise SigningError("An RSA private key is required for signing")

    try:
        return private_key.sign(
            transaction.signing_payload(),
            _padding(),
            hashes.SHA256()
        )
    except (ValueError, TypeError) as exc:
        raise SigningError(f"Signing failed: {exc}") from exc


def verify_transaction(
    transaction: Transaction,
    public_key: rsa.RSAPublicKey,
    signature: bytes
) -> None:
    """
    Verify a transaction signature.

    Raises:
        KeyFormatError: If public_key is not an RSA public key
        SignatureFormatError: If signature is not bytes
        InvalidSignatureError: If the signature does not match
    """
    if not isinstance(public_key, rsa.RSAPublicKey):
        raise KeyFormatError("An RSA public key is required for verification")
    if not isinstance(signature, (bytes, bytearray)):
        raise SignatureFormatError(
            f"Signature must be bytes, got {type(signature).__name__}"
        )

    try:
        public_key.verify(
            signature,
            transaction.signing_payload(),
            _padding(),
            hashes.SHA256()
        )
    except InvalidSignature as exc:
        logger.warning(
            "Signature check failed for %s -> %s",
            transaction.sender[:16], transaction.receiver[:16]
        )
        raise InvalidSignatureError("Transaction signature is invalid") from exc


def is_valid_signature(
    transaction: Transaction,
    public_key: rsa.RSAPublicKey,
    signature: bytes
) -> bool:
    """Boolean form of verify_transaction(). Malformed keys and signatures still raise."""
    try:
        verify_transaction(transaction, public_key, signature)
        return True
    except InvalidSignatureError:
        return False


class Wallet:
    """
    Holds a key pair and signs transactions with it.

    Example:
        alice = Wallet.generate()
        tx = Transaction(alice.address, bob.address, 5)
        signature = alice.sign(tx)
        alice.verify(tx, signature)
    """

    def __init__(self, key_pair: KeyPair):
        self._key_pair = key_pair

    @classmethod
    def generate(cls, key_size: int = DEFAULT_KEY_SIZE) -> 'Wallet':
        return cls(generate_key_pair(key_size))

    @property
    def key_pair(self) -> KeyPair:
        return self._key_pair

    @property
    def public_key(self) -> rsa.RSAPublicKey:
        return self._key_pair.public_key

    @property
    def address(self) -> str:
        return self._key_pair.address

    def sign(self, transaction: Transaction) -> bytes:
        return sign_transaction(transaction, self._key_pair.private_key)

    def verify(self, transaction: Transaction, signature: bytes) -> None:
        """Verify a signature made by this wallet."""
        verify_transaction(transaction, self._key_pair.public_key, signature)
