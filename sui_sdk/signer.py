"""
Transaction signing.

The node verifies signatures over an intent message: a fixed three byte
intent prefix followed by the raw transaction bytes. The envelope carries the
scheme flag, the signature and the signer's public key, base64 encoded.
"""
import logging
from typing import Protocol, Union, runtime_checkable

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey, Ed25519PublicKey
)
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

from .exceptions import InvalidKeyError
from .models import SignatureScheme, SignedTransaction, TransactionBytes
from .scalars import b64decode, b64encode

logger = logging.getLogger(__name__)

# See sui-types intent.rs: [IntentScope::TransactionData, IntentVersion::V0, AppId::Sui]
INTENT_BYTES = bytes((0, 0, 0))

ED25519_SEED_LENGTH = 32


@runtime_checkable
class Signer(Protocol):
    """Protocol for transaction signers"""
    scheme: SignatureScheme

    def public_key_bytes(self) -> bytes:
        """Raw public key bytes"""
        ...

    def sign(self, message: bytes) -> bytes:
        """Sign ``message`` and return the raw signature"""
        ...


class Ed25519Signer:
    """Signer backed by an Ed25519 private key"""
    scheme = SignatureScheme.ED25519

    def __init__(self, private_key: Ed25519PrivateKey):
        if not isinstance(private_key, Ed25519PrivateKey):
            raise InvalidKeyError(
                f"Expected an Ed25519 private key, got {type(private_key).__name__}"
            )
        self._private_key = private_key

    @classmethod
    def from_seed(cls, seed: bytes) -> "Ed25519Signer":
        """
        Create a signer from a 32-byte private key seed.

        Raises:
            InvalidKeyError: If the seed has the wrong type or length
        """
        if not isinstance(seed, (bytes, bytearray)) or len(seed) != ED25519_SEED_LENGTH:
            raise InvalidKeyError(f"Ed25519 seed must be {ED25519_SEED_LENGTH} bytes")
        return cls(Ed25519PrivateKey.from_private_bytes(bytes(seed)))

    @classmethod
    def generate(cls) -> "Ed25519Signer":
        return cls(Ed25519PrivateKey.generate())

    def public_key_bytes(self) -> bytes:
        return self._private_key.public_key().public_bytes(Encoding.Raw, PublicFormat.Raw)

    def sign(self, message: bytes) -> bytes:
        return self._private_key.sign(message)


KeyLike = Union[Signer, Ed25519PrivateKey, bytes]


def as_signer(key: KeyLike) -> Signer:
    """
    Coerce a key argument into a Signer.

    Raises:
        InvalidKeyError: If ``key`` can't be used for signing
    """
    if isinstance(key, Ed25519PrivateKey):
        return Ed25519Signer(key)
    if isinstance(key, (bytes, bytearray)):
        return Ed25519Signer.from_seed(key)
    if isinstance(key, Signer):
        return key
    raise InvalidKeyError(f"Unsupported signing key type: {type(key).__name__}")


def intent_message(tx_bytes: bytes) -> bytes:
    """Return the message that is actually signed for ``tx_bytes``."""
    return INTENT_BYTES + tx_bytes


def sign_transaction(tx: TransactionBytes, key: KeyLike) -> SignedTransaction:
    """
    Sign an unsigned transaction.

    Args:
        tx: Transaction returned by one of the transaction building calls
        key: Signer, Ed25519 private key or 32-byte seed

    Returns:
        Envelope ready for execute_transaction

    Raises:
        InvalidKeyError: If the key is unusable or not Ed25519
    """
    signer = as_signer(key)
    if signer.scheme != SignatureScheme.ED25519:
        raise InvalidKeyError(f"Unsupported signature scheme: {signer.scheme}")

    signature = signer.sign(intent_message(tx.raw_tx_bytes()))
    return SignedTransaction(
        tx_bytes=tx.tx_bytes,
        sig_scheme=SignatureScheme.ED25519,
        signature=b64encode(signature),
        pub_key=b64encode(signer.public_key_bytes()),
    )


def verify_signed_transaction(envelope: SignedTransaction) -> bool:
    """
    Check an envelope's signature against the public key it carries.

    Returns:
        True if the signature is valid, False otherwise
    """
    if envelope.sig_scheme != SignatureScheme.ED25519:
        return False
    try:
        public_key = Ed25519PublicKey.from_public_bytes(b64decode(envelope.pub_key))
        public_key.verify(
            b64decode(envelope.signature),
            intent_message(b64decode(envelope.tx_bytes))
        )
    except (InvalidSignature, ValueError) as e:
        logger.debug("Signature verification failed: %s", e)
        return False
    return True
