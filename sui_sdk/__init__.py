"""
Sui SDK - typed access to a Sui fullnode's JSON-RPC API.
"""
from .batch import BatchElement, execute_batch
from .client import SuiClient
from .coins import SUI_COIN_TYPE, coin_object_type
from .config import NetworkConfig
from .exceptions import (
    SuiSdkError, TransportError, TransportTimeoutError, RpcError, ElementError,
    MalformedOwner, ObjectFetchError, CoinExtractionError, MissingBalanceField,
    InvalidBalanceEncoding, InvalidKeyError
)
from .models import (
    Coin, ExecuteTransactionRequestType, ObjectInfo, ObjectRead, ObjectReadDetail,
    ObjectRef, ObjectStatus, SignatureScheme, SignedTransaction, TransactionBytes
)
from .owner import (
    AddressOwner, ObjectOwner, SingleOwner, Shared, RawTag, Owner,
    decode_owner, encode_owner
)
from .signer import INTENT_BYTES, Ed25519Signer, Signer, sign_transaction, verify_signed_transaction
from .transport import HttpTransport, RpcTransport
from .version import __version__

__all__ = [
    "SuiClient",
    "NetworkConfig",
    "BatchElement",
    "execute_batch",
    "RpcTransport",
    "HttpTransport",
    "SUI_COIN_TYPE",
    "coin_object_type",
    # Models
    "Coin",
    "ExecuteTransactionRequestType",
    "ObjectInfo",
    "ObjectRead",
    "ObjectReadDetail",
    "ObjectRef",
    "ObjectStatus",
    "SignatureScheme",
    "SignedTransaction",
    "TransactionBytes",
    # Ownership
    "Owner",
    "AddressOwner",
    "ObjectOwner",
    "SingleOwner",
    "Shared",
    "RawTag",
    "decode_owner",
    "encode_owner",
    # Signing
    "INTENT_BYTES",
    "Signer",
    "Ed25519Signer",
    "sign_transaction",
    "verify_signed_transaction",
    # Errors
    "SuiSdkError",
    "TransportError",
    "TransportTimeoutError",
    "RpcError",
    "ElementError",
    "MalformedOwner",
    "ObjectFetchError",
    "CoinExtractionError",
    "MissingBalanceField",
    "InvalidBalanceEncoding",
    "InvalidKeyError",
    "__version__",
]
