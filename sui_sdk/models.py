"""
Data models for the Sui SDK.
"""
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .owner import OwnerField
from .scalars import b64decode


class ObjectStatus(str, Enum):
    """Lookup status of an object read."""
    EXISTS = "Exists"
    NOT_EXISTS = "NotExists"
    DELETED = "Deleted"


class SignatureScheme(str, Enum):
    """Signature scheme flags understood by the node."""
    ED25519 = "ED25519"
    SECP256K1 = "Secp256k1"


class ExecuteTransactionRequestType(str, Enum):
    """How long sui_executeTransaction waits before returning."""
    IMMEDIATE_RETURN = "ImmediateReturn"
    WAIT_FOR_TX_CERT = "WaitForTxCert"
    WAIT_FOR_EFFECTS_CERT = "WaitForEffectsCert"
    WAIT_FOR_LOCAL_EXECUTION = "WaitForLocalExecution"


class ObjectRef(BaseModel):
    """Reference to a specific version of an object"""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    digest: str
    object_id: str = Field(..., alias="objectId")
    version: int


class ObjectInfo(BaseModel):
    """Summary of an owned object as returned by the listing call"""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    object_id: str = Field(..., alias="objectId")
    version: int
    digest: str
    type: str
    owner: Optional[OwnerField] = None
    previous_transaction: str = Field("", alias="previousTransaction")


class ObjectReadDetail(BaseModel):
    """Body of an object that exists"""
    model_config = ConfigDict(populate_by_name=True)

    data: Any
    owner: Optional[OwnerField] = None
    previous_transaction: str = Field("", alias="previousTransaction")
    storage_rebate: int = Field(0, alias="storageRebate")
    reference: Optional[ObjectRef] = None


class ObjectRead(BaseModel):
    """
    Result of sui_getObject.

    ``details`` is an ObjectReadDetail when the object exists. For deleted or
    missing objects the node sends back the reference or the bare object id,
    which is kept as received.
    """
    model_config = ConfigDict(populate_by_name=True)

    status: ObjectStatus
    details: Union[ObjectReadDetail, ObjectRef, str, None] = None

    @model_validator(mode="after")
    def _check_details(self) -> "ObjectRead":
        if self.status == ObjectStatus.EXISTS and not isinstance(self.details, ObjectReadDetail):
            raise ValueError("Object with status Exists must carry object details")
        return self

    @property
    def exists(self) -> bool:
        return self.status == ObjectStatus.EXISTS


class Coin(BaseModel):
    """Coin object with its parsed balance"""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    balance: int = Field(..., ge=0, le=2**64 - 1)
    type: str
    owner: Optional[OwnerField] = None
    previous_transaction: str = Field("", alias="previousTransaction")
    reference: Optional[ObjectRef] = None


class TransactionBytes(BaseModel):
    """Unsigned transaction produced by the transaction building calls"""
    model_config = ConfigDict(populate_by_name=True)

    gas: ObjectRef
    input_objects: List[Dict[str, Any]] = Field(default_factory=list, alias="inputObjects")
    tx_bytes: str = Field(..., alias="txBytes")

    @field_validator("tx_bytes")
    @classmethod
    def _check_tx_bytes(cls, v: str) -> str:
        b64decode(v)
        return v

    def raw_tx_bytes(self) -> bytes:
        """Decode the base64 transaction data."""
        return b64decode(self.tx_bytes)

    def sign_with(self, key: Any) -> "SignedTransaction":
        """Sign this transaction. See sui_sdk.signer.sign_transaction."""
        from .signer import sign_transaction
        return sign_transaction(self, key)


class SignedTransaction(BaseModel):
    """Signed transaction envelope, ready for sui_executeTransaction"""
    tx_bytes: str
    sig_scheme: SignatureScheme = SignatureScheme.ED25519
    signature: str
    pub_key: str


class TransactionEffects(BaseModel):
    """Effects of a transaction; fields are passed through untouched"""
    model_config = ConfigDict(extra="allow")


class TransactionResponse(BaseModel):
    """Result of sui_getTransaction; fields are passed through untouched"""
    model_config = ConfigDict(extra="allow")


class ExecuteTransactionResponse(BaseModel):
    """Result of sui_executeTransaction; fields are passed through untouched"""
    model_config = ConfigDict(extra="allow")
