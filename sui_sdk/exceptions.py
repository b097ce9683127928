"""
Exceptions for the Sui SDK.
"""
from typing import Any, Optional


class SuiSdkError(Exception):
    """Base exception for all SDK errors."""
    pass


class TransportError(SuiSdkError):
    """Raised when the transport fails (connection, HTTP status, bad framing)."""
    pass


class TransportTimeoutError(TransportError):
    """Raised when a transport operation times out."""
    pass


class RpcError(SuiSdkError):
    """Raised when the node answers a call with a JSON-RPC error object."""

    def __init__(self, message: str, code: Optional[int] = None, data: Any = None):
        self.code = code
        self.message = message
        self.data = data
        super().__init__(message if code is None else f"[{code}] {message}")


class ElementError(RpcError):
    """
    Failure of a single element of a batch call.

    Covers an error reply, a reply whose result could not be decoded and a
    request the node never answered. Sibling elements are unaffected.
    """

    def __init__(
        self,
        message: str,
        code: Optional[int] = None,
        data: Any = None,
        method: Optional[str] = None
    ):
        self.method = method
        super().__init__(message, code=code, data=data)


class MalformedOwner(SuiSdkError, ValueError):
    """Raised when an ownership value has an unrecognised JSON shape."""
    pass


class ObjectFetchError(SuiSdkError):
    """
    Raised when the object fetch pipeline fails.

    ``phase`` is one of ``listing``, ``fetch`` or ``extraction``.
    """

    def __init__(self, message: str, phase: str):
        self.phase = phase
        super().__init__(f"{phase} failed: {message}")


class CoinExtractionError(ObjectFetchError):
    """Raised when a fetched coin object is not shaped like a coin."""

    def __init__(self, message: str, object_id: Optional[str] = None):
        self.object_id = object_id
        if object_id:
            message = f"{message} (object {object_id})"
        super().__init__(message, phase="extraction")


class MissingBalanceField(CoinExtractionError):
    """Raised when a coin object has no ``data.fields.balance``."""
    pass


class InvalidBalanceEncoding(CoinExtractionError):
    """Raised when ``data.fields.balance`` is not a base-10 uint64 string."""
    pass


class InvalidKeyError(SuiSdkError, ValueError):
    """Raised when a signing key is missing or malformed."""
    pass
