"""
Transport layer for the Sui JSON-RPC API.

This module provides an abstraction over how JSON-RPC requests reach a node,
so the client and the batch correlator can work the same way over HTTP or
over the in-memory stub used in tests.
"""
import itertools
import logging
import threading
import urllib.parse
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .exceptions import TransportError, TransportTimeoutError

# Configure logger
logger = logging.getLogger(__name__)

JSONRPC_VERSION = "2.0"


class RpcTransport(ABC):
    """
    Abstract base class for JSON-RPC transports.

    A transport owns request id generation and the wire round trip. It never
    interprets ``result`` or ``error`` members; that is left to the caller.
    """

    def __init__(self):
        self._ids = itertools.count(1)
        self._id_lock = threading.Lock()

    def new_request(self, method: str, params: Optional[List[Any]] = None) -> Dict[str, Any]:
        """
        Build a JSON-RPC request object with a fresh id.

        Args:
            method: RPC method name
            params: Positional parameters

        Returns:
            Request dictionary ready to send
        """
        with self._id_lock:
            request_id = next(self._ids)
        return {
            "jsonrpc": JSONRPC_VERSION,
            "id": request_id,
            "method": method,
            "params": list(params or []),
        }

    @abstractmethod
    def send(self, request: Dict[str, Any], timeout: Optional[float] = None) -> Dict[str, Any]:
        """
        Send one request and return the raw reply object.

        Raises:
            TransportError: If the round trip fails
        """
        pass

    @abstractmethod
    def send_batch(
        self,
        batch: List[Dict[str, Any]],
        timeout: Optional[float] = None
    ) -> List[Dict[str, Any]]:
        """
        Send several requests in one round trip.

        Returns:
            Raw reply objects. Each carries the id of one request; the order
            is whatever the node chose.

        Raises:
            TransportError: If the round trip fails. No reply is returned in
                that case.
        """
        pass

    def close(self) -> None:
        """Close any open connections or resources."""
        pass


def validate_rpc_url(url: str, name: str = "rpc_url") -> None:
    """
    Require https:// unless the host is local.

    Raises:
        ValueError: If the URL is insecure
    """
    parsed = urllib.parse.urlparse(url)
    # Check if it's a localhost or 127.0.0.1 address (with or without port)
    host = parsed.hostname or ""
    is_local = host in ("localhost", "127.0.0.1")
    if parsed.scheme != "https" and not is_local:
        raise ValueError(f"{name} must use https:// for security (got: {parsed.scheme}://)")


class HttpTransport(RpcTransport):
    """
    JSON-RPC over HTTP POST.

    Connection errors and 5xx answers are retried by the session adapter;
    anything that still fails surfaces as TransportError.
    """

    def __init__(
        self,
        rpc_url: str,
        timeout: float = 30,
        retry_count: int = 3,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize the HTTP transport

        Args:
            rpc_url: Node JSON-RPC endpoint
            timeout: Default request timeout in seconds
            retry_count: Number of retries for failed HTTP requests
            session: Pre-configured session to use instead of a new one

        Raises:
            ValueError: If the URL doesn't use https (unless it's localhost/127.0.0.1)
        """
        super().__init__()
        validate_rpc_url(rpc_url)
        self.rpc_url = rpc_url
        self.timeout = timeout

        if session is None:
            session = requests.Session()
            retries = Retry(
                total=retry_count,
                backoff_factor=0.5,
                status_forcelist=[500, 502, 503, 504],
                allowed_methods=["POST"],
                raise_on_status=False,
                connect=retry_count,
                read=retry_count,
                other=retry_count
            )
            session.mount("http://", HTTPAdapter(max_retries=retries))
            session.mount("https://", HTTPAdapter(max_retries=retries))
        self.session = session

    def send(self, request: Dict[str, Any], timeout: Optional[float] = None) -> Dict[str, Any]:
        reply = self._post(request, timeout)
        if not isinstance(reply, dict):
            raise TransportError(f"Expected a JSON-RPC reply object, got {type(reply).__name__}")
        return reply

    def send_batch(
        self,
        batch: List[Dict[str, Any]],
        timeout: Optional[float] = None
    ) -> List[Dict[str, Any]]:
        replies = self._post(batch, timeout)
        if isinstance(replies, dict) and "error" in replies:
            # Node rejected the batch as a whole
            raise TransportError(f"Batch request rejected: {replies['error']}")
        if not isinstance(replies, list) or not all(isinstance(r, dict) for r in replies):
            raise TransportError("Expected a JSON array of reply objects for batch request")
        return replies

    def _post(self, payload: Any, timeout: Optional[float]) -> Any:
        methods = payload["method"] if isinstance(payload, dict) else f"batch of {len(payload)}"
        logger.debug("POST %s (%s)", self.rpc_url, methods)
        try:
            response = self.session.post(
                self.rpc_url,
                json=payload,
                timeout=timeout if timeout is not None else self.timeout
            )
            response.raise_for_status()
        except requests.Timeout as e:
            logger.error(f"RPC request timed out: {e}")
            raise TransportTimeoutError(f"RPC request timed out: {str(e)}")
        except requests.RequestException as e:
            logger.error(f"RPC request failed: {e}")
            raise TransportError(f"RPC request failed: {str(e)}")

        content_type = response.headers.get("Content-Type", "")
        if "application/json" not in content_type:
            logger.warning(f"Unexpected Content-Type: {content_type} (expected application/json)")
        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Invalid JSON response from node: {e}")
            raise TransportError(f"Invalid JSON response from node: {str(e)}")

    def close(self) -> None:
        self.session.close()
