"""
In-memory transport for tests and offline development.

Requests are answered by Python callables registered per method, without any
network access. Replies to a batch can be reordered to exercise id-based
correlation, and transport failures can be injected.
"""
import logging
import random
from typing import Any, Callable, Dict, List, Optional

from .exceptions import RpcError, TransportError
from .transport import RpcTransport

# Configure logger
logger = logging.getLogger(__name__)

Handler = Callable[..., Any]

REPLY_ORDER_AS_SENT = "as_sent"
REPLY_ORDER_REVERSED = "reversed"
REPLY_ORDER_SHUFFLED = "shuffled"


class StubTransport(RpcTransport):
    """
    Transport answering requests from registered handlers.

    A handler receives the request's positional params and returns the
    ``result`` value. Raising RpcError from a handler produces an error reply
    for that request only.
    """

    def __init__(
        self,
        handlers: Optional[Dict[str, Handler]] = None,
        reply_order: str = REPLY_ORDER_AS_SENT,
        seed: Optional[int] = None
    ):
        """
        Initialize the stub transport.

        Args:
            handlers: Mapping of method name to handler
            reply_order: ``as_sent``, ``reversed`` or ``shuffled``
            seed: Seed for the shuffled order
        """
        super().__init__()
        self.handlers: Dict[str, Handler] = dict(handlers or {})
        self.reply_order = reply_order
        self._random = random.Random(seed)
        self.fail_with: Optional[TransportError] = None
        self.sent: List[Any] = []
        self.closed = False

    def register(self, method: str, handler: Handler) -> None:
        """Register or replace the handler for ``method``."""
        self.handlers[method] = handler

    @property
    def round_trips(self) -> int:
        """Number of send/send_batch calls made so far."""
        return len(self.sent)

    def send(self, request: Dict[str, Any], timeout: Optional[float] = None) -> Dict[str, Any]:
        self._check_open()
        self.sent.append(request)
        if self.fail_with is not None:
            raise self.fail_with
        return self._answer(request)

    def send_batch(
        self,
        batch: List[Dict[str, Any]],
        timeout: Optional[float] = None
    ) -> List[Dict[str, Any]]:
        self._check_open()
        self.sent.append(list(batch))
        if self.fail_with is not None:
            raise self.fail_with

        replies = [self._answer(request) for request in batch]
        if self.reply_order == REPLY_ORDER_REVERSED:
            replies.reverse()
        elif self.reply_order == REPLY_ORDER_SHUFFLED:
            self._random.shuffle(replies)
        return replies

    def close(self) -> None:
        self.closed = True

    def _check_open(self) -> None:
        if self.closed:
            raise TransportError("Stub transport is closed")

    def _answer(self, request: Dict[str, Any]) -> Dict[str, Any]:
        method = request["method"]
        reply: Dict[str, Any] = {"jsonrpc": "2.0", "id": request["id"]}
        handler = self.handlers.get(method)
        if handler is None:
            logger.debug(f"StubTransport has no handler for {method}")
            reply["error"] = {"code": -32601, "message": f"Method not found: {method}"}
            return reply
        try:
            reply["result"] = handler(*request.get("params", []))
        except RpcError as e:
            reply["error"] = {"code": e.code, "message": e.message}
            if e.data is not None:
                reply["error"]["data"] = e.data
        return reply
