"""
Batched JSON-RPC calls.

Several independent calls are packed into one JSON-RPC batch and sent in a
single round trip. Nodes may answer a batch in any order, so each reply is
routed back to its element by request id, never by position.
"""
import logging
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Dict, List, Optional, Sequence

from pydantic import TypeAdapter, ValidationError

from ._rate_limited_log import rate_limited_log
from .exceptions import ElementError
from .transport import RpcTransport

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class BatchElement:
    """
    One call inside a batch.

    Attributes:
        method: RPC method name
        args: Positional parameters
        result_type: Type the reply's ``result`` is decoded into (anything a
            pydantic TypeAdapter accepts)
        result: Decoded result, set by execute_batch on success
        error: Set by execute_batch when this call failed
    """
    method: str
    args: List[Any] = field(default_factory=list)
    result_type: Any = Any
    result: Any = None
    error: Optional[ElementError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@lru_cache(maxsize=128)
def _cached_adapter(result_type: Any) -> TypeAdapter:
    return TypeAdapter(result_type)


def type_adapter(result_type: Any) -> TypeAdapter:
    """Return a TypeAdapter for ``result_type``, cached when the type is hashable."""
    try:
        return _cached_adapter(result_type)
    except TypeError:
        return TypeAdapter(result_type)


def _decode_reply(element: BatchElement, reply: Dict[str, Any]):
    """Return (result, error) for one reply. Never raises."""
    error = reply.get("error")
    if error is not None:
        if isinstance(error, dict):
            return None, ElementError(
                str(error.get("message", "unknown error")),
                code=error.get("code"),
                data=error.get("data"),
                method=element.method
            )
        return None, ElementError(str(error), method=element.method)

    if "result" not in reply:
        return None, ElementError("Reply carries neither result nor error", method=element.method)

    try:
        return type_adapter(element.result_type).validate_python(reply["result"]), None
    except ValidationError as e:
        return None, ElementError(
            f"Could not decode {element.method} result: {e}",
            method=element.method
        )


def execute_batch(
    transport: RpcTransport,
    elements: Sequence[BatchElement],
    timeout: Optional[float] = None
) -> None:
    """
    Execute ``elements`` as one batch and fill in each element's outcome.

    After a normal return every element has either ``result`` set or
    ``error`` set. An element that failed does not affect its siblings.

    Args:
        transport: Transport used for the single round trip
        elements: Calls to make, in caller order
        timeout: Forwarded to the transport as-is

    Raises:
        TransportError: If the round trip itself failed. No element is
            modified in that case.
    """
    if not elements:
        return

    by_id: Dict[Any, BatchElement] = {}
    requests = []
    for element in elements:
        request = transport.new_request(element.method, element.args)
        by_id[request["id"]] = element
        requests.append(request)

    logger.debug("Sending batch of %d requests", len(requests))
    replies = transport.send_batch(requests, timeout=timeout)

    # Elements are only written once every reply has been decoded
    outcomes: Dict[int, Any] = {}
    for reply in replies:
        reply_id = reply.get("id")
        element = by_id.get(reply_id) if isinstance(reply_id, (int, str)) else None
        if element is None:
            rate_limited_log(
                f"Discarding batch reply with unknown id {reply_id!r}",
                logger_instance=logger
            )
            continue
        if id(element) in outcomes:
            logger.warning("Duplicate batch reply for id %r ignored", reply_id)
            continue
        outcomes[id(element)] = _decode_reply(element, reply)

    for element in elements:
        result, error = outcomes.get(
            id(element),
            (None, ElementError("No response received for request", method=element.method))
        )
        element.result = result
        element.error = error

    failed = sum(1 for e in elements if e.error is not None)
    if failed:
        logger.debug("Batch finished with %d of %d elements failed", failed, len(elements))
