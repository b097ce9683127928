"""
Coin extraction from fetched object bodies.

Object ``data`` is schema-less JSON, so every level of ``data.fields.balance``
is checked explicitly and a bad shape becomes a CoinExtractionError naming
the object, never an uncaught KeyError or TypeError.
"""
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from .exceptions import CoinExtractionError, InvalidBalanceEncoding, MissingBalanceField
from .models import Coin, ObjectRead, ObjectReadDetail, ObjectStatus

logger = logging.getLogger(__name__)

SUI_COIN_TYPE = "0x2::sui::SUI"
MAX_U64 = 2**64 - 1

_DECIMAL_RE = re.compile(r"[0-9]+")


def coin_object_type(coin_type: str = SUI_COIN_TYPE) -> str:
    """Return the object type of coins of ``coin_type``, e.g. 0x2::coin::Coin<0x2::sui::SUI>."""
    return f"0x2::coin::Coin<{coin_type}>"


def parse_balance(value: Any, object_id: Optional[str] = None) -> int:
    """
    Parse a decimal-string uint64 balance.

    Raises:
        InvalidBalanceEncoding: If the value is not a base-10 string within uint64
    """
    if not isinstance(value, str) or not _DECIMAL_RE.fullmatch(value):
        raise InvalidBalanceEncoding(f"balance {value!r} is not a base-10 integer string", object_id)
    balance = int(value)
    if balance > MAX_U64:
        raise InvalidBalanceEncoding(f"balance {value} overflows uint64", object_id)
    return balance


def _object_id(detail: ObjectReadDetail) -> Optional[str]:
    return detail.reference.object_id if detail.reference else None


def _as_mapping(value: Any, path: str, object_id: Optional[str]) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise CoinExtractionError(
            f"expected {path} to be an object, got {type(value).__name__}", object_id
        )
    return value


def extract_coin(obj: ObjectRead, object_type: str) -> Optional[Coin]:
    """
    Build a Coin from an object read.

    Args:
        obj: Fetched object
        object_type: Full coin object type recorded on the Coin

    Returns:
        The coin, or None when the object no longer exists

    Raises:
        MissingBalanceField: If ``data.fields`` has no balance
        InvalidBalanceEncoding: If the balance can't be parsed
        CoinExtractionError: If ``data`` or ``data.fields`` isn't an object
    """
    if obj.status != ObjectStatus.EXISTS:
        return None

    detail = obj.details
    object_id = _object_id(detail)
    data = _as_mapping(detail.data, "data", object_id)
    fields = _as_mapping(data.get("fields"), "data.fields", object_id)
    if "balance" not in fields:
        raise MissingBalanceField("this coin does not have a balance field", object_id)

    return Coin(
        balance=parse_balance(fields["balance"], object_id),
        type=object_type,
        owner=detail.owner,
        previous_transaction=detail.previous_transaction,
        reference=detail.reference,
    )


@dataclass
class CoinExtraction:
    """Outcome of extracting coins from a batch of object reads."""
    coins: List[Coin] = field(default_factory=list)
    skipped: int = 0
    errors: List[CoinExtractionError] = field(default_factory=list)


def extract_coins(objects: Iterable[ObjectRead], object_type: str) -> CoinExtraction:
    """
    Extract coins from ``objects`` in order.

    Objects that no longer exist are counted in ``skipped``; the listing and
    the fetch are separate calls, so an object may be gone by fetch time.
    Per-object failures are collected in ``errors`` rather than raised.
    """
    outcome = CoinExtraction()
    for obj in objects:
        try:
            coin = extract_coin(obj, object_type)
        except CoinExtractionError as e:
            outcome.errors.append(e)
            continue
        if coin is None:
            outcome.skipped += 1
        else:
            outcome.coins.append(coin)

    if outcome.skipped:
        logger.debug("Skipped %d coin objects that no longer exist", outcome.skipped)
    return outcome
