"""
Ownership codec.

The node describes who controls an object with a value that is either a bare
string (older forms such as ``"Immutable"``) or an object holding exactly one
of ``AddressOwner``, ``ObjectOwner``, ``SingleOwner`` or ``Shared``. This
module maps both eras onto one closed set of variants and back again without
losing which form was seen.
"""
from dataclasses import dataclass
from typing import Annotated, Any, Dict, Union

from pydantic import PlainSerializer, PlainValidator

from .exceptions import MalformedOwner


@dataclass(frozen=True)
class AddressOwner:
    """Object owned by an account address."""
    address: str


@dataclass(frozen=True)
class ObjectOwner:
    """Object owned by another object."""
    address: str


@dataclass(frozen=True)
class SingleOwner:
    """Object with a single owner."""
    address: str


@dataclass(frozen=True)
class Shared:
    """Shared object, with the version at which it became shared."""
    initial_shared_version: int


@dataclass(frozen=True)
class RawTag:
    """Plain string owner such as ``"Immutable"``, kept verbatim."""
    tag: str


Owner = Union[AddressOwner, ObjectOwner, SingleOwner, Shared, RawTag]

_ADDRESS_VARIANTS = {
    "AddressOwner": AddressOwner,
    "ObjectOwner": ObjectOwner,
    "SingleOwner": SingleOwner,
}
SHARED_KEY = "Shared"
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
KNOWN_KEYS = frozenset(_ADDRESS_VARIANTS) | {SHARED_KEY}


def decode_owner(raw: Any) -> Owner:
    """
    Decode an ownership JSON value.

    Args:
        raw: Parsed JSON value (``str`` or ``dict``)

    Returns:
        The matching Owner variant

    Raises:
        MalformedOwner: If the value is neither a string nor an object with
            exactly one recognised key
    """
    if isinstance(raw, str):
        return RawTag(raw)
    if not isinstance(raw, dict):
        raise MalformedOwner(f"Owner must be a string or an object, got {type(raw).__name__}")

    if len(raw) != 1:
        raise MalformedOwner(
            f"Owner object must have exactly one of {sorted(KNOWN_KEYS)}, got keys {sorted(raw)}"
        )
    (key, value), = raw.items()

    if key in _ADDRESS_VARIANTS:
        if not isinstance(value, str):
            raise MalformedOwner(f"{key} must hold an address string, got {type(value).__name__}")
        return _ADDRESS_VARIANTS[key](value)

    if key == SHARED_KEY:
        if not isinstance(value, dict) or set(value) != {"initial_shared_version"}:
            raise MalformedOwner(f"Shared must be {{'initial_shared_version': <int>}}, got {value!r}")
        version = value["initial_shared_version"]
        # bool is an int subclass in Python but never a version
        if isinstance(version, bool) or not isinstance(version, int):
            raise MalformedOwner(f"initial_shared_version must be an integer, got {version!r}")
        if not INT64_MIN <= version <= INT64_MAX:
            raise MalformedOwner(f"initial_shared_version {version} is out of int64 range")
        return Shared(version)

    raise MalformedOwner(f"Unknown owner kind {key!r}")


def encode_owner(owner: Owner) -> Union[str, Dict[str, Any]]:
    """
    Encode an Owner back to its JSON value. Exact inverse of decode_owner.

    Raises:
        MalformedOwner: If ``owner`` is not an Owner variant
    """
    if isinstance(owner, RawTag):
        return owner.tag
    if isinstance(owner, Shared):
        return {SHARED_KEY: {"initial_shared_version": owner.initial_shared_version}}
    for key, variant in _ADDRESS_VARIANTS.items():
        if type(owner) is variant:
            return {key: owner.address}
    raise MalformedOwner(f"Not an owner variant: {owner!r}")


def _validate_owner(value: Any) -> Owner:
    if isinstance(value, (AddressOwner, ObjectOwner, SingleOwner, Shared, RawTag)):
        return value
    return decode_owner(value)


# Model field type: decodes wire values in place and dumps back to wire form
OwnerField = Annotated[
    Owner,
    PlainValidator(_validate_owner),
    PlainSerializer(encode_owner, when_used="always"),
]
