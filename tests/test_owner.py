"""
Tests for the ownership codec.
"""
import json

import pytest
from pydantic import ValidationError

from sui_sdk.exceptions import MalformedOwner
from sui_sdk.models import ObjectInfo
from sui_sdk.owner import (
    AddressOwner, ObjectOwner, RawTag, Shared, SingleOwner, decode_owner, encode_owner
)

ADDR = "0x00000000000000000000000000000000000000aa"


class TestDecodeOwner:
    """Decoding of each wire form"""

    @pytest.mark.parametrize("raw, expected", [
        ({"AddressOwner": ADDR}, AddressOwner(ADDR)),
        ({"ObjectOwner": ADDR}, ObjectOwner(ADDR)),
        ({"SingleOwner": ADDR}, SingleOwner(ADDR)),
        ({"Shared": {"initial_shared_version": 7}}, Shared(7)),
        ("Immutable", RawTag("Immutable")),
        ("", RawTag("")),
    ])
    def test_known_forms(self, raw, expected):
        assert decode_owner(raw) == expected

    def test_address_kept_verbatim(self):
        """Short addresses are not padded, so re-encoding gives back the input"""
        assert decode_owner({"AddressOwner": "0x2"}) == AddressOwner("0x2")

    def test_variants_are_distinct(self):
        assert decode_owner({"AddressOwner": ADDR}) != decode_owner({"ObjectOwner": ADDR})

    @pytest.mark.parametrize("raw", [None, 42, 1.5, True, [], ["Immutable"]])
    def test_non_string_non_object_rejected(self, raw):
        with pytest.raises(MalformedOwner, match="string or an object"):
            decode_owner(raw)

    def test_empty_object_rejected(self):
        with pytest.raises(MalformedOwner, match="exactly one"):
            decode_owner({})

    def test_two_known_keys_rejected(self):
        """No first-match-wins"""
        with pytest.raises(MalformedOwner, match="exactly one"):
            decode_owner({"AddressOwner": ADDR, "ObjectOwner": ADDR})

    def test_known_key_with_extra_key_rejected(self):
        with pytest.raises(MalformedOwner):
            decode_owner({"AddressOwner": ADDR, "extra": 1})

    def test_unknown_key_rejected(self):
        with pytest.raises(MalformedOwner, match="Unknown owner kind"):
            decode_owner({"Wrapped": ADDR})

    def test_address_must_be_string(self):
        with pytest.raises(MalformedOwner, match="address string"):
            decode_owner({"SingleOwner": 12})

    @pytest.mark.parametrize("value", [
        7,
        {},
        {"initial_shared_version": "7"},
        {"initial_shared_version": True},
        {"initial_shared_version": 7, "mutable": True},
        {"initial_shared_version": 2**63},
        {"initial_shared_version": -(2**63) - 1},
        {"initial_shared_version": 2**70},
    ])
    def test_bad_shared_rejected(self, value):
        with pytest.raises(MalformedOwner):
            decode_owner({"Shared": value})

    def test_malformed_owner_is_value_error(self):
        """Lets pydantic report it as a ValidationError inside models"""
        assert issubclass(MalformedOwner, ValueError)


class TestEncodeOwner:
    """Encoding is the exact inverse of decoding"""

    def test_raw_tag_encodes_to_string(self):
        assert encode_owner(RawTag("Immutable")) == "Immutable"

    def test_only_one_key_emitted(self):
        assert encode_owner(ObjectOwner(ADDR)) == {"ObjectOwner": ADDR}
        assert encode_owner(Shared(3)) == {"Shared": {"initial_shared_version": 3}}

    def test_non_owner_rejected(self):
        with pytest.raises(MalformedOwner):
            encode_owner("Immutable")

    @pytest.mark.parametrize("raw", [
        '"Immutable"',
        '{"AddressOwner": "0x2"}',
        '{"ObjectOwner": "0x00000000000000000000000000000000000000aa"}',
        '{"SingleOwner": "0xdead"}',
        '{"Shared": {"initial_shared_version": 9223372036854775807}}',
    ])
    def test_wire_round_trip(self, raw):
        value = json.loads(raw)
        assert json.loads(json.dumps(encode_owner(decode_owner(value)))) == value


class TestOwnerInModels:
    """Owner fields inside pydantic models"""

    def _info(self, owner):
        return {
            "objectId": "0x5",
            "version": 1,
            "digest": "d",
            "type": "0x2::coin::Coin<0x2::sui::SUI>",
            "owner": owner,
            "previousTransaction": "tx",
        }

    def test_model_decodes_owner(self):
        info = ObjectInfo.model_validate(self._info({"Shared": {"initial_shared_version": 1}}))
        assert info.owner == Shared(1)

    def test_model_dump_restores_wire_form(self):
        raw = self._info("Immutable")
        info = ObjectInfo.model_validate(raw)
        assert info.model_dump(by_alias=True) == raw

    def test_model_accepts_decoded_owner(self):
        info = ObjectInfo(
            object_id="0x5", version=1, digest="d", type="t", owner=AddressOwner(ADDR)
        )
        assert info.model_dump(by_alias=True, mode="json")["owner"] == {"AddressOwner": ADDR}

    def test_missing_owner_is_none(self):
        raw = self._info(None)
        assert ObjectInfo.model_validate(raw).owner is None

    def test_malformed_owner_fails_validation(self):
        with pytest.raises(ValidationError, match="exactly one"):
            ObjectInfo.model_validate(self._info({}))
