"""
Tests for the data models and scalar helpers.
"""
import pytest
from pydantic import ValidationError

from sui_sdk.models import (
    Coin, ObjectInfo, ObjectRead, ObjectReadDetail, ObjectRef, ObjectStatus, TransactionBytes
)
from sui_sdk.owner import AddressOwner, RawTag, Shared
from sui_sdk.scalars import b64decode, b64encode, normalize_address, short_address

from conftest import SUI_COIN_OBJECT, TEST_ADDRESS, TEST_TX_BYTES, object_info, object_read, tx_bytes_result


class TestObjectInfo:
    def test_from_wire(self):
        info = ObjectInfo.model_validate(object_info("0x1", owner={"Shared": {"initial_shared_version": 2}}))

        assert info.object_id == "0x1"
        assert info.type == SUI_COIN_OBJECT
        assert info.owner == Shared(2)
        assert info.previous_transaction == "tx-0x1"

    def test_owner_serialized_back_to_wire_form(self):
        info = ObjectInfo.model_validate(object_info("0x1"))
        dumped = info.model_dump(by_alias=True)

        assert dumped["owner"] == {"AddressOwner": TEST_ADDRESS}
        assert dumped["objectId"] == "0x1"

    def test_malformed_owner_rejected(self):
        with pytest.raises(ValidationError, match="owner"):
            ObjectInfo.model_validate(object_info("0x1", owner={"AddressOwner": "0x1", "Shared": 1}))

    def test_frozen(self):
        info = ObjectInfo.model_validate(object_info("0x1"))
        with pytest.raises(ValidationError):
            info.version = 9


class TestObjectRead:
    def test_exists(self):
        read = ObjectRead.model_validate(object_read("0x1", {"balance": "3"}))

        assert read.exists
        assert isinstance(read.details, ObjectReadDetail)
        assert read.details.owner == AddressOwner(TEST_ADDRESS)
        assert read.details.reference == ObjectRef(digest="digest-0x1", object_id="0x1", version=3)

    def test_not_exists_keeps_raw_details(self):
        read = ObjectRead.model_validate(object_read("0x1", status="NotExists"))

        assert read.status == ObjectStatus.NOT_EXISTS
        assert not read.exists
        assert read.details == "0x1"

    def test_exists_without_body_rejected(self):
        with pytest.raises(ValidationError, match="must carry object details"):
            ObjectRead.model_validate({"status": "Exists", "details": "0x1"})

    def test_non_object_data_kept_for_extraction(self):
        raw = object_read("0x1")
        raw["details"]["data"] = None

        read = ObjectRead.model_validate(raw)

        assert isinstance(read.details, ObjectReadDetail)
        assert read.details.data is None

    def test_unknown_status_rejected(self):
        with pytest.raises(ValidationError):
            ObjectRead.model_validate({"status": "Wrapped", "details": "0x1"})

    def test_immutable_owner(self):
        read = ObjectRead.model_validate(object_read("0x1", owner="Immutable"))
        assert read.details.owner == RawTag("Immutable")


class TestCoin:
    @pytest.mark.parametrize("balance", [-1, 2**64])
    def test_balance_range(self, balance):
        with pytest.raises(ValidationError):
            Coin(balance=balance, type=SUI_COIN_OBJECT)

    def test_max_balance(self):
        assert Coin(balance=2**64 - 1, type=SUI_COIN_OBJECT).balance == 2**64 - 1


class TestTransactionBytes:
    def test_from_wire(self):
        tx = TransactionBytes.model_validate(tx_bytes_result())

        assert tx.gas.object_id == "0x5"
        assert tx.input_objects[0]["ImmOrOwnedMoveObject"]["objectId"] == "0x6"
        assert tx.raw_tx_bytes() == b"TransactionData::TransferSui"

    @pytest.mark.parametrize("tx_bytes", ["***", "YWJj!", "YWJjZA="])
    def test_invalid_base64(self, tx_bytes):
        with pytest.raises(ValidationError, match="Invalid base64"):
            TransactionBytes.model_validate(tx_bytes_result(tx_bytes))

    def test_input_objects_optional(self):
        raw = tx_bytes_result()
        del raw["inputObjects"]
        assert TransactionBytes.model_validate(raw).input_objects == []


class TestScalars:
    @pytest.mark.parametrize("value, expected", [
        ("0x2", "0x" + "0" * 39 + "2"),
        ("2", "0x" + "0" * 39 + "2"),
        ("0X1AA", "0x" + "0" * 37 + "1aa"),
        (TEST_ADDRESS, TEST_ADDRESS),
    ])
    def test_normalize_address(self, value, expected):
        assert normalize_address(value) == expected

    @pytest.mark.parametrize("value", ["0xzz", "0x" + "1" * 42, 5, "0x0102  ", " 0102", "01 02", "0x-1"])
    def test_normalize_address_invalid(self, value):
        with pytest.raises(ValueError):
            normalize_address(value)

    def test_short_address(self):
        assert short_address("0x" + "0" * 39 + "2") == "0x2"
        assert short_address("0x0") == "0x0"

    def test_base64(self):
        assert b64encode(b"TransactionData::TransferSui") == TEST_TX_BYTES
        assert b64decode(TEST_TX_BYTES) == b"TransactionData::TransferSui"
        with pytest.raises(ValueError):
            b64decode("abc$")
