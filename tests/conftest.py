"""
Pytest fixtures for the Sui SDK tests.
"""
import pytest

from sui_sdk import _rate_limited_log
from sui_sdk.client import SuiClient
from sui_sdk.config import NetworkConfig
from sui_sdk.stub_transport import StubTransport

# Constants for testing
TEST_RPC_URL = "https://rpc.example.com"
TEST_ADDRESS = "0xabc0000000000000000000000000000000000001"
TEST_RECIPIENT = "0x0000000000000000000000000000000000000def"
SUI_COIN_OBJECT = "0x2::coin::Coin<0x2::sui::SUI>"
# RFC 8032 test vector 1
TEST_SEED = bytes.fromhex("9d61b19deffd5a60ba844af492ec2cc44449c5697b326919703bac031cae7f60")
TEST_PUBKEY = bytes.fromhex("d75a980182b10ab7d54bfed3c964073a0ee172f3daa62325af021a68f707511a")
TEST_TX_BYTES = "VHJhbnNhY3Rpb25EYXRhOjpUcmFuc2ZlclN1aQ=="


def object_info(object_id: str, type_: str = SUI_COIN_OBJECT, owner=None) -> dict:
    """Wire form of an ObjectInfo"""
    return {
        "objectId": object_id,
        "version": 3,
        "digest": f"digest-{object_id}",
        "type": type_,
        "owner": owner if owner is not None else {"AddressOwner": TEST_ADDRESS},
        "previousTransaction": f"tx-{object_id}",
    }


def object_read(object_id: str, fields=None, status: str = "Exists", owner=None) -> dict:
    """Wire form of an ObjectRead"""
    if status != "Exists":
        return {"status": status, "details": object_id}
    data = {"type": SUI_COIN_OBJECT, "fields": fields if fields is not None else {"balance": "0"}}
    return {
        "status": "Exists",
        "details": {
            "data": data,
            "owner": owner if owner is not None else {"AddressOwner": TEST_ADDRESS},
            "previousTransaction": f"tx-{object_id}",
            "storageRebate": 15,
            "reference": {"digest": f"digest-{object_id}", "objectId": object_id, "version": 3},
        },
    }


def tx_bytes_result(tx_bytes: str = TEST_TX_BYTES) -> dict:
    """Wire form of a TransactionBytes result"""
    return {
        "gas": {"digest": "gas-digest", "objectId": "0x5", "version": 1},
        "inputObjects": [{"ImmOrOwnedMoveObject": {"objectId": "0x6", "version": 2, "digest": "d"}}],
        "txBytes": tx_bytes,
    }


@pytest.fixture(autouse=True)
def _reset_caches(monkeypatch):
    """Keep env, network presets and log suppression from leaking between tests"""
    for name in ("SUI_RPC_URL", "SUI_NETWORK", "SUI_RPC_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
    NetworkConfig._networks_cache = None
    _rate_limited_log.reset()
    yield
    NetworkConfig._networks_cache = None
    _rate_limited_log.reset()


@pytest.fixture
def stub_transport():
    """In-memory transport with no handlers registered"""
    return StubTransport()


@pytest.fixture
def stub_client(stub_transport):
    """Client wired to the stub transport"""
    return SuiClient(transport=stub_transport)


@pytest.fixture
def http_client():
    """Client talking to TEST_RPC_URL, to be used with requests_mock"""
    client = SuiClient(rpc_url=TEST_RPC_URL, timeout=5)
    yield client
    client.close()
