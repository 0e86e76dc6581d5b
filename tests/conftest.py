"""
Pytest fixtures for the Squid SDK tests.
"""
import copy
from unittest.mock import MagicMock

import pytest
from web3.providers.rpc import HTTPProvider

from squid_sdk._rate_limited_log import reset_rate_limited_log
from tests.test_helpers import SDK_INFO, TEST_BASE_URL, TEST_SENDER, create_test_client


@pytest.fixture(autouse=True)
def rpc_calls(monkeypatch):
    """
    Stub every Web3 HTTP call so no DNS / network traffic is triggered.

    Returns the list of JSON-RPC methods requested during the test.
    """
    calls = []

    def _dummy(self, method, params=None, *_args, **_kwargs):
        calls.append(method)
        if method == "eth_chainId":
            return {"jsonrpc": "2.0", "id": 1, "result": "0x1"}
        if method == "eth_gasPrice":
            return {"jsonrpc": "2.0", "id": 1, "result": "0x3b9aca00"}  # 1 gwei
        return {"jsonrpc": "2.0", "id": 1, "result": "0x0"}

    monkeypatch.setattr(HTTPProvider, "make_request", _dummy, raising=True)
    return calls


@pytest.fixture(autouse=True)
def _reset_log_cache():
    reset_rate_limited_log()
    yield
    reset_rate_limited_log()


@pytest.fixture
def sdk_info():
    return copy.deepcopy(SDK_INFO)


@pytest.fixture
def squid():
    """An uninitialized client"""
    client = create_test_client()
    yield client
    client.close()


@pytest.fixture
def sdk_info_route(requests_mock, sdk_info):
    return requests_mock.get(f"{TEST_BASE_URL}v1/sdk-info", json=sdk_info, status_code=200)


@pytest.fixture
def ready_squid(squid, sdk_info_route):
    """A client that has loaded the test metadata"""
    squid.init()
    return squid


@pytest.fixture
def mock_signer():
    """EVM signer returning a fixed raw transaction"""
    signer = MagicMock()
    signer.address = TEST_SENDER
    signed = MagicMock()
    signed.raw_transaction = b"\x01\x02\x03"
    signer.sign_transaction.return_value = signed
    return signer


@pytest.fixture
def mock_w3():
    """
    Web3 stand-in modelling the calls handlers make.
    """
    w3 = MagicMock()
    w3.eth.chain_id = 1
    w3.eth.gas_price = 1000000000
    w3.eth.get_transaction_count.return_value = 12
    w3.eth.estimate_gas.return_value = 100000
    w3.eth.get_balance.return_value = 10 ** 18
    w3.eth.send_raw_transaction.return_value = bytes.fromhex("ab" * 32)

    def wait_for_receipt(tx_hash, **kwargs):
        return {
            'transactionHash': tx_hash,
            'blockNumber': 12345,
            'blockHash': bytes.fromhex('abcdef1234567890' * 4),
            'status': 1,
            'gasUsed': 85000,
            'from': TEST_SENDER,
            'to': '0xce16F69375520ab01377ce7B88f5BA8C48F8D666',
            'logs': []
        }

    w3.eth.wait_for_transaction_receipt.side_effect = wait_for_receipt
    return w3
