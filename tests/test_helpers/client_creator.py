"""
Shared constants and builders for SDK tests.
"""
import copy
import json
from typing import Any, Dict, Optional

from squid_sdk import Squid, SquidConfig
from squid_sdk.constants import NATIVE_TOKEN_ADDRESS
from squid_sdk.models import Route

# Test constants used throughout tests
TEST_BASE_URL = "https://testnet.api.squidrouter.com/"
TEST_INTEGRATOR_ID = "test-integrator"
TEST_PRIV_KEY = "0x0123456789abcdef0123456789abcdef0123456789abcdef0123456789abcdef"
TEST_SENDER = "0x1234567890123456789012345678901234567890"
TEST_ROUTER = "0xce16F69375520ab01377ce7B88f5BA8C48F8D666"

ETH_RPC = "https://eth.rpc.example.com"
ARB_RPC = "https://arb.rpc.example.com"
OSMOSIS_REST = "https://lcd.osmosis.example.com"
COSMOSHUB_REST = "https://lcd.cosmoshub.example.com"

USDC_ETH = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"
USDC_ARB = "0xaf88d065e77c8cC2239327C5EDb3A432268e5831"
AXL_USDC_OSMO = "ibc/D189335C6E4A68B513C10AB227BF1C1D38C746766278BA3EEB4FB14124F1D858"

OSMO_ADDRESS = "osmo1qypqxpq9qcrsszg2pvxq6rs0zqg3yyc5lzv7xu"
COSMOS_ADDRESS = "cosmos1qypqxpq9qcrsszg2pvxq6rs0zqg3yyc5z5tpwp"

CHAINS = [
    {
        "chainId": 1,
        "chainName": "Ethereum",
        "chainType": "evm",
        "rpc": ETH_RPC,
        "nativeCurrency": {"name": "Ether", "symbol": "ETH", "decimals": 18},
    },
    {
        "chainId": 42161,
        "chainName": "Arbitrum",
        "chainType": "evm",
        "rpc": ARB_RPC,
        "nativeCurrency": {"name": "Ether", "symbol": "ETH", "decimals": 18},
    },
    {
        "chainId": "osmosis-1",
        "chainName": "Osmosis",
        "chainType": "cosmos",
        "rpc": "https://rpc.osmosis.example.com",
        "rest": OSMOSIS_REST,
        "coinType": 118,
        "bech32Config": {"bech32PrefixAccAddr": "osmo"},
        "currencies": [
            {"coinDenom": "OSMO", "coinMinimalDenom": "uosmo", "coinDecimals": 6},
        ],
    },
    {
        "chainId": "cosmoshub-4",
        "chainName": "Cosmos Hub",
        "chainType": "cosmos",
        "rpc": "https://rpc.cosmoshub.example.com",
        "rest": COSMOSHUB_REST,
        "coinType": 118,
        "bech32Config": {"bech32PrefixAccAddr": "cosmos"},
        "currencies": [
            {"coinDenom": "ATOM", "coinMinimalDenom": "uatom", "coinDecimals": 6},
        ],
    },
    {
        "chainId": "solana-mainnet",
        "chainName": "Solana",
        "chainType": "solana",
        "rpc": "https://rpc.solana.example.com",
    },
]

TOKENS = [
    {"chainId": 1, "address": NATIVE_TOKEN_ADDRESS, "name": "Ether", "symbol": "ETH", "decimals": 18, "usdPrice": 3000.0},
    {"chainId": 1, "address": USDC_ETH, "name": "USD Coin", "symbol": "USDC", "decimals": 6, "usdPrice": 1.0},
    {"chainId": 42161, "address": NATIVE_TOKEN_ADDRESS, "name": "Ether", "symbol": "ETH", "decimals": 18},
    {"chainId": 42161, "address": USDC_ARB, "name": "USD Coin", "symbol": "USDC", "decimals": 6},
    {"chainId": "osmosis-1", "address": "uosmo", "name": "Osmosis", "symbol": "OSMO", "decimals": 6},
    {"chainId": "osmosis-1", "address": AXL_USDC_OSMO, "name": "Axelar USDC", "symbol": "axlUSDC", "decimals": 6},
    {"chainId": "cosmoshub-4", "address": "uatom", "name": "Cosmos", "symbol": "ATOM", "decimals": 6},
    {"chainId": "solana-mainnet", "address": "So11111111111111111111111111111111111111112", "name": "Wrapped SOL", "symbol": "SOL", "decimals": 9},
]

SDK_INFO = {
    "tokens": TOKENS,
    "chains": CHAINS,
    "isInMaintenanceMode": False,
    "maintenanceMessage": None,
    "axelarScanUrl": "https://testnet.axelarscan.io",
}

LEGACY_TX_REQUEST = {
    "routeType": "CALL_BRIDGE_CALL",
    "targetAddress": TEST_ROUTER,
    "data": "0xabcdef",
    "value": "1000",
    "gasLimit": "500000",
    "gasPrice": "20000000000",
}

FEE_MARKET_TX_REQUEST = {
    "routeType": "CALL_BRIDGE_CALL",
    "targetAddress": TEST_ROUTER,
    "data": "0xabcdef",
    "value": "1000",
    "gasLimit": "500000",
    "gasPrice": "20000000000",
    "maxFeePerGas": "30000000000",
    "maxPriorityFeePerGas": "1500000000",
}


def token_payload(chain_id: Any, address: str) -> Dict[str, Any]:
    for token in TOKENS:
        if str(token["chainId"]) == str(chain_id) and token["address"].lower() == address.lower():
            return copy.deepcopy(token)
    # Tokens the metadata store does not know about
    return {"chainId": chain_id, "address": address, "symbol": "UNK", "decimals": 18}


def make_route_payload(
    from_chain: Any = 1,
    from_token: str = USDC_ETH,
    to_chain: Any = 42161,
    to_token: str = USDC_ARB,
    from_amount: str = "1000000",
    transaction_request: Optional[Dict[str, Any]] = LEGACY_TX_REQUEST,
    from_chain_calls: Optional[list] = None
) -> Dict[str, Any]:
    """Build a route body as the routing service returns it."""
    from_token_data = token_payload(from_chain, from_token)
    to_token_data = token_payload(to_chain, to_token)
    route: Dict[str, Any] = {
        "estimate": {
            "fromAmount": from_amount,
            "sendAmount": from_amount,
            "toAmount": "999000",
            "toAmountMin": "994000",
            "route": {
                "fromChain": from_chain_calls if from_chain_calls is not None else [
                    {
                        "type": "BRIDGE_CALL",
                        "fromToken": from_token_data,
                        "toToken": to_token_data,
                        "fromAmount": from_amount,
                        "toAmount": "999000",
                    }
                ],
                "toChain": [],
            },
            "exchangeRate": "0.999",
            "estimatedRouteDuration": 90,
            "aggregatePriceImpact": "0.0",
            "feeCosts": [],
            "gasCosts": [],
        },
        "params": {
            "fromChain": from_chain,
            "toChain": to_chain,
            "fromToken": from_token_data,
            "toToken": to_token_data,
            "fromAmount": from_amount,
            "toAddress": TEST_SENDER,
            "slippage": 1.0,
        },
    }
    if transaction_request is not None:
        route["transactionRequest"] = copy.deepcopy(transaction_request)
    return {"route": route}


def make_route(**kwargs) -> Route:
    from squid_sdk.parser import parse_route_response
    return parse_route_response(make_route_payload(**kwargs)).route


def cosmos_tx_request(msg_type_url: str, msg: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "routeType": "CALL_BRIDGE",
        "targetAddress": "osmo1router",
        "data": json.dumps({"msgTypeUrl": msg_type_url, "msg": msg}),
        "value": "0",
    }


def create_test_client(
    integrator_id: str = TEST_INTEGRATOR_ID,
    base_url: str = TEST_BASE_URL,
    timeout: int = 30,
    **kwargs
) -> Squid:
    """Create a client with test defaults (not initialized)."""
    return Squid(SquidConfig(integrator_id=integrator_id, base_url=base_url, timeout=timeout, **kwargs))
