"""
Route execution and balance queries on Cosmos-SDK chains.
"""
import json
import logging
from typing import Dict, Any, List, Optional, Sequence

import requests

from ..constants import DEFAULT_COSMOS_DECIMALS, IBC_TRANSFER_TYPE_URL, WASM_EXECUTE_TYPE_URL
from ..exceptions import TransactionError, UnsupportedMessageTypeError
from ..models import (
    ChainBalances, ChainData, ChainType, CosmosAddress, CosmosTxResult,
    ExecutionSettings, ResolvedRouteParams, Route, TokenBalance, TokenData
)
from .base import ChainHandler

logger = logging.getLogger(__name__)

BALANCES_PATH = "cosmos/bank/v1beta1/balances/{address}"


class CosmosHandler(ChainHandler):
    """Executes routes whose source chain is a Cosmos-SDK chain"""

    chain_type = ChainType.COSMOS

    def execute_route(
        self,
        route: Route,
        params: ResolvedRouteParams,
        signer: Any,
        overrides: Optional[Dict[str, Any]] = None,
        execution_settings: Optional[ExecutionSettings] = None,
        signer_address: Optional[str] = None,
        wait_for_receipt: bool = True
    ) -> CosmosTxResult:
        """
        Build the route's Cosmos message, then sign and broadcast it.

        Args:
            route: Route to execute
            params: Resolved route parameters
            signer: Cosmos signing client (see squid_sdk.signer.CosmosSigner)
            overrides: Optional ``fee`` and ``memo`` for the broadcast
            execution_settings: Unused on Cosmos
            signer_address: Bech32 address of the signing account (required)
            wait_for_receipt: Unused; broadcast results are returned once delivered

        Returns:
            Broadcast result

        Raises:
            ValueError: If signer_address is missing
            UnsupportedMessageTypeError: If the message type is not supported
            TransactionError: If the chain rejects the transaction
        """
        if not signer_address:
            raise ValueError("signer_address not provided")

        messages = [self.build_message(route, params, signer_address)]
        overrides = overrides or {}
        fee = overrides.get("fee", "auto")
        memo = overrides.get("memo", "")

        logger.debug(f"Broadcasting {messages[0]['type_url']} on chain {params.from_chain.chain_id}")
        try:
            raw_result = signer.sign_and_broadcast(signer_address, messages, fee, memo)
        except Exception as e:
            logger.error(f"Cosmos broadcast failed: {e}")
            raise TransactionError(f"Failed to broadcast transaction: {str(e)}") from e

        result = CosmosTxResult.model_validate(dict(raw_result))
        if result.code != 0:
            raise TransactionError(
                f"Transaction {result.tx_hash} failed on chain {params.from_chain.chain_id} "
                f"with code {result.code}: {result.raw_log}"
            )

        logger.info(f"Transaction sent: {result.tx_hash}")
        return result

    @staticmethod
    def build_message(route: Route, params: ResolvedRouteParams, signer_address: str) -> Dict[str, Any]:
        """
        Turn the route's transaction request into a Cosmos message.

        The request data is JSON ``{"msgTypeUrl": ..., "msg": {...}}``.

        Raises:
            UnsupportedMessageTypeError: If the message type is not supported
        """
        cosmos_msg = json.loads(route.transaction_request.data)
        type_url = cosmos_msg.get("msgTypeUrl")
        msg = cosmos_msg.get("msg") or {}

        if type_url == IBC_TRANSFER_TYPE_URL:
            return {"type_url": type_url, "value": msg}

        if type_url == WASM_EXECUTE_TYPE_URL:
            wasm = msg["wasm"]
            return {
                "type_url": type_url,
                "value": {
                    "sender": signer_address,
                    "contract": wasm["contract"],
                    "msg": json.dumps(wasm["msg"]).encode("utf-8"),
                    "funds": [{"denom": params.from_token.address, "amount": params.params.from_amount}],
                },
            }

        raise UnsupportedMessageTypeError(str(type_url))

    def get_balances(
        self,
        chains: List[ChainData],
        addresses: Sequence[CosmosAddress],
        tokens: Optional[List[TokenData]] = None
    ) -> List[ChainBalances]:
        """
        Query bank balances on each Cosmos chain for the matching address.

        An address matches a chain by explicit chain_id, or else by coin type
        and bech32 account prefix. Chains with no matching address are skipped.
        """
        queries = []
        for chain in chains:
            address = self._address_for_chain(chain, addresses)
            if address is None:
                logger.debug(f"No address supplied for Cosmos chain {chain.chain_id}")
                continue
            queries.append({"chain": chain, "address": address})
        return self._gather_balances(queries, self._fetch_chain_balances)

    @staticmethod
    def _address_for_chain(chain: ChainData, addresses: Sequence[CosmosAddress]) -> Optional[str]:
        for candidate in addresses:
            if candidate.chain_id is not None and candidate.chain_id == chain.chain_id:
                return candidate.address

        prefix = chain.bech32_config.bech32_prefix_acc_addr if chain.bech32_config else None
        for candidate in addresses:
            if candidate.chain_id is not None:
                continue
            if candidate.coin_type is not None and candidate.coin_type != chain.coin_type:
                continue
            if prefix and candidate.address.startswith(prefix + "1"):
                return candidate.address
        return None

    def _fetch_chain_balances(self, chain: ChainData, address: str) -> ChainBalances:
        if not chain.rest:
            raise ValueError(f"No REST endpoint for chain {chain.chain_id}")

        url = chain.rest.rstrip('/') + '/' + BALANCES_PATH.format(address=address)
        response = requests.get(url, timeout=self.config.timeout)
        response.raise_for_status()

        decimals_by_denom = {c.coin_minimal_denom: c for c in chain.currencies}
        balances = []
        for coin in response.json().get("balances", []):
            currency = decimals_by_denom.get(coin["denom"])
            balances.append(TokenBalance(
                chain_id=chain.chain_id,
                address=coin["denom"],
                symbol=currency.coin_denom if currency else coin["denom"],
                decimals=currency.coin_decimals if currency else DEFAULT_COSMOS_DECIMALS,
                balance=int(coin["amount"])
            ))
        return ChainBalances(chain_id=chain.chain_id, address=address, balances=balances)
