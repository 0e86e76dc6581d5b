"""
Route execution on EVM chains.
"""
import logging
from typing import Dict, Any, List, Optional, Sequence

from web3 import Web3

from ...constants import MAX_UINT256, NATIVE_TOKEN_ADDRESS
from ...exceptions import TransactionError
from ...models import (
    ChainBalances, ChainData, ChainType, ExecutionSettings, ResolvedRouteParams,
    Route, RouteApproval, TokenBalance, TokenData, TxReceipt
)
from ..base import ChainHandler
from .contract import Erc20Contract
from .provider import rpc_provider
from .transactions import encode_unsigned_transaction, send_transaction, to_int, to_web3_params
from .utils import get_gas_data, validate_native_balance, validate_token_balance

logger = logging.getLogger(__name__)


class EvmHandler(ChainHandler):
    """Executes routes whose source chain is EVM-compatible"""

    chain_type = ChainType.EVM

    def execute_route(
        self,
        route: Route,
        params: ResolvedRouteParams,
        signer: Any,
        overrides: Optional[Dict[str, Any]] = None,
        execution_settings: Optional[ExecutionSettings] = None,
        signer_address: Optional[str] = None,
        wait_for_receipt: bool = True
    ) -> TxReceipt:
        """
        Execute a route from an EVM chain.

        Validates the sender's balance, grants the router an allowance when
        the source token is not native and the current one is short, then
        signs and sends the route's transaction.

        Args:
            route: Route to execute
            params: Resolved route parameters (token contract bound to signer)
            signer: Signer for the sending account
            overrides: Transaction fields replacing derived gas parameters
            execution_settings: Approval behaviour (infinite or exact)
            signer_address: Unused on EVM; the signer's address is the sender
            wait_for_receipt: Whether to wait for the transaction receipt

        Returns:
            Transaction receipt

        Raises:
            InsufficientBalanceError: If the sender cannot fund the route
            TransactionError: If approval, signing or sending fails
        """
        tx_request = route.transaction_request
        sender = signer.address
        amount = params.from_amount

        if params.from_is_native:
            validate_native_balance(params.from_provider, sender, amount, params.from_chain)
        else:
            validate_token_balance(params.from_token_contract, sender, amount, params.from_chain)
            allowance = params.from_token_contract.allowance(sender, tx_request.target_address)
            if allowance < amount:
                logger.info(
                    f"Allowance {allowance} below {amount} for {tx_request.target_address}, approving"
                )
                self._approve(params, tx_request.target_address, overrides, execution_settings)

        tx = self._build_tx(route, params, overrides)
        tx["from"] = sender
        return send_transaction(params.from_provider, signer, tx, wait_for_receipt=wait_for_receipt, log=logger)

    def is_route_approved(self, route: Route, params: ResolvedRouteParams, sender: str) -> RouteApproval:
        """
        Check whether ``sender`` can execute the route right now.

        Raises:
            InsufficientBalanceError: If the sender's balance is below the route amount
        """
        amount = params.from_amount

        if params.from_is_native:
            return validate_native_balance(params.from_provider, sender, amount, params.from_chain)

        approval = validate_token_balance(params.from_token_contract, sender, amount, params.from_chain)
        target = route.transaction_request.target_address
        allowance = params.from_token_contract.allowance(sender, target)
        if allowance < amount:
            return RouteApproval(
                is_approved=False,
                message=f"Insufficient allowance for contract: {target} on chain {params.from_chain.chain_id}"
            )
        return approval

    def approve_route(
        self,
        route: Route,
        params: ResolvedRouteParams,
        signer: Any,
        overrides: Optional[Dict[str, Any]] = None,
        execution_settings: Optional[ExecutionSettings] = None
    ) -> bool:
        """
        Grant the route's target contract an allowance on the source token.

        Native sources need no approval and return True without sending.

        Raises:
            TransactionError: If the approval transaction fails
        """
        if params.from_is_native:
            return True
        self._approve(params, route.transaction_request.target_address, overrides, execution_settings)
        return True

    def get_raw_tx_hex(
        self,
        route: Route,
        params: ResolvedRouteParams,
        nonce: int,
        overrides: Optional[Dict[str, Any]] = None
    ) -> str:
        """Encode the route's transaction, unsigned, without broadcasting it."""
        tx = self._build_tx(route, params, overrides)
        tx["nonce"] = nonce
        return encode_unsigned_transaction(tx)

    def get_balances(
        self,
        chains: List[ChainData],
        addresses: Sequence[str],
        tokens: Optional[List[TokenData]] = None
    ) -> List[ChainBalances]:
        """
        Query native and token balances of each address on each chain.

        Args:
            chains: EVM chains to query
            addresses: Account addresses
            tokens: Tokens to query; only those on the given chains are used
        """
        queries = [
            {
                "chain": chain,
                "address": address,
                "tokens": [t for t in tokens or [] if t.chain_id == chain.chain_id],
            }
            for chain in chains
            for address in addresses
        ]
        return self._gather_balances(queries, self._fetch_chain_balances)

    def _fetch_chain_balances(self, chain: ChainData, address: str, tokens: List[TokenData]) -> ChainBalances:
        w3 = rpc_provider(self.config.get_rpc_url(chain), timeout=self.config.timeout)
        owner = Web3.to_checksum_address(address)
        balances = []
        for token in tokens:
            if token.address.lower() == NATIVE_TOKEN_ADDRESS.lower():
                balance = w3.eth.get_balance(owner)
            else:
                balance = Erc20Contract(w3, token.address).balance_of(owner)
            balances.append(TokenBalance(
                chain_id=chain.chain_id,
                address=token.address,
                symbol=token.symbol,
                decimals=token.decimals,
                balance=int(balance)
            ))
        return ChainBalances(chain_id=chain.chain_id, address=address, balances=balances)

    def _approve(
        self,
        params: ResolvedRouteParams,
        spender: str,
        overrides: Optional[Dict[str, Any]],
        execution_settings: Optional[ExecutionSettings]
    ) -> TxReceipt:
        settings = execution_settings or self.config.execution_settings
        amount = MAX_UINT256 if settings.infinite_approval else params.from_amount
        receipt = params.from_token_contract.approve(
            spender,
            amount,
            tx_params=to_web3_params(overrides or {}),
            wait_for_receipt=True
        )
        if receipt.status == 0:
            raise TransactionError(
                f"Approval of {spender} failed on chain {params.from_chain.chain_id}: {receipt.tx_hash}"
            )
        return receipt

    def _build_tx(
        self,
        route: Route,
        params: ResolvedRouteParams,
        overrides: Optional[Dict[str, Any]]
    ) -> Dict[str, Any]:
        tx_request = route.transaction_request
        gas_data = get_gas_data(tx_request, overrides)
        tx = {
            "to": Web3.to_checksum_address(tx_request.target_address),
            "data": tx_request.data,
            "value": to_int(tx_request.value) or 0,
            "chainId": int(params.from_chain.chain_id),
        }
        tx.update(to_web3_params(gas_data))
        return tx
