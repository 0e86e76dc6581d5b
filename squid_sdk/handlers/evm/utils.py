"""
Balance validation and gas parameter derivation for EVM routes.
"""
from typing import Dict, Any, Optional

from web3 import Web3

from ...exceptions import InsufficientBalanceError
from ...models import ChainData, RouteApproval, TransactionRequest
from .transactions import to_int


def validate_native_balance(
    from_provider: Web3,
    sender: str,
    amount: int,
    from_chain: ChainData
) -> RouteApproval:
    """
    Check that ``sender`` holds at least ``amount`` of the chain's native currency.

    Raises:
        InsufficientBalanceError: If the balance is below amount
    """
    balance = int(from_provider.eth.get_balance(Web3.to_checksum_address(sender)))

    if amount > balance:
        raise InsufficientBalanceError(sender, from_chain.chain_id, amount=amount, balance=balance)

    symbol = from_chain.native_currency.symbol if from_chain.native_currency else "native currency"
    return RouteApproval(
        is_approved=True,
        message=f"User has the expected balance {amount} of {symbol}"
    )


def validate_token_balance(
    from_token_contract: Any,
    sender: str,
    amount: int,
    from_chain: ChainData
) -> RouteApproval:
    """
    Check that ``sender`` holds at least ``amount`` of the source token.

    Raises:
        InsufficientBalanceError: If the balance is below amount
    """
    balance = int(from_token_contract.balance_of(sender))

    if amount > balance:
        raise InsufficientBalanceError(sender, from_chain.chain_id, amount=amount, balance=balance)

    return RouteApproval(
        is_approved=True,
        message=f"User has approved Squid to use {amount} of {from_token_contract.symbol()}"
    )


def get_gas_data(
    transaction_request: TransactionRequest,
    overrides: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """
    Derive gas parameters for a route's transaction.

    A request carrying a priority fee yields fee-market parameters
    (gasLimit, maxPriorityFeePerGas, maxFeePerGas); any other yields legacy
    parameters (gasLimit, gasPrice). Overrides are merged on top, key by key.

    Args:
        transaction_request: The route's transaction request
        overrides: Caller-supplied values that replace derived ones

    Returns:
        New dictionary of gas parameters
    """
    if transaction_request.max_priority_fee_per_gas:
        gas_params = {
            "gasLimit": to_int(transaction_request.gas_limit),
            "maxPriorityFeePerGas": to_int(transaction_request.max_priority_fee_per_gas),
            "maxFeePerGas": to_int(transaction_request.max_fee_per_gas),
        }
    else:
        gas_params = {
            "gasLimit": to_int(transaction_request.gas_limit),
            "gasPrice": to_int(transaction_request.gas_price),
        }

    if overrides:
        gas_params.update(overrides)
    return gas_params
