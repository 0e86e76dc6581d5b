"""
Building, signing and sending EVM transactions.
"""
import logging
from typing import Dict, Any, Optional, Union

import rlp
from eth_utils import to_bytes, to_canonical_address
from web3 import Web3
from web3.exceptions import Web3Exception
from web3.types import TxReceipt as Web3TxReceipt

from ...exceptions import TransactionError
from ...models import TxReceipt

logger = logging.getLogger(__name__)

# Gas parameter names as the routing service spells them -> web3 transaction keys
GAS_PARAM_KEYS = {
    "gasLimit": "gas",
    "gasPrice": "gasPrice",
    "maxFeePerGas": "maxFeePerGas",
    "maxPriorityFeePerGas": "maxPriorityFeePerGas",
}

GAS_ESTIMATE_BUFFER = 1.1


def to_int(value: Optional[Union[str, int]]) -> Optional[int]:
    """Convert a decimal or 0x-prefixed string to int, passing None through."""
    if value is None or value == "":
        return None
    if isinstance(value, int):
        return value
    value = str(value)
    if value.startswith(("0x", "0X")):
        return int(value, 16)
    return int(value)


def to_web3_params(params: Dict[str, Any]) -> Dict[str, Any]:
    """Rename gas keys to their web3 spelling and drop unset values."""
    return {
        GAS_PARAM_KEYS.get(key, key): value
        for key, value in params.items()
        if value is not None
    }


def is_fee_market(tx: Dict[str, Any]) -> bool:
    return tx.get("maxFeePerGas") is not None or tx.get("maxPriorityFeePerGas") is not None


def send_transaction(
    w3: Web3,
    signer: Any,
    tx: Dict[str, Any],
    wait_for_receipt: bool = True,
    receipt_timeout: int = 120,
    poll_interval: float = 0.1,
    log: Optional[logging.Logger] = None
) -> TxReceipt:
    """
    Complete, sign and send a transaction.

    Fills in the nonce, the gas limit (estimated with a 10% buffer) and, for
    legacy transactions, the gas price when they are missing.

    Args:
        w3: Web3 instance for the chain
        signer: Signer holding the sending account
        tx: Transaction dictionary (web3 key spelling)
        wait_for_receipt: Whether to wait for the transaction receipt
        receipt_timeout: Seconds to wait for the receipt
        poll_interval: How often to poll for the receipt, in seconds
        log: Logger to use (defaults to module logger)

    Returns:
        Transaction receipt (a minimal one holding only the hash when not waiting)

    Raises:
        TransactionError: If signing or sending fails
        Web3Exception: If there's an error with Web3 operations
    """
    log = log or logger
    tx = dict(tx)
    tx.setdefault("from", signer.address)

    if tx.get("nonce") is None:
        tx["nonce"] = w3.eth.get_transaction_count(tx["from"])

    if tx.get("gas") is None:
        estimated = w3.eth.estimate_gas(tx)
        tx["gas"] = int(estimated * GAS_ESTIMATE_BUFFER)
        log.debug(f"Estimated gas: {tx['gas']}")

    if not is_fee_market(tx) and tx.get("gasPrice") is None:
        tx["gasPrice"] = w3.eth.gas_price

    try:
        signed_tx = signer.sign_transaction(tx)
    except Exception as e:
        log.error(f"Transaction signing failed: {e}")
        raise TransactionError(f"Failed to sign transaction: {str(e)}") from e

    try:
        tx_hash = w3.eth.send_raw_transaction(signed_tx.raw_transaction)
    except Web3Exception:
        raise
    except Exception as e:
        log.error(f"Failed to send transaction: {e}")
        raise TransactionError(f"Failed to send transaction: {str(e)}") from e

    tx_hash_hex = _hex(tx_hash)
    log.info(f"Transaction sent: {tx_hash_hex}")

    if not wait_for_receipt:
        return TxReceipt(
            transactionHash=tx_hash_hex,
            blockNumber=0,
            blockHash="0x" + "0" * 64,
            status=0,  # Status unknown yet
            gasUsed=0,
            logs=[]
        )

    receipt = w3.eth.wait_for_transaction_receipt(
        tx_hash,
        timeout=receipt_timeout,
        poll_latency=poll_interval
    )
    return convert_receipt(receipt)


def convert_receipt(web3_receipt: Web3TxReceipt) -> TxReceipt:
    """
    Convert a Web3 receipt to our TxReceipt model.

    Bytes values are rendered as 0x-prefixed hex strings.
    """
    receipt_dict = dict(web3_receipt)
    for key, value in list(receipt_dict.items()):
        if isinstance(value, (bytes, bytearray)):
            receipt_dict[key] = _hex(value)
    receipt_dict["logs"] = [dict(entry) for entry in receipt_dict.get("logs", [])]
    return TxReceipt.model_validate(receipt_dict)


def encode_unsigned_transaction(tx: Dict[str, Any]) -> str:
    """
    Serialize an unsigned transaction without broadcasting it.

    Fee-market transactions use the EIP-1559 typed envelope; legacy ones
    use the EIP-155 unsigned form.

    Args:
        tx: Transaction dictionary (web3 key spelling) with to, data, value,
            nonce, chainId, gas and either gasPrice or the fee-market fields

    Returns:
        0x-prefixed hex encoding

    Raises:
        ValueError: If the transaction has no gas limit
    """
    if tx.get("gas") is None:
        raise ValueError("Cannot encode transaction without a gas limit; pass gasLimit in overrides")

    to = to_canonical_address(tx["to"])
    data = to_bytes(hexstr=tx.get("data") or "0x")
    value = tx.get("value") or 0
    gas = tx["gas"]
    chain_id = tx["chainId"]
    nonce = tx["nonce"]

    if is_fee_market(tx):
        fields = [
            chain_id,
            nonce,
            tx.get("maxPriorityFeePerGas") or 0,
            tx.get("maxFeePerGas") or 0,
            gas,
            to,
            value,
            data,
            [],
        ]
        return "0x" + (b"\x02" + rlp.encode(fields)).hex()

    fields = [nonce, tx.get("gasPrice") or 0, gas, to, value, data, chain_id, 0, 0]
    return "0x" + rlp.encode(fields).hex()


def _hex(value: Union[bytes, bytearray, str]) -> str:
    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex()
    return value
