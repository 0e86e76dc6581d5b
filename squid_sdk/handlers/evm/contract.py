"""
ERC20 token contract handle.
"""
import logging
from typing import Dict, Any, Optional

from web3 import Web3

from ...constants import ERC20_ABI
from ...exceptions import TransactionError
from ...models import TxReceipt
from .transactions import send_transaction

logger = logging.getLogger(__name__)


class Erc20Contract:
    """
    ERC20 contract bound either to a signer (can send approvals) or read-only.

    Creating a handle is local; no RPC request is made until a method is called.

    Args:
        w3: Web3 instance for the token's chain
        address: Token contract address
        signer: Optional signer used for state-changing calls
    """

    def __init__(self, w3: Web3, address: str, signer: Optional[Any] = None):
        self.w3 = w3
        self.address = Web3.to_checksum_address(address)
        self.signer = signer
        self.contract = w3.eth.contract(address=self.address, abi=ERC20_ABI)

    @property
    def is_read_only(self) -> bool:
        return self.signer is None

    def balance_of(self, owner: str) -> int:
        return int(self.contract.functions.balanceOf(Web3.to_checksum_address(owner)).call())

    def allowance(self, owner: str, spender: str) -> int:
        return int(self.contract.functions.allowance(
            Web3.to_checksum_address(owner),
            Web3.to_checksum_address(spender)
        ).call())

    def symbol(self) -> str:
        return self.contract.functions.symbol().call()

    def approve(
        self,
        spender: str,
        amount: int,
        tx_params: Optional[Dict[str, Any]] = None,
        wait_for_receipt: bool = True
    ) -> TxReceipt:
        """
        Grant ``spender`` an allowance of ``amount``.

        Args:
            spender: Address allowed to move the tokens
            amount: Allowance in base units
            tx_params: Extra transaction fields (web3 key spelling), e.g. gas overrides
            wait_for_receipt: Whether to wait for the transaction receipt

        Raises:
            TransactionError: If the handle is read-only or the transaction fails
        """
        if self.signer is None:
            raise TransactionError(f"Token contract {self.address} is read-only; a signer is required to approve")

        params = {"from": self.signer.address}
        params.update(tx_params or {})
        tx = self.contract.functions.approve(
            Web3.to_checksum_address(spender),
            amount
        ).build_transaction(params)

        logger.debug(f"Approving {spender} for {amount} of token {self.address}")
        return send_transaction(self.w3, self.signer, tx, wait_for_receipt=wait_for_receipt, log=logger)
