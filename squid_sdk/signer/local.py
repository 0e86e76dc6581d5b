"""
Local private-key signer.
"""
from typing import Any, Dict

from eth_account import Account
from eth_account.signers.local import LocalAccount


class LocalSigner:
    """Signs EVM transactions with an in-process private key"""

    def __init__(self, priv_key: str):
        self._account: LocalAccount = Account.from_key(priv_key)

    @property
    def address(self) -> str:
        return self._account.address

    def sign_transaction(self, transaction_dict: Dict[str, Any]) -> Any:
        return self._account.sign_transaction(transaction_dict)
