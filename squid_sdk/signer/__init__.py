"""
Signer capabilities used to execute routes.
"""
from typing import Any, Dict, List, Mapping, Protocol, Union, runtime_checkable

from .local import LocalSigner

__all__ = ['Signer', 'CosmosSigner', 'LocalSigner']


@runtime_checkable
class Signer(Protocol):
    """Protocol for EVM signers"""
    address: str

    def sign_transaction(self, transaction_dict: Dict[str, Any]) -> Any:
        """Sign transaction and return signed tx object exposing ``raw_transaction``"""
        ...


@runtime_checkable
class CosmosSigner(Protocol):
    """Protocol for Cosmos signing clients"""

    def sign_and_broadcast(
        self,
        signer_address: str,
        messages: List[Dict[str, Any]],
        fee: Union[str, Dict[str, Any]],
        memo: str = ""
    ) -> Mapping[str, Any]:
        """Sign the messages, broadcast the transaction and return the delivery result"""
        ...
