"""
Chain and token metadata store.
"""
from typing import List, Optional, Union

from .exceptions import NotFoundError
from .models import ChainData, ChainType, TokenData


class TokensChains:
    """Holds the chain and token descriptors loaded at initialization"""

    def __init__(self):
        self.tokens: List[TokenData] = []
        self.chains: List[ChainData] = []

    def get_chain_data(self, chain_id: Union[str, int]) -> ChainData:
        """
        Look up a chain by id.

        Raises:
            NotFoundError: If the chain is not supported
        """
        wanted = str(chain_id)
        for chain in self.chains:
            if chain.chain_id == wanted:
                return chain
        raise NotFoundError(f"Unsupported chain {chain_id}", chain_id=chain_id)

    def get_token_data(self, address: str, chain_id: Union[str, int]) -> TokenData:
        """
        Look up a token by address on a chain.

        Addresses compare case-insensitively.

        Raises:
            NotFoundError: If the token is not supported on that chain
        """
        wanted_chain = str(chain_id)
        wanted_address = address.lower()
        for token in self.tokens:
            if token.chain_id == wanted_chain and token.address.lower() == wanted_address:
                return token
        raise NotFoundError(
            f"Unsupported token {address} on chain {chain_id}",
            chain_id=chain_id,
            token_address=address
        )

    def find_token(self, address: str, chain_id: Union[str, int]) -> Optional[TokenData]:
        try:
            return self.get_token_data(address, chain_id)
        except NotFoundError:
            return None

    def get_chains_by_type(
        self,
        chain_type: ChainType,
        chain_ids: Optional[List[Union[str, int]]] = None
    ) -> List[ChainData]:
        """Chains of one family, restricted to chain_ids when given (empty means all)"""
        wanted = {str(c) for c in chain_ids or []}
        return [
            chain for chain in self.chains
            if chain.chain_type == chain_type.value and (not wanted or chain.chain_id in wanted)
        ]

    def get_tokens_for_chains(self, chains: List[ChainData]) -> List[TokenData]:
        chain_ids = {chain.chain_id for chain in chains}
        return [token for token in self.tokens if token.chain_id in chain_ids]
