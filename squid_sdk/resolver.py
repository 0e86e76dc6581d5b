"""
Resolution of route parameters against the metadata store.
"""
import logging
from typing import Any, Optional

from .config import SquidConfig
from .constants import NATIVE_TOKEN_ADDRESS
from .handlers.evm.contract import Erc20Contract
from .handlers.evm.provider import rpc_provider
from .models import ChainType, ResolvedRouteParams, RouteParams
from .tokens_chains import TokensChains

logger = logging.getLogger(__name__)


def is_native_token(address: str) -> bool:
    return address.lower() == NATIVE_TOKEN_ADDRESS.lower()


class RouteParamsResolver:
    """
    Turns a route's parameters into ResolvedRouteParams.

    Resolution makes no network call: lookups hit the in-memory metadata
    store and provider/contract handles are built locally.

    Args:
        tokens_chains: Metadata store loaded at initialization
        config: SDK configuration (RPC endpoint overrides and timeout)
    """

    def __init__(self, tokens_chains: TokensChains, config: SquidConfig):
        self.tokens_chains = tokens_chains
        self.config = config

    def resolve(self, params: RouteParams, signer: Optional[Any] = None) -> ResolvedRouteParams:
        """
        Resolve chains and tokens and bind source-chain handles.

        On EVM source chains a read provider is built, and for non-native
        source tokens an ERC20 handle is bound to the signer when one is
        given (execution) or left read-only (inspection).

        Args:
            params: Route parameters returned by the routing service
            signer: Optional signer to bind the token contract to

        Returns:
            Resolved route parameters

        Raises:
            NotFoundError: If a chain or token is unknown
        """
        from_chain = self.tokens_chains.get_chain_data(params.from_chain)
        to_chain = self.tokens_chains.get_chain_data(params.to_chain)
        from_token = self.tokens_chains.get_token_data(params.from_token.address, params.from_chain)
        to_token = self.tokens_chains.get_token_data(params.to_token.address, params.to_chain)

        from_is_native = is_native_token(from_token.address)
        from_provider = None
        from_token_contract = None

        if from_chain.chain_type == ChainType.EVM.value:
            from_provider = rpc_provider(self.config.get_rpc_url(from_chain), timeout=self.config.timeout)
            if not from_is_native:
                from_token_contract = Erc20Contract(from_provider, from_token.address, signer=signer)

        logger.debug(
            f"Resolved route {from_chain.chain_id}:{from_token.symbol} -> "
            f"{to_chain.chain_id}:{to_token.symbol} (native source: {from_is_native})"
        )

        return ResolvedRouteParams(
            params=params,
            from_chain=from_chain,
            to_chain=to_chain,
            from_token=from_token,
            to_token=to_token,
            from_provider=from_provider,
            from_token_contract=from_token_contract,
            from_is_native=from_is_native,
        )
