"""
Capability interface implemented once per chain family.

Each handler executes routes for one family and answers balance queries for
its chains. Operations a family has no notion of (token allowances on
Cosmos, raw EVM encodings) raise UnsupportedChainFamilyError.
"""
import logging
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict, List, Optional, Sequence

from .._rate_limited_log import rate_limited_log
from ..config import SquidConfig
from ..exceptions import UnsupportedChainFamilyError
from ..models import (
    ChainBalances, ChainData, ChainType, ExecutionSettings, ResolvedRouteParams,
    Route, RouteApproval, TokenData
)

logger = logging.getLogger(__name__)

MAX_BALANCE_WORKERS = 8


class ChainHandler(ABC):
    """
    Abstract base class for chain-family handlers.

    Args:
        config: SDK configuration (timeouts and RPC endpoint overrides)
    """

    chain_type: ChainType

    def __init__(self, config: SquidConfig):
        self.config = config

    @abstractmethod
    def execute_route(
        self,
        route: Route,
        params: ResolvedRouteParams,
        signer: Any,
        overrides: Optional[Dict[str, Any]] = None,
        execution_settings: Optional[ExecutionSettings] = None,
        signer_address: Optional[str] = None,
        wait_for_receipt: bool = True
    ) -> Any:
        """
        Submit the route's transaction and return the transaction result.

        Raises:
            InsufficientBalanceError: If the sender cannot fund the route
            TransactionError: If signing or broadcasting fails
        """
        pass

    @abstractmethod
    def get_balances(
        self,
        chains: List[ChainData],
        addresses: Sequence[Any],
        tokens: Optional[List[TokenData]] = None
    ) -> List[ChainBalances]:
        """
        Query balances on every chain for the matching addresses.

        Per-chain failures are reported in ChainBalances.error; they never
        raise.
        """
        pass

    def approve_route(
        self,
        route: Route,
        params: ResolvedRouteParams,
        signer: Any,
        overrides: Optional[Dict[str, Any]] = None,
        execution_settings: Optional[ExecutionSettings] = None
    ) -> bool:
        raise UnsupportedChainFamilyError(self.chain_type.value, "approve_route")

    def is_route_approved(self, route: Route, params: ResolvedRouteParams, sender: str) -> RouteApproval:
        raise UnsupportedChainFamilyError(self.chain_type.value, "is_route_approved")

    def get_raw_tx_hex(
        self,
        route: Route,
        params: ResolvedRouteParams,
        nonce: int,
        overrides: Optional[Dict[str, Any]] = None
    ) -> str:
        raise UnsupportedChainFamilyError(self.chain_type.value, "get_raw_tx_hex")

    def _gather_balances(
        self,
        queries: List[Dict[str, Any]],
        fetch: Callable[..., ChainBalances]
    ) -> List[ChainBalances]:
        """
        Run balance queries concurrently, best-effort.

        Each query is a dict with ``chain`` and ``address`` plus whatever
        ``fetch`` needs. Results keep the order of ``queries``; a failed query
        yields an entry with ``error`` set.
        """
        if not queries:
            return []

        def run(query: Dict[str, Any]) -> ChainBalances:
            chain = query["chain"]
            try:
                return fetch(**query)
            except Exception as e:
                rate_limited_log(
                    f"Balance query failed on chain {chain.chain_id}: {e}",
                    level="warning",
                    logger_instance=logger
                )
                return ChainBalances(
                    chain_id=chain.chain_id,
                    address=query["address"],
                    balances=[],
                    error=str(e) or type(e).__name__
                )

        workers = min(MAX_BALANCE_WORKERS, len(queries))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            return list(executor.map(run, queries))
