"""
Squid - Main client for requesting and executing cross-chain routes.
"""
import logging
import threading
from enum import Enum
from typing import Dict, Any, List, Optional, Union

from .config import SquidConfig
from .exceptions import (
    MissingTransactionRequestError, NotInitializedError, SquidError,
    UnsupportedChainFamilyError, UpstreamServiceError
)
from .handlers import ChainHandler, CosmosHandler, EvmHandler
from .models import (
    ChainBalances, ChainType, CosmosAddress, ExecutionSettings, Route,
    RouteApproval, RouteRequest, RouteResponse, SdkInfo, StatusResponse
)
from .parser import parse_route_response
from .resolver import RouteParamsResolver
from .tokens_chains import TokensChains
from .transport import HttpAdapter, HttpResponse

REQUEST_ID_HEADER = "x-request-id"
INTEGRATOR_ID_HEADER = "x-integrator-id"


class SdkState(str, Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"


class Squid(TokensChains):
    """
    Client for the Squid cross-chain routing service.

    This client handles:
    1. Loading chain and token metadata (``init``)
    2. Requesting routes and transaction status from the routing service
    3. Executing, approving and inspecting routes on the source chain

    Every route operation requires ``init()`` to have completed; metadata is
    loaded once and read-only afterwards, so one client can serve concurrent
    calls.

    Args:
        config: SDK configuration; when omitted, keyword arguments are passed to SquidConfig
        logger: Optional logger instance to use for debug/info logging
        **config_kwargs: SquidConfig fields (integrator_id, base_url, timeout, ...)

    Raises:
        ValueError: If no integrator id is given or the base URL is not https
    """

    def __init__(
        self,
        config: Optional[SquidConfig] = None,
        logger: Optional[logging.Logger] = None,
        **config_kwargs
    ):
        super().__init__()
        self.logger = logger or logging.getLogger(__name__)

        self._state = SdkState.UNINITIALIZED
        self._state_lock = threading.Lock()

        self.is_in_maintenance_mode = False
        self.maintenance_message: Optional[str] = None
        self.axelar_scan_url: Optional[str] = None

        self._apply_config(config or SquidConfig(**config_kwargs))

    def _apply_config(self, config: SquidConfig) -> None:
        self.config = config
        self.http = HttpAdapter(
            base_url=config.base_url,
            headers={INTEGRATOR_ID_HEADER: config.integrator_id},
            timeout=config.timeout,
            retry_count=config.retry_count
        )
        self._resolver = RouteParamsResolver(self, config)
        self._evm_handler = EvmHandler(config)
        self._cosmos_handler = CosmosHandler(config)

    def set_config(self, config: SquidConfig) -> None:
        """Replace the configuration; loaded metadata is kept."""
        self.http.close()
        self._apply_config(config)

    @property
    def state(self) -> SdkState:
        return self._state

    @property
    def initialized(self) -> bool:
        return self._state is SdkState.READY

    # ------------------------------------------------------------------
    # Initialization
    # ------------------------------------------------------------------

    def init(self) -> None:
        """
        Load chain and token metadata from the routing service.

        Runs once: calling it again after success is a no-op. A failed
        attempt leaves the client uninitialized so it can be retried.

        Raises:
            SquidError: If initialization is already in progress
            UpstreamServiceError: If the service answers with a non-200 status
            TransportError: If the service cannot be reached
        """
        with self._state_lock:
            if self._state is SdkState.READY:
                return
            if self._state is SdkState.INITIALIZING:
                raise SquidError("Squid initialization already in progress")
            self._state = SdkState.INITIALIZING

        try:
            response = self.http.get("v1/sdk-info")
            if response.status != 200:
                raise UpstreamServiceError(
                    "SDK initialization failed",
                    status_code=response.status,
                    request_id=response.header(REQUEST_ID_HEADER)
                )
            info = SdkInfo.model_validate(response.data)
        except Exception:
            with self._state_lock:
                self._state = SdkState.UNINITIALIZED
            raise

        self.tokens = info.tokens
        self.chains = info.chains
        self.is_in_maintenance_mode = info.is_in_maintenance_mode
        self.maintenance_message = info.maintenance_message
        self.axelar_scan_url = info.axelar_scan_url

        with self._state_lock:
            self._state = SdkState.READY

        self.logger.info(f"Squid initialized with {len(self.chains)} chains and {len(self.tokens)} tokens")
        if self.is_in_maintenance_mode:
            self.logger.warning(f"Squid is in maintenance mode: {self.maintenance_message}")

    # ------------------------------------------------------------------
    # Routing service
    # ------------------------------------------------------------------

    def get_route(self, request: Union[RouteRequest, Dict[str, Any]]) -> RouteResponse:
        """
        Request a route from the routing service.

        Args:
            request: Route request (a RouteRequest or its camelCase dict form)

        Returns:
            Normalized route response with the request/integrator ids echoed back

        Raises:
            NotInitializedError: If init() has not completed
            UpstreamServiceError: If the service rejects the request; the message
                is the service's error text
        """
        self._validate_init()

        body = request.to_wire() if isinstance(request, RouteRequest) else dict(request)
        self.logger.debug(f"Requesting route: {body}")
        response = self.http.post("v1/route", json=body)

        if response.status != 200:
            raise UpstreamServiceError(
                _error_message(response),
                status_code=response.status,
                request_id=response.header(REQUEST_ID_HEADER)
            )

        return parse_route_response(
            response.data,
            request_id=response.header(REQUEST_ID_HEADER),
            integrator_id=response.header(INTEGRATOR_ID_HEADER)
        )

    def get_status(
        self,
        transaction_id: str,
        request_id: Optional[str] = None,
        integrator_id: Optional[str] = None,
        from_chain_id: Optional[Union[str, int]] = None,
        to_chain_id: Optional[Union[str, int]] = None
    ) -> StatusResponse:
        """
        Get the status of a cross-chain transaction.

        Args:
            transaction_id: Source-chain transaction hash
            request_id: Request id of the route, sent as x-request-id when given
            integrator_id: Integrator id, sent as x-integrator-id when given
            from_chain_id: Optional source chain id
            to_chain_id: Optional destination chain id

        Raises:
            UpstreamServiceError: If the service answers with a non-200 status
        """
        params: Dict[str, Any] = {"transactionId": transaction_id}
        if request_id:
            params["requestId"] = request_id
        if from_chain_id is not None:
            params["fromChainId"] = str(from_chain_id)
        if to_chain_id is not None:
            params["toChainId"] = str(to_chain_id)

        headers = {}
        if request_id:
            headers[REQUEST_ID_HEADER] = request_id
        if integrator_id:
            headers[INTEGRATOR_ID_HEADER] = integrator_id

        response = self.http.get("v1/status", params=params, headers=headers)
        if response.status != 200:
            raise UpstreamServiceError(
                _error_message(response),
                status_code=response.status,
                request_id=response.header(REQUEST_ID_HEADER)
            )

        status = StatusResponse.model_validate(response.data)
        status.request_id = response.header(REQUEST_ID_HEADER)
        status.integrator_id = response.header(INTEGRATOR_ID_HEADER)
        return status

    def get_token_price(self, token_address: str, chain_id: Union[str, int]) -> float:
        """
        Fetch a token's current USD price.

        The cached token snapshot is refreshed when the token is known.

        Raises:
            UpstreamServiceError: If the service answers with a non-200 status
                or returns no price
        """
        response = self.http.get(
            "v1/token-price",
            params={"tokenAddress": token_address, "chainId": str(chain_id)}
        )
        if response.status != 200:
            raise UpstreamServiceError(_error_message(response), status_code=response.status)

        token_data = response.data.get("token") if isinstance(response.data, dict) else None
        usd_price = token_data.get("usdPrice") if isinstance(token_data, dict) else None
        if usd_price is None:
            raise UpstreamServiceError(
                f"No USD price returned for token {token_address} on chain {chain_id}",
                status_code=response.status,
                request_id=response.header(REQUEST_ID_HEADER)
            )

        price = float(usd_price)
        token = self.find_token(token_address, chain_id)
        if token is not None:
            token.usd_price = price
        return price

    # ------------------------------------------------------------------
    # Route execution
    # ------------------------------------------------------------------

    def execute_route(
        self,
        route: Union[Route, RouteResponse],
        signer: Any,
        overrides: Optional[Dict[str, Any]] = None,
        execution_settings: Optional[ExecutionSettings] = None,
        signer_address: Optional[str] = None,
        wait_for_receipt: bool = True
    ) -> Any:
        """
        Execute a route on its source chain.

        Args:
            route: Route returned by get_route
            signer: EVM Signer, or Cosmos signing client for Cosmos sources
            overrides: Transaction fields taking precedence over derived gas
                parameters (EVM) or ``fee``/``memo`` (Cosmos)
            execution_settings: Approval behaviour; defaults to the config's
            signer_address: Signing account address (required for Cosmos)
            wait_for_receipt: Whether to wait for the EVM receipt

        Returns:
            TxReceipt for EVM sources, CosmosTxResult for Cosmos sources

        Raises:
            NotInitializedError: If init() has not completed
            MissingTransactionRequestError: If the route has no transaction request
            NotFoundError: If the route's chains or tokens are unknown
            UnsupportedChainFamilyError: If no handler serves the source chain family
            InsufficientBalanceError: If the sender cannot fund the route
        """
        route = self._validate_route(route)
        params = self._resolver.resolve(route.params, signer=signer)
        handler = self._handler_for(params.from_chain.chain_type, "execute_route")

        self.logger.debug(f"Executing route from chain {params.from_chain.chain_id} via {handler.chain_type.value}")
        return handler.execute_route(
            route,
            params,
            signer,
            overrides=overrides,
            execution_settings=execution_settings,
            signer_address=signer_address,
            wait_for_receipt=wait_for_receipt
        )

    def approve_route(
        self,
        route: Union[Route, RouteResponse],
        signer: Any,
        overrides: Optional[Dict[str, Any]] = None,
        execution_settings: Optional[ExecutionSettings] = None
    ) -> bool:
        """
        Grant the route's target contract an allowance on the source token.

        Raises:
            UnsupportedChainFamilyError: If the source chain family has no allowances
        """
        route = self._validate_route(route)
        params = self._resolver.resolve(route.params, signer=signer)
        handler = self._handler_for(params.from_chain.chain_type, "approve_route")
        return handler.approve_route(
            route,
            params,
            signer,
            overrides=overrides,
            execution_settings=execution_settings
        )

    def is_route_approved(self, route: Union[Route, RouteResponse], sender: str) -> RouteApproval:
        """
        Check whether ``sender`` has the balance and allowance the route needs.

        Read-only: the token contract is bound to a provider, not a signer.

        Raises:
            InsufficientBalanceError: If the sender's balance is below the route amount
            UnsupportedChainFamilyError: If the source chain family has no allowances
        """
        route = self._validate_route(route)
        params = self._resolver.resolve(route.params)
        handler = self._handler_for(params.from_chain.chain_type, "is_route_approved")
        return handler.is_route_approved(route, params, sender)

    def get_raw_tx_hex(
        self,
        route: Union[Route, RouteResponse],
        nonce: int,
        overrides: Optional[Dict[str, Any]] = None
    ) -> str:
        """
        Encode the route's transaction, unsigned, without broadcasting it.

        Raises:
            UnsupportedChainFamilyError: If the source chain is not EVM
            ValueError: If neither the route nor the overrides give a gas limit
        """
        route = self._validate_route(route)
        params = self._resolver.resolve(route.params)
        handler = self._handler_for(params.from_chain.chain_type, "get_raw_tx_hex")
        return handler.get_raw_tx_hex(route, params, nonce, overrides=overrides)

    # ------------------------------------------------------------------
    # Balances
    # ------------------------------------------------------------------

    def get_evm_balances(
        self,
        user_address: str,
        chain_ids: Optional[List[Union[str, int]]] = None
    ) -> List[ChainBalances]:
        """
        Query the user's token balances on EVM chains.

        Chains are queried concurrently. A chain that cannot be queried is
        reported with ``error`` set instead of failing the whole call.

        Args:
            user_address: EVM account address
            chain_ids: Chains to query; all EVM chains when omitted or empty
        """
        self._validate_init()
        chains = self.get_chains_by_type(ChainType.EVM, chain_ids)
        return self._evm_handler.get_balances(chains, [user_address], self.get_tokens_for_chains(chains))

    def get_cosmos_balances(
        self,
        addresses: List[CosmosAddress],
        chain_ids: Optional[List[Union[str, int]]] = None
    ) -> List[ChainBalances]:
        """
        Query bank balances on Cosmos chains.

        Chains are queried concurrently. A chain that cannot be queried is
        reported with ``error`` set instead of failing the whole call.

        Args:
            addresses: Cosmos addresses; each chain uses the one matching it
            chain_ids: Chains to query; all Cosmos chains when omitted or empty
        """
        self._validate_init()
        chains = self.get_chains_by_type(ChainType.COSMOS, chain_ids)
        return self._cosmos_handler.get_balances(chains, addresses)

    def close(self) -> None:
        self.http.close()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _validate_init(self) -> None:
        if self._state is not SdkState.READY:
            raise NotInitializedError()

    def _validate_route(self, route: Union[Route, RouteResponse]) -> Route:
        self._validate_init()
        if isinstance(route, RouteResponse):
            route = route.route
        if route.transaction_request is None:
            raise MissingTransactionRequestError()
        return route

    def _handler_for(self, chain_type: str, operation: str) -> ChainHandler:
        """Select the handler for a chain family; every ChainType has exactly one."""
        try:
            family = ChainType(chain_type)
        except ValueError:
            raise UnsupportedChainFamilyError(chain_type, operation)

        if family is ChainType.EVM:
            return self._evm_handler
        if family is ChainType.COSMOS:
            return self._cosmos_handler
        raise UnsupportedChainFamilyError(chain_type, operation)


def _error_message(response: HttpResponse) -> str:
    """The routing service's error text, verbatim when present"""
    data = response.data
    if isinstance(data, dict):
        error = data.get("error")
        if isinstance(error, str):
            return error
        if isinstance(error, dict) and isinstance(error.get("message"), str):
            return error["message"]
        if isinstance(data.get("message"), str):
            return data["message"]
    return f"Request failed with status {response.status}"
