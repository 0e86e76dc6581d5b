"""
Data models for the Squid SDK.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Any, Optional, List, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ChainType(str, Enum):
    """Chain families a route can be executed on"""
    EVM = "evm"
    COSMOS = "cosmos"


class CallType(str, Enum):
    """Call kinds the routing service places in a route plan"""
    BRIDGE = "BRIDGE_CALL"
    SWAP = "SWAP"
    CUSTOM = "CUSTOM_CALL"


class SquidModel(BaseModel):
    """Base for wire models: camelCase on the wire, snake_case in Python"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra="ignore",
    )


# ---------------------------------------------------------------------------
# Chain and token metadata
# ---------------------------------------------------------------------------

class NativeCurrency(SquidModel):
    name: Optional[str] = None
    symbol: str
    decimals: int = 18


class Bech32Config(SquidModel):
    bech32_prefix_acc_addr: str


class CosmosCurrency(SquidModel):
    coin_denom: str
    coin_minimal_denom: str
    coin_decimals: int = 6


class ChainData(SquidModel):
    """Static metadata for one supported chain"""
    chain_id: str
    chain_name: Optional[str] = None
    chain_type: str
    rpc: str
    rest: Optional[str] = None
    native_currency: Optional[NativeCurrency] = None
    coin_type: Optional[int] = None
    bech32_config: Optional[Bech32Config] = None
    currencies: List[CosmosCurrency] = Field(default_factory=list)


class TokenData(SquidModel):
    """Static metadata for one token on one chain"""
    chain_id: str
    address: str
    name: Optional[str] = None
    symbol: str
    decimals: int
    logo_uri: Optional[str] = Field(None, alias="logoURI")
    coingecko_id: Optional[str] = None
    usd_price: Optional[float] = None


class SdkInfo(SquidModel):
    """Payload of the sdk-info endpoint"""
    tokens: List[TokenData] = Field(default_factory=list)
    chains: List[ChainData] = Field(default_factory=list)
    is_in_maintenance_mode: bool = False
    maintenance_message: Optional[str] = None
    axelar_scan_url: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("axelarScanUrl", "axlScanUrl", "axelar_scan_url"),
    )


# ---------------------------------------------------------------------------
# Route requests
# ---------------------------------------------------------------------------

class ContractCall(SquidModel):
    call_type: Optional[str] = None
    target: str
    value: Optional[str] = None
    call_data: str
    estimated_gas: Optional[str] = None
    payload: Optional[Dict[str, Any]] = None


class RouteRequest(SquidModel):
    """A caller's swap or bridge intent"""
    model_config = ConfigDict(frozen=True)

    from_chain: str
    to_chain: str
    from_token: str
    to_token: str
    from_amount: str
    to_address: str
    slippage: float
    from_address: Optional[str] = None
    quote_only: Optional[bool] = None
    enable_forecall: Optional[bool] = None
    custom_contract_calls: Optional[List[ContractCall]] = None

    def to_wire(self) -> Dict[str, Any]:
        """Serialize to the routing service's camelCase request body"""
        return self.model_dump(by_alias=True, exclude_none=True)


class RouteParams(SquidModel):
    """The request echoed back by the routing service, with resolved tokens"""
    from_chain: str
    to_chain: str
    from_token: TokenData
    to_token: TokenData
    from_amount: str
    to_address: str
    slippage: float
    from_address: Optional[str] = None
    quote_only: Optional[bool] = None
    enable_forecall: Optional[bool] = None
    custom_contract_calls: Optional[List[ContractCall]] = None


# ---------------------------------------------------------------------------
# Route plan
# ---------------------------------------------------------------------------

class Dex(SquidModel):
    chain_name: Optional[str] = None
    dex_name: str
    factory: Optional[str] = None
    is_stable: Optional[bool] = None
    swap_router: Optional[str] = None


class BridgeCall(SquidModel):
    type: CallType = CallType.BRIDGE
    from_token: TokenData
    to_token: TokenData
    from_amount: str
    to_amount: str
    to_amount_min: Optional[str] = None
    exchange_rate: Optional[str] = None
    price_impact: Optional[str] = None


class SwapCall(SquidModel):
    type: CallType = CallType.SWAP
    dex: Dex
    path: List[str] = Field(default_factory=list)
    squid_call_type: Optional[int] = None
    from_token: TokenData
    to_token: TokenData
    from_amount: str
    to_amount: str
    to_amount_min: Optional[str] = None
    exchange_rate: Optional[str] = None
    price_impact: Optional[str] = None
    dynamic_slippage: Optional[float] = None


class CustomCall(SquidModel):
    type: CallType = CallType.CUSTOM
    call_type: Optional[int] = None
    target: str
    value: Optional[str] = None
    call_data: str
    estimated_gas: Optional[str] = None
    payload: Optional[Dict[str, Any]] = None


Call = Union[BridgeCall, SwapCall, CustomCall]


class OptimalRoute(SquidModel):
    from_chain: List[Call] = Field(default_factory=list)
    to_chain: List[Call] = Field(default_factory=list)
    # Types of calls left out of from_chain/to_chain because they are not supported
    dropped_call_types: List[str] = Field(default_factory=list)


class FeeCost(SquidModel):
    name: str
    description: Optional[str] = None
    percentage: Optional[str] = None
    token: TokenData
    amount: str
    amount_usd: Optional[str] = Field(None, alias="amountUSD")


class GasCost(SquidModel):
    type: str
    token: TokenData
    amount: str
    amount_usd: Optional[str] = Field(None, alias="amountUSD")
    gas_price: Optional[str] = None
    max_fee_per_gas: Optional[str] = None
    max_priority_fee_per_gas: Optional[str] = None
    estimate: Optional[str] = None
    limit: Optional[str] = None


class Estimate(SquidModel):
    from_amount: str
    send_amount: Optional[str] = None
    to_amount: str
    to_amount_min: Optional[str] = None
    route: OptimalRoute = Field(default_factory=OptimalRoute)
    exchange_rate: Optional[str] = None
    estimated_route_duration: Optional[int] = None
    aggregate_price_impact: Optional[str] = None
    fee_costs: List[FeeCost] = Field(default_factory=list)
    gas_costs: List[GasCost] = Field(default_factory=list)


class TransactionRequest(SquidModel):
    """Low-level instructions to submit on-chain"""
    route_type: Optional[str] = None
    target_address: str = Field(
        ...,
        validation_alias=AliasChoices("targetAddress", "target", "target_address"),
    )
    data: str
    value: str = "0"
    gas_limit: Optional[str] = None
    gas_price: Optional[str] = None
    gas_costs: Optional[str] = None
    max_fee_per_gas: Optional[str] = None
    max_priority_fee_per_gas: Optional[str] = None


class Route(SquidModel):
    """The routing service's proposed execution plan"""
    estimate: Optional[Estimate] = None
    transaction_request: Optional[TransactionRequest] = None
    params: RouteParams


class RouteResponse(SquidModel):
    route: Route
    request_id: Optional[str] = None
    integrator_id: Optional[str] = None


class StatusResponse(SquidModel):
    """Cross-chain transaction status"""
    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    status: Optional[str] = None
    squid_transaction_status: Optional[str] = None
    gas_status: Optional[str] = None
    is_gmp_transaction: Optional[bool] = None
    axelar_transaction_url: Optional[str] = None
    from_chain: Optional[Dict[str, Any]] = None
    to_chain: Optional[Dict[str, Any]] = None
    time_spent: Optional[Dict[str, Any]] = None
    error: Optional[Any] = None
    request_id: Optional[str] = None
    integrator_id: Optional[str] = None


# ---------------------------------------------------------------------------
# Execution
# ---------------------------------------------------------------------------

class ExecutionSettings(SquidModel):
    infinite_approval: bool = False


class RouteApproval(SquidModel):
    is_approved: bool
    message: str


class TxReceipt(BaseModel):
    """Transaction receipt from an EVM chain"""
    tx_hash: str = Field(..., alias="transactionHash")
    block_number: int = Field(..., alias="blockNumber")
    block_hash: str = Field(..., alias="blockHash")
    status: int
    gas_used: int = Field(..., alias="gasUsed")
    from_address: Optional[str] = Field(None, alias="from")
    to_address: Optional[str] = Field(None, alias="to")
    logs: List[Dict[str, Any]] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)


class CosmosTxResult(SquidModel):
    """Broadcast result from a Cosmos chain"""
    tx_hash: str = Field(
        ...,
        validation_alias=AliasChoices("transactionHash", "txHash", "txhash", "tx_hash"),
    )
    code: int = 0
    height: Optional[int] = None
    raw_log: Optional[str] = None
    gas_used: Optional[int] = None
    gas_wanted: Optional[int] = None


@dataclass
class ResolvedRouteParams:
    """
    Route parameters enriched with looked-up metadata and bound chain handles.

    Derived once per execution attempt and never shared between calls.

    Attributes:
        params: The route parameters as returned by the routing service
        from_chain: Source chain metadata
        to_chain: Destination chain metadata
        from_token: Source token metadata
        to_token: Destination token metadata
        from_provider: Read provider for the source chain (a Web3 instance for EVM)
        from_token_contract: ERC20 handle for the source token, None when native
        from_is_native: Whether the source token is the chain's native currency
    """
    params: RouteParams
    from_chain: ChainData
    to_chain: ChainData
    from_token: TokenData
    to_token: TokenData
    from_provider: Any
    from_token_contract: Optional[Any]
    from_is_native: bool

    @property
    def from_amount(self) -> int:
        return int(self.params.from_amount)


# ---------------------------------------------------------------------------
# Balances
# ---------------------------------------------------------------------------

class CosmosAddress(SquidModel):
    address: str
    coin_type: Optional[int] = None
    chain_id: Optional[str] = None


class TokenBalance(SquidModel):
    chain_id: str
    address: str
    symbol: str
    decimals: int
    balance: int


class ChainBalances(SquidModel):
    """Balances held by one address on one chain

    ``error`` is set when the chain could not be queried; ``balances`` is then empty.
    """
    chain_id: str
    address: str
    balances: List[TokenBalance] = Field(default_factory=list)
    error: Optional[str] = None
