"""
Squid SDK - request and execute cross-chain swap routes.
"""
from .client import Squid, SdkState
from .config import SquidConfig
from .constants import NATIVE_TOKEN_ADDRESS
from .exceptions import (
    SquidError, NotInitializedError, NotFoundError, MissingTransactionRequestError,
    UnsupportedChainFamilyError, InsufficientBalanceError, UpstreamServiceError,
    TransportError, TransactionError, UnsupportedMessageTypeError
)
from .models import (
    ChainType, CallType, ChainData, TokenData, RouteRequest, RouteParams, Route,
    RouteResponse, TransactionRequest, Estimate, StatusResponse, ResolvedRouteParams,
    RouteApproval, TxReceipt, CosmosTxResult, CosmosAddress, TokenBalance,
    ChainBalances, ExecutionSettings
)
from .signer import Signer, CosmosSigner, LocalSigner
from .version import __version__

__all__ = [
    "Squid", "SdkState", "SquidConfig", "NATIVE_TOKEN_ADDRESS",
    "SquidError", "NotInitializedError", "NotFoundError", "MissingTransactionRequestError",
    "UnsupportedChainFamilyError", "InsufficientBalanceError", "UpstreamServiceError",
    "TransportError", "TransactionError", "UnsupportedMessageTypeError",
    "ChainType", "CallType", "ChainData", "TokenData", "RouteRequest", "RouteParams", "Route",
    "RouteResponse", "TransactionRequest", "Estimate", "StatusResponse", "ResolvedRouteParams",
    "RouteApproval", "TxReceipt", "CosmosTxResult", "CosmosAddress", "TokenBalance",
    "ChainBalances", "ExecutionSettings",
    "Signer", "CosmosSigner", "LocalSigner",
    "__version__",
]
