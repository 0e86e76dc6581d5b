"""
Normalization of routing-service responses into typed models.
"""
import logging
from typing import Dict, Any, List, Optional

from .models import (
    BridgeCall, Call, CallType, CustomCall, Estimate, OptimalRoute,
    Route, RouteResponse, SwapCall, TransactionRequest
)

logger = logging.getLogger(__name__)

_CALL_MODELS = {
    CallType.BRIDGE.value: BridgeCall,
    CallType.SWAP.value: SwapCall,
    CallType.CUSTOM.value: CustomCall,
}


def parse_calls(
    data: Optional[List[Dict[str, Any]]],
    leg: str = "",
    dropped: Optional[List[str]] = None
) -> List[Call]:
    """
    Parse the calls of one route leg.

    Only bridge, swap and custom calls are kept. Every other call is
    dropped from the plan, logged at WARNING and, when ``dropped`` is
    given, its type is appended to it.

    Args:
        data: Raw call list from the routing service
        leg: Name of the leg ("fromChain"/"toChain"), used in log messages
        dropped: Optional list collecting the types of dropped calls

    Returns:
        Typed calls, in the service's order
    """
    calls: List[Call] = []
    for raw_call in data or []:
        call_type = raw_call.get("type")
        model = _CALL_MODELS.get(call_type)
        if model is None:
            logger.warning(f"Dropping route call with unsupported type {call_type!r} from {leg or 'route'} plan")
            if dropped is not None:
                dropped.append(str(call_type))
            continue
        calls.append(model.model_validate(raw_call))
    return calls


def parse_optimal_route(data: Optional[Dict[str, Any]]) -> OptimalRoute:
    data = data or {}
    dropped: List[str] = []
    return OptimalRoute(
        from_chain=parse_calls(data.get("fromChain"), "fromChain", dropped),
        to_chain=parse_calls(data.get("toChain"), "toChain", dropped),
        dropped_call_types=dropped,
    )


def parse_estimate(data: Dict[str, Any]) -> Estimate:
    return Estimate.model_validate({**data, "route": parse_optimal_route(data.get("route"))})


def parse_transaction_request(data: Optional[Dict[str, Any]]) -> Optional[TransactionRequest]:
    if not data:
        return None
    return TransactionRequest.model_validate(data)


def parse_route(data: Dict[str, Any]) -> Route:
    """Parse a bare route object (estimate, transactionRequest, params)."""
    estimate = data.get("estimate")
    return Route(
        estimate=parse_estimate(estimate) if estimate else None,
        transaction_request=parse_transaction_request(data.get("transactionRequest")),
        params=data["params"],
    )


def parse_route_response(
    data: Dict[str, Any],
    request_id: Optional[str] = None,
    integrator_id: Optional[str] = None
) -> RouteResponse:
    """
    Parse a route response body.

    Accepts either ``{"route": {...}}`` or the bare route object.
    """
    route_data = data.get("route", data)
    return RouteResponse(
        route=parse_route(route_data),
        request_id=request_id,
        integrator_id=integrator_id,
    )
