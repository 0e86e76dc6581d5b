#!/usr/bin/env python3
"""
Simple example of using the Squid SDK.
"""
import os

from squid_sdk import LocalSigner, Squid, SquidConfig, SquidError
from squid_sdk.models import RouteRequest


def main():
    """
    Demonstrate basic usage of the Squid client.

    This example shows how to:
    1. Initialize the client
    2. Request a route from Ethereum USDC to Arbitrum USDC
    3. Execute the route and check its status
    """
    # Read configuration from environment
    PRIVATE_KEY = os.environ.get("PRIVATE_KEY")
    if not os.environ.get("SQUID_INTEGRATOR_ID"):
        print("ERROR: SQUID_INTEGRATOR_ID environment variable is required")
        return

    if not PRIVATE_KEY:
        print("ERROR: PRIVATE_KEY environment variable is required")
        return

    squid = Squid(SquidConfig.from_env())
    signer = LocalSigner(PRIVATE_KEY)

    try:
        squid.init()
        if squid.is_in_maintenance_mode:
            print(f"Squid is in maintenance mode: {squid.maintenance_message}")
            return

        response = squid.get_route(RouteRequest(
            from_chain="1",
            to_chain="42161",
            from_token="0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48",
            to_token="0xaf88d065e77c8cC2239327C5EDb3A432268e5831",
            from_amount="1000000",
            to_address=signer.address,
            slippage=1.0,
        ))
        estimate = response.route.estimate
        print(f"Expected to receive {estimate.to_amount} (min {estimate.to_amount_min})")

        approval = squid.is_route_approved(response, signer.address)
        print(f"Approval: {approval.message}")

        tx_receipt = squid.execute_route(response, signer)
        print(f"Transaction hash: {tx_receipt.tx_hash}")
        print(f"Status: {'Success' if tx_receipt.status == 1 else 'Failed'}")

        status = squid.get_status(
            tx_receipt.tx_hash,
            request_id=response.request_id,
            integrator_id=response.integrator_id
        )
        print(f"Cross-chain status: {status.squid_transaction_status}")

    except SquidError as e:
        print(f"Error executing route: {str(e)}")
    finally:
        squid.close()


if __name__ == "__main__":
    main()
