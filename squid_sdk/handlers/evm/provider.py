"""
Read providers for EVM chains.
"""
from web3 import Web3


def rpc_provider(rpc_url: str, timeout: int = 30) -> Web3:
    """
    Build a Web3 instance for an RPC endpoint.

    Construction is local: no request is made until the provider is used.
    """
    return Web3(Web3.HTTPProvider(rpc_url, request_kwargs={"timeout": timeout}))
