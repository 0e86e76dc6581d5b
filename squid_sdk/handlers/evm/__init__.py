"""
EVM chain-family handler.
"""
from .contract import Erc20Contract
from .handler import EvmHandler
from .provider import rpc_provider

__all__ = ['EvmHandler', 'Erc20Contract', 'rpc_provider']
