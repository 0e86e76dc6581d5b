"""
Chain-family handlers.

One handler per chain family; the client selects among them with an
exhaustive match on ChainType.
"""
from .base import ChainHandler
from .cosmos import CosmosHandler
from .evm import EvmHandler

__all__ = ['ChainHandler', 'CosmosHandler', 'EvmHandler']
