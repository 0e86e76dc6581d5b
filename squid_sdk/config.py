"""
Configuration for the Squid SDK.
"""
import os
import urllib.parse
from dataclasses import dataclass, field
from typing import Dict, Optional, Union

from .constants import DEFAULT_BASE_URL
from .models import ChainData, ExecutionSettings


@dataclass
class SquidConfig:
    """
    Settings for a Squid client.

    Attributes:
        integrator_id: Integrator identifier sent as the x-integrator-id header (required)
        base_url: Routing service base URL
        timeout: Timeout in seconds for every HTTP and RPC call
        retry_count: Number of retries the HTTP transport performs on 5xx responses
        rpc_overrides: Chain id to RPC URL, taking precedence over the chain metadata
        execution_settings: Default execution settings for execute/approve calls
    """
    integrator_id: str
    base_url: str = DEFAULT_BASE_URL
    timeout: int = 30
    retry_count: int = 3
    rpc_overrides: Dict[str, str] = field(default_factory=dict)
    execution_settings: ExecutionSettings = field(default_factory=ExecutionSettings)

    def __post_init__(self):
        if not self.integrator_id:
            raise ValueError("integrator_id required")

        parsed = urllib.parse.urlparse(self.base_url)
        # Check if it's a localhost or 127.0.0.1 address (with or without port)
        host = parsed.netloc.split(':')[0]
        is_local = host in ('localhost', '127.0.0.1')
        if parsed.scheme != 'https' and not is_local:
            raise ValueError(f"base_url must use https:// for security (got: {parsed.scheme}://)")

        if not self.base_url.endswith('/'):
            self.base_url = self.base_url + '/'
        self.rpc_overrides = {str(k): v for k, v in self.rpc_overrides.items()}

    @classmethod
    def from_env(cls, **overrides) -> "SquidConfig":
        """
        Build a config from SQUID_* environment variables.

        Keyword arguments take precedence over the environment.

        Raises:
            ValueError: If no integrator id is available
        """
        values = {
            "integrator_id": os.environ.get("SQUID_INTEGRATOR_ID", ""),
            "base_url": os.environ.get("SQUID_BASE_URL", DEFAULT_BASE_URL),
            "timeout": int(os.environ.get("SQUID_TIMEOUT", "30")),
            "retry_count": int(os.environ.get("SQUID_RETRY_COUNT", "3")),
        }
        values.update(overrides)
        return cls(**values)

    def get_rpc_url(self, chain: Union[ChainData, str], default: Optional[str] = None) -> str:
        """
        Get the RPC URL to use for a chain.

        Resolution order: rpc_overrides, then the SQUID_RPC_URL_<CHAIN_ID>
        environment variable, then the chain metadata.

        Args:
            chain: Chain metadata or chain id
            default: URL to fall back to when a bare chain id is given

        Returns:
            RPC endpoint URL
        """
        if isinstance(chain, ChainData):
            chain_id, default = chain.chain_id, chain.rpc
        else:
            chain_id = str(chain)

        if chain_id in self.rpc_overrides:
            return self.rpc_overrides[chain_id]

        env_var = "SQUID_RPC_URL_" + chain_id.upper().replace('-', '_')
        env_url = os.environ.get(env_var)
        if env_url:
            return env_url

        if not default:
            raise ValueError(f"No RPC URL configured for chain {chain_id}")
        return default
