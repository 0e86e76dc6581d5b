"""
Tests for SquidConfig.
"""
import pytest

from squid_sdk import SquidConfig
from squid_sdk.constants import DEFAULT_BASE_URL
from squid_sdk.models import ChainData, ExecutionSettings

CHAIN = ChainData.model_validate({"chainId": "osmosis-1", "chainType": "cosmos", "rpc": "https://rpc.osmosis.example.com"})


class TestSquidConfig:
    """Test SquidConfig class."""

    def test_defaults(self):
        config = SquidConfig(integrator_id="my-app")

        assert config.base_url == DEFAULT_BASE_URL
        assert config.timeout == 30
        assert config.retry_count == 3
        assert config.execution_settings == ExecutionSettings(infinite_approval=False)

    def test_trailing_slash_added(self):
        assert SquidConfig(integrator_id="a", base_url="https://api.example.com/v2").base_url == "https://api.example.com/v2/"

    @pytest.mark.parametrize("url", ["http://localhost:3000", "http://127.0.0.1"])
    def test_local_http_allowed(self, url):
        assert SquidConfig(integrator_id="a", base_url=url).base_url.startswith("http://")

    def test_insecure_url_rejected(self):
        with pytest.raises(ValueError, match="https://"):
            SquidConfig(integrator_id="a", base_url="http://api.example.com")

    def test_integrator_id_required(self):
        with pytest.raises(ValueError, match="integrator_id required"):
            SquidConfig(integrator_id="")


class TestFromEnv:
    """Test configuration from SQUID_* environment variables."""

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("SQUID_INTEGRATOR_ID", "env-app")
        monkeypatch.setenv("SQUID_BASE_URL", "https://api.example.com")
        monkeypatch.setenv("SQUID_TIMEOUT", "12")
        monkeypatch.setenv("SQUID_RETRY_COUNT", "0")

        config = SquidConfig.from_env()

        assert config.integrator_id == "env-app"
        assert config.base_url == "https://api.example.com/"
        assert config.timeout == 12
        assert config.retry_count == 0

    def test_keyword_arguments_win(self, monkeypatch):
        monkeypatch.setenv("SQUID_INTEGRATOR_ID", "env-app")

        assert SquidConfig.from_env(integrator_id="kw-app").integrator_id == "kw-app"

    def test_missing_integrator_id(self, monkeypatch):
        monkeypatch.delenv("SQUID_INTEGRATOR_ID", raising=False)

        with pytest.raises(ValueError, match="integrator_id required"):
            SquidConfig.from_env()


class TestRpcUrl:
    """Test RPC endpoint resolution."""

    def test_chain_metadata_default(self, monkeypatch):
        monkeypatch.delenv("SQUID_RPC_URL_OSMOSIS_1", raising=False)

        assert SquidConfig(integrator_id="a").get_rpc_url(CHAIN) == "https://rpc.osmosis.example.com"

    def test_environment_beats_metadata(self, monkeypatch):
        monkeypatch.setenv("SQUID_RPC_URL_OSMOSIS_1", "https://env.example.com")

        assert SquidConfig(integrator_id="a").get_rpc_url(CHAIN) == "https://env.example.com"

    def test_override_beats_environment(self, monkeypatch):
        monkeypatch.setenv("SQUID_RPC_URL_OSMOSIS_1", "https://env.example.com")
        config = SquidConfig(integrator_id="a", rpc_overrides={"osmosis-1": "https://override.example.com"})

        assert config.get_rpc_url(CHAIN) == "https://override.example.com"

    def test_int_override_keys(self):
        config = SquidConfig(integrator_id="a", rpc_overrides={1: "https://one.example.com"})

        assert config.get_rpc_url(1) == "https://one.example.com"

    def test_bare_chain_id_needs_default(self, monkeypatch):
        monkeypatch.delenv("SQUID_RPC_URL_137", raising=False)
        config = SquidConfig(integrator_id="a")

        assert config.get_rpc_url(137, default="https://polygon.example.com") == "https://polygon.example.com"
        with pytest.raises(ValueError, match="No RPC URL configured for chain 137"):
            config.get_rpc_url(137)
