"""
Tests for ChainConfig loading and validation.
"""

import pytest

from cosmos_chain import ChainConfig, InvalidConfigError
from cosmos_chain.config import DEFAULT_CONNECT_TIMEOUT

from fakes import CHAIN_ID, DENOM, GRPC_ENDPOINT, PREFIX, RPC_ENDPOINT, make_config

REQUIRED = {
    "COSMOS_CHAIN_ID": CHAIN_ID,
    "COSMOS_ACCOUNT_PREFIX": PREFIX,
    "COSMOS_RPC_ENDPOINT": RPC_ENDPOINT,
    "COSMOS_GRPC_ENDPOINT": GRPC_ENDPOINT,
}


@pytest.fixture
def env(monkeypatch):
    for name in list(REQUIRED) + ["COSMOS_FEE_DENOM", "COSMOS_CONNECT_TIMEOUT", "COSMOS_REQUEST_TIMEOUT"]:
        monkeypatch.delenv(name, raising=False)
    for name, value in REQUIRED.items():
        monkeypatch.setenv(name, value)
    return monkeypatch


class TestFromEnv:
    """Tests for ChainConfig.from_env"""

    def test_required_only(self, env):
        config = ChainConfig.from_env()
        assert config.chain_id == CHAIN_ID
        assert config.account_prefix == PREFIX
        assert config.rpc_endpoint == RPC_ENDPOINT
        assert config.grpc_endpoint == GRPC_ENDPOINT
        assert config.fee_denom is None
        assert config.connect_timeout == DEFAULT_CONNECT_TIMEOUT
        assert config.request_timeout is None

    def test_optional_values(self, env):
        env.setenv("COSMOS_FEE_DENOM", DENOM)
        env.setenv("COSMOS_CONNECT_TIMEOUT", "2.5")
        env.setenv("COSMOS_REQUEST_TIMEOUT", "30")
        config = ChainConfig.from_env()
        assert config.fee_denom == DENOM
        assert config.connect_timeout == 2.5
        assert config.request_timeout == 30.0

    def test_custom_prefix(self, env):
        for name, value in REQUIRED.items():
            env.setenv("TESTNET_" + name[len("COSMOS_"):], value)
        env.setenv("TESTNET_CHAIN_ID", "other-chain")
        assert ChainConfig.from_env(prefix="TESTNET_").chain_id == "other-chain"

    def test_missing_variables_are_listed(self, env):
        env.delenv("COSMOS_CHAIN_ID")
        env.delenv("COSMOS_GRPC_ENDPOINT")
        with pytest.raises(InvalidConfigError) as excinfo:
            ChainConfig.from_env()
        assert "COSMOS_CHAIN_ID" in str(excinfo.value)
        assert "COSMOS_GRPC_ENDPOINT" in str(excinfo.value)

    def test_bad_timeout(self, env):
        env.setenv("COSMOS_REQUEST_TIMEOUT", "soon")
        with pytest.raises(InvalidConfigError):
            ChainConfig.from_env()

    def test_empty_timeout_uses_default(self, env):
        env.setenv("COSMOS_CONNECT_TIMEOUT", "")
        assert ChainConfig.from_env().connect_timeout == DEFAULT_CONNECT_TIMEOUT


class TestValidate:
    """Tests for ChainConfig.validate"""

    def test_valid(self):
        make_config().validate()

    @pytest.mark.parametrize(
        "overrides",
        [
            {"chain_id": ""},
            {"chain_id": "x" * 51},
            {"account_prefix": ""},
            {"account_prefix": "cosmos-1"},
            {"rpc_endpoint": ""},
            {"grpc_endpoint": ""},
            {"fee_denom": "1bad"},
            {"connect_timeout": 0},
            {"request_timeout": -1.0},
        ],
    )
    def test_invalid(self, overrides):
        with pytest.raises(InvalidConfigError):
            make_config(**overrides).validate()

    def test_no_timeouts_is_valid(self):
        make_config(connect_timeout=None, request_timeout=None).validate()

    def test_builders_chain(self):
        config = make_config().with_rpc_endpoint("http://node:26657").with_fee_denom("uatom")
        assert config.rpc_endpoint == "http://node:26657"
        assert config.fee_denom == "uatom"
