"""Chain configuration"""

import os
from dataclasses import dataclass
from typing import Optional

from .errors import InvalidConfigError
from .types import DENOM_REGEX

DEFAULT_CONNECT_TIMEOUT = 10.0


@dataclass
class ChainConfig:
    """
    Everything a ChainClient needs to bind to one chain

    Example:
        >>> config = ChainConfig(
        ...     chain_id="cosmrs-test",
        ...     account_prefix="cosmos",
        ...     fee_denom="samoleans",
        ...     rpc_endpoint="http://localhost:26657",
        ...     grpc_endpoint="http://localhost:9090",
        ... )
    """

    chain_id: str
    account_prefix: str
    rpc_endpoint: str
    grpc_endpoint: str
    fee_denom: Optional[str] = None
    connect_timeout: Optional[float] = DEFAULT_CONNECT_TIMEOUT
    request_timeout: Optional[float] = None

    @classmethod
    def from_env(cls, prefix: str = "COSMOS_") -> "ChainConfig":
        """
        Load configuration from environment variables

        Reads ``<prefix>CHAIN_ID``, ``<prefix>ACCOUNT_PREFIX``,
        ``<prefix>RPC_ENDPOINT``, ``<prefix>GRPC_ENDPOINT`` and optionally
        ``<prefix>FEE_DENOM``, ``<prefix>CONNECT_TIMEOUT``,
        ``<prefix>REQUEST_TIMEOUT``.
        """
        missing = [
            name
            for name in ("CHAIN_ID", "ACCOUNT_PREFIX", "RPC_ENDPOINT", "GRPC_ENDPOINT")
            if not os.getenv(prefix + name)
        ]
        if missing:
            raise InvalidConfigError(
                "missing environment variables: " + ", ".join(prefix + m for m in missing)
            )

        config = cls(
            chain_id=os.environ[prefix + "CHAIN_ID"],
            account_prefix=os.environ[prefix + "ACCOUNT_PREFIX"],
            rpc_endpoint=os.environ[prefix + "RPC_ENDPOINT"],
            grpc_endpoint=os.environ[prefix + "GRPC_ENDPOINT"],
            fee_denom=os.getenv(prefix + "FEE_DENOM") or None,
            connect_timeout=_env_float(prefix + "CONNECT_TIMEOUT", DEFAULT_CONNECT_TIMEOUT),
            request_timeout=_env_float(prefix + "REQUEST_TIMEOUT", None),
        )
        config.validate()
        return config

    def with_rpc_endpoint(self, endpoint: str) -> "ChainConfig":
        """Set RPC endpoint"""
        self.rpc_endpoint = endpoint
        return self

    def with_grpc_endpoint(self, endpoint: str) -> "ChainConfig":
        """Set gRPC endpoint"""
        self.grpc_endpoint = endpoint
        return self

    def with_fee_denom(self, denom: str) -> "ChainConfig":
        self.fee_denom = denom
        return self

    def validate(self) -> None:
        """Validate configuration"""
        if not self.chain_id or len(self.chain_id) > 50:
            raise InvalidConfigError("chain_id must be 1-50 characters")
        if not self.account_prefix or not self.account_prefix.isalnum():
            raise InvalidConfigError("account_prefix must be a non-empty alphanumeric string")
        if not self.rpc_endpoint:
            raise InvalidConfigError("rpc_endpoint is required")
        if not self.grpc_endpoint:
            raise InvalidConfigError("grpc_endpoint is required")
        if self.fee_denom is not None and not DENOM_REGEX.match(self.fee_denom):
            raise InvalidConfigError(f"invalid fee denom {self.fee_denom!r}")
        for name in ("connect_timeout", "request_timeout"):
            value = getattr(self, name)
            if value is not None and value <= 0:
                raise InvalidConfigError(f"{name} must be positive")


def _env_float(name: str, default: Optional[float]) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise InvalidConfigError(f"{name} must be a number, got {raw!r}")
