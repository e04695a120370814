"""Lookups against the public Cosmos chain registry"""

import logging
from typing import Any, Dict, Optional

import requests

from .config import ChainConfig
from .errors import RegistryError

log = logging.getLogger(__name__)

REGISTRY_RAW_URL = "https://raw.githubusercontent.com/cosmos/chain-registry"
# pinned so that a registry edit cannot silently change endpoints
REGISTRY_GIT_REF = "d063b0fd6d1c20d6476880e5ea2212ade009f69e"


class ChainRegistry:
    """
    Synchronous reader for chain-registry JSON files

    Example:
        >>> registry = ChainRegistry()
        >>> config = registry.chain_config("cosmoshub")
    """

    def __init__(
        self,
        git_ref: str = REGISTRY_GIT_REF,
        base_url: str = REGISTRY_RAW_URL,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.git_ref = git_ref
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json"})

    def _get_json(self, path: str) -> Dict[str, Any]:
        url = f"{self.base_url}/{self.git_ref}/{path}"
        try:
            response = self.session.get(url, timeout=self.timeout)
            if response.status_code == 404:
                raise RegistryError(f"{path} does not exist at {self.git_ref}")
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            raise RegistryError(str(e))
        except ValueError as e:
            raise RegistryError(f"{path} is not valid JSON: {e}")

        if not isinstance(data, dict):
            raise RegistryError(f"{path} is not a JSON object")
        log.debug("fetched %s", path)
        return data

    def chain_info(self, name: str) -> Dict[str, Any]:
        """Raw ``chain.json`` for the chain folder ``name``"""
        return self._get_json(f"{name}/chain.json")

    def assets(self, name: str) -> Dict[str, Any]:
        """Raw ``assetlist.json`` for the chain folder ``name``"""
        return self._get_json(f"{name}/assetlist.json")

    def ibc_path(self, chain_a: str, chain_b: str) -> Dict[str, Any]:
        """IBC connection data between two chains, in either order"""
        first, second = sorted((chain_a, chain_b))
        return self._get_json(f"_IBC/{first}-{second}.json")

    def chain_config(self, name: str) -> ChainConfig:
        """ChainConfig built from the first listed RPC and gRPC endpoints"""
        return config_from_chain_info(self.chain_info(name))


def _first_address(info: Dict[str, Any], api: str) -> str:
    endpoints = (info.get("apis") or {}).get(api) or []
    for endpoint in endpoints:
        address = (endpoint or {}).get("address")
        if address:
            return address
    raise RegistryError(f"{info.get('chain_name', 'chain')} lists no {api} endpoint")


def config_from_chain_info(info: Dict[str, Any]) -> ChainConfig:
    """Turn a parsed ``chain.json`` into a ChainConfig"""
    try:
        chain_id = info["chain_id"]
        prefix = info["bech32_prefix"]
    except KeyError as e:
        raise RegistryError(f"chain.json is missing {e}")

    fee_tokens = (info.get("fees") or {}).get("fee_tokens") or []
    fee_denom = fee_tokens[0].get("denom") if fee_tokens else None

    grpc_endpoint = _first_address(info, "grpc")
    # registry gRPC entries are bare host:port; 443 means TLS
    if "://" not in grpc_endpoint and grpc_endpoint.endswith(":443"):
        grpc_endpoint = "https://" + grpc_endpoint

    return ChainConfig(
        chain_id=chain_id,
        account_prefix=prefix,
        rpc_endpoint=_first_address(info, "rpc"),
        grpc_endpoint=grpc_endpoint,
        fee_denom=fee_denom,
    )


def fetch_chain_info(name: str, git_ref: str = REGISTRY_GIT_REF) -> Dict[str, Any]:
    return ChainRegistry(git_ref=git_ref).chain_info(name)


def fetch_chain_config(name: str, git_ref: str = REGISTRY_GIT_REF) -> ChainConfig:
    """Fetch ``chain.json`` for ``name`` and build a ChainConfig from it"""
    return ChainRegistry(git_ref=git_ref).chain_config(name)
