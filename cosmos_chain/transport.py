"""Transport layer: endpoint parsing, the gRPC channel and the consensus RPC client"""

import asyncio
import base64
import logging
from typing import Any, Dict, Optional, Tuple
from urllib.parse import urlsplit, urlunsplit

import grpc
import httpx

from .errors import (
    ConnectFailedError,
    DecodeError,
    EndpointInvalidError,
    InvalidInputError,
    RpcStatusError,
    TransportError,
)
from .types import TxInfo

log = logging.getLogger(__name__)

_GRPC_SCHEMES = {"http": False, "grpc": False, "https": True, "grpcs": True}


def redact_url(url: str) -> str:
    """Drop credentials and query strings so the URL can go into logs and errors"""
    has_scheme = "://" in url
    try:
        # without "//" urlsplit reads "user:secret@host" as scheme and path
        parts = urlsplit(url if has_scheme else "//" + url)
        port = parts.port
    except ValueError:
        return "<invalid url>"
    netloc = parts.hostname or ""
    if ":" in netloc:
        netloc = f"[{netloc}]"
    if port:
        netloc = f"{netloc}:{port}"
    if not has_scheme:
        return netloc or "<invalid url>"
    return urlunsplit((parts.scheme, netloc, parts.path, "", ""))


def parse_grpc_endpoint(endpoint: str) -> Tuple[str, bool]:
    """
    Turn a gRPC endpoint into a channel target

    Args:
        endpoint: ``http://host:port``, ``https://host[:port]``, ``grpc(s)://...``
            or a bare ``host:port``

    Returns:
        ``(host:port, secure)``
    """
    if not isinstance(endpoint, str) or not endpoint.strip():
        raise EndpointInvalidError(str(endpoint), "endpoint must be a non-empty string")
    raw = endpoint.strip()
    if "://" not in raw:
        raw = "http://" + raw
    try:
        parts = urlsplit(raw)
        port = parts.port
    except ValueError as e:
        raise EndpointInvalidError(redact_url(endpoint), str(e))

    scheme = parts.scheme.lower()
    if scheme not in _GRPC_SCHEMES:
        raise EndpointInvalidError(redact_url(endpoint), f"unsupported scheme {scheme!r}")
    if not parts.hostname:
        raise EndpointInvalidError(redact_url(endpoint), "missing host")
    if parts.path not in ("", "/") or parts.query:
        raise EndpointInvalidError(redact_url(endpoint), "gRPC endpoints cannot carry a path")

    secure = _GRPC_SCHEMES[scheme]
    if port is None:
        if not secure:
            raise EndpointInvalidError(redact_url(endpoint), "missing port")
        port = 443
    host = parts.hostname
    if ":" in host:
        host = f"[{host}]"
    return f"{host}:{port}", secure


def parse_rpc_endpoint(endpoint: str) -> str:
    """Validate a consensus RPC URL and return it without a trailing slash"""
    if not isinstance(endpoint, str) or not endpoint.strip():
        raise EndpointInvalidError(str(endpoint), "endpoint must be a non-empty string")
    try:
        parts = urlsplit(endpoint.strip())
        parts.port
    except ValueError as e:
        raise EndpointInvalidError(redact_url(endpoint), str(e))
    if parts.scheme.lower() not in ("http", "https"):
        raise EndpointInvalidError(redact_url(endpoint), "RPC endpoint must use http or https")
    if not parts.hostname:
        raise EndpointInvalidError(redact_url(endpoint), "missing host")
    return endpoint.strip().rstrip("/")


async def open_channel(endpoint: str, connect_timeout: Optional[float] = None) -> grpc.aio.Channel:
    """
    Open a gRPC channel and wait until it is connected

    Raises:
        EndpointInvalidError: malformed endpoint
        ConnectFailedError: the channel did not become ready in time
    """
    target, secure = parse_grpc_endpoint(endpoint)
    if secure:
        channel = grpc.aio.secure_channel(target, grpc.ssl_channel_credentials())
    else:
        channel = grpc.aio.insecure_channel(target)

    try:
        await asyncio.wait_for(channel.channel_ready(), timeout=connect_timeout)
    except asyncio.TimeoutError:
        await channel.close()
        raise ConnectFailedError(redact_url(endpoint), f"not ready after {connect_timeout}s")
    except grpc.RpcError as e:
        await channel.close()
        raise ConnectFailedError(redact_url(endpoint), str(e))

    log.info("gRPC channel open to %s", redact_url(endpoint))
    return channel


def _hash_param(tx_hash: str) -> str:
    try:
        raw = bytes.fromhex(tx_hash[2:] if tx_hash.lower().startswith("0x") else tx_hash)
    except ValueError:
        raise InvalidInputError(f"tx hash {tx_hash!r} is not hex")
    if len(raw) != 32:
        raise InvalidInputError(f"tx hash must be 32 bytes, got {len(raw)}")
    return base64.b64encode(raw).decode()


class TendermintRpc:
    """
    JSON-RPC client for the consensus node (Tendermint / CometBFT)

    Only ``status`` and ``tx`` are used; everything else goes over gRPC.
    """

    def __init__(
        self,
        endpoint: str,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.endpoint = parse_rpc_endpoint(endpoint)
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._request_id = 0

    @property
    def redacted_endpoint(self) -> str:
        return redact_url(self.endpoint)

    async def call(self, method: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """Send one JSON-RPC request and return its ``result``"""
        self._request_id += 1
        payload = {
            "jsonrpc": "2.0",
            "id": self._request_id,
            "method": method,
            "params": params or {},
        }
        try:
            response = await self._client.post(self.endpoint, json=payload)
        except httpx.HTTPError as e:
            raise TransportError(self.redacted_endpoint, f"{method}: {e}") from e

        try:
            data = response.json()
        except ValueError:
            if response.status_code >= 400:
                raise TransportError(
                    self.redacted_endpoint, f"{method}: HTTP {response.status_code}"
                )
            raise DecodeError(f"{method} response from {self.redacted_endpoint} is not JSON")

        if not isinstance(data, dict):
            raise DecodeError(f"{method} response from {self.redacted_endpoint} is not an object")
        if data.get("error"):
            error = data["error"]
            if not isinstance(error, dict):
                raise RpcStatusError(self.redacted_endpoint, "", str(error))
            raise RpcStatusError(
                self.redacted_endpoint,
                str(error.get("code", "")),
                f"{error.get('message', '')} {error.get('data', '')}".strip(),
            )
        if response.status_code >= 400:
            raise TransportError(self.redacted_endpoint, f"{method}: HTTP {response.status_code}")
        if "result" not in data:
            raise DecodeError(f"{method} response from {self.redacted_endpoint} has no result")
        return data["result"]

    async def status(self) -> Dict[str, Any]:
        return await self.call("status")

    async def latest_height(self) -> int:
        """Latest block height known to the node"""
        status = await self.status()
        try:
            return int(status["sync_info"]["latest_block_height"])
        except (KeyError, TypeError, ValueError) as e:
            raise DecodeError(f"malformed status response: {e}") from e

    async def tx(self, tx_hash: str) -> Optional[TxInfo]:
        """Look up a transaction by hash, or None if the node has not seen it (yet)"""
        try:
            result = await self.call("tx", {"hash": _hash_param(tx_hash), "prove": False})
        except RpcStatusError as e:
            if "not found" in e.message:
                return None
            raise
        return TxInfo.from_dict(result)

    async def aclose(self) -> None:
        await self._client.aclose()

