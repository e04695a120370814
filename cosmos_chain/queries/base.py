"""Shared plumbing for the per-module query mixins"""

from typing import Any, Dict, Optional

import grpc
from google.protobuf.message import DecodeError as ProtoDecodeError

from ..errors import DecodeError, EmptyResultError
from ..grpc_errors import map_rpc_error
from ..types import PageRequest


def paged(pagination: Optional[PageRequest]) -> Dict[str, Any]:
    """Request keyword arguments carrying ``pagination`` only when it is set"""
    if pagination is None:
        return {}
    return {"pagination": pagination.to_proto()}


def required(response, field: str, what: str):
    """``response.<field>``, or EmptyResultError when the server left it unset"""
    if not response.HasField(field):
        raise EmptyResultError(f"no {what} in response")
    return getattr(response, field)


class QueryMixin:
    """
    Base for module query mixins

    The host class provides ``_pool`` (a SubClientPool), ``_grpc_endpoint``
    (redacted, for error messages) and ``_request_timeout``.
    """

    _pool: Any
    _grpc_endpoint: str = ""
    _request_timeout: Optional[float] = None

    async def _query(self, stub_cls, method: str, request, timeout: Optional[float] = None):
        """
        Resolve the stub for ``stub_cls``, call ``method`` and map failures

        Raises:
            TransportError: channel or stream failure
            RpcStatusError: the server answered with an error status
            OperationCancelledError: the call was cancelled on the wire
            DecodeError: the response did not decode
        """
        stub = await self._pool.get(stub_cls)
        if timeout is None:
            timeout = self._request_timeout
        try:
            return await getattr(stub, method)(request, timeout=timeout)
        except grpc.RpcError as e:
            raise map_rpc_error(e, self._grpc_endpoint, method) from e
        except ProtoDecodeError as e:
            raise DecodeError(f"{method}: {e}") from e
