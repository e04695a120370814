"""Mapping of gRPC failures onto SDK errors"""

import grpc

from .errors import OperationCancelledError, RpcStatusError, SdkError, TransportError

_TRANSPORT_CODES = {grpc.StatusCode.UNAVAILABLE, grpc.StatusCode.DEADLINE_EXCEEDED}


def map_rpc_error(error: grpc.RpcError, endpoint: str, method: str = "") -> SdkError:
    """Convert a failed gRPC call into the matching SDK error (returned, not raised)"""
    code = error.code() if hasattr(error, "code") else None
    details = (error.details() if hasattr(error, "details") else None) or str(error)
    where = f"{method}: " if method else ""

    if code == grpc.StatusCode.CANCELLED:
        return OperationCancelledError(endpoint, f"({where}{details})")
    if code in _TRANSPORT_CODES:
        return TransportError(endpoint, f"{where}{code.name}: {details}")
    name = code.name if code is not None else "UNKNOWN"
    return RpcStatusError(endpoint, name, f"{where}{details}")
