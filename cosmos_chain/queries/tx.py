"""Tx service queries"""

from typing import Optional

from cosmpy.protos.cosmos.tx.v1beta1 import service_pb2
from cosmpy.protos.cosmos.tx.v1beta1.service_pb2_grpc import ServiceStub as TxServiceStub

from ..errors import InvalidInputError
from ..tx import SignedTx
from .base import QueryMixin


class TxQueries(QueryMixin):
    async def tx_by_hash(self, tx_hash: str, timeout: Optional[float] = None) -> service_pb2.GetTxResponse:
        """Full transaction and its result, from the application's tx index"""
        if not tx_hash:
            raise InvalidInputError("tx hash must not be empty")
        request = service_pb2.GetTxRequest(hash=tx_hash.upper())
        return await self._query(TxServiceStub, "GetTx", request, timeout)

    async def simulate(self, signed: SignedTx, timeout: Optional[float] = None) -> service_pb2.SimulateResponse:
        """Dry-run a signed transaction and report gas usage"""
        request = service_pb2.SimulateRequest(tx_bytes=signed.to_bytes())
        return await self._query(TxServiceStub, "Simulate", request, timeout)
