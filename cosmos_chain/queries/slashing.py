"""Slashing module queries"""

from typing import Optional

from cosmpy.protos.cosmos.slashing.v1beta1 import query_pb2 as slashing_query_pb2
from cosmpy.protos.cosmos.slashing.v1beta1.query_pb2_grpc import QueryStub as SlashingQueryStub

from ..types import PageRequest
from .base import QueryMixin, paged, required


class SlashingQueries(QueryMixin):
    async def slashing_params(self, timeout: Optional[float] = None):
        request = slashing_query_pb2.QueryParamsRequest()
        response = await self._query(SlashingQueryStub, "Params", request, timeout)
        return response.params

    async def signing_info(self, cons_address: str, timeout: Optional[float] = None):
        """Liveness record of a validator, by its consensus address"""
        request = slashing_query_pb2.QuerySigningInfoRequest(cons_address=cons_address)
        response = await self._query(SlashingQueryStub, "SigningInfo", request, timeout)
        return required(response, "val_signing_info", f"signing info for {cons_address}")

    async def signing_infos(
        self, pagination: Optional[PageRequest] = None, timeout: Optional[float] = None
    ) -> slashing_query_pb2.QuerySigningInfosResponse:
        request = slashing_query_pb2.QuerySigningInfosRequest(**paged(pagination))
        return await self._query(SlashingQueryStub, "SigningInfos", request, timeout)
