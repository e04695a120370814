"""Mint module queries"""

from typing import Optional

from cosmpy.protos.cosmos.mint.v1beta1 import query_pb2 as mint_query_pb2
from cosmpy.protos.cosmos.mint.v1beta1.query_pb2_grpc import QueryStub as MintQueryStub

from .base import QueryMixin


class MintQueries(QueryMixin):
    async def mint_params(self, timeout: Optional[float] = None):
        request = mint_query_pb2.QueryParamsRequest()
        response = await self._query(MintQueryStub, "Params", request, timeout)
        return response.params

    async def inflation(self, timeout: Optional[float] = None) -> mint_query_pb2.QueryInflationResponse:
        request = mint_query_pb2.QueryInflationRequest()
        return await self._query(MintQueryStub, "Inflation", request, timeout)

    async def annual_provisions(
        self, timeout: Optional[float] = None
    ) -> mint_query_pb2.QueryAnnualProvisionsResponse:
        request = mint_query_pb2.QueryAnnualProvisionsRequest()
        return await self._query(MintQueryStub, "AnnualProvisions", request, timeout)
