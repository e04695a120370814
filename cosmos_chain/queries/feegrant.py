"""Fee grant module queries"""

from typing import Optional

from cosmpy.protos.cosmos.feegrant.v1beta1 import query_pb2 as feegrant_query_pb2
from cosmpy.protos.cosmos.feegrant.v1beta1.query_pb2_grpc import QueryStub as FeegrantQueryStub

from ..errors import EmptyResultError
from ..types import PageRequest
from .base import QueryMixin, paged


class FeegrantQueries(QueryMixin):
    async def allowance(self, granter: str, grantee: str, timeout: Optional[float] = None):
        request = feegrant_query_pb2.QueryAllowanceRequest(granter=granter, grantee=grantee)
        response = await self._query(FeegrantQueryStub, "Allowance", request, timeout)
        if not response.HasField("allowance"):
            raise EmptyResultError(f"no fee allowance from {granter} to {grantee}")
        return response.allowance

    async def allowances(
        self,
        grantee: str,
        pagination: Optional[PageRequest] = None,
        timeout: Optional[float] = None,
    ) -> feegrant_query_pb2.QueryAllowancesResponse:
        request = feegrant_query_pb2.QueryAllowancesRequest(grantee=grantee, **paged(pagination))
        return await self._query(FeegrantQueryStub, "Allowances", request, timeout)
