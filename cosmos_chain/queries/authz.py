"""Authz module queries"""

from typing import Optional

from cosmpy.protos.cosmos.authz.v1beta1 import query_pb2 as authz_query_pb2
from cosmpy.protos.cosmos.authz.v1beta1.query_pb2_grpc import QueryStub as AuthzQueryStub

from ..types import PageRequest
from .base import QueryMixin, paged


class AuthzQueries(QueryMixin):
    async def grants(
        self,
        granter: str,
        grantee: str,
        msg_type_url: str = "",
        pagination: Optional[PageRequest] = None,
        timeout: Optional[float] = None,
    ) -> authz_query_pb2.QueryGrantsResponse:
        """Grants from ``granter`` to ``grantee``, optionally for one message type"""
        request = authz_query_pb2.QueryGrantsRequest(
            granter=granter, grantee=grantee, msg_type_url=msg_type_url, **paged(pagination)
        )
        return await self._query(AuthzQueryStub, "Grants", request, timeout)

    async def granter_grants(
        self,
        granter: str,
        pagination: Optional[PageRequest] = None,
        timeout: Optional[float] = None,
    ) -> authz_query_pb2.QueryGranterGrantsResponse:
        request = authz_query_pb2.QueryGranterGrantsRequest(granter=granter, **paged(pagination))
        return await self._query(AuthzQueryStub, "GranterGrants", request, timeout)

    async def grantee_grants(
        self,
        grantee: str,
        pagination: Optional[PageRequest] = None,
        timeout: Optional[float] = None,
    ) -> authz_query_pb2.QueryGranteeGrantsResponse:
        request = authz_query_pb2.QueryGranteeGrantsRequest(grantee=grantee, **paged(pagination))
        return await self._query(AuthzQueryStub, "GranteeGrants", request, timeout)
