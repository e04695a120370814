"""Params module queries"""

from typing import Optional

from cosmpy.protos.cosmos.params.v1beta1 import query_pb2 as params_query_pb2
from cosmpy.protos.cosmos.params.v1beta1.query_pb2_grpc import QueryStub as ParamsQueryStub

from ..errors import InvalidInputError
from .base import QueryMixin, required


class ParamsQueries(QueryMixin):
    async def params(self, subspace: str, key: str, timeout: Optional[float] = None):
        """Raw parameter ``key`` of ``subspace`` as a ParamChange"""
        if not subspace or not key:
            raise InvalidInputError("params query needs both a subspace and a key")
        request = params_query_pb2.QueryParamsRequest(subspace=subspace, key=key)
        response = await self._query(ParamsQueryStub, "Params", request, timeout)
        return required(response, "param", f"param {subspace}/{key}")
