"""Tendermint service queries over gRPC"""

import logging
from typing import Optional

from cosmpy.protos.cosmos.base.tendermint.v1beta1 import query_pb2 as tendermint_query_pb2
from cosmpy.protos.cosmos.base.tendermint.v1beta1.query_pb2_grpc import (
    ServiceStub as TendermintServiceStub,
)

from ..errors import SdkError
from ..types import PageRequest
from .base import QueryMixin, paged

log = logging.getLogger(__name__)


class TendermintQueries(QueryMixin):
    async def node_info(
        self, timeout: Optional[float] = None
    ) -> tendermint_query_pb2.GetNodeInfoResponse:
        request = tendermint_query_pb2.GetNodeInfoRequest()
        return await self._query(TendermintServiceStub, "GetNodeInfo", request, timeout)

    async def latest_block(
        self, timeout: Optional[float] = None
    ) -> tendermint_query_pb2.GetLatestBlockResponse:
        request = tendermint_query_pb2.GetLatestBlockRequest()
        return await self._query(TendermintServiceStub, "GetLatestBlock", request, timeout)

    async def block_by_height(
        self, height: int, timeout: Optional[float] = None
    ) -> tendermint_query_pb2.GetBlockByHeightResponse:
        request = tendermint_query_pb2.GetBlockByHeightRequest(height=height)
        return await self._query(TendermintServiceStub, "GetBlockByHeight", request, timeout)

    async def syncing(self, timeout: Optional[float] = None) -> bool:
        request = tendermint_query_pb2.GetSyncingRequest()
        response = await self._query(TendermintServiceStub, "GetSyncing", request, timeout)
        return response.syncing

    async def latest_validator_set(
        self, pagination: Optional[PageRequest] = None, timeout: Optional[float] = None
    ) -> tendermint_query_pb2.GetLatestValidatorSetResponse:
        request = tendermint_query_pb2.GetLatestValidatorSetRequest(**paged(pagination))
        return await self._query(TendermintServiceStub, "GetLatestValidatorSet", request, timeout)

    async def validator_set_by_height(
        self,
        height: int,
        pagination: Optional[PageRequest] = None,
        timeout: Optional[float] = None,
    ) -> tendermint_query_pb2.GetValidatorSetByHeightResponse:
        request = tendermint_query_pb2.GetValidatorSetByHeightRequest(
            height=height, **paged(pagination)
        )
        return await self._query(TendermintServiceStub, "GetValidatorSetByHeight", request, timeout)

    async def health_check(self, timeout: Optional[float] = None) -> bool:
        """
        Check if the node answers over gRPC

        Returns:
            True if the node responded, False otherwise
        """
        try:
            await self.syncing(timeout)
            return True
        except SdkError as e:
            log.debug("health check against %s failed: %s", self._grpc_endpoint, e)
            return False
