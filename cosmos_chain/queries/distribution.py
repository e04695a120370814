"""Distribution module queries"""

from typing import Optional

from cosmpy.protos.cosmos.distribution.v1beta1 import query_pb2 as distribution_query_pb2
from cosmpy.protos.cosmos.distribution.v1beta1.query_pb2_grpc import (
    QueryStub as DistributionQueryStub,
)

from ..types import PageRequest
from .base import QueryMixin, paged, required


class DistributionQueries(QueryMixin):
    async def distribution_params(self, timeout: Optional[float] = None):
        request = distribution_query_pb2.QueryParamsRequest()
        response = await self._query(DistributionQueryStub, "Params", request, timeout)
        return response.params

    async def validator_outstanding_rewards(
        self, validator_address: str, timeout: Optional[float] = None
    ):
        request = distribution_query_pb2.QueryValidatorOutstandingRewardsRequest(
            validator_address=validator_address
        )
        response = await self._query(
            DistributionQueryStub, "ValidatorOutstandingRewards", request, timeout
        )
        return required(response, "rewards", f"outstanding rewards for {validator_address}")

    async def validator_commission(self, validator_address: str, timeout: Optional[float] = None):
        request = distribution_query_pb2.QueryValidatorCommissionRequest(
            validator_address=validator_address
        )
        response = await self._query(DistributionQueryStub, "ValidatorCommission", request, timeout)
        return required(response, "commission", f"commission for {validator_address}")

    async def validator_slashes(
        self,
        validator_address: str,
        starting_height: int = 0,
        ending_height: int = 0,
        pagination: Optional[PageRequest] = None,
        timeout: Optional[float] = None,
    ) -> distribution_query_pb2.QueryValidatorSlashesResponse:
        """Slash events of a validator between two heights"""
        request = distribution_query_pb2.QueryValidatorSlashesRequest(
            validator_address=validator_address,
            starting_height=starting_height,
            ending_height=ending_height,
            **paged(pagination),
        )
        return await self._query(DistributionQueryStub, "ValidatorSlashes", request, timeout)

    async def delegation_rewards(
        self, delegator_address: str, validator_address: str, timeout: Optional[float] = None
    ):
        request = distribution_query_pb2.QueryDelegationRewardsRequest(
            delegator_address=delegator_address, validator_address=validator_address
        )
        response = await self._query(DistributionQueryStub, "DelegationRewards", request, timeout)
        return list(response.rewards)

    async def delegation_total_rewards(
        self, delegator_address: str, timeout: Optional[float] = None
    ) -> distribution_query_pb2.QueryDelegationTotalRewardsResponse:
        request = distribution_query_pb2.QueryDelegationTotalRewardsRequest(
            delegator_address=delegator_address
        )
        return await self._query(DistributionQueryStub, "DelegationTotalRewards", request, timeout)

    async def delegator_withdraw_address(
        self, delegator_address: str, timeout: Optional[float] = None
    ) -> str:
        request = distribution_query_pb2.QueryDelegatorWithdrawAddressRequest(
            delegator_address=delegator_address
        )
        response = await self._query(
            DistributionQueryStub, "DelegatorWithdrawAddress", request, timeout
        )
        return response.withdraw_address

    async def community_pool(self, timeout: Optional[float] = None):
        request = distribution_query_pb2.QueryCommunityPoolRequest()
        response = await self._query(DistributionQueryStub, "CommunityPool", request, timeout)
        return list(response.pool)
