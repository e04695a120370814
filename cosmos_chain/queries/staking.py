"""Staking module queries"""

from typing import Optional

from cosmpy.protos.cosmos.staking.v1beta1 import query_pb2 as staking_query_pb2
from cosmpy.protos.cosmos.staking.v1beta1.query_pb2_grpc import QueryStub as StakingQueryStub

from ..types import PageRequest
from .base import QueryMixin, paged, required

BOND_STATUSES = ("BOND_STATUS_BONDED", "BOND_STATUS_UNBONDING", "BOND_STATUS_UNBONDED")


class StakingQueries(QueryMixin):
    async def staking_params(self, timeout: Optional[float] = None):
        request = staking_query_pb2.QueryParamsRequest()
        response = await self._query(StakingQueryStub, "Params", request, timeout)
        return response.params

    async def validator(self, validator_addr: str, timeout: Optional[float] = None):
        request = staking_query_pb2.QueryValidatorRequest(validator_addr=validator_addr)
        response = await self._query(StakingQueryStub, "Validator", request, timeout)
        return required(response, "validator", f"validator {validator_addr}")

    async def validators(
        self,
        status: str = "",
        pagination: Optional[PageRequest] = None,
        timeout: Optional[float] = None,
    ) -> staking_query_pb2.QueryValidatorsResponse:
        """Validators, optionally filtered by one of BOND_STATUSES"""
        request = staking_query_pb2.QueryValidatorsRequest(status=status, **paged(pagination))
        return await self._query(StakingQueryStub, "Validators", request, timeout)

    async def validator_delegations(
        self,
        validator_addr: str,
        pagination: Optional[PageRequest] = None,
        timeout: Optional[float] = None,
    ) -> staking_query_pb2.QueryValidatorDelegationsResponse:
        request = staking_query_pb2.QueryValidatorDelegationsRequest(
            validator_addr=validator_addr, **paged(pagination)
        )
        return await self._query(StakingQueryStub, "ValidatorDelegations", request, timeout)

    async def validator_unbonding_delegations(
        self,
        validator_addr: str,
        pagination: Optional[PageRequest] = None,
        timeout: Optional[float] = None,
    ) -> staking_query_pb2.QueryValidatorUnbondingDelegationsResponse:
        request = staking_query_pb2.QueryValidatorUnbondingDelegationsRequest(
            validator_addr=validator_addr, **paged(pagination)
        )
        return await self._query(
            StakingQueryStub, "ValidatorUnbondingDelegations", request, timeout
        )

    async def delegation(
        self, delegator_addr: str, validator_addr: str, timeout: Optional[float] = None
    ):
        request = staking_query_pb2.QueryDelegationRequest(
            delegator_addr=delegator_addr, validator_addr=validator_addr
        )
        response = await self._query(StakingQueryStub, "Delegation", request, timeout)
        return required(
            response, "delegation_response", f"delegation from {delegator_addr} to {validator_addr}"
        )

    async def unbonding_delegation(
        self, delegator_addr: str, validator_addr: str, timeout: Optional[float] = None
    ):
        request = staking_query_pb2.QueryUnbondingDelegationRequest(
            delegator_addr=delegator_addr, validator_addr=validator_addr
        )
        response = await self._query(StakingQueryStub, "UnbondingDelegation", request, timeout)
        what = f"unbonding delegation from {delegator_addr} to {validator_addr}"
        return required(response, "unbond", what)

    async def delegator_delegations(
        self,
        delegator_addr: str,
        pagination: Optional[PageRequest] = None,
        timeout: Optional[float] = None,
    ) -> staking_query_pb2.QueryDelegatorDelegationsResponse:
        request = staking_query_pb2.QueryDelegatorDelegationsRequest(
            delegator_addr=delegator_addr, **paged(pagination)
        )
        return await self._query(StakingQueryStub, "DelegatorDelegations", request, timeout)

    async def delegator_unbonding_delegations(
        self,
        delegator_addr: str,
        pagination: Optional[PageRequest] = None,
        timeout: Optional[float] = None,
    ) -> staking_query_pb2.QueryDelegatorUnbondingDelegationsResponse:
        request = staking_query_pb2.QueryDelegatorUnbondingDelegationsRequest(
            delegator_addr=delegator_addr, **paged(pagination)
        )
        return await self._query(
            StakingQueryStub, "DelegatorUnbondingDelegations", request, timeout
        )

    async def redelegations(
        self,
        delegator_addr: str = "",
        src_validator_addr: str = "",
        dst_validator_addr: str = "",
        pagination: Optional[PageRequest] = None,
        timeout: Optional[float] = None,
    ) -> staking_query_pb2.QueryRedelegationsResponse:
        request = staking_query_pb2.QueryRedelegationsRequest(
            delegator_addr=delegator_addr,
            src_validator_addr=src_validator_addr,
            dst_validator_addr=dst_validator_addr,
            **paged(pagination),
        )
        return await self._query(StakingQueryStub, "Redelegations", request, timeout)

    async def delegator_validators(
        self,
        delegator_addr: str,
        pagination: Optional[PageRequest] = None,
        timeout: Optional[float] = None,
    ) -> staking_query_pb2.QueryDelegatorValidatorsResponse:
        request = staking_query_pb2.QueryDelegatorValidatorsRequest(
            delegator_addr=delegator_addr, **paged(pagination)
        )
        return await self._query(StakingQueryStub, "DelegatorValidators", request, timeout)

    async def delegator_validator(
        self, delegator_addr: str, validator_addr: str, timeout: Optional[float] = None
    ):
        request = staking_query_pb2.QueryDelegatorValidatorRequest(
            delegator_addr=delegator_addr, validator_addr=validator_addr
        )
        response = await self._query(StakingQueryStub, "DelegatorValidator", request, timeout)
        return required(response, "validator", f"validator {validator_addr}")

    async def historical_info(self, height: int, timeout: Optional[float] = None):
        request = staking_query_pb2.QueryHistoricalInfoRequest(height=height)
        response = await self._query(StakingQueryStub, "HistoricalInfo", request, timeout)
        return required(response, "hist", f"historical info at height {height}")

    async def staking_pool(self, timeout: Optional[float] = None):
        """Bonded and not-bonded token totals"""
        request = staking_query_pb2.QueryPoolRequest()
        response = await self._query(StakingQueryStub, "Pool", request, timeout)
        return required(response, "pool", "staking pool")
