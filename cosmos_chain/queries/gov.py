"""Governance module queries"""

from typing import Optional

from cosmpy.protos.cosmos.gov.v1beta1 import query_pb2 as gov_query_pb2
from cosmpy.protos.cosmos.gov.v1beta1.query_pb2_grpc import QueryStub as GovQueryStub

from ..types import PageRequest
from .base import QueryMixin, paged, required

GOV_PARAMS_TYPES = ("voting", "deposit", "tallying")


class GovQueries(QueryMixin):
    async def gov_params(
        self, params_type: str = "voting", timeout: Optional[float] = None
    ) -> gov_query_pb2.QueryParamsResponse:
        """One of the ``voting``, ``deposit`` or ``tallying`` parameter sets"""
        request = gov_query_pb2.QueryParamsRequest(params_type=params_type)
        return await self._query(GovQueryStub, "Params", request, timeout)

    async def proposal(self, proposal_id: int, timeout: Optional[float] = None):
        request = gov_query_pb2.QueryProposalRequest(proposal_id=proposal_id)
        response = await self._query(GovQueryStub, "Proposal", request, timeout)
        return required(response, "proposal", f"proposal {proposal_id}")

    async def proposals(
        self,
        proposal_status: int = 0,
        voter: str = "",
        depositor: str = "",
        pagination: Optional[PageRequest] = None,
        timeout: Optional[float] = None,
    ) -> gov_query_pb2.QueryProposalsResponse:
        """Proposals, filtered by status, voter or depositor when given"""
        request = gov_query_pb2.QueryProposalsRequest(
            proposal_status=proposal_status,
            voter=voter,
            depositor=depositor,
            **paged(pagination),
        )
        return await self._query(GovQueryStub, "Proposals", request, timeout)

    async def vote(self, proposal_id: int, voter: str, timeout: Optional[float] = None):
        request = gov_query_pb2.QueryVoteRequest(proposal_id=proposal_id, voter=voter)
        response = await self._query(GovQueryStub, "Vote", request, timeout)
        return required(response, "vote", f"vote by {voter} on proposal {proposal_id}")

    async def votes(
        self,
        proposal_id: int,
        pagination: Optional[PageRequest] = None,
        timeout: Optional[float] = None,
    ) -> gov_query_pb2.QueryVotesResponse:
        request = gov_query_pb2.QueryVotesRequest(proposal_id=proposal_id, **paged(pagination))
        return await self._query(GovQueryStub, "Votes", request, timeout)

    async def deposit(self, proposal_id: int, depositor: str, timeout: Optional[float] = None):
        request = gov_query_pb2.QueryDepositRequest(proposal_id=proposal_id, depositor=depositor)
        response = await self._query(GovQueryStub, "Deposit", request, timeout)
        return required(response, "deposit", f"deposit by {depositor} on proposal {proposal_id}")

    async def deposits(
        self,
        proposal_id: int,
        pagination: Optional[PageRequest] = None,
        timeout: Optional[float] = None,
    ) -> gov_query_pb2.QueryDepositsResponse:
        request = gov_query_pb2.QueryDepositsRequest(proposal_id=proposal_id, **paged(pagination))
        return await self._query(GovQueryStub, "Deposits", request, timeout)

    async def tally_result(self, proposal_id: int, timeout: Optional[float] = None):
        request = gov_query_pb2.QueryTallyResultRequest(proposal_id=proposal_id)
        response = await self._query(GovQueryStub, "TallyResult", request, timeout)
        return required(response, "tally", f"tally for proposal {proposal_id}")
