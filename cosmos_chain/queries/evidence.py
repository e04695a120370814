"""Evidence module queries"""

from typing import Optional, Union

from cosmpy.protos.cosmos.evidence.v1beta1 import query_pb2 as evidence_query_pb2
from cosmpy.protos.cosmos.evidence.v1beta1.query_pb2_grpc import QueryStub as EvidenceQueryStub

from ..errors import EmptyResultError, InvalidInputError
from ..types import PageRequest
from .base import QueryMixin, paged


class EvidenceQueries(QueryMixin):
    async def evidence(self, evidence_hash: Union[bytes, str], timeout: Optional[float] = None):
        """Evidence by hash (raw bytes or hex)"""
        if isinstance(evidence_hash, str):
            try:
                evidence_hash = bytes.fromhex(evidence_hash)
            except ValueError:
                raise InvalidInputError(f"evidence hash {evidence_hash!r} is not hex")
        request = evidence_query_pb2.QueryEvidenceRequest(evidence_hash=evidence_hash)
        response = await self._query(EvidenceQueryStub, "Evidence", request, timeout)
        if not response.HasField("evidence"):
            raise EmptyResultError(f"no evidence with hash {evidence_hash.hex()}")
        return response.evidence

    async def all_evidence(
        self, pagination: Optional[PageRequest] = None, timeout: Optional[float] = None
    ) -> evidence_query_pb2.QueryAllEvidenceResponse:
        request = evidence_query_pb2.QueryAllEvidenceRequest(**paged(pagination))
        return await self._query(EvidenceQueryStub, "AllEvidence", request, timeout)
