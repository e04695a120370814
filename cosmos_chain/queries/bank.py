"""Bank module queries"""

from typing import Optional

from cosmpy.protos.cosmos.bank.v1beta1 import query_pb2 as bank_query_pb2
from cosmpy.protos.cosmos.bank.v1beta1.query_pb2_grpc import QueryStub as BankQueryStub

from ..errors import EmptyResultError
from ..types import Coin, CoinsPage, PageRequest, coins_from_proto
from .base import QueryMixin, paged


class BankQueries(QueryMixin):
    async def balance(
        self, address: str, denom: str, timeout: Optional[float] = None
    ) -> Optional[Coin]:
        """Balance of one denom; ``None`` if the chain returned no balance at all"""
        request = bank_query_pb2.QueryBalanceRequest(address=address, denom=denom)
        response = await self._query(BankQueryStub, "Balance", request, timeout)
        if not response.HasField("balance"):
            return None
        return Coin.from_proto(response.balance)

    async def all_balances(
        self,
        address: str,
        pagination: Optional[PageRequest] = None,
        timeout: Optional[float] = None,
    ) -> CoinsPage:
        request = bank_query_pb2.QueryAllBalancesRequest(address=address, **paged(pagination))
        response = await self._query(BankQueryStub, "AllBalances", request, timeout)
        return CoinsPage(coins_from_proto(response.balances), response.pagination)

    async def spendable_balances(
        self,
        address: str,
        pagination: Optional[PageRequest] = None,
        timeout: Optional[float] = None,
    ) -> CoinsPage:
        """Balances minus whatever is locked in vesting"""
        request = bank_query_pb2.QuerySpendableBalancesRequest(
            address=address, **paged(pagination)
        )
        response = await self._query(BankQueryStub, "SpendableBalances", request, timeout)
        return CoinsPage(coins_from_proto(response.balances), response.pagination)

    async def bank_params(self, timeout: Optional[float] = None):
        request = bank_query_pb2.QueryParamsRequest()
        response = await self._query(BankQueryStub, "Params", request, timeout)
        return response.params

    async def denom_metadata(self, denom: str, timeout: Optional[float] = None):
        """
        Metadata registered for ``denom``

        Raises:
            EmptyResultError: nothing is registered for the denom
        """
        request = bank_query_pb2.QueryDenomMetadataRequest(denom=denom)
        response = await self._query(BankQueryStub, "DenomMetadata", request, timeout)
        if not response.HasField("metadata") or not response.metadata.base:
            raise EmptyResultError(f"no metadata for denom {denom}")
        return response.metadata

    async def denoms_metadata(
        self, pagination: Optional[PageRequest] = None, timeout: Optional[float] = None
    ) -> bank_query_pb2.QueryDenomsMetadataResponse:
        request = bank_query_pb2.QueryDenomsMetadataRequest(**paged(pagination))
        return await self._query(BankQueryStub, "DenomsMetadata", request, timeout)

    async def supply_of(self, denom: str, timeout: Optional[float] = None) -> Coin:
        request = bank_query_pb2.QuerySupplyOfRequest(denom=denom)
        response = await self._query(BankQueryStub, "SupplyOf", request, timeout)
        if not response.HasField("amount"):
            raise EmptyResultError(f"no supply for denom {denom}")
        return Coin.from_proto(response.amount)

    async def total_supply(
        self, pagination: Optional[PageRequest] = None, timeout: Optional[float] = None
    ) -> CoinsPage:
        request = bank_query_pb2.QueryTotalSupplyRequest(**paged(pagination))
        response = await self._query(BankQueryStub, "TotalSupply", request, timeout)
        return CoinsPage(coins_from_proto(response.supply), response.pagination)
