"""Auth module queries and account decoding"""

import logging
from typing import Optional

from cosmpy.protos.cosmos.auth.v1beta1 import auth_pb2
from cosmpy.protos.cosmos.auth.v1beta1 import query_pb2 as auth_query_pb2
from cosmpy.protos.cosmos.auth.v1beta1.query_pb2_grpc import QueryStub as AuthQueryStub
from cosmpy.protos.cosmos.vesting.v1beta1 import vesting_pb2
from google.protobuf.any_pb2 import Any
from google.protobuf.message import DecodeError as ProtoDecodeError

from ..errors import DecodeError, EmptyResultError, RpcStatusError
from ..keys import PublicKey
from ..msgs.base import type_url_of
from ..types import AccountsPage, BaseAccount, PageRequest
from .base import QueryMixin, paged

log = logging.getLogger(__name__)

# how to reach the embedded BaseAccount for each known account type
_ACCOUNT_TYPES = {
    type_url_of(auth_pb2.BaseAccount): (auth_pb2.BaseAccount, ()),
    type_url_of(auth_pb2.ModuleAccount): (auth_pb2.ModuleAccount, ("base_account",)),
    type_url_of(vesting_pb2.ContinuousVestingAccount): (
        vesting_pb2.ContinuousVestingAccount,
        ("base_vesting_account", "base_account"),
    ),
    type_url_of(vesting_pb2.DelayedVestingAccount): (
        vesting_pb2.DelayedVestingAccount,
        ("base_vesting_account", "base_account"),
    ),
    type_url_of(vesting_pb2.PeriodicVestingAccount): (
        vesting_pb2.PeriodicVestingAccount,
        ("base_vesting_account", "base_account"),
    ),
    type_url_of(vesting_pb2.PermanentLockedAccount): (
        vesting_pb2.PermanentLockedAccount,
        ("base_vesting_account", "base_account"),
    ),
}


def decode_account(value: Any) -> BaseAccount:
    """
    Decode an account Any into a BaseAccount

    Public keys of a type the SDK cannot represent (multisig, for one) are
    dropped to ``None``; the rest of the account still decodes.
    """
    entry = _ACCOUNT_TYPES.get(value.type_url)
    if entry is None:
        raise DecodeError(f"unsupported account type {value.type_url!r}")
    proto_cls, path = entry
    proto = proto_cls()
    try:
        proto.ParseFromString(value.value)
    except ProtoDecodeError as e:
        raise DecodeError(f"malformed {value.type_url}: {e}") from e
    base = proto
    for name in path:
        base = getattr(base, name)

    pub_key = None
    if base.HasField("pub_key"):
        try:
            pub_key = PublicKey.from_any(base.pub_key)
        except DecodeError as e:
            log.warning("dropping public key of %s: %s", base.address, e)

    return BaseAccount(
        address=base.address,
        pub_key=pub_key,
        account_number=base.account_number,
        sequence=base.sequence,
    )


class AuthQueries(QueryMixin):
    async def account(self, address: str, timeout: Optional[float] = None) -> BaseAccount:
        """
        Look up an account by bech32 address

        Raises:
            EmptyResultError: the chain has no such account
            DecodeError: the account type is not supported
        """
        request = auth_query_pb2.QueryAccountRequest(address=address)
        try:
            response = await self._query(AuthQueryStub, "Account", request, timeout)
        except RpcStatusError as e:
            if e.code == "NOT_FOUND":
                raise EmptyResultError(f"account {address} not found") from e
            raise
        if not response.HasField("account"):
            raise EmptyResultError(f"account {address} not found")
        return decode_account(response.account)

    async def accounts(
        self, pagination: Optional[PageRequest] = None, timeout: Optional[float] = None
    ) -> AccountsPage:
        """All accounts, one page at a time"""
        request = auth_query_pb2.QueryAccountsRequest(**paged(pagination))
        response = await self._query(AuthQueryStub, "Accounts", request, timeout)
        return AccountsPage(
            accounts=[decode_account(a) for a in response.accounts],
            pagination=response.pagination,
        )

    async def auth_params(self, timeout: Optional[float] = None):
        request = auth_query_pb2.QueryParamsRequest()
        response = await self._query(AuthQueryStub, "Params", request, timeout)
        return response.params
