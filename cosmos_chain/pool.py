"""Lazy cache of per-module gRPC stubs"""

import asyncio
import logging
from typing import Any, Dict, Type, TypeVar

from .errors import ConnectFailedError

log = logging.getLogger(__name__)

T = TypeVar("T")


class SubClientPool:
    """
    Holds at most one stub per stub class, all sharing one channel

    Stub classes are the keys, so two modules whose generated stubs share a
    name (every Cosmos module has a ``QueryStub``) still get separate
    entries. Entries live as long as the pool.
    """

    def __init__(self, channel, endpoint: str = ""):
        self._channel = channel
        self._endpoint = endpoint
        self._stubs: Dict[type, Any] = {}
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._stubs)

    def __contains__(self, stub_cls: type) -> bool:
        return stub_cls in self._stubs

    def contains(self, stub_cls: type) -> bool:
        return stub_cls in self._stubs

    async def get(self, stub_cls: Type[T]) -> T:
        """Return the pooled stub for ``stub_cls``, building it on first use"""
        stub = self._stubs.get(stub_cls)
        if stub is not None:
            return stub

        async with self._lock:
            stub = self._stubs.get(stub_cls)
            if stub is None:
                try:
                    stub = stub_cls(self._channel)
                except Exception as e:
                    raise ConnectFailedError(
                        self._endpoint, f"cannot attach {stub_cls.__module__}.{stub_cls.__name__}: {e}"
                    ) from e
                self._stubs[stub_cls] = stub
                log.debug("built %s.%s", stub_cls.__module__, stub_cls.__name__)
            return stub

    def clear(self) -> None:
        self._stubs.clear()
