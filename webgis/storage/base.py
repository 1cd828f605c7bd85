"""Record Store contract shared by the JSON-file and in-memory backends."""

import asyncio
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, List

from webgis.errors import InternalError

USERS = "users"
FEEDBACKS = "feedbacks"
RESPONSES = "responses"

COLLECTIONS = (USERS, FEEDBACKS, RESPONSES)

Record = Dict[str, object]


class StoreError(InternalError):
    """A collection could not be read, parsed or written."""


def check_collection(collection: str) -> str:
    if collection not in COLLECTIONS:
        raise ValueError(f"Unknown collection: {collection!r}")
    return collection


class RecordStore(ABC):
    """
    Maps a collection name to an ordered list of records.

    ``read`` hands out independent copies; callers mutate them freely and
    persist with ``write``, which replaces the whole collection. Wrap a
    read-modify-write cycle in ``transaction`` so concurrent requests in the
    same process cannot overwrite each other's changes.
    """

    def __init__(self) -> None:
        self._locks: Dict[str, asyncio.Lock] = {}

    @abstractmethod
    async def ensure(self, collection: str) -> None:
        """Create the collection with no records if it does not exist yet."""

    @abstractmethod
    async def read(self, collection: str) -> List[Record]:
        """Return every record of the collection in insertion order."""

    @abstractmethod
    async def write(self, collection: str, records: List[Record]) -> None:
        """Replace the collection's content with ``records``."""

    async def ensure_all(self) -> None:
        for collection in COLLECTIONS:
            await self.ensure(collection)

    def _lock(self, collection: str) -> asyncio.Lock:
        lock = self._locks.get(collection)
        if lock is None:
            lock = self._locks[collection] = asyncio.Lock()
        return lock

    @asynccontextmanager
    async def transaction(self, *collections: str) -> AsyncIterator["RecordStore"]:
        """Hold the write locks of ``collections`` for the duration of the block."""
        # Sorted acquisition keeps two multi-collection steps from deadlocking.
        names = sorted({check_collection(c) for c in collections})
        acquired: List[asyncio.Lock] = []
        try:
            for name in names:
                lock = self._lock(name)
                await lock.acquire()
                acquired.append(lock)
            yield self
        finally:
            for lock in reversed(acquired):
                lock.release()
