"""In-process Record Store, used where no files should be touched."""

import copy
from typing import Dict, List

from webgis.storage.base import Record, RecordStore, check_collection


class MemoryRecordStore(RecordStore):
    """Same contract as the JSON store; records are deep-copied in and out."""

    def __init__(self) -> None:
        super().__init__()
        self._data: Dict[str, List[Record]] = {}
        self.writes: List[str] = []

    async def ensure(self, collection: str) -> None:
        self._data.setdefault(check_collection(collection), [])

    async def read(self, collection: str) -> List[Record]:
        await self.ensure(collection)
        return copy.deepcopy(self._data[collection])

    async def write(self, collection: str, records: List[Record]) -> None:
        await self.ensure(collection)
        self._data[collection] = copy.deepcopy(list(records))
        self.writes.append(collection)
