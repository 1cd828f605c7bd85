"""Record Store backed by one pretty-printed JSON document per collection."""

import json
import logging
import uuid
from pathlib import Path
from typing import Dict, List, Union

import anyio

from webgis.storage.base import (
    FEEDBACKS,
    Record,
    RecordStore,
    StoreError,
    check_collection,
)

logger = logging.getLogger("WebGIS.store")

# The feedback collection keeps the file name existing deployments already have.
FILE_NAMES: Dict[str, str] = {
    FEEDBACKS: "feedback.json",
}


class JsonFileStore(RecordStore):
    """
    Collections live as sibling files in ``data_dir``, each holding
    ``{"<collection>": [...]}``. Files and the directory are created on
    first access.
    """

    def __init__(self, data_dir: Union[str, Path]) -> None:
        super().__init__()
        self.data_dir = Path(data_dir)

    def path_for(self, collection: str) -> Path:
        check_collection(collection)
        return self.data_dir / FILE_NAMES.get(collection, f"{collection}.json")

    @staticmethod
    def _dump(collection: str, records: List[Record]) -> str:
        return json.dumps({collection: records}, indent=2, ensure_ascii=False)

    async def _replace(self, path: Path, content: str) -> None:
        # Write beside the target, then rename over it: readers see the old
        # document or the new one, never a truncated file.
        tmp = anyio.Path(path.with_name(f".{path.name}.{uuid.uuid4().hex}.tmp"))
        try:
            await tmp.write_text(content, encoding="utf-8")
            await tmp.replace(path)
        except BaseException:
            if await tmp.exists():
                await tmp.unlink()
            raise

    async def ensure(self, collection: str) -> None:
        path = self.path_for(collection)
        try:
            await anyio.Path(self.data_dir).mkdir(parents=True, exist_ok=True)
            if not await anyio.Path(path).exists():
                await self._replace(path, self._dump(collection, []))
                logger.info(f"Created empty {collection} store at {path}")
        except OSError as e:
            raise StoreError(f"Could not create {collection} store: {e}") from e

    async def read(self, collection: str) -> List[Record]:
        await self.ensure(collection)
        path = self.path_for(collection)
        try:
            raw = await anyio.Path(path).read_text(encoding="utf-8")
        except OSError as e:
            raise StoreError(f"Could not read {collection} store: {e}") from e

        if not raw.strip():
            return []
        try:
            document = json.loads(raw)
        except json.JSONDecodeError as e:
            raise StoreError(f"Malformed {collection} store {path.name}: {e}") from e

        records = document.get(collection) if isinstance(document, dict) else None
        if not isinstance(records, list):
            logger.warning(f"{path.name} has no {collection} list, treating it as empty")
            return []
        return records

    async def write(self, collection: str, records: List[Record]) -> None:
        await self.ensure(collection)
        path = self.path_for(collection)
        try:
            content = self._dump(collection, list(records))
        except (TypeError, ValueError) as e:
            raise StoreError(f"Could not serialize {collection}: {e}") from e
        try:
            await self._replace(path, content)
        except OSError as e:
            raise StoreError(f"Could not write {collection} store: {e}") from e
        logger.debug(f"Wrote {len(records)} {collection} to {path.name}")
