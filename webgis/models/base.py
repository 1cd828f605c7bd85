"""Base record model with the fields every stored entity carries."""

import threading
import time
from datetime import datetime, timezone
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_id_lock = threading.Lock()
_last_stamp = 0


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def new_id(prefix: str) -> str:
    """Return ``<prefix>_<epoch ms>``, strictly increasing within the process."""
    global _last_stamp
    with _id_lock:
        stamp = max(int(time.time() * 1000), _last_stamp + 1)
        _last_stamp = stamp
    return f"{prefix}_{stamp}"


class RecordModel(BaseModel):
    """Base class for stored records. Keys are camelCase on disk and on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    id: str
    created_at: datetime = Field(default_factory=utc_now)

    def to_record(self) -> Dict[str, Any]:
        """Representation written to the store."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def to_public(self) -> Dict[str, Any]:
        """Representation returned to clients."""
        return self.to_record()
