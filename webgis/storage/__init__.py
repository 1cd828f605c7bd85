"""Record Store backends."""

from webgis.storage.base import (
    COLLECTIONS,
    FEEDBACKS,
    RESPONSES,
    USERS,
    Record,
    RecordStore,
    StoreError,
)
from webgis.storage.json_store import JsonFileStore
from webgis.storage.memory import MemoryRecordStore

__all__ = [
    "COLLECTIONS",
    "FEEDBACKS",
    "RESPONSES",
    "USERS",
    "Record",
    "RecordStore",
    "StoreError",
    "JsonFileStore",
    "MemoryRecordStore",
]
