"""Services package."""

from hsregister.services.storage import (
    DecodeError,
    LedgerStorageInterface,
    SchemaError,
    SQLiteLedgerStorage,
    StorageError,
    StoreNotFoundError,
)

__all__ = [
    "DecodeError",
    "LedgerStorageInterface",
    "SchemaError",
    "SQLiteLedgerStorage",
    "StorageError",
    "StoreNotFoundError",
]
