"""
Storage Services Package

Provides the abstract ledger storage interface and the SQLite
implementation used by the command-line tool.
"""

from hsregister.services.storage.interface import (
    DecodeError,
    LedgerStorageInterface,
    SchemaError,
    StorageError,
    StoreNotFoundError,
)
from hsregister.services.storage.sqlite_store import (
    LEDGER_COLUMNS,
    SQLiteLedgerStorage,
    format_now,
)

__all__ = [
    # Interfaces
    "LedgerStorageInterface",
    # Exceptions
    "DecodeError",
    "SchemaError",
    "StorageError",
    "StoreNotFoundError",
    # SQLite implementation
    "LEDGER_COLUMNS",
    "SQLiteLedgerStorage",
    "format_now",
]
