"""
Abstract Storage Interface

The dispatcher and viewer only talk to this interface. The SQLite
implementation lives in sqlite_store.py; tests can substitute an
in-memory fake.

The interface covers exactly what the ledger needs:
recreate the schema, append a row, scan a table.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Any, Optional, Sequence

from hsregister.models.ledger import Account


class LedgerStorageInterface(ABC):
    """
    Abstract interface for ledger storage operations.

    Every call opens and releases its own connection.
    """

    @property
    def location(self) -> str:
        """Where the ledger lives, for log messages."""
        return type(self).__name__

    @abstractmethod
    def initialize(self) -> None:
        """
        Destroy any existing ledger and create the three account tables.

        Raises:
            SchemaError: If the old store cannot be removed or a table
                cannot be created. Tables created before the failure
                are left in place.
        """
        pass

    @abstractmethod
    def record(
        self,
        account: Account,
        signed_amount: Decimal,
        check_num: Optional[int] = None,
        description: Optional[str] = None,
    ) -> int:
        """
        Append one transaction to the account's table.

        Args:
            account: Target account
            signed_amount: Amount with its sign already applied
            check_num: Optional check number
            description: Optional free-text description

        Returns:
            The engine-assigned row id

        Raises:
            StorageError: If the insert fails
        """
        pass

    @abstractmethod
    def fetch_rows(self, account: Account) -> list[Sequence[Any]]:
        """
        Return every row of the account's table in natural scan order.

        Raises:
            StorageError: If the query fails
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class SchemaError(StorageError):
    """The ledger schema could not be (re)created."""
    pass


class StoreNotFoundError(StorageError):
    """The ledger or one of its tables does not exist yet."""
    pass


class DecodeError(StorageError):
    """A stored row does not have the expected shape."""

    def __init__(self, row: Sequence[Any]):
        self.row = tuple(row)
        super().__init__(f"Unexpected result: {self.row!r}")
