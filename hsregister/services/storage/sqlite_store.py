"""
SQLite Storage Implementation

One file holds the whole ledger: three identically shaped tables,
one per account. There is no schema version and no migration;
initialize() deletes the file and starts over.

Connections are never shared. Each operation connects, does its
work, commits and closes.
"""

import sqlite3
from contextlib import closing
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Any, Callable, Optional, Sequence, Union

from hsregister.config import TIME_FORMAT
from hsregister.models.ledger import Account
from hsregister.services.storage.interface import (
    LedgerStorageInterface,
    SchemaError,
    StorageError,
    StoreNotFoundError,
)


# Column order matters: the viewer decodes rows positionally.
LEDGER_COLUMNS = ["id", "description", "amount", "checkNum", "date"]

TABLE_SCHEMA = """
CREATE TABLE {table} (
  id           INTEGER PRIMARY KEY,
  description  TEXT DEFAULT NULL,
  amount       INTEGER NOT NULL,
  checkNum     INTEGER DEFAULT NULL,
  date         TEXT NOT NULL
)
"""


def format_now() -> str:
    """Current local time as YYYY-MM-DD HH:MM:SS."""
    return datetime.now().strftime(TIME_FORMAT)


class SQLiteLedgerStorage(LedgerStorageInterface):
    """
    SQLite-backed ledger.

    Args:
        db_path: Location of the ledger file
        clock: Returns the timestamp string stored with each record
    """

    def __init__(
        self,
        db_path: Union[str, Path],
        clock: Callable[[], str] = format_now,
    ):
        self._db_path = Path(db_path)
        self._clock = clock

    @property
    def db_path(self) -> Path:
        return self._db_path

    @property
    def location(self) -> str:
        return str(self._db_path)

    def exists(self) -> bool:
        return self._db_path.exists()

    def _connect(self, create: bool = False) -> sqlite3.Connection:
        if not create and not self.exists():
            raise StoreNotFoundError(
                f"No ledger at {self._db_path}; run with --init first"
            )
        try:
            return sqlite3.connect(str(self._db_path))
        except sqlite3.Error as e:
            raise StorageError(f"Cannot open ledger at {self._db_path}: {e}") from e

    # ==================== Schema ====================

    def initialize(self) -> None:
        if self.exists():
            try:
                self._db_path.unlink()
            except OSError as e:
                raise SchemaError(f"Cannot remove old ledger at {self._db_path}: {e}") from e

        try:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise SchemaError(f"Cannot create directory for {self._db_path}: {e}") from e

        with closing(self._connect(create=True)) as conn:
            for account in Account:
                try:
                    conn.execute(TABLE_SCHEMA.format(table=account.table_name))
                except sqlite3.Error as e:
                    raise SchemaError(
                        f"Cannot create table {account.table_name}: {e}"
                    ) from e
            conn.commit()

    # ==================== Transactions ====================

    def record(
        self,
        account: Account,
        signed_amount: Decimal,
        check_num: Optional[int] = None,
        description: Optional[str] = None,
    ) -> int:
        timestamp = self._clock()
        with closing(self._connect()) as conn:
            try:
                cursor = conn.execute(
                    f"INSERT INTO {account.table_name} (description, amount, checkNum, date) "
                    "VALUES (?, ?, ?, ?)",
                    (description, float(signed_amount), check_num, timestamp),
                )
                conn.commit()
            except sqlite3.OperationalError as e:
                raise self._wrap(account, e) from e
            except sqlite3.Error as e:
                raise StorageError(f"Cannot record transaction in {account.table_name}: {e}") from e
            return cursor.lastrowid

    def fetch_rows(self, account: Account) -> list[Sequence[Any]]:
        with closing(self._connect()) as conn:
            try:
                return conn.execute(f"SELECT * FROM {account.table_name}").fetchall()
            except sqlite3.OperationalError as e:
                raise self._wrap(account, e) from e
            except sqlite3.Error as e:
                raise StorageError(f"Cannot read {account.table_name}: {e}") from e

    def _wrap(self, account: Account, error: sqlite3.OperationalError) -> StorageError:
        if "no such table" in str(error):
            return StoreNotFoundError(
                f"Table {account.table_name} not found in {self._db_path}; "
                "run with --init first"
            )
        return StorageError(f"{account.table_name}: {error}")
