"""
Account Viewer

Reads one account table in full and renders each row as a line:

    id | description | amount | checkNum | date

Absent description or check number print as NULL. Rows come back in
whatever order the store scans them.
"""

from typing import Any, Sequence

from pydantic import ValidationError

from hsregister.models.ledger import Account, LedgerRecord
from hsregister.services.storage import (
    LEDGER_COLUMNS,
    DecodeError,
    LedgerStorageInterface,
)


def decode_row(row: Sequence[Any]) -> LedgerRecord:
    """
    Turn a raw five-column row into a LedgerRecord.

    Raises:
        DecodeError: If the row has the wrong number of columns or
            a column holds a value of the wrong type.
    """
    if len(row) != len(LEDGER_COLUMNS):
        raise DecodeError(row)
    record_id, description, amount, check_num, date = row
    try:
        return LedgerRecord(
            id=record_id,
            description=description,
            amount=amount,
            check_num=check_num,
            date=date,
        )
    except ValidationError as e:
        raise DecodeError(row) from e


class AccountViewer:
    """Renders the contents of an account table."""

    def __init__(self, storage: LedgerStorageInterface):
        self._storage = storage

    def records(self, account: Account) -> list[LedgerRecord]:
        return [decode_row(row) for row in self._storage.fetch_rows(account)]

    def view(self, account: Account) -> list[str]:
        """One rendered line per row; empty list for an empty account."""
        return [record.render() for record in self.records(account)]
