"""
Core Data Models for HSRegister

These models describe everything that flows between the option parser,
the dispatcher and the store:
1. Which account a command targets
2. Whether money goes in or out
3. The resolved options for one invocation
4. A single row read back from the ledger

Configuration is frozen. Option effects never mutate it; they return
a new copy via model_copy().
"""

from decimal import Decimal
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class Account(str, Enum):
    """
    Ledger accounts.

    The value doubles as the table name in the store.
    """
    CHECKING = "checking"
    SAVINGS = "savings"
    CREDIT = "credit"

    @property
    def table_name(self) -> str:
        return self.value


class TransactionKind(str, Enum):
    """Direction of a transaction. Determines the stored sign."""
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"

    def apply_sign(self, amount: Decimal) -> Decimal:
        """Withdrawals are stored negative, deposits positive."""
        magnitude = abs(amount)
        if self is TransactionKind.WITHDRAWAL:
            return -magnitude
        return magnitude


# =============================================================================
# CONFIGURATION - resolved command line
# =============================================================================

class Configuration(BaseModel):
    """
    Immutable snapshot of the options for one invocation.

    Built by folding option effects over the default instance,
    left to right in command-line order.
    """
    model_config = ConfigDict(frozen=True)

    account: Account = Field(
        default=Account.CHECKING,
        description="Account the transaction or view applies to"
    )
    amount: Optional[Decimal] = Field(
        default=None,
        ge=0,
        description="Unsigned amount; None means no transaction requested"
    )
    check_num: Optional[int] = Field(
        default=None,
        ge=0,
        description="Check number used for the transaction"
    )
    description: Optional[str] = Field(
        default=None,
        description="Free-text description of the transaction"
    )
    help: bool = False
    version: bool = False
    initialize: bool = False
    view: bool = False
    kind: TransactionKind = Field(
        default=TransactionKind.WITHDRAWAL,
        description="Deposit or withdrawal"
    )

    @property
    def signed_amount(self) -> Optional[Decimal]:
        """Amount with the transaction kind's sign applied, or None."""
        if self.amount is None:
            return None
        return self.kind.apply_sign(self.amount)


DEFAULT_CONFIGURATION = Configuration()


# =============================================================================
# LEDGER RECORD - one stored row
# =============================================================================

class LedgerRecord(BaseModel):
    """
    A single ledger row as stored in one of the account tables.

    The amount already carries its sign; there is no separate kind column.
    """
    model_config = ConfigDict(frozen=True)

    id: int
    description: Optional[str] = None
    amount: Union[int, float]
    check_num: Optional[int] = None
    date: str

    def render(self) -> str:
        """Render as `id | description | amount | checkNum | date`."""
        return " | ".join([
            str(self.id),
            _or_null(self.description),
            str(self.amount),
            _or_null(self.check_num),
            self.date,
        ])


def _or_null(value: object) -> str:
    return "NULL" if value is None else str(value)
