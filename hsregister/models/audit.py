"""
Audit Models for HSRegister

Every action that touches the ledger produces an audit event.
Events are written to the structured log only; the ledger file
holds nothing but transactions.
"""

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from hsregister.models.ledger import Account


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Schema
    SCHEMA_INITIALIZED = "schema_initialized"
    INITIALIZE_DECLINED = "initialize_declined"

    # Transactions
    TRANSACTION_RECORDED = "transaction_recorded"
    ACCOUNT_VIEWED = "account_viewed"

    # Option parsing
    AMOUNT_UNPARSED = "amount_unparsed"
    CHECK_NUMBER_UNPARSED = "check_number_unparsed"
    USAGE_ERROR = "usage_error"

    # System events
    STORAGE_ERROR = "storage_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of the audit trail.
    """

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )
    account: Optional[Account] = Field(
        default=None,
        description="Account the event relates to, if any"
    )
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID shared by all events of one invocation"
    )
    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )
    error_message: Optional[str] = Field(
        default=None,
        description="Error message if this is an error event"
    )

    def to_log_dict(self) -> dict[str, Any]:
        """Convert to a flat dictionary for structured logging."""
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "account": self.account.value if self.account else None,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """Factory methods for the events the dispatcher emits."""

    @staticmethod
    def schema_initialized(db_path: str, correlation_id: Optional[UUID] = None) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SCHEMA_INITIALIZED,
            correlation_id=correlation_id,
            description="Ledger schema (re)created",
            details={"db_path": db_path, "tables": [a.table_name for a in Account]},
        )

    @staticmethod
    def initialize_declined(correlation_id: Optional[UUID] = None) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.INITIALIZE_DECLINED,
            correlation_id=correlation_id,
            description="User declined to (re)create the ledger",
        )

    @staticmethod
    def transaction_recorded(
        account: Account,
        record_id: int,
        amount: Decimal,
        check_num: Optional[int],
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_RECORDED,
            account=account,
            correlation_id=correlation_id,
            description=f"Transaction recorded in {account.value}",
            details={
                "record_id": record_id,
                "amount": str(amount),
                "check_num": check_num,
            },
        )

    @staticmethod
    def account_viewed(
        account: Account,
        row_count: int,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ACCOUNT_VIEWED,
            account=account,
            correlation_id=correlation_id,
            description=f"Viewed {account.value}",
            details={"row_count": row_count},
        )

    @staticmethod
    def value_unparsed(option: str, raw_value: str) -> AuditEvent:
        """A malformed -a/-k value that resolved to 'absent'."""
        event_type = (
            AuditEventType.CHECK_NUMBER_UNPARSED
            if option == "check"
            else AuditEventType.AMOUNT_UNPARSED
        )
        return AuditEvent(
            event_type=event_type,
            severity=AuditSeverity.INFO,
            description=f"Ignoring unparsable --{option} value",
            details={"option": option, "value": raw_value},
        )

    @staticmethod
    def usage_error(errors: list[str], correlation_id: Optional[UUID] = None) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.USAGE_ERROR,
            severity=AuditSeverity.INFO,
            correlation_id=correlation_id,
            description="Command line rejected",
            details={"errors": errors},
        )

    @staticmethod
    def storage_error(error_message: str, correlation_id: Optional[UUID] = None) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_ERROR,
            severity=AuditSeverity.ERROR,
            correlation_id=correlation_id,
            description="Ledger storage failure",
            error_message=error_message,
        )
