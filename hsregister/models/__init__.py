"""
Data Models Package

Pydantic models shared by the option parser, dispatcher and store.
"""

from hsregister.models.ledger import (
    DEFAULT_CONFIGURATION,
    Account,
    Configuration,
    LedgerRecord,
    TransactionKind,
)
from hsregister.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Ledger models
    "DEFAULT_CONFIGURATION",
    "Account",
    "Configuration",
    "LedgerRecord",
    "TransactionKind",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
