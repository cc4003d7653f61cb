"""
Audit Logger

Every action that changes or reads the ledger is logged as a
structured event. The log goes to stderr through the standard
logging module, so stdout stays reserved for ledger output.

A logging failure never aborts a ledger operation.
"""

import logging
import sys
from decimal import Decimal
from typing import Optional
from uuid import UUID, uuid4

import structlog

from hsregister.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity
from hsregister.models.ledger import Account


def _processors(json_output: bool) -> list:
    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    return [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        renderer,
    ]


# Configure structlog for local logging
structlog.configure(
    processors=_processors(json_output=False),
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "WARNING", json_output: bool = False) -> None:
    """Route structured logs to stderr at the given level."""
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.WARNING),
        force=True,
    )
    structlog.configure(processors=_processors(json_output))


class AuditLogger:
    """
    Central audit logging service.

    All events from one invocation share a correlation ID.
    """

    def __init__(self, correlation_id: Optional[UUID] = None):
        self.correlation_id = correlation_id or create_correlation_id()
        self._logger = structlog.get_logger("hsregister.audit")

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Returns False if the log backend raised.
        """
        log_dict = event.to_log_dict()
        try:
            if event.severity == AuditSeverity.ERROR:
                self._logger.error("audit_event", **log_dict)
            elif event.severity == AuditSeverity.WARNING:
                self._logger.warning("audit_event", **log_dict)
            elif event.severity == AuditSeverity.DEBUG:
                self._logger.debug("audit_event", **log_dict)
            else:
                self._logger.info("audit_event", **log_dict)
        except Exception as e:
            logging.getLogger(__name__).error("audit logging failed: %s", e)
            return False
        return True

    def log_schema_initialized(self, db_path: str) -> None:
        self.log(AuditEventBuilder.schema_initialized(
            db_path=db_path,
            correlation_id=self.correlation_id,
        ))

    def log_initialize_declined(self) -> None:
        self.log(AuditEventBuilder.initialize_declined(
            correlation_id=self.correlation_id,
        ))

    def log_transaction_recorded(
        self,
        account: Account,
        record_id: int,
        amount: Decimal,
        check_num: Optional[int],
    ) -> None:
        """Log a new ledger row."""
        self.log(AuditEventBuilder.transaction_recorded(
            account=account,
            record_id=record_id,
            amount=amount,
            check_num=check_num,
            correlation_id=self.correlation_id,
        ))

    def log_account_viewed(self, account: Account, row_count: int) -> None:
        self.log(AuditEventBuilder.account_viewed(
            account=account,
            row_count=row_count,
            correlation_id=self.correlation_id,
        ))

    def log_value_unparsed(self, option: str, raw_value: str) -> None:
        event = AuditEventBuilder.value_unparsed(option, raw_value)
        self.log(event.model_copy(update={"correlation_id": self.correlation_id}))

    def log_usage_error(self, errors: list[str]) -> None:
        self.log(AuditEventBuilder.usage_error(
            errors=errors,
            correlation_id=self.correlation_id,
        ))

    def log_storage_error(self, error_message: str) -> None:
        self.log(AuditEventBuilder.storage_error(
            error_message=error_message,
            correlation_id=self.correlation_id,
        ))


def create_correlation_id() -> UUID:
    """Create a new correlation ID for one invocation of the tool."""
    return uuid4()
