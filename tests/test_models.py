"""
Tests for HSRegister data models.

Test strategy:
1. Unit tests for the ledger and audit models
2. No storage or terminal access
"""

from decimal import Decimal
from uuid import uuid4

import pytest
from pydantic import ValidationError

from hsregister.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)
from hsregister.models.ledger import (
    DEFAULT_CONFIGURATION,
    Account,
    Configuration,
    LedgerRecord,
    TransactionKind,
)


class TestAccount:
    """Tests for the Account enum."""

    def test_table_names(self):
        """Each account maps to its own table."""
        assert [a.table_name for a in Account] == ["checking", "savings", "credit"]

    def test_equality_by_tag(self):
        """Accounts compare by variant."""
        assert Account("savings") is Account.SAVINGS
        assert Account.CHECKING != Account.CREDIT


class TestTransactionKind:
    """Tests for sign normalization."""

    def test_withdrawal_negates(self):
        """Withdrawals are stored negative."""
        assert TransactionKind.WITHDRAWAL.apply_sign(Decimal("12.34")) == Decimal("-12.34")

    def test_deposit_keeps_positive(self):
        """Deposits are stored positive."""
        assert TransactionKind.DEPOSIT.apply_sign(Decimal("12.34")) == Decimal("12.34")

    def test_sign_ignores_input_sign(self):
        """Only the kind decides the stored sign."""
        assert TransactionKind.DEPOSIT.apply_sign(Decimal("-5")) == Decimal("5")
        assert TransactionKind.WITHDRAWAL.apply_sign(Decimal("-5")) == Decimal("-5")


class TestConfiguration:
    """Tests for the Configuration model."""

    def test_defaults(self):
        """Default is a checking withdrawal with nothing requested."""
        config = DEFAULT_CONFIGURATION
        assert config.account == Account.CHECKING
        assert config.kind == TransactionKind.WITHDRAWAL
        assert config.amount is None
        assert config.check_num is None
        assert config.description is None
        assert not (config.help or config.version or config.initialize or config.view)

    def test_is_frozen(self):
        """Configuration cannot be mutated in place."""
        with pytest.raises(ValidationError):
            DEFAULT_CONFIGURATION.view = True

    def test_signed_amount_absent(self):
        """No amount means no signed amount."""
        assert Configuration().signed_amount is None

    def test_signed_amount_withdrawal(self):
        """The default kind negates the amount."""
        config = Configuration(amount=Decimal("42.50"))
        assert config.signed_amount == Decimal("-42.50")

    def test_signed_amount_deposit(self):
        """A deposit keeps the amount positive."""
        config = Configuration(amount=Decimal("42.50"), kind=TransactionKind.DEPOSIT)
        assert config.signed_amount == Decimal("42.50")

    def test_rejects_negative_amount(self):
        """Amounts are stored unsigned until the kind is applied."""
        with pytest.raises(ValueError):
            Configuration(amount=Decimal("-1"))


class TestLedgerRecord:
    """Tests for row rendering."""

    def test_render_full_row(self):
        """All five columns are joined with pipes."""
        record = LedgerRecord(
            id=3,
            description="Rent",
            amount=-950,
            check_num=1024,
            date="2024-12-01 08:00:00",
        )
        assert record.render() == "3 | Rent | -950 | 1024 | 2024-12-01 08:00:00"

    def test_render_nulls(self):
        """Missing description and check number print as NULL."""
        record = LedgerRecord(id=1, amount=42.5, date="2024-12-01 08:00:00")
        assert record.render() == "1 | NULL | 42.5 | NULL | 2024-12-01 08:00:00"


class TestAuditModels:
    """Tests for audit events."""

    def test_audit_event_creation(self):
        """Events default to INFO with no account."""
        event = AuditEvent(
            event_type=AuditEventType.SCHEMA_INITIALIZED,
            description="Ledger created",
        )
        assert event.severity == AuditSeverity.INFO
        assert event.account is None

    def test_audit_event_to_log_dict(self):
        """The log dict flattens enums and decimals."""
        event = AuditEventBuilder.transaction_recorded(
            account=Account.SAVINGS,
            record_id=7,
            amount=Decimal("-10"),
            check_num=None,
            correlation_id=uuid4(),
        )
        log_dict = event.to_log_dict()
        assert log_dict["event_type"] == "transaction_recorded"
        assert log_dict["account"] == "savings"
        assert log_dict["details"]["amount"] == "-10"
        assert log_dict["details"]["record_id"] == 7

    def test_value_unparsed_event_types(self):
        """Amount and check-number skips are told apart."""
        amount = AuditEventBuilder.value_unparsed("amount", "ten")
        check = AuditEventBuilder.value_unparsed("check", "abc")
        assert amount.event_type == AuditEventType.AMOUNT_UNPARSED
        assert check.event_type == AuditEventType.CHECK_NUMBER_UNPARSED
        assert amount.severity == AuditSeverity.INFO

    def test_storage_error_event(self):
        """Storage failures are ERROR events carrying the message."""
        event = AuditEventBuilder.storage_error("disk full")
        assert event.severity == AuditSeverity.ERROR
        assert event.error_message == "disk full"

    def test_usage_error_event_is_info(self):
        """Rejected command lines stay below the default log level."""
        event = AuditEventBuilder.usage_error(["unrecognized option '--bogus'"])
        assert event.event_type == AuditEventType.USAGE_ERROR
        assert event.severity == AuditSeverity.INFO
        assert event.details["errors"] == ["unrecognized option '--bogus'"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
