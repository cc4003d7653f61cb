"""
Main Orchestrator for HSRegister

Ties the option model, the store and the viewer together for one
invocation of `ic`. The steps always run in this order, and any
number of them may fire in the same invocation:

1. Parse errors  -> report with usage on stderr, exit 1
2. --help        -> usage on stdout
3. --version     -> version string on stderr
4. --init        -> confirm, then recreate the schema
5. --amount      -> record the signed transaction
6. --view        -> print the selected account

Help and version never suppress the later steps.
"""

import sys
from typing import Callable, Optional, Sequence, TextIO

from hsregister.audit import AuditLogger
from hsregister.cli import UsageError, confirm_setup, parse_options, usage_text
from hsregister.config import VERSION_STRING, Settings, get_settings
from hsregister.models.ledger import Configuration
from hsregister.queries import AccountViewer
from hsregister.services.storage import (
    LedgerStorageInterface,
    SQLiteLedgerStorage,
    StorageError,
)


EXIT_OK = 0
EXIT_USAGE = 1


class RegisterFlow:
    """
    Runs one command line against the ledger.

    Streams, storage and the confirmation prompt are injectable so the
    flow can be driven without a terminal.
    """

    def __init__(
        self,
        storage: LedgerStorageInterface,
        audit_logger: Optional[AuditLogger] = None,
        confirm: Optional[Callable[[], bool]] = None,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
        strict_parsing: bool = False,
    ):
        self._storage = storage
        self._viewer = AccountViewer(storage)
        self._audit_logger = audit_logger or AuditLogger()
        self._stdin = stdin or sys.stdin
        self._stdout = stdout or sys.stdout
        self._stderr = stderr or sys.stderr
        self._confirm = confirm or (lambda: confirm_setup(self._stdin, self._stderr))
        self._strict_parsing = strict_parsing

    def run(self, argv: Sequence[str]) -> int:
        """
        Execute one invocation and return its exit status.

        Raises:
            StorageError: If any storage step fails. Steps already
                completed are not undone.
        """
        parsed = parse_options(argv, strict=self._strict_parsing)
        for skip in parsed.skipped:
            self._audit_logger.log_value_unparsed(skip.option, skip.value)

        try:
            parsed.raise_for_errors()
        except UsageError as e:
            self._audit_logger.log_usage_error(e.messages)
            for message in e.messages:
                print(message, file=self._stderr)
            print(usage_text(), file=self._stderr)
            return EXIT_USAGE

        config = parsed.config

        if config.help:
            print(usage_text(), file=self._stdout)

        if config.version:
            print(VERSION_STRING, file=self._stderr)

        try:
            if config.initialize:
                self.initialize()
            if config.signed_amount is not None:
                self.make_transaction(config)
            if config.view:
                self.view_account(config)
        except StorageError as e:
            self._audit_logger.log_storage_error(str(e))
            raise

        return EXIT_OK

    def initialize(self) -> bool:
        """Recreate the schema if the user confirms. Returns whether it ran."""
        if not self._confirm():
            self._audit_logger.log_initialize_declined()
            return False
        self._storage.initialize()
        self._audit_logger.log_schema_initialized(self._storage.location)
        return True

    def make_transaction(self, config: Configuration) -> int:
        amount = config.signed_amount
        record_id = self._storage.record(
            config.account,
            amount,
            check_num=config.check_num,
            description=config.description,
        )
        self._audit_logger.log_transaction_recorded(
            account=config.account,
            record_id=record_id,
            amount=amount,
            check_num=config.check_num,
        )
        return record_id

    def view_account(self, config: Configuration) -> list[str]:
        lines = self._viewer.view(config.account)
        for line in lines:
            print(line, file=self._stdout)
        self._audit_logger.log_account_viewed(config.account, len(lines))
        return lines


def create_register_flow(
    settings: Optional[Settings] = None,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
) -> RegisterFlow:
    """
    Factory wiring the SQLite store and audit logger from settings.
    """
    settings = settings or get_settings()
    return RegisterFlow(
        storage=SQLiteLedgerStorage(settings.db_path),
        audit_logger=AuditLogger(),
        stdin=stdin,
        stdout=stdout,
        stderr=stderr,
        strict_parsing=settings.strict_parsing,
    )
