"""Shared fixtures: throwaway ledgers, fake storage and captured streams."""

import io
from decimal import Decimal
from typing import Any, Optional, Sequence

import pytest

from hsregister.config import get_settings
from hsregister.models.ledger import Account
from hsregister.orchestrator import RegisterFlow
from hsregister.services.storage import LedgerStorageInterface, SQLiteLedgerStorage

FIXED_TIMESTAMP = "2024-12-15 09:30:00"


class FakeLedgerStorage(LedgerStorageInterface):
    """In-memory ledger that records every call made against it."""

    def __init__(self, rows: Optional[dict] = None):
        self.calls: list[str] = []
        self.tables: dict[Account, list[tuple]] = rows or {a: [] for a in Account}

    def initialize(self) -> None:
        self.calls.append("initialize")
        self.tables = {a: [] for a in Account}

    def record(
        self,
        account: Account,
        signed_amount: Decimal,
        check_num: Optional[int] = None,
        description: Optional[str] = None,
    ) -> int:
        self.calls.append("record")
        table = self.tables[account]
        row_id = len(table) + 1
        table.append((row_id, description, signed_amount, check_num, FIXED_TIMESTAMP))
        return row_id

    def fetch_rows(self, account: Account) -> list[Sequence[Any]]:
        self.calls.append("fetch_rows")
        return list(self.tables[account])


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Keep HSR_* variables and .env files from leaking into tests."""
    for name in ("HSR_DB_PATH", "HSR_LOG_LEVEL", "HSR_LOG_JSON", "HSR_STRICT_PARSING"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "ledger" / "hsr.db"


@pytest.fixture
def storage(db_path):
    return SQLiteLedgerStorage(db_path, clock=lambda: FIXED_TIMESTAMP)


@pytest.fixture
def initialized_storage(storage):
    storage.initialize()
    return storage


@pytest.fixture
def fake_storage():
    return FakeLedgerStorage()


class Console:
    """Captured stdin/stdout/stderr for one run of the flow."""

    def __init__(self, stdin_text: str = ""):
        self.stdin = io.StringIO(stdin_text)
        self.stdout = io.StringIO()
        self.stderr = io.StringIO()

    @property
    def out(self) -> str:
        return self.stdout.getvalue()

    @property
    def err(self) -> str:
        return self.stderr.getvalue()

    @property
    def out_lines(self) -> list[str]:
        return self.out.splitlines()


@pytest.fixture
def run_ic():
    """Run one command line against a storage, answering prompts from stdin_text."""
    def _run(storage, argv, stdin_text="", strict_parsing=False):
        console = Console(stdin_text)
        flow = RegisterFlow(
            storage=storage,
            stdin=console.stdin,
            stdout=console.stdout,
            stderr=console.stderr,
            strict_parsing=strict_parsing,
        )
        status = flow.run(argv)
        return status, console
    return _run
