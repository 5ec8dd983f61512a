"""Pytest configuration and fixtures."""

from collections.abc import Callable
from pathlib import Path

import pytest

from mealpace.models import MealPlan, Transaction


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep config and storage lookups away from the real home directory."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg_config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "xdg_data"))


@pytest.fixture
def fixtures_dir() -> Path:
    """Return path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def blocks_statement(fixtures_dir: Path) -> str:
    """Statement with the Green block plan selected."""
    return (fixtures_dir / "statement_blocks.html").read_text()


@pytest.fixture
def flex_statement(fixtures_dir: Path) -> str:
    """Later statement with the Green flex plan selected."""
    return (fixtures_dir / "statement_flex.html").read_text()


@pytest.fixture
def no_selection_statement(fixtures_dir: Path) -> str:
    """Statement whose plan selector has no selected option."""
    return (fixtures_dir / "statement_no_selection.html").read_text()


@pytest.fixture
def empty_statement(fixtures_dir: Path) -> str:
    """Statement page with header rows only."""
    return (fixtures_dir / "statement_empty.html").read_text()


@pytest.fixture
def unrelated_page(fixtures_dir: Path) -> str:
    """HTML page that is not a statement at all."""
    return (fixtures_dir / "not_a_statement.html").read_text()


@pytest.fixture
def ledger_export_file(fixtures_dir: Path) -> Path:
    """Return path to an exported ledger with Blue plans."""
    return fixtures_dir / "ledger_export.json"


def _transaction(n: int, location: str = "Schatz Dining Room", amount: str = "$10.00") -> Transaction:
    return Transaction(
        location=location,
        date_time=f"09/{(n % 28) + 1:02d}/2024 {n:04d}",
        requested_amount=amount,
        approved_amount=amount,
    )


def _plan(name: str, balance: str = "", count: int = 0, amount: str = "$10.00") -> MealPlan:
    return MealPlan(
        start_date="08/25/2024",
        plan_name=name,
        current_balance=balance,
        transactions=[_transaction(i, amount=amount) for i in range(count)],
    )


@pytest.fixture
def make_transaction() -> Callable[..., Transaction]:
    """Factory for distinct transactions: make_transaction(n, location, amount)."""
    return _transaction


@pytest.fixture
def make_plan() -> Callable[..., MealPlan]:
    """Factory for plans starting 08/25/2024: make_plan(name, balance, count, amount)."""
    return _plan
