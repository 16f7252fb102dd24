"""Pytest configuration and shared fixtures for DebtSage tests.

Provides snapshot builders for the pure calculators, an isolated SQLite
database for repository tests, and a Flask app wired to a temporary data
directory.
"""

from __future__ import annotations

import tempfile
from pathlib import Path

import pytest
from sqlmodel import SQLModel, create_engine

from debtsage import create_app
from debtsage.constants.debts import DebtType
from debtsage.infra.database import create_session_factory
from debtsage.infra.repositories import SQLModelDebtRepository
from debtsage.models import Debt
from debtsage.services.debts import DebtSnapshot


def assert_float_equal(actual: float, expected: float, tolerance: float = 0.01):
    """Assert that two floats are equal within a tolerance (default one cent)."""
    assert abs(actual - expected) <= tolerance, (
        f"Expected {expected}, got {actual} (difference: {abs(actual - expected)})"
    )


def make_debt(
    debt_id: int,
    balance: float,
    rate: float,
    minimum: float,
    *,
    name: str | None = None,
    debt_type: DebtType = DebtType.LOAN,
    credit_limit: float | None = None,
    original_amount: float | None = None,
    is_active: bool = True,
) -> DebtSnapshot:
    """Build a snapshot with sensible defaults for calculator tests."""
    return DebtSnapshot(
        id=debt_id,
        name=name or f"Debt {debt_id}",
        current_balance=balance,
        interest_rate=rate,
        minimum_payment=minimum,
        debt_type=debt_type,
        credit_limit=credit_limit,
        original_amount=balance if original_amount is None else original_amount,
        is_active=is_active,
    )


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def session_factory(db_engine):
    return create_session_factory(db_engine)


@pytest.fixture
def debt_repository(session_factory) -> SQLModelDebtRepository:
    return SQLModelDebtRepository(session_factory)


@pytest.fixture
def debt_factory(debt_repository):
    """Factory for creating persisted debts.

    Returns:
        Callable: Function that creates and persists Debt rows
    """

    def _create_debt(
        name: str = "Test Debt",
        balance: float = 1000.00,
        rate: float = 18.0,
        minimum: float = 50.00,
        debt_type: DebtType = DebtType.LOAN,
        credit_limit: float | None = None,
        user_id: int = 1,
    ) -> Debt:
        debt = Debt(
            name=name,
            debt_type=debt_type.value,
            original_amount=balance,
            current_balance=balance,
            interest_rate=rate,
            minimum_payment=minimum,
            credit_limit=credit_limit,
        )
        return debt_repository.create(debt, user_id=user_id)

    return _create_debt


# =============================================================================
# Flask Fixtures
# =============================================================================


@pytest.fixture
def app(tmp_path, monkeypatch):
    monkeypatch.setenv("DEBTSAGE_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("DEBTSAGE_DATABASE_URL", f"sqlite:///{tmp_path / 'test.db'}")
    monkeypatch.setenv("DEBTSAGE_DEFAULT_USER_ID", "1")
    app = create_app("testing")
    yield app
    app.extensions["debtsage.engine"].dispose()


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client


@pytest.fixture
def seed_debt(app):
    """Persist a debt through the app's own repository."""

    repository = app.extensions["debtsage"].repository

    def _seed(
        name: str,
        balance: float,
        rate: float,
        minimum: float,
        *,
        debt_type: DebtType = DebtType.LOAN,
        credit_limit: float | None = None,
        user_id: int = 1,
    ) -> Debt:
        debt = Debt(
            name=name,
            debt_type=debt_type.value,
            original_amount=balance,
            current_balance=balance,
            interest_rate=rate,
            minimum_payment=minimum,
            credit_limit=credit_limit,
        )
        return repository.create(debt, user_id=user_id)

    return _seed
