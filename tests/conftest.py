"""Pytest configuration and shared fixtures for Lojista tests.

Provides an isolated SQLite database per test, repositories bound to it, and
factories for stores and transactions. Engine tests that need no database use
``make_tx`` to build detached ``Transaction`` objects.
"""

from __future__ import annotations

import tempfile
from contextlib import contextmanager
from datetime import date, datetime, timezone
from decimal import Decimal
from itertools import count
from pathlib import Path

import pytest
from sqlmodel import Session, SQLModel, create_engine

from lojista.infra.repositories import SQLModelStoreRepository, SQLModelTransactionRepository
from lojista.models import Store, Transaction, TransactionKind
from lojista.models.transaction import to_cents
from lojista.services.dashboard import DashboardService

_ids = count(1)


def make_tx(
    kind: TransactionKind,
    amount: str,
    occurred_on: date,
    *,
    store_id: int = 1,
    description: str | None = None,
    category: str | None = None,
    recorded_at: datetime | None = None,
) -> Transaction:
    """Build a detached transaction without touching a database."""

    return Transaction(
        id=next(_ids),
        store_id=store_id,
        kind=kind,
        amount_cents=to_cents(Decimal(amount)),
        occurred_on=occurred_on,
        recorded_at=recorded_at or datetime(2024, 1, 1, tzinfo=timezone.utc),
        description=description,
        category=category,
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
    """Session factory matching ``infra.database.create_session_factory``."""

    @contextmanager
    def factory():
        session = Session(db_engine, expire_on_commit=False)
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    return factory


@pytest.fixture
def store_repo(session_factory) -> SQLModelStoreRepository:
    return SQLModelStoreRepository(session_factory)


@pytest.fixture
def tx_repo(session_factory) -> SQLModelTransactionRepository:
    return SQLModelTransactionRepository(session_factory)


@pytest.fixture
def service(tx_repo, store_repo) -> DashboardService:
    return DashboardService(tx_repo, store_repo)


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def store(store_repo) -> Store:
    """A default store for scoping data."""

    return store_repo.create("Padaria Central")


@pytest.fixture
def transaction_factory(tx_repo, store):
    """Persist transactions against the default store.

    Returns:
        Callable: Function that creates and persists Transaction instances
    """

    def _create_transaction(
        kind: TransactionKind,
        amount: str,
        occurred_on: date,
        description: str | None = None,
        category: str | None = None,
        store_id: int | None = None,
    ) -> Transaction:
        transaction = Transaction(
            store_id=store_id or store.id,
            kind=kind,
            amount_cents=to_cents(Decimal(amount)),
            occurred_on=occurred_on,
            description=description,
            category=category,
        )
        return tx_repo.insert_transaction(transaction)

    return _create_transaction
