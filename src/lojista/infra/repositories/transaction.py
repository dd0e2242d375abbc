"""SQLModel implementation of the transaction repository."""

from __future__ import annotations

from datetime import date
from typing import Optional

from sqlalchemy import func
from sqlmodel import select

from ...domain.repositories.transaction import RunningTotals
from ...errors import TransactionNotFound, ValidationError
from ...models.transaction import Transaction, TransactionKind, from_cents
from ..database import SessionFactory
from ._errors import repository_errors


class SQLModelTransactionRepository:
    """SQLModel-based transaction repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def fetch_transactions(
        self, store_id: int, kind: TransactionKind, start: date, end: date
    ) -> list[Transaction]:
        """Get every transaction of ``kind`` dated within ``[start, end]``."""
        with repository_errors("fetch_transactions"), self.session_factory() as session:
            statement = (
                select(Transaction)
                .where(Transaction.store_id == store_id)
                .where(Transaction.kind == kind)
                .where(Transaction.occurred_on >= start)
                .where(Transaction.occurred_on <= end)
                .order_by(Transaction.occurred_on, Transaction.id)  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def get_by_id(self, transaction_id: int, *, store_id: int) -> Optional[Transaction]:
        """Retrieve a transaction by ID within a store."""
        with repository_errors("get_by_id"), self.session_factory() as session:
            obj = session.exec(
                select(Transaction)
                .where(Transaction.id == transaction_id)
                .where(Transaction.store_id == store_id)
            ).first()
            if obj:
                session.expunge(obj)
            return obj

    def insert_transaction(self, transaction: Transaction) -> Transaction:
        """Create a new transaction."""
        if transaction.amount_cents is None or transaction.amount_cents < 0:
            raise ValidationError("amount must be zero or positive", field="amount")
        if not isinstance(transaction.occurred_on, date):
            raise ValidationError("occurred_on must be a calendar date", field="occurred_on")
        with repository_errors("insert_transaction"), self.session_factory() as session:
            session.add(transaction)
            session.commit()
            session.refresh(transaction)
            session.expunge(transaction)
            return transaction

    def delete_transaction(self, transaction_id: int, *, store_id: int) -> None:
        """Delete a transaction by ID."""
        with repository_errors("delete_transaction"), self.session_factory() as session:
            transaction = session.exec(
                select(Transaction)
                .where(Transaction.id == transaction_id)
                .where(Transaction.store_id == store_id)
            ).first()
            if transaction is None:
                raise TransactionNotFound(transaction_id)
            session.delete(transaction)
            session.commit()

    def list_recent(
        self, store_id: int, kind: TransactionKind, limit: int = 10
    ) -> list[Transaction]:
        """Latest recorded transactions of one kind, newest first."""
        with repository_errors("list_recent"), self.session_factory() as session:
            statement = (
                select(Transaction)
                .where(Transaction.store_id == store_id)
                .where(Transaction.kind == kind)
                .order_by(Transaction.recorded_at.desc(), Transaction.id.desc())  # type: ignore
                .limit(limit)
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def running_totals(self, store_id: int) -> RunningTotals:
        """All-time inflow/outflow totals and counts for a store."""
        return self._totals("running_totals", store_id)

    def range_totals(self, store_id: int, start: date, end: date) -> RunningTotals:
        """Inflow/outflow totals for ``start <= occurred_on <= end``."""
        return self._totals("range_totals", store_id, start, end)

    def _totals(
        self,
        operation: str,
        store_id: int,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> RunningTotals:
        with repository_errors(operation), self.session_factory() as session:
            statement = (
                select(
                    Transaction.kind,
                    func.coalesce(func.sum(Transaction.amount_cents), 0),
                    func.count(Transaction.id),
                )
                .where(Transaction.store_id == store_id)
                .group_by(Transaction.kind)
            )
            if start is not None:
                statement = statement.where(Transaction.occurred_on >= start)
            if end is not None:
                statement = statement.where(Transaction.occurred_on <= end)
            by_kind = {kind: (int(cents), int(count)) for kind, cents, count in session.exec(statement).all()}

        inflow_cents, inflow_count = by_kind.get(TransactionKind.INFLOW, (0, 0))
        outflow_cents, outflow_count = by_kind.get(TransactionKind.OUTFLOW, (0, 0))
        return RunningTotals(
            inflow_total=from_cents(inflow_cents),
            outflow_total=from_cents(outflow_cents),
            inflow_count=inflow_count,
            outflow_count=outflow_count,
        )
