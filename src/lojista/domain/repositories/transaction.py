"""Transaction repository protocol."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Protocol

from ...models.transaction import Transaction, TransactionKind


@dataclass(frozen=True, slots=True)
class RunningTotals:
    """Pre-aggregated per-store figures, checkable against engine summaries."""

    inflow_total: Decimal
    outflow_total: Decimal
    inflow_count: int = 0
    outflow_count: int = 0

    @property
    def balance(self) -> Decimal:
        return self.inflow_total - self.outflow_total


class TransactionRepository(Protocol):
    """Store of record for sales and expenses."""

    def fetch_transactions(
        self, store_id: int, kind: TransactionKind, start: date, end: date
    ) -> list[Transaction]:
        """Every row of ``kind`` with ``start <= occurred_on <= end``, unpaginated."""
        ...

    def insert_transaction(self, transaction: Transaction) -> Transaction:
        """Persist a new row and return it with ``id`` assigned."""
        ...

    def delete_transaction(self, transaction_id: int, *, store_id: int) -> None:
        """Delete a row or raise ``TransactionNotFound``."""
        ...

    def list_recent(
        self, store_id: int, kind: TransactionKind, limit: int = 10
    ) -> list[Transaction]:
        """Most recently recorded rows of ``kind``."""
        ...

    def running_totals(self, store_id: int) -> RunningTotals:
        """All-time totals for the store."""
        ...

    def range_totals(self, store_id: int, start: date, end: date) -> RunningTotals:
        """Totals for ``start <= occurred_on <= end``."""
        ...
