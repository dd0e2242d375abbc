"""Bucketing, gap-filled series and window summaries.

All arithmetic is done on :class:`~decimal.Decimal` values so totals match the
exported report to the cent. None of these functions raise on well-formed
input: an empty transaction set is a valid state and yields zero totals.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable, Mapping, Optional, Protocol, Sequence

from ..models.transaction import CENT, TransactionKind
from .windows import DateWindow

ZERO = Decimal("0.00")


class LedgerEntry(Protocol):
    """Shape the aggregator needs; satisfied by ``models.Transaction``."""

    kind: TransactionKind
    occurred_on: date

    @property
    def amount(self) -> Decimal:  # pragma: no cover - interface
        ...


@dataclass(frozen=True, slots=True)
class DailyTotals:
    """Inflow and outflow sums for one date."""

    inflow_total: Decimal = ZERO
    outflow_total: Decimal = ZERO


@dataclass(frozen=True, slots=True)
class DailyBucket:
    """One point of a dense series."""

    date: date
    inflow_total: Decimal = ZERO
    outflow_total: Decimal = ZERO

    @property
    def balance(self) -> Decimal:
        return self.inflow_total - self.outflow_total

    def label(self) -> str:
        """Short ``dd/mm`` axis label used by the dashboard charts."""
        return self.date.strftime("%d/%m")


@dataclass(frozen=True, slots=True)
class WindowSummary:
    """Totals for a window. ``balance`` may be negative and is never clamped."""

    inflow_total: Decimal = ZERO
    outflow_total: Decimal = ZERO

    @property
    def balance(self) -> Decimal:
        return self.inflow_total - self.outflow_total


def _money(value: Decimal) -> Decimal:
    return value.quantize(CENT)


def aggregate(
    transactions: Iterable[LedgerEntry], dates: Sequence[date]
) -> dict[date, DailyTotals]:
    """Sum transactions per ``occurred_on`` for the given dates.

    Every date in ``dates`` is present in the result. Rows dated outside
    ``dates`` are ignored.
    """

    wanted = set(dates)
    inflow: dict[date, Decimal] = defaultdict(Decimal)
    outflow: dict[date, Decimal] = defaultdict(Decimal)

    for tx in transactions:
        if tx.occurred_on not in wanted:
            continue
        if tx.kind == TransactionKind.INFLOW:
            inflow[tx.occurred_on] += tx.amount
        elif tx.kind == TransactionKind.OUTFLOW:
            outflow[tx.occurred_on] += tx.amount

    return {
        day: DailyTotals(
            inflow_total=_money(inflow.get(day, ZERO)),
            outflow_total=_money(outflow.get(day, ZERO)),
        )
        for day in dates
    }


def build_series(
    window: DateWindow, buckets: Mapping[date, DailyTotals]
) -> list[DailyBucket]:
    """Return one bucket per window date, zero-filled where ``buckets`` has no entry."""

    empty = DailyTotals()
    series: list[DailyBucket] = []
    for day in window.dates:
        totals = buckets.get(day, empty)
        series.append(
            DailyBucket(
                date=day,
                inflow_total=totals.inflow_total,
                outflow_total=totals.outflow_total,
            )
        )
    return series


def summarize(buckets: Iterable[DailyBucket]) -> WindowSummary:
    """Fold a series into window totals."""

    inflow = ZERO
    outflow = ZERO
    for bucket in buckets:
        inflow += bucket.inflow_total
        outflow += bucket.outflow_total
    return WindowSummary(inflow_total=_money(inflow), outflow_total=_money(outflow))


def summarize_transactions(
    transactions: Iterable[LedgerEntry], window: Optional[DateWindow] = None
) -> WindowSummary:
    """Reduce raw transactions straight to totals, skipping the series step.

    When ``window`` is given, rows outside it are ignored, matching what the
    series path would produce for the same window.
    """

    inflow = ZERO
    outflow = ZERO
    for tx in transactions:
        if window is not None and tx.occurred_on not in window:
            continue
        if tx.kind == TransactionKind.INFLOW:
            inflow += tx.amount
        elif tx.kind == TransactionKind.OUTFLOW:
            outflow += tx.amount
    return WindowSummary(inflow_total=_money(inflow), outflow_total=_money(outflow))


def series_for(window: DateWindow, transactions: Iterable[LedgerEntry]) -> list[DailyBucket]:
    """Aggregate and gap-fill in one call."""

    return build_series(window, aggregate(transactions, window.dates))
