"""Dashboard operations: summaries, series, exports and ledger writes.

``DashboardService`` is the seam the presentation layer talks to. Every read
takes an explicit ``reference`` date, issues one range fetch per transaction
kind for the window, and hands the rows to the pure engine functions in
``windows``, ``aggregation`` and ``export_csv``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from ..domain.repositories import RunningTotals, StoreRepository, TransactionRepository
from ..errors import LojistaError, ValidationError
from ..logging_config import get_logger
from ..models.transaction import CENT, Transaction, TransactionKind, to_cents
from .aggregation import DailyBucket, WindowSummary, series_for, summarize
from .export_csv import PT_BR, ReportLabels, format_report, report_filename
from .windows import (
    CalendarMonth,
    DateWindow,
    MonthToDate,
    SingleDay,
    TrailingDays,
    WindowKind,
    YearMonth,
    compute_window,
    parse_year_month,
)

logger = get_logger(__name__)

MAX_AMOUNT = Decimal("9999999999.99")

# Plain digits with an optional one- or two-digit fraction
_AMOUNT_RE = re.compile(r"^\d+(\.\d{1,2})?$")
_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_amount(raw: Union[str, int, Decimal]) -> Decimal:
    """Parse a user-entered amount into an exact two-place Decimal.

    Accepts ``"12.50"`` and ``"12,50"``; rejects floats, negatives and
    fractions of a cent.
    """

    if isinstance(raw, (bool, float)):
        raise ValidationError("amount must be given as text or Decimal, not float", field="amount")
    if isinstance(raw, str):
        text = raw.strip().replace(",", ".")
        if not text:
            raise ValidationError("amount is required", field="amount")
        if text.startswith("-") and _AMOUNT_RE.match(text[1:]):
            raise ValidationError("amount must be zero or positive", field="amount")
        if not _AMOUNT_RE.match(text):
            raise ValidationError(f"amount is not a number: {raw!r}", field="amount")
    else:
        text = raw
    try:
        value = Decimal(text)
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError(f"amount is not a number: {raw!r}", field="amount") from None
    if not value.is_finite():
        raise ValidationError("amount must be finite", field="amount")
    if value < 0:
        raise ValidationError("amount must be zero or positive", field="amount")
    if value > MAX_AMOUNT:
        raise ValidationError("amount is too large", field="amount")
    if value != value.quantize(CENT):
        raise ValidationError("amount has more than two decimal places", field="amount")
    return value.quantize(CENT)


def parse_calendar_date(raw: Union[str, date]) -> date:
    """Accept a ``date`` or an ISO ``YYYY-MM-DD`` string; never a timestamp."""

    if isinstance(raw, date):
        # datetime is a date subclass; keep only the calendar part it was given
        return date(raw.year, raw.month, raw.day)
    if not isinstance(raw, str):
        raise ValidationError("date must be YYYY-MM-DD", field="occurred_on")
    text = raw.strip()
    # fromisoformat also takes basic (20240302) and week (2024-W09-6) forms
    if not _ISO_DATE_RE.match(text):
        raise ValidationError(f"malformed date {raw!r}, expected YYYY-MM-DD", field="occurred_on")
    try:
        return date.fromisoformat(text)
    except ValueError:
        raise ValidationError(f"malformed date {raw!r}, expected YYYY-MM-DD", field="occurred_on") from None


@dataclass(slots=True)
class TransactionDraft:
    """Unsaved sale or expense, validated before it reaches the repository."""

    store_id: int
    kind: TransactionKind
    amount: Union[str, int, Decimal]
    occurred_on: Union[str, date]
    description: Optional[str] = None
    category: Optional[str] = None

    def validate(self) -> Transaction:
        """Return a ``Transaction`` ready to insert or raise ``ValidationError``."""

        try:
            kind = TransactionKind(self.kind)
        except ValueError:
            raise ValidationError(f"unknown transaction kind {self.kind!r}", field="kind") from None
        amount = parse_amount(self.amount)
        occurred_on = parse_calendar_date(self.occurred_on)

        description = (self.description or "").strip() or None
        if description is not None and len(description) > 255:
            raise ValidationError("description is longer than 255 characters", field="description")

        category = None
        if kind is TransactionKind.OUTFLOW:
            category = (self.category or "").strip() or None
            if category is not None and len(category) > 64:
                raise ValidationError("category is longer than 64 characters", field="category")

        return Transaction(
            store_id=self.store_id,
            kind=kind,
            amount_cents=to_cents(amount),
            occurred_on=occurred_on,
            description=description,
            category=category,
        )


@dataclass(frozen=True, slots=True)
class ExportedReport:
    text: str
    filename: str


@dataclass(frozen=True, slots=True)
class DashboardOverview:
    """Everything the dashboard landing page shows for one reference date."""

    reference: date
    today: WindowSummary
    week: list[DailyBucket]
    month: list[DailyBucket]
    month_to_date: WindowSummary
    all_time: RunningTotals


class DashboardService:
    """Read and write operations for a single store's ledger."""

    def __init__(
        self,
        transactions: TransactionRepository,
        stores: StoreRepository,
        *,
        labels: ReportLabels = PT_BR,
        trailing_days: int = 7,
        require_non_empty_export: bool = False,
    ) -> None:
        self.transactions = transactions
        self.stores = stores
        self.labels = labels
        self.trailing_days = trailing_days
        self.require_non_empty_export = require_non_empty_export

    # Reads -----------------------------------------------------------------

    def fetch_window(self, store_id: int, window: DateWindow) -> list[Transaction]:
        """One range query per kind; rows come back as a single list."""

        rows: list[Transaction] = []
        for kind in TransactionKind:
            rows.extend(
                self.transactions.fetch_transactions(store_id, kind, window.start, window.end)
            )
        return rows

    def get_series(
        self, store_id: int, window_kind: WindowKind, reference: date
    ) -> list[DailyBucket]:
        window = compute_window(reference, window_kind)
        return series_for(window, self.fetch_window(store_id, window))

    def get_window_summary(
        self, store_id: int, window_kind: WindowKind, reference: date
    ) -> WindowSummary:
        return summarize(self.get_series(store_id, window_kind, reference))

    def get_daily_summary(self, store_id: int, day: date) -> WindowSummary:
        return self.get_window_summary(store_id, SingleDay(), day)

    def get_month_summary(
        self, store_id: int, year_month: Union[YearMonth, str]
    ) -> WindowSummary:
        if isinstance(year_month, str):
            year_month = parse_year_month(year_month)
        kind = CalendarMonth(year_month)
        return self.get_window_summary(store_id, kind, year_month.first_day)

    def get_month_to_date_summary(self, store_id: int, reference: date) -> WindowSummary:
        return self.get_window_summary(store_id, MonthToDate(), reference)

    def get_running_totals(self, store_id: int) -> RunningTotals:
        return self.transactions.running_totals(store_id)

    def list_recent(
        self, store_id: int, kind: TransactionKind, limit: int = 10
    ) -> list[Transaction]:
        return self.transactions.list_recent(store_id, kind, limit)

    def load_overview(self, store_id: int, reference: date) -> DashboardOverview:
        """Compute the landing-page figures; each window is fetched on its own."""

        return DashboardOverview(
            reference=reference,
            today=self.get_daily_summary(store_id, reference),
            week=self.get_series(store_id, TrailingDays(self.trailing_days), reference),
            month=self.get_series(store_id, CalendarMonth(YearMonth.of(reference)), reference),
            month_to_date=self.get_month_to_date_summary(store_id, reference),
            all_time=self.get_running_totals(store_id),
        )

    def export_report(
        self,
        store_id: int,
        window_kind: WindowKind,
        reference: date,
        labels: Optional[ReportLabels] = None,
    ) -> ExportedReport:
        """Render the window as CSV text plus a suggested filename."""

        labels = labels or self.labels
        store = self.stores.get(store_id)
        window = compute_window(reference, window_kind)
        rows = self.fetch_window(store_id, window)
        summary = summarize(series_for(window, rows))
        text = format_report(
            window,
            rows,
            summary,
            labels=labels,
            store_name=store.name,
            require_transactions=self.require_non_empty_export,
        )
        filename = report_filename(store.name, window)
        logger.info(
            "Report exported",
            extra={
                "store_id": store_id,
                "start": window.start.isoformat(),
                "end": window.end.isoformat(),
                "rows": len(rows),
                "locale": labels.locale,
            },
        )
        return ExportedReport(text=text, filename=filename)

    # Writes ----------------------------------------------------------------

    def record_transaction(self, draft: TransactionDraft) -> Transaction:
        """Validate and insert a sale or expense."""

        try:
            transaction = draft.validate()
        except ValidationError as exc:
            logger.warning(
                "Rejected transaction",
                extra={"store_id": draft.store_id, "field": exc.field, "reason": exc.message},
            )
            raise
        self.stores.get(draft.store_id)
        saved = self.transactions.insert_transaction(transaction)
        logger.info(
            "Transaction recorded",
            extra={
                "store_id": saved.store_id,
                "transaction_id": saved.id,
                "kind": saved.kind.value,
                "occurred_on": saved.occurred_on.isoformat(),
            },
        )
        return saved

    def delete_transaction(self, store_id: int, transaction_id: int) -> None:
        try:
            self.transactions.delete_transaction(transaction_id, store_id=store_id)
        except LojistaError:
            logger.warning(
                "Delete failed",
                extra={"store_id": store_id, "transaction_id": transaction_id},
            )
            raise
        logger.info(
            "Transaction deleted",
            extra={"store_id": store_id, "transaction_id": transaction_id},
        )
