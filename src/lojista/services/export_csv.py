"""CSV report rendering for a window of ledger transactions."""

from __future__ import annotations

import csv
import io
import re
import unicodedata
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from pathlib import Path
from typing import Iterable

from ..errors import EmptyWindow, UnsupportedLocale
from ..models.transaction import CENT, Transaction, TransactionKind
from .aggregation import WindowSummary
from .windows import DateWindow


@dataclass(frozen=True, slots=True)
class ReportLabels:
    """Locale-specific text and number/date conventions for a report."""

    locale: str
    delimiter: str
    decimal_separator: str
    day_first: bool
    inflow: str
    outflow: str
    store: str
    period: str
    inflow_total: str
    outflow_total: str
    balance: str
    columns: tuple[str, str, str, str, str]


PT_BR = ReportLabels(
    locale="pt_BR",
    delimiter=";",
    decimal_separator=",",
    day_first=True,
    inflow="Venda",
    outflow="Despesa",
    store="Loja",
    period="Período",
    inflow_total="Total de vendas",
    outflow_total="Total de despesas",
    balance="Saldo",
    columns=("Tipo", "Data", "Valor", "Descrição", "Categoria"),
)

EN_US = ReportLabels(
    locale="en_US",
    delimiter=",",
    decimal_separator=".",
    day_first=False,
    inflow="Sale",
    outflow="Expense",
    store="Store",
    period="Period",
    inflow_total="Total sales",
    outflow_total="Total expenses",
    balance="Balance",
    columns=("Type", "Date", "Amount", "Description", "Category"),
)

LABELS_BY_LOCALE = {labels.locale: labels for labels in (PT_BR, EN_US)}


def labels_for(locale: str) -> ReportLabels:
    try:
        return LABELS_BY_LOCALE[locale]
    except KeyError:
        raise UnsupportedLocale(locale) from None


def format_amount(value: Decimal, labels: ReportLabels) -> str:
    """Fixed two decimals, no grouping, locale decimal separator."""

    text = f"{value.quantize(CENT):f}"
    if labels.decimal_separator != ".":
        text = text.replace(".", labels.decimal_separator)
    return text


def format_date(day: date, labels: ReportLabels) -> str:
    # Built by hand so the output never depends on the process locale
    if labels.day_first:
        return f"{day.day:02d}/{day.month:02d}/{day.year:04d}"
    return f"{day.month:02d}/{day.day:02d}/{day.year:04d}"


def _sort_key(tx: Transaction) -> tuple:
    recorded = tx.recorded_at or datetime.min
    # Mixed naive/aware values cannot be compared
    if recorded.tzinfo is not None:
        recorded = recorded.replace(tzinfo=None)
    return (tx.occurred_on, recorded, tx.id or 0)


def _kind_label(kind: TransactionKind, labels: ReportLabels) -> str:
    return labels.inflow if kind == TransactionKind.INFLOW else labels.outflow


def format_report(
    window: DateWindow,
    transactions: Iterable[Transaction],
    summary: WindowSummary,
    *,
    labels: ReportLabels = PT_BR,
    store_name: str = "",
    require_transactions: bool = False,
) -> str:
    """Render the header block and the per-transaction body as delimited text.

    Columns are deterministic: kind, date, amount, description, category.
    Free-text fields are quoted by the ``csv`` writer, doubling embedded quote
    characters, so separators and quotes in descriptions cannot break a row.
    Raises ``EmptyWindow`` only when ``require_transactions`` is set and no
    transaction falls inside the window.
    """

    rows = sorted((tx for tx in transactions if tx.occurred_on in window), key=_sort_key)
    if require_transactions and not rows:
        raise EmptyWindow(window.start, window.end)

    buffer = io.StringIO()
    writer = csv.writer(
        buffer,
        delimiter=labels.delimiter,
        quotechar='"',
        doublequote=True,
        quoting=csv.QUOTE_MINIMAL,
        lineterminator="\r\n",
    )

    writer.writerow([labels.store, store_name])
    writer.writerow(
        [
            labels.period,
            f"{format_date(window.start, labels)} - {format_date(window.end, labels)}",
        ]
    )
    writer.writerow([labels.inflow_total, format_amount(summary.inflow_total, labels)])
    writer.writerow([labels.outflow_total, format_amount(summary.outflow_total, labels)])
    writer.writerow([labels.balance, format_amount(summary.balance, labels)])
    writer.writerow([])
    writer.writerow(list(labels.columns))

    for tx in rows:
        is_outflow = tx.kind == TransactionKind.OUTFLOW
        writer.writerow(
            [
                _kind_label(tx.kind, labels),
                format_date(tx.occurred_on, labels),
                format_amount(tx.amount, labels),
                tx.description or "",
                (tx.category or "") if is_outflow else "",
            ]
        )

    return buffer.getvalue()


def _slugify(value: str) -> str:
    normalized = unicodedata.normalize("NFKD", value).encode("ascii", "ignore").decode("ascii")
    slug = re.sub(r"[^a-zA-Z0-9]+", "-", normalized).strip("-").lower()
    return slug or "loja"


def report_filename(store_name: str, window: DateWindow) -> str:
    """Suggested download name, e.g. ``relatorio-padaria-2024-03-01_2024-03-31.csv``."""

    return (
        f"relatorio-{_slugify(store_name)}-"
        f"{window.start.isoformat()}_{window.end.isoformat()}.csv"
    )


def write_report(text: str, output_path: Path) -> Path:
    """Write rendered report text to ``output_path`` and return the path."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    # newline='' keeps the csv module's \r\n terminators intact on Windows
    with output_path.open("w", newline="", encoding="utf-8") as fh:
        fh.write(text)
    return output_path
