"""Command line entry points for Lojista."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Optional

import click

from .config import BaseConfig
from .errors import LojistaError, ValidationError
from .infra.database import bootstrap_database
from .infra.repositories import SQLModelStoreRepository, SQLModelTransactionRepository
from .logging_config import setup_logging
from .models.transaction import TransactionKind
from .services.dashboard import DashboardService, TransactionDraft, parse_calendar_date
from .services.export_csv import format_amount, labels_for, write_report
from .services.windows import CalendarMonth, SingleDay, TrailingDays, WindowKind


@dataclass
class AppContext:
    config: BaseConfig
    service: DashboardService
    stores: SQLModelStoreRepository


def build_context(config: Optional[BaseConfig] = None) -> AppContext:
    """Wire config, logging, database and repositories into a service."""

    cfg = config or BaseConfig()
    setup_logging(cfg)
    _, session_factory = bootstrap_database(cfg)
    stores = SQLModelStoreRepository(session_factory)
    service = DashboardService(
        SQLModelTransactionRepository(session_factory),
        stores,
        labels=labels_for(cfg.REPORT_LOCALE),
        trailing_days=cfg.TRAILING_DAYS,
        require_non_empty_export=cfg.REQUIRE_NON_EMPTY_EXPORT,
    )
    return AppContext(config=cfg, service=service, stores=stores)


def _reference(value: Optional[str]) -> date:
    """The one place the current date is read."""

    if value is None:
        return date.today()
    try:
        return parse_calendar_date(value)
    except ValidationError:
        raise click.BadParameter(f"{value!r} is not a YYYY-MM-DD date", param_hint="--date") from None


def _window_kind(days: Optional[int], month: Optional[str], day: bool, default_days: int) -> WindowKind:
    chosen = sum(1 for flag in (days is not None, month is not None, day) if flag)
    if chosen > 1:
        raise click.UsageError("Use only one of --days, --month or --day.")
    if day:
        return SingleDay()
    if month is not None:
        return CalendarMonth.parse(month)
    return TrailingDays(days if days is not None else default_days)


def _money(value: Decimal, ctx: AppContext) -> str:
    return format_amount(value, ctx.service.labels)


@click.group()
@click.pass_context
def cli(click_ctx: click.Context) -> None:
    """Lojista sales/expense ledger."""

    if click_ctx.obj is None:
        click_ctx.obj = build_context()


@cli.command("init-db")
@click.pass_obj
def init_db(ctx: AppContext) -> None:
    """Create the database schema."""

    click.echo(f"Database ready: {ctx.config.DATABASE_URL}")


@cli.command("create-store")
@click.argument("name")
@click.pass_obj
def create_store(ctx: AppContext, name: str) -> None:
    """Create a store and print its id."""

    try:
        store = ctx.stores.create(name)
    except LojistaError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"Store {store.id}: {store.name}")


def _record(
    ctx: AppContext,
    kind: TransactionKind,
    store_id: int,
    amount: str,
    on: Optional[str],
    description: Optional[str],
    category: Optional[str] = None,
) -> None:
    draft = TransactionDraft(
        store_id=store_id,
        kind=kind,
        amount=amount,
        occurred_on=on if on is not None else _reference(None),
        description=description,
        category=category,
    )
    try:
        saved = ctx.service.record_transaction(draft)
    except LojistaError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(
        f"Recorded {kind.value} #{saved.id}: {_money(saved.amount, ctx)} on {saved.occurred_on.isoformat()}"
    )


@cli.command("add-sale")
@click.argument("store_id", type=int)
@click.argument("amount")
@click.option("--date", "on", default=None, help="Date of the sale (YYYY-MM-DD), default today.")
@click.option("--description", default=None)
@click.pass_obj
def add_sale(ctx: AppContext, store_id: int, amount: str, on: Optional[str], description: Optional[str]) -> None:
    """Record a sale (venda)."""

    _record(ctx, TransactionKind.INFLOW, store_id, amount, on, description)


@cli.command("add-expense")
@click.argument("store_id", type=int)
@click.argument("amount")
@click.option("--date", "on", default=None, help="Date of the expense (YYYY-MM-DD), default today.")
@click.option("--description", default=None)
@click.option("--category", default=None)
@click.pass_obj
def add_expense(
    ctx: AppContext,
    store_id: int,
    amount: str,
    on: Optional[str],
    description: Optional[str],
    category: Optional[str],
) -> None:
    """Record an expense (despesa)."""

    _record(ctx, TransactionKind.OUTFLOW, store_id, amount, on, description, category)


@cli.command("delete")
@click.argument("store_id", type=int)
@click.argument("transaction_id", type=int)
@click.pass_obj
def delete(ctx: AppContext, store_id: int, transaction_id: int) -> None:
    """Delete a transaction."""

    try:
        ctx.service.delete_transaction(store_id, transaction_id)
    except LojistaError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"Deleted #{transaction_id}")


@cli.command("summary")
@click.argument("store_id", type=int)
@click.option("--date", "on", default=None, help="Reference date (YYYY-MM-DD), default today.")
@click.pass_obj
def summary(ctx: AppContext, store_id: int, on: Optional[str]) -> None:
    """Show today, trailing week, month-to-date and all-time totals."""

    reference = _reference(on)
    try:
        overview = ctx.service.load_overview(store_id, reference)
    except LojistaError as exc:
        raise click.ClickException(str(exc)) from exc

    week_in = sum((b.inflow_total for b in overview.week), Decimal("0.00"))
    week_out = sum((b.outflow_total for b in overview.week), Decimal("0.00"))
    lines = [
        ("Hoje", overview.today.inflow_total, overview.today.outflow_total),
        (f"Últimos {len(overview.week)} dias", week_in, week_out),
        ("Mês até hoje", overview.month_to_date.inflow_total, overview.month_to_date.outflow_total),
        ("Total", overview.all_time.inflow_total, overview.all_time.outflow_total),
    ]
    click.echo(f"Referência: {reference.isoformat()}")
    for title, inflow, outflow in lines:
        click.echo(
            f"{title}: vendas {_money(inflow, ctx)} | despesas {_money(outflow, ctx)}"
            f" | saldo {_money(inflow - outflow, ctx)}"
        )


@cli.command("series")
@click.argument("store_id", type=int)
@click.option("--days", type=int, default=None, help="Trailing window length.")
@click.option("--month", default=None, help="Calendar month (YYYY-MM).")
@click.option("--date", "on", default=None, help="Reference date (YYYY-MM-DD), default today.")
@click.pass_obj
def series(ctx: AppContext, store_id: int, days: Optional[int], month: Optional[str], on: Optional[str]) -> None:
    """Print the gap-filled daily series for a window."""

    try:
        kind = _window_kind(days, month, False, ctx.config.TRAILING_DAYS)
        buckets = ctx.service.get_series(store_id, kind, _reference(on))
    except LojistaError as exc:
        raise click.ClickException(str(exc)) from exc
    for bucket in buckets:
        click.echo(
            f"{bucket.date.isoformat()}\t{_money(bucket.inflow_total, ctx)}\t{_money(bucket.outflow_total, ctx)}"
        )


@cli.command("export")
@click.argument("store_id", type=int)
@click.option("--days", type=int, default=None, help="Trailing window length.")
@click.option("--month", default=None, help="Calendar month (YYYY-MM).")
@click.option("--day", is_flag=True, default=False, help="Only the reference date.")
@click.option("--date", "on", default=None, help="Reference date (YYYY-MM-DD), default today.")
@click.option(
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="File to write; defaults to the suggested name in the data dir.",
)
@click.pass_obj
def export(
    ctx: AppContext,
    store_id: int,
    days: Optional[int],
    month: Optional[str],
    day: bool,
    on: Optional[str],
    output: Optional[Path],
) -> None:
    """Export a window as a CSV report."""

    try:
        kind = _window_kind(days, month, day, ctx.config.TRAILING_DAYS)
        report = ctx.service.export_report(store_id, kind, _reference(on))
    except LojistaError as exc:
        raise click.ClickException(str(exc)) from exc
    target = output or (Path(ctx.config.DATA_DIR) / "exports" / report.filename)
    try:
        write_report(report.text, target)
    except OSError as exc:
        raise click.ClickException(f"Could not write {target}: {exc.strerror or exc}") from exc
    click.echo(f"Export written: {target}")


def main() -> None:  # pragma: no cover - console script shim
    cli()
