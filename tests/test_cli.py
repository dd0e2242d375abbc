"""Tests for the click command line."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from lojista.cli import build_context, cli
from lojista.config import TestingConfig


@pytest.fixture
def app_ctx(tmp_path, monkeypatch):
    monkeypatch.delenv("LOJISTA_DATABASE_URL", raising=False)
    monkeypatch.delenv("LOJISTA_REPORT_LOCALE", raising=False)
    return build_context(TestingConfig(data_dir=tmp_path))


@pytest.fixture
def run(app_ctx):
    runner = CliRunner()

    def _run(*args: str):
        return runner.invoke(cli, list(args), obj=app_ctx)

    return _run


def test_create_store_and_record_flow(run, app_ctx, tmp_path):
    assert run("init-db").exit_code == 0
    result = run("create-store", "Padaria")
    assert result.exit_code == 0, result.output
    assert "Store 1: Padaria" in result.output

    assert run("add-sale", "1", "100,00", "--date", "2024-03-01").exit_code == 0
    assert run("add-sale", "1", "50.00", "--date", "2024-03-03").exit_code == 0
    result = run("add-expense", "1", "30", "--date", "2024-03-02", "--category", "Aluguel")
    assert result.exit_code == 0, result.output
    assert "despesa" in result.output

    result = run("summary", "1", "--date", "2024-03-03")
    assert result.exit_code == 0, result.output
    assert "Mês até hoje: vendas 150,00 | despesas 30,00 | saldo 120,00" in result.output

    result = run("series", "1", "--month", "2024-03")
    lines = result.output.strip().splitlines()
    assert len(lines) == 31
    assert lines[0] == "2024-03-01\t100,00\t0,00"

    output = tmp_path / "march.csv"
    result = run("export", "1", "--month", "2024-03", "--output", str(output))
    assert result.exit_code == 0, result.output
    assert "Total de vendas;150,00" in output.read_text(encoding="utf-8")


def test_export_defaults_to_suggested_name(run, app_ctx, tmp_path):
    run("create-store", "Loja Teste")

    result = run("export", "1", "--days", "7", "--date", "2024-01-01")

    assert result.exit_code == 0, result.output
    expected = tmp_path / "exports" / "relatorio-loja-teste-2023-12-26_2024-01-01.csv"
    assert expected.exists()


def test_domain_errors_become_click_errors(run):
    run("create-store", "Padaria")

    assert run("add-sale", "1", "-5", "--date", "2024-03-01").exit_code != 0
    assert run("series", "1", "--days", "0").exit_code != 0
    assert run("series", "1", "--month", "2024-13").exit_code != 0
    result = run("delete", "1", "42")
    assert result.exit_code != 0
    assert "Transaction not found: 42" in result.output
    assert run("summary", "1", "--date", "ontem").exit_code != 0


def test_window_flags_are_exclusive(run):
    run("create-store", "Padaria")

    result = run("export", "1", "--days", "7", "--month", "2024-03")

    assert result.exit_code != 0
    assert "only one of" in result.output


@pytest.mark.parametrize("value", ["20240302", "2024-W09-6", "2024-3-2"])
def test_reference_date_must_be_dashed_iso(run, value):
    run("create-store", "Padaria")

    result = run("summary", "1", "--date", value)

    assert result.exit_code == 2
    assert "is not a YYYY-MM-DD date" in result.output


def test_add_sale_rejects_numeric_literal_amounts(run, app_ctx):
    run("create-store", "Padaria")

    result = run("add-sale", "1", "1_000", "--date", "2024-03-01")

    assert result.exit_code == 1
    assert "Validation error" in result.output
    assert app_ctx.service.get_running_totals(1).inflow_count == 0


def test_unwritable_export_path_is_reported(run, tmp_path):
    run("create-store", "Padaria")
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")

    result = run("export", "1", "--day", "--date", "2024-03-01", "--output", str(blocker / "report.csv"))

    assert result.exit_code == 1
    assert "Could not write" in result.output
    assert not isinstance(result.exception, OSError)
