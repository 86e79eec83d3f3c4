"""Tests for pipeline orchestrator."""

import logging
from unittest.mock import patch

import pandas as pd

from src.pipeline.orchestrator import (
    build_parser,
    run_pipeline,
    step_export,
    step_load,
    step_reconcile,
)
from src.reconciliation import LedgerParseError, ReconcileTargets


class TestSteps:
    """Test individual pipeline steps."""

    def test_step_load(self, ledger_csv_files):
        ledgers = step_load(ledger_csv_files)
        assert set(ledgers) == {"opening", "purchases", "returns", "sales"}

    def test_step_reconcile(self, scenario_ledgers):
        report = step_reconcile(scenario_ledgers, ReconcileTargets(sales=1350, tax=81))
        assert report["مبلغ فروش (تراز شده)"].sum() == 1350
        assert report["مبلغ مالیات (تراز شده)"].sum() == 81

    def test_step_export(self, scenario_ledgers, tmp_path):
        report = step_reconcile(scenario_ledgers, ReconcileTargets(sales=1350, tax=81))
        written = step_export(report, tmp_path / "report.csv", "Report")
        assert written.exists()


class TestRunPipeline:
    """Test end-to-end run and its failure handling."""

    def test_success(self, ledger_csv_files, tmp_path, caplog):
        output = tmp_path / "report.csv"

        with caplog.at_level(logging.INFO):
            assert run_pipeline(ledger_csv_files, ReconcileTargets(), output) is True

        assert output.exists()
        assert any("4 rows processed" in msg for msg in caplog.messages)

    def test_missing_input_returns_false(self, ledger_csv_files, tmp_path, caplog):
        ledger_csv_files["opening"].unlink()

        with caplog.at_level(logging.ERROR):
            ok = run_pipeline(ledger_csv_files, ReconcileTargets(), tmp_path / "r.csv")

        assert ok is False
        assert any(
            "stage 'load' [MISSING_INPUT]" in msg for msg in caplog.messages
        )

    def test_parse_error_returns_false(self, ledger_csv_files, tmp_path):
        with patch(
            "src.pipeline.orchestrator.step_load",
            side_effect=LedgerParseError("sales", ledger_csv_files["sales"], "bad"),
        ):
            ok = run_pipeline(ledger_csv_files, ReconcileTargets(), tmp_path / "r.csv")

        assert ok is False

    def test_unsupported_output_returns_false(self, ledger_csv_files, tmp_path):
        ok = run_pipeline(ledger_csv_files, ReconcileTargets(), tmp_path / "r.json")
        assert ok is False

    def test_report_not_written_on_failure(self, ledger_csv_files, tmp_path):
        output = tmp_path / "report.csv"
        with patch(
            "src.pipeline.orchestrator.step_reconcile",
            return_value=pd.DataFrame({"x": [1]}),
        ):
            assert run_pipeline(ledger_csv_files, ReconcileTargets(), output) is False
        assert not output.exists()


class TestParser:
    """Test argument parsing."""

    def test_defaults(self):
        args = build_parser().parse_args([])
        assert args.config is None
        assert args.target_sales is None
        assert args.verbose is False

    def test_overrides(self):
        args = build_parser().parse_args(
            ["--sales", "s.csv", "--target-tax", "12.5", "-v"]
        )
        assert str(args.sales) == "s.csv"
        assert args.target_tax == 12.5
        assert args.verbose is True
