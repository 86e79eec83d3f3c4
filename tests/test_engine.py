# -*- coding: utf-8 -*-
"""End-to-end tests for reconcile()."""

import logging

import pandas as pd
import pytest

from conftest import inventory_ledger, sales_ledger
from src.reconciliation import (
    MissingInputError,
    ReconcileTargets,
    ReportTemplate,
    SchemaError,
    reconcile,
)
from src.reconciliation.columns import CODE_COLUMN, SALES_AMOUNT_COLUMN

logger = logging.getLogger(__name__)

CODE = "کد کالا"
QTY = "تعداد فروش (اصلاح شده)"
SALES = "مبلغ فروش (تراز شده)"
TAX = "مبلغ مالیات (تراز شده)"
ENDING = "مانده پایان دوره نهایی"


class TestReconcile:
    """Test the full reconciliation run."""

    def test_report_schema(self, scenario_ledgers):
        report = reconcile(scenario_ledgers, ReconcileTargets(sales=1500, tax=90))
        assert list(report.columns) == ReportTemplate().get_column_names()
        assert report[CODE].tolist() == ["P1", "P2"]

    def test_scenario_redistribution_and_balance(self, scenario_ledgers):
        """P1 gives 5 units to P2; totals already match the targets."""
        report = reconcile(scenario_ledgers, ReconcileTargets(sales=1500, tax=90))
        rows = report.set_index(CODE)

        assert rows.loc["P1", QTY] == pytest.approx(15)
        assert rows.loc["P2", QTY] == pytest.approx(5)
        assert rows.loc["P1", SALES] == 750
        assert rows.loc["P2", SALES] == 750
        assert rows.loc["P1", ENDING] == pytest.approx(0)
        assert rows.loc["P2", ENDING] == pytest.approx(3)
        assert report[TAX].sum() == 90

    def test_targets_hit_exactly(self, scenario_ledgers):
        targets = ReconcileTargets(sales=720343738661, tax=30574390776)

        report = reconcile(scenario_ledgers, targets)

        assert report[SALES].sum() == targets.sales
        assert report[TAX].sum() == targets.tax

    def test_default_targets(self, scenario_ledgers):
        report = reconcile(scenario_ledgers)
        assert report[SALES].sum() == 720343738661
        assert report[TAX].sum() == 30574390776

    def test_union_of_codes(self):
        """Every code from any ledger appears exactly once."""
        ledgers = {
            "opening": inventory_ledger({"A": 5}),
            "purchases": inventory_ledger({"B": 5, "A": 1}),
            "returns": inventory_ledger({"C": 1}),
            "sales": sales_ledger([("D", 1, 100, 9, 9), ("A", 2, 200, 18, 9)]),
        }

        report = reconcile(ledgers, ReconcileTargets(sales=300, tax=27))

        assert report[CODE].tolist() == ["A", "B", "C", "D"]
        assert report[CODE].is_unique

    def test_sales_only_code_resolved_by_bracket_mate(self):
        ledgers = {
            "opening": inventory_ledger({"P4": 10}),
            "purchases": inventory_ledger({}),
            "returns": inventory_ledger({}),
            "sales": sales_ledger([("S1", 4, 400, 36, 9), ("P4", 2, 200, 18, 9)]),
        }

        report = reconcile(ledgers, ReconcileTargets(sales=600, tax=54)).set_index(CODE)

        assert report.loc["S1", QTY] == 0
        assert report.loc["S1", ENDING] == 0
        assert report.loc["P4", QTY] == pytest.approx(6)
        assert report.loc["P4", SALES] == 600
        assert (report[ENDING] >= 0).all()

    def test_zero_rate_products_get_no_tax(self):
        ledgers = {
            "opening": inventory_ledger({"T": 10, "Z": 10}),
            "purchases": inventory_ledger({}),
            "returns": inventory_ledger({}),
            "sales": sales_ledger([("T", 1, 100, 9, 9), ("Z", 1, 100, 0, 0)]),
        }

        report = reconcile(ledgers, ReconcileTargets(sales=400, tax=50)).set_index(CODE)

        assert report.loc["Z", TAX] == 0
        assert report.loc["T", TAX] == 50

    def test_inputs_not_mutated(self, scenario_ledgers):
        snapshot = {kind: df.copy() for kind, df in scenario_ledgers.items()}
        reconcile(scenario_ledgers)
        for kind, df in scenario_ledgers.items():
            pd.testing.assert_frame_equal(df, snapshot[kind])


class TestReconcileErrors:
    """Test fatal input errors."""

    def test_missing_ledger(self, scenario_ledgers):
        del scenario_ledgers["returns"]

        with pytest.raises(MissingInputError) as exc_info:
            reconcile(scenario_ledgers)

        assert exc_info.value.missing == ["returns"]

    def test_none_ledger_counts_as_missing(self, scenario_ledgers):
        scenario_ledgers["sales"] = None

        with pytest.raises(MissingInputError, match="sales"):
            reconcile(scenario_ledgers)

    def test_sales_column_missing(self, scenario_ledgers):
        scenario_ledgers["sales"] = scenario_ledgers["sales"].drop(
            columns=[SALES_AMOUNT_COLUMN]
        )

        with pytest.raises(SchemaError) as exc_info:
            reconcile(scenario_ledgers)

        assert exc_info.value.ledger == "sales"
        assert exc_info.value.columns == [SALES_AMOUNT_COLUMN]

    def test_inventory_with_one_column(self, scenario_ledgers):
        scenario_ledgers["opening"] = pd.DataFrame({CODE_COLUMN: ["P1"]})

        with pytest.raises(SchemaError, match="opening"):
            reconcile(scenario_ledgers)
