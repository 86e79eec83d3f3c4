# -*- coding: utf-8 -*-
"""Shared ledger fixtures.

Ledgers are built the way the CSV loader produces them: every cell as text.
"""

import pandas as pd
import pytest

from src.reconciliation.columns import (
    CODE_COLUMN,
    SALES_AMOUNT_COLUMN,
    SALES_QUANTITY_COLUMN,
    SALES_TAX_COLUMN,
    SALES_TAX_RATE_COLUMN,
)

INVENTORY_QTY_COLUMN = "تعداد"


def inventory_ledger(quantities: dict, qty_column: str = INVENTORY_QTY_COLUMN) -> pd.DataFrame:
    """Inventory ledger with code + quantity columns."""
    return pd.DataFrame(
        {
            CODE_COLUMN: [str(code) for code in quantities],
            qty_column: [str(qty) for qty in quantities.values()],
        },
        columns=[CODE_COLUMN, qty_column],
    )


def sales_ledger(rows: list) -> pd.DataFrame:
    """Sales ledger from (code, qty, amount, tax, rate) tuples."""
    return pd.DataFrame(
        [
            {
                CODE_COLUMN: str(code),
                SALES_QUANTITY_COLUMN: str(qty),
                SALES_TAX_RATE_COLUMN: str(rate),
                SALES_AMOUNT_COLUMN: str(amount),
                SALES_TAX_COLUMN: str(tax),
            }
            for code, qty, amount, tax, rate in rows
        ],
        columns=[
            CODE_COLUMN,
            SALES_QUANTITY_COLUMN,
            SALES_TAX_RATE_COLUMN,
            SALES_AMOUNT_COLUMN,
            SALES_TAX_COLUMN,
        ],
    )


@pytest.fixture
def scenario_ledgers():
    """P1 oversold by 5 in the 9% bracket, P2 has 8 units of headroom."""
    return {
        "opening": inventory_ledger({"P1": 10, "P2": 8}),
        "purchases": inventory_ledger({"P1": 5}),
        "returns": inventory_ledger({}),
        "sales": sales_ledger(
            [
                ("P1", 20, 1000, 90, 9),
                ("P2", 0, 500, 0, 9),
            ]
        ),
    }


@pytest.fixture
def ledger_csv_files(tmp_path):
    """Write a small, consistent set of four ledger CSVs."""
    ledgers = {
        "opening": inventory_ledger({"A": 10, "B": 20, "C": 5}),
        "purchases": inventory_ledger({"A": 5, "B": 10}),
        "returns": inventory_ledger({"B": 2}),
        "sales": sales_ledger(
            [
                ("A", 12, 120000, 10800, 9),
                ("A", 6, 60000, 5400, 9),
                ("B", 8, 80000, 7200, 9),
                ("C", 3, 30000, 0, 0),
                ("D", 2, 20000, 0, 0),
            ]
        ),
    }
    paths = {}
    for kind, df in ledgers.items():
        path = tmp_path / f"{kind}.csv"
        df.to_csv(path, index=False, encoding="utf-8")
        paths[kind] = path
    return paths
