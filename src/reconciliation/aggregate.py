# -*- coding: utf-8 -*-
"""Aggregate ledgers by product code and merge them into one record set.

This module:
1. Sums a numeric column per product code (aggregate)
2. Sums sold quantity / amount / tax per code, keeping the first tax rate seen
3. Builds the union of every code in any ledger
4. Merges inventory totals and sales aggregates into the working record set

Cells that are empty or not numeric count as 0.
"""

import logging
from typing import Iterable, List

import pandas as pd

from .columns import (
    CODE_COLUMN,
    SALES_AMOUNT_COLUMN,
    SALES_QUANTITY_COLUMN,
    SALES_TAX_COLUMN,
    SALES_TAX_RATE_COLUMN,
)
from .models import SALES_FIELDS, refresh_ending_balance

logger = logging.getLogger(__name__)


# ============================================================================
# HELPER FUNCTIONS
# ============================================================================


def normalize_code(value) -> str:
    """Coerce a product-code cell to text; missing cells become ""."""
    if value is None:
        return ""
    if not isinstance(value, str) and pd.isna(value):
        return ""
    return str(value)


def to_number(values: pd.Series) -> pd.Series:
    """Parse a column as float, treating failures and blanks as 0."""
    stripped = values.map(lambda v: v.strip() if isinstance(v, str) else v)
    return pd.to_numeric(stripped, errors="coerce").fillna(0.0).astype(float)


def _codes(rows: pd.DataFrame) -> pd.Series:
    if CODE_COLUMN not in rows.columns:
        return pd.Series("", index=rows.index, dtype=object)
    return rows[CODE_COLUMN].map(normalize_code)


def _numeric_column(rows: pd.DataFrame, column: str) -> pd.Series:
    if column not in rows.columns:
        return pd.Series(0.0, index=rows.index)
    return to_number(rows[column])


# ============================================================================
# AGGREGATION
# ============================================================================


def aggregate(rows: pd.DataFrame, group_column: str, value_column: str) -> pd.Series:
    """Sum ``value_column`` per distinct ``group_column`` value.

    Args:
        rows: Ledger rows.
        group_column: Column holding the product code.
        value_column: Column to sum. Absent column sums to 0.

    Returns:
        Series indexed by code (first-seen order) with float sums. Rows with
        an empty code are skipped, never grouped under "".
    """
    if group_column not in rows.columns:
        logger.warning(f"Group column '{group_column}' not found, nothing to aggregate")
        return pd.Series(dtype=float, name=value_column).rename_axis("code")

    keys = rows[group_column].map(normalize_code)
    values = _numeric_column(rows, value_column)

    mask = keys != ""
    totals = values[mask].groupby(keys[mask], sort=False).sum()
    return totals.rename(value_column).rename_axis("code")


def aggregate_sales(sales_rows: pd.DataFrame) -> pd.DataFrame:
    """Aggregate the sales ledger per code.

    Returns:
        DataFrame indexed by code with quantity, amount, tax (sums) and
        tax_rate (rate on the first row seen for the code).
    """
    frame = pd.DataFrame(
        {
            "code": _codes(sales_rows),
            "quantity": _numeric_column(sales_rows, SALES_QUANTITY_COLUMN),
            "amount": _numeric_column(sales_rows, SALES_AMOUNT_COLUMN),
            "tax": _numeric_column(sales_rows, SALES_TAX_COLUMN),
            "tax_rate": _numeric_column(sales_rows, SALES_TAX_RATE_COLUMN),
        }
    )
    frame = frame[frame["code"] != ""]

    if frame.empty:
        return pd.DataFrame(
            columns=SALES_FIELDS, index=pd.Index([], name="code"), dtype=float
        )

    # TODO: log codes whose rows disagree on tax_rate; today the first row wins silently
    return frame.groupby("code", sort=False).agg(
        quantity=("quantity", "sum"),
        amount=("amount", "sum"),
        tax=("tax", "sum"),
        tax_rate=("tax_rate", "first"),
    )


def collect_codes(*code_sources: Iterable[str]) -> List[str]:
    """Union of codes across sources, first-seen order, no empties."""
    seen = {}
    for source in code_sources:
        for code in source:
            code = normalize_code(code)
            if code:
                seen.setdefault(code, None)
    return list(seen)


# ============================================================================
# INVENTORY MERGE
# ============================================================================


def merge_inventory(
    opening: pd.Series,
    purchased: pd.Series,
    returned: pd.Series,
    sales_rows: pd.DataFrame,
) -> pd.DataFrame:
    """Build the record set over every code seen in any ledger.

    A code that only sold (no inventory anywhere) gets available = 0 and so
    a negative ending balance; a code with stock but no sales gets zero
    sales fields.

    Args:
        opening: Opening quantity per code (from aggregate()).
        purchased: Purchased quantity per code.
        returned: Returned-to-supplier quantity per code.
        sales_rows: Raw sales ledger rows.

    Returns:
        DataFrame indexed by code with opening, purchased, returned,
        available, quantity, amount, tax, tax_rate, ending_balance.
    """
    sales = aggregate_sales(sales_rows)
    codes = collect_codes(opening.index, purchased.index, returned.index, _codes(sales_rows))

    records = pd.DataFrame(index=pd.Index(codes, name="code", dtype=object))
    records["opening"] = opening.reindex(records.index, fill_value=0.0).astype(float)
    records["purchased"] = purchased.reindex(records.index, fill_value=0.0).astype(float)
    records["returned"] = returned.reindex(records.index, fill_value=0.0).astype(float)
    records["available"] = records["opening"] + records["purchased"] - records["returned"]

    for field in SALES_FIELDS:
        records[field] = sales[field].reindex(records.index, fill_value=0.0).astype(float)

    refresh_ending_balance(records)

    logger.info(
        f"Merged {len(records)} product codes "
        f"({len(sales)} with sales, {int((records['ending_balance'] < 0).sum())} negative)"
    )
    return records
