# -*- coding: utf-8 -*-
"""Reconcile the four period ledgers into one balanced report.

Pure entry point: no files, no globals. Ingestion and export live in
src.pipeline and src.utils; callers hand in DataFrames and get one back.

Stages, in order:
1. Check all four ledgers are present and carry the needed columns
2. Resolve each inventory ledger's quantity column
3. Aggregate ledgers per product code and merge over the union of codes
4. Redistribute negative ending balances within each tax bracket
5. Scale sales and tax to the control totals
6. Project the report columns
"""

import logging
from typing import Mapping, Optional

import pandas as pd

from .aggregate import aggregate, merge_inventory
from .balance import balance_targets
from .columns import CODE_COLUMN, resolve_quantity_column
from .models import INVENTORY_LEDGERS, ReconcileTargets, refresh_ending_balance
from .redistribute import redistribute
from .report import build_report
from .validation import validate_ledgers

logger = logging.getLogger(__name__)


def build_records(ledgers: Mapping[str, pd.DataFrame]) -> pd.DataFrame:
    """Aggregate and merge the ledgers into the working record set."""
    totals = {}
    for kind in INVENTORY_LEDGERS:
        rows = ledgers[kind]
        quantity_column = resolve_quantity_column(list(rows.columns), ledger=kind)
        totals[kind] = aggregate(rows, CODE_COLUMN, quantity_column)
        logger.info(
            f"{kind}: {len(rows)} rows -> {len(totals[kind])} codes "
            f"(quantity column '{quantity_column}')"
        )

    return merge_inventory(
        totals["opening"], totals["purchases"], totals["returns"], ledgers["sales"]
    )


def reconcile(
    ledgers: Mapping[str, pd.DataFrame],
    targets: Optional[ReconcileTargets] = None,
) -> pd.DataFrame:
    """Produce the balanced report from the four source ledgers.

    Args:
        ledgers: Mapping with keys "opening", "purchases", "returns", "sales";
            each value is the ledger's rows with its header row as columns.
        targets: Control totals for sales and tax. Defaults to
            ReconcileTargets().

    Returns:
        Report DataFrame, one row per distinct product code, in the column
        order of ReportTemplate.

    Raises:
        MissingInputError: If a ledger is missing.
        SchemaError: If a ledger lacks required columns.
    """
    if targets is None:
        targets = ReconcileTargets()

    validate_ledgers(ledgers)

    records = build_records(ledgers)
    negative_before = int((records["ending_balance"] < 0).sum())

    transfers = redistribute(records)
    refresh_ending_balance(records)
    negative_after = int((records["ending_balance"] < 0).sum())
    logger.info(
        f"Redistribution: {len(transfers)} brackets adjusted, "
        f"negative balances {negative_before} -> {negative_after}"
    )

    balance_targets(records, targets)

    report = build_report(records)
    logger.info(f"Report built: {len(report)} rows")
    return report
