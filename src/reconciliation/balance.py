# -*- coding: utf-8 -*-
"""Scale sales and tax so their totals hit the external control totals.

Both passes use the same rule: multiply by target / current total, floor
each row, then add the whole remainder to the single largest row so the
column sum equals the target exactly.
"""

import logging

import numpy as np
import pandas as pd

from .models import ReconcileTargets

logger = logging.getLogger(__name__)


def scale_to_target(values: pd.Series, target: float) -> pd.Series:
    """Scale ``values`` so they sum to ``target`` exactly.

    Args:
        values: Current values (e.g. sales amount per code).
        target: Required sum.

    Returns:
        New series, same index. A non-positive current total leaves the
        ratio at 1. Ties for the largest row go to the first one.
    """
    total = values.sum()
    ratio = target / total if total > 0 else 1
    scaled = np.floor(values.astype(float) * ratio)

    diff = target - scaled.sum()
    if diff != 0 and not scaled.empty:
        largest = scaled.idxmax()
        scaled.loc[largest] += diff
        logger.debug(f"Rounding remainder {diff:,.0f} added to {largest}")

    return scaled


def balance_sales(records: pd.DataFrame, target_sales: float) -> pd.DataFrame:
    """Fill ``balanced_amount`` from ``amount`` over every record."""
    records["balanced_amount"] = scale_to_target(records["amount"], target_sales)
    logger.info(
        f"Sales balanced: {records['amount'].sum():,.0f} -> "
        f"{records['balanced_amount'].sum():,.0f} (target {target_sales:,.0f})"
    )
    return records


def balance_tax(records: pd.DataFrame, target_tax: float) -> pd.DataFrame:
    """Fill ``balanced_tax`` from ``tax`` over records with a positive rate.

    Zero-rate records get exactly 0.
    """
    taxable = records["tax_rate"] > 0
    records["balanced_tax"] = 0.0

    if not taxable.any():
        logger.warning("No taxable records, tax target not applied")
        return records

    records.loc[taxable, "balanced_tax"] = scale_to_target(
        records.loc[taxable, "tax"], target_tax
    )
    logger.info(
        f"Tax balanced over {int(taxable.sum())} taxable records: "
        f"{records.loc[taxable, 'tax'].sum():,.0f} -> "
        f"{records['balanced_tax'].sum():,.0f} (target {target_tax:,.0f})"
    )
    return records


def balance_targets(records: pd.DataFrame, targets: ReconcileTargets) -> pd.DataFrame:
    """Run the sales pass then the tax pass (they do not read each other)."""
    balance_sales(records, targets.sales)
    balance_tax(records, targets.tax)
    return records
