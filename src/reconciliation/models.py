# -*- coding: utf-8 -*-
"""Record-set layout and small value types shared by the reconciliation stages.

The working set is a single DataFrame indexed by product code, one row per
code seen in any ledger. Stages add or mutate columns in place.
"""

from dataclasses import dataclass

import pandas as pd

# Ledger kinds, in the order the run expects them
LEDGER_KINDS = ("opening", "purchases", "returns", "sales")
INVENTORY_LEDGERS = ("opening", "purchases", "returns")

# Record-set columns
INVENTORY_FIELDS = ["opening", "purchased", "returned", "available"]
SALES_FIELDS = ["quantity", "amount", "tax", "tax_rate"]
MOVABLE_FIELDS = ["quantity", "amount", "tax"]
BALANCED_FIELDS = ["balanced_amount", "balanced_tax"]

# Control totals applied when none are supplied
DEFAULT_TARGET_SALES = 720343738661
DEFAULT_TARGET_TAX = 30574390776


@dataclass(frozen=True)
class ReconcileTargets:
    """Externally supplied control totals, in the ledger's currency subunit."""

    sales: float = DEFAULT_TARGET_SALES
    tax: float = DEFAULT_TARGET_TAX


@dataclass(frozen=True)
class BracketTransfer:
    """What one tax bracket moved from donors to recipients."""

    tax_rate: float
    donors: int
    recipients: int
    moved_quantity: float
    moved_amount: float
    moved_tax: float


def refresh_ending_balance(records: pd.DataFrame) -> pd.DataFrame:
    """Recompute ``ending_balance`` from the current sold quantity.

    Must be called after any stage that changes ``quantity``.
    """
    records["ending_balance"] = records["available"] - records["quantity"]
    return records
