# -*- coding: utf-8 -*-
"""Resolve negative ending balances by moving sales within a tax bracket.

A negative ending balance means more was sold than was ever available, so
part of that product's sales is treated as over-reported and reallocated to
products in the same tax bracket that still have stock. Moving value across
brackets would change the tax owed, so each bracket is handled alone.

Per bracket (single pass, no iteration to convergence):
1. Donors: ending_balance < 0. Recipients: ending_balance > 0 and amount > 0.
2. Skip the bracket if either side is empty.
3. Each donor gives up quantity/amount/tax times
   min(1, |ending_balance| / max(quantity, 1)).
4. The bracket total is shared among recipients by sales amount weight.
"""

import logging
from typing import List

import pandas as pd

from .models import MOVABLE_FIELDS, BracketTransfer

logger = logging.getLogger(__name__)


def deficit_ratios(donors: pd.DataFrame) -> pd.Series:
    """Fraction of each donor's sales to move away, capped at 1.0.

    A zero (or sub-unit) quantity divides by 1 instead.
    """
    divisor = donors["quantity"].clip(lower=1.0)
    return (donors["ending_balance"].abs() / divisor).clip(upper=1.0)


def redistribute_bracket(records: pd.DataFrame, codes: pd.Index, tax_rate: float):
    """Redistribute within one bracket, mutating ``records`` in place.

    Args:
        records: Full record set (indexed by code).
        codes: Codes belonging to this bracket.
        tax_rate: The bracket's rate, for reporting.

    Returns:
        BracketTransfer, or None if the bracket had no donors or no recipients.
    """
    bracket = records.loc[codes]
    donor_codes = bracket.index[bracket["ending_balance"] < 0]
    recipient_codes = bracket.index[
        (bracket["ending_balance"] > 0) & (bracket["amount"] > 0)
    ]

    if donor_codes.empty or recipient_codes.empty:
        return None

    ratios = deficit_ratios(records.loc[donor_codes])
    moves = records.loc[donor_codes, MOVABLE_FIELDS].mul(ratios, axis=0)
    records.loc[donor_codes, MOVABLE_FIELDS] -= moves
    totals = moves.sum()

    recipient_amounts = records.loc[recipient_codes, "amount"]
    weights = recipient_amounts / recipient_amounts.sum()
    for field in MOVABLE_FIELDS:
        records.loc[recipient_codes, field] += weights * totals[field]

    return BracketTransfer(
        tax_rate=float(tax_rate),
        donors=len(donor_codes),
        recipients=len(recipient_codes),
        moved_quantity=float(totals["quantity"]),
        moved_amount=float(totals["amount"]),
        moved_tax=float(totals["tax"]),
    )


def redistribute(records: pd.DataFrame) -> List[BracketTransfer]:
    """Run the redistribution pass over every tax bracket.

    Mutates quantity, amount and tax in place. ``ending_balance`` is read as
    computed before the pass and is NOT refreshed here; call
    refresh_ending_balance() afterwards.

    Returns:
        One BracketTransfer per bracket that actually moved sales.
    """
    transfers = []
    for tax_rate, bracket in records.groupby("tax_rate", sort=False):
        transfer = redistribute_bracket(records, bracket.index, tax_rate)
        if transfer is None:
            logger.debug(f"Bracket {tax_rate}%: nothing to redistribute")
            continue

        logger.info(
            f"Bracket {tax_rate}%: moved qty={transfer.moved_quantity:,.2f} "
            f"amount={transfer.moved_amount:,.0f} tax={transfer.moved_tax:,.0f} "
            f"from {transfer.donors} donors to {transfer.recipients} recipients"
        )
        transfers.append(transfer)

    return transfers
