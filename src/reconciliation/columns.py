# -*- coding: utf-8 -*-
"""Ledger column names and quantity-column resolution.

The source ledgers are exports from a Persian-language accounting package.
Sales columns are matched by exact header; inventory ledgers (opening,
purchases, returns) are not uniform across exports, so their quantity
column is picked from a priority list with a positional fallback.
"""

import logging
from typing import Optional, Sequence

from .exceptions import SchemaError

logger = logging.getLogger(__name__)

# ============================================================================
# SOURCE LEDGER COLUMNS
# ============================================================================

CODE_COLUMN = "کد کالا"
SALES_QUANTITY_COLUMN = "تعداد واحد جز"
SALES_TAX_RATE_COLUMN = "درصد مالیات"
SALES_AMOUNT_COLUMN = "فروش"
SALES_TAX_COLUMN = "جمع مالیات سطر"

SALES_REQUIRED_COLUMNS = [
    CODE_COLUMN,
    SALES_QUANTITY_COLUMN,
    SALES_TAX_RATE_COLUMN,
    SALES_AMOUNT_COLUMN,
    SALES_TAX_COLUMN,
]

# First candidate present wins
QUANTITY_COLUMN_CANDIDATES = ["تعداد واحد جز", "تعداد", "مانده تعدادی"]

FALLBACK_COLUMN_INDEX = 1


def resolve_quantity_column(
    headers: Sequence[str],
    candidates: Sequence[str] = QUANTITY_COLUMN_CANDIDATES,
    ledger: Optional[str] = None,
) -> str:
    """Pick the quantity column of an inventory ledger.

    Args:
        headers: Header names in file order.
        candidates: Accepted names, highest priority first. Headers are
            compared after stripping surrounding whitespace.
        ledger: Ledger kind, used in error messages and logs.

    Returns:
        The header exactly as it appears in ``headers``; the second column
        if no candidate matches.

    Raises:
        SchemaError: If the ledger has fewer than two columns.
    """
    headers = [str(h) for h in headers]
    if len(headers) <= FALLBACK_COLUMN_INDEX:
        raise SchemaError(
            ledger,
            [],
            f"expected at least 2 columns, found {len(headers)}",
        )

    for candidate in candidates:
        for header in headers:
            if header.strip() == candidate:
                logger.debug(f"{ledger or 'ledger'}: quantity column '{header}'")
                return header

    fallback = headers[FALLBACK_COLUMN_INDEX]
    logger.warning(
        f"{ledger or 'ledger'}: no known quantity column, using second column '{fallback}'"
    )
    return fallback
