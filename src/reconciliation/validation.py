# -*- coding: utf-8 -*-
"""Schema checks for the four source ledgers.

Only what the run needs is checked: the sales ledger must carry its five
named columns, and each inventory ledger must have at least two columns
(code plus something to fall back to as quantity). Cell contents are not
validated; non-numeric cells are tolerated downstream as zero.

Usage:
    from src.reconciliation.validation import validate_ledgers

    validate_ledgers({"opening": df_open, ..., "sales": df_sales})
"""

import logging
from typing import Dict, List, Mapping

import pandas as pd

from .columns import SALES_REQUIRED_COLUMNS
from .exceptions import MissingInputError, SchemaError
from .models import LEDGER_KINDS

logger = logging.getLogger(__name__)


EXPECTED_SCHEMAS = {
    "opening": {"required_columns": [], "min_columns": 2},
    "purchases": {"required_columns": [], "min_columns": 2},
    "returns": {"required_columns": [], "min_columns": 2},
    "sales": {"required_columns": SALES_REQUIRED_COLUMNS, "min_columns": 2},
}


def _missing_required_columns(df: pd.DataFrame, schema: Dict) -> List[str]:
    """Return required columns absent from ``df`` (exact header match)."""
    present = set(df.columns)
    return [col for col in schema.get("required_columns", []) if col not in present]


def check_ledgers_present(ledgers: Mapping[str, pd.DataFrame]) -> None:
    """Raise MissingInputError unless all four ledgers are supplied."""
    missing = [kind for kind in LEDGER_KINDS if ledgers.get(kind) is None]
    if missing:
        logger.error(f"Missing ledgers: {missing}")
        raise MissingInputError(missing)


def validate_ledger(kind: str, df: pd.DataFrame) -> None:
    """Validate one ledger against its expected schema.

    Args:
        kind: Ledger kind ("opening", "purchases", "returns", "sales").
        df: Ledger rows with header row as columns.

    Raises:
        ValueError: If ``kind`` is not a known ledger kind.
        SchemaError: If the ledger lacks required columns.
    """
    if kind not in EXPECTED_SCHEMAS:
        raise ValueError(f"Unknown ledger kind: {kind}")

    schema = EXPECTED_SCHEMAS[kind]

    if len(df.columns) < schema["min_columns"]:
        logger.error(f"{kind}: expected at least {schema['min_columns']} columns")
        raise SchemaError(
            kind,
            [],
            f"expected at least {schema['min_columns']} columns, found {len(df.columns)}",
        )

    missing = _missing_required_columns(df, schema)
    if missing:
        logger.error(f"{kind} missing required columns: {missing}")
        raise SchemaError(kind, missing)


def validate_ledgers(ledgers: Mapping[str, pd.DataFrame]) -> None:
    """Check presence, then schema, of all four ledgers."""
    check_ledgers_present(ledgers)
    for kind in LEDGER_KINDS:
        validate_ledger(kind, ledgers[kind])
    logger.debug("All ledgers passed schema validation")
