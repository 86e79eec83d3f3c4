# -*- coding: utf-8 -*-
"""Error taxonomy for a reconciliation run.

Every error here is terminal for the run: there is no partial report.
Cells that fail numeric coercion are NOT errors (they count as zero), see
src.reconciliation.aggregate.
"""

from typing import List, Optional


class ReconciliationError(Exception):
    """Base exception for all reconciliation failures.

    Subclasses carry a machine-readable ``code`` and the pipeline ``stage``
    that failed, so the CLI can report where the run stopped.
    """

    code: str = "RECONCILIATION_ERROR"
    stage: str = "reconcile"


class MissingInputError(ReconciliationError):
    """One or more of the four source ledgers was not supplied."""

    code: str = "MISSING_INPUT"
    stage: str = "load"

    def __init__(self, missing: List[str]):
        self.missing = list(missing)
        super().__init__(
            f"Missing ledgers: {', '.join(self.missing)} "
            "(opening, purchases, returns and sales are all required)"
        )


class SchemaError(ReconciliationError, ValueError):
    """A ledger does not have the columns the run needs."""

    code: str = "SCHEMA_ERROR"
    stage: str = "validate"

    def __init__(self, ledger: Optional[str], columns: List[str], detail: str = ""):
        self.ledger = ledger
        self.columns = list(columns)
        message = f"Ledger '{ledger or 'unknown'}'"
        if self.columns:
            message += f" missing required columns: {self.columns}"
        if detail:
            message += f" ({detail})" if self.columns else f": {detail}"
        super().__init__(message)


class LedgerParseError(ReconciliationError):
    """A ledger file exists but could not be read as delimited text."""

    code: str = "LEDGER_PARSE_ERROR"
    stage: str = "load"

    def __init__(self, ledger: str, path, reason: str):
        self.ledger = ledger
        self.path = path
        super().__init__(f"Failed to parse {ledger} ledger {path}: {reason}")
