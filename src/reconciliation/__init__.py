"""Sales / stock-card reconciliation core."""

from .engine import reconcile
from .exceptions import (
    LedgerParseError,
    MissingInputError,
    ReconciliationError,
    SchemaError,
)
from .models import LEDGER_KINDS, BracketTransfer, ReconcileTargets
from .report import ColumnSpec, ReportTemplate, build_report

__all__ = [
    "reconcile",
    "ReconcileTargets",
    "BracketTransfer",
    "LEDGER_KINDS",
    "ColumnSpec",
    "ReportTemplate",
    "build_report",
    "ReconciliationError",
    "MissingInputError",
    "SchemaError",
    "LedgerParseError",
]
