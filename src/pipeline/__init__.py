"""Pipeline orchestration module."""

from src.pipeline.data_loader import LedgerLoader, read_ledger_csv
from src.pipeline.orchestrator import (
    run_pipeline,
    step_export,
    step_load,
    step_reconcile,
)

__all__ = [
    "LedgerLoader",
    "read_ledger_csv",
    "run_pipeline",
    "step_load",
    "step_reconcile",
    "step_export",
]
