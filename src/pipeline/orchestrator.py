#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Sales / Stock-Card Balancer

Workflow:
1. Load: Read the four ledger CSVs (opening, purchases, purchase returns, sales)
2. Reconcile: Fix negative ending balances, scale sales and tax to the targets
3. Export: Write the balanced report (XLSX or CSV)

Ledger files, targets and output location come from pipeline.toml; any of
them can be overridden on the command line.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, Optional

import pandas as pd

from src.pipeline.data_loader import LedgerLoader
from src.reconciliation import (
    LEDGER_KINDS,
    ReconcileTargets,
    ReconciliationError,
    reconcile,
)
from src.utils.config import PipelineConfig
from src.utils.xlsx_formatting import write_report

logger = logging.getLogger(__name__)


# === PIPELINE STEPS ===


def step_load(paths: Dict[str, Optional[Path]]) -> Dict[str, pd.DataFrame]:
    """Step 1: Load the four ledgers."""
    logger.info("=" * 70)
    logger.info("STEP 1: LOAD LEDGERS")
    logger.info("=" * 70)

    ledgers = LedgerLoader(paths).load(show_progress=True)
    logger.info("All ledgers loaded")
    return ledgers


def step_reconcile(
    ledgers: Dict[str, pd.DataFrame], targets: ReconcileTargets
) -> pd.DataFrame:
    """Step 2: Reconcile and balance."""
    logger.info("=" * 70)
    logger.info("STEP 2: RECONCILE")
    logger.info("=" * 70)
    logger.info(f"Target sales: {targets.sales:,.0f}  Target tax: {targets.tax:,.0f}")

    return reconcile(ledgers, targets)


def step_export(report: pd.DataFrame, output_path: Path, sheet_name: str) -> Path:
    """Step 3: Export the report."""
    logger.info("=" * 70)
    logger.info("STEP 3: EXPORT")
    logger.info("=" * 70)

    return write_report(report, output_path, sheet_name=sheet_name)


def run_pipeline(
    paths: Dict[str, Optional[Path]],
    targets: ReconcileTargets,
    output_path: Path,
    sheet_name: str = "Report",
) -> bool:
    """Run load → reconcile → export. Returns True on success."""
    logger.info("\n" + "=" * 70)
    logger.info("STARTING RECONCILIATION")
    logger.info("=" * 70 + "\n")

    try:
        ledgers = step_load(paths)
        report = step_reconcile(ledgers, targets)
        written = step_export(report, output_path, sheet_name)
    except ReconciliationError as e:
        logger.error(f"Run failed at stage '{e.stage}' [{e.code}]: {e}")
        return False
    except (OSError, ValueError) as e:
        logger.error(f"Run failed: {e}")
        return False

    logger.info("\n" + "=" * 70)
    logger.info(f"Report ready: {written} ({len(report)} rows processed)")
    logger.info("=" * 70 + "\n")
    return True


# === MAIN ===


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Balance sales ledger and stock card: Load → Reconcile → Export",
        epilog=(
            "Examples:\n"
            "  python -m src.pipeline.orchestrator\n"
            "  python -m src.pipeline.orchestrator --target-sales 900000 "
            "--output report.csv"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to pipeline.toml (default: workspace root)",
    )
    parser.add_argument("--opening", type=Path, help="Opening inventory CSV")
    parser.add_argument("--purchases", type=Path, help="Purchases CSV")
    parser.add_argument("--returns", type=Path, help="Purchase returns CSV")
    parser.add_argument("--sales", type=Path, help="Sales CSV")
    parser.add_argument(
        "--target-sales", type=float, help="Target total sales amount"
    )
    parser.add_argument("--target-tax", type=float, help="Target total tax amount")
    parser.add_argument(
        "--output", type=Path, help="Report file (.xlsx or .csv)"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    return parser


def main(argv=None):
    """Main entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)-8s] %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    try:
        config = PipelineConfig(args.config)
    except FileNotFoundError as e:
        logger.error(str(e))
        sys.exit(1)

    paths = config.ledger_paths()
    for kind in LEDGER_KINDS:
        override = getattr(args, kind)
        if override is not None:
            paths[kind] = override

    targets = config.targets()
    targets = ReconcileTargets(
        sales=args.target_sales if args.target_sales is not None else targets.sales,
        tax=args.target_tax if args.target_tax is not None else targets.tax,
    )
    output_path = args.output or config.report_path()

    success = run_pipeline(paths, targets, output_path, config.sheet_name)
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
