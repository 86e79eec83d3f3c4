# -*- coding: utf-8 -*-
"""Centralized run configuration.

Reads directories, ledger file names, control totals and report settings
from pipeline.toml so the CLI needs no hardcoded paths.
"""

import logging
from pathlib import Path
from typing import Dict, Optional

import tomllib

from src.reconciliation.models import (
    DEFAULT_TARGET_SALES,
    DEFAULT_TARGET_TAX,
    LEDGER_KINDS,
    ReconcileTargets,
)
from src.utils import get_workspace_root

logger = logging.getLogger(__name__)

DEFAULT_REPORT_FILENAME = "Report_Final.xlsx"
DEFAULT_SHEET_NAME = "Report"


class PipelineConfig:
    """Run configuration loaded from pipeline.toml.

    Usage:
        config = PipelineConfig()
        paths = config.ledger_paths()       # {"opening": Path, ...}
        targets = config.targets()          # ReconcileTargets
        output = config.report_path()
    """

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize PipelineConfig from pipeline.toml.

        Args:
            config_path: Path to pipeline.toml. If None, uses the workspace root.

        Raises:
            FileNotFoundError: If config file not found.
        """
        if config_path is None:
            config_path = get_workspace_root() / "pipeline.toml"

        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path, "rb") as f:
            self._config = tomllib.load(f)

        dirs = self._config.get("dirs", {})
        self.input_dir = Path(dirs.get("input", "data/00-raw"))
        self.output_dir = Path(dirs.get("output", "data/03-report"))

        report = self._config.get("report", {})
        self.report_filename = report.get("filename", DEFAULT_REPORT_FILENAME)
        self.sheet_name = report.get("sheet_name", DEFAULT_SHEET_NAME)

        logger.debug(f"Loaded config from {config_path}")

    def ledger_paths(self) -> Dict[str, Path]:
        """Get the configured file for each ledger kind.

        Returns:
            Dict of ledger kind -> path under input_dir. Kinds without a
            configured file are left out (the loader reports them missing).
        """
        ledgers = self._config.get("ledgers", {})
        return {
            kind: self.input_dir / ledgers[kind]
            for kind in LEDGER_KINDS
            if ledgers.get(kind)
        }

    def targets(self) -> ReconcileTargets:
        """Get control totals, falling back to the built-in defaults."""
        targets = self._config.get("targets", {})
        return ReconcileTargets(
            sales=targets.get("sales", DEFAULT_TARGET_SALES),
            tax=targets.get("tax", DEFAULT_TARGET_TAX),
        )

    def report_path(self) -> Path:
        """Get the output report path."""
        return self.output_dir / self.report_filename
