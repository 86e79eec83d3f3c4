# -*- coding: utf-8 -*-
"""Load the four source ledgers from CSV exports.

Every cell is read as text; numeric coercion happens in
src.reconciliation.aggregate. The ledgers are read concurrently and load()
returns only once all four are in memory.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Dict, Mapping, Optional

import pandas as pd
from tqdm import tqdm

from src.reconciliation.exceptions import LedgerParseError, MissingInputError
from src.reconciliation.models import LEDGER_KINDS

logger = logging.getLogger(__name__)

CSV_ENCODING = "utf-8"


def read_ledger_csv(path: Path, kind: str) -> pd.DataFrame:
    """Read one ledger CSV with a header row, all cells as text.

    Args:
        path: CSV file.
        kind: Ledger kind, for error messages.

    Returns:
        DataFrame with header names as columns; blank lines skipped, empty
        cells as "".

    Raises:
        LedgerParseError: If the file cannot be decoded or parsed.
    """
    try:
        df = pd.read_csv(
            path,
            encoding=CSV_ENCODING,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
        )
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        logger.error(f"{kind}: failed to read {path}: {e}")
        raise LedgerParseError(kind, path, str(e)) from e

    logger.info(f"Loaded {kind} ledger: {Path(path).name} ({len(df)} rows)")
    return df


class LedgerLoader:
    """Concurrent loader for the opening, purchases, returns and sales ledgers.

    Usage:
        loader = LedgerLoader({"opening": Path(...), ..., "sales": Path(...)})
        ledgers = loader.load()
    """

    def __init__(self, paths: Mapping[str, Optional[Path]], max_workers: int = 4):
        self.paths = {kind: paths.get(kind) for kind in LEDGER_KINDS}
        self.max_workers = max_workers

    def check_inputs(self) -> None:
        """Fail before reading anything if a ledger is unset or absent."""
        missing = [
            kind
            for kind, path in self.paths.items()
            if path is None or not Path(path).exists()
        ]
        if missing:
            for kind in missing:
                logger.error(f"{kind}: ledger file not found ({self.paths[kind]})")
            raise MissingInputError(missing)

    def load(self, show_progress: bool = False) -> Dict[str, pd.DataFrame]:
        """Read all four ledgers.

        Returns:
            Dict of ledger kind -> DataFrame.

        Raises:
            MissingInputError: If any ledger file is unset or absent.
            LedgerParseError: If any ledger fails to parse.
        """
        self.check_inputs()

        ledgers = {}
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = {
                executor.submit(read_ledger_csv, Path(path), kind): kind
                for kind, path in self.paths.items()
            }
            for future in tqdm(
                as_completed(futures),
                total=len(futures),
                desc="Loading ledgers",
                disable=not show_progress,
            ):
                kind = futures[future]
                ledgers[kind] = future.result()

        return {kind: ledgers[kind] for kind in LEDGER_KINDS}
