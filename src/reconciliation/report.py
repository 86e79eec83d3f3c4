# -*- coding: utf-8 -*-
"""Final report layout and projection.

Defines the eight report columns (Persian headers, as the accounting
report names them) and projects the reconciled record set onto them.
"""

from dataclasses import dataclass
from typing import List, Tuple

import pandas as pd

from .models import refresh_ending_balance


@dataclass
class ColumnSpec:
    """Specification for a single column of the final report."""

    name: str  # Header written to the sheet (e.g., "کد کالا")
    field: str  # Record-set column it is projected from
    data_type: str  # "text" or "number"
    format_code: str | None  # Excel format code (e.g., "#,##0")


class ReportTemplate:
    """8-column balanced sales / stock-card report."""

    COLUMNS = [
        ColumnSpec("کد کالا", "code", "text", None),
        ColumnSpec("اول دوره", "opening", "number", "#,##0.##"),
        ColumnSpec("خرید", "purchased", "number", "#,##0.##"),
        ColumnSpec("برگشت", "returned", "number", "#,##0.##"),
        ColumnSpec("تعداد فروش (اصلاح شده)", "quantity", "number", "#,##0.##"),
        ColumnSpec("مبلغ فروش (تراز شده)", "balanced_amount", "number", "#,##0"),
        ColumnSpec("مبلغ مالیات (تراز شده)", "balanced_tax", "number", "#,##0"),
        ColumnSpec("مانده پایان دوره نهایی", "ending_balance", "number", "#,##0.##"),
    ]

    def get_column_names(self) -> List[str]:
        """Get all column names in order."""
        return [col.name for col in self.COLUMNS]

    def validate_dataframe(self, df: pd.DataFrame) -> Tuple[bool, List[str]]:
        """Validate a report DataFrame against the template.

        Args:
            df: DataFrame to validate

        Returns:
            Tuple of (is_valid, list_of_errors)
        """
        errors = []

        for col_spec in self.COLUMNS:
            if col_spec.name not in df.columns:
                errors.append(f"Missing required column: {col_spec.name}")

        if not errors and list(df.columns) != self.get_column_names():
            errors.append("Columns are not in report order")

        for col_spec in self.COLUMNS:
            if col_spec.data_type != "number" or col_spec.name not in df.columns:
                continue
            if not pd.api.types.is_numeric_dtype(df[col_spec.name]):
                errors.append(f"Column '{col_spec.name}' is not numeric")

        return len(errors) == 0, errors


def build_report(records: pd.DataFrame, template: ReportTemplate = None) -> pd.DataFrame:
    """Project reconciled records onto the report columns.

    Recomputes ending_balance from the post-redistribution quantity first.
    Row order is the record-set order (universal code order).
    """
    if template is None:
        template = ReportTemplate()

    refresh_ending_balance(records)
    flat = records.reset_index()

    report = pd.DataFrame(
        {col_spec.name: flat[col_spec.field] for col_spec in template.COLUMNS}
    )
    return report
