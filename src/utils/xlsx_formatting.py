# -*- coding: utf-8 -*-
"""Report export: styled XLSX workbook or plain UTF-8 CSV."""

import logging
from pathlib import Path

import pandas as pd
from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill

from src.reconciliation.report import ReportTemplate

logger = logging.getLogger(__name__)

HEADER_FILL = PatternFill(start_color="4472C4", end_color="4472C4", fill_type="solid")
HEADER_FONT = Font(color="FFFFFF", bold=True)
MIN_COLUMN_WIDTH = 15


class XLSXFormatter:
    """XLSX formatting for the balanced report."""

    @staticmethod
    def format_header(worksheet, template: ReportTemplate) -> None:
        """Style the header row and size each column to its header.

        Args:
            worksheet: openpyxl Worksheet to format
            template: ReportTemplate with COLUMN definitions
        """
        for col_idx, col_spec in enumerate(template.COLUMNS, start=1):
            cell = worksheet.cell(row=1, column=col_idx)
            cell.fill = HEADER_FILL
            cell.font = HEADER_FONT
            cell.alignment = Alignment(horizontal="center", vertical="center")

            letter = cell.column_letter
            worksheet.column_dimensions[letter].width = max(
                len(col_spec.name), MIN_COLUMN_WIDTH
            )

    @staticmethod
    def apply_column_formats(
        worksheet,
        template: ReportTemplate,
        start_row: int = 2,
    ) -> None:
        """Apply number formats to data columns.

        Args:
            worksheet: openpyxl Worksheet to format
            template: ReportTemplate with COLUMN definitions
            start_row: First row of data (after header)
        """
        max_row = worksheet.max_row
        if max_row < start_row:
            return

        for col_idx, col_spec in enumerate(template.COLUMNS, start=1):
            if not col_spec.format_code:
                continue
            for row in range(start_row, max_row + 1):
                cell = worksheet.cell(row=row, column=col_idx)
                cell.number_format = col_spec.format_code
                if col_spec.data_type == "number":
                    cell.alignment = Alignment(horizontal="right")

    @staticmethod
    def write_xlsx(
        df: pd.DataFrame,
        output_path: Path,
        template: ReportTemplate,
        sheet_name: str = "Report",
    ) -> None:
        """Write the report DataFrame to a formatted XLSX file.

        Args:
            df: Report DataFrame (columns as in template)
            output_path: Path to output XLSX file
            template: ReportTemplate with COLUMN definitions
            sheet_name: Name for the worksheet
        """
        output_path.parent.mkdir(parents=True, exist_ok=True)

        workbook = Workbook()
        worksheet = workbook.active
        worksheet.title = sheet_name

        for col_idx, col_spec in enumerate(template.COLUMNS, start=1):
            worksheet.cell(row=1, column=col_idx, value=col_spec.name)

        for row_idx, row in enumerate(df.itertuples(index=False), start=2):
            for col_idx, (col_spec, value) in enumerate(
                zip(template.COLUMNS, row), start=1
            ):
                if pd.isna(value):
                    value = None
                elif col_spec.data_type == "number":
                    value = float(value)
                else:
                    value = str(value)
                worksheet.cell(row=row_idx, column=col_idx, value=value)

        XLSXFormatter.format_header(worksheet, template)
        XLSXFormatter.apply_column_formats(worksheet, template)

        workbook.save(output_path)
        logger.info(f"Wrote XLSX: {output_path}")


def write_report(
    report: pd.DataFrame,
    output_path: Path,
    template: ReportTemplate = None,
    sheet_name: str = "Report",
) -> Path:
    """Export the report; format chosen by file suffix (.xlsx or .csv).

    Raises:
        ValueError: If the report does not match the template, or the
            suffix is not supported.
    """
    if template is None:
        template = ReportTemplate()

    is_valid, errors = template.validate_dataframe(report)
    if not is_valid:
        logger.error(f"Template validation failed: {errors}")
        raise ValueError(f"Template validation failed: {errors}")

    output_path = Path(output_path)
    suffix = output_path.suffix.lower()

    if suffix == ".xlsx":
        XLSXFormatter.write_xlsx(report, output_path, template, sheet_name=sheet_name)
    elif suffix == ".csv":
        output_path.parent.mkdir(parents=True, exist_ok=True)
        report.to_csv(output_path, index=False, encoding="utf-8")
        logger.info(f"Wrote CSV: {output_path}")
    else:
        raise ValueError(f"Unsupported report format: {output_path.suffix}")

    return output_path
