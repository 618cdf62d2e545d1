"""Assemble the sheet grids into one XLSX workbook."""

from datetime import date, datetime
from decimal import Decimal
from io import BytesIO
from typing import Any

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from src.core.config import settings
from src.core.exceptions import ExportDeliveryError
from src.modules.exports.schemas import ExportArtifact, Grid
from src.modules.exports.sheets import SHEET_ORDER

# Width is applied to at least this many columns on every sheet.
MIN_STYLED_COLUMNS = 15
FILE_EXTENSION = "xlsx"


def _cell_value(v: Any) -> Any:
    """Convert value for Excel (Decimal -> float, '' -> empty cell)."""
    if v is None or v == "":
        return None
    if isinstance(v, Decimal):
        return float(v)
    if isinstance(v, datetime) and v.tzinfo is not None:
        # openpyxl rejects timezone-aware datetimes
        return v.isoformat()
    return v


def _write_table(ws: Any, rows: Grid, start_row: int = 1) -> None:
    """Write list of rows to sheet starting at start_row."""
    for i, row in enumerate(rows, start=start_row):
        for j, val in enumerate(row, start=1):
            ws.cell(row=i, column=j, value=_cell_value(val))


def _apply_sheet_style(ws: Any, width: int, column_count: int) -> None:
    """Uniform column width, bold and frozen header row."""
    for c in range(1, max(column_count, MIN_STYLED_COLUMNS) + 1):
        ws.column_dimensions[get_column_letter(c)].width = width
    for c in range(1, column_count + 1):
        ws.cell(1, c).font = Font(bold=True)
    ws.freeze_panes = "A2"


def export_filename(generated_on: date, prefix: str | None = None) -> str:
    """e.g. hilome-data-export-2026-10-19.xlsx"""
    return f"{prefix or settings.export_file_prefix}-data-export-{generated_on.isoformat()}.{FILE_EXTENSION}"


def build_workbook(sheets: dict[str, Grid], column_width: int | None = None) -> Workbook:
    """Create one worksheet per label in the fixed sheet order."""
    missing = [name for name in SHEET_ORDER if name not in sheets]
    if missing:
        raise ValueError(f"Missing sheets for export: {', '.join(missing)}")
    width = column_width or settings.export_column_width

    wb = Workbook()
    wb.remove(wb.active)
    for name in SHEET_ORDER:
        rows = sheets[name]
        ws = wb.create_sheet(title=name)
        _write_table(ws, rows)
        column_count = max((len(r) for r in rows), default=0)
        _apply_sheet_style(ws, width, column_count)
    return wb


def assemble_workbook(
    sheets: dict[str, Grid],
    generated_on: date,
    column_width: int | None = None,
) -> ExportArtifact:
    """Build and serialize the workbook. Any failure here is a delivery failure."""
    try:
        wb = build_workbook(sheets, column_width=column_width)
        buf = BytesIO()
        wb.save(buf)
    except Exception as e:
        raise ExportDeliveryError() from e
    return ExportArtifact(filename=export_filename(generated_on), content=buf.getvalue())
