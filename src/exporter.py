# src/exporter.py
from __future__ import annotations

import io
import logging
from typing import Dict, Iterable, List

import pandas as pd
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.properties import PageSetupProperties
from openpyxl.worksheet.worksheet import Worksheet

from src.calendar_engine import DAY_NAMES, HeaderTone, MonthGrid, VisualCategory, header_tone

logger = logging.getLogger(__name__)

XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

# Colors (RGB hex)
COLOR_YEAR_HEADER = "1B4F72"
COLOR_MONTH_HEADER = "2E86AB"
COLOR_HOLIDAY_TEXT = "C0392B"
COLOR_WHITE = "FFFFFF"
COLOR_BLACK = "000000"

HEADER_TONE_FILL: Dict[HeaderTone, str] = {
    HeaderTone.ACCENT_DARK: "5B2C6F",
    HeaderTone.ACCENT_LIGHT: "AF7AC5",
    HeaderTone.WEEKEND: "808080",
}

CATEGORY_FILL: Dict[VisualCategory, str] = {
    VisualCategory.HOLIDAY_AND_SCHOOL_HOLIDAY: "F5B7B1",
    VisualCategory.PUBLIC_HOLIDAY: "FADBD8",
    VisualCategory.SCHOOL_HOLIDAY_WEEKEND: "AED6F1",
    VisualCategory.SCHOOL_HOLIDAY: "D6EAF8",
    VisualCategory.WEEKEND: "D3D3D3",
    VisualCategory.PLAIN: COLOR_WHITE,
}

HOLIDAY_CATEGORIES = (VisualCategory.HOLIDAY_AND_SCHOOL_HOLIDAY, VisualCategory.PUBLIC_HOLIDAY)

LEGEND = [
    (VisualCategory.PUBLIC_HOLIDAY, "Public holiday"),
    (VisualCategory.HOLIDAY_AND_SCHOOL_HOLIDAY, "Public + school holiday"),
    (VisualCategory.SCHOOL_HOLIDAY, "School holiday"),
    (VisualCategory.SCHOOL_HOLIDAY_WEEKEND, "School holiday (weekend)"),
    (VisualCategory.WEEKEND, "Weekend"),
]

# Row heights
HEIGHT_YEAR_ROW = 35
HEIGHT_MONTH_ROW = 30
HEIGHT_DAY_HEADER_ROW = 25
HEIGHT_DATE_ROW = 20
HEIGHT_ACTIVITY_ROW = 50

COLUMN_WIDTH = 22

YEAR_ROW = 1
MONTH_ROW = 2
DAY_HEADER_ROW = 3
FIRST_WEEK_ROW = 4      # each week = date row + activity row

THIN = Side(style="thin", color=COLOR_BLACK)
THICK = Side(style="thick", color=COLOR_BLACK)

CENTER = Alignment(horizontal="center", vertical="center")


def _fill(rgb: str) -> PatternFill:
    return PatternFill(fill_type="solid", start_color=rgb, end_color=rgb)


def month_frame(grid: MonthGrid) -> pd.DataFrame:
    """
    Grid body as a DataFrame: columns MON..SUN, two rows per week
    (date numbers, then holiday labels). Blank positions are None.
    """
    rows: List[list] = []
    for week in grid.weeks():
        rows.append([c.date_number for c in week])
        rows.append([(c.label or None) for c in week])
    return pd.DataFrame(rows, columns=list(DAY_NAMES), dtype=object)


def week_rows(week: int):
    """(date_row, activity_row) of a week, 1-based sheet rows."""
    date_row = FIRST_WEEK_ROW + 2 * week
    return date_row, date_row + 1


def _write_banner(ws: Worksheet, row: int, value, size: int, rgb: str, height: int) -> None:
    ws.merge_cells(start_row=row, start_column=1, end_row=row, end_column=7)
    cell = ws.cell(row=row, column=1)
    cell.value = value
    cell.font = Font(bold=True, size=size, color=COLOR_WHITE)
    cell.fill = _fill(rgb)
    cell.alignment = CENTER
    ws.row_dimensions[row].height = height


def _write_day_headers(ws: Worksheet) -> None:
    ws.row_dimensions[DAY_HEADER_ROW].height = HEIGHT_DAY_HEADER_ROW
    for col, name in enumerate(DAY_NAMES):
        cell = ws.cell(row=DAY_HEADER_ROW, column=col + 1)
        cell.value = name
        cell.font = Font(bold=True, size=14, color=COLOR_WHITE)
        cell.fill = _fill(HEADER_TONE_FILL[header_tone(col)])
        cell.alignment = CENTER
        # thick line under the header row
        cell.border = Border(bottom=THICK)


def _write_grid(ws: Worksheet, grid: MonthGrid) -> int:
    """Writes date/activity rows, returns the last sheet row used."""
    last_row = DAY_HEADER_ROW
    for week_idx, week in enumerate(grid.weeks()):
        date_row, activity_row = week_rows(week_idx)
        ws.row_dimensions[date_row].height = HEIGHT_DATE_ROW
        ws.row_dimensions[activity_row].height = HEIGHT_ACTIVITY_ROW

        for day in week:
            category = day.visual_category
            fill = _fill(CATEGORY_FILL[category])

            # date row: open at the bottom so it reads as one box with the activity row
            date_cell = ws.cell(row=date_row, column=day.column + 1)
            date_cell.value = day.date_number
            date_cell.font = Font(size=11, bold=True)
            date_cell.alignment = Alignment(horizontal="right", vertical="top")
            date_cell.fill = fill
            date_cell.border = Border(top=THIN, left=THIN, right=THIN)

            activity_cell = ws.cell(row=activity_row, column=day.column + 1)
            activity_cell.value = day.label or None
            if category in HOLIDAY_CATEGORIES:
                activity_cell.font = Font(size=10, bold=True, color=COLOR_HOLIDAY_TEXT)
            else:
                activity_cell.font = Font(size=10)
            activity_cell.alignment = Alignment(horizontal="left", vertical="top", wrap_text=True)
            activity_cell.fill = fill
            activity_cell.border = Border(bottom=THIN, left=THIN, right=THIN)

        last_row = activity_row
    return last_row


def _outline(ws: Worksheet, min_row: int, max_row: int, min_col: int = 1, max_col: int = 7) -> None:
    """Thick outline around a block, keeping the inner sides of each edge cell."""
    for row in range(min_row, max_row + 1):
        for col in range(min_col, max_col + 1):
            if row not in (min_row, max_row) and col not in (min_col, max_col):
                continue
            cell = ws.cell(row=row, column=col)
            b = cell.border
            cell.border = Border(
                left=THICK if col == min_col else b.left,
                right=THICK if col == max_col else b.right,
                top=THICK if row == min_row else b.top,
                bottom=THICK if row == max_row else b.bottom,
            )


def _write_legend(ws: Worksheet, row: int) -> None:
    for col, (category, text) in enumerate(LEGEND, start=1):
        cell = ws.cell(row=row, column=col)
        cell.value = text
        cell.fill = _fill(CATEGORY_FILL[category])
        cell.font = Font(size=9, italic=True)
        cell.alignment = CENTER
        cell.border = Border(top=THIN, left=THIN, right=THIN, bottom=THIN)


def style_month_sheet(ws: Worksheet, grid: MonthGrid) -> None:
    for col in range(1, 8):
        ws.column_dimensions[get_column_letter(col)].width = COLUMN_WIDTH

    _write_banner(ws, YEAR_ROW, grid.year, 24, COLOR_YEAR_HEADER, HEIGHT_YEAR_ROW)
    _write_banner(ws, MONTH_ROW, grid.month_name, 20, COLOR_MONTH_HEADER, HEIGHT_MONTH_ROW)
    _write_day_headers(ws)
    last_row = _write_grid(ws, grid)
    _outline(ws, YEAR_ROW, last_row)
    _write_legend(ws, last_row + 2)

    ws.page_setup.orientation = "landscape"
    ws.page_setup.fitToWidth = 1
    ws.page_setup.fitToHeight = 1
    ws.sheet_properties.pageSetUpPr = PageSetupProperties(fitToPage=True)


def export_calendar_xlsx(grids: Iterable[MonthGrid], year: int) -> bytes:
    """
    One sheet per month grid, styled calendar layout. Returns the .xlsx bytes
    (app.py hands them to st.download_button).
    """
    grids = list(grids)
    if not grids:
        raise ValueError("No month grids to export")

    xlsx_buf = io.BytesIO()
    with pd.ExcelWriter(xlsx_buf, engine="openpyxl") as writer:
        for grid in grids:
            # header-only frame creates the sheet; style_month_sheet fills the weeks
            pd.DataFrame(columns=list(DAY_NAMES)).to_excel(
                writer, index=False, sheet_name=grid.month_name, startrow=DAY_HEADER_ROW - 1
            )
            style_month_sheet(writer.sheets[grid.month_name], grid)
            logger.debug("Styled sheet %s (%d weeks)", grid.month_name, grid.week_count)

        writer.book.active = 0

    data = xlsx_buf.getvalue()
    logger.info("Exported %d month sheets for %s (%d bytes)", len(grids), year, len(data))
    return data
