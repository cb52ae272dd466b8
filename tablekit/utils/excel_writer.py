#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# ******************************************************************************
# Project: TableKit
# Author: Eric Robeck <robeckgeo@gmail.com>
#
# Copyright (c) 2025, Eric Robeck
# Licensed under the MIT License
# ******************************************************************************

"""
Excel table writer.

Writes a table to a single worksheet with openpyxl. One worksheet row is
written per table row; numeric strings are stored as numbers. When a totaler
is configured, subtotal rows follow the rows that close a group and the last
row of each outermost group gets a thick bottom border.

Classes:
    ExcelTableWriter: Writes a table to an openpyxl workbook
"""
import io
import logging
import re
from pathlib import Path
from typing import Any, List, Optional, Union
from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter
from tablekit.utils.contexts import banner_context
from tablekit.utils.data_models import HeaderCell, Row, TableModel
from tablekit.utils.table_writers import TableWriter

logger = logging.getLogger(__name__)

HEADER_FILL = PatternFill(start_color="E8EAF6", end_color="E8EAF6", fill_type="solid")
SUBTOTAL_FILL = PatternFill(start_color="FFF8E1", end_color="FFF8E1", fill_type="solid")
THICK_BOTTOM = Side(border_style="thick", color="000000")


# Plain decimals without leading zeros; "007" stays text.
DECIMAL_PATTERN = re.compile(r'^-?(0|[1-9]\d*)(\.\d+)?$')
INVALID_TITLE_CHARS = re.compile(r'[\[\]:*?/\\]')


def _coerce(value: str) -> Any:
    """Coerce plain decimal strings to numbers; keep anything else as-is."""
    v = value.strip()
    match = DECIMAL_PATTERN.match(v)
    if not match:
        return value
    if match.group(2) is None:
        return int(v)
    return float(v)


def _sheet_title(title: str) -> str:
    """Worksheet title without the characters Excel rejects, at most 31 long."""
    return INVALID_TITLE_CHARS.sub('', title)[:31] or "Table"


class ExcelTableWriter(TableWriter):
    """
    Write a table to an Excel worksheet.

    Example:
        >>> writer = ExcelTableWriter(sheet_title='Orders')
        >>> TableRenderer(writer).render(model, 'orders')
        >>> writer.save(Path('orders.xlsx'))
    """

    def __init__(self, sheet_title: str = "Table"):
        self.workbook = Workbook()
        self.worksheet = self.workbook.active
        self.worksheet.title = _sheet_title(sheet_title)
        self.current_row = 1
        self.header_row: Optional[int] = None
        self._columns = 1
        self._cells: List[Any] = []
        self._outer_level: Optional[int] = None

    def _write_text_row(self, text: str, font: Optional[Font] = None, fill: Optional[PatternFill] = None) -> None:
        """Write text merged across all table columns."""
        ws = self.worksheet
        cell = ws.cell(row=self.current_row, column=1, value=text)
        if font is not None:
            cell.font = font
        if fill is not None:
            cell.fill = fill
        if self._columns > 1:
            ws.merge_cells(
                start_row=self.current_row, start_column=1,
                end_row=self.current_row, end_column=self._columns
            )
        self.current_row += 1

    def _mark_group_end(self, last_row: int) -> None:
        """Apply a thick bottom border to the last row of a group, preserving left/right/top."""
        for col_idx in range(1, self._columns + 1):
            cell = self.worksheet.cell(row=last_row, column=col_idx)
            existing = cell.border if cell.border else Border()
            cell.border = Border(left=existing.left, right=existing.right, top=existing.top, bottom=THICK_BOTTOM)

    def write_empty_list_message(self, message: str) -> None:
        self._write_text_row(message, font=Font(italic=True))

    def write_top_banner(self, model: TableModel) -> None:
        banner = banner_context.get()
        if banner:
            self._columns = max(model.number_of_columns, 1)
            self._write_text_row(banner, font=Font(bold=True))

    def write_table_opener(self, model: TableModel) -> None:
        self._columns = max(model.number_of_columns, 1)
        levels = [h.group for h in model.header_cells if h.group is not None]
        self._outer_level = min(levels) if levels else None

    def write_caption(self, model: TableModel) -> None:
        self._write_text_row(model.caption, font=Font(bold=True, size=12))

    def write_table_header(self, model: TableModel) -> None:
        ws = self.worksheet
        for col_idx, header in enumerate(model.header_cells, start=1):
            cell = ws.cell(row=self.current_row, column=col_idx, value=header.title)
            cell.font = Font(bold=True)
            cell.fill = HEADER_FILL
            cell.alignment = Alignment(horizontal="center", vertical="center")
            ws.column_dimensions[get_column_letter(col_idx)].width = max(12, len(header.title or "") + 4)
        self.header_row = self.current_row
        self.current_row += 1
        ws.freeze_panes = f"A{self.current_row}"

    def write_pre_body_footer(self, model: TableModel) -> None:
        # worksheets have no footer section before the body
        pass

    def write_table_body_opener(self, model: TableModel) -> None:
        pass

    def write_table_body_closer(self, model: TableModel) -> None:
        pass

    def write_post_body_footer(self, model: TableModel) -> None:
        self._write_text_row(model.footer or "", font=Font(italic=True))

    def write_table_closer(self, model: TableModel) -> None:
        ws = self.worksheet
        last_data_row = max(1, self.current_row - 1)
        ws.print_area = f'A1:{get_column_letter(self._columns)}{last_data_row}'
        if self.header_row is not None:
            ws.print_title_rows = f'{self.header_row}:{self.header_row}'
        ws.page_setup.fitToWidth = 1
        ws.page_setup.fitToHeight = 0  # 0 means unlimited pages vertically

    def write_decorated_table_finish(self, model: TableModel) -> None:
        text = model.table_decorator.finish()
        if text:
            self._write_text_row(text)

    def write_bottom_banner(self, model: TableModel) -> None:
        banner = banner_context.get()
        if banner:
            self._write_text_row(banner, font=Font(bold=True))

    def write_decorated_row_start(self, model: TableModel) -> None:
        text = model.table_decorator.start_row()
        if text:
            self._write_text_row(text)

    def write_subgroup_stop(self, model: TableModel) -> None:
        ws = self.worksheet
        for group in model.totaler.pop_closed_groups():
            for col_idx, header in enumerate(model.header_cells, start=1):
                if header.group == group.level:
                    value: Any = group.label(header.column_number) or None
                else:
                    value = group.totals.get(header.column_number)
                cell = ws.cell(row=self.current_row, column=col_idx, value=value)
                cell.font = Font(italic=True)
                cell.fill = SUBTOTAL_FILL
            self.current_row += 1
            if group.level == self._outer_level:
                self._mark_group_end(self.current_row - 1)

    def write_row_opener(self, row: Row) -> None:
        self._cells = []

    def write_column_opener(self, column: HeaderCell) -> None:
        pass

    def write_column_value(self, value: str, column: HeaderCell) -> None:
        self._cells.append(_coerce(value))

    def write_column_closer(self, column: HeaderCell) -> None:
        pass

    def write_row_with_no_columns(self, value: str) -> None:
        self._cells.append(value)

    def write_row_closer(self, row: Row) -> None:
        for col_idx, value in enumerate(self._cells, start=1):
            self.worksheet.cell(row=self.current_row, column=col_idx, value=value)
        self.current_row += 1

    def write_decorated_row_finish(self, model: TableModel) -> None:
        text = model.table_decorator.finish_row()
        if text:
            self._write_text_row(text)

    def write_empty_list_row_message(self, message: str) -> None:
        self._write_text_row(message, font=Font(italic=True))

    def getvalue(self) -> bytes:
        """Return the workbook as .xlsx bytes."""
        buffer = io.BytesIO()
        self.workbook.save(buffer)
        return buffer.getvalue()

    def save(self, path: Union[str, Path]) -> None:
        """Save the workbook to an .xlsx file."""
        self.workbook.save(path)
        logger.info(f"Table saved to: {Path(path).resolve()}")
