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
Table Writers.

This module provides the abstract base class every output format implements
and the text-based writers (Markdown, HTML, CSV). The Excel writer lives in
`tablekit.utils.excel_writer`.

A writer receives the emission callbacks of one render, in the order fixed
by `TableRenderer` and `BodyPipeline`. Writers may raise any exception; the
renderer wraps it into a `RenderingError`.

The HTML writer converts captions, banners and footers from inline Markdown
with mistune, and can wrap the table in a standalone themed HTML document.

Classes:
    TableWriter: Abstract base class for all table writers
    MarkdownTableWriter: Writes a Markdown pipe table
    HtmlTableWriter: Writes an HTML table (optionally a full document)
    CsvTableWriter: Writes comma-separated values
"""
import csv
import html
import io
import logging
import re
from abc import ABC, abstractmethod
from typing import List, Optional, Union
import mistune
from tablekit.utils.contexts import banner_context
from tablekit.utils.data_models import GroupTotal, HeaderCell, Row, TableModel
from tablekit.utils.resource_manager import resource_manager

logger = logging.getLogger(__name__)


def _format_total(value: float) -> str:
    if value == int(value):
        return f"{int(value):,}"
    return f"{value:,.2f}"


def _plain_total(value: float) -> str:
    if value == int(value):
        return str(int(value))
    return repr(value)


class TableWriter(ABC):
    """
    Abstract base class for all table writers.

    Structural callbacks take the table model; row callbacks take the row;
    column callbacks take the column definition. `write_subgroup_start` and
    `write_subgroup_stop` default to no-ops.
    """

    @abstractmethod
    def write_empty_list_message(self, message: str) -> None:
        """
        Write a message in place of a hidden, empty table.

        Args:
            message: The configured empty list message
        """
        pass

    @abstractmethod
    def write_top_banner(self, model: TableModel) -> None:
        pass

    @abstractmethod
    def write_table_opener(self, model: TableModel) -> None:
        pass

    @abstractmethod
    def write_caption(self, model: TableModel) -> None:
        pass

    @abstractmethod
    def write_table_header(self, model: TableModel) -> None:
        pass

    @abstractmethod
    def write_pre_body_footer(self, model: TableModel) -> None:
        pass

    @abstractmethod
    def write_table_body_opener(self, model: TableModel) -> None:
        pass

    @abstractmethod
    def write_table_body_closer(self, model: TableModel) -> None:
        pass

    @abstractmethod
    def write_post_body_footer(self, model: TableModel) -> None:
        pass

    @abstractmethod
    def write_table_closer(self, model: TableModel) -> None:
        pass

    @abstractmethod
    def write_decorated_table_finish(self, model: TableModel) -> None:
        pass

    @abstractmethod
    def write_bottom_banner(self, model: TableModel) -> None:
        pass

    @abstractmethod
    def write_decorated_row_start(self, model: TableModel) -> None:
        pass

    def write_subgroup_start(self, model: TableModel) -> None:
        """Called before each row when a totaler is configured."""
        pass

    def write_subgroup_stop(self, model: TableModel) -> None:
        """Called after each row when a totaler is configured."""
        pass

    @abstractmethod
    def write_row_opener(self, row: Row) -> None:
        pass

    @abstractmethod
    def write_column_opener(self, column: HeaderCell) -> None:
        pass

    @abstractmethod
    def write_column_value(self, value: str, column: HeaderCell) -> None:
        """
        Write the displayed value of a cell.

        Args:
            value: Decorated cell value ("" when suppressed)
            column: Column definition of the cell
        """
        pass

    @abstractmethod
    def write_column_closer(self, column: HeaderCell) -> None:
        pass

    @abstractmethod
    def write_row_with_no_columns(self, value: str) -> None:
        """
        Write a row of a table without configured columns.

        Args:
            value: The stringified row item
        """
        pass

    @abstractmethod
    def write_row_closer(self, row: Row) -> None:
        pass

    @abstractmethod
    def write_decorated_row_finish(self, model: TableModel) -> None:
        pass

    @abstractmethod
    def write_empty_list_row_message(self, message: str) -> None:
        """
        Write the body row shown when the table has no rows.

        Args:
            message: The formatted empty row message
        """
        pass

    @abstractmethod
    def getvalue(self) -> Union[str, bytes]:
        """Return everything written so far."""
        pass


class MarkdownTableWriter(TableWriter):
    """
    Write a Markdown pipe table.

    Markdown has no table footer, so the footer is written as a paragraph
    after the table. Subtotal rows are written in italics.

    Example:
        >>> writer = MarkdownTableWriter()
        >>> TableRenderer(writer).render(model, 'orders')
        >>> markdown = writer.getvalue()
    """

    def __init__(self):
        self.lines: List[str] = []
        self._cells: List[str] = []
        self._header_written = False

    @staticmethod
    def _escape(value: str) -> str:
        return value.replace('|', '\\|').replace('\r\n', '<br>').replace('\n', '<br>')

    def _table_row(self, cells: List[str]) -> str:
        return "| " + " | ".join(cells) + " |"

    def write_empty_list_message(self, message: str) -> None:
        self.lines.append(f"*{message}*")

    def write_top_banner(self, model: TableModel) -> None:
        banner = banner_context.get()
        if banner:
            self.lines.append(f"<center>{banner}</center>")
            self.lines.append("")

    def write_table_opener(self, model: TableModel) -> None:
        self._header_written = False

    def write_caption(self, model: TableModel) -> None:
        self.lines.append(f"**{model.caption}**")
        self.lines.append("")

    def write_table_header(self, model: TableModel) -> None:
        titles = [self._escape(h.title or "") for h in model.header_cells] or [""]
        self.lines.append(self._table_row(titles))
        self.lines.append(self._table_row(["---"] * len(titles)))
        self._header_written = True

    def write_pre_body_footer(self, model: TableModel) -> None:
        pass

    def write_table_body_opener(self, model: TableModel) -> None:
        # pipe tables cannot start without a header row
        if not self._header_written:
            width = max(model.number_of_columns, 1)
            self.lines.append(self._table_row([" "] * width))
            self.lines.append(self._table_row(["---"] * width))
            self._header_written = True

    def write_table_body_closer(self, model: TableModel) -> None:
        pass

    def write_post_body_footer(self, model: TableModel) -> None:
        self.lines.append("")
        self.lines.append(model.footer or "")

    def write_table_closer(self, model: TableModel) -> None:
        self.lines.append("")

    def write_decorated_table_finish(self, model: TableModel) -> None:
        text = model.table_decorator.finish()
        if text:
            self.lines.append(text)

    def write_bottom_banner(self, model: TableModel) -> None:
        banner = banner_context.get()
        if banner:
            self.lines.append(f"<center>{banner}</center>")

    def write_decorated_row_start(self, model: TableModel) -> None:
        text = model.table_decorator.start_row()
        if text:
            self.lines.append(text)

    def write_subgroup_stop(self, model: TableModel) -> None:
        for group in model.totaler.pop_closed_groups():
            self.lines.append(self._table_row(self._subtotal_cells(model, group)))

    def _subtotal_cells(self, model: TableModel, group: GroupTotal) -> List[str]:
        cells = []
        for header in model.header_cells:
            if header.group == group.level:
                label = group.label(header.column_number)
                cells.append(f"*{self._escape(label)}*" if label else "")
            elif header.column_number in group.totals:
                cells.append(f"*{_format_total(group.totals[header.column_number])}*")
            else:
                cells.append("")
        return cells

    def write_row_opener(self, row: Row) -> None:
        self._cells = []

    def write_column_opener(self, column: HeaderCell) -> None:
        pass

    def write_column_value(self, value: str, column: HeaderCell) -> None:
        self._cells.append(self._escape(value))

    def write_column_closer(self, column: HeaderCell) -> None:
        pass

    def write_row_with_no_columns(self, value: str) -> None:
        self._cells.append(self._escape(value))

    def write_row_closer(self, row: Row) -> None:
        self.lines.append(self._table_row(self._cells))

    def write_decorated_row_finish(self, model: TableModel) -> None:
        text = model.table_decorator.finish_row()
        if text:
            self.lines.append(text)

    def write_empty_list_row_message(self, message: str) -> None:
        self.lines.append(self._table_row([self._escape(message)]))

    def getvalue(self) -> str:
        return "\n".join(self.lines).rstrip("\n") + "\n"


class HtmlTableWriter(TableWriter):
    """
    Write an HTML table.

    Cell values arrive already escaped (linked presentation), so they are
    written as-is. Captions, banners and footers are inline Markdown.

    Attributes:
        table_id: id attribute of the <table> element
        theme: Theme used by `getvalue(document=True)`
    """

    def __init__(self, table_id: str = "table", css_class: str = "tablekit", theme: str = "material_light"):
        self.table_id = table_id
        self.css_class = css_class
        self.theme = theme
        self.parts: List[str] = []
        self._row_index = 0
        self._columns = 1
        self._row_class: Optional[str] = None
        self._markdown = mistune.create_markdown(escape=True)

    def _inline(self, text: str) -> str:
        """Convert a line of Markdown to HTML without the enclosing paragraph."""
        rendered = str(self._markdown(text)).strip()
        return re.sub(r'^<p>(.*)</p>$', r'\1', rendered, flags=re.DOTALL)

    def _column_attrs(self, column: HeaderCell) -> str:
        classes = []
        if column.css_class:
            classes.append(column.css_class)
        if column.group is not None:
            classes.append(f"group-{column.group}")
        return f' class="{html.escape(" ".join(classes))}"' if classes else ""

    def write_empty_list_message(self, message: str) -> None:
        self.parts.append(f'<p class="empty">{html.escape(message)}</p>')

    def write_top_banner(self, model: TableModel) -> None:
        banner = banner_context.get()
        if banner:
            self.parts.append(f'<div class="banner top">{self._inline(banner)}</div>')

    def write_table_opener(self, model: TableModel) -> None:
        self._row_index = 0
        self._columns = max(model.number_of_columns, 1)
        self.parts.append(f'<table id="{html.escape(self.table_id)}" class="{html.escape(self.css_class)}">')

    def write_caption(self, model: TableModel) -> None:
        self.parts.append(f'<caption>{self._inline(model.caption)}</caption>')

    def write_table_header(self, model: TableModel) -> None:
        self.parts.append('<thead>')
        self.parts.append('<tr>')
        for header in model.header_cells:
            self.parts.append(f'<th{self._column_attrs(header)}>{html.escape(header.title or "")}</th>')
        self.parts.append('</tr>')
        self.parts.append('</thead>')

    def write_pre_body_footer(self, model: TableModel) -> None:
        colspan = max(model.number_of_columns, 1)
        self.parts.append('<tfoot>')
        self.parts.append(f'<tr><td colspan="{colspan}">{self._inline(model.footer)}</td></tr>')
        self.parts.append('</tfoot>')

    def write_table_body_opener(self, model: TableModel) -> None:
        self.parts.append('<tbody>')

    def write_table_body_closer(self, model: TableModel) -> None:
        self.parts.append('</tbody>')

    def write_post_body_footer(self, model: TableModel) -> None:
        # <tfoot> is already written before the body
        pass

    def write_table_closer(self, model: TableModel) -> None:
        self.parts.append('</table>')

    def write_decorated_table_finish(self, model: TableModel) -> None:
        text = model.table_decorator.finish()
        if text:
            self.parts.append(text)

    def write_bottom_banner(self, model: TableModel) -> None:
        banner = banner_context.get()
        if banner:
            self.parts.append(f'<div class="banner bottom">{self._inline(banner)}</div>')

    def write_decorated_row_start(self, model: TableModel) -> None:
        text = model.table_decorator.start_row()
        if text:
            self.parts.append(text)
        self._row_class = model.table_decorator.add_row_class()

    def write_subgroup_stop(self, model: TableModel) -> None:
        for group in model.totaler.pop_closed_groups():
            cells = []
            for header in model.header_cells:
                if header.group == group.level:
                    text = html.escape(group.label(header.column_number))
                elif header.column_number in group.totals:
                    text = _format_total(group.totals[header.column_number])
                else:
                    text = ""
                cells.append(f'<td{self._column_attrs(header)}>{text}</td>')
            self.parts.append(f'<tr class="subtotal subtotal-{group.level}">{"".join(cells)}</tr>')

    def write_row_opener(self, row: Row) -> None:
        self._row_index += 1
        classes = ["odd" if self._row_index % 2 else "even"]
        if self._row_class:
            classes.append(self._row_class)
        self._row_class = None
        self.parts.append(f'<tr class="{html.escape(" ".join(classes))}">')

    # Cells are appended to the open row's part so that values keep their
    # exact text when parts are joined with newlines.
    def write_column_opener(self, column: HeaderCell) -> None:
        self.parts[-1] += f'<td{self._column_attrs(column)}>'

    def write_column_value(self, value: str, column: HeaderCell) -> None:
        self.parts[-1] += value

    def write_column_closer(self, column: HeaderCell) -> None:
        self.parts[-1] += '</td>'

    def write_row_with_no_columns(self, value: str) -> None:
        self.parts[-1] += f'<td>{html.escape(value)}</td>'

    def write_row_closer(self, row: Row) -> None:
        self.parts[-1] += '</tr>'

    def write_decorated_row_finish(self, model: TableModel) -> None:
        text = model.table_decorator.finish_row()
        if text:
            self.parts.append(text)

    def write_empty_list_row_message(self, message: str) -> None:
        self.parts.append(f'<tr class="empty"><td colspan="{self._columns}">{html.escape(message)}</td></tr>')

    def getvalue(self, document: bool = False, title: str = "Table") -> str:
        """
        Return the written HTML.

        Args:
            document: Wrap the table in a standalone HTML document with CSS
            title: Document title when `document` is True

        Returns:
            HTML fragment or complete document
        """
        fragment = "\n".join(self.parts)
        if not document:
            return fragment + "\n"
        css = resource_manager.get_css(self.theme, banner_context.get())
        return (
            "<!DOCTYPE html>\n"
            "<html>\n<head>\n<meta charset=\"utf-8\">\n"
            f"<title>{html.escape(title)}</title>\n"
            f"<style>\n{css}\n</style>\n"
            "</head>\n<body>\n"
            f"{fragment}\n"
            "</body>\n</html>\n"
        )


class CsvTableWriter(TableWriter):
    """
    Write comma-separated values.

    Only rows are written: captions, banners and decorator output are
    dropped. Subtotal rows are written after the rows that close a group.
    """

    def __init__(self, dialect: str = "excel"):
        self._buffer = io.StringIO()
        self._writer = csv.writer(self._buffer, dialect=dialect)
        self._cells: List[str] = []

    def write_empty_list_message(self, message: str) -> None:
        self._writer.writerow([message])

    def write_top_banner(self, model: TableModel) -> None:
        pass

    def write_table_opener(self, model: TableModel) -> None:
        pass

    def write_caption(self, model: TableModel) -> None:
        pass

    def write_table_header(self, model: TableModel) -> None:
        self._writer.writerow([h.title or "" for h in model.header_cells])

    def write_pre_body_footer(self, model: TableModel) -> None:
        pass

    def write_table_body_opener(self, model: TableModel) -> None:
        pass

    def write_table_body_closer(self, model: TableModel) -> None:
        pass

    def write_post_body_footer(self, model: TableModel) -> None:
        self._writer.writerow([model.footer or ""])

    def write_table_closer(self, model: TableModel) -> None:
        pass

    def write_decorated_table_finish(self, model: TableModel) -> None:
        pass

    def write_bottom_banner(self, model: TableModel) -> None:
        pass

    def write_decorated_row_start(self, model: TableModel) -> None:
        pass

    def write_subgroup_stop(self, model: TableModel) -> None:
        for group in model.totaler.pop_closed_groups():
            cells = []
            for header in model.header_cells:
                if header.group == group.level:
                    cells.append(group.label(header.column_number))
                elif header.column_number in group.totals:
                    cells.append(_plain_total(group.totals[header.column_number]))
                else:
                    cells.append("")
            self._writer.writerow(cells)

    def write_row_opener(self, row: Row) -> None:
        self._cells = []

    def write_column_opener(self, column: HeaderCell) -> None:
        pass

    def write_column_value(self, value: str, column: HeaderCell) -> None:
        self._cells.append(value)

    def write_column_closer(self, column: HeaderCell) -> None:
        pass

    def write_row_with_no_columns(self, value: str) -> None:
        self._cells.append(value)

    def write_row_closer(self, row: Row) -> None:
        self._writer.writerow(self._cells)

    def write_decorated_row_finish(self, model: TableModel) -> None:
        pass

    def write_empty_list_row_message(self, message: str) -> None:
        self._writer.writerow([message])

    def getvalue(self) -> str:
        return self._buffer.getvalue()
