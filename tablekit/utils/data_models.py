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
Data Models for TableKit.

This module defines the data classes describing a table to be rendered: its
rows, its column (header) definitions, its configuration flags, and the
model object that ties them together for one render pass.

Table definition classes:
    HeaderCell: One column definition (ordinal, property, grouping level)
    TableProperties: Configuration flags and message templates
    TableModel: Rows, columns, decorators and properties of one table

Iteration classes:
    Row: One data item with its row number and page offset
    RowIterator: Iterator over the rows of the current page or the full list

Totals classes:
    GroupTotal: A closed group with the totals accumulated over its rows
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Sequence, TYPE_CHECKING
from tablekit.utils.exceptions import TableConfigError
from tablekit.utils.render_constants import (
    MediaType, DEFAULT_EMPTY_LIST_MESSAGE, DEFAULT_EMPTY_LIST_ROW_MESSAGE
)

if TYPE_CHECKING:
    from tablekit.utils.config_loader import Config
    from tablekit.utils.decorators import TableDecorator, TableTotaler
    from tablekit.utils.value_accessor import ValueAccessor

logger = logging.getLogger(__name__)


# ============================================================================
# Table definition classes
# ============================================================================

@dataclass
class HeaderCell:
    """
    A single column definition.

    Column ordinals and grouping levels are fixed for a whole render.

    Attributes:
        column_number: 0-based ordinal of the column
        property_name: Attribute or mapping key read from each row item
        title: Header text (defaults to the property name)
        group: Grouping level (0 is the outermost group), or None
        max_length: Truncate the displayed value in linked media (0 = off)
        href: Optional URL template with a `{value}` slot, linked media only
        css_class: Optional CSS class for the HTML cells of this column
        total: True if the column is summed by a totaler

    Example:
        >>> HeaderCell(column_number=0, property_name='city', group=0)
    """
    column_number: int
    property_name: str
    title: Optional[str] = None
    group: Optional[int] = None
    max_length: int = 0
    href: Optional[str] = None
    css_class: Optional[str] = None
    total: bool = False

    def __post_init__(self):
        if self.title is None:
            self.title = self.property_name
        if self.group is not None and self.group < 0:
            raise TableConfigError(f"Grouping level must be >= 0, got {self.group} for column '{self.property_name}'")

    @property
    def is_grouped(self) -> bool:
        """True if the column takes part in group detection."""
        return self.group is not None


@dataclass
class TableProperties:
    """
    Configuration flags and message templates for a table.

    Attributes:
        show_header: Write the header row
        empty_list_show_table: Write the table structure when there are no rows
        export_full_list: Export media iterate the full list instead of the page
        empty_list_message: Message written instead of a hidden empty table
        empty_list_row_message: Template for the empty body row, `{0}` is the column count
        locale: Locale name used when formatting messages
        page_size: Rows per page (0 = no paging)
    """
    show_header: bool = True
    empty_list_show_table: bool = False
    export_full_list: bool = True
    empty_list_message: str = DEFAULT_EMPTY_LIST_MESSAGE
    empty_list_row_message: str = DEFAULT_EMPTY_LIST_ROW_MESSAGE
    locale: str = "en_US"
    page_size: int = 0

    @classmethod
    def from_config(cls, config: Optional["Config"] = None) -> "TableProperties":
        """
        Build properties from the `[table]` and `[messages]` config sections.

        Args:
            config: Config instance (defaults to the application singleton)

        Returns:
            TableProperties populated from configuration, falling back to defaults
        """
        if config is None:
            from tablekit.utils.config_loader import config as app_config
            config = app_config
        defaults = cls()
        return cls(
            show_header=bool(config.get("table.show_header", defaults.show_header)),
            empty_list_show_table=bool(config.get("table.empty_list_show_table", defaults.empty_list_show_table)),
            export_full_list=bool(config.get("table.export_full_list", defaults.export_full_list)),
            empty_list_message=config.get("messages.empty_list", defaults.empty_list_message),
            empty_list_row_message=config.get("messages.empty_list_row", defaults.empty_list_row_message),
            locale=config.get("messages.locale", defaults.locale),
            page_size=int(config.get("table.page_size", defaults.page_size)),
        )


# ============================================================================
# Iteration classes
# ============================================================================

@dataclass
class Row:
    """
    One data item of the table.

    Attributes:
        item: The underlying item (object or mapping)
        row_number: 1-based position within the iterated collection
        page_offset: Number of rows preceding the rendered page in the full list
    """
    item: Any
    row_number: int
    page_offset: int = 0

    @property
    def absolute_row_number(self) -> int:
        """Position of the row within the full, unpaged collection."""
        return self.row_number + self.page_offset


class RowIterator:
    """Iterator over rows, numbering them from 1 and carrying the page offset."""

    def __init__(self, items: Sequence[Any], page_offset: int = 0):
        self._items = items
        self._index = 0
        self.page_offset = page_offset

    def __iter__(self) -> Iterator[Row]:
        return self

    def __next__(self) -> Row:
        if self._index >= len(self._items):
            raise StopIteration
        item = self._items[self._index]
        self._index += 1
        return Row(item=item, row_number=self._index, page_offset=self.page_offset)

    def has_next(self) -> bool:
        return self._index < len(self._items)


# ============================================================================
# Table model
# ============================================================================

@dataclass
class TableModel:
    """
    Everything needed to render one table.

    A model is read-only for the engine: rows are never mutated or reordered.

    Attributes:
        rows: The full, unpaged row collection
        header_cells: Ordered column definitions
        properties: Configuration flags and message templates
        media: Output media the table is rendered for
        caption: Optional caption text
        footer: Optional footer text
        table_decorator: Optional row decorator
        totaler: Optional totals accumulator
        value_accessor: Reads cell values (defaults to ColumnValueAccessor)
        page: 1-based page number when paging is enabled

    Example:
        >>> model = TableModel(
        ...     rows=[{'city': 'Oslo'}, {'city': 'Rome'}],
        ...     header_cells=[HeaderCell(0, 'city', group=0)],
        ... )
        >>> model.number_of_columns
        1
    """
    rows: Sequence[Any]
    header_cells: List[HeaderCell] = field(default_factory=list)
    properties: TableProperties = field(default_factory=TableProperties)
    media: MediaType = MediaType.HTML
    caption: Optional[str] = None
    footer: Optional[str] = None
    table_decorator: Optional["TableDecorator"] = None
    totaler: Optional["TableTotaler"] = None
    value_accessor: Optional["ValueAccessor"] = None
    page: int = 1

    def __post_init__(self):
        if self.value_accessor is None:
            from tablekit.utils.value_accessor import ColumnValueAccessor
            self.value_accessor = ColumnValueAccessor()
        ordinals = [h.column_number for h in self.header_cells]
        if len(set(ordinals)) != len(ordinals):
            raise TableConfigError(f"Duplicate column ordinals in header cells: {ordinals}")
        if self.page < 1:
            raise TableConfigError(f"Page number must be >= 1, got {self.page}")

    @property
    def number_of_columns(self) -> int:
        return len(self.header_cells)

    def is_empty(self) -> bool:
        """True if the table has no configured columns."""
        return not self.header_cells

    @property
    def page_offset(self) -> int:
        page_size = self.properties.page_size
        if page_size <= 0:
            return 0
        return (self.page - 1) * page_size

    @property
    def row_list_page(self) -> Sequence[Any]:
        """The rows of the current page (the full list when paging is off)."""
        page_size = self.properties.page_size
        if page_size <= 0:
            return self.rows
        start = self.page_offset
        return self.rows[start:start + page_size]

    @property
    def grouped_header_cells(self) -> List[HeaderCell]:
        return [h for h in self.header_cells if h.is_grouped]

    def row_iterator(self, full_list: bool) -> RowIterator:
        """
        Create an iterator over the rows to render.

        Args:
            full_list: Iterate the full list instead of the current page

        Returns:
            RowIterator numbering rows from 1 with the matching page offset
        """
        if full_list:
            logger.debug(f"Iterating full list of {len(self.rows)} rows")
            return RowIterator(self.rows, page_offset=0)
        return RowIterator(self.row_list_page, page_offset=self.page_offset)


# ============================================================================
# Totals classes
# ============================================================================

@dataclass
class GroupTotal:
    """
    A closed group and the totals accumulated over its rows.

    Several grouped columns may share a level. When they close over the same
    rows they share one `GroupTotal`, with one label per column.

    Attributes:
        level: Grouping level of the closed group
        value: The grouped value of the first column that closed
        totals: Column ordinal -> accumulated total
        row_count: Number of rows in the group
        labels: Column ordinal -> grouped value, for the columns that closed
    """
    level: int
    value: str
    totals: Dict[int, float] = field(default_factory=dict)
    row_count: int = 0
    labels: Dict[int, str] = field(default_factory=dict)

    def label(self, column_number: int) -> str:
        """Subtotal label for a grouped column of this level, "" if it did not close."""
        if not self.labels:
            return f"Total {self.value}"
        value = self.labels.get(column_number)
        return f"Total {value}" if value is not None else ""
