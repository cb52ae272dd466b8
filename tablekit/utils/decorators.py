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
Row Decorators and Totals Accumulators.

The body pipeline notifies two independent observers while it walks the rows:

- a row decorator, which reacts to group boundaries and has the final say on
  the text displayed in a grouped cell;
- a totals accumulator ("totaler"), which tracks running totals across group
  boundaries but never writes anything itself. Writers query it when they
  write subtotal rows or footers.

Both carry per-render state. Use a fresh instance for every render.

Classes:
    TableDecorator: Base row decorator with pass-through defaults
    TableTotaler: Base totals accumulator (no-op), with `TableTotaler.NULL`
    SumTotaler: Sums the `total=True` columns per group level and overall
"""
import logging
import re
from collections import deque
from typing import Any, Deque, Dict, List, Optional, Tuple, TYPE_CHECKING
from tablekit.utils.data_models import GroupTotal, Row
from tablekit.utils.group_detector import GroupTransition

if TYPE_CHECKING:
    from tablekit.utils.data_models import TableModel

logger = logging.getLogger(__name__)


class TableDecorator:
    """
    Base row decorator.

    Subclasses override the hooks they need. The default
    `display_grouped_value` shows a grouped value only on the first row of
    its run, which is also what the engine does when no decorator is set.
    """

    def __init__(self):
        self.model: Optional["TableModel"] = None
        self.current_item: Any = None
        self.row_number: int = 0
        self.absolute_row_number: int = 0

    def init(self, model: "TableModel") -> None:
        """Called once per render, before any row is visited."""
        self.model = model

    def init_row(self, item: Any, row_number: int, absolute_row_number: int) -> None:
        """Called when the pipeline enters a row."""
        self.current_item = item
        self.row_number = row_number
        self.absolute_row_number = absolute_row_number

    def start_of_group(self, value: str, level: int) -> None:
        """Called when a group starts on the current row."""
        pass

    def end_of_group(self, value: str, level: int) -> None:
        """Called when a group ends on the current row."""
        pass

    def display_grouped_value(self, value: str, transition: GroupTransition, column_number: int) -> str:
        """
        Text displayed for a grouped cell.

        Args:
            value: Raw cell value
            transition: Group transition of the cell on this row
            column_number: Ordinal of the column

        Returns:
            The text to display; "" suppresses the value
        """
        if transition.starts:
            return value
        return ""

    def add_row_class(self) -> Optional[str]:
        """Extra CSS class for the current row (HTML only)."""
        return None

    def start_row(self) -> Optional[str]:
        """Content written before the current row."""
        return None

    def finish_row(self) -> Optional[str]:
        """Content written after the current row."""
        return None

    def finish(self) -> Optional[str]:
        """Content written after the table."""
        return None


class TableTotaler:
    """
    Base totals accumulator. Every hook is a safe no-op.

    `TableTotaler.NULL` is the shared instance the engine substitutes when no
    totaler is configured.
    """

    NULL: "TableTotaler"

    def init(self, model: "TableModel") -> None:
        pass

    def init_row(self, row_number: int, absolute_row_number: int) -> None:
        pass

    def start_group(self, value: str, level: int, column_number: Optional[int] = None) -> None:
        pass

    def stop_group(self, value: str, level: int, column_number: Optional[int] = None) -> None:
        pass

    def pop_closed_groups(self) -> List[GroupTotal]:
        """Groups closed since the last call, innermost first."""
        return []


TableTotaler.NULL = TableTotaler()


NUMBER_PATTERN = re.compile(r'^-?\d+(\.\d+)?$')


def _to_number(value: str) -> Optional[float]:
    """Parse a plain decimal such as `-1,250.5`; anything else is not a number."""
    v = value.strip().replace(',', '')
    if not NUMBER_PATTERN.match(v):
        return None
    return float(v)


class SumTotaler(TableTotaler):
    """
    Sum numeric columns per group and for the whole table.

    Columns with `total=True` are summed; values that are not numeric are
    skipped. A group covers the rows from the row it started on to the row
    it stopped on, inclusive. Totals of a group are queued when it stops and
    writers drain them with `pop_closed_groups()` to write subtotal rows.

    Example:
        >>> totaler = SumTotaler()
        >>> model = TableModel(rows=rows, header_cells=headers, totaler=totaler)
        >>> TableRenderer(MarkdownTableWriter()).render(model, 'sales')
        >>> totaler.grand_totals
        {2: 1250.0}
    """

    def __init__(self):
        self.model: Optional["TableModel"] = None
        self.grand_totals: Dict[int, float] = {}
        self.row_count: int = 0
        self._absolute_row_number: int = 0
        self._group_starts: Dict[Tuple[int, Any], Tuple[str, int]] = {}
        self._closed: Deque[GroupTotal] = deque()
        self._closed_spans: Dict[Tuple[int, int, int], GroupTotal] = {}

    def init(self, model: "TableModel") -> None:
        self.model = model
        self.grand_totals = {h.column_number: 0.0 for h in model.header_cells if h.total}
        self.row_count = 0
        self._group_starts = {}
        self._closed.clear()
        self._closed_spans = {}

    def _row_numbers(self, absolute_row_number: int) -> Dict[int, float]:
        item = self.model.rows[absolute_row_number - 1]
        row = Row(item=item, row_number=absolute_row_number)
        numbers = {}
        for header in self.model.header_cells:
            if header.total:
                number = _to_number(self.model.value_accessor.plain_value(header, row))
                if number is not None:
                    numbers[header.column_number] = number
        return numbers

    def init_row(self, row_number: int, absolute_row_number: int) -> None:
        if self.model is None:
            raise RuntimeError("SumTotaler.init_row called before init()")
        self._absolute_row_number = absolute_row_number
        self.row_count += 1
        for column_number, number in self._row_numbers(absolute_row_number).items():
            self.grand_totals[column_number] = self.grand_totals.get(column_number, 0.0) + number

    # Open groups are keyed by level and column, or by level and value when
    # the caller does not name the column.
    def start_group(self, value: str, level: int, column_number: Optional[int] = None) -> None:
        key = (level, column_number if column_number is not None else value)
        self._group_starts[key] = (value, self._absolute_row_number)

    def stop_group(self, value: str, level: int, column_number: Optional[int] = None) -> None:
        key = (level, column_number if column_number is not None else value)
        start = self._group_starts.pop(key, None)
        if start is None:
            logger.debug(f"stop_group for level {level} without a matching start_group")
            return
        value, start_row = start

        # Columns of one level closing over the same rows share a subtotal.
        span = (level, start_row, self._absolute_row_number)
        group = self._closed_spans.get(span)
        if group is not None:
            if column_number is not None:
                group.labels[column_number] = value
            return

        group = GroupTotal(level=level, value=value)
        self._closed_spans[span] = group
        if column_number is not None:
            group.labels[column_number] = value
        for absolute in range(start_row, self._absolute_row_number + 1):
            group.row_count += 1
            for number_column, number in self._row_numbers(absolute).items():
                group.totals[number_column] = group.totals.get(number_column, 0.0) + number
        self._closed.append(group)

    def pop_closed_groups(self) -> List[GroupTotal]:
        closed = sorted(self._closed, key=lambda g: (g.level, -g.row_count), reverse=True)
        self._closed.clear()
        self._closed_spans.clear()
        return closed
