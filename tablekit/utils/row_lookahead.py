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
Three-slot row lookahead.

The body pipeline needs the previous and next row of the row being written
to decide group boundaries. `RowLookaheadBuffer` keeps previous, current and
next rows, each paired with its column values, and computes the values of
every row exactly once: when the row enters the buffer as "next" (or as
"current" on the very first step).

Classes:
    CellValue: Raw and decorated value of one cell
    RowLookaheadBuffer: Previous/current/next row slots over a row iterator
"""
import logging
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional
from tablekit.utils.data_models import HeaderCell, Row
from tablekit.utils.value_accessor import ValueAccessor

logger = logging.getLogger(__name__)


@dataclass
class CellValue:
    """Raw value of a cell and the value finally displayed."""
    header: HeaderCell
    raw_value: str
    decorated_value: str = ""


class RowLookaheadBuffer:
    """
    Previous/current/next row slots with their pre-computed cell values.

    One buffer belongs to exactly one render pass and is discarded afterwards.

    Attributes:
        previous, current, next: Row slots (None when absent)
        previous_values, current_values, next_values: Column ordinal -> CellValue
    """

    def __init__(
        self,
        rows: Iterator[Row],
        header_cells: List[HeaderCell],
        accessor: ValueAccessor,
        linked: bool,
    ):
        """
        Initialize the buffer.

        Args:
            rows: Source of rows, consumed lazily
            header_cells: Ordered column definitions
            accessor: Value accessor computing cell values
            linked: Use the linked presentation (interactive media) for all cells
        """
        self._rows = iter(rows)
        self._header_cells = header_cells
        self._accessor = accessor
        self._linked = linked
        self._pending: Optional[Row] = None
        self._exhausted = False

        self.previous: Optional[Row] = None
        self.current: Optional[Row] = None
        self.next: Optional[Row] = None
        self.previous_values: Dict[int, CellValue] = {}
        self.current_values: Dict[int, CellValue] = {}
        self.next_values: Dict[int, CellValue] = {}

    def _pull(self) -> Optional[Row]:
        if self._pending is not None:
            row, self._pending = self._pending, None
            return row
        if self._exhausted:
            return None
        row = next(self._rows, None)
        if row is None:
            self._exhausted = True
            logger.debug("Row source exhausted")
        return row

    def source_has_rows(self) -> bool:
        """True if the underlying source still has rows to pull."""
        if self._pending is None and not self._exhausted:
            self._pending = next(self._rows, None)
            if self._pending is None:
                self._exhausted = True
        return self._pending is not None

    def has_more(self) -> bool:
        """True while a next row is buffered or the source still has rows."""
        return self.next is not None or self.source_has_rows()

    def compute_values(self, row: Row) -> Dict[int, CellValue]:
        """Compute the cell values of a row, keyed by column ordinal."""
        values = {}
        for header in self._header_cells:
            raw = self._accessor.cell_value(header, row, self._linked)
            values[header.column_number] = CellValue(header=header, raw_value=raw, decorated_value=raw)
        return values

    def advance(self) -> Row:
        """
        Shift the slots by one row and refill the next slot.

        On the first call the current slot is filled from the source. Later
        calls move current to previous and next to current, keeping their
        already computed values.

        Returns:
            The new current row
        """
        if self.current is None:
            self.current = self._pull()
            if self.current is None:
                raise RuntimeError("Row source is exhausted")
            self.current_values = self.compute_values(self.current)
        else:
            self.previous, self.previous_values = self.current, self.current_values
            self.current, self.current_values = self.next, self.next_values

        self.next = self._pull()
        self.next_values = self.compute_values(self.next) if self.next is not None else {}
        return self.current

    def previous_raw(self, column_number: int) -> Optional[str]:
        cell = self.previous_values.get(column_number)
        return cell.raw_value if cell is not None else None

    def next_raw(self, column_number: int) -> Optional[str]:
        cell = self.next_values.get(column_number)
        return cell.raw_value if cell is not None else None
