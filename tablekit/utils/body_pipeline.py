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
Table Body Pipeline.

Walks the rows of a table with a three-row lookahead, detects group
transitions for every grouped column, notifies the row decorator and the
totaler, and drives the writer callbacks for each row and cell.

Per row, decorator/totaler notifications always happen before anything is
written for that row, and the writer callbacks are invoked in a fixed order:

    subgroup start, decorated row start, row opener,
    (column opener, column value, column closer) per column,
    row closer, decorated row finish, subgroup stop

Classes:
    BodyPipeline: One-shot body writer for a single render pass
"""
import logging
from typing import List, TYPE_CHECKING
from tablekit.utils.data_models import Row, TableModel
from tablekit.utils.decorators import TableTotaler
from tablekit.utils.group_detector import GroupState, GroupTransition, detect_transition
from tablekit.utils.messages import format_message
from tablekit.utils.render_constants import MediaType
from tablekit.utils.row_lookahead import CellValue, RowLookaheadBuffer

if TYPE_CHECKING:
    from tablekit.utils.table_writers import TableWriter

logger = logging.getLogger(__name__)


class BodyPipeline:
    """
    Write the body of one table.

    A pipeline holds mutable state (the lookahead buffer and the group
    state) for exactly one render and must not be reused.

    Example:
        >>> pipeline = BodyPipeline(model, writer, table_id='orders')
        >>> pipeline.run()
    """

    def __init__(self, model: TableModel, writer: "TableWriter", table_id: str = ""):
        self.model = model
        self.writer = writer
        self.table_id = table_id
        self.group_state = GroupState()
        self._used = False

        self.full_list = model.media is not MediaType.HTML and model.properties.export_full_list
        self.row_iterator = model.row_iterator(self.full_list)
        self.table_decorator = model.table_decorator
        self.totaler = model.totaler if model.totaler is not None else TableTotaler.NULL
        self.buffer = RowLookaheadBuffer(
            self.row_iterator,
            model.header_cells,
            model.value_accessor,
            linked=model.media.is_linked,
        )

    def run(self) -> None:
        """Write every row, then the empty-list row message if there are no rows."""
        if self._used:
            raise RuntimeError("BodyPipeline instances cannot be reused; create one per render")
        self._used = True

        if self.table_decorator is not None:
            self.table_decorator.init(self.model)
        self.totaler.init(self.model)

        while self.buffer.has_more():
            row = self.buffer.advance()
            logger.debug(f"[{self.table_id}] row {row.absolute_row_number}")
            cells = self._process_row(row)
            self._write_row(row, cells)

        if not self.model.rows:
            message = format_message(
                self.model.properties.empty_list_row_message,
                self.model.properties.locale,
                self.model.number_of_columns,
            )
            self.writer.write_empty_list_row_message(message)

    def _process_row(self, row: Row) -> List[CellValue]:
        """Notify observers of the row and compute the displayed value of each cell."""
        decorator = self.table_decorator
        totaler = self.totaler

        if decorator is not None:
            decorator.init_row(row.item, row.row_number, row.row_number + self.row_iterator.page_offset)
        totaler.init_row(row.row_number, row.row_number + self.row_iterator.page_offset)

        self.group_state.reset()
        cells = []
        for header in self.model.header_cells:
            cell = self.buffer.current_values[header.column_number]
            cell.decorated_value = cell.raw_value
            if header.group is not None:
                transition = detect_transition(
                    cell.raw_value,
                    self.buffer.previous_raw(header.column_number),
                    self.buffer.next_raw(header.column_number),
                    header.group,
                    self.group_state,
                )
                if transition.starts:
                    totaler.start_group(cell.raw_value, header.group, header.column_number)
                    if decorator is not None:
                        decorator.start_of_group(cell.raw_value, header.group)
                if transition.ends:
                    totaler.stop_group(cell.raw_value, header.group, header.column_number)
                    if decorator is not None:
                        decorator.end_of_group(cell.raw_value, header.group)

                if decorator is not None:
                    cell.decorated_value = decorator.display_grouped_value(
                        cell.raw_value, transition, header.column_number
                    )
                elif transition in (GroupTransition.END, GroupTransition.NONE):
                    cell.decorated_value = ""
            cells.append(cell)
        return cells

    def _write_row(self, row: Row, cells: List[CellValue]) -> None:
        writer = self.writer
        has_totaler = self.model.totaler is not None
        has_decorator = self.table_decorator is not None

        if has_totaler:
            writer.write_subgroup_start(self.model)
        if has_decorator:
            writer.write_decorated_row_start(self.model)
        writer.write_row_opener(row)

        for cell in cells:
            writer.write_column_opener(cell.header)
            writer.write_column_value(cell.decorated_value, cell.header)
            writer.write_column_closer(cell.header)

        if self.model.is_empty():
            logger.debug(f"[{self.table_id}] table has no columns")
            writer.write_row_with_no_columns(str(row.item))

        writer.write_row_closer(row)
        if has_decorator:
            writer.write_decorated_row_finish(self.model)
        if has_totaler:
            writer.write_subgroup_stop(self.model)
