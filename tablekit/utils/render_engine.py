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
Table Render Engine.

`TableRenderer` drives the construction of a table from a `TableModel`,
delegating where and how the table is written to a `TableWriter`. The same
grouping, decoration and ordering logic therefore backs every output format
(HTML, Markdown, Excel, CSV).

Classes:
    TableRenderer: Renders a table model through a writer
"""
import logging
from tablekit.utils.body_pipeline import BodyPipeline
from tablekit.utils.data_models import TableModel
from tablekit.utils.exceptions import RenderingError
from tablekit.utils.table_writers import TableWriter

logger = logging.getLogger(__name__)


class TableRenderer:
    """
    Render a table model through a writer.

    Any error raised by the writer, the value accessor or a decorator aborts
    the render and is re-raised as a single `RenderingError`. Whatever was
    written before the failure is incomplete and is the caller's to discard.

    Example:
        >>> writer = MarkdownTableWriter()
        >>> TableRenderer(writer).render(model, 'orders')
        >>> print(writer.getvalue())
    """

    def __init__(self, writer: TableWriter):
        """
        Initialize the renderer.

        Args:
            writer: Writer receiving the emission callbacks
        """
        self.writer = writer

    def render(self, model: TableModel, table_id: str = "table") -> None:
        """
        Write the complete table.

        Args:
            model: The table model to render
            table_id: Identifier of the table, used in log messages

        Raises:
            RenderingError: If any callback or the body pipeline fails
        """
        writer = self.writer
        try:
            logger.debug(f"[{table_id}] render called for table [{table_id}]")

            if not model.row_list_page and not model.properties.empty_list_show_table:
                writer.write_empty_list_message(model.properties.empty_list_message)
                return

            writer.write_top_banner(model)
            writer.write_table_opener(model)
            if model.caption is not None:
                writer.write_caption(model)
            if model.properties.show_header:
                writer.write_table_header(model)
            if model.footer is not None:
                writer.write_pre_body_footer(model)
            writer.write_table_body_opener(model)

            BodyPipeline(model, writer, table_id=table_id).run()

            writer.write_table_body_closer(model)
            if model.footer is not None:
                writer.write_post_body_footer(model)
            writer.write_table_closer(model)
            if model.table_decorator is not None:
                writer.write_decorated_table_finish(model)
            writer.write_bottom_banner(model)

            logger.debug(f"[{table_id}] render end")
        except RenderingError:
            raise
        except Exception as e:
            logger.debug(f"[{table_id}] render failed: {e}")
            raise RenderingError(f"Error rendering table '{table_id}': {e}", cause=e, table_id=table_id) from e
