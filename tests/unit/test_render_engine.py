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
Unit tests for TableRenderer.

Tests cover:
- The structural callback sequence around the body
- Hiding or showing empty tables
- Optional caption, header and footer sections
- Wrapping of writer and decorator errors into RenderingError
"""

import pytest
from tablekit.utils.data_models import TableModel, TableProperties
from tablekit.utils.decorators import TableDecorator
from tablekit.utils.exceptions import RenderingError
from tablekit.utils.render_engine import TableRenderer
from tests.conftest import make_headers, make_rows
from tests.fixtures.recording_writer import FailingWriter

BODY_CALLBACKS = {
    'row_opener', 'column_opener', 'column_value', 'column_closer', 'row_closer',
    'decorated_row_start', 'decorated_row_finish', 'subgroup_start', 'subgroup_stop',
    'row_with_no_columns', 'empty_list_row_message',
}


def _structure(writer):
    """Callback names outside the body."""
    return [name for name in writer.names() if name not in BODY_CALLBACKS]


class FailingDecorator(TableDecorator):
    def init_row(self, item, row_number, absolute_row_number):
        raise ValueError(f"cannot decorate row {row_number}")


@pytest.mark.unit
class TestStructure:
    """Test the sequence of structural callbacks."""

    def test_full_sequence(self, recording_writer):
        """Test the order of every structural callback when all sections are present."""
        model = TableModel(
            rows=make_rows('A'),
            header_cells=make_headers('region'),
            caption='Sales',
            footer='Totals',
            table_decorator=TableDecorator(),
        )
        TableRenderer(recording_writer).render(model, 'sales')
        assert _structure(recording_writer) == [
            'top_banner', 'table_opener', 'caption', 'table_header', 'pre_body_footer',
            'table_body_opener', 'table_body_closer', 'post_body_footer', 'table_closer',
            'decorated_table_finish', 'bottom_banner',
        ]

    def test_body_between_body_opener_and_closer(self, recording_writer):
        """Test that every row callback falls inside the table body."""
        model = TableModel(rows=make_rows('A', 'B'), header_cells=make_headers('region'))
        TableRenderer(recording_writer).render(model)
        names = recording_writer.names()
        body = names[names.index('table_body_opener') + 1:names.index('table_body_closer')]
        assert body.count('row_opener') == 2
        assert set(body) <= BODY_CALLBACKS

    def test_minimal_sequence(self, recording_writer):
        """Test that absent caption, footer and decorator skip their callbacks."""
        model = TableModel(rows=make_rows('A'), header_cells=make_headers('region'))
        TableRenderer(recording_writer).render(model)
        assert _structure(recording_writer) == [
            'top_banner', 'table_opener', 'table_header', 'table_body_opener',
            'table_body_closer', 'table_closer', 'bottom_banner',
        ]

    def test_header_hidden(self, recording_writer):
        """Test that show_header=False skips the header callback."""
        model = TableModel(
            rows=make_rows('A'), header_cells=make_headers('region'),
            properties=TableProperties(show_header=False),
        )
        TableRenderer(recording_writer).render(model)
        assert 'table_header' not in recording_writer.names()

    def test_empty_caption_still_written(self, recording_writer):
        """Test that an empty caption is present and therefore written."""
        model = TableModel(rows=make_rows('A'), header_cells=make_headers('region'), caption='')
        TableRenderer(recording_writer).render(model)
        assert ('caption', '') in recording_writer.calls


@pytest.mark.unit
class TestEmptyTables:
    """Test rendering without rows."""

    def test_hidden_empty_table_writes_only_message(self, recording_writer):
        """Test that exactly one callback fires for a hidden empty table."""
        properties = TableProperties(empty_list_show_table=False, empty_list_message='No orders.')
        model = TableModel(rows=[], header_cells=make_headers('region'), properties=properties, caption='Orders')
        TableRenderer(recording_writer).render(model)
        assert recording_writer.calls == [('empty_list_message', 'No orders.')]

    def test_shown_empty_table_writes_structure_and_row_message(self, recording_writer):
        """Test that a shown empty table gets its structure and the empty body row."""
        properties = TableProperties(empty_list_show_table=True, empty_list_row_message='Empty ({0})')
        model = TableModel(rows=[], header_cells=make_headers('a', 'b'), properties=properties)
        TableRenderer(recording_writer).render(model)
        names = recording_writer.names()
        assert 'empty_list_message' not in names
        assert ('empty_list_row_message', 'Empty (2)') in recording_writer.calls
        assert names.index('table_body_opener') < names.index('empty_list_row_message') < names.index('table_body_closer')

    def test_empty_page_is_hidden(self, recording_writer):
        """Test that a page past the end of the rows counts as empty."""
        properties = TableProperties(page_size=2)
        model = TableModel(rows=make_rows('A', 'B'), header_cells=make_headers('region'), properties=properties, page=5)
        TableRenderer(recording_writer).render(model)
        assert recording_writer.names() == ['empty_list_message']


@pytest.mark.unit
class TestRenderingErrors:
    """Test error wrapping."""

    def test_writer_error_wrapped(self):
        """Test that a writer exception is re-raised as RenderingError with its cause."""
        writer = FailingWriter('table_header')
        model = TableModel(rows=make_rows('A'), header_cells=make_headers('region'))
        with pytest.raises(RenderingError) as exc_info:
            TableRenderer(writer).render(model, 'orders')
        assert exc_info.value.cause is writer.error
        assert exc_info.value.__cause__ is writer.error
        assert exc_info.value.table_id == 'orders'
        assert 'orders' in str(exc_info.value)

    def test_render_stops_at_failure(self):
        """Test that no callback follows the failing one."""
        writer = FailingWriter('row_opener')
        model = TableModel(rows=make_rows('A', 'B'), header_cells=make_headers('region'))
        with pytest.raises(RenderingError):
            TableRenderer(writer).render(model)
        assert writer.names()[-1] == 'row_opener'
        assert 'table_closer' not in writer.names()

    def test_decorator_error_wrapped(self, recording_writer):
        """Test that decorator errors are wrapped too."""
        model = TableModel(rows=make_rows('A'), header_cells=make_headers('region'), table_decorator=FailingDecorator())
        with pytest.raises(RenderingError) as exc_info:
            TableRenderer(recording_writer).render(model)
        assert isinstance(exc_info.value.cause, ValueError)

    def test_rendering_error_not_rewrapped(self):
        """Test that a RenderingError raised by a writer propagates unchanged."""
        original = RenderingError("broken pipe", table_id='inner')
        writer = FailingWriter('table_opener', error=original)
        model = TableModel(rows=make_rows('A'), header_cells=make_headers('region'))
        with pytest.raises(RenderingError) as exc_info:
            TableRenderer(writer).render(model)
        assert exc_info.value is original

    def test_empty_message_error_wrapped(self):
        """Test that a failure writing the empty-list message is wrapped."""
        writer = FailingWriter('empty_list_message')
        with pytest.raises(RenderingError):
            TableRenderer(writer).render(TableModel(rows=[], header_cells=make_headers('region')))
