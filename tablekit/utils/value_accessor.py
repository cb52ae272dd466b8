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
Cell Value Access.

Value accessors turn a (column, row) pair into the string a writer displays.
Two modes exist: a linked presentation for interactive media (escaped,
truncated, optionally wrapped in a link) and a plain stringified value for
export media.

Classes:
    ValueAccessor: Abstract base class for cell value accessors
    ColumnValueAccessor: Reads attributes or mapping keys from row items
"""
import html
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote
from tablekit.utils.data_models import HeaderCell, Row
from tablekit.utils.render_constants import DEFAULT_ELLIPSIS


class ValueAccessor(ABC):
    """Abstract base class for cell value accessors."""

    @abstractmethod
    def linked_value(self, header: HeaderCell, row: Row) -> str:
        """
        Presentation string for interactive media.

        Args:
            header: Column definition
            row: Row being rendered

        Returns:
            Escaped, truncated and linked cell text
        """
        pass

    @abstractmethod
    def plain_value(self, header: HeaderCell, row: Row) -> str:
        """
        Plain stringified value for export media.

        Args:
            header: Column definition
            row: Row being rendered

        Returns:
            Cell text, "" for a missing value
        """
        pass

    def cell_value(self, header: HeaderCell, row: Row, linked: bool) -> str:
        """Dispatch to the linked or the plain presentation."""
        if linked:
            return self.linked_value(header, row)
        return self.plain_value(header, row)


class ColumnValueAccessor(ValueAccessor):
    """
    Default accessor reading `header.property_name` from each row item.

    Attributes are tried first, then mapping keys; a missing property is an
    empty cell, not an error.
    """

    def raw_value(self, header: HeaderCell, row: Row) -> Any:
        item = row.item
        if item is None:
            return None
        if isinstance(item, Mapping):
            return item.get(header.property_name)
        return getattr(item, header.property_name, None)

    def plain_value(self, header: HeaderCell, row: Row) -> str:
        value = self.raw_value(header, row)
        return "" if value is None else str(value)

    def linked_value(self, header: HeaderCell, row: Row) -> str:
        full_text = self.plain_value(header, row)
        text = full_text
        title = None
        if header.max_length and len(full_text) > header.max_length:
            text = full_text[:header.max_length] + DEFAULT_ELLIPSIS
            title = full_text

        escaped = html.escape(text)
        if header.href and full_text:
            url = header.href.format(value=quote(full_text, safe=''))
            title_attr = f' title="{html.escape(title)}"' if title is not None else ''
            return f'<a href="{html.escape(url)}"{title_attr}>{escaped}</a>'
        if title is not None:
            return f'<span title="{html.escape(title)}">{escaped}</span>'
        return escaped
