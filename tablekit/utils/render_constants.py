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
Shared Constants and Default Values for Table Rendering.

Classes:
    MediaType: Enum for the supported output media.
"""
from enum import Enum

# Row-state sentinel, larger than any real grouping level
NO_RESET_GROUP = 42000

DEFAULT_EMPTY_LIST_MESSAGE = "Nothing found to display."
DEFAULT_EMPTY_LIST_ROW_MESSAGE = "Nothing found to display."
DEFAULT_ELLIPSIS = "..."


class MediaType(Enum):
    """Enumeration of supported output media."""
    HTML = 'html'
    MARKDOWN = 'md'
    EXCEL = 'xlsx'
    CSV = 'csv'

    @property
    def is_linked(self) -> bool:
        """True for interactive media, where cells are truncated and linked."""
        return self is MediaType.HTML

    @classmethod
    def from_value(cls, value: str) -> "MediaType":
        """Look up a media type by its value, case-insensitively."""
        try:
            return cls(value.lower())
        except ValueError:
            choices = ", ".join(m.value for m in cls)
            raise ValueError(f"Unsupported media '{value}'. Expected one of: {choices}")


FILE_EXTENSIONS = {
    MediaType.HTML: '.html',
    MediaType.MARKDOWN: '.md',
    MediaType.EXCEL: '.xlsx',
    MediaType.CSV: '.csv',
}
