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
Custom Exceptions Module.

A centralized module for custom exceptions used throughout TableKit.
"""
from typing import Optional


class RenderingError(RuntimeError):
    """
    Raised when rendering a table fails.

    Wraps whatever a writer callback, value accessor or decorator raised.
    The original exception is available as `cause` (and `__cause__`).
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None, table_id: Optional[str] = None):
        super().__init__(message)
        self.cause = cause
        self.table_id = table_id

class TableConfigError(ValueError):
    """Custom exception for an invalid table model or render arguments."""
    pass

class DataLoadError(Exception):
    """Error loading the rows of a table from an input file."""
    pass
