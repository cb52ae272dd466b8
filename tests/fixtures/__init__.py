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
Test fixtures and data factories for TableKit tests.

This package contains:
- RecordingWriter: A table writer that records every callback it receives
- FailingWriter: A recording writer that raises from a chosen callback
"""

from tests.fixtures.recording_writer import RecordingWriter, FailingWriter

__all__ = ["RecordingWriter", "FailingWriter"]
