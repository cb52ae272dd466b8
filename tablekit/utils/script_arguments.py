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
Dataclass-based Argument Models for TableKit Tools.

This module defines strongly-typed dataclasses for parsing and validating the
command-line arguments of the `render` tool. It uses `__post_init__` for
validation and resolving context-aware default values, ensuring that the
core logic receives clean and validated inputs.

Classes:
    BaseArguments: A base dataclass for common script arguments.
    RenderArguments: Arguments for the render_table tool.
"""
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional
from tablekit.utils.exceptions import TableConfigError
from tablekit.utils.render_constants import FILE_EXTENSIONS, MediaType

logger = logging.getLogger(__name__)

SUPPORTED_INPUT_SUFFIXES = ('.csv', '.json')


@dataclass
class BaseArguments:
    """A base dataclass for common script arguments."""
    input_path: Optional[Path] = None
    output_path: Optional[Path] = None
    verbose: bool = False
    log_file: Optional[Path] = None

    def __post_init__(self):
        """Coerce path-like arguments to Path objects."""
        if self.input_path and isinstance(self.input_path, str):
            self.input_path = Path(self.input_path)
        if self.output_path and isinstance(self.output_path, str):
            self.output_path = Path(self.output_path)
        if self.log_file and isinstance(self.log_file, str):
            self.log_file = Path(self.log_file)

    def handle_error(self, message: str):
        """Logs an error and raises TableConfigError."""
        logger.error(message)
        raise TableConfigError(message)


@dataclass
class RenderArguments(BaseArguments):
    """Arguments for the render_table tool."""
    report_format: str = 'html'
    columns: Optional[List[str]] = None
    group_by: List[str] = field(default_factory=list)
    totals: List[str] = field(default_factory=list)
    caption: Optional[str] = None
    footer: Optional[str] = None
    banner: Optional[str] = None
    page_size: Optional[int] = None
    page: int = 1
    export_full_list: Optional[bool] = None
    hide_empty: Optional[bool] = None
    show_header: Optional[bool] = None
    max_length: int = 0
    theme: Optional[str] = None
    config: Optional[Path] = None

    def __post_init__(self):
        """Validation and default resolution for render arguments."""
        super().__post_init__()
        try:
            self._validate_render()
            self._resolve_defaults()
        except ValueError as e:
            self.handle_error(str(e))

    @property
    def media(self) -> MediaType:
        return MediaType.from_value(self.report_format)

    def _validate_render(self):
        """Perform validation checks for render arguments."""
        if self.input_path is None:
            raise ValueError("An input file is required.")
        if not self.input_path.exists():
            raise ValueError(f"Input file not found: {self.input_path}")
        if self.input_path.suffix.lower() not in SUPPORTED_INPUT_SUFFIXES:
            raise ValueError(
                f"Unsupported input file '{self.input_path.name}'. Expected one of: {', '.join(SUPPORTED_INPUT_SUFFIXES)}"
            )
        # raises ValueError for unknown formats
        MediaType.from_value(self.report_format)
        if self.page < 1:
            raise ValueError(f"Page must be >= 1, got {self.page}")
        if self.page_size is not None and self.page_size < 0:
            raise ValueError(f"Page size must be >= 0, got {self.page_size}")
        if self.max_length < 0:
            raise ValueError(f"Max length must be >= 0, got {self.max_length}")
        if len(set(self.group_by)) != len(self.group_by):
            raise ValueError(f"Grouped columns must be unique: {self.group_by}")
        if self.columns:
            missing = [c for c in self.group_by + self.totals if c not in self.columns]
            if missing:
                raise ValueError(f"Grouped or totaled columns are not in --columns: {', '.join(missing)}")

    def _resolve_defaults(self):
        """Resolve the output path from the input path and format."""
        if self.output_path is None:
            extension = FILE_EXTENSIONS[self.media]
            self.output_path = self.input_path.with_name(f"{self.input_path.stem}_table{extension}")
        if self.config and isinstance(self.config, str):
            self.config = Path(self.config)
