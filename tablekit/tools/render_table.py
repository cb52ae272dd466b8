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
Table Rendering Tool for TableKit.

This module powers the 'render' command: it loads rows from a CSV or JSON
file, builds a table model with the requested grouping and totals, and
writes the table as HTML, Markdown, Excel or CSV.

Rows are rendered in file order. Group detection compares neighbouring rows,
so input files should already be sorted by the grouped columns.
"""

import csv
import json
import logging
from pathlib import Path
from typing import Any, Dict, List
from tablekit.utils.config_loader import config
from tablekit.utils.contexts import banner_context
from tablekit.utils.data_models import HeaderCell, TableModel, TableProperties
from tablekit.utils.decorators import SumTotaler
from tablekit.utils.excel_writer import ExcelTableWriter
from tablekit.utils.exceptions import DataLoadError
from tablekit.utils.render_constants import MediaType
from tablekit.utils.render_engine import TableRenderer
from tablekit.utils.script_arguments import RenderArguments
from tablekit.utils.table_writers import CsvTableWriter, HtmlTableWriter, MarkdownTableWriter, TableWriter

logger = logging.getLogger('render_table')


def load_rows(input_path: Path) -> List[Dict[str, Any]]:
    """
    Load table rows from a CSV or JSON file.

    CSV files must have a header line. JSON files must contain a list of
    objects.

    Args:
        input_path: Path to the .csv or .json file

    Returns:
        List of row mappings, in file order

    Raises:
        DataLoadError: If the file cannot be read or has the wrong shape
    """
    try:
        if input_path.suffix.lower() == '.json':
            with open(input_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
                raise DataLoadError(f"{input_path} must contain a JSON list of objects.")
            return data

        with open(input_path, 'r', encoding='utf-8-sig', newline='') as f:
            reader = csv.DictReader(f)
            if reader.fieldnames is None:
                raise DataLoadError(f"Input CSV file {input_path} is empty.")
            return list(reader)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, csv.Error) as e:
        raise DataLoadError(f"Could not read {input_path}: {e}") from e


def _column_names(args: RenderArguments, rows: List[Dict[str, Any]]) -> List[str]:
    """Explicit columns, or every key of the data with grouped columns first."""
    if args.columns:
        return list(args.columns)
    names: List[str] = []
    for row in rows:
        for key in row.keys():
            if key not in names:
                names.append(key)
    missing = [c for c in args.group_by + args.totals if c not in names]
    if missing and rows:
        raise DataLoadError(f"Columns not found in data: {', '.join(missing)}")
    grouped = [c for c in args.group_by if c in names]
    return grouped + [c for c in names if c not in grouped]


def build_model(args: RenderArguments, rows: List[Dict[str, Any]]) -> TableModel:
    """
    Build the table model for the render tool.

    Args:
        args: Validated render arguments
        rows: Loaded rows

    Returns:
        TableModel with header cells, properties and an optional totaler
    """
    properties = TableProperties.from_config(config)
    if args.page_size is not None:
        properties.page_size = args.page_size
    if args.export_full_list is not None:
        properties.export_full_list = args.export_full_list
    if args.hide_empty is not None:
        properties.empty_list_show_table = not args.hide_empty
    if args.show_header is not None:
        properties.show_header = args.show_header

    header_cells = []
    for ordinal, name in enumerate(_column_names(args, rows)):
        header_cells.append(HeaderCell(
            column_number=ordinal,
            property_name=name,
            title=name.replace('_', ' ').title(),
            group=args.group_by.index(name) if name in args.group_by else None,
            max_length=args.max_length,
            total=name in args.totals,
        ))

    return TableModel(
        rows=rows,
        header_cells=header_cells,
        properties=properties,
        media=args.media,
        caption=args.caption,
        footer=args.footer,
        totaler=SumTotaler() if args.totals else None,
        page=args.page,
    )


def create_writer(media: MediaType, table_id: str = "table", theme: str = "material_light") -> TableWriter:
    """Create the writer for an output media."""
    if media is MediaType.HTML:
        return HtmlTableWriter(table_id=table_id, theme=theme)
    if media is MediaType.MARKDOWN:
        return MarkdownTableWriter()
    if media is MediaType.EXCEL:
        return ExcelTableWriter(sheet_title=table_id)
    return CsvTableWriter()


def render_table(args: RenderArguments) -> Path:
    """
    Render a table file from the arguments of the `render` command.

    Args:
        args: Validated render arguments

    Returns:
        Path of the written output file

    Raises:
        DataLoadError: If the input cannot be loaded
        RenderingError: If writing the table fails
    """
    if args.config:
        config.reload(args.config)

    rows = load_rows(args.input_path)
    logger.info(f"Loaded {len(rows)} rows from {args.input_path.name}")

    model = build_model(args, rows)
    table_id = args.input_path.stem
    theme = args.theme or config.get("html.theme", "material_light")
    writer = create_writer(model.media, table_id=table_id, theme=theme)

    banner_token = banner_context.set(args.banner)
    try:
        TableRenderer(writer).render(model, table_id)
        output_path = args.output_path
        output_path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(writer, ExcelTableWriter):
            writer.save(output_path)
        elif isinstance(writer, HtmlTableWriter):
            document = bool(config.get("html.document", True))
            output_path.write_text(writer.getvalue(document=document, title=table_id), encoding='utf-8')
        else:
            output_path.write_text(writer.getvalue(), encoding='utf-8')
    finally:
        banner_context.reset(banner_token)

    logger.info(f"Table written to: {output_path.resolve()}")
    return output_path
