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
Command-line interface for TableKit.

This script provides the main entry point for the `tablekit` command,
parsing user arguments and dispatching them to the appropriate tool.
"""
import argparse
import logging
import sys
from pathlib import Path
from tablekit.utils.config_loader import config
from tablekit.utils.log_helpers import setup_logger, shutdown_logger
from tablekit.utils.script_arguments import RenderArguments

def str2bool(v):
    if isinstance(v, bool):
        return v
    if v.lower() in ('yes', 'true', 't', 'y', '1'):
        return True
    elif v.lower() in ('no', 'false', 'f', 'n', '0'):
        return False
    else:
        raise argparse.ArgumentTypeError('Boolean value expected.')

def non_negative_int(value: str) -> int:
    """Validate that the value is an integer >= 0."""
    try:
        ivalue = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected a non-negative integer, got '{value}'")
    if ivalue < 0:
        raise argparse.ArgumentTypeError(f"Expected a non-negative integer, got '{ivalue}'")
    return ivalue

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='TableKit',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    subparsers = parser.add_subparsers(dest='tool', help='Available tools')
    subparsers.required = True

    # --- Render Table Tool ---
    render_parser = subparsers.add_parser(
        'render',
        help='Render rows from a CSV or JSON file as a grouped table.',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    render_parser.add_argument('-i', '--input', required=True, type=Path, dest='input_path', help='Input CSV or JSON file, sorted by the grouped columns.')
    render_parser.add_argument('-o', '--output', type=Path, dest='output_path', help='Output file path. Default: <input>_table.<format>.')
    render_parser.add_argument('-f', '--report-format', type=str.lower, default='html', choices=['html', 'md', 'xlsx', 'csv'], dest='report_format', help='Output format.')
    render_parser.add_argument('-c', '--columns', type=str, nargs='*', dest='columns', help='Columns to include, in order. Default: all columns.')
    render_parser.add_argument('-g', '--group-by', type=str, nargs='*', default=[], dest='group_by', help='Grouped columns, outermost group first.')
    render_parser.add_argument('-t', '--totals', type=str, nargs='*', default=[], dest='totals', help='Numeric columns to subtotal per group.')
    render_parser.add_argument('--caption', type=str, dest='caption', help='Table caption (inline Markdown).')
    render_parser.add_argument('--footer', type=str, dest='footer', help='Table footer (inline Markdown).')
    render_parser.add_argument('-b', '--banner', type=str, dest='banner', help='Text for a banner at the top/bottom of the table.')
    render_parser.add_argument('--page-size', type=non_negative_int, dest='page_size', help='Rows per page (0 disables paging). Default: from config.')
    render_parser.add_argument('--page', type=int, default=1, dest='page', help='1-based page to render when paging is enabled.')
    render_parser.add_argument('--export-full-list', type=str2bool, dest='export_full_list', help='Export formats write all rows instead of the current page.')
    render_parser.add_argument('--hide-empty', type=str2bool, dest='hide_empty', help='Write only a message when there are no rows.')
    render_parser.add_argument('--show-header', type=str2bool, dest='show_header', help='Write the header row.')
    render_parser.add_argument('--max-length', type=non_negative_int, default=0, dest='max_length', help='Truncate HTML cell values to this many characters (0 = off).')
    render_parser.add_argument('--theme', type=str, choices=['material_light', 'material_dark'], dest='theme', help='HTML theme. Default: from config.')
    render_parser.add_argument('--config', type=Path, dest='config', help='Path to a custom configuration file.')
    render_parser.add_argument('--log-file', type=Path, dest='log_file', help='Path to a log file for debugging.')
    render_parser.add_argument('-v', '--verbose', action='store_true', dest='verbose', help='Enable verbose logging.')
    return parser

def main(argv=None):
    """
    Main function to parse arguments and call the appropriate tool.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    tool = args.tool
    args_dict = vars(args)
    args_dict.pop('tool', None)

    # --- Logger Setup ---
    if args.verbose:
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, str(config.get("logging.level", "INFO")).upper(), logging.INFO)
    log_file = args.log_file or config.get("logging.file")
    logger = setup_logger(log_file=log_file, level=log_level)

    try:
        if tool == 'render':
            from tablekit.tools.render_table import render_table
            script_args = RenderArguments(**args_dict)
            render_table(script_args)
    except Exception as e:
        logger.error(f"An unexpected error occurred: {e}", exc_info=args.verbose)
        sys.exit(1)
    finally:
        shutdown_logger(logger)

if __name__ == "__main__":
    main()
