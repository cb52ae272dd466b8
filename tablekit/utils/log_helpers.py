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
Logging helpers for TableKit.

The command line logs plain messages to stdout. Verbose runs prefix each
console line with its level and logger name, and an optional log file
always receives timestamped records.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

# Third-party loggers kept at WARNING even in verbose runs
QUIET_LOGGERS = ('mistune', 'openpyxl')

CONSOLE_FORMAT = '%(message)s'
VERBOSE_CONSOLE_FORMAT = '%(levelname)s %(name)s: %(message)s'
FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logger(log_file: Optional[Union[str, Path]] = None, level: int = logging.INFO) -> logging.Logger:
    """
    Set up and configure the root logger.

    Existing root handlers are closed and replaced, so calling this twice
    does not duplicate output.

    Args:
        log_file (str | Path, optional): The full path to the log file.
        level (int): The logging level.

    Returns:
        logging.Logger: The configured root logger instance.
    """
    logger = logging.getLogger()
    logger.setLevel(level)
    shutdown_logger(logger)

    console_format = VERBOSE_CONSOLE_FORMAT if level <= logging.DEBUG else CONSOLE_FORMAT
    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(logging.Formatter(console_format))
    logger.addHandler(console)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        logger.addHandler(file_handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return logger


def shutdown_logger(logger: Optional[logging.Logger]) -> None:
    """Flush, close and remove every handler of a logger, releasing log files."""
    if not logger:
        return
    for handler in logger.handlers[:]:
        handler.flush()
        handler.close()
        logger.removeHandler(handler)
