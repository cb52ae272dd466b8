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
Message template formatting.

Templates use numbered slots (`{0}`, `{1}`, ...). Only numbered slots are
substituted, so other braces in a template (CSS, JSON) are left as-is.
Integers are written with the thousands separator of the message locale.
"""
import logging
import re
from typing import Any

logger = logging.getLogger(__name__)

_SLOT_PATTERN = re.compile(r'\{(\d+)\}')

# Locales writing "1.000" instead of "1,000"
_DOT_GROUPING_LOCALES = {'de', 'es', 'it', 'nl', 'pt', 'da', 'id', 'tr'}


def _format_argument(value: Any, locale: str) -> str:
    if isinstance(value, bool) or not isinstance(value, int):
        return str(value)
    formatted = f"{value:,}"
    language = locale.split('_')[0].split('-')[0].lower()
    if language in _DOT_GROUPING_LOCALES:
        formatted = formatted.replace(',', '.')
    return formatted


def format_message(template: str, locale: str, *args: Any) -> str:
    """
    Substitute numbered slots in a message template.

    Args:
        template: Message with `{n}` slots
        locale: Locale name such as 'en_US' or 'de_DE'
        *args: Values for the slots, by position

    Returns:
        The formatted message; slots without a matching argument are kept

    Example:
        >>> format_message("No rows in {0} columns", "en_US", 3)
        'No rows in 3 columns'
    """
    def substitute(match: re.Match) -> str:
        index = int(match.group(1))
        if index >= len(args):
            logger.debug(f"No argument for slot {{{index}}} in message template")
            return match.group(0)
        return _format_argument(args[index], locale)

    return _SLOT_PATTERN.sub(substitute, template)
