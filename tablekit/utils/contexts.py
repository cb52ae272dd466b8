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
Context Variables for TableKit.

Writers read the banner from a `ContextVar` instead of receiving it through
every render callback. The render tool sets it for the duration of one
render and resets it afterwards:

    token = banner_context.set('Internal use only')
    try:
        TableRenderer(writer).render(model, 'orders')
    finally:
        banner_context.reset(token)
"""
from contextvars import ContextVar
from typing import Optional

# Text of the banner written above and below the table, None for no banner.
banner_context: ContextVar[Optional[str]] = ContextVar('banner', default=None)
