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
TableKit Test Suite.

This package contains tests for TableKit components including:
- Unit tests for individual functions and classes
- Integration tests for component interactions
- End-to-end tests for CLI commands
"""
