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
Pytest configuration and shared fixtures for the TableKit test suite.

This module provides:
- Pytest configuration (markers, options)
- Shared fixtures for common table data
- Test utility functions
- Recording writer fixtures

Fixtures are organized by scope:
- session: Created once per test session (expensive setup)
- module: Created once per test module
- function: Created for each test function (default)

Example:
    >>> def test_using_fixture(grouped_model, recording_writer):
    ...     '''Test using the grouped_model fixture.'''
    ...     TableRenderer(recording_writer).render(grouped_model, 'orders')
    ...     assert 'table_opener' in recording_writer.names()
"""

import pytest
from typing import Any, Dict, List

# pythonpath is configured in pyproject.toml to include project root
from tablekit.utils.config_loader import DEFAULT_CONFIG_PATH, config as app_config
from tablekit.utils.data_models import HeaderCell, TableModel, TableProperties
from tablekit.utils.render_constants import MediaType
from tests.fixtures.recording_writer import RecordingWriter


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """
    Configure pytest with custom markers and options.

    Markers are defined in pyproject.toml, but we can add dynamic configuration here
    """
    pass


def pytest_assertrepr_compare(op, left, right):
    """
    Custom assertion representation to keep rendered documents from flooding logs.

    HTML documents carry the full theme stylesheet, so a failing comparison
    against one prints several kilobytes of CSS. Long strings are truncated.

    Args:
        op: Comparison operator ('==', '!=', 'in', etc.)
        left: Left operand of comparison
        right: Right operand of comparison

    Returns:
        List of strings for assertion message, or None for default behavior
    """
    MAX_STRING_LENGTH = 500

    def truncate_if_needed(value):
        if isinstance(value, str) and len(value) > MAX_STRING_LENGTH:
            return value[:MAX_STRING_LENGTH] + f"... (truncated, total length={len(value)})"
        return value

    if isinstance(left, str) or isinstance(right, str):
        left_repr = truncate_if_needed(left)
        right_repr = truncate_if_needed(right)

        if left_repr != left or right_repr != right:
            return [
                "Comparing strings:",
                f"  left: {left_repr}",
                f"  {op}",
                f"  right: {right_repr}",
            ]

    return None


# =============================================================================
# Test Utility Functions
# =============================================================================

def make_rows(*values: str, column: str = 'region') -> List[Dict[str, Any]]:
    """Build one-column rows, e.g. make_rows('A', 'A', 'B')."""
    return [{column: v} for v in values]


def make_headers(*names: str, groups: Dict[str, int] = None, totals=()) -> List[HeaderCell]:
    """Build header cells in ordinal order with optional grouping levels."""
    groups = groups or {}
    return [
        HeaderCell(column_number=i, property_name=name, group=groups.get(name), total=name in totals)
        for i, name in enumerate(names)
    ]


# =============================================================================
# Session-scope Fixtures (Created once per test session)
# =============================================================================

@pytest.fixture(scope="session")
def temp_dir(tmp_path_factory):
    """
    Create a temporary directory for the entire test session.

    Returns:
        Path: Path to temporary directory
    """
    return tmp_path_factory.mktemp("tablekit_tests")


# =============================================================================
# Module-scope Fixtures (Created once per test module)
# =============================================================================

@pytest.fixture(scope="module")
def sales_rows():
    """
    Sales rows sorted by region, then city.

    Returns:
        list: Row mappings with region, city, product and amount keys
    """
    return [
        {'region': 'North', 'city': 'Oslo', 'product': 'Skis', 'amount': '100'},
        {'region': 'North', 'city': 'Oslo', 'product': 'Boots', 'amount': '50'},
        {'region': 'North', 'city': 'Bergen', 'product': 'Skis', 'amount': '70'},
        {'region': 'South', 'city': 'Rome', 'product': 'Boots', 'amount': '30'},
        {'region': 'South', 'city': 'Rome', 'product': 'Skis', 'amount': '20.5'},
    ]


# =============================================================================
# Function-scope Fixtures (Created for each test)
# =============================================================================

@pytest.fixture
def recording_writer():
    """
    Create a writer that records every callback.

    Returns:
        RecordingWriter: Empty recording writer
    """
    return RecordingWriter()


@pytest.fixture
def sales_headers():
    """
    Header cells for `sales_rows`: region (level 0), city (level 1), product, amount (totaled).

    Returns:
        list: HeaderCell definitions in ordinal order
    """
    return make_headers('region', 'city', 'product', 'amount', groups={'region': 0, 'city': 1}, totals=('amount',))


@pytest.fixture
def grouped_model(sales_rows, sales_headers):
    """
    Create a two-level grouped model for Markdown export without a totaler.

    Returns:
        TableModel: Model over `sales_rows`
    """
    return TableModel(
        rows=sales_rows,
        header_cells=sales_headers,
        properties=TableProperties(),
        media=MediaType.MARKDOWN,
    )


@pytest.fixture
def reset_config():
    """
    Restore the configuration singleton after a test modifies it.

    Yields:
        Config: The application configuration
    """
    app_config.reload(DEFAULT_CONFIG_PATH)
    yield app_config
    app_config.reload(DEFAULT_CONFIG_PATH)
