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
Integration tests for the render workflow.

These tests run `render_table` from argument parsing to the written file and
check that every output format agrees on grouping and subtotals.
"""

import csv
import pytest
from lxml import html as lxml_html
from openpyxl import load_workbook
from tablekit.tools.render_table import render_table
from tablekit.utils.contexts import banner_context
from tablekit.utils.script_arguments import RenderArguments

SALES_CSV = (
    'region,city,product,amount\n'
    'North,Oslo,Skis,100\n'
    'North,Oslo,Boots,50\n'
    'North,Bergen,Skis,70\n'
    'South,Rome,Boots,30\n'
    'South,Rome,Skis,20.5\n'
)


@pytest.fixture
def sales_csv(tmp_path):
    path = tmp_path / 'sales.csv'
    path.write_text(SALES_CSV, encoding='utf-8')
    return path


def _args(path, **kwargs):
    kwargs.setdefault('group_by', ['region', 'city'])
    kwargs.setdefault('totals', ['amount'])
    return RenderArguments(input_path=path, **kwargs)


@pytest.mark.integration
class TestRenderWorkflow:
    """Test render_table end to end, without the CLI."""

    def test_markdown(self, sales_csv, reset_config):
        """Test the Markdown file for a two-level grouped table."""
        output = render_table(_args(sales_csv, report_format='md', caption='Sales'))
        assert output == sales_csv.with_name('sales_table.md')
        lines = output.read_text(encoding='utf-8').splitlines()
        assert lines[0] == '**Sales**'
        assert '| Region | City | Product | Amount |' in lines
        assert '| North | Oslo | Skis | 100 |' in lines
        assert '|  |  | Boots | 50 |' in lines
        assert '|  | *Total Oslo* |  | *150* |' in lines
        assert '| *Total North* |  |  | *220* |' in lines
        assert '| *Total South* |  |  | *50.50* |' in lines

    def test_html_document(self, sales_csv, reset_config):
        """Test the themed HTML document."""
        output = render_table(_args(sales_csv, theme='material_dark', footer='*Provisional*'))
        tree = lxml_html.parse(str(output)).getroot()
        table = tree.find('.//table')
        assert table.get('id') == 'sales'
        body_rows = table.findall('tbody/tr')
        assert len([tr for tr in body_rows if 'subtotal' in tr.get('class')]) == 5
        assert table.find('tfoot//em').text == 'Provisional'
        assert tree.find('head/style') is not None

    def test_html_fragment_from_config(self, sales_csv, reset_config):
        """Test that html.document = false writes a bare table."""
        reset_config.set('html.document', False)
        output = render_table(_args(sales_csv))
        assert output.read_text(encoding='utf-8').startswith('<table id="sales"')

    def test_excel(self, sales_csv, reset_config):
        """Test the Excel workbook."""
        output = render_table(_args(sales_csv, report_format='xlsx'))
        ws = load_workbook(output).active
        column_a = [row[0] for row in ws.iter_rows(values_only=True)]
        assert column_a.count('Total North') == 1
        assert column_a.count('Total South') == 1
        assert ws.max_row == 1 + 5 + 5

    def test_excel_from_bracketed_file_name(self, tmp_path, reset_config):
        """Test that an input name Excel rejects as a sheet title still renders."""
        path = tmp_path / 'sales[2024].csv'
        path.write_text(SALES_CSV, encoding='utf-8')
        output = render_table(_args(path, report_format='xlsx'))
        assert output.name == 'sales[2024]_table.xlsx'
        assert load_workbook(output).active.title == 'sales2024'

    def test_csv_totals_match_markdown(self, sales_csv, reset_config):
        """Test that CSV subtotals equal the sums of the grouped rows."""
        output = render_table(_args(sales_csv, report_format='csv'))
        with open(output, newline='', encoding='utf-8') as f:
            rows = list(csv.reader(f))
        totals = {row[0] or row[1]: row[3] for row in rows if 'Total' in (row[0] + row[1])}
        assert totals == {
            'Total Oslo': '150',
            'Total North': '220',
            'Total Bergen': '70',
            'Total Rome': '50.5',
            'Total South': '50.5',
        }

    def test_html_paging_vs_csv_full_list(self, sales_csv, reset_config):
        """Test that HTML renders one page while CSV exports every row."""
        html_output = render_table(_args(sales_csv, page_size=2, page=2, totals=[]))
        csv_output = render_table(_args(sales_csv, page_size=2, page=2, totals=[], report_format='csv'))
        tree = lxml_html.parse(str(html_output)).getroot()
        assert len(tree.findall('.//tbody/tr')) == 2
        assert len(csv_output.read_text(encoding='utf-8').splitlines()) == 6

    def test_empty_input(self, tmp_path, reset_config):
        """Test that an input without rows writes the empty message."""
        path = tmp_path / 'empty.csv'
        path.write_text('region,amount\n', encoding='utf-8')
        output = render_table(RenderArguments(input_path=path, report_format='md'))
        assert output.read_text(encoding='utf-8') == '*Nothing found to display.*\n'

    def test_empty_input_shown(self, tmp_path, reset_config):
        """Test the table structure for empty input when hiding is off."""
        path = tmp_path / 'empty.csv'
        path.write_text('region,amount\n', encoding='utf-8')
        reset_config.set('messages.empty_list_row', 'No data in {0} columns.')
        output = render_table(RenderArguments(input_path=path, report_format='md', columns=['region', 'amount'], hide_empty=False))
        assert '| No data in 2 columns. |' in output.read_text(encoding='utf-8')

    def test_custom_config_file(self, sales_csv, tmp_path, reset_config):
        """Test that --config reloads the configuration before rendering."""
        custom = tmp_path / 'custom.toml'
        custom.write_text('[table]\nshow_header = false\n', encoding='utf-8')
        output = render_table(_args(sales_csv, report_format='csv', config=custom, totals=[]))
        assert output.read_text(encoding='utf-8').splitlines()[0] == 'North,Oslo,Skis,100'

    def test_banner_context_restored(self, sales_csv, reset_config):
        """Test that the banner only applies during the render."""
        render_table(_args(sales_csv, report_format='md', banner='Draft'))
        assert banner_context.get() is None
