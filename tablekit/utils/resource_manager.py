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
Static Asset Management for TableKit.

This module provides the `ResourceManager` singleton, responsible for loading
the stylesheet and theme files (TOML) packaged with the toolkit, so that the
HTML writer can produce standalone, themed documents.

Classes:
    ResourceManager: A singleton for accessing packaged static files.
"""
import logging
import re
import tomllib
from pathlib import Path
from typing import Dict, Optional

logger = logging.getLogger(__name__)


class ResourceManager:
    """Manages static resources (CSS, themes, banner rules)"""

    def __init__(self, resources_dir: Optional[Path] = None):
        self.resources_dir = resources_dir or Path(__file__).parent.parent / "resources"
        self._theme_cache: Dict[str, Dict] = {}
        self._banner_rules: Optional[list] = None

    def get_css(self, theme: str = "material_light", banner_text: Optional[str] = None) -> str:
        """Get the table stylesheet for a theme

        Args:
            theme: Theme name ('material_light' or 'material_dark')
            banner_text: Optional banner text selecting banner colors

        Returns:
            CSS string with theme colors applied
        """
        css = self._read_file_safe("styles/base.css")
        if banner_text:
            css = self._apply_banner_colors(css, banner_text)
        return self._apply_theme_colors(css, self.load_theme(theme))

    def load_theme(self, theme: str) -> Dict:
        """Load theme from TOML

        Args:
            theme: Theme name

        Returns:
            Dictionary of theme colors
        """
        if theme in self._theme_cache:
            return self._theme_cache[theme]

        theme_file = self.resources_dir / "styles" / f"{theme}.toml"
        if not theme_file.exists():
            logger.warning(f"Theme '{theme}' not found, using default colors")
            return self._default_theme_colors()

        try:
            with open(theme_file, "rb") as f:
                theme_data = tomllib.load(f)
            self._theme_cache[theme] = theme_data
            return theme_data
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.warning(f"Could not load theme {theme}: {e}")
            return self._default_theme_colors()

    def _default_theme_colors(self) -> Dict:
        """Default theme colors if the theme file is not found"""
        return {
            "colors": {
                "background": "#FFFFFF",
                "text": "#333333",
                "accent": "#007bff",
                "header-background": "#E8EAF6",
                "row-alternate": "#F5F5F5",
                "subtotal-background": "#FFF8E1",
                "border": "#DDDDDD",
            }
        }

    def _read_file_safe(self, relative_path: str) -> str:
        """Read a file from resources directory, return empty string if not found

        Args:
            relative_path: Path relative to resources directory

        Returns:
            File content or empty string if file not found
        """
        file_path = self.resources_dir / relative_path
        if not file_path.exists():
            return ""

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                return f.read()
        except OSError as e:
            logger.warning(f"Could not read {file_path}: {e}")
            return ""

    def _apply_theme_colors(self, css: str, theme_colors: Dict) -> str:
        """Replace `var(--name)` placeholders with theme colors"""
        colors = theme_colors.get("colors", {})
        for key, value in colors.items():
            css = css.replace(f"var(--{key})", value)
            css = css.replace(f"var(--{key.replace('_', '-')})", value)
        return css

    def _apply_banner_colors(self, css: str, banner_text: str) -> str:
        """
        Apply banner colors to CSS based on matched banner rules.

        Args:
            css: The CSS content to modify
            banner_text: The banner text

        Returns:
            Modified CSS with banner colors applied
        """
        rules = self._load_banner_rules()
        if not rules:
            return css

        text_color = "white"
        bg_color = "#616161"

        # last match wins
        match_found = False
        for rule in rules:
            pattern = rule.get("pattern", "")
            if not pattern:
                continue
            try:
                if re.search(pattern, banner_text, re.IGNORECASE):
                    bg_color = rule.get("background_color", bg_color)
                    text_color = rule.get("color", text_color)
                    match_found = True
            except re.error:
                logger.warning(f"Invalid regex pattern in banner rules: {pattern}")

        if match_found:
            css = re.sub(
                r'color:\s*[^;]+;\s*/\*\s*BANNER_TEXT_COLOR\s*\*/',
                f'color: {text_color}; /* BANNER_TEXT_COLOR */',
                css
            )
            css = re.sub(
                r'background-color:\s*[^;]+;\s*/\*\s*BANNER_BG_COLOR\s*\*/',
                f'background-color: {bg_color}; /* BANNER_BG_COLOR */',
                css
            )
        return css

    def _load_banner_rules(self) -> list:
        """Load banner rules from TOML."""
        if self._banner_rules is not None:
            return self._banner_rules

        rules_file = self.resources_dir / "styles" / "banners.toml"
        if not rules_file.exists():
            self._banner_rules = []
            return []

        try:
            with open(rules_file, "rb") as f:
                data = tomllib.load(f)
            self._banner_rules = data.get("banners") or []
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.warning(f"Could not load banner rules: {e}")
            self._banner_rules = []
        return self._banner_rules


# Singleton instance
resource_manager = ResourceManager()
