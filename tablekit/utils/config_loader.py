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
Configuration Management for TableKit.

This module provides a singleton configuration manager (`Config`) that loads,
parses, and provides access to settings from a central `config.toml` file.
It ensures that configuration values are loaded only once and are available
throughout the application.

Classes:
    Config: A singleton class for managing application-wide configuration.
"""
import copy
import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "config.toml"


class Config:
    """Singleton configuration manager"""
    _instance = None
    _config: Dict[str, Any] = {}
    _path: Path = DEFAULT_CONFIG_PATH

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._load_config()
        return cls._instance

    def _load_config(self, path: Optional[Path] = None):
        """Load configuration from config.toml, merged over the defaults"""
        if path is not None:
            self._path = Path(path)
        self._config = self._default_config()
        if not self._path.exists():
            logger.debug(f"No configuration file at {self._path}, using defaults")
            return
        try:
            with open(self._path, "rb") as f:
                self._merge(self._config, tomllib.load(f))
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.warning(f"Could not load {self._path}: {e}")

    @staticmethod
    def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> None:
        for key, value in override.items():
            if isinstance(value, dict) and isinstance(base.get(key), dict):
                Config._merge(base[key], value)
            else:
                base[key] = value

    def _default_config(self) -> Dict[str, Any]:
        """Default configuration if config.toml doesn't exist"""
        return copy.deepcopy({
            "table": {
                "show_header": True,
                "empty_list_show_table": False,
                "export_full_list": True,
                "page_size": 0
            },
            "messages": {
                "locale": "en_US",
                "empty_list": "Nothing found to display.",
                "empty_list_row": "Nothing found to display."
            },
            "html": {
                "theme": "material_light",
                "document": True
            },
            "logging": {
                "level": "INFO",
                "file": None
            }
        })

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value using dot notation

        Args:
            key: Configuration key in dot notation (e.g., "table.show_header")
            default: Default value if key is not found

        Returns:
            Configuration value or default

        Example:
            >>> config.get("messages.locale")
            'en_US'
        """
        keys = key.split(".")
        value = self._config
        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return default if value is None else value

    def get_section(self, section: str) -> Dict[str, Any]:
        """Get entire configuration section

        Args:
            section: Section name (e.g., "table", "messages")

        Returns:
            Dictionary containing the section configuration
        """
        return self._config.get(section, {})

    def set(self, key: str, value: Any):
        """Set configuration value using dot notation

        Note:
            This only modifies the in-memory configuration.
            Changes are not persisted to config.toml.
        """
        keys = key.split(".")
        config = self._config
        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]
        config[keys[-1]] = value

    def reload(self, path: Optional[Path] = None):
        """Reload configuration, optionally from another config.toml"""
        self._load_config(path)

# Singleton instance
config = Config()
