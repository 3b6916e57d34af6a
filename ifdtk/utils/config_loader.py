#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# ******************************************************************************
# Project: IFD ToolKit (IFDTK)
# Author: Eric Robeck <robeckgeo@gmail.com>
#
# Copyright (c) 2025, Eric Robeck
# Licensed under the MIT License
# ******************************************************************************

"""
Configuration Management for the IFD ToolKit.

Settings come from `config.toml` next to the package, layered over the
built-in `DEFAULT_CONFIG`: a file that sets only some keys keeps the
defaults for the rest, and a missing or unreadable file leaves the defaults
in place. The `Config` singleton loads the file once; `config` is the shared
instance.

Sections:
    decoder: Sub-directory pointer tags and nesting limit for `IfdReader`
    report: Hex dump settings for `ifdtk read`
    logging: Default log level and log file for the command line
"""
import logging
import sys
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, List

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    "decoder": {
        "max_depth": 32,
        "pointer_tags": [34665, 34853, 40965],
    },
    "report": {
        "hex_dump_width": 32,
        "hex_dump_limit": 128,
    },
    "logging": {
        "level": "INFO",
        "file": "",
    },
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Return `base` updated with `override`, descending into nested tables."""
    merged = deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class Config:
    """Singleton holding the merged configuration."""
    _instance = None
    _config: Dict[str, Any] = {}
    config_path: Path = Path(__file__).parent.parent / "config.toml"

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance.reload()
        return cls._instance

    def reload(self):
        """Discard in-memory changes and read `config_path` again."""
        self._config = _merge(DEFAULT_CONFIG, self._read_file())

    def _read_file(self) -> Dict[str, Any]:
        if not self.config_path.exists():
            return {}
        try:
            with open(self.config_path, "rb") as f:
                return tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.warning(f"Could not load {self.config_path.name}: {e}")
            return {}

    @staticmethod
    def _split(key: str) -> List[str]:
        return key.split(".")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Look up a value by dotted key.

        Example:
            >>> config.get("decoder.max_depth")
            32
            >>> config.get("decoder.unknown", 0)
            0
        """
        node: Any = self._config
        for part in self._split(key):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def get_section(self, section: str) -> Dict[str, Any]:
        """Return a whole table, e.g. "decoder", or an empty dict."""
        return self._config.get(section, {})

    def set(self, key: str, value: Any):
        """
        Override a value by dotted key, creating tables as needed.

        The change lasts until the next `reload()` and is never written back
        to the file.
        """
        *tables, name = self._split(key)
        node = self._config
        for part in tables:
            node = node.setdefault(part, {})
        node[name] = value


config = Config()
