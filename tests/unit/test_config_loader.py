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
Unit tests for the configuration singleton.
"""

import logging

import pytest

from ifdtk.utils.config_loader import DEFAULT_CONFIG, Config, config


@pytest.mark.unit
class TestConfig:
    """Test Config."""

    def test_singleton(self):
        assert Config() is config

    def test_shipped_defaults(self):
        assert config.get('decoder.max_depth') == 32
        assert config.get('decoder.pointer_tags') == [34665, 34853, 40965]
        assert config.get('report.hex_dump_width') == 32
        assert config.get('report.hex_dump_limit') == 128
        assert config.get('logging.level') == 'INFO'

    def test_missing_key_default(self):
        assert config.get('decoder.missing', 'fallback') == 'fallback'
        assert config.get('nothing.here') is None

    def test_get_section(self):
        assert config.get_section('report')['hex_dump_limit'] == 128
        assert config.get_section('missing') == {}

    def test_set_and_reload(self):
        config.set('decoder.max_depth', 4)
        config.set('extra.nested.key', 'value')
        assert config.get('decoder.max_depth') == 4
        assert config.get('extra.nested.key') == 'value'
        config.reload()
        assert config.get('decoder.max_depth') == 32
        assert config.get('extra.nested.key') is None

    def test_missing_file_uses_defaults(self, monkeypatch, tmp_path):
        monkeypatch.setattr(Config, 'config_path', tmp_path / 'absent.toml')
        config.reload()
        assert config.get_section('decoder') == DEFAULT_CONFIG['decoder']

    def test_invalid_file_uses_defaults(self, monkeypatch, tmp_path, caplog):
        path = tmp_path / 'config.toml'
        path.write_text('[decoder\nmax_depth = ', encoding='utf-8')
        monkeypatch.setattr(Config, 'config_path', path)
        with caplog.at_level(logging.WARNING):
            config.reload()
        assert config.get('decoder.max_depth') == 32
        assert "Could not load config.toml" in caplog.text

    def test_partial_file_keeps_other_defaults(self, monkeypatch, tmp_path):
        path = tmp_path / 'config.toml'
        path.write_text('[decoder]\nmax_depth = 5\n', encoding='utf-8')
        monkeypatch.setattr(Config, 'config_path', path)
        config.reload()
        assert config.get('decoder.max_depth') == 5
        assert config.get('decoder.pointer_tags') == [34665, 34853, 40965]
        assert config.get('report.hex_dump_width') == 32

    def test_defaults_not_mutated(self):
        config.set('decoder.max_depth', 1)
        assert DEFAULT_CONFIG['decoder']['max_depth'] == 32
