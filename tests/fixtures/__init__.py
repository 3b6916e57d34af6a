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
Test fixtures and mock data factories for IFDTK tests.

This package contains:
- MockTiff: Factory for encoding synthetic IFD structures byte by byte
- MockEntry, IfdRef: Entry records and directory references for MockTiff
"""

from tests.fixtures.mock_tiff_factory import IfdRef, MockEntry, MockTiff

__all__ = ['IfdRef', 'MockEntry', 'MockTiff']
