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
IFD ToolKit Test Suite.

This package contains tests for IFDTK components including:
- Unit tests for individual functions and classes
- Integration tests that decode files written by tifffile
- End-to-end tests for CLI commands
"""
