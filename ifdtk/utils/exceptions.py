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
Custom Exceptions Module.

A centralized module for custom exceptions used throughout the IFD ToolKit.

Format errors (subclasses of `IfdFormatError`) describe a structure that
cannot be decoded. When one of them occurs while expanding a single
sub-directory, the parent directory is still returned. Stream and cycle
errors always propagate.
"""

class IfdError(Exception):
    """Base exception for all IFD decoding errors."""
    pass

class IfdFormatError(IfdError):
    """Base exception for malformed or unsupported IFD structures."""
    pass

class MalformedHeaderError(IfdFormatError):
    """Raised for an invalid byte order mark or magic number."""
    pass

class MalformedEntryError(IfdFormatError):
    """Raised when an entry record cannot be valid, e.g. a negative count."""
    pass

class ValueOutOfRangeError(IfdFormatError):
    """Raised when a 64-bit unsigned value does not fit the signed 64-bit range."""
    pass

class UnsupportedPointerTypeError(IfdFormatError):
    """Raised when a sub-directory pointer entry does not hold an integer offset."""
    pass

class StreamReadError(IfdError, OSError):
    """Raised on a short read or an invalid seek in the underlying stream."""
    pass

class CyclicStructureError(IfdError):
    """Raised when directory offsets repeat or nest deeper than allowed."""
    pass
