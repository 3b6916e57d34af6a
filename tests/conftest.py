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
Pytest configuration and shared fixtures for IFDTK test suite.

This module provides:
- Shared fixtures for synthetic IFD structures
- Fixtures for TIFF files written by tifffile
- Test utility functions

Example:
    >>> def test_using_fixture(simple_tiff_bytes):
    ...     '''Test using the simple_tiff_bytes fixture.'''
    ...     assert read_ifd(simple_tiff_bytes).tags() == [256, 257, 258]
"""

import io
import struct

import numpy as np
import pytest
import tifffile

# pythonpath is configured in pyproject.toml to include project root
from tests.fixtures.mock_tiff_factory import MockEntry, MockTiff
from ifdtk.utils.byte_stream import BIG_ENDIAN, LITTLE_ENDIAN, ByteStream
from ifdtk.utils.config_loader import config
from ifdtk.utils.tiff_constants import FieldType, TAG_EXIF_IFD, TAG_GPS_IFD


# =============================================================================
# Configuration Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def restore_config():
    """
    Restore the configuration singleton after each test.

    Tests may call `config.set()`; the singleton is shared across the session.
    """
    yield
    config.reload()


# =============================================================================
# Mock TIFF Fixtures
# =============================================================================

@pytest.fixture
def simple_mock():
    """
    A little-endian TIFF with one directory of three entries.

    Entries: ImageWidth (SHORT 1024), ImageLength (LONG 768),
    BitsPerSample (SHORT[3] 8, 8, 8).
    """
    mock = MockTiff(byte_order='II')
    mock.add_ifd([
        MockEntry(256, FieldType.SHORT, [1024]),
        MockEntry(257, FieldType.LONG, [768]),
        MockEntry(258, FieldType.SHORT, [8, 8, 8]),
    ])
    return mock


@pytest.fixture
def simple_tiff_bytes(simple_mock):
    """Encoded bytes of `simple_mock`."""
    return simple_mock.to_bytes()


@pytest.fixture
def exif_mock():
    """
    A big-endian TIFF with an EXIF and a GPS sub-directory.

    Directory 0 (root): Make, ExifIFD pointer, GPSIFD pointer
    Directory 1 (EXIF): ExifVersion, ExposureTime
    Directory 2 (GPS): GPSVersionID, GPSLatitudeRef
    """
    mock = MockTiff(byte_order='MM')
    root = mock.add_ifd([MockEntry(271, FieldType.ASCII, 'Acme\x00')])
    exif = mock.add_ifd([
        MockEntry(36864, FieldType.UNDEFINED, b'0230'),
        MockEntry(33434, FieldType.RATIONAL, [(1, 250)]),
    ])
    gps = mock.add_ifd([
        MockEntry(0, FieldType.BYTE, [2, 3, 0, 0]),
        MockEntry(1, FieldType.ASCII, 'N\x00'),
    ])
    mock.add_pointer(root, TAG_EXIF_IFD, exif)
    mock.add_pointer(root, TAG_GPS_IFD, gps)
    return mock


@pytest.fixture
def exif_tiff_bytes(exif_mock):
    """Encoded bytes of `exif_mock`."""
    return exif_mock.to_bytes()


# =============================================================================
# tifffile Fixtures
# =============================================================================

@pytest.fixture
def tifffile_path(tmp_path):
    """
    A small grayscale TIFF written by tifffile.

    Written without tifffile's own metadata so the directory holds only the
    baseline tags plus the given description, software and resolution.
    """
    path = tmp_path / "written.tif"
    data = np.arange(64 * 48, dtype=np.uint16).reshape(48, 64)
    tifffile.imwrite(
        path,
        data,
        metadata=None,
        description='synthetic test image',
        software='ifdtk tests',
        resolution=(300, 300),
    )
    return path


@pytest.fixture
def jpeg_with_exif(exif_tiff_bytes):
    """
    A minimal JPEG byte string whose APP1 segment carries `exif_tiff_bytes`.

    Layout: SOI, APP0 (JFIF), APP1 (Exif), SOS, EOI.
    """
    return build_jpeg(exif_tiff_bytes)


# =============================================================================
# Test Utility Functions
# =============================================================================

def build_jpeg(tiff_bytes: bytes) -> bytes:
    """Wrap a TIFF structure in a minimal JPEG with a JFIF and an EXIF segment."""
    jfif = b'JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00'
    exif = b'Exif\x00\x00' + tiff_bytes
    return (
        b'\xff\xd8'
        + b'\xff\xe0' + struct.pack('>H', len(jfif) + 2) + jfif
        + b'\xff\xe1' + struct.pack('>H', len(exif) + 2) + exif
        + b'\xff\xda' + struct.pack('>H', 2)
        + b'\xff\xd9'
    )


def make_stream(data: bytes, little_endian: bool = True) -> ByteStream:
    """Create a ByteStream over `data`."""
    return ByteStream(io.BytesIO(data), byte_order=LITTLE_ENDIAN if little_endian else BIG_ENDIAN)
