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
JPEG Segment Scanner.

Locates the EXIF block of a JPEG file. EXIF data lives in an APP1 segment
whose payload starts with the identifier ``Exif\\0\\0`` followed by a
complete TIFF structure; offsets inside it are relative to the start of that
TIFF header.
"""

import struct
from typing import BinaryIO, Optional

JPEG_SOI = b'\xff\xd8'
EXIF_IDENTIFIER = b'Exif\x00\x00'

MARKER_APP1 = 0xE1
MARKER_SOS = 0xDA
MARKER_EOI = 0xD9
# Markers without a length field
STANDALONE_MARKERS = {0x01, 0xD8} | set(range(0xD0, 0xD8))


def is_jpeg(header: bytes) -> bool:
    """Return True if `header` starts with the JPEG start-of-image marker."""
    return header[:2] == JPEG_SOI


def find_exif_offset(fp: BinaryIO) -> Optional[int]:
    """
    Find the TIFF header of the EXIF block in a JPEG file.

    Scans marker segments from the start of the file until the EXIF APP1
    segment, the start of scan, or the end of the file.

    Args:
        fp: A seekable binary file object.

    Returns:
        Absolute file offset of the TIFF header, or None if the file is not
        a JPEG or has no EXIF segment.
    """
    fp.seek(0)
    if not is_jpeg(fp.read(2)):
        return None

    while True:
        marker = fp.read(2)
        if len(marker) < 2 or marker[0] != 0xFF:
            return None
        marker_type = marker[1]
        # Fill bytes before a marker
        while marker_type == 0xFF:
            next_byte = fp.read(1)
            if not next_byte:
                return None
            marker_type = next_byte[0]

        if marker_type in STANDALONE_MARKERS:
            continue
        if marker_type in (MARKER_SOS, MARKER_EOI):
            return None

        length_bytes = fp.read(2)
        if len(length_bytes) < 2:
            return None
        length = struct.unpack('>H', length_bytes)[0]
        if length < 2:
            return None
        segment_start = fp.tell()

        if marker_type == MARKER_APP1 and fp.read(len(EXIF_IDENTIFIER)) == EXIF_IDENTIFIER:
            return segment_start + len(EXIF_IDENTIFIER)

        fp.seek(segment_start + length - 2)
