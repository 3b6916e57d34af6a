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
Hex Dump Formatter.

Formats raw byte buffers for inspection: an 8-digit hex offset, the bytes in
2-byte groups, and a printable-ASCII gutter.

Example:
    >>> print(hex_dump(b'Exif\\x00\\x00MM', width=8))
    00000000: 4578 6966 0000 4d4d  Exif..MM
"""

from typing import Optional

DEFAULT_WIDTH = 32


def _to_ascii(chunk: bytes) -> str:
    return ''.join(chr(b) if 32 <= b <= 126 else '.' for b in chunk)


def hex_dump(data: bytes, offset: int = 0, length: Optional[int] = None,
             width: int = DEFAULT_WIDTH, address: int = 0) -> str:
    """
    Format `data` as a hex dump.

    Args:
        data: The bytes to format.
        offset: Index of the first byte to include; also the first address shown.
        length: Number of bytes to include (default: to the end of `data`).
        width: Bytes per line; must be a positive even number.
        address: Value added to every displayed offset, e.g. the stream
            position the buffer was read from.

    Returns:
        The dump, one line per `width` bytes, without a trailing newline.
    """
    if width <= 0 or width % 2:
        raise ValueError(f"Width must be a positive even number, got {width}")
    end = len(data) if length is None else min(len(data), offset + length)
    hex_columns = width * 2 + width // 2 - 1

    lines = []
    for start in range(offset, end, width):
        chunk = data[start:min(start + width, end)]
        words = ' '.join(chunk[i:i + 2].hex() for i in range(0, len(chunk), 2))
        lines.append(f"{address + start:08x}: {words.ljust(hex_columns)}  {_to_ascii(chunk)}")
    return '\n'.join(lines)
