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
IFD Reading Tool for IFDTK.

This module powers the 'read' command. It decodes the IFD structure of a
TIFF file, a JPEG's EXIF block, or a single directory at a given offset, and
prints every entry. Nested directories are indented under their pointer tag,
binary values are hex-dumped, and values with a registered foreign decoder
(such as XMP) are shown decoded.
"""

import logging
from typing import List, Optional

from ifdtk.utils.data_models import Directory
from ifdtk.utils.decoder_registry import DecoderRegistry, default_registry
from ifdtk.utils.hex_dump import hex_dump
from ifdtk.utils.ifd_reader import read_ifd
from ifdtk.utils.script_arguments import ReadArguments
from ifdtk.utils.tiff_constants import tag_name

logger = logging.getLogger('read_directory')

INDENT = '  '


def format_directory(directory: Directory, registry: Optional[DecoderRegistry] = None,
                     hex_limit: int = 128, hex_width: int = 32,
                     parent_tag: Optional[int] = None, level: int = 0) -> List[str]:
    """
    Format a directory as text lines, one or more per entry.

    Args:
        directory: The decoded directory.
        registry: Decoders for foreign metadata values.
        hex_limit: Maximum number of bytes to hex-dump per binary value;
            0 disables dumps.
        hex_width: Bytes per hex dump line.
        parent_tag: Pointer tag of the directory, used for tag names.
        level: Nesting level, used for indentation.

    Returns:
        The formatted lines.
    """
    prefix = INDENT * level
    lines = []
    for entry in directory:
        name = tag_name(entry.tag, parent_tag)
        lines.append(f"{prefix}{name} ({entry.tag}): {entry.value_as_string()} ({entry.type_name})")

        if entry.is_directory():
            lines.extend(format_directory(entry.value, registry, hex_limit, hex_width,
                                          parent_tag=entry.tag, level=level + 1))
            continue

        decoded = registry.decode(entry) if registry else None
        if decoded is not None:
            lines.extend(f"{prefix}{INDENT * 2}{line}" for line in str(decoded).splitlines())
        elif isinstance(entry.value, bytes) and entry.value and hex_limit:
            dump = hex_dump(entry.value, length=hex_limit, width=hex_width)
            lines.extend(f"{prefix}{INDENT * 2}{line}" for line in dump.splitlines())
            if len(entry.value) > hex_limit:
                lines.append(f"{prefix}{INDENT * 2}... ({len(entry.value) - hex_limit} more bytes)")
    return lines


def read_directory(args: ReadArguments) -> Directory:
    """
    Decode and print the IFD structure described by `args`.

    Returns:
        The decoded directory.
    """
    directory = read_ifd(args.input_path, offset=args.offset, byte_order=args.stream_byte_order)

    if args.offset is None:
        logger.info(f"{args.input_path.name}: {len(directory)} entries")
    else:
        logger.info(f"{args.input_path.name} @{args.offset:08x}: {len(directory)} entries")

    for line in format_directory(directory, default_registry(), args.hex_limit, args.hex_width):
        logger.info(line)
    return directory
