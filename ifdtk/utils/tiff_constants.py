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
TIFF Format Constants.

Field type codes, the per-type value length table, header magic numbers and
the well-known sub-directory pointer tags. Tag names are looked up in the
tag registries shipped with tifffile.
"""

from enum import IntEnum
from typing import Dict, Optional

from tifffile import TIFF

TIFF_MAGIC = 42
BIGTIFF_MAGIC = 43
BIGTIFF_OFFSET_SIZE = 8


class FieldType(IntEnum):
    """IFD entry field types."""
    BYTE = 1
    ASCII = 2
    SHORT = 3
    LONG = 4
    RATIONAL = 5
    SBYTE = 6
    UNDEFINED = 7
    SSHORT = 8
    SLONG = 9
    SRATIONAL = 10
    FLOAT = 11
    DOUBLE = 12
    IFD = 13
    LONG8 = 16   # BigTIFF
    SLONG8 = 17  # BigTIFF
    IFD8 = 18    # BigTIFF


# Bytes per element for each known field type
TYPE_LENGTHS: Dict[int, int] = {
    FieldType.BYTE: 1,
    FieldType.ASCII: 1,
    FieldType.SHORT: 2,
    FieldType.LONG: 4,
    FieldType.RATIONAL: 8,
    FieldType.SBYTE: 1,
    FieldType.UNDEFINED: 1,
    FieldType.SSHORT: 2,
    FieldType.SLONG: 4,
    FieldType.SRATIONAL: 8,
    FieldType.FLOAT: 4,
    FieldType.DOUBLE: 8,
    FieldType.IFD: 4,
    FieldType.LONG8: 8,
    FieldType.SLONG8: 8,
    FieldType.IFD8: 8,
}

# Tags whose value is the offset of a nested IFD
TAG_EXIF_IFD = 34665
TAG_GPS_IFD = 34853
TAG_INTEROP_IFD = 40965

KNOWN_IFD_TAGS = frozenset({TAG_EXIF_IFD, TAG_GPS_IFD, TAG_INTEROP_IFD})

# Tags holding embedded metadata in a foreign format
TAG_XMP = 700
TAG_IPTC = 33723
TAG_PHOTOSHOP = 34377
TAG_ICC_PROFILE = 34675


def value_length(field_type: int, count: int) -> int:
    """
    Return the byte length of a value, or -1 if the field type is unknown.

    Args:
        field_type: The entry's field type code.
        count: The number of values in the entry.
    """
    if field_type in TYPE_LENGTHS:
        return TYPE_LENGTHS[field_type] * count
    return -1


def type_name(field_type: int) -> str:
    """Return the field type name, e.g. 'SHORT', or 'UNKNOWN(n)'."""
    try:
        return FieldType(field_type).name
    except ValueError:
        return f"UNKNOWN({field_type})"


def tag_name(tag: int, parent_tag: Optional[int] = None) -> str:
    """
    Look up a human-readable tag name.

    Tags inside GPS and Interoperability directories reuse small numbers, so
    the pointer tag of the enclosing directory selects the registry.

    Args:
        tag: The tag number.
        parent_tag: The pointer tag of the directory containing the entry.
    """
    if parent_tag == TAG_GPS_IFD:
        registry = TIFF.GPS_TAGS
    elif parent_tag == TAG_INTEROP_IFD:
        registry = TIFF.IOP_TAGS
    else:
        registry = TIFF.TAGS
    name = registry.get(tag)
    if name is None and parent_tag == TAG_EXIF_IFD:
        name = TIFF.EXIF_TAGS.get(tag)
    return name if name else f"UnknownTag ({tag})"
