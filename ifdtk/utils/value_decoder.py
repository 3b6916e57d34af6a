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
IFD Value Decoder.

Reads the value of an IFD entry from the current stream position and
converts it to its Python representation. The decoder never seeks; the
caller positions the stream (inline payload slot or value offset).

Widening rules:
- Integer scalars of every type become Python ints, which hold the full
  unsigned range without truncation.
- Unsigned arrays are widened one size (SHORT to int32, LONG and IFD to
  int64) so no element is reinterpreted as negative.
- Signed arrays keep their native width.
- BYTE, SBYTE and UNDEFINED arrays stay as raw bytes.
- LONG8 and IFD8 values must fit a signed 64-bit integer.
"""

from typing import Callable, Dict

import numpy as np

from ifdtk.utils.byte_stream import ByteStream
from ifdtk.utils.data_models import Rational, Unknown, Value
from ifdtk.utils.exceptions import ValueOutOfRangeError
from ifdtk.utils.tiff_constants import FieldType

INT64_MAX = np.iinfo(np.int64).max


def _decode_byte(stream: ByteStream, count: int) -> Value:
    if count == 1:
        return stream.read_u8()
    return stream.read_fully(count)


def _decode_sbyte(stream: ByteStream, count: int) -> Value:
    if count == 1:
        return stream.read_s8()
    return stream.read_fully(count)


def _decode_undefined(stream: ByteStream, count: int) -> Value:
    return stream.read_fully(count)


def _decode_ascii(stream: ByteStream, count: int) -> Value:
    # ASCII by the letter of the format, UTF-8 in practice
    return stream.read_fully(count).decode('utf-8', errors='replace')


def _decode_short(stream: ByteStream, count: int) -> Value:
    if count == 1:
        return stream.read_u16()
    return stream.read_array('u2', count).astype(np.int32)


def _decode_long(stream: ByteStream, count: int) -> Value:
    if count == 1:
        return stream.read_u32()
    return stream.read_array('u4', count).astype(np.int64)


def _decode_sshort(stream: ByteStream, count: int) -> Value:
    if count == 1:
        return stream.read_s16()
    return stream.read_array('i2', count)


def _decode_slong(stream: ByteStream, count: int) -> Value:
    if count == 1:
        return stream.read_s32()
    return stream.read_array('i4', count)


def _decode_rational(stream: ByteStream, count: int) -> Value:
    pairs = stream.read_array('u4', count * 2).reshape(-1, 2)
    rationals = tuple(Rational(int(num), int(den)) for num, den in pairs)
    return rationals[0] if count == 1 else rationals


def _decode_srational(stream: ByteStream, count: int) -> Value:
    pairs = stream.read_array('i4', count * 2).reshape(-1, 2)
    rationals = tuple(Rational(int(num), int(den)) for num, den in pairs)
    return rationals[0] if count == 1 else rationals


def _decode_float(stream: ByteStream, count: int) -> Value:
    if count == 1:
        return stream.read_f32()
    return stream.read_array('f4', count)


def _decode_double(stream: ByteStream, count: int) -> Value:
    if count == 1:
        return stream.read_f64()
    return stream.read_array('f8', count)


def _decode_long8(stream: ByteStream, count: int) -> Value:
    values = stream.read_array('i8', count)
    if (values < 0).any():
        raw = int(values[values < 0][0]) & 0xFFFFFFFFFFFFFFFF
        raise ValueOutOfRangeError(f"Value {raw} > {INT64_MAX}")
    return int(values[0]) if count == 1 else values


def _decode_slong8(stream: ByteStream, count: int) -> Value:
    if count == 1:
        return stream.read_s64()
    return stream.read_array('i8', count)


_DECODERS: Dict[int, Callable[[ByteStream, int], Value]] = {
    FieldType.BYTE: _decode_byte,
    FieldType.ASCII: _decode_ascii,
    FieldType.SHORT: _decode_short,
    FieldType.LONG: _decode_long,
    FieldType.RATIONAL: _decode_rational,
    FieldType.SBYTE: _decode_sbyte,
    FieldType.UNDEFINED: _decode_undefined,
    FieldType.SSHORT: _decode_sshort,
    FieldType.SLONG: _decode_slong,
    FieldType.SRATIONAL: _decode_srational,
    FieldType.FLOAT: _decode_float,
    FieldType.DOUBLE: _decode_double,
    FieldType.IFD: _decode_long,
    FieldType.LONG8: _decode_long8,
    FieldType.SLONG8: _decode_slong8,
    FieldType.IFD8: _decode_long8,
}


def decode_value(stream: ByteStream, field_type: int, count: int) -> Value:
    """
    Decode `count` values of `field_type` at the current stream position.

    Consumes exactly `TYPE_LENGTHS[field_type] * count` bytes for known
    types. Unknown types consume nothing and return an `Unknown`
    placeholder recording where the value starts.

    Args:
        stream: The stream, positioned at the first value byte.
        field_type: The entry's field type code.
        count: The number of values, non-negative.

    Returns:
        The decoded value.

    Raises:
        ValueOutOfRangeError: For a LONG8 or IFD8 value above the signed
            64-bit range.
        StreamReadError: If the stream ends before the value does.
    """
    decoder = _DECODERS.get(field_type)
    if decoder is None:
        # Unrecognized types are skipped, not rejected
        return Unknown(field_type, count, stream.tell())
    return decoder(stream, count)
