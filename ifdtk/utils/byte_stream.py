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
Random-Access Byte Stream.

This module provides `ByteStream`, a thin wrapper around a seekable binary
file object that reads fixed-width integers and floats in a settable byte
order. All offsets are relative to an optional base offset, so a TIFF
structure embedded in a larger file (such as the EXIF block of a JPEG) can be
read with the offsets it stores.

Classes:
    ByteStream: Seekable reader with byte-order aware primitives.
"""
import io
import struct
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator, Union

import numpy as np

from ifdtk.utils.exceptions import StreamReadError

LITTLE_ENDIAN = '<'
BIG_ENDIAN = '>'

# numpy dtype kind codes for read_array
_ARRAY_KINDS = {'u1', 'i1', 'u2', 'i2', 'u4', 'i4', 'u8', 'i8', 'f4', 'f8'}

# Reads above this size are checked against the stream length before allocating
_LARGE_READ = 1 << 20


class ByteStream:
    """A seekable binary reader with a settable byte order."""

    def __init__(self, fileobj: BinaryIO, byte_order: str = BIG_ENDIAN, base_offset: int = 0):
        """
        Initialize the stream.

        Args:
            fileobj: A readable, seekable binary file object.
            byte_order: '<' for little-endian or '>' for big-endian.
            base_offset: Absolute position in `fileobj` that maps to offset 0.
        """
        if base_offset < 0:
            raise ValueError(f"Base offset must be non-negative, got {base_offset}")
        self._fp = fileobj
        self._base = base_offset
        self.byte_order = byte_order
        self._fp.seek(base_offset)

    @classmethod
    def from_bytes(cls, data: bytes, byte_order: str = BIG_ENDIAN, base_offset: int = 0) -> 'ByteStream':
        """Create a stream over an in-memory buffer."""
        return cls(io.BytesIO(data), byte_order=byte_order, base_offset=base_offset)

    @classmethod
    @contextmanager
    def open(cls, path: Union[str, Path], byte_order: str = BIG_ENDIAN, base_offset: int = 0) -> Iterator['ByteStream']:
        """Open a file as a stream and close it on exit."""
        with open(path, 'rb') as fp:
            yield cls(fp, byte_order=byte_order, base_offset=base_offset)

    @property
    def byte_order(self) -> str:
        return self._byte_order

    @byte_order.setter
    def byte_order(self, value: str):
        if value not in (LITTLE_ENDIAN, BIG_ENDIAN):
            raise ValueError(f"Byte order must be '<' or '>', got {value!r}")
        self._byte_order = value

    @property
    def base_offset(self) -> int:
        return self._base

    def seek(self, offset: int):
        """Move to an offset relative to the stream base."""
        if offset < 0:
            raise StreamReadError(f"Cannot seek to negative offset {offset}")
        try:
            self._fp.seek(self._base + offset)
        except (OSError, OverflowError, ValueError) as e:
            raise StreamReadError(f"Cannot seek to offset {offset}: {e}") from e

    def tell(self) -> int:
        """Return the current offset relative to the stream base."""
        return self._fp.tell() - self._base

    def skip(self, count: int):
        """Advance the position by `count` bytes without reading them."""
        self.seek(self.tell() + count)

    def read_fully(self, count: int) -> bytes:
        """
        Read exactly `count` bytes.

        Raises:
            StreamReadError: If fewer than `count` bytes are available.
        """
        if count < 0:
            raise StreamReadError(f"Cannot read a negative number of bytes ({count})")
        position = self.tell()
        if count > _LARGE_READ and count > self._remaining():
            raise StreamReadError(
                f"Unexpected end of stream at offset {position}: "
                f"wanted {count} bytes, only {self._remaining()} available"
            )
        data = self._fp.read(count)
        if len(data) != count:
            raise StreamReadError(
                f"Unexpected end of stream at offset {position}: "
                f"wanted {count} bytes, got {len(data)}"
            )
        return data

    def _remaining(self) -> int:
        position = self._fp.tell()
        try:
            return max(self._fp.seek(0, io.SEEK_END) - position, 0)
        finally:
            self._fp.seek(position)

    def peek(self, count: int) -> bytes:
        """Read up to `count` bytes without moving the position."""
        position = self._fp.tell()
        try:
            return self._fp.read(max(count, 0))
        finally:
            self._fp.seek(position)

    def _unpack(self, fmt: str, size: int):
        return struct.unpack(self._byte_order + fmt, self.read_fully(size))[0]

    def read_u8(self) -> int:
        return self._unpack('B', 1)

    def read_s8(self) -> int:
        return self._unpack('b', 1)

    def read_u16(self) -> int:
        return self._unpack('H', 2)

    def read_s16(self) -> int:
        return self._unpack('h', 2)

    def read_u32(self) -> int:
        return self._unpack('I', 4)

    def read_s32(self) -> int:
        return self._unpack('i', 4)

    def read_u64(self) -> int:
        return self._unpack('Q', 8)

    def read_s64(self) -> int:
        return self._unpack('q', 8)

    def read_f32(self) -> float:
        return self._unpack('f', 4)

    def read_f64(self) -> float:
        return self._unpack('d', 8)

    def read_array(self, kind: str, count: int) -> np.ndarray:
        """
        Read `count` values into a numpy array in native byte order.

        Args:
            kind: numpy kind and size code, e.g. 'u2' or 'f8'.
            count: Number of elements.
        """
        if kind not in _ARRAY_KINDS:
            raise ValueError(f"Unsupported array kind: {kind}")
        dtype = np.dtype(self._byte_order + kind)
        data = self.read_fully(dtype.itemsize * count)
        return np.frombuffer(data, dtype=dtype).astype(dtype.newbyteorder('='))
