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
IFD Reader.

Decodes the Image File Directory structure shared by TIFF and EXIF:

- Header validation: byte order mark ('II' or 'MM'), magic number (42 for
  TIFF, 43 for BigTIFF) and the offset of the first directory.
- Directory decoding: entry count, entries, and the offset of the next
  directory. Chained directories are flattened into one entry list.
- Entry decoding: tag, field type, count, and either an inline value or the
  offset of the value.
- Sub-directory expansion: entries tagged with a known pointer tag (EXIF,
  GPS, Interoperability) are replaced by the directory they point to.

Offsets come from untrusted input, so every decode tracks the directories on
the path from the root to the one being read, and the nesting depth. An
offset that leads back onto that path, or excessive nesting, raises
`CyclicStructureError`. A sub-directory shared by several pointers (the same
EXIF directory referenced from two pages) is decoded once and reused.

Example:
    >>> with ByteStream.open('image.tif') as stream:
    ...     directory = IfdReader().read(stream)
    >>> directory.get_entry_by_id(256).value
    1024
"""

import io
import logging
from pathlib import Path
from typing import AbstractSet, BinaryIO, Dict, FrozenSet, Iterable, List, Optional, Set, Union

from ifdtk.utils.byte_stream import BIG_ENDIAN, LITTLE_ENDIAN, ByteStream
from ifdtk.utils.config_loader import config
from ifdtk.utils.data_models import Directory, Entry, Unknown
from ifdtk.utils.exceptions import (
    CyclicStructureError,
    IfdFormatError,
    MalformedEntryError,
    MalformedHeaderError,
    UnsupportedPointerTypeError,
)
from ifdtk.utils.hex_dump import hex_dump
from ifdtk.utils.jpeg_segments import find_exif_offset
from ifdtk.utils.tiff_constants import (
    BIGTIFF_MAGIC,
    BIGTIFF_OFFSET_SIZE,
    KNOWN_IFD_TAGS,
    TIFF_MAGIC,
    TYPE_LENGTHS,
    tag_name,
    value_length,
)
from ifdtk.utils.value_decoder import decode_value

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 32


class _DecodeSession:
    """Per-decode bookkeeping: record layout, decoded directories, depth limit."""

    def __init__(self, big_tiff: bool, max_depth: int):
        self.big_tiff = big_tiff
        self.max_depth = max_depth
        self.decoded: Dict[int, Directory] = {}

    def visit(self, offset: int, depth: int, ancestors: AbstractSet[int], chain: Set[int]):
        if depth > self.max_depth:
            raise CyclicStructureError(
                f"Directory at offset {offset:08x} nested deeper than {self.max_depth} levels"
            )
        if offset in ancestors or offset in chain:
            raise CyclicStructureError(f"Directory at offset {offset:08x} already decoded on this path")
        chain.add(offset)


class IfdReader:
    """Decoder for TIFF/EXIF Image File Directories."""

    def __init__(self, pointer_tags: Optional[Iterable[int]] = None, max_depth: Optional[int] = None):
        """
        Initialize the reader.

        Args:
            pointer_tags: Tags whose value is the offset of a nested
                directory. Defaults to `decoder.pointer_tags` from the
                configuration (EXIF, GPS and Interoperability IFDs).
            max_depth: Maximum sub-directory nesting. Defaults to
                `decoder.max_depth` from the configuration.
        """
        if pointer_tags is None:
            pointer_tags = config.get('decoder.pointer_tags', KNOWN_IFD_TAGS)
        if max_depth is None:
            max_depth = config.get('decoder.max_depth', DEFAULT_MAX_DEPTH)
        self.pointer_tags = frozenset(pointer_tags)
        self.max_depth = max_depth

    def read(self, stream: ByteStream) -> Directory:
        """
        Decode a complete TIFF structure starting at stream offset 0.

        Sets the stream's byte order from the header.

        Raises:
            MalformedHeaderError: For an invalid byte order mark or magic number.
            MalformedEntryError: For an entry with a negative count.
            StreamReadError: If the stream ends or an offset is unreadable.
            CyclicStructureError: For repeated or too deeply nested offsets.
        """
        stream.seek(0)
        bom = stream.read_fully(2)
        if bom == b'II':
            stream.byte_order = LITTLE_ENDIAN
        elif bom == b'MM':
            stream.byte_order = BIG_ENDIAN
        else:
            raise MalformedHeaderError(
                f"Invalid TIFF byte order mark '{bom.decode('ascii', errors='replace')}', "
                f"expected: 'II' or 'MM'"
            )

        magic = stream.read_u16()
        if magic == TIFF_MAGIC:
            big_tiff = False
            root_offset = stream.read_u32()
        elif magic == BIGTIFF_MAGIC:
            offset_size = stream.read_u16()
            reserved = stream.read_u16()
            if offset_size != BIGTIFF_OFFSET_SIZE or reserved != 0:
                raise MalformedHeaderError(
                    f"Invalid BigTIFF header: offset size {offset_size}, reserved {reserved}, "
                    f"expected: {BIGTIFF_OFFSET_SIZE}, 0"
                )
            big_tiff = True
            root_offset = stream.read_u64()
        else:
            raise MalformedHeaderError(
                f"Wrong TIFF magic: {magic:04x}, expected: {TIFF_MAGIC:04x} or {BIGTIFF_MAGIC:04x}"
            )

        logger.debug(
            f"{'BigTIFF' if big_tiff else 'TIFF'} header, byte order {bom.decode('ascii')}, "
            f"first IFD at {root_offset:08x}"
        )
        return self.read_directory(stream, root_offset, big_tiff=big_tiff)

    def read_directory(self, stream: ByteStream, offset: int, big_tiff: bool = False) -> Directory:
        """
        Decode the directory at `offset`, its chained directories and its
        sub-directories, using the stream's current byte order.

        Args:
            stream: The stream to read from.
            offset: Offset of the directory, relative to the stream base.
            big_tiff: True to read BigTIFF (64-bit) records.

        Returns:
            The flattened, expanded directory.
        """
        session = _DecodeSession(big_tiff, self.max_depth)
        return self._read_directory(stream, offset, session, depth=0, ancestors=frozenset())

    def read_entry(self, stream: ByteStream, big_tiff: bool = False) -> Entry:
        """
        Decode one entry record at the current position.

        Consumes exactly one record (12 bytes, or 20 for BigTIFF) whether the
        value is inline or stored at an offset.

        Raises:
            MalformedEntryError: If the count is negative.
        """
        record_start = stream.tell()
        tag = stream.read_u16()
        field_type = stream.read_s16()
        count = stream.read_s64() if big_tiff else stream.read_s32()

        if count < 0:
            raise MalformedEntryError(
                f"Illegal count {count} for tag {tag} type {field_type} @{stream.tell():08x}"
            )

        slot_size = 8 if big_tiff else 4
        length = value_length(field_type, count)

        if field_type not in TYPE_LENGTHS:
            self._log_invalid_type(stream, record_start, tag, field_type, count, length)
            value = Unknown(field_type, count, self._read_slot_offset(stream, big_tiff))
        elif length == 0:
            # Nothing to read, whatever the slot holds
            value = decode_value(stream, field_type, 0)
            stream.skip(slot_size)
        elif length <= slot_size:
            value = decode_value(stream, field_type, count)
            stream.skip(slot_size - length)
        else:
            value_offset = self._read_slot_offset(stream, big_tiff)
            value = self._read_value_at(stream, value_offset, field_type, count)

        return Entry(tag, field_type, value)

    def _read_directory(self, stream: ByteStream, offset: int, session: _DecodeSession, depth: int,
                        ancestors: FrozenSet[int]) -> Directory:
        shared = session.decoded.get(offset)
        if shared is not None and offset not in ancestors:
            logger.debug(f"IFD @{offset:08x}: already decoded, reusing it")
            return shared

        entries: List[Entry] = []
        chain: Set[int] = set()
        next_offset = offset

        while True:
            session.visit(next_offset, depth, ancestors, chain)
            stream.seek(next_offset)
            entry_count = stream.read_u64() if session.big_tiff else stream.read_u16()
            logger.debug(f"IFD @{next_offset:08x}: {entry_count} entries")

            for _ in range(entry_count):
                entries.append(self.read_entry(stream, session.big_tiff))

            next_offset = stream.read_u64() if session.big_tiff else stream.read_u32()
            if next_offset == 0:
                break

        self._expand_subdirectories(stream, entries, session, depth, ancestors | chain)
        directory = Directory(entries)
        session.decoded[offset] = directory
        return directory

    def _expand_subdirectories(self, stream: ByteStream, entries: List[Entry], session: _DecodeSession, depth: int,
                               ancestors: FrozenSet[int]):
        """Replace pointer-tag entries in `entries` with the directories they point to."""
        for index, entry in enumerate(entries):
            if entry.tag not in self.pointer_tags:
                continue
            try:
                offset = self._pointer_offset(entry)
                directory = self._read_directory(stream, offset, session, depth + 1, ancestors)
            except IfdFormatError as e:
                logger.warning(f"Skipping sub-directory {tag_name(entry.tag)} ({entry.tag}): {e}")
                continue
            entries[index] = Entry(entry.tag, entry.type, directory)

    @staticmethod
    def _pointer_offset(entry: Entry) -> int:
        value = entry.value
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise UnsupportedPointerTypeError(
                f"Unknown pointer type: {type(value).__name__} ({entry.value_as_string()})"
            )
        return value

    @staticmethod
    def _read_slot_offset(stream: ByteStream, big_tiff: bool) -> int:
        return stream.read_u64() if big_tiff else stream.read_u32()

    @staticmethod
    def _read_value_at(stream: ByteStream, offset: int, field_type: int, count: int):
        position = stream.tell()
        try:
            stream.seek(offset)
            return decode_value(stream, field_type, count)
        finally:
            stream.seek(position)

    @staticmethod
    def _log_invalid_type(stream: ByteStream, record_start: int, tag: int, field_type: int, count: int, length: int):
        logger.warning(
            f"Invalid field type {field_type} for tag {tag} (count {count}) @{record_start:08x}"
        )
        if logger.isEnabledFor(logging.DEBUG):
            position = stream.tell()
            try:
                stream.seek(record_start)
                data = stream.peek(position - record_start + max(20, length))
            finally:
                stream.seek(position)
            logger.debug(hex_dump(data, address=record_start))


def read_ifd(source: Union[str, Path, bytes], offset: Optional[int] = None,
             byte_order: Optional[str] = None, reader: Optional[IfdReader] = None) -> Directory:
    """
    Decode the IFD structure of a TIFF file, an EXIF blob, or a JPEG's EXIF block.

    Args:
        source: A file path or an in-memory buffer.
        offset: Decode the directory at this offset instead of reading the
            header. `byte_order` then selects the byte order.
        byte_order: '<' or '>' for `offset` decoding (default: big-endian).
        reader: The reader to use (default: a new `IfdReader`).

    Returns:
        The decoded directory.
    """
    reader = reader or IfdReader()
    if isinstance(source, (bytes, bytearray)):
        return _read_file(io.BytesIO(source), offset, byte_order, reader)
    with open(source, 'rb') as fp:
        return _read_file(fp, offset, byte_order, reader)


def _read_file(fp: BinaryIO, offset: Optional[int], byte_order: Optional[str], reader: IfdReader) -> Directory:
    base_offset = find_exif_offset(fp) or 0
    if base_offset:
        logger.debug(f"JPEG EXIF block found at {base_offset:08x}")
    stream = ByteStream(fp, base_offset=base_offset)
    if offset is None:
        return reader.read(stream)
    stream.byte_order = byte_order or BIG_ENDIAN
    return reader.read_directory(stream, offset)
