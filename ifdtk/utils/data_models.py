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
Data Models for IFD ToolKit.

This module defines the immutable data classes produced by the IFD decoder.

Value classes:
    Rational: A numerator/denominator pair, stored without reduction
    Unknown: Placeholder for a value with an unrecognized field type

Directory classes:
    Entry: A single tag/type/value record
    Directory: An ordered sequence of entries, including chained directories

`Value` is the union of every representation an entry value can take.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple, Union, overload

import numpy as np

from ifdtk.utils.tiff_constants import tag_name, type_name


@dataclass(frozen=True)
class Rational:
    """
    A TIFF RATIONAL or SRATIONAL value.

    The fraction is kept exactly as stored; it is never reduced and the
    decoder never divides. Converting to float is left to the caller.

    Example:
        >>> r = Rational(72, 1)
        >>> float(r)
        72.0
        >>> Rational(2, 4) == Rational(1, 2)
        False
    """
    numerator: int
    denominator: int

    def __float__(self) -> float:
        return self.numerator / self.denominator

    def __str__(self) -> str:
        return f"{self.numerator}/{self.denominator}"


@dataclass(frozen=True)
class Unknown:
    """
    A value whose field type code is not recognized.

    Attributes:
        type: The field type code found in the entry record
        count: The declared number of values
        offset: Stream offset where the value data would start
    """
    type: int
    count: int
    offset: int

    def __str__(self) -> str:
        return f"Unknown(type={self.type}, count={self.count}, offset=0x{self.offset:08x})"


Value = Union[
    int,
    float,
    bytes,
    str,
    np.ndarray,
    Rational,
    Tuple[Rational, ...],
    Unknown,
    'Directory',
]


def _values_equal(left: Value, right: Value) -> bool:
    """Compare two values; numpy arrays must match in dtype and content."""
    if isinstance(left, np.ndarray) or isinstance(right, np.ndarray):
        return (isinstance(left, np.ndarray) and isinstance(right, np.ndarray)
                and left.dtype == right.dtype and np.array_equal(left, right))
    return type(left) is type(right) and left == right


@dataclass(frozen=True, eq=False)
class Entry:
    """
    Represents a single IFD entry.

    Attributes:
        tag: The tag number (unsigned 16-bit)
        type: The field type code as written in the entry record
        value: The decoded value, or a nested Directory for pointer tags

    Example:
        >>> entry = Entry(tag=256, type=3, value=1024)
        >>> entry.name
        'ImageWidth'
        >>> entry.type_name
        'SHORT'
    """
    tag: int
    type: int
    value: Value

    @property
    def declared_type(self) -> int:
        """The field type code as declared in the file."""
        return self.type

    @property
    def name(self) -> str:
        return tag_name(self.tag)

    @property
    def type_name(self) -> str:
        return type_name(self.type)

    def is_directory(self) -> bool:
        return isinstance(self.value, Directory)

    def value_as_string(self, max_items: int = 16) -> str:
        """
        Format the value for display.

        Arrays and byte strings longer than `max_items` are truncated.
        """
        value = self.value
        if isinstance(value, Directory):
            return f"<Directory: {len(value)} entries>"
        if isinstance(value, bytes):
            if len(value) > max_items:
                return f"<{len(value)} bytes> {value[:max_items].hex(' ')} ..."
            return f"<{len(value)} bytes> {value.hex(' ')}"
        if isinstance(value, np.ndarray):
            items = [str(v) for v in value[:max_items].tolist()]
            suffix = ', ...' if value.size > max_items else ''
            return f"[{', '.join(items)}{suffix}]"
        if isinstance(value, tuple):
            items = [str(v) for v in value[:max_items]]
            suffix = ', ...' if len(value) > max_items else ''
            return f"[{', '.join(items)}{suffix}]"
        if isinstance(value, str):
            return repr(value)
        return str(value)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Entry):
            return NotImplemented
        return (self.tag == other.tag
                and self.type == other.type
                and _values_equal(self.value, other.value))

    def __hash__(self) -> int:
        # Arrays hash by dtype and shape only, which equal entries share
        value = self.value
        if isinstance(value, np.ndarray):
            value = (value.dtype.str, value.shape)
        return hash((self.tag, self.type, value))

    def __str__(self) -> str:
        return f"{self.name} ({self.tag}): {self.value_as_string()} ({self.type_name})"


class Directory(Sequence):
    """
    An immutable, ordered collection of IFD entries.

    Order is the decode order: entries of a directory first, followed by the
    entries of any directories chained to it. Tags are not required to be
    unique.
    """

    def __init__(self, entries=()):
        self._entries: Tuple[Entry, ...] = tuple(entries)

    @overload
    def __getitem__(self, index: int) -> Entry: ...

    @overload
    def __getitem__(self, index: slice) -> 'Directory': ...

    def __getitem__(self, index):
        if isinstance(index, slice):
            return Directory(self._entries[index])
        return self._entries[index]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Directory):
            return NotImplemented
        return self._entries == other._entries

    def __hash__(self) -> int:
        return hash(self._entries)

    def __repr__(self) -> str:
        return f"Directory({list(self._entries)!r})"

    @property
    def entries(self) -> Tuple[Entry, ...]:
        return self._entries

    def tags(self) -> List[int]:
        """Return the tag numbers in decode order."""
        return [entry.tag for entry in self._entries]

    def get_entry_by_id(self, tag: int) -> Optional[Entry]:
        """Return the first entry with the given tag, or None."""
        for entry in self._entries:
            if entry.tag == tag:
                return entry
        return None

    def get_entries_by_id(self, tag: int) -> List[Entry]:
        """Return all entries with the given tag, in decode order."""
        return [entry for entry in self._entries if entry.tag == tag]
