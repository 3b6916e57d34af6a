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
Unit tests for data models.

Tests cover:
- Rational and Unknown value classes
- Entry formatting and equality
- Directory sequence behavior and tag lookups
"""

import dataclasses
from types import SimpleNamespace

import numpy as np
import pytest

from ifdtk.utils.data_models import Directory, Entry, Rational, Unknown
from ifdtk.utils.tiff_constants import FieldType


@pytest.mark.unit
class TestRational:
    """Test Rational value class."""

    def test_float_conversion(self):
        assert float(Rational(1, 4)) == 0.25

    def test_not_reduced(self):
        assert Rational(2, 4) != Rational(1, 2)
        assert str(Rational(2, 4)) == '2/4'

    def test_zero_denominator_kept(self):
        r = Rational(1, 0)
        assert r.denominator == 0
        with pytest.raises(ZeroDivisionError):
            float(r)

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            Rational(1, 2).numerator = 3


@pytest.mark.unit
class TestUnknown:
    """Test Unknown placeholder."""

    def test_fields(self):
        unknown = Unknown(255, 3, 0x40)
        assert (unknown.type, unknown.count, unknown.offset) == (255, 3, 64)

    def test_str(self):
        assert str(Unknown(255, 3, 0x40)) == 'Unknown(type=255, count=3, offset=0x00000040)'


@pytest.mark.unit
class TestEntry:
    """Test Entry class."""

    def test_names(self):
        entry = Entry(256, FieldType.SHORT, 1024)
        assert entry.name == 'ImageWidth'
        assert entry.type_name == 'SHORT'
        assert entry.declared_type == 3

    def test_unknown_tag_and_type_names(self, monkeypatch):
        empty = SimpleNamespace(TAGS={}, GPS_TAGS={}, IOP_TAGS={}, EXIF_TAGS={})
        monkeypatch.setattr('ifdtk.utils.tiff_constants.TIFF', empty)
        entry = Entry(256, 99, Unknown(99, 1, 0))
        assert entry.name == 'UnknownTag (256)'
        assert entry.type_name == 'UNKNOWN(99)'

    def test_str(self):
        assert str(Entry(256, FieldType.SHORT, 1024)) == 'ImageWidth (256): 1024 (SHORT)'

    def test_string_value_is_quoted(self):
        assert Entry(271, FieldType.ASCII, 'Acme').value_as_string() == "'Acme'"

    def test_bytes_value(self):
        assert Entry(37500, FieldType.UNDEFINED, b'\x01\x02').value_as_string() == '<2 bytes> 01 02'

    def test_long_bytes_value_truncated(self):
        text = Entry(37500, FieldType.UNDEFINED, bytes(20)).value_as_string(max_items=4)
        assert text == '<20 bytes> 00 00 00 00 ...'

    def test_array_value(self):
        entry = Entry(258, FieldType.SHORT, np.array([8, 8, 8], dtype=np.int32))
        assert entry.value_as_string() == '[8, 8, 8]'
        assert entry.value_as_string(max_items=2) == '[8, 8, ...]'

    def test_rational_tuple_value(self):
        entry = Entry(2, FieldType.RATIONAL, (Rational(41, 1), Rational(24, 1)))
        assert entry.value_as_string() == '[41/1, 24/1]'

    def test_directory_value(self):
        nested = Directory([Entry(0, FieldType.BYTE, b'\x02\x03\x00\x00')])
        entry = Entry(34853, FieldType.LONG, nested)
        assert entry.is_directory()
        assert entry.value_as_string() == '<Directory: 1 entries>'

    def test_equality_with_arrays(self):
        a = Entry(258, 3, np.array([8, 8], dtype=np.int32))
        b = Entry(258, 3, np.array([8, 8], dtype=np.int32))
        c = Entry(258, 3, np.array([8, 8], dtype=np.int64))
        assert a == b
        assert a != c

    def test_equality_distinguishes_value_types(self):
        assert Entry(256, 3, 1) != Entry(256, 3, b'\x01')
        assert Entry(256, 3, 1) != Entry(256, 4, 1)

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            Entry(256, 3, 1).value = 2

    def test_hashable(self):
        scalar = {Entry(256, 3, 1024), Entry(256, 3, 1024)}
        assert len(scalar) == 1
        arrays = {
            Entry(258, 3, np.array([8, 8], dtype=np.int32)),
            Entry(258, 3, np.array([8, 8], dtype=np.int32)),
            Entry(258, 3, np.array([8, 16], dtype=np.int32)),
        }
        assert len(arrays) == 2

    def test_hash_with_directory_value(self):
        nested = Directory([Entry(0, FieldType.BYTE, b"\x02\x03\x00\x00")])
        a = Entry(34853, FieldType.LONG, nested)
        b = Entry(34853, FieldType.LONG, Directory(list(nested)))
        assert hash(a) == hash(b)


@pytest.mark.unit
class TestDirectory:
    """Test Directory class."""

    @pytest.fixture
    def directory(self):
        return Directory([
            Entry(256, 3, 1024),
            Entry(257, 3, 768),
            Entry(256, 3, 512),
        ])

    def test_sequence(self, directory):
        assert len(directory) == 3
        assert directory[1].tag == 257
        assert [entry.tag for entry in directory] == [256, 257, 256]
        assert Entry(257, 3, 768) in directory

    def test_slice_returns_directory(self, directory):
        head = directory[:2]
        assert isinstance(head, Directory)
        assert head.tags() == [256, 257]

    def test_get_entry_by_id_returns_first(self, directory):
        assert directory.get_entry_by_id(256).value == 1024
        assert directory.get_entry_by_id(999) is None

    def test_get_entries_by_id(self, directory):
        assert [entry.value for entry in directory.get_entries_by_id(256)] == [1024, 512]
        assert directory.get_entries_by_id(999) == []

    def test_equality(self, directory):
        assert directory == Directory(list(directory))
        assert directory != directory[:2]

    def test_hashable(self, directory):
        assert hash(directory) == hash(Directory(list(directory)))
        assert len({directory, Directory(list(directory)), directory[:2]}) == 2

    def test_immutable(self, directory):
        assert isinstance(directory.entries, tuple)
        with pytest.raises(TypeError):
            directory[0] = Entry(1, 1, 1)

    def test_empty(self):
        assert len(Directory()) == 0
        assert Directory().tags() == []
