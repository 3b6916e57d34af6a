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
Registry of Foreign Metadata Decoders.

Some IFD entries carry a complete metadata block in another format (XMP,
IPTC, ICC profiles, Photoshop resources). The IFD reader leaves these as raw
values. Callers register a decoder per tag here and apply it to entries
after decoding.

Example:
    >>> registry = DecoderRegistry()
    >>> registry.register(TAG_XMP, pretty_print_xml)
    >>> registry.decode(Entry(700, 7, b'<x:xmpmeta xmlns:x="adobe:ns:meta/"/>'))
    '<x:xmpmeta xmlns:x="adobe:ns:meta/"/>'
"""

import logging
from typing import Any, Callable, Dict, Optional

from ifdtk.utils.data_models import Entry
from ifdtk.utils.tiff_constants import TAG_XMP, tag_name
from ifdtk.utils.xml_formatter import pretty_print_xml

logger = logging.getLogger(__name__)

ForeignDecoder = Callable[[Any], Any]


class DecoderRegistry:
    """Maps tags to decoders for the raw values of those tags."""

    def __init__(self):
        self._decoders: Dict[int, ForeignDecoder] = {}

    def register(self, tag: int, decoder: ForeignDecoder):
        """Register `decoder` for `tag`, replacing any previous decoder."""
        self._decoders[tag] = decoder

    def unregister(self, tag: int):
        self._decoders.pop(tag, None)

    def is_registered(self, tag: int) -> bool:
        return tag in self._decoders

    def decode(self, entry: Entry) -> Optional[Any]:
        """
        Apply the decoder registered for the entry's tag.

        Returns:
            The decoded value, or None if no decoder is registered, the
            entry holds a nested directory, or decoding fails.
        """
        decoder = self._decoders.get(entry.tag)
        if decoder is None or entry.is_directory():
            return None
        try:
            return decoder(entry.value)
        except (ValueError, TypeError) as e:
            logger.warning(f"Could not decode {tag_name(entry.tag)} ({entry.tag}): {e}")
            return None


def default_registry() -> DecoderRegistry:
    """Return a registry with the built-in decoders (XMP)."""
    registry = DecoderRegistry()
    registry.register(TAG_XMP, pretty_print_xml)
    return registry
