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
XML Formatting Utilities.

Pretty-printing for XML carried in IFD entries, such as XMP packets (tag 700).
"""
import logging
import re
from typing import Union

import lxml.etree as etree

logger = logging.getLogger(__name__)


def _to_text(data: Union[bytes, str]) -> str:
    if isinstance(data, bytes):
        data = data.decode('utf-8', errors='replace')
    if not isinstance(data, str):
        raise TypeError(f"Expected XML text or bytes, got {type(data).__name__}")
    # XMP packets are often padded with NULs and whitespace
    return data.strip(' \t\r\n\x00')


def pretty_print_xml(data: Union[bytes, str], indent: str = '  ') -> str:
    """
    Re-indent an XML document.

    Args:
        data: XML text or UTF-8 encoded bytes.
        indent: Indentation string for each nesting level.

    Returns:
        The indented XML of the root element, or the input text unchanged if
        it is not well-formed.
    """
    xml_string = _to_text(data)
    if not xml_string:
        return xml_string

    # The declaration may name another encoding, but the text is already decoded
    xml_string_for_parsing = re.sub(r'^<\?xml[^>]*\?>', '', xml_string, count=1).lstrip()

    try:
        parser = etree.XMLParser(remove_blank_text=True, remove_comments=False, strip_cdata=False)
        root = etree.fromstring(xml_string_for_parsing.encode('utf-8'), parser)
    except etree.XMLSyntaxError as e:
        logger.debug(f"Could not parse XML for pretty-printing: {e}")
        return xml_string

    etree.indent(root, space=indent)
    return etree.tostring(root, encoding='unicode')
