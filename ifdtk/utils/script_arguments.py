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
Dataclass-based Argument Models for IFDTK Tools.

This module defines strongly-typed dataclasses for parsing and validating the
command-line arguments for each tool. It uses `__post_init__` for validation
and resolving configuration defaults, ensuring that the core logic receives
clean and validated inputs.

Classes:
    BaseArguments: A base dataclass for common script arguments.
    ReadArguments: Arguments for the read_directory tool.
"""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from ifdtk.utils.byte_stream import BIG_ENDIAN, LITTLE_ENDIAN
from ifdtk.utils.config_loader import config

logger = logging.getLogger(__name__)

BYTE_ORDER_MARKS = {'II': LITTLE_ENDIAN, 'MM': BIG_ENDIAN}

@dataclass
class BaseArguments:
    """A base dataclass for common script arguments."""
    input_path: Optional[Path] = None
    log_file: Optional[Path] = None
    verbose: bool = False

    def __post_init__(self):
        """Coerce path-like arguments to Path objects."""
        if self.input_path and isinstance(self.input_path, str):
            self.input_path = Path(self.input_path)
        if self.log_file and isinstance(self.log_file, str):
            self.log_file = Path(self.log_file)

    def handle_error(self, message: str):
        """Logs an error and raises ValueError."""
        logger.error(message)
        raise ValueError(message)

@dataclass
class ReadArguments(BaseArguments):
    """Arguments for the read_directory tool."""
    offset: Optional[int] = None
    byte_order: Optional[str] = None
    hex_limit: Optional[int] = None
    hex_width: Optional[int] = None

    def __post_init__(self):
        """Validation for read_directory arguments."""
        super().__post_init__()
        try:
            self._validate_read()
        except ValueError as e:
            self.handle_error(str(e))

    def _validate_read(self):
        """Perform validation checks and fill defaults from the configuration."""
        if not self.input_path:
            raise ValueError("An input file is required.")
        if not self.input_path.exists():
            raise ValueError(f"Input file not found: {self.input_path}")
        if self.offset is not None and self.offset < 0:
            raise ValueError(f"Directory offset must be non-negative, got {self.offset}")
        if self.byte_order is not None:
            self.byte_order = self.byte_order.upper()
            if self.byte_order not in BYTE_ORDER_MARKS:
                raise ValueError(f"Byte order must be 'II' or 'MM', got '{self.byte_order}'")
            if self.offset is None:
                raise ValueError("A byte order can only be given together with a directory offset.")
        if self.hex_limit is None:
            self.hex_limit = config.get('report.hex_dump_limit', 128)
        if self.hex_limit < 0:
            raise ValueError(f"Hex dump limit must be non-negative, got {self.hex_limit}")
        if self.hex_width is None:
            self.hex_width = config.get('report.hex_dump_width', 32)
        if self.hex_width <= 0 or self.hex_width % 2:
            raise ValueError(f"Hex dump width must be a positive even number, got {self.hex_width}")

    @property
    def stream_byte_order(self) -> Optional[str]:
        """The byte order as a stream byte order code ('<' or '>')."""
        return BYTE_ORDER_MARKS.get(self.byte_order) if self.byte_order else None
