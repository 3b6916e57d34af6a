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
Logging helpers for the IFD ToolKit command line.

Library modules only create module loggers; the command line configures the
root logger once with `setup_logger` and releases it with `shutdown_logger`.
Console output is the bare message (the report itself is logged), while the
optional log file records timestamps, logger names and levels.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

CONSOLE_FORMAT = '%(message)s'
FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def level_from_name(name: Optional[str], default: int = logging.INFO) -> int:
    """Convert a level name such as 'DEBUG' to its logging constant."""
    if not name:
        return default
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else default


def _console_handler() -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    return handler


def _file_handler(log_file: str, level: int) -> logging.Handler:
    path = Path(log_file)
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, mode='w', encoding='utf-8')
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(FILE_FORMAT))
    return handler


def setup_logger(log_file: Optional[str] = None, level: int = logging.INFO) -> logging.Logger:
    """
    Configure the root logger for a command-line run.

    Existing root handlers are replaced.

    Args:
        log_file (str, optional): Path of a log file, overwritten on each run.
        level (int): The logging level for the console and the file.

    Returns:
        logging.Logger: The root logger.
    """
    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    root.addHandler(_console_handler())
    if log_file:
        root.addHandler(_file_handler(log_file, level))
    return root


def shutdown_logger(logger: Optional[logging.Logger]):
    """Flush, close and detach every handler of `logger` so log files are released."""
    if logger is None:
        return
    for handler in list(logger.handlers):
        handler.flush()
        handler.close()
        logger.removeHandler(handler)
