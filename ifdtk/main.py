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
Command-line interface for the IFD ToolKit (IFDTK).

`ifdtk read` decodes the directory chain of a TIFF, BigTIFF, EXIF or JPEG
file and prints one line per entry. Decode failures end the run with exit
status 1; argument errors exit with status 2 from argparse.
"""
import argparse
import logging
import sys
from importlib import metadata
from pathlib import Path
from ifdtk.utils.config_loader import config
from ifdtk.utils.exceptions import IfdError
from ifdtk.utils.log_helpers import level_from_name, setup_logger, shutdown_logger
from ifdtk.utils.script_arguments import ReadArguments

try:
    __version__ = metadata.version("ifd-toolkit")
except metadata.PackageNotFoundError:
    __version__ = "0.0.0-dev"


def offset_value(value: str) -> int:
    """Convert a decimal or 0x-prefixed hexadecimal offset to an integer."""
    base = 16 if value.lower().startswith('0x') else 10
    digits = value[2:] if base == 16 else value
    try:
        return int(digits, base)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid offset: '{value}'")


def _run_read(args_dict: dict):
    from ifdtk.tools.read_directory import read_directory
    read_directory(ReadArguments(**args_dict))


TOOLS = {
    'read': _run_read,
}


def build_parser() -> argparse.ArgumentParser:
    """Create the `ifdtk` parser with one sub-command per tool."""
    parser = argparse.ArgumentParser(
        prog='ifdtk',
        description='Decode TIFF Image File Directories.',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    tools = parser.add_subparsers(dest='tool', metavar='TOOL', help='Tool to run')
    tools.required = True

    read_parser = tools.add_parser(
        'read',
        help='Decode and print the Image File Directories of a TIFF, EXIF or JPEG file.',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    read_parser.add_argument('-i', '--input', required=True, type=Path, dest='input_path', help='Path to the input file.')
    read_parser.add_argument('-o', '--offset', type=offset_value, default=None, dest='offset', help='Decode the single directory at this offset (decimal or 0x hex) instead of reading the file header.')
    read_parser.add_argument('-b', '--byte-order', type=str.upper, choices=['II', 'MM'], default=None, dest='byte_order', help="Byte order for --offset: 'II' (little-endian) or 'MM' (big-endian, the default).")
    read_parser.add_argument('--hex-limit', type=int, default=None, dest='hex_limit', help='Maximum bytes to hex-dump per binary value (default from config.toml).')
    read_parser.add_argument('--hex-width', type=int, default=None, dest='hex_width', help='Bytes per hex dump line (default from config.toml).')
    read_parser.add_argument('--log-file', type=Path, dest='log_file', help='Path to a log file for debugging.')
    read_parser.add_argument('-v', '--verbose', action='store_true', dest='verbose', help='Enable verbose logging.')
    return parser


def main(argv=None):
    """Parse `argv`, configure logging and run the selected tool."""
    args = build_parser().parse_args(argv)
    options = vars(args).copy()
    run_tool = TOOLS[options.pop('tool')]

    if args.verbose:
        level = logging.DEBUG
    else:
        level = level_from_name(config.get('logging.level'))
    log_file = args.log_file or config.get('logging.file') or None
    root = setup_logger(log_file=str(log_file) if log_file else None, level=level)

    try:
        run_tool(options)
    except (IfdError, ValueError) as e:
        root.error(f"Error: {e}", exc_info=args.verbose)
        sys.exit(1)
    except Exception as e:
        root.exception(f"Unexpected failure in '{args.tool}': {e}")
        sys.exit(1)
    finally:
        shutdown_logger(root)


if __name__ == "__main__":
    main()
