#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# ******************************************************************************
# Project: IFD ToolKit (IFDTK)
# Author: Eric Robeck <robeckgeo@gmail.com>
#
# Copyright (c) 2025, Eric Robeck
# Licensed under the MIT License
# ******************************************************************************

"""Allow running the toolkit with `python -m ifdtk`."""

from ifdtk.main import main

if __name__ == "__main__":
    main()
