#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
CSF 二进制格式读写
"""

from .reader import CsfReader, read_file, read_bytes
from .writer import CsfWriter, write_file, to_bytes

__all__ = [
    "CsfReader",
    "CsfWriter",
    "read_file",
    "read_bytes",
    "write_file",
    "to_bytes",
]
