#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
CSFTool 核心模块

提供二进制 I/O 封装、字符串编解码、数据结构定义和字符串表模型。
"""

from .binary_io import BinaryReader, BinaryWriter
from .schema import FileHeader, LabelHeader, LanguageId, RecordKind
from .model import StringTable, Label, StringRecord

__all__ = [
    "BinaryReader",
    "BinaryWriter",
    "FileHeader",
    "LabelHeader",
    "LanguageId",
    "RecordKind",
    "StringTable",
    "Label",
    "StringRecord",
]
