#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
CSFTool - 零依赖的 CSF 字符串表读写库

支持 CSF 二进制格式 (Red Alert 2 / Generals) 与 LABEL|VALUE 文本行格式互转
"""

__version__ = "0.1.0"

# 异常类
from .exceptions import (
    CsfError,
    InvalidFormatError,
    EncodingError,
)

# 数据模型
from .core import StringTable, Label, StringRecord, LanguageId, RecordKind

# 二进制读写
from .csf import CsfReader, CsfWriter, read_file, read_bytes, write_file, to_bytes

# 文本行格式
from .text_lines import (
    parse_line,
    format_line,
    import_lines,
    export_lines,
    read_text_file,
    write_text_file,
)

# 工具函数
from .utils import default_text_path

__all__ = [
    # 版本
    "__version__",
    # 异常
    "CsfError",
    "InvalidFormatError",
    "EncodingError",
    # 数据模型
    "StringTable",
    "Label",
    "StringRecord",
    "LanguageId",
    "RecordKind",
    # 二进制读写
    "CsfReader",
    "CsfWriter",
    "read_file",
    "read_bytes",
    "write_file",
    "to_bytes",
    # 文本行
    "parse_line",
    "format_line",
    "import_lines",
    "export_lines",
    "read_text_file",
    "write_text_file",
    # 工具
    "default_text_path",
]
