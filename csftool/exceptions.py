#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
CSFTool 异常定义

所有异常均继承自 CsfError，便于统一捕获。
I/O 失败直接使用内置的 OSError / EOFError，不再额外包装。
"""

from typing import Optional


class CsfError(Exception):
    """CSFTool 基础异常"""
    pass


class InvalidFormatError(CsfError):
    """
    文件格式无效异常

    当魔法数不符或字节流结构不一致时抛出。
    """
    def __init__(
        self,
        message: str,
        filename: Optional[str] = None,
        expected: Optional[str] = None,
        actual: Optional[str] = None
    ):
        self.filename = filename
        self.expected = expected
        self.actual = actual
        if expected and actual:
            message = f"{message}: 期望 {expected}, 实际 {actual}"
        super().__init__(message)


class EncodingError(CsfError):
    """
    编码异常

    当标签名无法以 ASCII 写出，或记录标签不是 4 字节时抛出。
    """
    def __init__(self, field: str, value: str, reason: str):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"无法编码{field} {value!r}: {reason}")
