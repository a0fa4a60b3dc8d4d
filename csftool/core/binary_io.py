#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
二进制 I/O 封装

提供 BinaryWriter 和 BinaryReader 类，封装所有底层文件操作，
使上层模块不需要直接操作文件指针。CSF 格式全部为 Little-Endian 的
有符号 32 位整数与 4 字节标记。
"""

import struct
from typing import BinaryIO, Tuple, Any


class BinaryWriter:
    """
    二进制写入器

    封装所有底层写操作，提供类型化的写入方法。
    上层模块只需调用 write_i32() 等方法，无需关心 struct.pack 细节。
    """

    def __init__(self, file: BinaryIO):
        """
        初始化写入器

        Args:
            file: 以 'wb' 模式打开的文件对象 (或 BytesIO)
        """
        self._file = file
        self._position = 0

    @property
    def position(self) -> int:
        """当前写入位置"""
        return self._position

    # ==================== 原始写入 ====================

    def write_bytes(self, data: bytes) -> int:
        """
        写入原始字节

        Args:
            data: 要写入的字节

        Returns:
            写入的字节数
        """
        written = self._file.write(data)
        self._position += written
        return written

    def write_struct(self, fmt: str, *values: Any) -> int:
        """
        按 struct 格式写入

        Args:
            fmt: struct 格式字符串
            *values: 要写入的值

        Returns:
            写入的字节数
        """
        data = struct.pack(fmt, *values)
        return self.write_bytes(data)

    # ==================== 类型化写入 ====================

    def write_i32(self, value: int) -> int:
        """写入有符号 32 位整数 (Little-Endian)"""
        return self.write_struct('<i', value)

    def write_tag(self, tag: bytes) -> int:
        """
        写入 4 字节标记

        Args:
            tag: 恰好 4 字节的标记

        Raises:
            ValueError: 标记长度不是 4
        """
        if len(tag) != 4:
            raise ValueError(f"标记必须为 4 字节, 实际 {len(tag)} 字节")
        return self.write_bytes(tag)


class BinaryReader:
    """
    二进制读取器

    封装所有底层读操作，提供类型化的读取方法。
    """

    def __init__(self, file: BinaryIO):
        """
        初始化读取器

        Args:
            file: 以 'rb' 模式打开的文件对象 (或 BytesIO)
        """
        self._file = file
        self._position = 0

    @property
    def position(self) -> int:
        """当前读取位置"""
        return self._position

    # ==================== 原始读取 ====================

    def read_bytes(self, size: int) -> bytes:
        """
        读取指定字节数

        Args:
            size: 要读取的字节数

        Returns:
            读取的字节

        Raises:
            EOFError: 文件不足请求的字节数
        """
        if size < 0:
            raise ValueError(f"无效的读取长度: {size} (位置 {self._position})")
        data = self._file.read(size)
        if len(data) < size:
            raise EOFError(
                f"文件结束: 在位置 {self._position} 期望读取 {size} 字节，"
                f"实际只有 {len(data)} 字节"
            )
        self._position += size
        return data

    def read_available(self, size: int) -> bytes:
        """
        读取最多 size 字节，不足时不抛出异常

        用于探测流结束：返回空字节表示已到达末尾。
        """
        data = self._file.read(size)
        self._position += len(data)
        return data

    def read_struct(self, fmt: str) -> Tuple[Any, ...]:
        """
        按 struct 格式读取

        Args:
            fmt: struct 格式字符串

        Returns:
            解包后的值元组
        """
        size = struct.calcsize(fmt)
        data = self.read_bytes(size)
        return struct.unpack(fmt, data)

    # ==================== 类型化读取 ====================

    def read_i32(self) -> int:
        """读取有符号 32 位整数 (Little-Endian)"""
        return self.read_struct('<i')[0]

    def read_tag(self) -> bytes:
        """读取 4 字节标记"""
        return self.read_bytes(4)

