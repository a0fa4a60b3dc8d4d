#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
CSF 数据结构定义

定义魔法数、记录标记、语言 ID 以及 FileHeader、LabelHeader 等定长结构。
"""

import struct
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import ClassVar


# ==================== 常量定义 ====================

# 文件魔法数 (读取时不区分大小写)
MAGIC = b' FSC'

# 标签标记
LABEL_TAG = b' LBL'

# 字符串记录标记
STRING_TAG = ' RTS'
STRING_EXTRA_TAG = 'WRTS'

# 记录标记的字节编码，latin-1 保证任意 4 字节原样往返
TAG_ENCODING = 'latin-1'

# 标签名编码
NAME_ENCODING = 'ascii'

# 新建字符串表的默认格式版本
DEFAULT_FORMAT_VERSION = 3

# 文件中所有整数字段均为有符号 32 位
INT32_MIN = -2 ** 31
INT32_MAX = 2 ** 31 - 1


# ==================== 语言 ID ====================

class LanguageId(IntEnum):
    """
    字符串表语言 ID

    有效范围为 -1..9，UNKNOWN 用于表示读取到的越界值。
    """
    LANGUAGE_INDEPENDENT = -1
    ENGLISH_US = 0
    ENGLISH_UK = 1
    GERMAN = 2
    FRENCH = 3
    SPANISH = 4
    ITALIAN = 5
    JAPANESE = 6
    JABBERWOCKIE = 7
    KOREAN = 8
    CHINESE = 9
    UNKNOWN = 10

    @classmethod
    def is_valid(cls, value: int) -> bool:
        """原始整数是否落在有效范围 [-1, 9] 内"""
        return cls.LANGUAGE_INDEPENDENT <= value <= cls.CHINESE

    @classmethod
    def from_raw(cls, value: int) -> 'LanguageId':
        """
        从原始整数构造语言 ID

        越界值映射为 UNKNOWN。

        Args:
            value: 文件头中的原始语言 ID

        Returns:
            LanguageId 成员
        """
        if not cls.is_valid(value):
            return cls.UNKNOWN
        return cls(value)


# ==================== 记录类型 ====================

class RecordKind(Enum):
    """字符串记录类型"""
    PLAIN = STRING_TAG
    WITH_EXTRA = STRING_EXTRA_TAG


# ==================== 文件头 ====================

@dataclass
class FileHeader:
    """
    文件头 (24 bytes)

    位于文件开头。label_count 与 string_count 在读取时仅作参考，
    写入时总是由实际数据重新计算。
    """
    FORMAT: ClassVar[str] = '<4siii4si'
    SIZE: ClassVar[int] = 24

    magic: bytes = MAGIC
    version: int = DEFAULT_FORMAT_VERSION
    label_count: int = 0
    string_count: int = 0
    reserved: bytes = b'\x00\x00\x00\x00'
    language: int = LanguageId.ENGLISH_US

    def pack(self) -> bytes:
        """序列化为字节"""
        return struct.pack(
            self.FORMAT,
            self.magic,
            self.version,
            self.label_count,
            self.string_count,
            self.reserved,
            int(self.language)
        )

    @classmethod
    def unpack(cls, data: bytes) -> 'FileHeader':
        """从字节反序列化"""
        values = struct.unpack(cls.FORMAT, data)
        return cls(
            magic=values[0],
            version=values[1],
            label_count=values[2],
            string_count=values[3],
            reserved=values[4],
            language=values[5]
        )

    @staticmethod
    def is_valid_magic(magic: bytes) -> bool:
        """魔法数是否为 ' FSC' (不区分大小写)"""
        return len(magic) == len(MAGIC) and magic.upper() == MAGIC


# ==================== 标签头 ====================

@dataclass
class LabelHeader:
    """
    标签头 (12 bytes)

    紧随其后的是 name_length 字节的 ASCII 标签名。
    """
    FORMAT: ClassVar[str] = '<4sii'
    SIZE: ClassVar[int] = 12

    tag: bytes = LABEL_TAG
    string_count: int = 0
    name_length: int = 0

    def pack(self) -> bytes:
        """序列化为字节"""
        return struct.pack(self.FORMAT, self.tag, self.string_count, self.name_length)

    @classmethod
    def unpack(cls, data: bytes) -> 'LabelHeader':
        """从字节反序列化"""
        tag, string_count, name_length = struct.unpack(cls.FORMAT, data)
        return cls(tag=tag, string_count=string_count, name_length=name_length)
