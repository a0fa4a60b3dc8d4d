#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
字符串编解码

CSF 中所有字符串数据均以 UTF-16LE 编码后逐字节取反 (按位 NOT) 存储。
取反是自逆运算，因此编码与解码共用同一个 complement()。
"""

# 逐字节取反查找表: 0x00 -> 0xFF, 0x01 -> 0xFE, ...
_COMPLEMENT_TABLE = bytes(range(255, -1, -1))

# 标签名查找表: 非 ASCII 字节映射为 '?'
_NAME_TABLE = bytes(range(128)) + b'?' * 128

TEXT_ENCODING = 'utf-16-le'


def complement(data: bytes) -> bytes:
    """
    逐字节按位取反

    Args:
        data: 原始字节

    Returns:
        取反后的字节
    """
    return data.translate(_COMPLEMENT_TABLE)


def decode(data: bytes) -> str:
    """
    解码磁盘上的字符串数据

    空字节返回空字符串。长度为奇数或含孤立代理项的数据
    会以 U+FFFD 替换，而不是抛出异常。

    Args:
        data: 取反后的 UTF-16LE 字节

    Returns:
        解码后的文本
    """
    if not data:
        return ""
    return complement(data).decode(TEXT_ENCODING, errors='replace')


def encode(text: str) -> bytes:
    """
    编码文本为磁盘格式

    空文本返回空字节，调用方据此不写出任何数据字节。

    Args:
        text: 要编码的文本

    Returns:
        取反后的 UTF-16LE 字节
    """
    if not text:
        return b""
    return complement(text.encode(TEXT_ENCODING, errors='surrogatepass'))


def decode_name(data: bytes) -> str:
    """
    解码 ASCII 标签名

    0x80 及以上的字节替换为 '?'，保证结果总能重新以 ASCII 写出。

    Examples:
        >>> decode_name(b'A\\xe9B')
        'A?B'
    """
    return data.translate(_NAME_TABLE).decode('ascii')


def char_length(text: str) -> int:
    """
    计算文本的 UTF-16 码元数量

    即磁盘上主字符串长度字段的值。BMP 以外的字符占两个码元。
    """
    if not text:
        return 0
    return len(text.encode(TEXT_ENCODING, errors='surrogatepass')) // 2
