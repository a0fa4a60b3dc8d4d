#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
pytest 全局配置

提供共享 fixtures 和手工构造 CSF 字节的测试工具。
"""

import struct
from typing import List, Optional, Tuple

import pytest


# ==================== 手工构造 CSF ====================

def encode_text(text: str) -> bytes:
    """独立于被测代码的编码实现: UTF-16LE 后逐字节取反"""
    return bytes(b ^ 0xFF for b in text.encode('utf-16-le'))


def build_string(tag: bytes, text: str, extra: Optional[bytes] = None) -> bytes:
    """
    构造一条字符串记录

    Args:
        tag: 4 字节记录标记
        text: 主字符串 (自动编码)
        extra: 已编码的附加数据，仅 WRTS 需要
    """
    data = encode_text(text)
    out = tag + struct.pack('<i', len(data) // 2) + data
    if extra is not None:
        out += struct.pack('<i', len(extra)) + extra
    return out


def build_label(name: bytes, strings: List[bytes], tag: bytes = b' LBL') -> bytes:
    """构造一个标签 (含已构造的字符串记录)"""
    return (
        tag
        + struct.pack('<ii', len(strings), len(name))
        + name
        + b''.join(strings)
    )


def build_csf(
    labels: List[bytes],
    version: int = 3,
    label_count: Optional[int] = None,
    string_count: int = 0,
    language: int = 0,
    magic: bytes = b' FSC'
) -> bytes:
    """构造完整的 CSF 字节"""
    if label_count is None:
        label_count = len(labels)
    header = magic + struct.pack('<iii4si', version, label_count, string_count,
                                 b'\x00' * 4, language)
    return header + b''.join(labels)


# ==================== 基础 Fixtures ====================

@pytest.fixture
def sample_csf_bytes() -> bytes:
    """
    包含普通记录、WRTS 记录和多字符串标签的 CSF 字节

    声明的计数故意与实际不一致。
    """
    return build_csf(
        [
            build_label(b'GUI:OK', [build_string(b' RTS', 'OK')]),
            build_label(b'NAME:Tanya', [
                build_string(b'WRTS', 'Tanya', encode_text('ituntaa')),
            ]),
            build_label(b'TXT:Multi', [
                build_string(b' RTS', 'first'),
                build_string(b' RTS', 'second\nline'),
            ]),
        ],
        label_count=99,
        string_count=42,
        language=2,
    )


@pytest.fixture
def sample_csf_file(tmp_path, sample_csf_bytes):
    """写入磁盘的样例 CSF 文件路径"""
    path = tmp_path / "sample.csf"
    path.write_bytes(sample_csf_bytes)
    return path


@pytest.fixture
def populated_table():
    """
    通过模型 API 构建的字符串表

    Returns:
        StringTable 实例
    """
    from csftool import StringTable, LanguageId

    table = StringTable(language=LanguageId.FRENCH, version=3)
    table.add_label("GUI:OK", "OK")
    table.add_label("GUI:Cancel", "")
    table.add_label_with_extra("NAME:Tanya", "Tanya", "ituntaa")
    table.add_label_strings("TXT:Multi", ["first", "second\r\nline"])
    table.add_label_strings_with_extra("TXT:Speech", ["a", "b"], ["snd_a", ""])
    table.add_label("TXT:Unicode", "Größe 中文 \U0001F600")
    return table


@pytest.fixture
def text_lines() -> Tuple[str, ...]:
    """样例文本行 (包含应被忽略的行)"""
    return (
        "; comment line",
        "",
        "GUI:OK|OK",
        "*DISABLED|ignored",
        "NO SEPARATOR HERE",
        "|empty label",
        "TXT:Intro|line one\\nline two",
        "TXT:Pipe|a|b",
    )
