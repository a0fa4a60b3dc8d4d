#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
文本行格式转换

每行一条记录，格式为 LABEL|VALUE:

    GUI:OK|OK
    TXT_INTRO|第一行\\n第二行

- 字面量 \\n (两个字符) 表示内嵌换行
- 空行、以 ';' 开头的注释行、没有分隔符的行、以及标签以 '*' 开头的行
  在导入时忽略
- 导出时标签名转为大写，按名称排序，每个标签只导出第一条字符串
"""

import logging
from typing import Optional, List, Tuple, Iterable, Sequence

from .core.model import StringTable

logger = logging.getLogger(__name__)

LABEL_SEPARATOR = "|"
NEWLINE_ESCAPE = "\\n"
COMMENT_PREFIX = ";"
DISABLED_PREFIX = "*"

TEXT_FILE_ENCODING = 'utf-8'


# ==================== 转义 ====================

def escape_text(text: str) -> str:
    """将实际换行 (\\r\\n 或 \\n) 替换为字面量 \\n"""
    return text.replace("\r\n", NEWLINE_ESCAPE).replace("\n", NEWLINE_ESCAPE)


def unescape_text(text: str) -> str:
    """将字面量 \\n 替换为实际换行"""
    return text.replace(NEWLINE_ESCAPE, "\n")


# ==================== 导入 ====================

def parse_line(line: str) -> Optional[Tuple[str, str]]:
    """
    解析一行文本

    Args:
        line: 不含行尾换行符的文本行

    Returns:
        (标签名, 字符串)，应忽略的行返回 None

    Examples:
        >>> parse_line("FOO|a|b")
        ('FOO', 'a|b')
        >>> parse_line(";FOO|bar") is None
        True
        >>> parse_line("*FOO|bar") is None
        True
    """
    if not line or line.startswith(COMMENT_PREFIX):
        return None

    idx = line.find(LABEL_SEPARATOR)
    if idx < 1:
        return None

    label = line[:idx]
    if label.startswith(DISABLED_PREFIX):
        return None

    line = unescape_text(line)
    label, _, value = line.partition(LABEL_SEPARATOR)
    return label, value


def import_line(table: StringTable, line: str) -> bool:
    """
    解析一行并添加到字符串表

    Returns:
        是否添加了标签
    """
    parsed = parse_line(line)
    if parsed is None:
        return False
    label, value = parsed
    return table.add_label(label, value)


def import_lines(table: StringTable, lines: Iterable[str]) -> int:
    """
    逐行导入，格式错误的行直接跳过

    Returns:
        添加的标签数量
    """
    added = 0
    for lineno, line in enumerate(lines, 1):
        if import_line(table, line):
            added += 1
        elif line and not line.startswith(COMMENT_PREFIX):
            logger.debug("跳过第 %d 行: %r", lineno, line)
    return added


def read_text_file(table: StringTable, path: str) -> int:
    """
    从文本文件导入

    UTF-8 读取 (兼容 BOM)，\\r\\n、\\n、\\r 均视为行尾。

    Args:
        table: 目标字符串表
        path: 文本文件路径

    Returns:
        添加的标签数量
    """
    with open(path, 'r', encoding=TEXT_FILE_ENCODING + '-sig') as f:
        lines = [line.rstrip('\n') for line in f]
    return import_lines(table, lines)


# ==================== 导出 ====================

def format_line(name: str, texts: Sequence[str]) -> str:
    """
    格式化一个标签为文本行

    只使用第一条字符串；没有字符串时输出 'NAME|'。
    """
    value = escape_text(texts[0]) if texts else ""
    return name.upper() + LABEL_SEPARATOR + value


def export_lines(table: StringTable) -> List[str]:
    """
    导出所有标签为文本行

    按标签名逐码点比较升序排列 (稳定排序)。
    """
    labels = sorted(table.list_all(), key=lambda item: item[0])
    return [format_line(name, texts) for name, texts in labels]


def write_text_file(table: StringTable, path: str) -> int:
    """
    导出到文本文件 (UTF-8，无 BOM)

    Returns:
        写入的行数
    """
    lines = export_lines(table)
    with open(path, 'w', encoding=TEXT_FILE_ENCODING) as f:
        for line in lines:
            f.write(line + "\n")
    return len(lines)
