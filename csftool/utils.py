#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
CSFTool 工具函数

提供路径处理等通用功能。
"""

import os
from typing import Optional

TEXT_EXTENSION = ".txt"


def default_text_path(csf_path: Optional[str]) -> Optional[str]:
    """
    根据字符串表路径推导默认文本文件路径

    将扩展名替换为 .txt，没有扩展名时直接追加。

    Args:
        csf_path: 字符串表文件路径

    Returns:
        文本文件路径，输入为空时返回 None

    Examples:
        >>> default_text_path("ra2md.csf")
        'ra2md.txt'
        >>> default_text_path("data/stringtable")
        'data/stringtable.txt'
    """
    if not csf_path:
        return None
    root, _ = os.path.splitext(csf_path)
    return root + TEXT_EXTENSION


def file_exists(path: Optional[str]) -> bool:
    """路径非空且指向一个已存在的普通文件"""
    return bool(path) and os.path.isfile(path)
