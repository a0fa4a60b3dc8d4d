#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
CSF 文件读取器

将字节流解析为 StringTable。解析过程是一个顺序状态机:

    魔法数 → 文件头 → (标签头 → 标签名 → 字符串记录*)* → 结束

标签循环以流结束为终止条件，文件头中的计数仅作参考。
"""

import io
import logging
from typing import BinaryIO, Optional, List

from ..core import codec
from ..core.binary_io import BinaryReader
from ..core.model import StringTable, Label, StringRecord
from ..core.schema import (
    FileHeader,
    LabelHeader,
    LanguageId,
    LABEL_TAG,
    MAGIC,
    STRING_EXTRA_TAG,
    TAG_ENCODING,
)
from ..exceptions import InvalidFormatError

logger = logging.getLogger(__name__)


class CsfReader:
    """
    CSF 字节流读取器

    只负责解析，不持有文件句柄的生命周期；文件的打开与关闭由
    read_file() 负责。
    """

    def __init__(self, stream: BinaryIO, name: Optional[str] = None):
        """
        初始化读取器

        Args:
            stream: 可读的二进制流
            name: 用于错误信息的文件名
        """
        self._reader = BinaryReader(stream)
        self._filename = name
        self._name = name or "<stream>"

    def read(self) -> StringTable:
        """
        解析完整的字符串表

        Returns:
            解析得到的 StringTable (altered 为 False)

        Raises:
            InvalidFormatError: 魔法数不符或标签标记错误
            EOFError: 数据在结构中途截断
        """
        header = self._read_header()
        language = LanguageId.from_raw(header.language)
        if language is LanguageId.UNKNOWN:
            logger.debug("%s: 未知语言 ID %d", self._name, header.language)

        labels: List[Label] = []
        while True:
            label = self._read_label()
            if label is None:
                break
            labels.append(label)

        table = StringTable.from_labels(labels, header.version, language, self._filename)

        if header.label_count != table.label_count or header.string_count != table.string_count:
            logger.debug(
                "%s: 文件头计数 (%d 标签, %d 字符串) 与实际 (%d 标签, %d 字符串) 不一致",
                self._name, header.label_count, header.string_count,
                table.label_count, table.string_count
            )
        logger.debug("%s: 读取 %d 个标签, %d 条字符串",
                     self._name, table.label_count, table.string_count)
        return table

    # ==================== 各阶段 ====================

    def _read_header(self) -> FileHeader:
        magic = self._reader.read_available(len(MAGIC))
        if not FileHeader.is_valid_magic(magic):
            raise InvalidFormatError(
                f"文件 '{self._name}' 不是有效的 CSF 字符串表文件",
                filename=self._name,
                expected=repr(MAGIC),
                actual=repr(magic)
            )
        rest = self._reader.read_bytes(FileHeader.SIZE - len(MAGIC))
        return FileHeader.unpack(magic + rest)

    def _read_label(self) -> Optional[Label]:
        """读取一个标签，流在标签边界处结束时返回 None"""
        offset = self._reader.position
        tag = self._reader.read_available(len(LABEL_TAG))
        if not tag:
            return None
        if len(tag) < len(LABEL_TAG):
            raise EOFError(
                f"文件结束: 在位置 {offset} 期望读取 {len(LABEL_TAG)} 字节，"
                f"实际只有 {len(tag)} 字节"
            )
        if tag.upper() != LABEL_TAG:
            raise InvalidFormatError(
                f"文件 '{self._name}' 在偏移 {offset} 处标签标记无效",
                filename=self._name,
                expected=repr(LABEL_TAG),
                actual=repr(tag)
            )

        rest = self._reader.read_bytes(LabelHeader.SIZE - len(LABEL_TAG))
        header = LabelHeader.unpack(tag + rest)
        name = codec.decode_name(self._reader.read_bytes(header.name_length))

        label = Label(name)
        for _ in range(header.string_count):
            label.add_record(self._read_string())
        return label

    def _read_string(self) -> StringRecord:
        tag = self._reader.read_tag().decode(TAG_ENCODING)
        length = self._reader.read_i32()

        text = ""
        if length > 0:
            text = codec.decode(self._reader.read_bytes(length * 2))

        extra_text = None
        if tag == STRING_EXTRA_TAG:
            # 附加数据长度是字节数，而非字符数
            extra_length = self._reader.read_i32()
            extra_text = codec.decode(self._reader.read_bytes(extra_length))

        return StringRecord(tag, text, extra_text)


# ==================== 便捷函数 ====================

def read_file(path: str) -> StringTable:
    """
    从文件读取字符串表

    文件整体读入内存后解析，句柄在解析前即已关闭。

    Args:
        path: CSF 文件路径

    Returns:
        StringTable 实例，filename 绑定为 path
    """
    with open(path, 'rb') as f:
        data = f.read()
    return CsfReader(io.BytesIO(data), path).read()


def read_bytes(data: bytes, name: Optional[str] = None) -> StringTable:
    """从内存字节解析字符串表"""
    return CsfReader(io.BytesIO(data), name).read()
