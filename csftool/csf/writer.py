#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
CSF 文件写入器

将 StringTable 序列化为字节流。文件头中的标签数与字符串数
总是由当前数据重新计算。
"""

import io
import logging
from typing import BinaryIO

from ..core import codec
from ..core.binary_io import BinaryWriter
from ..core.model import StringTable, Label, StringRecord
from ..core.schema import (
    FileHeader,
    LabelHeader,
    MAGIC,
    LABEL_TAG,
    TAG_ENCODING,
    NAME_ENCODING,
    INT32_MIN,
    INT32_MAX,
)
from ..exceptions import EncodingError

logger = logging.getLogger(__name__)


class CsfWriter:
    """
    CSF 字节流写入器

    Example:
        >>> table = StringTable()
        >>> table.add_label("GUI:OK", "OK")
        True
        >>> data = CsfWriter(table).to_bytes()
        >>> data[:4]
        b' FSC'
    """

    def __init__(self, table: StringTable):
        """
        Args:
            table: 要序列化的字符串表
        """
        self._table = table

    def write(self, stream: BinaryIO) -> int:
        """
        写入到二进制流

        Args:
            stream: 可写的二进制流

        Returns:
            写入的字节数

        Raises:
            EncodingError: 标签名不是 ASCII、记录标记不是 4 字节
                或格式版本超出 int32 范围
        """
        writer = BinaryWriter(stream)
        table = self._table

        if not INT32_MIN <= table.format_version <= INT32_MAX:
            raise EncodingError("格式版本", str(table.format_version), "超出 int32 范围")

        header = FileHeader(
            magic=MAGIC,
            version=table.format_version,
            label_count=table.label_count,
            string_count=table.string_count,
            language=table.language
        )
        writer.write_bytes(header.pack())

        for label in table.labels:
            self._write_label(writer, label)

        logger.debug("写入 %d 个标签, %d 条字符串, 共 %d 字节",
                     header.label_count, header.string_count, writer.position)
        return writer.position

    def to_bytes(self) -> bytes:
        """序列化为字节"""
        buffer = io.BytesIO()
        self.write(buffer)
        return buffer.getvalue()

    def write_file(self, path: str) -> int:
        """
        写入到文件

        先在内存中完成序列化，编码失败时不会创建或截断目标文件。

        Args:
            path: 输出文件路径

        Returns:
            写入的字节数
        """
        data = self.to_bytes()
        with open(path, 'wb') as f:
            f.write(data)
        return len(data)

    # ==================== 内部方法 ====================

    def _write_label(self, writer: BinaryWriter, label: Label) -> None:
        try:
            name = label.name.encode(NAME_ENCODING)
        except UnicodeEncodeError:
            raise EncodingError("标签名", label.name, "只允许 ASCII 字符") from None

        header = LabelHeader(
            tag=LABEL_TAG,
            string_count=label.string_count,
            name_length=len(name)
        )
        writer.write_bytes(header.pack())
        writer.write_bytes(name)

        for record in label.records:
            self._write_string(writer, record)

    def _write_string(self, writer: BinaryWriter, record: StringRecord) -> None:
        try:
            tag = record.tag.encode(TAG_ENCODING)
        except UnicodeEncodeError:
            raise EncodingError("记录标记", record.tag, "无法编码为单字节") from None
        if len(tag) != 4:
            raise EncodingError("记录标记", record.tag, f"必须为 4 字节, 实际 {len(tag)} 字节")

        writer.write_tag(tag)
        writer.write_i32(codec.char_length(record.text))
        writer.write_bytes(codec.encode(record.text))

        if record.has_extra:
            # WRTS 记录总是带长度字段，附加数据为空时长度为 0
            extra = codec.encode(record.extra_text or "")
            writer.write_i32(len(extra))
            writer.write_bytes(extra)


# ==================== 便捷函数 ====================

def write_file(table: StringTable, path: str) -> int:
    """将字符串表写入文件，返回写入的字节数"""
    return CsfWriter(table).write_file(path)


def to_bytes(table: StringTable) -> bytes:
    """将字符串表序列化为字节"""
    return CsfWriter(table).to_bytes()
