#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
字符串表数据模型

提供 StringRecord、Label 和 StringTable 类。
StringTable 是唯一的可变根对象，标签按插入顺序保存，允许重名。
"""

import logging
import struct
from dataclasses import dataclass, field
from typing import Optional, List, Tuple, Sequence, Union

from .schema import (
    DEFAULT_FORMAT_VERSION,
    STRING_TAG,
    STRING_EXTRA_TAG,
    LanguageId,
    RecordKind,
)

logger = logging.getLogger(__name__)


@dataclass
class StringRecord:
    """
    单条本地化字符串

    tag 为 4 字符记录标记，未知标记原样保留。
    仅 'WRTS' 记录携带 extra_text (历史上用于语音文件引用)。
    """
    tag: str = STRING_TAG
    text: str = ""
    extra_text: Optional[str] = None

    def __post_init__(self):
        if self.tag != STRING_EXTRA_TAG:
            self.extra_text = None

    @property
    def kind(self) -> Optional[RecordKind]:
        """记录类型，未知标记返回 None"""
        try:
            return RecordKind(self.tag)
        except ValueError:
            return None

    @property
    def has_extra(self) -> bool:
        """是否为带附加数据的记录"""
        return self.tag == STRING_EXTRA_TAG


@dataclass
class Label:
    """字符串标签，一个名称下的有序字符串记录"""
    name: str
    records: List[StringRecord] = field(default_factory=list)

    @property
    def string_count(self) -> int:
        """该标签下的字符串数量"""
        return len(self.records)

    def add_record(self, record: StringRecord) -> None:
        """追加一条字符串记录"""
        self.records.append(record)

    def texts(self) -> List[str]:
        """所有主字符串的副本"""
        return [r.text for r in self.records]

    def extra_texts(self) -> List[Optional[str]]:
        """所有附加字符串的副本，普通记录对应位置为 None"""
        return [r.extra_text for r in self.records]


class StringTable:
    """
    CSF 字符串表

    只能通过 add_label 系列方法修改；任何一次成功添加都会置位 altered，
    成功 load() 或 save() 后 altered 复位。
    """

    def __init__(
        self,
        filename: Optional[str] = None,
        version: int = DEFAULT_FORMAT_VERSION,
        language: Union[LanguageId, int] = LanguageId.ENGLISH_US
    ):
        """
        初始化空字符串表

        Args:
            filename: 绑定的文件路径 (load/save 默认使用)
            version: 格式版本号，原样保存不做解释
            language: 语言 ID，越界整数映射为 UNKNOWN
        """
        self._filename = filename
        self.format_version = version
        self._language = LanguageId.from_raw(int(language))
        self._labels: List[Label] = []
        self._altered = False

    # ==================== 属性 ====================

    @property
    def filename(self) -> Optional[str]:
        """当前绑定的文件路径"""
        return self._filename

    @property
    def language(self) -> LanguageId:
        """语言 ID"""
        return self._language

    @language.setter
    def language(self, value: Union[LanguageId, int]):
        self._language = LanguageId.from_raw(int(value))

    @property
    def altered(self) -> bool:
        """初始化或上次保存后是否被修改"""
        return self._altered

    @property
    def labels(self) -> Tuple[Label, ...]:
        """按存储顺序的标签元组"""
        return tuple(self._labels)

    @property
    def label_count(self) -> int:
        """标签数量"""
        return len(self._labels)

    @property
    def string_count(self) -> int:
        """所有标签的字符串总数 (每次重新计算)"""
        return sum(label.string_count for label in self._labels)

    @classmethod
    def from_labels(
        cls,
        labels: Sequence[Label],
        version: int = DEFAULT_FORMAT_VERSION,
        language: Union[LanguageId, int] = LanguageId.ENGLISH_US,
        filename: Optional[str] = None
    ) -> 'StringTable':
        """
        由已解析的标签构造字符串表

        构造结果视为未修改 (altered 为 False)。
        """
        table = cls(filename, version, language)
        table._labels = list(labels)
        return table

    def __len__(self) -> int:
        return len(self._labels)

    def __iter__(self):
        return iter(self._labels)

    def __repr__(self) -> str:
        return (
            f"StringTable(filename={self._filename!r}, version={self.format_version}, "
            f"language={self._language.name}, labels={self.label_count}, "
            f"strings={self.string_count})"
        )

    # ==================== 添加标签 ====================

    def add_label(self, name: str, text: str) -> bool:
        """
        添加只含一条普通字符串的标签

        Args:
            name: 标签名 (不可为空)
            text: 字符串内容 (可为空字符串，不可为 None)

        Returns:
            是否添加成功
        """
        if not name or text is None:
            return False
        self._append(Label(name, [StringRecord(STRING_TAG, text)]))
        return True

    def add_label_with_extra(self, name: str, text: str, extra_text: str) -> bool:
        """
        添加只含一条带附加数据字符串的标签

        Args:
            name: 标签名 (不可为空)
            text: 字符串内容 (不可为 None)
            extra_text: 附加数据 (不可为 None)

        Returns:
            是否添加成功
        """
        if not name or text is None or extra_text is None:
            return False
        self._append(Label(name, [StringRecord(STRING_EXTRA_TAG, text, extra_text)]))
        return True

    def add_label_strings(self, name: str, texts: Sequence[str]) -> bool:
        """
        添加含多条普通字符串的标签

        Args:
            name: 标签名 (不可为空)
            texts: 字符串序列 (不可为空序列)

        Returns:
            是否添加成功
        """
        if not name or not texts:
            return False
        self._append(Label(name, [StringRecord(STRING_TAG, t) for t in texts]))
        return True

    def add_label_strings_with_extra(
        self,
        name: str,
        texts: Sequence[str],
        extra_texts: Sequence[str]
    ) -> bool:
        """
        添加含多条带附加数据字符串的标签

        两个序列必须非空且长度一致，否则不修改字符串表。

        Args:
            name: 标签名 (不可为空)
            texts: 字符串序列
            extra_texts: 与 texts 一一对应的附加数据序列

        Returns:
            是否添加成功
        """
        if not name or not texts or not extra_texts or len(texts) != len(extra_texts):
            return False
        records = [
            StringRecord(STRING_EXTRA_TAG, text, extra)
            for text, extra in zip(texts, extra_texts)
        ]
        self._append(Label(name, records))
        return True

    def _append(self, label: Label) -> None:
        self._labels.append(label)
        self._altered = True
        logger.debug("添加标签 %s (%d 条字符串)", label.name, label.string_count)

    # ==================== 查询 ====================

    def find_label(self, name: str) -> Optional[Label]:
        """
        按名称查找标签 (不区分大小写)

        返回存储顺序中的第一个匹配项；不存在或没有字符串时返回 None。
        """
        if not name:
            return None
        key = name.lower()
        for label in self._labels:
            if label.name.lower() == key:
                return label if label.string_count > 0 else None
        return None

    def get_label_strings(self, name: str) -> Optional[List[str]]:
        """
        获取标签下所有主字符串

        Returns:
            字符串列表副本，标签不存在时为 None
        """
        label = self.find_label(name)
        if label is None:
            return None
        return label.texts()

    def get_label_strings_with_extra(
        self, name: str
    ) -> Optional[Tuple[List[str], List[Optional[str]]]]:
        """
        获取标签下所有主字符串和附加数据

        Returns:
            (主字符串列表, 附加数据列表)，标签不存在时为 None
        """
        label = self.find_label(name)
        if label is None:
            return None
        return label.texts(), label.extra_texts()

    def list_all(self) -> List[Tuple[str, List[str]]]:
        """按存储顺序列出所有 (标签名, 主字符串列表)"""
        return [(label.name, label.texts()) for label in self._labels]

    def list_all_with_extra(self) -> List[Tuple[str, List[str], List[Optional[str]]]]:
        """按存储顺序列出所有 (标签名, 主字符串列表, 附加数据列表)"""
        return [
            (label.name, label.texts(), label.extra_texts())
            for label in self._labels
        ]

    # ==================== 读写 ====================

    def load(self) -> Optional[str]:
        """
        从绑定的文件加载

        失败时字符串表保持原状，不会留下部分解析的数据。

        Returns:
            错误描述，成功时为 None
        """
        from ..csf.reader import read_file
        from ..exceptions import CsfError

        if not self._filename:
            return "未指定输入文件路径"

        try:
            loaded = read_file(self._filename)
        except (CsfError, OSError, EOFError, ValueError) as e:
            logger.debug("加载 %s 失败: %s", self._filename, e)
            return str(e)

        self.format_version = loaded.format_version
        self._language = loaded.language
        self._labels = list(loaded.labels)
        self._altered = False
        return None

    def save(self, filename: Optional[str] = None) -> Optional[str]:
        """
        保存到文件

        成功后 altered 复位，绑定路径更新为实际写入的路径。

        Args:
            filename: 目标路径，默认使用当前绑定路径

        Returns:
            错误描述，成功时为 None
        """
        from ..csf.writer import CsfWriter
        from ..exceptions import CsfError

        target = filename or self._filename
        if not target:
            return "未指定输出文件路径"

        try:
            CsfWriter(self).write_file(target)
        except (CsfError, OSError, ValueError, struct.error) as e:
            logger.debug("保存 %s 失败: %s", target, e)
            return str(e)

        self._altered = False
        self._filename = target
        return None
