#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
CSF 读写测试

测试 CsfReader、CsfWriter 以及 StringTable.load()/save()。
"""

import io
import struct

import pytest

from csftool import (
    StringTable,
    LanguageId,
    CsfReader,
    CsfWriter,
    InvalidFormatError,
    EncodingError,
    read_bytes,
    read_file,
    to_bytes,
)
from csftool.core.model import Label, StringRecord

from conftest import build_csf, build_label, build_string, encode_text


# ==================== 读取 ====================

class TestCsfReader:
    """CsfReader 测试"""

    def test_read_sample(self, sample_csf_bytes):
        """解析样例文件"""
        table = read_bytes(sample_csf_bytes)

        assert table.format_version == 3
        assert table.language is LanguageId.GERMAN
        assert table.list_all() == [
            ("GUI:OK", ["OK"]),
            ("NAME:Tanya", ["Tanya"]),
            ("TXT:Multi", ["first", "second\nline"]),
        ]
        assert not table.altered

    def test_extra_data(self, sample_csf_bytes):
        """WRTS 附加数据"""
        table = read_bytes(sample_csf_bytes)
        texts, extras = table.get_label_strings_with_extra("NAME:Tanya")

        assert texts == ["Tanya"]
        assert extras == ["ituntaa"]

    def test_declared_counts_ignored(self, sample_csf_bytes):
        """文件头计数不作为循环边界"""
        table = read_bytes(sample_csf_bytes)
        assert table.label_count == 3
        assert table.string_count == 4

    def test_magic_case_insensitive(self):
        """魔法数不区分大小写"""
        data = build_csf([build_label(b'A', [build_string(b' RTS', 'a')])], magic=b' fsc')
        assert read_bytes(data).get_label_strings("A") == ["a"]

    def test_invalid_magic(self):
        """魔法数错误时报错并包含文件名"""
        data = build_csf([], magic=b'GRIM')
        with pytest.raises(InvalidFormatError) as exc_info:
            read_bytes(data, "bad.csf")

        assert "bad.csf" in str(exc_info.value)
        assert exc_info.value.filename == "bad.csf"

    @pytest.mark.parametrize("data", [b'', b' FS'])
    def test_too_short_for_magic(self, data):
        """不足 4 字节视为格式错误"""
        with pytest.raises(InvalidFormatError):
            read_bytes(data)

    def test_empty_table(self):
        """只有文件头"""
        table = read_bytes(build_csf([], language=-1))
        assert table.label_count == 0
        assert table.language is LanguageId.LANGUAGE_INDEPENDENT

    @pytest.mark.parametrize("raw,expected", [
        (11, LanguageId.UNKNOWN),
        (-1, LanguageId.LANGUAGE_INDEPENDENT),
        (9, LanguageId.CHINESE),
    ])
    def test_language_fallback(self, raw, expected):
        table = read_bytes(build_csf([], language=raw))
        assert table.language is expected

    def test_zero_length_string(self):
        """长度为 0 的记录解码为空字符串"""
        label = build_label(b'EMPTY', [b' RTS' + struct.pack('<i', 0)])
        table = read_bytes(build_csf([label]))
        assert table.get_label_strings("EMPTY") == [""]

    def test_unknown_tag_preserved(self):
        """未知记录标记原样保留，且不读取附加数据"""
        label = build_label(b'ODD', [build_string(b'XRTS', 'odd')])
        table = read_bytes(build_csf([label]))

        record = table.labels[0].records[0]
        assert record.tag == "XRTS"
        assert record.text == "odd"
        assert record.extra_text is None

    def test_lowercase_wrts_has_no_extra(self):
        """只有严格等于 'WRTS' 才读取附加数据"""
        label = build_label(b'LOW', [build_string(b'wrts', 'x')])
        table = read_bytes(build_csf([label]))
        assert table.labels[0].records[0].extra_text is None

    def test_label_without_strings(self):
        """字符串数为 0 的标签"""
        table = read_bytes(build_csf([build_label(b'NONE', [])]))
        assert table.label_count == 1
        assert table.string_count == 0

    def test_bad_label_tag(self):
        """标签标记错误"""
        label = build_label(b'A', [build_string(b' RTS', 'a')], tag=b'XXXX')
        with pytest.raises(InvalidFormatError):
            read_bytes(build_csf([label]))

    @pytest.mark.parametrize("cut", [2, 10, 20])
    def test_truncated_stream(self, sample_csf_bytes, cut):
        """截断的数据抛出 EOFError"""
        with pytest.raises(EOFError):
            read_bytes(sample_csf_bytes[:-cut])

    def test_truncated_header(self):
        with pytest.raises(EOFError):
            read_bytes(b' FSC\x03\x00')

    def test_reader_on_stream(self, sample_csf_bytes):
        table = CsfReader(io.BytesIO(sample_csf_bytes), "mem.csf").read()
        assert table.filename == "mem.csf"


# ==================== 写入 ====================

class TestCsfWriter:
    """CsfWriter 测试"""

    def test_header(self, populated_table):
        """文件头字段"""
        data = to_bytes(populated_table)

        assert data[:4] == b' FSC'
        version, labels, strings, reserved, language = struct.unpack_from('<iii4si', data, 4)
        assert version == 3
        assert labels == populated_table.label_count
        assert strings == populated_table.string_count
        assert reserved == b'\x00' * 4
        assert language == LanguageId.FRENCH

    def test_exact_bytes(self):
        """与手工构造的字节完全一致"""
        table = StringTable()
        table.add_label("GUI:OK", "OK")
        table.add_label_with_extra("NAME:X", "X", "snd")

        expected = build_csf(
            [
                build_label(b'GUI:OK', [build_string(b' RTS', 'OK')]),
                build_label(b'NAME:X', [build_string(b'WRTS', 'X', encode_text('snd'))]),
            ],
            string_count=2,
        )
        assert to_bytes(table) == expected

    def test_empty_text_writes_no_data(self):
        """空字符串只写长度 0"""
        table = StringTable()
        table.add_label("E", "")
        data = to_bytes(table)

        expected_tail = b' LBL' + struct.pack('<ii', 1, 1) + b'E' + b' RTS' + struct.pack('<i', 0)
        assert data[24:] == expected_tail

    def test_wrts_empty_extra_writes_zero_length(self):
        """WRTS 空附加数据写出长度 0"""
        table = StringTable()
        table.add_label_with_extra("W", "", "")
        data = to_bytes(table)

        assert data.endswith(b'WRTS' + struct.pack('<ii', 0, 0))

    def test_counts_recomputed(self, sample_csf_bytes):
        """重新写出时修正文件头计数"""
        table = read_bytes(sample_csf_bytes)
        data = to_bytes(table)

        labels, strings = struct.unpack_from('<ii', data, 8)
        assert (labels, strings) == (3, 4)

    def test_non_ascii_label_name(self):
        """非 ASCII 标签名"""
        table = StringTable()
        table.add_label("标签", "text")

        with pytest.raises(EncodingError):
            to_bytes(table)

    def test_bad_tag_length(self):
        table = StringTable.from_labels([Label("A", [StringRecord("RTS", "a")])])
        with pytest.raises(EncodingError):
            CsfWriter(table).to_bytes()

    @pytest.mark.parametrize("version", [2 ** 31, -2 ** 31 - 1])
    def test_version_out_of_int32_range(self, version):
        """格式版本超出 int32 范围"""
        table = StringTable(version=version)
        table.add_label("A", "a")

        with pytest.raises(EncodingError):
            to_bytes(table)

    def test_non_bmp_length_field(self):
        """长度字段为 UTF-16 码元数"""
        table = StringTable()
        table.add_label("E", "\U0001F600")
        data = to_bytes(table)

        offset = 24 + 12 + 1 + 4
        assert struct.unpack_from('<i', data, offset)[0] == 2


# ==================== 往返 ====================

class TestRoundTrip:
    """读写往返测试"""

    def test_model_roundtrip(self, populated_table):
        """模型 API 构建的表往返一致"""
        loaded = read_bytes(to_bytes(populated_table))

        assert loaded.list_all_with_extra() == populated_table.list_all_with_extra()
        assert loaded.language is populated_table.language
        assert loaded.format_version == populated_table.format_version

    def test_file_roundtrip_preserves_bytes(self, sample_csf_bytes):
        """读取后写出，除文件头计数外字节一致"""
        data = to_bytes(read_bytes(sample_csf_bytes))

        assert data[24:] == sample_csf_bytes[24:]
        assert data[:8] == sample_csf_bytes[:8]
        assert data[16:24] == sample_csf_bytes[16:24]

    def test_version_preserved(self):
        table = read_bytes(build_csf([], version=2))
        assert read_bytes(to_bytes(table)).format_version == 2


# ==================== load / save ====================

class TestLoadSave:
    """StringTable.load()/save() 测试"""

    def test_load(self, sample_csf_file):
        table = StringTable(str(sample_csf_file))

        assert table.load() is None
        assert table.label_count == 3
        assert not table.altered

    def test_load_resets_altered(self, sample_csf_file):
        table = StringTable(str(sample_csf_file))
        table.add_label("NEW", "new")

        assert table.load() is None
        assert not table.altered
        assert table.find_label("NEW") is None

    def test_load_missing_file(self, tmp_path):
        """文件不存在时返回错误描述"""
        table = StringTable(str(tmp_path / "missing.csf"))
        error = table.load()

        assert error is not None
        assert isinstance(error, str)

    def test_load_invalid_keeps_table(self, tmp_path):
        """格式错误时保留原有内容"""
        path = tmp_path / "bad.csf"
        path.write_bytes(b'NOPE' + b'\x00' * 20)

        table = StringTable(str(path))
        table.add_label("KEEP", "me")
        error = table.load()

        assert "bad.csf" in error
        assert table.get_label_strings("KEEP") == ["me"]
        assert table.altered

    def test_load_truncated(self, tmp_path, sample_csf_bytes):
        path = tmp_path / "short.csf"
        path.write_bytes(sample_csf_bytes[:-3])

        table = StringTable(str(path))
        assert table.load() is not None
        assert table.label_count == 0

    def test_load_without_filename(self):
        assert StringTable().load() is not None

    def test_save(self, tmp_path, populated_table):
        """保存成功后复位 altered 并更新文件名"""
        path = tmp_path / "out.csf"

        assert populated_table.altered
        assert populated_table.save(str(path)) is None
        assert not populated_table.altered
        assert populated_table.filename == str(path)
        assert read_file(str(path)).list_all() == populated_table.list_all()

    def test_save_to_bound_filename(self, tmp_path):
        path = tmp_path / "bound.csf"
        table = StringTable(str(path))
        table.add_label("A", "a")

        assert table.save() is None
        assert path.exists()

    def test_save_encoding_error(self, tmp_path):
        """编码失败时返回错误且不创建文件"""
        path = tmp_path / "bad.csf"
        table = StringTable()
        table.add_label("Ärger", "text")

        error = table.save(str(path))

        assert error is not None
        assert table.altered
        assert table.filename is None
        assert not path.exists()

    def test_save_version_out_of_range(self, tmp_path):
        """格式版本超出 int32 范围时返回错误而不抛出"""
        path = tmp_path / "bad.csf"
        table = StringTable(version=2 ** 31)
        table.add_label("A", "a")

        error = table.save(str(path))

        assert isinstance(error, str)
        assert table.altered
        assert not path.exists()

    def test_non_ascii_label_name_survives_resave(self, tmp_path):
        """读取时非 ASCII 标签名字节替换为 '?'，可重新保存"""
        path = tmp_path / "latin.csf"
        path.write_bytes(build_csf([build_label(b'A\xe9B', [build_string(b' RTS', "x")])],
                                   string_count=1))
        table = StringTable(str(path))

        assert table.load() is None
        assert table.list_all() == [("A?B", ["x"])]

        assert table.add_label("X", "y")
        assert table.save() is None

        reloaded = StringTable(str(path))
        assert reloaded.load() is None
        assert reloaded.list_all() == [("A?B", ["x"]), ("X", ["y"])]

    def test_save_to_directory_fails(self, tmp_path):
        table = StringTable()
        table.add_label("A", "a")
        assert table.save(str(tmp_path)) is not None

    def test_save_without_filename(self):
        table = StringTable()
        table.add_label("A", "a")
        assert table.save() is not None
