#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
命令行入口

    csftool -i ra2md.csf -e -t ra2md.txt      导出字符串到文本文件
    csftool -i ra2md.csf -a -t new.txt -o out.csf   从文本文件追加字符串

所有选项在启动时解析为一个 Settings 值并显式传入 run()，不使用全局状态。
"""

import argparse
import logging
import sys
from dataclasses import dataclass
from typing import Optional, List

from . import __version__
from .core.model import StringTable
from .core.schema import LanguageId
from .text_lines import read_text_file, write_text_file
from .utils import default_text_path, file_exists

LOGGER_NAME = "csftool"
DEBUG_LOG_FILE = "csftool_debug.log"

logger = logging.getLogger(LOGGER_NAME)


@dataclass
class Settings:
    """命令行配置"""
    input_file: Optional[str] = None
    output_file: Optional[str] = None
    text_file: Optional[str] = None
    add_strings: bool = False
    export_strings: bool = False
    language_override: Optional[int] = None
    debug_logging: bool = False
    debug_log_file: str = DEBUG_LOG_FILE


# ==================== 日志 ====================

def setup_logging(debug: bool = False, log_path: str = DEBUG_LOG_FILE) -> None:
    """
    配置 csftool 日志

    控制台始终输出 INFO 及以上；debug 为 True 时额外写入调试日志文件。
    重复调用时若已存在 handler 则跳过。
    """
    if logger.handlers:
        return

    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    ch = logging.StreamHandler(sys.stdout)
    ch.setLevel(logging.INFO)
    ch.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(ch)

    if debug:
        fh = logging.FileHandler(log_path, mode="w", encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter("%(asctime)s | %(levelname)-7s | %(message)s",
                                          datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(fh)
        logger.debug("调试日志已启用: %s", log_path)


# ==================== 参数解析 ====================

def build_parser() -> argparse.ArgumentParser:
    """构建参数解析器"""
    parser = argparse.ArgumentParser(
        prog="csftool",
        description="CSF 字符串表与文本行格式互转工具",
        add_help=False
    )
    parser.add_argument('-h', '-?', '--help', action='help',
                        help='显示帮助')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('-i', '--infile', dest='input_file',
                        help='输入字符串表文件')
    parser.add_argument('-o', '--outfile', dest='output_file',
                        help='输出字符串表文件')
    parser.add_argument('-t', '--textfile', dest='text_file',
                        help='输入/输出文本文件，默认为输入字符串表同名 .txt 文件')
    parser.add_argument('-a', '--addlines', dest='add_strings', action='store_true',
                        help='将文本文件中的行作为字符串添加到字符串表 (会覆盖 -e)')
    parser.add_argument('-e', '--exportlines', dest='export_strings', action='store_true',
                        help='将字符串表中的字符串导出为文本文件中的行')
    parser.add_argument('-l', '--language-override', dest='language_override', type=int,
                        help='覆盖保存时的语言 ID，有效范围 0..9 以及 -1 (语言无关)')
    parser.add_argument('-d', '--debug-logging', dest='debug_logging', action='store_true',
                        help=f'将调试日志写入 {DEBUG_LOG_FILE}')
    return parser


def parse_args(argv: Optional[List[str]] = None) -> Settings:
    """将命令行参数解析为 Settings"""
    args = build_parser().parse_args(argv)
    return Settings(
        input_file=args.input_file,
        output_file=args.output_file,
        text_file=args.text_file,
        add_strings=args.add_strings,
        export_strings=args.export_strings,
        language_override=args.language_override,
        debug_logging=args.debug_logging,
    )


# ==================== 执行 ====================

def _usage_error(message: str) -> int:
    logger.error(message)
    build_parser().print_help()
    return 1


def run(settings: Settings) -> int:
    """
    按配置执行导入或导出

    Args:
        settings: 命令行配置

    Returns:
        进程退出码，0 表示成功
    """
    if not settings.add_strings and not settings.export_strings:
        return _usage_error("参数不足，必须指定 -a 或 -e")

    create_new = False
    if not settings.input_file:
        if not settings.add_strings:
            return _usage_error("未指定有效的输入文件")
        logger.info("未指定输入文件，创建新的字符串表")
        create_new = True
    elif not file_exists(settings.input_file):
        return _usage_error(f"输入字符串表 '{settings.input_file}' 不存在")
    else:
        logger.info("输入字符串表路径有效")

    if settings.add_strings:
        logger.info("模式 (-a): 向字符串表添加字符串")
        settings.export_strings = False
    else:
        logger.info("模式 (-e): 从字符串表导出字符串")

    if settings.add_strings:
        if not settings.output_file:
            if create_new:
                return _usage_error("未指定输出文件路径")
            logger.warning("未指定输出文件路径，使用输入文件作为输出")
            settings.output_file = settings.input_file
        else:
            logger.info("输出文件路径有效")

        if not file_exists(settings.text_file):
            default_text = default_text_path(settings.input_file)
            logger.warning("指定的输入文本文件不存在，尝试默认文本文件 '%s'", default_text)
            if not file_exists(default_text):
                return _usage_error("输入文本文件不存在")
            logger.info("使用文本文件 '%s' 作为输入", default_text)
            settings.text_file = default_text
        else:
            logger.info("输入文本文件路径有效")
    elif not settings.text_file:
        settings.text_file = default_text_path(settings.input_file)
        logger.warning("未指定输出文本文件，使用默认路径 '%s'", settings.text_file)
    else:
        logger.info("输出文本文件路径有效")

    table = StringTable(settings.input_file)
    if not create_new:
        error = table.load()
        if error is not None:
            logger.error("加载字符串表失败! 错误信息: %s", error)
            return 1
        logger.debug("已加载 %r", table)

    if settings.add_strings:
        try:
            added = read_text_file(table, settings.text_file)
        except (OSError, UnicodeError) as e:
            logger.error("解析文本文件 '%s' 时出错: %s", settings.text_file, e)
            return 1
        logger.info("从 '%s' 添加了 %d 个标签", settings.text_file, added)
    else:
        try:
            written = write_text_file(table, settings.text_file)
        except OSError as e:
            logger.error("写入文本文件 '%s' 时出错: %s", settings.text_file, e)
            return 1
        logger.info("导出 %d 行到 '%s'", written, settings.text_file)

    if table.altered:
        override = settings.language_override
        if override is not None:
            if LanguageId.is_valid(override):
                table.language = override
                logger.info("语言 ID 覆盖为 %s", table.language.name)
            else:
                logger.warning("忽略无效的语言 ID 覆盖值 %d", override)

        error = table.save(settings.output_file)
        if error is not None:
            logger.error("保存字符串表失败! 错误信息: %s", error)
            return 1
        logger.info("已保存字符串表 '%s' (%d 个标签, %d 条字符串)",
                    table.filename, table.label_count, table.string_count)

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """命令行主函数"""
    settings = parse_args(argv)
    setup_logging(settings.debug_logging, settings.debug_log_file)
    return run(settings)


if __name__ == "__main__":
    sys.exit(main())
