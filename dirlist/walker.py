"""
目录遍历：按目录流顺序列出条目，需要时在当前目录输出完毕后再递归子目录。
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Callable, Iterator

import typer

from dirlist.errors import ErrorAggregator
from dirlist.formatter import format_entry
from dirlist.models import SELF_REFERENCES, EntrySnapshot, PathConfiguration, is_hidden
from dirlist.resolver import resolve

logger = logging.getLogger(__name__)


@dataclass
class ListingState:
    """
    一次运行的可变累加器：错误位掩码、计数（-n）、输出函数。

    每次运行（或每个测试）新建一个；emit 默认写 stdout。
    """

    errors: ErrorAggregator = field(default_factory=ErrorAggregator)
    count: int = 0
    emit: Callable[[str], None] = typer.echo


def list_entry(path: str, name: str, config: PathConfiguration, state: ListingState) -> EntrySnapshot | None:
    """
    列出单个条目：-n 时只计数，否则解析元数据并输出一行。

    lstat 失败时输出诊断、记录错误并返回 None。
    """
    if config.count_only:
        state.count += 1
        return None
    long_format = config.long_format
    try:
        snapshot = resolve(path, state.errors, names=long_format, link=long_format)
    except OSError as e:
        state.errors.report("cannot access", path, e)
        return None
    state.emit(format_entry(snapshot, name, long_format, config.human_readable))
    return snapshot


def _visible_entries(handle: Iterator[os.DirEntry], show_hidden: bool) -> Iterator[tuple[str, bool]]:
    """产出 (名称, 是否真实目录)；-a 时先产出 `.` 与 `..`，与 readdir 一致。"""
    if show_hidden:
        for name in SELF_REFERENCES:
            yield name, False
    for entry in handle:
        if not show_hidden and is_hidden(entry.name):
            continue
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
        except OSError:
            is_dir = False
        yield entry.name, is_dir


def walk(dir_path: str, config: PathConfiguration, state: ListingState) -> None:
    """
    列出目录 dir_path 下的条目（不排序）。

    递归模式下先收集子目录，目录句柄关闭后再逐个输出空行、`路径:` 标题并递归。
    符号链接不会被当作子目录，因此不会因链接成环而无限递归。
    """
    logger.debug("scanning %s", dir_path)
    try:
        handle = os.scandir(dir_path)
    except OSError as e:
        state.errors.report("cannot open directory", dir_path, e)
        return

    subdirs: list[str] = []
    with handle:
        try:
            for name, is_dir in _visible_entries(handle, config.show_hidden):
                path = os.path.join(dir_path, name)
                list_entry(path, name, config, state)
                if config.recursive and is_dir and name not in SELF_REFERENCES:
                    subdirs.append(path)
        except OSError as e:
            state.errors.report("cannot read directory", dir_path, e)

    for sub in subdirs:
        if not config.count_only:
            state.emit("")
            state.emit(f"{sub}:")
        walk(sub, config, state)
