"""
条目渲染：把 EntrySnapshot 格式化成一行文本（纯名称或 long 格式）。
"""

from __future__ import annotations

import time
from datetime import datetime

from dirlist.models import SELF_REFERENCES, EntrySnapshot

# 超过这个秒数（平均公历年）的修改时间显示年份而不是时刻
ONE_YEAR_SECONDS = 31556952

SIZE_UNITS = ("B", "K", "M", "G", "T", "P", "E")

UNRESOLVED_TARGET = "?"

NAME_WIDTH = 8
SIZE_WIDTH = 8
HUMAN_SIZE_WIDTH = 5


def format_size_human(n: int) -> str:
    """按 1024 逐级换算：1023 -> 1023B，1024 -> 1.0K，1536 -> 1.5K，最大到 E。"""
    value = float(n)
    unit = 0
    while value >= 1024 and unit < len(SIZE_UNITS) - 1:
        value /= 1024
        unit += 1
    if unit == 0:
        return f"{n}{SIZE_UNITS[0]}"
    return f"{value:.1f}{SIZE_UNITS[unit]}"


def format_size(n: int, human_readable: bool = False) -> str:
    if human_readable:
        return f"{format_size_human(n):>{HUMAN_SIZE_WIDTH}}"
    return f"{n:>{SIZE_WIDTH}}"


def format_date(mtime: float, now: float | None = None) -> str:
    """
    修改时间：未来时间或一年以前显示 `Mon dd YYYY`，否则显示 `Mon dd HH:MM`（本地时区）。
    比较按整秒进行。
    """
    if now is None:
        now = time.time()
    t = datetime.fromtimestamp(mtime)
    then_sec = int(mtime)
    now_sec = int(now)
    if now_sec < then_sec or now_sec - then_sec >= ONE_YEAR_SECONDS:
        return f"{t:%b} {t.day:>2} {t:%Y}"
    return f"{t:%b} {t.day:>2} {t:%H:%M}"


def permission_string(snapshot: EntrySnapshot) -> str:
    """9 个权限字符，如 rwxr-xr--。"""
    return "".join(ch if on else "-" for ch, on in zip("rwx" * 3, snapshot.permissions))


def _id_field(name: str | None, ident: int) -> str:
    return f"{name if name is not None else ident:<{NAME_WIDTH}}"


def display_name(snapshot: EntrySnapshot, name: str) -> str:
    """目录名加 `/` 后缀（`.` 和 `..` 除外）。"""
    if snapshot.is_dir and name not in SELF_REFERENCES:
        return f"{name}/"
    return name


def format_entry(
    snapshot: EntrySnapshot,
    name: str,
    long_format: bool = False,
    human_readable: bool = False,
    *,
    now: float | None = None,
) -> str:
    """
    渲染一个条目。

    :param snapshot: resolve() 的结果
    :param name: 显示名（目录中的条目名，或命令行给出的路径）
    :param long_format: 是否 long 格式
    :param human_readable: long 格式下大小是否带单位
    :param now: 计算日期格式用的当前时间（测试用），默认 time.time()
    """
    if not long_format:
        return display_name(snapshot, name)

    if snapshot.is_symlink:
        target = snapshot.link_target if snapshot.link_target is not None else UNRESOLVED_TARGET
        shown = f"{name} -> {target}"
    else:
        shown = display_name(snapshot, name)

    return " ".join(
        (
            snapshot.entry_type.value + permission_string(snapshot),
            str(snapshot.nlink),
            _id_field(snapshot.owner, snapshot.uid),
            _id_field(snapshot.group, snapshot.gid),
            format_size(snapshot.size, human_readable),
            format_date(snapshot.mtime, now),
            shown,
        )
    )
