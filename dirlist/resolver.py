"""
元数据解析：lstat 一个路径，得到 EntrySnapshot。

lstat 失败直接抛出 OSError，由调用方（walker / driver）分类并继续；
用户/组名查询失败、符号链接目标读取失败则在此处就地兜底，不中断输出。
"""

from __future__ import annotations

import grp
import os
import pwd

from dirlist.errors import ErrorAggregator
from dirlist.models import EntrySnapshot, EntryType

# 与原有 readlink 缓冲区一致：目标最多保留 1023 个字符
LINK_TARGET_MAX = 1023


def lookup_owner(uid: int) -> str | None:
    """uid -> 用户名；查不到返回 None。"""
    try:
        return pwd.getpwuid(uid).pw_name
    except KeyError:
        return None


def lookup_group(gid: int) -> str | None:
    """gid -> 组名；查不到返回 None。"""
    try:
        return grp.getgrgid(gid).gr_name
    except KeyError:
        return None


def read_link(path: str) -> str:
    """读取符号链接目标（按长度截断）；失败抛 OSError。"""
    return os.readlink(path)[:LINK_TARGET_MAX]


def resolve(
    path: str,
    errors: ErrorAggregator | None = None,
    *,
    names: bool = True,
    link: bool = True,
) -> EntrySnapshot:
    """
    解析单个条目的元数据（不跟随符号链接）。

    :param path: 条目路径（目录路径 + 条目名，或命令行给出的原样路径）
    :param errors: 错误累加器；名称查询失败、链接读取失败记到这里
    :param names: 是否查询用户名/组名（仅 long 格式需要）
    :param link: 是否读取符号链接目标（仅 long 格式需要）
    :return: EntrySnapshot
    :raises OSError: lstat 失败（不存在、权限不足等）
    """
    st = os.lstat(path)
    entry_type = EntryType.from_mode(st.st_mode)

    owner = group = None
    if names:
        owner = lookup_owner(st.st_uid)
        if owner is None and errors is not None:
            errors.report_lookup("user", st.st_uid)
        group = lookup_group(st.st_gid)
        if group is None and errors is not None:
            errors.report_lookup("group", st.st_gid)

    target = None
    if link and entry_type is EntryType.SYMLINK:
        try:
            target = read_link(path)
        except OSError as e:
            # 目标读不到时显示 "-> ?"，仍然输出这一行
            if errors is not None:
                errors.report("cannot read symbolic link", path, e)

    return EntrySnapshot(
        path=path,
        entry_type=entry_type,
        mode=st.st_mode,
        nlink=st.st_nlink,
        uid=st.st_uid,
        gid=st.st_gid,
        size=st.st_size,
        mtime=st.st_mtime,
        owner=owner,
        group=group,
        link_target=target,
    )
