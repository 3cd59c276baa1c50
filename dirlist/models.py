"""
dirlist 数据模型：列目录的配置与单个条目的元数据快照。

- PathConfiguration：启动时构造一次，之后只读，递归调用共享同一实例。
- EntrySnapshot：某一时刻对一个条目的 lstat 结果；每次列出时新建，不缓存、不修改。
"""

from __future__ import annotations

import stat
from dataclasses import dataclass
from enum import Enum

# 权限位按 属主/属组/其他 × 读/写/执行 排列，与 long 格式中 9 个权限字符一一对应
PERMISSION_BITS: tuple[int, ...] = (
    stat.S_IRUSR,
    stat.S_IWUSR,
    stat.S_IXUSR,
    stat.S_IRGRP,
    stat.S_IWGRP,
    stat.S_IXGRP,
    stat.S_IROTH,
    stat.S_IWOTH,
    stat.S_IXOTH,
)

# 当前目录 / 上级目录的自引用名，不加目录后缀、不递归
SELF_REFERENCES = (".", "..")

HIDDEN_PREFIX = "."


class EntryType(str, Enum):
    """条目类型，值即 long 格式首字符。"""

    REGULAR = "-"
    DIRECTORY = "d"
    SYMLINK = "l"
    OTHER = "?"

    @classmethod
    def from_mode(cls, mode: int) -> EntryType:
        if stat.S_ISDIR(mode):
            return cls.DIRECTORY
        if stat.S_ISREG(mode):
            return cls.REGULAR
        if stat.S_ISLNK(mode):
            return cls.SYMLINK
        return cls.OTHER


@dataclass(frozen=True)
class PathConfiguration:
    """
    列目录选项：-a / -l / -R / -n / -h。

    目标路径不放在这里：同一份配置由 list_paths() 用于所有目标，
    walk() / list_entry() 递归时把当前路径作为单独的参数传入。
    """

    show_hidden: bool = False
    long_format: bool = False
    recursive: bool = False
    count_only: bool = False
    human_readable: bool = False


@dataclass(frozen=True)
class EntrySnapshot:
    """
    单个条目的元数据（不跟随符号链接）。

    owner / group 为 None 表示未查询或查询失败，此时显示数字 id；
    link_target 为 None 且类型为符号链接时表示目标读取失败（显示为 -> ?）。
    """

    path: str
    entry_type: EntryType
    mode: int
    nlink: int
    uid: int
    gid: int
    size: int
    mtime: float
    owner: str | None = None
    group: str | None = None
    link_target: str | None = None

    @property
    def permissions(self) -> tuple[bool, ...]:
        return permission_bits(self.mode)

    @property
    def is_dir(self) -> bool:
        return self.entry_type is EntryType.DIRECTORY

    @property
    def is_symlink(self) -> bool:
        return self.entry_type is EntryType.SYMLINK


def permission_bits(mode: int) -> tuple[bool, ...]:
    """st_mode -> 9 个布尔值（rwx × 属主/属组/其他）。"""
    return tuple(bool(mode & bit) for bit in PERMISSION_BITS)


def is_hidden(name: str) -> bool:
    return name.startswith(HIDDEN_PREFIX)
