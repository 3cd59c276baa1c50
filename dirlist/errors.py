"""
错误汇总：把整个运行过程中的失败累积成一个退出码位掩码。

退出码（与 --help 中的表格一致）：
- 0   成功
- 64  出错（总是与下面某个原因位同时设置）
- 72  = 64 | 8   路径不存在
- 80  = 64 | 16  权限不足
- 96  = 64 | 32  用户/组名查询失败
- 68  = 64 | 4   其他系统错误
多个原因按位或叠加，例如 88 表示既有不存在又有权限不足。位一旦设置不会被清除。
"""

from __future__ import annotations

import errno
import logging
from enum import Enum
from typing import Callable

import typer

logger = logging.getLogger(__name__)

PROG_NAME = "ls"

EXIT_OK = 0
EXIT_OTHER = 1 << 2
EXIT_NOT_FOUND = 1 << 3
EXIT_PERMISSION = 1 << 4
EXIT_LOOKUP = 1 << 5
EXIT_ERROR = 1 << 6


class Cause(Enum):
    """路径访问失败的原因分类，值为对应的退出码位。"""

    NOT_FOUND = EXIT_NOT_FOUND
    PERMISSION = EXIT_PERMISSION
    OTHER = EXIT_OTHER

    @property
    def bit(self) -> int:
        return self.value


def classify(exc: OSError) -> Cause:
    """按 errno 分类：ENOENT -> 不存在，EACCES/EPERM -> 权限不足，其余 -> 其他。"""
    if exc.errno == errno.ENOENT:
        return Cause.NOT_FOUND
    if exc.errno in (errno.EACCES, errno.EPERM):
        return Cause.PERMISSION
    return Cause.OTHER


def _describe(exc: OSError) -> str:
    return exc.strerror or str(exc)


def _echo_err(message: str) -> None:
    typer.echo(message, err=True)


class ErrorAggregator:
    """
    进程级错误累加器。

    每次失败输出一行诊断（默认写 stderr），并把对应位或进 status。
    测试可传入自定义 diagnostics 收集诊断行。
    """

    def __init__(self, diagnostics: Callable[[str], None] | None = None, *, prog: str = PROG_NAME):
        self.status = EXIT_OK
        self.prog = prog
        self._diagnostics = diagnostics or _echo_err

    def record(self, cause: Cause) -> None:
        self.status |= EXIT_ERROR | cause.bit
        logger.debug("recorded %s, status=%d", cause.name, self.status)

    def record_lookup_failure(self) -> None:
        self.status |= EXIT_ERROR | EXIT_LOOKUP
        logger.debug("recorded name lookup failure, status=%d", self.status)

    def report(self, action: str, path: str, exc: OSError) -> Cause:
        """输出 `ls: <action> <path>: <描述>` 并记录分类后的原因。"""
        self._diagnostics(f"{self.prog}: {action} {path}: {_describe(exc)}")
        cause = classify(exc)
        self.record(cause)
        return cause

    def report_lookup(self, kind: str, ident: int) -> None:
        """用户/组名查不到：输出诊断并设置名称查询失败位（不设路径访问原因位）。"""
        self._diagnostics(f"{self.prog}: cannot find {kind} name for id {ident}")
        self.record_lookup_failure()

    @property
    def failed(self) -> bool:
        return self.status != EXIT_OK
