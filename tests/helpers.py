"""测试辅助：收集输出的 ListingState、root 下跳过的权限用例标记、拒绝打开目录的 scandir 替身。"""

from __future__ import annotations

import errno
import os

import pytest

from dirlist import walker
from dirlist.errors import ErrorAggregator
from dirlist.walker import ListingState

skip_if_root = pytest.mark.skipif(
    hasattr(os, "geteuid") and os.geteuid() == 0,
    reason="root 不受目录权限限制",
)


class Capture:
    """收集输出行与诊断行的 ListingState。"""

    def __init__(self) -> None:
        self.lines: list[str] = []
        self.diagnostics: list[str] = []
        self.state = ListingState(errors=ErrorAggregator(self.diagnostics.append), emit=self.lines.append)

    @property
    def status(self) -> int:
        return self.state.errors.status


def deny_scandir(monkeypatch: pytest.MonkeyPatch, *denied: object) -> None:
    """让 os.scandir 对指定目录抛 EACCES（root 下也能稳定复现“无法打开目录”）。"""
    denied_paths = {os.fspath(p) for p in denied}
    real_scandir = os.scandir

    def fake_scandir(path="."):
        if os.fspath(path) in denied_paths:
            raise PermissionError(errno.EACCES, os.strerror(errno.EACCES), os.fspath(path))
        return real_scandir(path)

    monkeypatch.setattr(walker.os, "scandir", fake_scandir)
