"""
pytest 配置与共享 fixture。

示例目录树结构见 tests.config。
"""

from __future__ import annotations

from pathlib import Path

import pytest

from tests.config import HIDDEN_FILE, NESTED_FILE, SAMPLE_CONTENT, SAMPLE_FILE, SUBDIR
from tests.helpers import Capture


@pytest.fixture
def capture() -> Capture:
    return Capture()


@pytest.fixture
def tree(tmp_path: Path) -> Path:
    """root/{a.txt, .hidden, sub/{b.txt}}。"""
    root = tmp_path / "root"
    root.mkdir()
    (root / SAMPLE_FILE).write_text(SAMPLE_CONTENT)
    (root / HIDDEN_FILE).write_text("")
    (root / SUBDIR).mkdir()
    (root / SUBDIR / NESTED_FILE).write_text("b")
    return root


@pytest.fixture
def locked_dir(tmp_path: Path):
    """一个无任何权限的目录；测试结束后恢复权限以便清理。"""
    d = tmp_path / "locked"
    d.mkdir()
    (d / "secret.txt").write_text("x")
    d.chmod(0)
    yield d
    d.chmod(0o755)
