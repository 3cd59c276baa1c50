"""
顶层调度：处理命令行给出的每个路径，汇总计数与退出码。
"""

from __future__ import annotations

import logging
import os
import stat
from typing import Sequence

from dirlist.models import PathConfiguration
from dirlist.walker import ListingState, list_entry, walk

logger = logging.getLogger(__name__)

DEFAULT_TARGET = "."


def list_paths(paths: Sequence[str], config: PathConfiguration, state: ListingState | None = None) -> int:
    """
    列出所有目标路径，返回累积的退出码位掩码。

    - 未给路径时列当前目录
    - 不存在 / 无法访问的目标输出诊断后跳过，不影响后续目标
    - 目录：多个目标或递归时先输出 `路径:` 标题；后面还有目标时追加一个空行
    - 非目录（普通文件、符号链接等）直接按给出的路径名列出
    - -n 时最后输出总数，且不输出标题和空行
    """
    if state is None:
        state = ListingState()
    targets = list(paths) or [DEFAULT_TARGET]
    show_headers = len(targets) > 1 or config.recursive
    quiet = config.count_only

    for index, target in enumerate(targets):
        try:
            st = os.lstat(target)
        except OSError as e:
            state.errors.report("cannot access", target, e)
            continue

        if stat.S_ISDIR(st.st_mode):
            logger.debug("listing directory target %s", target)
            if show_headers and not quiet:
                state.emit(f"{target}:")
            walk(target, config, state)
            if index + 1 < len(targets) and not quiet:
                state.emit("")
        else:
            list_entry(target, target, config, state)

    if config.count_only:
        state.emit(str(state.count))
    return state.errors.status
