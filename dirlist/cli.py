"""
dirlist CLI：列出目录内容（类似 ls），退出码为累积的错误位掩码。
"""

from __future__ import annotations

import logging
import sys
from typing import Annotated, Optional

import typer
from typer.core import TyperCommand

from dirlist.driver import list_paths
from dirlist.models import PathConfiguration
from dirlist.walker import ListingState

EXIT_STATUS_HELP = (
    "Exit status: 0 ok; 64 error occurred; 72 file not found; 80 permission denied; "
    "88 file not found and permission denied; 96 user/group lookup failed; 68 other error. "
    "Values are bitmasks and combine."
)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

END_OF_OPTIONS = "--"
# `--` 之后的参数原样作为路径，存放在 ctx.meta 中
_OPERANDS_KEY = "dirlist.operands"

app = typer.Typer(
    name="dirlist",
    help="List directory contents.",
    add_completion=False,
)


class LsCommand(TyperCommand):
    """
    在解析选项之前截出 `--` 之后的参数。

    未知选项（ignore_unknown_options）会和路径一起进入位置参数，
    所以只有 `--` 之前以 `-` 开头的参数才算未知选项；`--` 之后一律是路径。
    """

    def parse_args(self, ctx: typer.Context, args: list[str]) -> list[str]:
        if END_OF_OPTIONS in args:
            i = args.index(END_OF_OPTIONS)
            ctx.meta[_OPERANDS_KEY] = args[i + 1 :]
            args = args[:i]
        return super().parse_args(ctx, args)


def _setup_logging(log_level: str) -> None:
    """按级别名配置根 logger（输出到 stderr）；无效级别回退为 WARNING。"""
    level = getattr(logging, (log_level or "").upper(), None)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=[logging.StreamHandler(sys.stderr)])
    logging.getLogger("dirlist").setLevel(level)


def _split_unknown_flags(args: list[str]) -> tuple[list[str], list[str]]:
    """`--` 之前的位置参数拆成 (路径, 未知选项)；单独的 `-` 是路径。"""
    paths: list[str] = []
    unknown: list[str] = []
    for arg in args:
        if arg.startswith("-") and len(arg) > 1:
            unknown.append(arg)
        else:
            paths.append(arg)
    return paths, unknown


def _operands(ctx: typer.Context) -> list[str]:
    """`--` 之后的路径（没有 `--` 时为空）。"""
    return list(ctx.meta.get(_OPERANDS_KEY, []))


@app.command(
    "ls",
    cls=LsCommand,
    help="List information about the given paths (the current directory by default).",
    epilog=EXIT_STATUS_HELP,
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True},
)
def ls_cmd(
    ctx: typer.Context,
    paths: Annotated[Optional[list[str]], typer.Argument(help="Files or directories to list (default: .)")] = None,
    all_: Annotated[bool, typer.Option("--all", "-a", help="Do not ignore entries starting with .")] = False,
    long: Annotated[bool, typer.Option("--long", "-l", help="Long listing format, shows symlink targets")] = False,
    recursive: Annotated[bool, typer.Option("--recursive", "-R", help="List subdirectories recursively")] = False,
    count: Annotated[bool, typer.Option("--count", "-n", help="Only count entries, print the total")] = False,
    human_readable: Annotated[
        bool, typer.Option("--human-readable", "-h", help="Print sizes like 1.0K 234M 2.0G (with -l)")
    ] = False,
    one_per_line: Annotated[bool, typer.Option("-1", hidden=True, help="One entry per line (always on)")] = False,
    log_level: Annotated[
        str, typer.Option("--log-level", envvar="DIRLIST_LOG_LEVEL", help="Logging level (DEBUG, INFO, ...)")
    ] = "WARNING",
) -> None:
    _setup_logging(log_level)

    targets, unknown = _split_unknown_flags(paths or [])
    for flag in unknown:
        typer.echo(f"Unimplemented flag {flag}", err=True)
    targets.extend(_operands(ctx))

    config = PathConfiguration(
        show_hidden=all_,
        long_format=long,
        recursive=recursive,
        count_only=count,
        human_readable=human_readable,
    )
    status = list_paths(targets, config, ListingState())
    raise typer.Exit(status)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
