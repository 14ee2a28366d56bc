"""Command-line front door for ``try``.

Parses arguments, resolves the workspace base path and history store, and
dispatches to the interactive selector or one of the script generators.
Everything meant for the calling shell is printed to stdout.
"""

from __future__ import annotations

import argparse
import logging
import shlex
import sys
import termios
from datetime import date
from pathlib import Path

from . import __version__
from .entries import HistoryMode, ScanMode
from .history import NullHistory, WorkspaceHistory
from .runtime import run_selector
from .runtime.config import (
    DEFAULT_BASE_PATH,
    ConfigError,
    color_disabled_by_env,
    expand_path,
    history_path,
    load_theme_name,
    resolve_base_path,
    save_theme_name,
)
from .shell import (
    SelectWorkspace,
    action_script,
    clone_script,
    emit_script,
    init_script,
    is_git_url,
    worktree_script,
)
from .ui_theme import available_theme_names

logger = logging.getLogger(__name__)

LOG_FORMAT = "try: %(levelname)s: %(message)s"
SUBCOMMANDS = ("init", "clone", "worktree", "set")


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}); remembered for later runs.",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug details to stderr.")


def build_parser() -> argparse.ArgumentParser:
    """Parser for the subcommand forms of ``try``."""
    parser = argparse.ArgumentParser(prog="try", description="Ephemeral workspace manager.")
    _add_common_arguments(parser)
    sub = parser.add_subparsers(dest="command")

    init_parser = sub.add_parser("init", help="Output shell function definition.")
    init_parser.add_argument("path", nargs="?", default=DEFAULT_BASE_PATH)

    clone_parser = sub.add_parser("clone", help="Clone git repo into a date-suffixed directory.")
    clone_parser.add_argument("url")
    clone_parser.add_argument("name", nargs="?", default=None)

    worktree_parser = sub.add_parser("worktree", help="Create worktree in a dated directory.")
    worktree_parser.add_argument("name")
    worktree_parser.add_argument("-b", "--base", default=None, help="Commit-ish to check out.")

    sub.add_parser("set", help="Select a workspace from history.")
    return parser


def build_query_parser(add_help: bool = True) -> argparse.ArgumentParser:
    """Parser for the default ``try [query]`` form."""
    parser = argparse.ArgumentParser(
        prog="try",
        add_help=add_help,
        description="Ephemeral workspace manager.",
        epilog=f"Subcommands: {', '.join(SUBCOMMANDS)}.",
    )
    _add_common_arguments(parser)
    parser.add_argument("query", nargs="*", help="Optional initial search query, or a git URL to clone.")
    return parser


def parse_args(argv: list[str]) -> argparse.Namespace:
    """Parse ``argv``, routing to the subcommand parser when one is named."""
    probe, _unknown = build_query_parser(add_help=False).parse_known_args(argv)
    if probe.query and probe.query[0] in SUBCOMMANDS:
        return build_parser().parse_args(argv)
    args = build_query_parser().parse_args(argv)
    args.command = None
    return args


def _open_history() -> WorkspaceHistory | NullHistory:
    try:
        return WorkspaceHistory(history_path())
    except ConfigError as exc:
        logger.warning("%s; history features unavailable", exc)
        return NullHistory(str(exc))


def _record_workspace(history: WorkspaceHistory | NullHistory, path: Path) -> None:
    try:
        history.add(path)
    except OSError as exc:
        logger.warning("failed to save workspace %s: %s", path, exc)


def _self_command() -> str:
    """Shell-quoted command that re-invokes this program."""
    argv0 = sys.argv[0] if sys.argv and sys.argv[0] else "try"
    if Path(argv0).name == "__main__.py":
        return f"{shlex.quote(sys.executable)} -m trypick"
    candidate = Path(argv0)
    if candidate.exists():
        return shlex.quote(str(candidate.resolve()))
    return shlex.quote(argv0)


def _run_interactive(
    mode: ScanMode | HistoryMode,
    query: str,
    base_path: Path,
    history: WorkspaceHistory | NullHistory,
    theme_name: str | None,
    no_color: bool,
) -> None:
    try:
        action = run_selector(mode, query, base_path, theme_name=theme_name, no_color=no_color)
    except (OSError, termios.error) as exc:
        raise SystemExit(f"try: {exc}") from exc

    if action is None:
        raise SystemExit(1)
    emit_script(action_script(action), color=not no_color)
    if isinstance(action, SelectWorkspace):
        _record_workspace(history, action.path)


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and run the requested ``try`` command.

    Exits non-zero without printing a script when the selector is cancelled
    or an unrecovered error occurs.
    """
    args = parse_args(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format=LOG_FORMAT,
    )

    no_color = args.no_color or color_disabled_by_env()
    if args.theme:
        save_theme_name(args.theme)
    theme_name = args.theme or load_theme_name()
    today = date.today()

    try:
        base_path = resolve_base_path()
    except ConfigError as exc:
        raise SystemExit(f"try: {exc}") from exc
    history = _open_history()

    if args.command == "init":
        try:
            _record_workspace(history, expand_path(args.path))
        except ConfigError as exc:
            logger.warning("failed to save workspace: %s", exc)
        emit_script(init_script(_self_command(), args.path), color=not no_color)
        return

    if args.command == "clone":
        try:
            script = clone_script(base_path, args.url, args.name, today)
        except ValueError as exc:
            raise SystemExit(f"try: {exc}") from exc
        emit_script(script, color=not no_color)
        return

    if args.command == "worktree":
        emit_script(worktree_script(base_path, args.name, args.base, today), color=not no_color)
        return

    if args.command == "set":
        try:
            recorded = history.load()
        except OSError as exc:
            raise SystemExit(f"try: {exc}") from exc
        _run_interactive(HistoryMode(tuple(recorded)), "", base_path, history, theme_name, no_color)
        return

    query = " ".join(args.query)
    if is_git_url(query):
        try:
            script = clone_script(base_path, query, None, today)
        except ValueError as exc:
            raise SystemExit(f"try: {exc}") from exc
        emit_script(script, color=not no_color)
        return
    _run_interactive(ScanMode(base_path), query, base_path, history, theme_name, no_color)


if __name__ == "__main__":
    main()
