"""Shell script generation for the ``try`` wrapper function.

Every command the tool wants the calling shell to run is printed to stdout
and evaluated by the function emitted from ``try init``.
"""

from __future__ import annotations

import re
import shlex
import sys
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import TextIO

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import BashLexer

COMMAND_JOINER = " && \\\n  "
REPO_NAME_RE = re.compile(r"([^/:]+?)(\.git)?/?$")


@dataclass(frozen=True)
class ChangeDirectory:
    path: Path


@dataclass(frozen=True)
class CreateAndEnter:
    path: Path


@dataclass(frozen=True)
class SelectWorkspace:
    path: Path


ShellAction = ChangeDirectory | CreateAndEnter | SelectWorkspace


def dated_name(name: str, today: date) -> str:
    """Return ``<name>-<YYYY-MM-DD>`` with spaces turned into hyphens."""
    return f"{name.replace(' ', '-')}-{today.isoformat()}"


def join_commands(commands: list[str]) -> str:
    return COMMAND_JOINER.join(commands)


def action_script(action: ShellAction) -> str:
    """Shell commands that carry out a committed selector action."""
    quoted = shlex.quote(str(action.path))
    if isinstance(action, ChangeDirectory):
        return join_commands([f"touch {quoted}", f"cd {quoted}"])
    if isinstance(action, CreateAndEnter):
        return join_commands([f"mkdir -p {quoted}", f"touch {quoted}", f"cd {quoted}"])
    return f"export TRY_PATH={quoted}"


def is_git_url(text: str) -> bool:
    return text.startswith("http") or text.startswith("git@")


def repo_name_from_url(url: str) -> str:
    """Extract the repository name from a clone URL.

    Raises ``ValueError`` when no name component can be found.
    """
    match = REPO_NAME_RE.search(url)
    if match is None or not match.group(1):
        raise ValueError(f"invalid git url: {url!r}")
    return match.group(1)


def clone_script(base_path: Path, url: str, name: str | None, today: date) -> str:
    """Clone ``url`` into ``base_path/<name>`` or a dated repository directory."""
    dir_name = name if name else dated_name(repo_name_from_url(url), today)
    target = shlex.quote(str(base_path / dir_name))
    return join_commands(
        [
            f"mkdir -p {target}",
            f"echo {shlex.quote(f'Cloning {url}...')}",
            f"git clone {shlex.quote(url)} {target}",
            f"cd {target}",
        ]
    )


def worktree_script(base_path: Path, name: str, base_ref: str | None, today: date) -> str:
    """Create a dated directory and attach a detached worktree when in a repo."""
    target = shlex.quote(str(base_path / dated_name(name, today)))
    ref = f" {shlex.quote(base_ref)}" if base_ref else ""
    worktree = (
        "if git rev-parse --is-inside-work-tree >/dev/null 2>&1; then "
        'repo=$(git rev-parse --show-toplevel); '
        f'git -C "$repo" worktree add --detach {target}{ref}; '
        "fi"
    )
    return join_commands([f"mkdir -p {target}", worktree, f"cd {target}"])


def init_script(command: str, default_path: str) -> str:
    """Shell function wrapper that evaluates ``try`` output on success.

    ``command`` must already be shell-quoted.
    """
    return f"""
try() {{
    local out
    out=$({command} "$@" 2>/dev/tty)
    if [ $? -eq 0 ]; then
        eval "$out"
    fi
}}
export TRY_PATH={shlex.quote(default_path)}
"""


def highlight_script(script: str) -> str:
    return highlight(script, BashLexer(), TerminalFormatter())


def emit_script(script: str, stream: TextIO | None = None, *, color: bool = True) -> None:
    """Print ``script`` for the wrapper to evaluate.

    Output to an interactive terminal is syntax highlighted; captured output
    stays plain so ``eval`` sees only shell text.
    """
    out = stream if stream is not None else sys.stdout
    text = script if script.endswith("\n") else script + "\n"
    if color and out.isatty():
        text = highlight_script(text)
    out.write(text)
    out.flush()
