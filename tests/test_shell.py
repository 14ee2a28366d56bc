"""Tests for shell script generation and emission."""

from __future__ import annotations

import io
import unittest
from datetime import date
from pathlib import Path
from unittest import mock

from trypick import shell
from trypick.shell import (
    ChangeDirectory,
    CreateAndEnter,
    SelectWorkspace,
    action_script,
    clone_script,
    dated_name,
    emit_script,
    init_script,
    is_git_url,
    repo_name_from_url,
    worktree_script,
)

TODAY = date(2026, 10, 19)


class ActionScriptTests(unittest.TestCase):
    def test_change_directory_touches_then_enters(self) -> None:
        self.assertEqual(
            action_script(ChangeDirectory(Path("/ws/alpha"))),
            "touch /ws/alpha && \\\n  cd /ws/alpha",
        )

    def test_create_and_enter_makes_directory_first(self) -> None:
        self.assertEqual(
            action_script(CreateAndEnter(Path("/ws/newproj-2026-10-19"))),
            "mkdir -p /ws/newproj-2026-10-19 && \\\n"
            "  touch /ws/newproj-2026-10-19 && \\\n"
            "  cd /ws/newproj-2026-10-19",
        )

    def test_select_workspace_exports_try_path(self) -> None:
        self.assertEqual(action_script(SelectWorkspace(Path("/srv/tries"))), "export TRY_PATH=/srv/tries")

    def test_paths_with_shell_metacharacters_are_quoted(self) -> None:
        script = action_script(ChangeDirectory(Path("/ws/it's here")))
        self.assertEqual(script, "touch '/ws/it'\"'\"'s here' && \\\n  cd '/ws/it'\"'\"'s here'")


class NamingTests(unittest.TestCase):
    def test_dated_name_replaces_spaces(self) -> None:
        self.assertEqual(dated_name("my idea", TODAY), "my-idea-2026-10-19")

    def test_git_url_detection(self) -> None:
        self.assertTrue(is_git_url("https://github.com/user/repo.git"))
        self.assertTrue(is_git_url("git@github.com:user/repo.git"))
        self.assertFalse(is_git_url("repo"))

    def test_repo_name_from_url(self) -> None:
        cases = {
            "https://github.com/user/repo.git": "repo",
            "https://github.com/user/repo": "repo",
            "https://github.com/user/repo/": "repo",
            "git@github.com:user/tool.git": "tool",
        }
        for url, expected in cases.items():
            with self.subTest(url=url):
                self.assertEqual(repo_name_from_url(url), expected)

    def test_repo_name_from_url_rejects_url_without_name(self) -> None:
        with self.assertRaises(ValueError):
            repo_name_from_url("https://")


class GeneratedScriptTests(unittest.TestCase):
    def test_clone_into_dated_directory(self) -> None:
        script = clone_script(Path("/ws"), "https://github.com/user/repo.git", None, TODAY)

        self.assertEqual(
            script.split(" && \\\n  "),
            [
                "mkdir -p /ws/repo-2026-10-19",
                "echo 'Cloning https://github.com/user/repo.git...'",
                "git clone https://github.com/user/repo.git /ws/repo-2026-10-19",
                "cd /ws/repo-2026-10-19",
            ],
        )

    def test_clone_with_explicit_name(self) -> None:
        script = clone_script(Path("/ws"), "git@github.com:user/repo.git", "mine", TODAY)
        self.assertIn("git clone git@github.com:user/repo.git /ws/mine", script)

    def test_worktree_attaches_detached_worktree_inside_repo(self) -> None:
        script = worktree_script(Path("/ws"), "feature x", "main", TODAY)
        steps = script.split(" && \\\n  ")

        self.assertEqual(steps[0], "mkdir -p /ws/feature-x-2026-10-19")
        self.assertIn('git -C "$repo" worktree add --detach /ws/feature-x-2026-10-19 main', steps[1])
        self.assertEqual(steps[2], "cd /ws/feature-x-2026-10-19")

    def test_init_defines_wrapper_and_exports_default_path(self) -> None:
        script = init_script("/usr/bin/try", "~/project/test")

        self.assertIn("try() {", script)
        self.assertIn('out=$(/usr/bin/try "$@" 2>/dev/tty)', script)
        self.assertIn('eval "$out"', script)
        self.assertIn("export TRY_PATH='~/project/test'", script)


class _TtyBuffer(io.StringIO):
    def isatty(self) -> bool:
        return True


class EmitScriptTests(unittest.TestCase):
    def test_captured_output_stays_plain(self) -> None:
        out = io.StringIO()
        emit_script("cd /ws", out)
        self.assertEqual(out.getvalue(), "cd /ws\n")

    def test_terminal_output_is_highlighted(self) -> None:
        out = _TtyBuffer()
        with mock.patch.object(shell, "highlight_script", return_value="<colored>\n") as highlight_mock:
            emit_script("cd /ws", out)
        highlight_mock.assert_called_once_with("cd /ws\n")
        self.assertEqual(out.getvalue(), "<colored>\n")

    def test_color_can_be_disabled_for_terminals(self) -> None:
        out = _TtyBuffer()
        emit_script("cd /ws", out, color=False)
        self.assertEqual(out.getvalue(), "cd /ws\n")

    def test_highlighted_script_keeps_shell_text(self) -> None:
        colored = shell.highlight_script("cd /ws\n")
        self.assertIn("\x1b[", colored)
        self.assertIn("/ws", colored)


if __name__ == "__main__":
    unittest.main()
