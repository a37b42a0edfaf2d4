"""Tests for the command-line entrypoint.

The interactive loop and the terminal are patched out; these cover setup
failures, ``--list`` output and the export hand-off.
"""

from __future__ import annotations

import io
import tempfile
import termios
import unittest
from contextlib import redirect_stdout
from pathlib import Path
from unittest import mock

from dropkick import cli
from dropkick.browser import Exit, Extract
from dropkick.config import Settings


def _write(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        base = Path(self._tmp.name)
        self.templates = base / "templates"
        self.project = base / "project"
        self.project.mkdir()
        patcher = mock.patch("dropkick.cli.load_settings", return_value=Settings())
        patcher.start()
        self.addCleanup(patcher.stop)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _main(self, *argv: str) -> str:
        out = io.StringIO()
        with redirect_stdout(out):
            cli.main(["--templates", str(self.templates), *argv])
        return out.getvalue()

    def test_list_prints_indented_tree(self) -> None:
        _write(self.templates / "gem" / "Gemfile.tt", "")
        _write(self.templates / "gem" / "lib" / "main.rb.tt", "")
        _write(self.templates / "gem" / "ignored.txt", "")

        output = self._main("--list")

        self.assertEqual(output, "gem/\n  Gemfile\n  lib/\n    main.rb\n")

    def test_missing_root_lists_nothing(self) -> None:
        self.assertEqual(self._main("--list"), "")

    def test_unreadable_root_exits(self) -> None:
        _write(self.templates, "not a directory")
        with self.assertRaises(SystemExit) as ctx:
            self._main("--list")
        self.assertIn("Cannot read template root", str(ctx.exception.code))

    def test_terminal_failure_exits(self) -> None:
        with mock.patch("dropkick.cli.open_terminal", side_effect=termios.error(25, "not a tty")):
            with self.assertRaises(SystemExit) as ctx:
                self._main()
        self.assertIn("Cannot initialize terminal", str(ctx.exception.code))

    def test_quit_writes_nothing(self) -> None:
        _write(self.templates / "gem" / "Gemfile.tt", "x")
        with mock.patch("dropkick.cli.open_terminal"), mock.patch(
            "dropkick.cli.run_browser_loop", return_value=Exit()
        ), mock.patch("dropkick.cli.materialize") as materialize_mock:
            self.assertEqual(self._main(), "")
        materialize_mock.assert_not_called()

    def test_export_renders_selection_into_cwd(self) -> None:
        _write(self.templates / "gem" / "lib" / "main.rb.tt", "module {{ pascal_name }}; end # {{ author }}\n")
        _write(self.project / ".dropkickrc", "project:\n  name: fancy-gem\n  template: gem\n")

        def select_and_export(browser, terminal, stdin_fd, theme):
            browser.selection.toggle(str(self.templates / "gem" / "lib" / "main.rb.tt"))
            return Extract()

        git_values = {"user.name": "octo"}
        with mock.patch("dropkick.cli.open_terminal"), mock.patch(
            "dropkick.cli.run_browser_loop", side_effect=select_and_export
        ), mock.patch("dropkick.cli.Path.cwd", return_value=self.project), mock.patch(
            "dropkick.git_config.git_config_value", side_effect=lambda key, timeout: git_values.get(key, "")
        ):
            output = self._main()

        written = self.project / "lib" / "main.rb"
        self.assertEqual(written.read_text(encoding="utf-8"), "module FancyGem; end # octo\n")
        self.assertIn("Imported 1 of 1 file(s)", output)

    def test_missing_git_user_name_exits_without_writing(self) -> None:
        _write(self.templates / "gem" / "a.txt.tt", "{{ name }}")

        def select_and_export(browser, terminal, stdin_fd, theme):
            browser.selection.toggle(str(self.templates / "gem" / "a.txt.tt"))
            return Extract()

        with mock.patch("dropkick.cli.open_terminal"), mock.patch(
            "dropkick.cli.run_browser_loop", side_effect=select_and_export
        ), mock.patch("dropkick.cli.Path.cwd", return_value=self.project), mock.patch(
            "dropkick.git_config.git_config_value", return_value=""
        ):
            with self.assertRaises(SystemExit) as ctx:
                self._main("--name", "demo")

        self.assertIn("user.name", str(ctx.exception.code))
        self.assertFalse((self.project / "a.txt").exists())


if __name__ == "__main__":
    unittest.main()
