"""Tests for copying selected templates into a project directory.

Uses temporary template and destination trees; the interpolation context
is built with a stubbed git identity.
"""

from __future__ import annotations

import io
import tempfile
import unittest
from pathlib import Path, PurePath

from dropkick.errors import GitIdentityError, TemplateRootError
from dropkick.git_config import GitIdentity
from dropkick.interpolation import ConfigBuilder
from dropkick.materialize import destination_for, materialize


def _identity() -> GitIdentity:
    return GitIdentity(author="octo", email="o@example.com", repo_domain="github.com", registry_domain="", k8s_domain="")


def _context_for(destination: PurePath, binary: bool = False):
    return ConfigBuilder(name="demo-app").for_destination(destination, binary).build(resolve=_identity)


def _no_identity(destination: PurePath, binary: bool):
    raise GitIdentityError("git config user.name didn't return a value")


class DestinationForTests(unittest.TestCase):
    def test_drops_template_folder_and_marker(self) -> None:
        root = Path("/t")
        self.assertEqual(destination_for(root / "gem" / "lib" / "main.rb.tt", root), PurePath("lib/main.rb"))
        self.assertEqual(destination_for(root / "gem" / "Gemfile.tt", root), PurePath("Gemfile"))

    def test_single_segment_keeps_its_name(self) -> None:
        root = Path("/t")
        self.assertEqual(destination_for(root / "README.md.tt", root), PurePath("README.md"))


class MaterializeTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        base = Path(self._tmp.name)
        self.template_root = base / "templates"
        self.dest = base / "project"
        self.dest.mkdir()

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _template(self, relative: str, content: bytes) -> str:
        path = self.template_root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        return str(path)

    def test_no_selection_prints_message(self) -> None:
        out = io.StringIO()
        report = materialize([], self.template_root, self.dest, _context_for, out)
        self.assertEqual(out.getvalue(), "\nNo files selected.\n\n")
        self.assertEqual(report.total, 0)

    def test_renders_into_nested_directories(self) -> None:
        source = self._template("gem/lib/deep/main.rb.tt", b"module {{ pascal_name }} # <%= config[:ext] %>\n")
        out = io.StringIO()

        report = materialize([source], self.template_root, self.dest, _context_for, out)

        written = self.dest / "lib" / "deep" / "main.rb"
        self.assertEqual(written.read_text(encoding="utf-8"), "module DemoApp # rb\n")
        self.assertEqual(report.imported, [written])
        self.assertIn("  • lib/deep/main.rb\n", out.getvalue())
        self.assertIn("Imported 1 of 1 file(s) (0 skipped, 0 failed)", out.getvalue())

    def test_existing_file_is_never_overwritten(self) -> None:
        source = self._template("gem/README.md.tt", b"# {{ name }}\n")
        existing = self.dest / "README.md"
        existing.write_bytes(b"keep me\x00")
        out = io.StringIO()

        report = materialize([source], self.template_root, self.dest, _context_for, out)

        self.assertEqual(existing.read_bytes(), b"keep me\x00")
        self.assertEqual(report.skipped, [existing])
        self.assertIn("Skipping copy because file existed locally. README.md", out.getvalue())

    def test_render_failure_is_reported_and_export_continues(self) -> None:
        bad = self._template("gem/a.txt.tt", b"{{ missing_field }}")
        good = self._template("gem/b.txt.tt", b"{{ name }}")
        out = io.StringIO()

        report = materialize([good, bad], self.template_root, self.dest, _context_for, out)

        self.assertFalse((self.dest / "a.txt").exists())
        self.assertEqual((self.dest / "b.txt").read_text(encoding="utf-8"), "demo-app")
        self.assertEqual(len(report.failed), 1)
        self.assertIn("Error copying a.txt: missing value for 'missing_field'", out.getvalue())
        self.assertIn("(0 skipped, 1 failed)", out.getvalue())

    def test_missing_git_identity_writes_nothing(self) -> None:
        binary = self._template("gem/logo.png.tt", b"\x89PNG\x00\x01")
        text = self._template("gem/z.txt.tt", b"{{ name }}")

        with self.assertRaises(GitIdentityError):
            materialize([binary, text], self.template_root, self.dest, _no_identity, io.StringIO())

        self.assertEqual(list(self.dest.iterdir()), [])

    def test_missing_git_identity_aborts_binary_only_export(self) -> None:
        binary = self._template("gem/logo.png.tt", b"\x89PNG\x00\x01")

        with self.assertRaises(GitIdentityError):
            materialize([binary], self.template_root, self.dest, _no_identity, io.StringIO())

        self.assertEqual(list(self.dest.iterdir()), [])

    def test_missing_git_identity_aborts_with_existing_destinations(self) -> None:
        text = self._template("gem/README.md.tt", b"# {{ name }}\n")
        binary = self._template("gem/logo.png.tt", b"\x89PNG\x00\x01")
        existing = self.dest / "README.md"
        existing.write_bytes(b"keep me")

        with self.assertRaises(GitIdentityError):
            materialize([text, binary], self.template_root, self.dest, _no_identity, io.StringIO())

        self.assertEqual(sorted(path.name for path in self.dest.iterdir()), ["README.md"])
        self.assertEqual(existing.read_bytes(), b"keep me")

    def test_context_marks_binary_templates(self) -> None:
        binary = self._template("gem/logo.png.tt", b"\x89PNG\x00\x01")
        text = self._template("gem/bin/run.tt", b"#!/bin/sh\n")
        seen: dict[PurePath, bool] = {}

        def recording_context(destination: PurePath, is_binary: bool):
            context = _context_for(destination, is_binary)
            seen[destination] = context.bin
            return context

        materialize([binary, text], self.template_root, self.dest, recording_context, io.StringIO())

        self.assertEqual(seen, {PurePath("logo.png"): True, PurePath("bin/run"): False})

    def test_binary_template_is_copied_verbatim(self) -> None:
        payload = b"\x89PNG\x00{{ name }}\xff"
        source = self._template("gem/logo.png.tt", payload)

        materialize([source], self.template_root, self.dest, _context_for, io.StringIO())

        self.assertEqual((self.dest / "logo.png").read_bytes(), payload)

    def test_refuses_to_write_inside_template_root(self) -> None:
        source = self._template("gem/a.txt.tt", b"x")

        with self.assertRaises(TemplateRootError):
            materialize([source], self.template_root, self.template_root / "gem", _context_for, io.StringIO())

        self.assertFalse((self.template_root / "gem" / "a.txt").exists())


if __name__ == "__main__":
    unittest.main()
