"""CLI argument handling and top-level failure tests.

Verifies how ``dirindex.cli.main`` maps flags to options, reports outputs,
and turns configuration or filesystem errors into one failure.
"""

from __future__ import annotations

import io
import json
import os
import tempfile
import unittest
from contextlib import ExitStack
from pathlib import Path
from unittest import mock

from dirindex import cli

_ISOLATED_ENV_KEYS = (
    "GITHUB_OUTPUT",
    "GITHUB_ACTIONS",
    "RUNNER_DEBUG",
    "INPUT_ROOT",
    "INPUT_OUTPUT-FORMAT",
    "INPUT_OUTPUT_FORMAT",
    "INPUT_STYLESHEET",
    "INPUT_IGNORE",
    "INPUT_INCLUDE-METADATA",
    "INPUT_INCLUDE_METADATA",
    "INPUT_TITLE-TEMPLATE",
    "INPUT_TITLE_TEMPLATE",
    "INPUT_THEME",
)


class CliTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self._stack = ExitStack()
        self.addCleanup(self._stack.close)
        tmp = self._stack.enter_context(tempfile.TemporaryDirectory())
        self.tmp = Path(tmp).resolve()
        self.config_path = self.tmp / "config" / "config.json"
        self._stack.enter_context(mock.patch("dirindex.config.CONFIG_PATH", self.config_path))
        self.environ = self._stack.enter_context(mock.patch.dict("os.environ", {}))
        for key in _ISOLATED_ENV_KEYS:
            self.environ.pop(key, None)
        self.stdout = io.StringIO()
        self.stderr = io.StringIO()
        self._stack.enter_context(mock.patch("sys.stdout", self.stdout))
        self._stack.enter_context(mock.patch("sys.stderr", self.stderr))

    def make_site(self) -> Path:
        site = self.tmp / "site"
        (site / "docs").mkdir(parents=True)
        (site / "docs" / "guide.md").write_text("# guide\n", encoding="utf-8")
        (site / "app.js").write_text("", encoding="utf-8")
        (site / "node_modules").mkdir()
        (site / "node_modules" / "pkg.js").write_text("", encoding="utf-8")
        return site


class CliRunTests(CliTestCase):
    def test_scan_writes_listings_and_prints_summary(self) -> None:
        site = self.make_site()

        cli.main([str(site), "--ignore", "node_modules"])

        self.assertTrue((site / "index.html").is_file())
        self.assertTrue((site / "docs" / "index.json").is_file())
        self.assertFalse((site / "node_modules" / "index.json").exists())
        self.assertIn("Generated 4 index files across 2 directories", self.stdout.getvalue())

    def test_flags_map_to_options(self) -> None:
        site = self.make_site()

        cli.main([str(site), "--output-format", "json", "--no-metadata", "--ignore", "node_modules,docs"])

        manifest = json.loads((site / "index.json").read_text(encoding="utf-8"))
        self.assertEqual(manifest["entries"], [{"name": "app.js", "type": "file", "path": "app.js"}])
        self.assertFalse((site / "index.html").exists())

    def test_outputs_written_to_github_output_file(self) -> None:
        site = self.make_site()
        output_file = self.tmp / "github_output"
        self.environ["GITHUB_OUTPUT"] = str(output_file)

        cli.main([str(site), "--ignore", "node_modules", "--print-outputs"])

        lines = output_file.read_text(encoding="utf-8").splitlines()
        self.assertEqual(
            lines,
            [
                "generated-count=4",
                "directories-scanned=2",
                f"manifest-path={site / 'index.json'}",
            ],
        )
        self.assertIn("directories-scanned=2\n", self.stdout.getvalue())

    def test_site_with_undecodable_file_name_completes(self) -> None:
        if os.name != "posix":
            self.skipTest("byte file names need a POSIX filesystem")
        site = self.make_site()
        try:
            with open(os.path.join(os.fsencode(str(site)), b"bad\xff.txt"), "wb"):
                pass
        except OSError:
            self.skipTest("filesystem rejects non-UTF-8 names")

        cli.main([str(site), "--ignore", "node_modules"])

        self.assertGreater((site / "index.html").stat().st_size, 0)
        self.assertIn("bad\ufffd.txt", (site / "index.html").read_text(encoding="utf-8"))
        self.assertIn("Generated 4 index files across 2 directories", self.stdout.getvalue())

    def test_environment_inputs_are_used_without_flags(self) -> None:
        site = self.make_site()
        self.environ["INPUT_ROOT"] = str(site)
        self.environ["INPUT_OUTPUT-FORMAT"] = "html"
        self.environ["INPUT_IGNORE"] = "node_modules"

        cli.main([])

        self.assertTrue((site / "index.html").is_file())
        self.assertFalse((site / "index.json").exists())


class CliFailureTests(CliTestCase):
    def test_missing_root_exits_with_single_failure(self) -> None:
        missing = self.tmp / "nonexistent"

        with self.assertRaises(SystemExit) as ctx:
            cli.main([str(missing)])

        self.assertEqual(ctx.exception.code, 1)
        self.assertEqual(self.stderr.getvalue().count("Error: "), 1)
        self.assertIn("does not exist", self.stderr.getvalue())
        self.assertFalse(missing.exists())

    def test_missing_root_emits_annotation_inside_actions(self) -> None:
        self.environ["GITHUB_ACTIONS"] = "true"

        with self.assertRaises(SystemExit):
            cli.main([str(self.tmp / "nonexistent")])

        self.assertIn("::error::Root directory does not exist", self.stdout.getvalue())

    def test_unknown_theme_fails_before_writing(self) -> None:
        site = self.make_site()

        with self.assertRaises(SystemExit) as ctx:
            cli.main([str(site), "--theme", "no-such-style"])

        self.assertEqual(ctx.exception.code, 1)
        self.assertFalse((site / "index.html").exists())

    def test_filesystem_errors_abort_the_run(self) -> None:
        site = self.make_site()

        with mock.patch("dirindex.walk.os.scandir", side_effect=PermissionError("denied")):
            with self.assertRaises(SystemExit) as ctx:
                cli.main([str(site)])

        self.assertEqual(ctx.exception.code, 1)
        self.assertIn("denied", self.stderr.getvalue())


class CliUtilityTests(CliTestCase):
    def test_list_themes_prints_builtin_first(self) -> None:
        cli.main(["--list-themes"])

        names = self.stdout.getvalue().splitlines()
        self.assertEqual(names[0], "default")
        self.assertIn("monokai", names)

    def test_save_defaults_persists_given_values_only(self) -> None:
        cli.main(["--output-format", "json", "--no-metadata", "--save-defaults"])

        saved = json.loads(self.config_path.read_text(encoding="utf-8"))
        self.assertEqual(saved, {"output-format": "json", "include-metadata": False})

    def test_saved_defaults_apply_to_later_runs(self) -> None:
        site = self.make_site()
        cli.main(["--output-format", "json", "--save-defaults"])

        cli.main([str(site), "--ignore", "node_modules"])

        self.assertTrue((site / "index.json").is_file())
        self.assertFalse((site / "index.html").exists())


if __name__ == "__main__":
    unittest.main()
