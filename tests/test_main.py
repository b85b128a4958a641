"""
Structural equivalence of XML document trees.

Copyright 2022-2026, Levente Hunyadi

:see: https://github.com/hunyadi/md2conf
"""

import os
import shutil
import tempfile
import unittest
from contextlib import redirect_stdout
from io import StringIO
from pathlib import Path
from unittest.mock import patch

from tests.utility import TypedTestCase
from xmleq.__main__ import EXIT_DIFFERENT, EXIT_EQUIVALENT, EXIT_ERROR, get_help, run
from xmleq.environment import ArgumentError, ComparisonEnvironment


class TestCommandLine(TypedTestCase):
    out_dir: Path

    def setUp(self) -> None:
        self.out_dir = Path(tempfile.mkdtemp())

    def tearDown(self) -> None:
        shutil.rmtree(self.out_dir)

    def write(self, name: str, content: str) -> str:
        path = self.out_dir / name
        path.write_text(content, encoding="utf-8")
        return str(path)

    def run_main(self, *args: str) -> tuple[int, str]:
        with redirect_stdout(StringIO()) as out:
            code = run(list(args))
        return code, out.getvalue()

    def test_help(self) -> None:
        text = get_help()
        self.assertIn("path1", text)
        self.assertIn("[OPTIONS]", text)
        self.assertIn("--preset", text)
        self.assertIn("--string-comparer", text)

    def test_equivalent(self) -> None:
        path1 = self.write("first.xml", "<p><a/><b/></p>")
        path2 = self.write("second.xml", "<p><a/><b/></p>")
        code, out = self.run_main(path1, path2)
        self.assertEqual(code, EXIT_EQUIVALENT)
        self.assertEqual(out, "")

    def test_different(self) -> None:
        path1 = self.write("first.xml", "<p><a/><b/></p>")
        path2 = self.write("second.xml", "<p><b/><a/></p>")
        code, out = self.run_main(path1, path2, "--string-comparer=ordinal")
        self.assertEqual(code, EXIT_DIFFERENT)
        self.assertIn("element <a> at /p[1]/a[1] does not match element <b> at /p[1]/b[1]", out)

        code, _ = self.run_main(path1, path2, "--elements=ignore-order")
        self.assertEqual(code, EXIT_EQUIVALENT)

    def test_preset(self) -> None:
        path1 = self.write("first.xml", "<root>\n  <!-- note -->\n  <item/>\n</root>")
        path2 = self.write("second.xml", "<root><item/></root>")
        code, _ = self.run_main(path1, path2)
        self.assertEqual(code, EXIT_DIFFERENT)
        code, _ = self.run_main(path1, path2, "--preset=standard")
        self.assertEqual(code, EXIT_EQUIVALENT)
        code, _ = self.run_main(path1, path2, "--comments=ignore", "--ignore-text-outside-children")
        self.assertEqual(code, EXIT_EQUIVALENT)

    def test_preset_from_environment(self) -> None:
        path1 = self.write("first.xml", "<root>\n  <!-- note -->\n  <item/>\n</root>")
        path2 = self.write("second.xml", "<root><item/></root>")
        with patch.dict(os.environ, {"XMLEQ_PRESET": "Standard"}):
            code, _ = self.run_main(path1, path2)
        self.assertEqual(code, EXIT_EQUIVALENT)

    def test_invalid_environment(self) -> None:
        path1 = self.write("first.xml", "<p/>")
        with patch.dict(os.environ, {"XMLEQ_PRESET": "strict"}):
            with self.assertRaises(SystemExit):
                self.run_main(path1, path1)

    def test_unreadable(self) -> None:
        path1 = self.write("first.xml", "<p/>")
        path2 = self.write("second.xml", "<p>")
        code, _ = self.run_main(path1, path2)
        self.assertEqual(code, EXIT_ERROR)

        code, _ = self.run_main(path1, str(self.out_dir / "missing.xml"))
        self.assertEqual(code, EXIT_ERROR)


class TestEnvironment(TypedTestCase):
    def test_arguments_take_precedence(self) -> None:
        with patch.dict(os.environ, {"XMLEQ_PRESET": "loose", "XMLEQ_STRING_COMPARER": "ordinal"}):
            environment = ComparisonEnvironment(preset="Semantic")
        self.assertEqual(environment.preset, "semantic")
        self.assertEqual(environment.string_comparer, "ordinal")

    def test_unset(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            environment = ComparisonEnvironment()
        self.assertIsNone(environment.preset)
        self.assertIsNone(environment.string_comparer)

    def test_blank(self) -> None:
        with patch.dict(os.environ, {"XMLEQ_STRING_COMPARER": "  "}):
            with self.assertRaises(ArgumentError):
                ComparisonEnvironment()


if __name__ == "__main__":
    unittest.main()
