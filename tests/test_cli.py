"""
Tests for the renum CLI
=======================
Runs ``main(argv)`` in-process and checks exit codes and output.
"""
import sys
import os
import ast
import io
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from renum.cli import main

SOURCE = "enum Color : uint8 { RED, GREEN = 5, BLUE }\n"


class TestCli(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmpdir.cleanup)
        self.path = os.path.join(self.tmpdir.name, "colors.renum")
        with open(self.path, "w", encoding="utf-8") as f:
            f.write(SOURCE)

    def run_cli(self, *argv):
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            code = main(list(argv))
        return code, out.getvalue(), err.getvalue()

    def test_types(self):
        code, out, _ = self.run_cli("types")
        self.assertEqual(code, 0)
        self.assertIn("uint64", out)

    def test_show(self):
        code, out, _ = self.run_cli("show", self.path)
        self.assertEqual(code, 0)
        self.assertIn("Color : uint8", out)
        self.assertIn("GREEN = 5", out)
        self.assertIn("min=0 max=6 span=7 size=3", out)

    def test_check(self):
        code, out, _ = self.run_cli("check", self.path)
        self.assertEqual(code, 0)
        self.assertIn("1 enum(s), 3 constant(s)", out)

    def test_check_failure(self):
        bad = os.path.join(self.tmpdir.name, "bad.renum")
        with open(bad, "w", encoding="utf-8") as f:
            f.write("enum Bad : uint8 { A = 300 }")
        code, _, err = self.run_cli("check", bad)
        self.assertEqual(code, 1)
        self.assertIn("✘ DeclarationError", err)

    def test_missing_file(self):
        code, _, err = self.run_cli("show", os.path.join(self.tmpdir.name, "nope.renum"))
        self.assertEqual(code, 1)
        self.assertIn("ConfigError", err)

    def test_unknown_underlying(self):
        code, _, err = self.run_cli("--underlying", "int7", "check", self.path)
        self.assertEqual(code, 1)
        self.assertIn("ConfigError", err)

    def test_generate_to_stdout(self):
        code, out, _ = self.run_cli("generate", self.path)
        self.assertEqual(code, 0)
        ast.parse(out)
        self.assertIn("from_tables(", out)

    def test_generate_files(self):
        module = os.path.join(self.tmpdir.name, "colors.py")
        tests = os.path.join(self.tmpdir.name, "test_colors.py")
        code, _, _ = self.run_cli("generate", self.path, "-o", module, "--tests", tests)
        self.assertEqual(code, 0)
        with open(module, encoding="utf-8") as f:
            ast.parse(f.read())
        with open(tests, encoding="utf-8") as f:
            test_source = f.read()
        ast.parse(test_source)
        self.assertIn("from colors import Color", test_source)

    def test_generate_tests_needs_module_name(self):
        tests = os.path.join(self.tmpdir.name, "test_colors.py")
        code, _, err = self.run_cli("generate", self.path, "--tests", tests)
        self.assertEqual(code, 1)
        self.assertIn("--module", err)

    def test_no_command(self):
        code, out, _ = self.run_cli()
        self.assertEqual(code, 1)
        self.assertIn("usage", out.lower())


if __name__ == "__main__":
    unittest.main(verbosity=2)
