"""
Tests for the Enum Source Generator
===================================
Generated modules must recreate the resolved tables exactly.
"""
import sys
import os
import ast
import unittest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from renum.codegen import SourceGenerator
from renum.manifest import definitions_from_source

SOURCE = """
enum Color : uint8 { RED, GREEN = 5, BLUE }
enum Single { ONLY = -3 }
"""


class TestSourceGenerator(unittest.TestCase):

    def setUp(self):
        self.definitions = definitions_from_source(SOURCE)
        self.code = SourceGenerator().generate(self.definitions, origin="colors.renum")

    def test_valid_python(self):
        ast.parse(self.code)

    def test_header(self):
        self.assertIn("Generated by renum from colors.renum. Do not edit.", self.code)
        self.assertIn("from renum import from_tables", self.code)
        self.assertIn("__all__ = ['Color', 'Single']", self.code)

    def test_tables_written_literally(self):
        self.assertIn("values=(0, 5, 6),", self.code)
        self.assertIn("'GREEN = 5',", self.code)
        self.assertIn("values=(-3,),", self.code)

    def test_generated_module_recreates_types(self):
        namespace = {"__name__": "generated_colors"}
        exec(compile(self.code, "generated_colors.py", "exec"), namespace)
        Color, Single = namespace["Color"], namespace["Single"]

        self.assertEqual(Color.__module__, "generated_colors")
        self.assertEqual(Color.underlying().name, "uint8")
        self.assertEqual(list(Color.names()), ["RED", "GREEN", "BLUE"])
        self.assertEqual(Color.from_string("BLUE").to_int(), 6)
        self.assertEqual(Single.ONLY.to_int(), -3)
        self.assertEqual(Single.underlying().name, "int32")

    def test_doc_emitted(self):
        definitions = [d.__class__(name=d.name, table=d.table, doc="Primary colors.")
                       for d in self.definitions[:1]]
        code = SourceGenerator().generate(definitions)
        self.assertIn("Color.__doc__ = 'Primary colors.'", code)
        self.assertIn("Generated by renum. Do not edit.", code)


if __name__ == "__main__":
    unittest.main(verbosity=2)
