"""
Tests for renum Decorators
==========================
Tests for the class-body front end ``@renum.enum``.
"""
import sys
import os
import pickle
import unittest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from renum import DeclarationError, EmptyDeclarationSet, ReflectiveEnum, enum


@enum("uint8")
class Level:
    """Log verbosity."""
    LOW: int
    MEDIUM: int = 5
    HIGH: int

    def is_loud(self):
        return self >= Level.MEDIUM


class Outer:
    @enum
    class Inner:
        A: int
        B: int


class TestEnumDecorator(unittest.TestCase):

    def test_annotation_order_and_values(self):
        self.assertEqual(list(Level.names()), ["LOW", "MEDIUM", "HIGH"])
        self.assertEqual([v.to_int() for v in Level], [0, 5, 6])

    def test_generated_type(self):
        self.assertIsInstance(Level.HIGH, Level)
        self.assertTrue(issubclass(Level, ReflectiveEnum))
        self.assertEqual(Level.underlying().name, "uint8")
        self.assertEqual(Level.__name__, "Level")
        self.assertEqual(Level.__module__, __name__)

    def test_methods_and_doc_carried(self):
        self.assertTrue(Level.HIGH.is_loud())
        self.assertFalse(Level.LOW.is_loud())
        self.assertEqual(Level.__doc__, "Log verbosity.")

    def test_nested_class_keeps_qualname(self):
        self.assertEqual(Outer.Inner.__qualname__, "Outer.Inner")
        restored = pickle.loads(pickle.dumps(Outer.Inner.B))
        self.assertIsInstance(restored, Outer.Inner)
        self.assertEqual(restored, Outer.Inner.B)

    def test_local_class_qualname(self):
        @enum
        class Local:
            ON: int

        self.assertTrue(Local.__qualname__.endswith("<locals>.Local"))

    def test_bare_decorator_uses_default(self):
        @enum
        class Switch:
            OFF: int
            ON: int

        self.assertEqual(Switch.underlying().name, "int32")
        self.assertEqual(Switch.from_string("ON").to_int(), 1)

    def test_int_means_int32(self):
        @enum(int)
        class Small:
            ONE: int = 1

        self.assertEqual(Small.underlying().name, "int32")

    def test_expression_strings_and_scope(self):
        @enum("int8", scope={"BASE": 10})
        class Offset:
            NEAR: int = "BASE"
            FAR: int
            DOUBLE: int = "NEAR * 2"

        self.assertEqual([v.to_int() for v in Offset], [10, 11, 20])

    def test_unannotated_attributes_are_not_constants(self):
        @enum
        class Mode:
            READ: int
            WRITE: int
            LABEL = "mode"

        self.assertEqual(Mode.size(), 2)
        self.assertEqual(Mode.LABEL, "mode")

    def test_no_constants(self):
        with self.assertRaises(EmptyDeclarationSet):
            @enum
            class Empty:
                pass

    def test_out_of_range(self):
        with self.assertRaises(DeclarationError):
            @enum("int8")
            class TooBig:
                A: int = 200

    def test_reserved_name(self):
        with self.assertRaises(DeclarationError):
            @enum
            class Clash:
                size: int


if __name__ == "__main__":
    unittest.main(verbosity=2)
