"""
renum Test Suite — Lexer, Parser, Evaluator
===========================================
Tests for the declaration language front end.

Usage:
    python -m pytest tests/test_parser.py -v
"""
import sys
import os
import unittest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from renum.errors import DeclarationError
from renum.evaluator import Evaluator
from renum.lexer import Lexer, TokenType
from renum.parser import (
    BinaryNode, DeclarationNode, NameNode, NumberNode, UnaryNode,
    parse_declarations, parse_int_literal, parse_program, stringize,
)


# ─────────────────────────────────────────────
#  Lexer Tests
# ─────────────────────────────────────────────

class TestLexer(unittest.TestCase):

    def _types(self, source):
        return [t.type for t in Lexer(source).tokenize()]

    def test_simple_list(self):
        self.assertEqual(
            self._types("A, B = 1"),
            [TokenType.IDENTIFIER, TokenType.COMMA, TokenType.IDENTIFIER,
             TokenType.ASSIGN, TokenType.NUMBER, TokenType.EOF],
        )

    def test_shift_operators(self):
        self.assertEqual(
            self._types("1 << 2 >> 3")[:5],
            [TokenType.NUMBER, TokenType.SHL, TokenType.NUMBER, TokenType.SHR, TokenType.NUMBER],
        )

    def test_enum_keyword(self):
        tokens = Lexer("enum Color : uint8 { }").tokenize()
        self.assertEqual(tokens[0].type, TokenType.KW_ENUM)
        self.assertEqual(tokens[2].type, TokenType.COLON)
        self.assertEqual(tokens[4].type, TokenType.LBRACE)

    def test_identifier_not_keyword(self):
        tokens = Lexer("enumeration").tokenize()
        self.assertEqual(tokens[0].type, TokenType.IDENTIFIER)

    def test_comments_are_dropped(self):
        self.assertEqual(
            self._types("A # first\n// second\nB"),
            [TokenType.IDENTIFIER, TokenType.IDENTIFIER, TokenType.EOF],
        )

    def test_number_suffix_dropped(self):
        tokens = Lexer("10u 0x1FUL").tokenize()
        self.assertEqual(tokens[0].value, "10")
        self.assertEqual(tokens[1].value, "0x1F")

    def test_char_literal(self):
        tokens = Lexer(r"'a' '\n'").tokenize()
        self.assertEqual(tokens[0].type, TokenType.CHAR)
        self.assertEqual(tokens[0].value, "a")
        self.assertEqual(tokens[1].value, "\n")

    def test_token_positions(self):
        tokens = Lexer("A,\n  B").tokenize()
        self.assertEqual((tokens[2].line, tokens[2].col), (2, 3))
        self.assertEqual((tokens[2].start, tokens[2].end), (5, 6))

    def test_unexpected_character(self):
        with self.assertRaises(DeclarationError):
            Lexer("A = $").tokenize()

    def test_unterminated_char(self):
        with self.assertRaises(DeclarationError):
            Lexer("'ab'").tokenize()


# ─────────────────────────────────────────────
#  Parser Tests
# ─────────────────────────────────────────────

class TestParser(unittest.TestCase):

    def test_bare_names(self):
        decls = parse_declarations("RED, GREEN, BLUE")
        self.assertEqual([d.name for d in decls], ["RED", "GREEN", "BLUE"])
        self.assertTrue(all(d.expression is None for d in decls))

    def test_trailing_comma(self):
        self.assertEqual(len(parse_declarations("A, B,")), 2)

    def test_assignment(self):
        decl = parse_declarations("A = 10")[0]
        self.assertIsInstance(decl, DeclarationNode)
        self.assertIsInstance(decl.expression, NumberNode)
        self.assertEqual(decl.expression.value, 10)

    def test_stringized_text(self):
        decls = parse_declarations("A   =\t 42, B=7, C")
        self.assertEqual([d.text for d in decls], ["A = 42", "B=7", "C"])

    def test_precedence(self):
        expr = parse_declarations("A = 1 + 2 * 3")[0].expression
        self.assertIsInstance(expr, BinaryNode)
        self.assertEqual(expr.operator, "+")
        self.assertEqual(expr.right.operator, "*")

    def test_parentheses(self):
        expr = parse_declarations("A = (1 + 2) * 3")[0].expression
        self.assertEqual(expr.operator, "*")
        self.assertEqual(expr.left.operator, "+")

    def test_unary_and_names(self):
        expr = parse_declarations("A = -B")[0].expression
        self.assertIsInstance(expr, UnaryNode)
        self.assertIsInstance(expr.operand, NameNode)

    def test_errors_accumulate(self):
        with self.assertRaises(DeclarationError) as ctx:
            parse_declarations("A = , B = *, C")
        self.assertIn("2 parse error(s)", str(ctx.exception))

    def test_missing_comma(self):
        with self.assertRaises(DeclarationError):
            parse_declarations("A B")

    def test_enum_blocks(self):
        program = parse_program(
            "enum Color : uint8 { RED, GREEN = 5, BLUE }\n"
            "// no type given\n"
            "enum Flag { OFF, ON };\n"
        )
        self.assertEqual([e.name for e in program.enums], ["Color", "Flag"])
        self.assertEqual(program.enums[0].underlying, "uint8")
        self.assertIsNone(program.enums[1].underlying)
        self.assertEqual([d.text for d in program.enums[0].declarations],
                         ["RED", "GREEN = 5", "BLUE"])

    def test_enum_block_missing_brace(self):
        with self.assertRaises(DeclarationError):
            parse_program("enum Color { RED, GREEN")

    def test_int_literals(self):
        self.assertEqual(parse_int_literal("0x2A"), 42)
        self.assertEqual(parse_int_literal("052"), 42)
        self.assertEqual(parse_int_literal("0o52"), 42)
        self.assertEqual(parse_int_literal("0b101010"), 42)
        self.assertEqual(parse_int_literal("1_000"), 1000)
        self.assertEqual(parse_int_literal("0"), 0)
        with self.assertRaises(ValueError):
            parse_int_literal("09")

    def test_stringize(self):
        self.assertEqual(stringize("  A \n =  1 "), "A = 1")


# ─────────────────────────────────────────────
#  Evaluator Tests
# ─────────────────────────────────────────────

class TestEvaluator(unittest.TestCase):

    def _eval(self, expr, scope=None, **env):
        evaluator = Evaluator(scope)
        for name, value in env.items():
            evaluator.bind(name, value)
        node = parse_declarations(f"X = {expr}")[0].expression
        return evaluator.evaluate(node)

    def test_arithmetic(self):
        self.assertEqual(self._eval("1 + 2 * 3 - 4"), 3)
        self.assertEqual(self._eval("1 << 4 | 1"), 17)
        self.assertEqual(self._eval("~0"), -1)
        self.assertEqual(self._eval("0xF0 & 0x3C ^ 1"), 0x31)

    def test_c_division(self):
        self.assertEqual(self._eval("-7 / 2"), -3)
        self.assertEqual(self._eval("-7 % 2"), -1)
        self.assertEqual(self._eval("7 / -2"), -3)
        self.assertEqual(self._eval("7 % -2"), 1)

    def test_char_literal(self):
        self.assertEqual(self._eval("'A' + 1"), 66)

    def test_names(self):
        self.assertEqual(self._eval("A + 1", A=41), 42)
        self.assertEqual(self._eval("BASE * 2", scope={"BASE": 21}), 42)

    def test_env_shadows_scope(self):
        self.assertEqual(self._eval("A", scope={"A": 1}, A=2), 2)

    def test_undefined_name(self):
        with self.assertRaises(DeclarationError) as ctx:
            self._eval("MISSING")
        self.assertIn("Undefined constant 'MISSING'", str(ctx.exception))

    def test_non_integer_scope_value(self):
        with self.assertRaises(DeclarationError):
            self._eval("A", scope={"A": "text"})

    def test_division_by_zero(self):
        with self.assertRaises(DeclarationError):
            self._eval("1 / 0")
        with self.assertRaises(DeclarationError):
            self._eval("1 % (2 - 2)")

    def test_bad_shifts(self):
        with self.assertRaises(DeclarationError):
            self._eval("1 << -1")
        with self.assertRaises(DeclarationError):
            self._eval("1 << 100000")


if __name__ == "__main__":
    unittest.main(verbosity=2)
