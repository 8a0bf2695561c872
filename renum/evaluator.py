"""
Constant Expression Evaluator
=============================
Tree-walking evaluator for the constant expressions on the right-hand side
of ``NAME = expr`` declarations.

Names resolve against the constants declared earlier in the same enum,
then against an optional external scope. Integer semantics follow C:
``/`` and ``%`` truncate toward zero; shifting by a negative count or
dividing by zero is an error.
"""
from typing import Any, Mapping

from .errors import DeclarationError
from .parser import ASTNode, BinaryNode, NameNode, NumberNode, UnaryNode


# No underlying type is wider than 64 bits
MAX_SHIFT = 128


def _c_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


def _c_mod(a: int, b: int) -> int:
    return a - b * _c_div(a, b)


class Evaluator:
    """
    Evaluates constant expressions to Python ints.

    Usage:
        evaluator = Evaluator(scope={"BASE": 100})
        evaluator.bind("A", 10)
        value = evaluator.evaluate(node)
    """

    def __init__(self, scope: Mapping[str, Any] | None = None):
        self.env: dict[str, int] = {}
        self.scope = dict(scope or {})

    def bind(self, name: str, value: int):
        self.env[name] = value

    def evaluate(self, node: ASTNode) -> int:
        """Evaluate an expression node and return its integral value."""
        method = f"_eval_{node.node_type.lower()}"
        evaluator = getattr(self, method, None)
        if evaluator is None:
            raise DeclarationError(f"Unknown node type: {node.node_type}", node.line, node.col)
        return evaluator(node)

    def _eval_number(self, node: NumberNode) -> int:
        return node.value

    def _eval_name(self, node: NameNode) -> int:
        if node.name in self.env:
            return self.env[node.name]
        if node.name in self.scope:
            value = self.scope[node.name]
            # Enum instances from other generated types are usable as values
            if hasattr(value, "to_int"):
                value = value.to_int()
            if isinstance(value, bool) or not isinstance(value, int):
                raise DeclarationError(
                    f"Scope name '{node.name}' is not an integer: {value!r}",
                    node.line, node.col,
                )
            return value
        raise DeclarationError(f"Undefined constant '{node.name}'", node.line, node.col)

    def _eval_unary(self, node: UnaryNode) -> int:
        operand = self.evaluate(node.operand)
        if node.operator == "-":
            return -operand
        if node.operator == "~":
            return ~operand
        return operand

    def _eval_binary(self, node: BinaryNode) -> int:
        left = self.evaluate(node.left)
        right = self.evaluate(node.right)
        op = node.operator

        if op in ("/", "%") and right == 0:
            raise DeclarationError("Division by zero in constant expression", node.line, node.col)
        if op in ("<<", ">>") and right < 0:
            raise DeclarationError(f"Negative shift count {right}", node.line, node.col)
        if op == "<<" and right > MAX_SHIFT:
            raise DeclarationError(f"Shift count {right} too large", node.line, node.col)

        if op == "+":
            return left + right
        if op == "-":
            return left - right
        if op == "*":
            return left * right
        if op == "/":
            return _c_div(left, right)
        if op == "%":
            return _c_mod(left, right)
        if op == "<<":
            return left << right
        if op == ">>":
            return left >> right
        if op == "&":
            return left & right
        if op == "|":
            return left | right
        if op == "^":
            return left ^ right
        raise DeclarationError(f"Unknown operator '{op}'", node.line, node.col)
