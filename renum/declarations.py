"""
Declaration Tables
==================
Turns an ordered list of declarations into the two parallel tables every
enum type is built on:

  - the value table: resolved integral values, one per declaration
  - the raw name table: the stringized declarations, possibly still
    carrying a trailing ``= expr``

Unassigned constants take the previous resolved value plus one; the first
one defaults to 0. Table index order is declaration order.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from .errors import DeclarationError, EmptyDeclarationSet
from .evaluator import Evaluator
from .integral import IntegralType, resolve_underlying
from .parser import DeclarationNode, NumberNode, parse_declarations

logger = logging.getLogger(__name__)

Declaration = DeclarationNode


@dataclass(frozen=True)
class DeclarationTable:
    """The immutable tables of one enum type."""
    underlying: IntegralType
    identifiers: tuple[str, ...]
    values: tuple[int, ...]
    raw_names: tuple[str, ...]

    def __len__(self) -> int:
        return len(self.values)


# ─────────────────────────────────────────────────────────────
#  Input Normalization
# ─────────────────────────────────────────────────────────────

def _from_pair(name: str, value: Any) -> list[DeclarationNode]:
    if value is None:
        parsed = parse_declarations(name)
    elif isinstance(value, str):
        parsed = parse_declarations(f"{name} = {value}")
    elif isinstance(value, int) and not isinstance(value, bool):
        parsed = parse_declarations(name)
        if len(parsed) == 1:
            parsed[0].expression = NumberNode(value=value, line=parsed[0].line, col=parsed[0].col)
            parsed[0].text = f"{parsed[0].name} = {value}"
    else:
        raise DeclarationError(f"Value of '{name}' must be an int, a string, or None; got {value!r}")

    if len(parsed) != 1 or parsed[0].name != name:
        raise DeclarationError(f"Invalid constant name {name!r}")
    return parsed


def coerce_declarations(items: Iterable[Any]) -> list[DeclarationNode]:
    """Normalize mixed declaration input into DeclarationNodes.

    Accepts declaration source strings (one or several, comma-separated),
    ``(name, value)`` pairs where value is None, an int, or an expression
    string, and already-parsed Declaration objects.
    """
    declarations: list[DeclarationNode] = []
    for item in items:
        if isinstance(item, DeclarationNode):
            declarations.append(item)
        elif isinstance(item, str):
            declarations.extend(parse_declarations(item))
        elif isinstance(item, tuple) and len(item) == 2 and isinstance(item[0], str):
            declarations.extend(_from_pair(*item))
        else:
            raise DeclarationError(f"Unsupported declaration {item!r}")
    return declarations


# ─────────────────────────────────────────────────────────────
#  Table Builder
# ─────────────────────────────────────────────────────────────

def build_table(
    declarations: Iterable[Any],
    underlying: Any = "int32",
    scope: Mapping[str, Any] | None = None,
) -> DeclarationTable:
    """Resolve declarations into a DeclarationTable.

    Raises:
        EmptyDeclarationSet: if no declarations are given.
        DeclarationError: on syntax errors, undefined names, duplicate
            constant names, or values that do not fit ``underlying``.
    """
    integral = resolve_underlying(underlying)
    nodes = coerce_declarations(declarations)
    if not nodes:
        raise EmptyDeclarationSet("no constants defined in enum type")

    evaluator = Evaluator(scope)
    identifiers, values, raw_names = [], [], []
    previous: int | None = None

    for node in nodes:
        if node.name in evaluator.env:
            raise DeclarationError(f"Duplicate constant name '{node.name}'", node.line, node.col)

        if node.expression is not None:
            value = evaluator.evaluate(node.expression)
        elif previous is None:
            value = 0
        else:
            value = previous + 1

        if not integral.contains(value):
            raise DeclarationError(
                f"Value {value} of '{node.name}' is outside the range of "
                f"{integral} [{integral.min}, {integral.max}]",
                node.line, node.col,
            )

        evaluator.bind(node.name, value)
        identifiers.append(node.name)
        values.append(value)
        raw_names.append(node.text or node.name)
        previous = value

    logger.debug("Resolved %d constant(s) on %s: %s", len(values), integral, values)
    return DeclarationTable(
        underlying=integral,
        identifiers=tuple(identifiers),
        values=tuple(values),
        raw_names=tuple(raw_names),
    )


def table_from_arrays(
    values: Iterable[int],
    raw_names: Iterable[str],
    underlying: Any = "int32",
) -> DeclarationTable:
    """Rebuild a DeclarationTable from already-resolved tables.

    Each raw name must itself be a single declaration; its identifier is
    recovered by parsing it. Values are taken as given.
    """
    integral = resolve_underlying(underlying)
    values = tuple(values)
    raw_names = tuple(raw_names)
    if not values:
        raise EmptyDeclarationSet("no constants defined in enum type")
    if len(values) != len(raw_names):
        raise DeclarationError(
            f"Value table has {len(values)} entries but name table has {len(raw_names)}"
        )

    identifiers = []
    for raw, value in zip(raw_names, values):
        parsed = parse_declarations(raw)
        if len(parsed) != 1:
            raise DeclarationError(f"Raw name {raw!r} is not a single declaration")
        if isinstance(value, bool) or not isinstance(value, int) or not integral.contains(value):
            raise DeclarationError(f"Value {value!r} of '{parsed[0].name}' does not fit {integral}")
        if parsed[0].name in identifiers:
            raise DeclarationError(f"Duplicate constant name '{parsed[0].name}'")
        identifiers.append(parsed[0].name)

    return DeclarationTable(
        underlying=integral,
        identifiers=tuple(identifiers),
        values=values,
        raw_names=raw_names,
    )
