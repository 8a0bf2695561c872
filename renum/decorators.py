"""
renum Decorators
================
Class-body front end for generating enum types.

Instead of listing declarations as strings:
    Color = renum.define("Color", "uint8", "RED, GREEN = 5, BLUE")

You write:
    @renum.enum("uint8")
    class Color:
        RED: int
        GREEN: int = 5
        BLUE: int

        def is_warm(self):
            return self == Color.RED

Annotated names become constants, in annotation order. An annotated name
with no value is auto-incremented; its value may be an int or a constant
expression string (``"GREEN + 2"``). Everything else in the class body,
methods included, is carried over to the generated type.
"""

from __future__ import annotations

import inspect
from typing import Any, Mapping

from .config import load_settings
from .core import make_type
from .declarations import build_table
from .errors import EmptyDeclarationSet

# Class-dict entries that belong to the decorated class, not its body
_CLASS_INTERNALS = frozenset({
    "__dict__", "__weakref__", "__module__", "__slots__", "__annotations__",
    "__firstlineno__", "__static_attributes__",
})


def _carried_namespace(cls: type, constants: Mapping[str, Any]) -> dict[str, Any]:
    return {
        key: value for key, value in cls.__dict__.items()
        if key not in constants
        and key not in _CLASS_INTERNALS
        and not key.startswith("__annotat")
    }


def enum(underlying: Any = None, *, scope: Mapping[str, Any] | None = None):
    """Turn an annotated class body into a generated enum type.

    Usage:
        @renum.enum
        class Level:
            LOW: int
            HIGH: int

        @renum.enum("int8", scope={"BASE": 10})
        class Offset:
            NEAR: int = "BASE"
            FAR: int

    Raises:
        EmptyDeclarationSet: if the class declares no annotated constants.
        DeclarationError: if a declaration is malformed or out of range.
    """
    def decorator(cls: type) -> type:
        constants = inspect.get_annotations(cls)
        if not constants:
            raise EmptyDeclarationSet(f"@enum class '{cls.__name__}' declares no constants")

        declarations = [(name, cls.__dict__.get(name)) for name in constants]
        type_name = underlying
        if type_name is None:
            type_name = load_settings().default_underlying

        table = build_table(declarations, type_name, scope)
        return make_type(
            cls.__name__, table,
            module=cls.__module__,
            namespace={**_carried_namespace(cls, constants), "__qualname__": cls.__qualname__},
        )

    # Support both @enum and @enum("uint8")
    if isinstance(underlying, type) and underlying is not int:
        cls, underlying = underlying, None
        return decorator(cls)
    return decorator
