"""
Reflective Enum Types
=====================
The generated enum types and the factories that create them.

    Color = renum.define("Color", "int32", "RED, GREEN, BLUE")

    Color.GREEN.to_string()         # "GREEN"
    Color.from_int(1)               # Color.GREEN
    Color.from_string_nocase("red") # Color.RED
    Color.is_valid(5)               # False
    [c.to_int() for c in Color.values()]  # [0, 1, 2]

An instance wraps one integral value. Instances only compare with
instances of the same type; they have no arithmetic, bitwise, or truth
value, and are not hashable.
"""
from __future__ import annotations

import keyword
import logging
import sys
from typing import Any, Iterable, Mapping

from .config import load_settings
from .declarations import DeclarationTable, build_table, table_from_arrays
from .errors import DeclarationError, DomainError
from .integral import IntegralType
from .iteration import NameIterable, ValueIterable
from .lookup import NOT_FOUND, find_name, find_name_nocase, find_value
from .processor import NameTable
from .ranges import RangeInfo, analyze_range

logger = logging.getLogger(__name__)


# Set by make_type; fixed once the type is sealed
_TABLE_ATTRIBUTES = frozenset({
    "_table", "_names", "_range", "_instances", "_values_view", "_names_view", "_sealed",
})


class EnumMeta(type):
    """Metaclass of generated enum types: iterable, sized, readable."""

    def __repr__(cls) -> str:
        return f"<enum {cls.__name__!r}>"

    def __iter__(cls):
        return iter(cls.values())

    def __len__(cls) -> int:
        return cls.size()

    def __contains__(cls, item) -> bool:
        return isinstance(item, cls) and cls.is_valid(item.to_int())

    def _is_frozen(cls, name: str) -> bool:
        if not cls.__dict__.get("_sealed"):
            return False
        return name in _TABLE_ATTRIBUTES or name in cls._table.identifiers

    def __setattr__(cls, name, value):
        if cls._is_frozen(name):
            raise AttributeError(f"cannot reassign {cls.__name__}.{name}")
        super().__setattr__(name, value)

    def __delattr__(cls, name):
        if cls._is_frozen(name):
            raise AttributeError(f"cannot delete {cls.__name__}.{name}")
        super().__delattr__(name)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class ReflectiveEnum(metaclass=EnumMeta):
    """Base class of every generated enum type.

    Subclasses are created by ``define``, ``from_tables`` and the
    ``@renum.enum`` decorator, never by hand.
    """
    __slots__ = ("_value",)

    _table: DeclarationTable
    _names: NameTable
    _range: RangeInfo
    _instances: tuple
    _values_view: ValueIterable
    _names_view: NameIterable

    def __init__(self, constant: ReflectiveEnum):
        cls = type(self)
        if not isinstance(constant, cls):
            raise TypeError(
                f"{cls.__name__}() takes a {cls.__name__} constant, got "
                f"{type(constant).__name__}; use {cls.__name__}.from_int() for integers"
            )
        object.__setattr__(self, "_value", constant._value)

    @classmethod
    def _wrap(cls, value: int) -> ReflectiveEnum:
        instance = object.__new__(cls)
        object.__setattr__(instance, "_value", value)
        return instance

    @classmethod
    def _at(cls, index: int) -> ReflectiveEnum:
        return cls._instances[index]

    @classmethod
    def _processed_name(cls, index: int) -> str:
        return cls._names[index]

    # ─────────────────────────────────────────────────────────
    #  Conversions
    # ─────────────────────────────────────────────────────────

    def to_int(self) -> int:
        return self._value

    @classmethod
    def from_int(cls, value: int) -> ReflectiveEnum:
        """Return the constant whose value is ``value``.

        The first declared constant wins when several share a value.

        Raises:
            InvalidInteger: if no constant has this value.
        """
        if not _is_int(value):
            raise TypeError(f"{cls.__name__}.from_int() takes an int, got {type(value).__name__}")
        return cls._instances[find_value(cls._table.values, value, throw=True)]

    @classmethod
    def from_int_unchecked(cls, value: int) -> ReflectiveEnum:
        """Wrap ``value`` without checking it against the declared constants.

        The value is cast to the underlying type. Calling ``to_string`` on
        a result that is not a declared value raises DomainError.
        """
        if not _is_int(value):
            raise TypeError(
                f"{cls.__name__}.from_int_unchecked() takes an int, got {type(value).__name__}"
            )
        return cls._wrap(cls._table.underlying.wrap(value))

    def to_string(self) -> str:
        """Name of the first constant declared with this value.

        Raises:
            DomainError: if the value is not in the value table.
            AllocationFailure: if the name table cannot be built.
        """
        cls = type(self)
        names = cls._names.get()
        index = find_value(cls._table.values, self._value)
        if index == NOT_FOUND:
            raise DomainError(f"{cls.__name__}.to_string: invalid enum value {self._value}")
        return names[index]

    @classmethod
    def from_string(cls, name: str) -> ReflectiveEnum:
        """Return the constant named exactly ``name``.

        Raises:
            InvalidName: if no constant has this name.
        """
        if not isinstance(name, str):
            raise TypeError(f"{cls.__name__}.from_string() takes a str, got {type(name).__name__}")
        return cls._instances[find_name(cls._table.raw_names, name, throw=True)]

    @classmethod
    def from_string_nocase(cls, name: str) -> ReflectiveEnum:
        """Like ``from_string``, ignoring ASCII case."""
        if not isinstance(name, str):
            raise TypeError(
                f"{cls.__name__}.from_string_nocase() takes a str, got {type(name).__name__}"
            )
        return cls._instances[find_name_nocase(cls._table.raw_names, name, throw=True)]

    # ─────────────────────────────────────────────────────────
    #  Validation (never raises)
    # ─────────────────────────────────────────────────────────

    @classmethod
    def is_valid(cls, value: int | str) -> bool:
        """True if ``value`` is a declared value (int) or name (str)."""
        if isinstance(value, str):
            return find_name(cls._table.raw_names, value) != NOT_FOUND
        if _is_int(value):
            return find_value(cls._table.values, value) != NOT_FOUND
        return False

    @classmethod
    def is_valid_nocase(cls, name: str) -> bool:
        if not isinstance(name, str):
            return False
        return find_name_nocase(cls._table.raw_names, name) != NOT_FOUND

    # ─────────────────────────────────────────────────────────
    #  Iteration and Metadata
    # ─────────────────────────────────────────────────────────

    @classmethod
    def values(cls) -> ValueIterable:
        return cls._values_view

    @classmethod
    def names(cls) -> NameIterable:
        return cls._names_view

    @classmethod
    def size(cls) -> int:
        return len(cls._table.values)

    @classmethod
    def range_info(cls) -> RangeInfo:
        return cls._range

    @classmethod
    def underlying(cls) -> IntegralType:
        return cls._table.underlying

    # ─────────────────────────────────────────────────────────
    #  Comparison
    # ─────────────────────────────────────────────────────────

    def _other_value(self, other: Any, op: str) -> int:
        if isinstance(other, type(self)):
            return other._value
        raise TypeError(
            f"'{op}' not supported between {type(self).__name__} and {type(other).__name__}"
        )

    def __eq__(self, other) -> bool:
        return self._value == self._other_value(other, "==")

    def __ne__(self, other) -> bool:
        return self._value != self._other_value(other, "!=")

    def __lt__(self, other) -> bool:
        return self._value < self._other_value(other, "<")

    def __le__(self, other) -> bool:
        return self._value <= self._other_value(other, "<=")

    def __gt__(self, other) -> bool:
        return self._value > self._other_value(other, ">")

    def __ge__(self, other) -> bool:
        return self._value >= self._other_value(other, ">=")

    __hash__ = None

    def __bool__(self):
        raise TypeError(
            f"{type(self).__name__} has no truth value; compare with a constant instead"
        )

    # ─────────────────────────────────────────────────────────
    #  Immutability and Representation
    # ─────────────────────────────────────────────────────────

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} instances are immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} instances are immutable")

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __reduce__(self):
        return (type(self).from_int_unchecked, (self._value,))

    def __repr__(self) -> str:
        cls = type(self)
        if cls.is_valid(self._value):
            return f"<{cls.__name__}.{self.to_string()}: {self._value}>"
        return f"<{cls.__name__}: {self._value} (invalid)>"

    def __str__(self) -> str:
        if type(self).is_valid(self._value):
            return self.to_string()
        return repr(self)


RESERVED_NAMES = frozenset(n for n in dir(ReflectiveEnum) if not n.startswith("_"))


# ─────────────────────────────────────────────────────────────
#  Type Factories
# ─────────────────────────────────────────────────────────────

def _caller_module(depth: int = 2) -> str:
    try:
        return sys._getframe(depth).f_globals.get("__name__", "__main__")
    except (AttributeError, ValueError):
        return "__main__"


def make_type(
    name: str,
    table: DeclarationTable,
    module: str | None = None,
    namespace: Mapping[str, Any] | None = None,
) -> type:
    """Create the enum type for a resolved DeclarationTable."""
    if not name.isidentifier() or keyword.iskeyword(name):
        raise DeclarationError(f"Invalid enum type name {name!r}")
    for ident in table.identifiers:
        if ident.startswith("_") or ident in RESERVED_NAMES or keyword.iskeyword(ident):
            raise DeclarationError(f"Constant name '{ident}' is reserved in enum '{name}'")

    body = dict(namespace or {})
    body.update({
        "__slots__": (),
        "__module__": module or "__main__",
        "__qualname__": body.get("__qualname__", name),
        "_table": table,
        "_names": NameTable(table.raw_names),
        "_range": analyze_range(table.values),
    })
    cls = EnumMeta(name, (ReflectiveEnum,), body)

    cls._instances = tuple(cls._wrap(value) for value in table.values)
    for ident, instance in zip(table.identifiers, cls._instances):
        setattr(cls, ident, instance)
    cls._values_view = ValueIterable(cls)
    cls._names_view = NameIterable(cls)
    cls._sealed = True

    logger.debug("Generated enum %s.%s with %d constant(s)", cls.__module__, name, len(table))
    return cls


def define(
    name: str,
    underlying: Any,
    *declarations: Any,
    scope: Mapping[str, Any] | None = None,
    module: str | None = None,
) -> type:
    """Generate an enum type from declarations.

    Args:
        name: Name of the new type.
        underlying: Integral type name (``"uint8"``), IntegralType, ``int``,
            or None for the configured default.
        *declarations: Declaration strings (``"A"``, ``"B = 10"``, or a
            comma list), ``(name, value)`` pairs, or Declaration objects.
        scope: Extra names usable in value expressions.
        module: ``__module__`` of the new type (defaults to the caller's).

    Raises:
        EmptyDeclarationSet: if no constants are declared.
        DeclarationError: if a declaration is malformed or out of range.
    """
    if underlying is None:
        underlying = load_settings().default_underlying
    table = build_table(declarations, underlying, scope)
    return make_type(name, table, module or _caller_module())


def from_tables(
    name: str,
    underlying: Any,
    values: Iterable[int],
    raw_names: Iterable[str],
    module: str | None = None,
) -> type:
    """Generate an enum type from already-resolved value and name tables."""
    table = table_from_arrays(values, raw_names, underlying)
    return make_type(name, table, module or _caller_module())
