"""
Underlying Integral Types
=========================
Registry of the fixed-width integral types an enum can be built on.

Each entry carries the width and signedness of the type, and with them the
range every declared value must fit into. ``wrap`` gives cast semantics
(two's-complement truncation), used by ``from_int_unchecked``.
"""
from dataclasses import dataclass

from .errors import ConfigError


@dataclass(frozen=True)
class IntegralType:
    """A fixed-width integral type.

    Attributes:
      - name:    Canonical name (``int32``, ``uint8``, ...)
      - bits:    Width in bits
      - signed:  Two's-complement signed if True
    """
    name: str
    bits: int
    signed: bool

    @property
    def min(self) -> int:
        return -(1 << (self.bits - 1)) if self.signed else 0

    @property
    def max(self) -> int:
        return (1 << (self.bits - 1)) - 1 if self.signed else (1 << self.bits) - 1

    def contains(self, value: int) -> bool:
        return self.min <= value <= self.max

    def wrap(self, value: int) -> int:
        """Truncate ``value`` to this type, as a C cast would."""
        mask = (1 << self.bits) - 1
        value &= mask
        if self.signed and value > self.max:
            value -= 1 << self.bits
        return value

    def __str__(self) -> str:
        return self.name


# ─────────────────────────────────────────────────────────────
#  THE TYPE REGISTRY
# ─────────────────────────────────────────────────────────────

INTEGRAL_TYPES: dict[str, IntegralType] = {
    t.name: t for t in (
        IntegralType("int8", 8, True),
        IntegralType("uint8", 8, False),
        IntegralType("int16", 16, True),
        IntegralType("uint16", 16, False),
        IntegralType("int32", 32, True),
        IntegralType("uint32", 32, False),
        IntegralType("int64", 64, True),
        IntegralType("uint64", 64, False),
    )
}

# C spellings accepted wherever a type name is
ALIASES = {
    "char": "int8",
    "short": "int16",
    "int": "int32",
    "long": "int64",
    "unsigned": "uint32",
    "size_t": "uint64",
}


def lookup(name: str) -> IntegralType | None:
    """Look up an integral type by canonical name or alias."""
    return INTEGRAL_TYPES.get(ALIASES.get(name, name))


def resolve_underlying(spec) -> IntegralType:
    """Turn a type name, ``int``, or an IntegralType into an IntegralType."""
    if isinstance(spec, IntegralType):
        return spec
    if spec is int:
        return INTEGRAL_TYPES["int32"]
    if isinstance(spec, str):
        found = lookup(spec.strip())
        if found is not None:
            return found
    known = ", ".join(list(INTEGRAL_TYPES) + list(ALIASES))
    raise ConfigError(f"Unknown underlying type {spec!r}. Known types: {known}")


def describe_all() -> str:
    """Return a formatted table of all integral types for CLI help."""
    lines = [
        f"{'Type':<8} {'Bits':>4} {'Signed':<6} {'Min':>20} {'Max':>20}",
        "─" * 62,
    ]
    for t in INTEGRAL_TYPES.values():
        signed = "yes" if t.signed else "no"
        lines.append(f"{t.name:<8} {t.bits:>4} {signed:<6} {t.min:>20} {t.max:>20}")
    aliases = ", ".join(f"{a}={n}" for a, n in ALIASES.items())
    lines.append("")
    lines.append(f"Aliases: {aliases}")
    return "\n".join(lines)
