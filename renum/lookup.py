"""
Lookup Engine
=============
Linear scans over an enum type's tables, returning the index of the first
match in declaration order.

Every scan has two modes. In assert mode (``throw=True``) a miss raises
InvalidInteger or InvalidName; in query mode it returns NOT_FOUND.
"""
from typing import Sequence

from .errors import InvalidInteger, InvalidName
from .names import names_match, names_match_nocase

NOT_FOUND = -1


def find_value(values: Sequence[int], value: int, throw: bool = False) -> int:
    """Index of the first entry of ``values`` equal to ``value``."""
    for index, candidate in enumerate(values):
        if candidate == value:
            return index
    if throw:
        raise InvalidInteger(f"from_int: invalid integer value {value!r}")
    return NOT_FOUND


def find_name(raw_names: Sequence[str], name: str, throw: bool = False) -> int:
    """Index of the first raw declaration whose name is exactly ``name``."""
    for index, raw in enumerate(raw_names):
        if names_match(raw, name):
            return index
    if throw:
        raise InvalidName(f"from_string: invalid string argument {name!r}")
    return NOT_FOUND


def find_name_nocase(raw_names: Sequence[str], name: str, throw: bool = False) -> int:
    """Like ``find_name``, ignoring ASCII case."""
    for index, raw in enumerate(raw_names):
        if names_match_nocase(raw, name):
            return index
    if throw:
        raise InvalidName(f"from_string_nocase: invalid string argument {name!r}")
    return NOT_FOUND
