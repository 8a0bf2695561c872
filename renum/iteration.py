"""
Iteration
=========
Iterable views over the valid values and names of an enum type.

Each call to ``iter()`` starts a fresh cursor at index 0, so a view can be
iterated any number of times, concurrently or in sequence.
"""
from __future__ import annotations

from typing import Iterator


class _BaseIterator:
    """Forward-only cursor over ``[0, size)``."""

    def __init__(self, enum_type: type, index: int = 0):
        self._enum_type = enum_type
        self._index = index

    def __iter__(self):
        return self

    def __next__(self):
        if self._index >= self._enum_type.size():
            raise StopIteration
        item = self._element(self._index)
        self._index += 1
        return item

    def _element(self, index: int):
        raise NotImplementedError


class ValueIterator(_BaseIterator):
    def _element(self, index: int):
        return self._enum_type._at(index)


class NameIterator(_BaseIterator):
    def _element(self, index: int) -> str:
        return self._enum_type._processed_name(index)


class _Iterable:
    """Restartable view; ``iterator`` is set by subclasses."""
    iterator: type = _BaseIterator

    def __init__(self, enum_type: type):
        self._enum_type = enum_type

    def __iter__(self) -> Iterator:
        return self.iterator(self._enum_type)

    def __len__(self) -> int:
        return self._enum_type.size()

    def size(self) -> int:
        return self._enum_type.size()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._enum_type.__name__})"


class ValueIterable(_Iterable):
    """Iterable over ``EnumType.values()``: yields enum instances."""
    iterator = ValueIterator


class NameIterable(_Iterable):
    """Iterable over ``EnumType.names()``: yields processed names."""
    iterator = NameIterator
