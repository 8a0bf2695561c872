"""
Name Processing
===============
Builds the processed name table of an enum type: the raw declarations with
everything from the first name ender onwards removed.

The table is built lazily, the first time a name is needed, exactly once
per type even when several threads ask for it at the same moment. After
that it is shared for the life of the process.
"""
from __future__ import annotations

import logging
import threading
from typing import Iterable

from .errors import AllocationFailure
from .names import trimmed_length

logger = logging.getLogger(__name__)


def process_names(raw_names: Iterable[str]) -> tuple[str, ...]:
    """Trim every raw declaration down to its constant name.

    Raises:
        AllocationFailure: if memory for the table cannot be obtained.
    """
    raw_names = tuple(raw_names)
    try:
        lengths = [trimmed_length(raw) for raw in raw_names]
        names = tuple(raw[:length] for raw, length in zip(raw_names, lengths))
    except MemoryError as e:
        raise AllocationFailure(
            f"Could not allocate the name table for {len(raw_names)} constant(s)"
        ) from e

    logger.debug(
        "Processed %d name(s), %d characters of storage",
        len(names), sum(lengths) + len(lengths),
    )
    return names


class NameTable:
    """
    Process-wide, build-once table of clean constant names.

    Usage:
        table = NameTable(("RED", "GREEN = 5"))
        table[1]        # "GREEN" (built on first access)
    """

    def __init__(self, raw_names: Iterable[str]):
        self._raw_names = tuple(raw_names)
        self._names: tuple[str, ...] | None = None
        self._lock = threading.Lock()

    @property
    def built(self) -> bool:
        return self._names is not None

    def get(self) -> tuple[str, ...]:
        """Return the processed names, building them on first use."""
        names = self._names
        if names is None:
            with self._lock:
                if self._names is None:
                    self._names = process_names(self._raw_names)
                names = self._names
        return names

    def __getitem__(self, index: int) -> str:
        return self.get()[index]

    def __len__(self) -> int:
        return len(self._raw_names)
