"""
Enum Source Generator
=====================
Emits an importable Python module that recreates resolved enum types from
literal value and raw name tables.

The generated module calls ``renum.from_tables`` once per enum, so nothing
is parsed or evaluated at import time; the tables are written out exactly
as they were resolved at build time.
"""

from __future__ import annotations

import textwrap
from typing import Sequence

from .manifest import EnumDefinition


class SourceGenerator:
    """Generates Python source for a list of EnumDefinitions.

    Usage:
        definitions = load_manifest("colors.renum")
        source = SourceGenerator().generate(definitions, origin="colors.renum")
        # Write source to colors.py and import it
    """

    def generate(self, definitions: Sequence[EnumDefinition], origin: str = "") -> str:
        """Return complete module source for ``definitions``."""
        sections = [self._header(definitions, origin)]
        for definition in definitions:
            sections.append(self._enum_block(definition))
        return "\n\n".join(sections) + "\n"

    # ─────────────────────────────────────────────────────────
    #  Header
    # ─────────────────────────────────────────────────────────

    def _header(self, definitions: Sequence[EnumDefinition], origin: str) -> str:
        source_line = f"Generated by renum from {origin}. Do not edit." if origin else \
            "Generated by renum. Do not edit."
        exported = ", ".join(repr(d.name) for d in definitions)
        return textwrap.dedent(f'''\
            """
            Generated enum types
            ====================
            {source_line}
            """
            from renum import from_tables

            __all__ = [{exported}]
        ''')

    # ─────────────────────────────────────────────────────────
    #  One Enum
    # ─────────────────────────────────────────────────────────

    def _enum_block(self, definition: EnumDefinition) -> str:
        table = definition.table
        values = ", ".join(str(v) for v in table.values)
        if len(table.values) == 1:
            values += ","

        lines = []
        lines.append(f"# {definition.name} : {table.underlying}")
        lines.append(f"{definition.name} = from_tables(")
        lines.append(f"    {definition.name!r},")
        lines.append(f"    {table.underlying.name!r},")
        lines.append(f"    values=({values}),")
        lines.append(f"    raw_names=(")
        for raw in table.raw_names:
            lines.append(f"        {raw!r},")
        lines.append(f"    ),")
        lines.append(f"    module=__name__,")
        lines.append(f")")
        if definition.doc:
            lines.append(f"{definition.name}.__doc__ = {definition.doc!r}")
        return "\n".join(lines)
