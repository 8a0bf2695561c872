"""
Declaration Manifests
=====================
Loads enum declarations from files, for the build-time generator and CLI.

Two formats are accepted:

  - ``*.json`` manifests, validated with pydantic:
        {
          "scope": {"BASE": 100},
          "enums": [
            {"name": "Color", "underlying": "uint8",
             "constants": ["RED", "GREEN = BASE", "BLUE"]}
          ]
        }

  - declaration source (any other extension, conventionally ``*.renum``):
        enum Color : uint8 { RED, GREEN = 5, BLUE }
"""
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel, ValidationError, field_validator

from .config import load_settings
from .declarations import DeclarationTable, build_table
from .errors import ConfigError
from .parser import parse_program

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────
#  Manifest Models
# ─────────────────────────────────────────────────────────────

class EnumManifest(BaseModel):
    name: str
    underlying: Optional[str] = None
    constants: list[str]
    doc: Optional[str] = None

    @field_validator("name")
    @classmethod
    def _name_is_identifier(cls, value: str) -> str:
        if not value.isidentifier():
            raise ValueError(f"enum name {value!r} is not an identifier")
        return value

    @field_validator("constants")
    @classmethod
    def _has_constants(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("no constants defined in enum type")
        return value


class Manifest(BaseModel):
    scope: dict[str, int] = {}
    enums: list[EnumManifest] = []

    @field_validator("enums")
    @classmethod
    def _unique_names(cls, value: list[EnumManifest]) -> list[EnumManifest]:
        seen = set()
        for item in value:
            if item.name in seen:
                raise ValueError(f"enum {item.name!r} is defined more than once")
            seen.add(item.name)
        return value


# ─────────────────────────────────────────────────────────────
#  Resolved Definitions
# ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class EnumDefinition:
    """A named, fully resolved enum ready for generation."""
    name: str
    table: DeclarationTable
    doc: Optional[str] = None


def definitions_from_manifest(manifest: Manifest,
                              default_underlying: str | None = None) -> list[EnumDefinition]:
    default = default_underlying or load_settings().default_underlying
    return [
        EnumDefinition(
            name=item.name,
            table=build_table(item.constants, item.underlying or default, manifest.scope),
            doc=item.doc,
        )
        for item in manifest.enums
    ]


def definitions_from_source(source: str,
                            default_underlying: str | None = None) -> list[EnumDefinition]:
    default = default_underlying or load_settings().default_underlying
    program = parse_program(source)
    names = [node.name for node in program.enums]
    duplicates = sorted({n for n in names if names.count(n) > 1})
    if duplicates:
        raise ConfigError(f"Enum(s) defined more than once: {', '.join(duplicates)}")
    return [
        EnumDefinition(
            name=node.name,
            table=build_table(node.declarations, node.underlying or default),
        )
        for node in program.enums
    ]


def load_manifest(path: str, default_underlying: str | None = None) -> list[EnumDefinition]:
    """Load and resolve every enum declared in ``path``.

    Raises:
        ConfigError: if the file is missing or the JSON is malformed.
        DeclarationError: if a declaration cannot be resolved.
    """
    if not os.path.exists(path):
        raise ConfigError(f"File not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        source = f.read()

    if path.endswith(".json"):
        try:
            manifest = Manifest.model_validate(json.loads(source))
        except json.JSONDecodeError as e:
            raise ConfigError(f"{path}: invalid JSON: {e}") from e
        except ValidationError as e:
            raise ConfigError(f"{path}: invalid manifest:\n{e}") from e
        definitions = definitions_from_manifest(manifest, default_underlying)
    else:
        definitions = definitions_from_source(source, default_underlying)

    logger.info("Loaded %d enum(s) from %s", len(definitions), path)
    return definitions
