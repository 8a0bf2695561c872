"""
renum CLI — Command-Line Interface for the Enum Generator
=========================================================
Entry point for inspecting declaration files and generating enum modules.

Usage:
    # List underlying integral types
    renum types

    # Show the resolved tables of every enum in a file
    renum show colors.renum

    # Validate a file
    renum check enums.json

    # Generate a module (and, optionally, its tests)
    renum generate colors.renum -o colors.py --tests test_colors.py
"""

from __future__ import annotations

import argparse
import logging
import os
import sys

from .codegen import SourceGenerator
from .config import configure_logging, load_settings
from .errors import ConfigError, RenumError
from .integral import describe_all, resolve_underlying
from .manifest import EnumDefinition, load_manifest
from .processor import process_names
from .ranges import analyze_range
from .test_generator import EnumTestGenerator

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────
#  Helpers
# ─────────────────────────────────────────────────────────────

def _load(args) -> list[EnumDefinition]:
    return load_manifest(args.file, default_underlying=args.underlying)


def _write(path: str, text: str):
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)
    logger.info("Wrote %s", path)


def format_definition(definition: EnumDefinition) -> str:
    """Render one enum's tables and range metadata as text."""
    table = definition.table
    names = process_names(table.raw_names)
    info = analyze_range(table.values)

    lines = [f"┌─ {definition.name} : {table.underlying}"]
    width = max(len(n) for n in names)
    for index, (name, value, raw) in enumerate(zip(names, table.values, table.raw_names)):
        suffix = f"   ({raw})" if raw != name else ""
        lines.append(f"│  [{index}] {name.ljust(width)} = {value}{suffix}")
    lines.append(
        f"└─ first={info.first} last={info.last} min={info.min} "
        f"max={info.max} span={info.span} size={info.size}"
    )
    return "\n".join(lines)


# ─────────────────────────────────────────────────────────────
#  Commands
# ─────────────────────────────────────────────────────────────

def cmd_types(args) -> int:
    """Show the underlying type registry."""
    print(describe_all())
    return 0


def cmd_show(args) -> int:
    """Show resolved tables."""
    definitions = _load(args)
    print("\n\n".join(format_definition(d) for d in definitions))
    return 0


def cmd_check(args) -> int:
    """Validate a declaration file."""
    definitions = _load(args)
    total = sum(len(d.table) for d in definitions)
    print(f"✔ {args.file}: {len(definitions)} enum(s), {total} constant(s)")
    return 0


def cmd_generate(args) -> int:
    """Generate an enum module and, optionally, its pytest module."""
    definitions = _load(args)
    source = SourceGenerator().generate(definitions, origin=os.path.basename(args.file))

    if args.output:
        _write(args.output, source)
    else:
        sys.stdout.write(source)

    if args.tests:
        if args.output:
            module_name = os.path.splitext(os.path.basename(args.output))[0]
        else:
            module_name = args.module
        if not module_name:
            raise ConfigError("--tests needs --output or --module to know what to import")
        _write(args.tests, EnumTestGenerator().generate_tests(definitions, module_name))
    return 0


# ─────────────────────────────────────────────────────────────
#  Main
# ─────────────────────────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="renum",
        description="renum — reflective enum generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  renum types\n"
            "  renum show colors.renum\n"
            "  renum check enums.json\n"
            "  renum generate colors.renum -o colors.py --tests test_colors.py\n"
        ),
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log at DEBUG level")
    parser.add_argument("--underlying", default=None,
                        help="Default underlying type (overrides RENUM_DEFAULT_UNDERLYING)")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # types
    subparsers.add_parser("types", help="List underlying integral types")

    # show
    p_show = subparsers.add_parser("show", help="Show resolved enum tables")
    p_show.add_argument("file", help="Path to a .json manifest or .renum source file")

    # check
    p_check = subparsers.add_parser("check", help="Validate a declaration file")
    p_check.add_argument("file", help="Path to a .json manifest or .renum source file")

    # generate
    p_gen = subparsers.add_parser("generate", help="Generate a Python module")
    p_gen.add_argument("file", help="Path to a .json manifest or .renum source file")
    p_gen.add_argument("--output", "-o", default=None, help="Output module (default: stdout)")
    p_gen.add_argument("--tests", default=None, help="Also write a pytest module here")
    p_gen.add_argument("--module", default=None,
                       help="Import name of the generated module (when --output is not given)")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    commands = {
        "types": cmd_types,
        "show": cmd_show,
        "check": cmd_check,
        "generate": cmd_generate,
    }

    try:
        settings = load_settings()
        configure_logging("DEBUG" if args.verbose else settings.log_level)
        if args.underlying:
            resolve_underlying(args.underlying)
        else:
            args.underlying = settings.default_underlying

        if args.command not in commands:
            parser.print_help()
            return 1
        return commands[args.command](args)
    except RenumError as e:
        print(f"✘ {type(e).__name__}: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
