"""
renum: reflective enums.
Generates type-safe enum types from declarative constant lists, with
name/value conversion, validation, iteration, and range metadata.
"""
from .errors import (
    RenumError, InvalidInteger, DomainError, InvalidName,
    AllocationFailure, DeclarationError, EmptyDeclarationSet, ConfigError,
)
from .integral import IntegralType, INTEGRAL_TYPES, resolve_underlying
from .names import NAME_ENDERS, ends_name, names_match, names_match_nocase
from .ranges import RangeInfo, analyze_range, find_min, find_max
from .lexer import Lexer, Token, TokenType
from .parser import Parser, parse_declarations, parse_program
from .evaluator import Evaluator
from .declarations import Declaration, DeclarationTable, build_table, coerce_declarations
from .processor import NameTable, process_names
from .lookup import NOT_FOUND, find_value, find_name, find_name_nocase
from .iteration import ValueIterable, NameIterable
from .core import EnumMeta, ReflectiveEnum, define, from_tables
from .decorators import enum
from .manifest import EnumDefinition, EnumManifest, Manifest, load_manifest
from .codegen import SourceGenerator
from .test_generator import EnumTestGenerator
from .config import Settings, load_settings

__version__ = "0.1.0"
__all__ = [
    "RenumError", "InvalidInteger", "DomainError", "InvalidName",
    "AllocationFailure", "DeclarationError", "EmptyDeclarationSet", "ConfigError",
    "IntegralType", "INTEGRAL_TYPES", "resolve_underlying",
    "NAME_ENDERS", "ends_name", "names_match", "names_match_nocase",
    "RangeInfo", "analyze_range", "find_min", "find_max",
    "Lexer", "Token", "TokenType",
    "Parser", "parse_declarations", "parse_program",
    "Evaluator",
    "Declaration", "DeclarationTable", "build_table", "coerce_declarations",
    "NameTable", "process_names",
    "NOT_FOUND", "find_value", "find_name", "find_name_nocase",
    "ValueIterable", "NameIterable",
    "EnumMeta", "ReflectiveEnum", "define", "from_tables",
    "enum",
    "EnumDefinition", "EnumManifest", "Manifest", "load_manifest",
    "SourceGenerator",
    "EnumTestGenerator",
    "Settings", "load_settings",
]
