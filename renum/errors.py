"""
renum Errors
============
Exception hierarchy shared by every renum module.

Assert-mode APIs (``from_int``, ``from_string``, ...) raise these.
Query-mode APIs (``is_valid``, ``is_valid_nocase``) never do.
"""


class RenumError(Exception):
    """Base class for all renum failures."""
    pass


class InvalidInteger(RenumError, ValueError):
    """An integer does not correspond to any declared constant."""
    pass


class DomainError(InvalidInteger):
    """An instance holds a value outside its value table.

    Only reachable through ``from_int_unchecked``.
    """
    pass


class InvalidName(RenumError, ValueError):
    """A string does not match the name of any declared constant."""
    pass


class AllocationFailure(RenumError, MemoryError):
    """The processed name table could not be built.

    Fatal: no constant names can be produced for the type afterwards.
    """
    pass


class DeclarationError(RenumError, ValueError):
    """A declaration list could not be parsed or resolved."""

    def __init__(self, message: str, line: int = 0, col: int = 0):
        self.line = line
        self.col = col
        if line:
            message = f"L{line}:{col} — {message}"
        super().__init__(message)


class EmptyDeclarationSet(DeclarationError):
    """An enum was defined with zero constants."""
    pass


class ConfigError(RenumError):
    """Invalid settings, manifest, or command-line input."""
    pass
