"""
Declaration Lexer
=================
Tokenizes enum declaration source into a stream of typed tokens.

Handles identifiers, integral literals (decimal, hex, octal, binary,
character), the operators of C constant expressions, and the punctuation
of ``enum Name : type { ... }`` blocks. ``#`` and ``//`` start line
comments. Every token records its source offsets so the parser can
recover the exact text of a declaration.
"""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator

from .errors import DeclarationError


class TokenType(Enum):
    """All token types of the declaration language."""
    # Literals and names
    IDENTIFIER  = auto()
    NUMBER      = auto()   # 42, 0x2A, 0o52, 052, 0b101010
    CHAR        = auto()   # 'a'

    # Punctuation
    ASSIGN      = auto()   # =
    COMMA       = auto()   # ,
    LPAREN      = auto()   # (
    RPAREN      = auto()   # )
    LBRACE      = auto()   # {
    RBRACE      = auto()   # }
    COLON       = auto()   # :
    SEMICOLON   = auto()   # ;

    # Operators
    PLUS        = auto()   # +
    MINUS       = auto()   # -
    STAR        = auto()   # *
    SLASH       = auto()   # /
    PERCENT     = auto()   # %
    SHL         = auto()   # <<
    SHR         = auto()   # >>
    AMP         = auto()   # &
    PIPE        = auto()   # |
    CARET       = auto()   # ^
    TILDE       = auto()   # ~

    # Keywords
    KW_ENUM     = auto()

    # Special
    EOF         = auto()
    COMMENT     = auto()


@dataclass
class Token:
    """A single token, with its position in the source."""
    type: TokenType
    value: str
    line: int
    col: int
    start: int = 0
    end: int = 0

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, L{self.line}:{self.col})"


SINGLE_CHAR_TOKENS = {
    "=": TokenType.ASSIGN,
    ",": TokenType.COMMA,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    ":": TokenType.COLON,
    ";": TokenType.SEMICOLON,
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "%": TokenType.PERCENT,
    "&": TokenType.AMP,
    "|": TokenType.PIPE,
    "^": TokenType.CARET,
    "~": TokenType.TILDE,
}

DOUBLE_CHAR_TOKENS = {
    "<<": TokenType.SHL,
    ">>": TokenType.SHR,
}

KEYWORDS = {
    "enum": TokenType.KW_ENUM,
}

CHAR_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "0": "\0", "\\": "\\", "'": "'", '"': '"'}


class Lexer:
    """
    Tokenizes declaration source.

    Usage:
        lexer = Lexer("RED, GREEN = 5, BLUE")
        tokens = lexer.tokenize()
    """

    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.line = 1
        self.col = 1

    def _current(self) -> str | None:
        if self.pos >= len(self.source):
            return None
        return self.source[self.pos]

    def _peek(self, offset: int = 1) -> str | None:
        idx = self.pos + offset
        if idx >= len(self.source):
            return None
        return self.source[idx]

    def _advance(self) -> str:
        ch = self.source[self.pos]
        self.pos += 1
        if ch == "\n":
            self.line += 1
            self.col = 1
        else:
            self.col += 1
        return ch

    def _error(self, message: str) -> DeclarationError:
        return DeclarationError(message, self.line, self.col)

    def _skip_whitespace(self):
        while self.pos < len(self.source) and self.source[self.pos] in " \t\r\n":
            self._advance()

    def _token(self, token_type: TokenType, value: str, line: int, col: int,
               start: int) -> Token:
        return Token(token_type, value, line, col, start, self.pos)

    def _read_number(self) -> Token:
        """Read an integral literal; C ``u``/``l`` suffixes are dropped."""
        line, col, start = self.line, self.col, self.pos
        chars = []
        while self.pos < len(self.source):
            ch = self._current()
            if ch.isalnum() or ch == "_":
                chars.append(self._advance())
            else:
                break
        text = "".join(chars).rstrip("uUlL")
        return self._token(TokenType.NUMBER, text, line, col, start)

    def _read_char(self) -> Token:
        """Read a character literal such as ``'a'`` or ``'\\n'``."""
        line, col, start = self.line, self.col, self.pos
        self._advance()  # consume opening '
        ch = self._current()
        if ch is None or ch == "'":
            raise self._error("Empty character literal")
        self._advance()
        if ch == "\\":
            escaped = self._current()
            if escaped not in CHAR_ESCAPES:
                raise self._error(f"Unknown escape sequence \\{escaped}")
            self._advance()
            ch = CHAR_ESCAPES[escaped]
        if self._current() != "'":
            raise DeclarationError("Unterminated character literal", line, col)
        self._advance()
        return self._token(TokenType.CHAR, ch, line, col, start)

    def _read_identifier(self) -> Token:
        """Read an identifier or keyword."""
        line, col, start = self.line, self.col, self.pos
        chars = []
        while self.pos < len(self.source):
            ch = self._current()
            if ch.isalnum() or ch == "_":
                chars.append(self._advance())
            else:
                break
        word = "".join(chars)
        token_type = KEYWORDS.get(word, TokenType.IDENTIFIER)
        return self._token(token_type, word, line, col, start)

    def _read_comment(self) -> Token:
        """Read a line comment starting with ``#`` or ``//``."""
        line, col, start = self.line, self.col, self.pos
        chars = []
        while self.pos < len(self.source) and self._current() != "\n":
            chars.append(self._advance())
        return self._token(TokenType.COMMENT, "".join(chars), line, col, start)

    def tokenize(self) -> list[Token]:
        """Tokenize the entire source into a list of tokens."""
        tokens = [t for t in self._iter_tokens() if t.type != TokenType.COMMENT]
        tokens.append(Token(TokenType.EOF, "", self.line, self.col, self.pos, self.pos))
        return tokens

    def _iter_tokens(self) -> Iterator[Token]:
        """Generate tokens one at a time."""
        while True:
            self._skip_whitespace()
            if self.pos >= len(self.source):
                return

            ch = self._current()

            if ch == "#" or (ch == "/" and self._peek() == "/"):
                yield self._read_comment()
                continue

            if ch.isdigit():
                yield self._read_number()
                continue

            if ch == "'":
                yield self._read_char()
                continue

            if ch.isalpha() or ch == "_":
                yield self._read_identifier()
                continue

            pair = ch + (self._peek() or "")
            if pair in DOUBLE_CHAR_TOKENS:
                line, col, start = self.line, self.col, self.pos
                self._advance()
                self._advance()
                yield self._token(DOUBLE_CHAR_TOKENS[pair], pair, line, col, start)
                continue

            if ch in SINGLE_CHAR_TOKENS:
                line, col, start = self.line, self.col, self.pos
                self._advance()
                yield self._token(SINGLE_CHAR_TOKENS[ch], ch, line, col, start)
                continue

            raise self._error(f"Unexpected character {ch!r}")
