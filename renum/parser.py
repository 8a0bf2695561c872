"""
Declaration Parser
==================
Recursive-descent parser that builds an AST from the token stream
produced by the Lexer.

Supports:
  - Bare declaration lists: ``RED, GREEN = 5, BLUE``
  - Enum blocks: ``enum Color : uint8 { RED, GREEN = 5, BLUE }``
  - C constant expressions with C operator precedence
  - Error accumulation (collects all parse errors, reports at end)
"""
import re
from dataclasses import dataclass, field

from .errors import DeclarationError
from .lexer import Lexer, Token, TokenType


# ─────────────────────────────────────────────────────────────
#  AST Node Types
# ─────────────────────────────────────────────────────────────

@dataclass
class ASTNode:
    """Base class for all AST nodes."""
    node_type: str = ""
    line: int = 0
    col: int = 0


@dataclass
class NumberNode(ASTNode):
    """An integral literal."""
    value: int = 0

    def __post_init__(self):
        self.node_type = "Number"


@dataclass
class NameNode(ASTNode):
    """A reference to a previously declared constant or a scope name."""
    name: str = ""

    def __post_init__(self):
        self.node_type = "Name"


@dataclass
class UnaryNode(ASTNode):
    """A unary operation: -x, +x, ~x."""
    operator: str = ""
    operand: ASTNode | None = None

    def __post_init__(self):
        self.node_type = "Unary"


@dataclass
class BinaryNode(ASTNode):
    """A binary operation: a + b, a << b, ..."""
    operator: str = ""
    left: ASTNode | None = None
    right: ASTNode | None = None

    def __post_init__(self):
        self.node_type = "Binary"


@dataclass
class DeclarationNode(ASTNode):
    """One constant declaration: NAME or NAME = expr.

    ``text`` is the stringized declaration: its source slice with each
    whitespace run collapsed to a single space.
    """
    name: str = ""
    expression: ASTNode | None = None
    text: str = ""

    def __post_init__(self):
        self.node_type = "Declaration"


@dataclass
class EnumNode(ASTNode):
    """An enum block: enum Name [: underlying] { declarations }."""
    name: str = ""
    underlying: str | None = None
    declarations: list[DeclarationNode] = field(default_factory=list)

    def __post_init__(self):
        self.node_type = "Enum"


@dataclass
class ProgramNode(ASTNode):
    """Root node containing all enum blocks of a source file."""
    enums: list[EnumNode] = field(default_factory=list)

    def __post_init__(self):
        self.node_type = "Program"


# ─────────────────────────────────────────────────────────────
#  Parse Error (for accumulation)
# ─────────────────────────────────────────────────────────────

@dataclass
class ParseError:
    """A single parse error with location."""
    message: str
    line: int
    col: int


# Binary operators by precedence level, loosest first (C ordering)
BINARY_LEVELS = [
    {TokenType.PIPE: "|"},
    {TokenType.CARET: "^"},
    {TokenType.AMP: "&"},
    {TokenType.SHL: "<<", TokenType.SHR: ">>"},
    {TokenType.PLUS: "+", TokenType.MINUS: "-"},
    {TokenType.STAR: "*", TokenType.SLASH: "/", TokenType.PERCENT: "%"},
]

UNARY_OPERATORS = {
    TokenType.PLUS: "+",
    TokenType.MINUS: "-",
    TokenType.TILDE: "~",
}

_C_OCTAL = re.compile(r"0[0-7_]+")
_WHITESPACE = re.compile(r"\s+")


def stringize(text: str) -> str:
    """Collapse whitespace runs and strip the ends, like ``#x`` in C."""
    return _WHITESPACE.sub(" ", text).strip()


def parse_int_literal(text: str) -> int:
    """Convert a C or Python integral literal. Raises ValueError."""
    if _C_OCTAL.fullmatch(text):
        return int(text, 8)
    return int(text, 0)


# ─────────────────────────────────────────────────────────────
#  Parser
# ─────────────────────────────────────────────────────────────

class Parser:
    """
    Recursive-descent parser for declaration source.

    Usage:
        parser = Parser(tokens, source)
        program = parser.parse()                 # enum blocks
        declarations = parser.parse_declarations()  # bare list
    """

    def __init__(self, tokens: list[Token], source: str = ""):
        self.tokens = tokens
        self.source = source
        self.pos = 0
        self.errors: list[ParseError] = []

    def _current(self) -> Token:
        return self.tokens[self.pos]

    def _previous(self) -> Token:
        return self.tokens[max(self.pos - 1, 0)]

    def _advance(self) -> Token:
        token = self.tokens[self.pos]
        if self.pos < len(self.tokens) - 1:
            self.pos += 1
        return token

    def _expect(self, token_type: TokenType) -> Token:
        token = self._current()
        if token.type != token_type:
            self._fail(
                f"Expected {token_type.name}, got {token.type.name} ({token.value!r})"
            )
        return self._advance()

    def _record_error(self, message: str):
        """Record a parse error with location, continue parsing."""
        token = self._current()
        self.errors.append(ParseError(message, token.line, token.col))

    def _fail(self, message: str):
        self._record_error(message)
        raise SyntaxError(message)

    def _synchronize(self, stop: tuple[TokenType, ...]):
        """Skip tokens until one of ``stop`` (or EOF) at bracket depth 0."""
        depth = 0
        while self._current().type != TokenType.EOF:
            token_type = self._current().type
            if depth == 0 and token_type in stop:
                return
            if token_type == TokenType.LPAREN:
                depth += 1
            elif token_type == TokenType.RPAREN and depth > 0:
                depth -= 1
            self._advance()

    def _raise_errors(self):
        if self.errors:
            msgs = [f"  L{e.line}:{e.col} — {e.message}" for e in self.errors]
            raise DeclarationError(
                f"{len(self.errors)} parse error(s):\n" + "\n".join(msgs)
            )

    # ─────────────────────────────────────────────────────────
    #  Top-Level Parsing
    # ─────────────────────────────────────────────────────────

    def parse(self) -> ProgramNode:
        """Parse a source file made of enum blocks."""
        program = ProgramNode(line=1, col=1)

        while self._current().type != TokenType.EOF:
            try:
                program.enums.append(self._parse_enum())
            except SyntaxError:
                self._synchronize((TokenType.KW_ENUM,))

        self._raise_errors()
        return program

    def parse_declarations(self) -> list[DeclarationNode]:
        """Parse a bare, comma-separated declaration list up to EOF."""
        declarations = self._parse_declaration_list(TokenType.EOF)
        self._raise_errors()
        return declarations

    def _parse_enum(self) -> EnumNode:
        """Parse: enum Name [: underlying] { declarations } [;]"""
        token = self._expect(TokenType.KW_ENUM)
        name = self._expect(TokenType.IDENTIFIER).value

        underlying = None
        if self._current().type == TokenType.COLON:
            self._advance()
            underlying = self._expect(TokenType.IDENTIFIER).value

        self._expect(TokenType.LBRACE)
        declarations = self._parse_declaration_list(TokenType.RBRACE)
        self._expect(TokenType.RBRACE)
        if self._current().type == TokenType.SEMICOLON:
            self._advance()

        return EnumNode(
            name=name,
            underlying=underlying,
            declarations=declarations,
            line=token.line,
            col=token.col,
        )

    def _parse_declaration_list(self, terminator: TokenType) -> list[DeclarationNode]:
        """Parse ``decl (, decl)* [,]`` until ``terminator``."""
        declarations = []
        while self._current().type not in (terminator, TokenType.EOF):
            try:
                declarations.append(self._parse_declaration())
                if self._current().type == TokenType.COMMA:
                    self._advance()
                elif self._current().type != terminator:
                    self._fail(f"Expected ',' between declarations, got {self._current().value!r}")
            except SyntaxError:
                self._synchronize((TokenType.COMMA, terminator))
                if self._current().type == TokenType.COMMA:
                    self._advance()
        return declarations

    def _parse_declaration(self) -> DeclarationNode:
        """Parse: NAME [= expr]"""
        name_token = self._current()
        if name_token.type != TokenType.IDENTIFIER:
            self._fail(f"Expected constant name, got {name_token.type.name} ({name_token.value!r})")
        self._advance()

        expression = None
        if self._current().type == TokenType.ASSIGN:
            self._advance()
            expression = self._parse_expression()

        end = self._previous().end
        text = stringize(self.source[name_token.start:end]) if self.source else name_token.value
        return DeclarationNode(
            name=name_token.value,
            expression=expression,
            text=text,
            line=name_token.line,
            col=name_token.col,
        )

    # ─────────────────────────────────────────────────────────
    #  Constant Expressions
    # ─────────────────────────────────────────────────────────

    def _parse_expression(self, level: int = 0) -> ASTNode:
        """Parse a binary expression at precedence ``level`` and tighter."""
        if level == len(BINARY_LEVELS):
            return self._parse_unary()

        operators = BINARY_LEVELS[level]
        left = self._parse_expression(level + 1)
        while self._current().type in operators:
            op_token = self._advance()
            right = self._parse_expression(level + 1)
            left = BinaryNode(
                operator=operators[op_token.type], left=left, right=right,
                line=op_token.line, col=op_token.col,
            )
        return left

    def _parse_unary(self) -> ASTNode:
        token = self._current()
        if token.type in UNARY_OPERATORS:
            self._advance()
            operand = self._parse_unary()
            return UnaryNode(
                operator=UNARY_OPERATORS[token.type], operand=operand,
                line=token.line, col=token.col,
            )
        return self._parse_primary()

    def _parse_primary(self) -> ASTNode:
        token = self._current()

        if token.type == TokenType.NUMBER:
            self._advance()
            try:
                value = parse_int_literal(token.value)
            except ValueError:
                self._fail(f"Invalid integer literal {token.value!r}")
            return NumberNode(value=value, line=token.line, col=token.col)

        if token.type == TokenType.CHAR:
            self._advance()
            return NumberNode(value=ord(token.value), line=token.line, col=token.col)

        if token.type == TokenType.IDENTIFIER:
            self._advance()
            return NameNode(name=token.value, line=token.line, col=token.col)

        if token.type == TokenType.LPAREN:
            self._advance()
            expr = self._parse_expression()
            self._expect(TokenType.RPAREN)
            return expr

        self._fail(f"Expected expression, got {token.type.name} ({token.value!r})")


# ─────────────────────────────────────────────────────────────
#  Convenience Entry Points
# ─────────────────────────────────────────────────────────────

def parse_declarations(source: str) -> list[DeclarationNode]:
    """Lex and parse a bare declaration list."""
    return Parser(Lexer(source).tokenize(), source).parse_declarations()


def parse_program(source: str) -> ProgramNode:
    """Lex and parse a source file of enum blocks."""
    return Parser(Lexer(source).tokenize(), source).parse()
