"""
Lexer module for tokenizing :eval and :if expressions.

Expressions are scanned with a single compiled pattern; each match is
turned into a Token. Both the word (and/or/not) and the symbol
(&&/||/!) forms of logical operators are accepted, as are JavaScript
style strict comparisons (=== and !==).
"""

import re
from dataclasses import dataclass
from enum import Enum, auto


class TokenType(Enum):
    """Token types for the expression lexer."""

    IDENTIFIER = auto()
    STRING = auto()
    NUMBER = auto()
    TRUE = auto()
    FALSE = auto()
    NULL = auto()

    COMMA = auto()
    LPAREN = auto()
    RPAREN = auto()

    GT = auto()
    LT = auto()
    GTE = auto()
    LTE = auto()
    EQ = auto()
    NEQ = auto()

    PLUS = auto()
    MINUS = auto()
    STAR = auto()
    SLASH = auto()
    PERCENT = auto()

    AND = auto()
    OR = auto()
    NOT = auto()

    EOF = auto()


# Words with a meaning of their own (case-insensitive)
KEYWORDS = {
    "and": TokenType.AND,
    "or": TokenType.OR,
    "not": TokenType.NOT,
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
    "null": TokenType.NULL,
    "none": TokenType.NULL,
    "undefined": TokenType.NULL,
}

OPERATORS = {
    "===": TokenType.EQ,
    "!==": TokenType.NEQ,
    "==": TokenType.EQ,
    "!=": TokenType.NEQ,
    ">=": TokenType.GTE,
    "<=": TokenType.LTE,
    "&&": TokenType.AND,
    "||": TokenType.OR,
    ">": TokenType.GT,
    "<": TokenType.LT,
    "!": TokenType.NOT,
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "%": TokenType.PERCENT,
    ",": TokenType.COMMA,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
}

ESCAPES = {"n": "\n", "t": "\t", "\\": "\\", '"': '"', "'": "'"}

# Longer operators first so "==" never lexes as two tokens
_OPERATOR_ALTERNATION = "|".join(
    re.escape(op) for op in sorted(OPERATORS, key=len, reverse=True)
)

TOKEN_PATTERN = re.compile(
    rf"""
    (?P<space>\s+)
  | (?P<string>"(?:[^"\\]|\\.)*"|'(?:[^'\\]|\\.)*')
  | (?P<number>\d+(?:\.\d+)?)
  | (?P<name>[A-Za-z_$][A-Za-z0-9_]*)
  | (?P<operator>{_OPERATOR_ALTERNATION})
    """,
    re.VERBOSE | re.DOTALL,
)

_ESCAPE_PATTERN = re.compile(r"\\(.)", re.DOTALL)


@dataclass
class Token:
    """Represents a single token from the lexer."""

    type: TokenType
    value: str
    position: int  # offset in the expression text

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, pos={self.position})"


class LexerError(Exception):
    """Exception raised for lexer errors."""

    def __init__(self, message: str, position: int):
        self.position = position
        super().__init__(f"{message} at position {position}")


def unescape(body: str) -> str:
    """
    Resolve backslash escapes in a string literal body.

    Unknown escapes keep their backslash, so Windows paths such as
    ``C:\\data`` survive unchanged.
    """
    return _ESCAPE_PATTERN.sub(lambda m: ESCAPES.get(m.group(1), m.group(0)), body)


class ExpressionLexer:
    """
    Tokenizer for directive expressions.

    Usage:
        tokens = ExpressionLexer('$count >= 2 && "$name" != "dist"').tokenize()
    """

    def __init__(self, source: str):
        self.source = source

    def tokenize(self) -> list[Token]:
        """Tokenize the whole expression, ending with an EOF token."""
        tokens: list[Token] = []
        pos = 0

        while pos < len(self.source):
            match = TOKEN_PATTERN.match(self.source, pos)
            if match is None:
                char = self.source[pos]
                if char in "\"'":
                    raise LexerError(f"Unterminated string starting with {char}", pos)
                raise LexerError(f"Unexpected character: {char!r}", pos)

            kind, text = match.lastgroup, match.group()

            if kind == "string":
                tokens.append(Token(TokenType.STRING, unescape(text[1:-1]), pos))
            elif kind == "number":
                tokens.append(Token(TokenType.NUMBER, text, pos))
            elif kind == "name":
                tokens.append(Token(KEYWORDS.get(text.lower(), TokenType.IDENTIFIER), text, pos))
            elif kind == "operator":
                tokens.append(Token(OPERATORS[text], text, pos))

            pos = match.end()

        tokens.append(Token(TokenType.EOF, "", pos))
        return tokens
