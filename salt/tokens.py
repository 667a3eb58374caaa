from __future__ import annotations

from typing import NamedTuple
from enum import IntEnum, auto

class TokenType(IntEnum):
    Name = auto()
    Integer = auto()

    Function = auto()
    If = auto()
    While = auto()
    Return = auto()
    Let = auto()
    Print = auto()
    Time = auto()
    True_ = auto()
    False_ = auto()

    Plus = auto()
    Minus = auto()
    Mul = auto()
    Div = auto()
    Mod = auto()
    Not = auto()

    Assign = auto()  # =
    Eq = auto()      # ==
    NotEq = auto()   # !=
    Lt = auto()      # <
    LtEq = auto()    # <=
    Gt = auto()      # >
    GtEq = auto()    # >=

    SemiColon = auto()
    Comma = auto()

    LParen = auto()
    RParen = auto()
    LBrace = auto()
    RBrace = auto()

    EOF = auto()

class Location(NamedTuple):
    line: int
    column: int
    index: int

class Span(NamedTuple):
    start: Location
    end: Location

    filename: str
    line: str

    @classmethod
    def merge(cls, start: Span, end: Span) -> Span:
        return cls(start.start, end.end, start.filename, start.line)

class Token(NamedTuple):
    type: TokenType
    value: str
    span: Span

    def __repr__(self) -> str:
        return f'<Token type={self.type!r} value={self.value!r}>'

    def describe(self) -> str:
        if self.type is TokenType.EOF:
            return 'end of input'
        if self.type is TokenType.Name:
            return f'name {self.value!r}'
        if self.type is TokenType.Integer:
            return f'integer {self.value}'

        return repr(self.value)

KEYWORDS = {
    "fn": TokenType.Function,
    "if": TokenType.If,
    "while": TokenType.While,
    "return": TokenType.Return,
    "let": TokenType.Let,
    "print": TokenType.Print,
    "time": TokenType.Time,
    "true": TokenType.True_,
    "false": TokenType.False_,
}

KEYWORDS_TO_STR = {v: k for k, v in KEYWORDS.items()}

SINGLE_CHAR_TOKENS = {
    '+': TokenType.Plus,
    '-': TokenType.Minus,
    '*': TokenType.Mul,
    '/': TokenType.Div,
    '%': TokenType.Mod,
    '!': TokenType.Not,
    '=': TokenType.Assign,
    '<': TokenType.Lt,
    '>': TokenType.Gt,
    ';': TokenType.SemiColon,
    ',': TokenType.Comma,
    '(': TokenType.LParen,
    ')': TokenType.RParen,
    '{': TokenType.LBrace,
    '}': TokenType.RBrace,
}

# Operators that become a different token when followed by '='
DOUBLE_CHAR_TOKENS = {
    '=': TokenType.Eq,
    '!': TokenType.NotEq,
    '<': TokenType.LtEq,
    '>': TokenType.GtEq,
}

TOKENS_TO_STR = {
    **KEYWORDS_TO_STR,
    **{v: k for k, v in SINGLE_CHAR_TOKENS.items()},
    **{v: k + '=' for k, v in DOUBLE_CHAR_TOKENS.items()},
    TokenType.Name: 'name',
    TokenType.Integer: 'integer',
    TokenType.EOF: 'end of input',
}
