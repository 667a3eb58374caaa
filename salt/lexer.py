from typing import Iterator, List, Optional

from .tokens import Token, TokenType, KEYWORDS, SINGLE_CHAR_TOKENS, DOUBLE_CHAR_TOKENS, Location, Span
from .errors import LexError
from .value import INT64_MAX

WHITESPACE = (' ', '\t', '\r', '\n')

def is_name_char(char: Optional[str]) -> bool:
    return char is not None and char.isascii() and (char.isalpha() or char == '_')

def is_digit(char: Optional[str]) -> bool:
    return char is not None and char.isascii() and char.isdigit()

class Lexer:
    def __init__(self, source: str, filename: str = '<string>') -> None:
        self.source = source
        self.filename = filename
        self.lines = source.splitlines()

        self.index = -1
        self.line = 1
        self.column = 0

        self.current_char: str = None # type: ignore
        self.next()

    @property
    def location(self) -> Location:
        return Location(self.line, self.column, self.index)

    def make_span(self, start: Location, end: Optional[Location] = None) -> Span:
        if end is None:
            end = self.location

        if 0 < start.line <= len(self.lines):
            line = self.lines[start.line - 1]
        else:
            line = ''

        return Span(start, end, self.filename, line)

    def next(self) -> None:
        if self.current_char == '\n':
            self.line += 1
            self.column = 0

        self.index += 1
        self.column += 1

        if self.index < len(self.source):
            self.current_char = self.source[self.index]
        else:
            self.current_char = None # type: ignore

    def peek(self) -> Optional[str]:
        if self.index + 1 < len(self.source):
            return self.source[self.index + 1]

        return None

    def skip_comment(self) -> None:
        while self.current_char and self.current_char != '\n':
            self.next()

    def parse_integer(self) -> Token:
        start = self.location
        value = ""

        while is_digit(self.current_char):
            value += self.current_char
            self.next()

        span = self.make_span(start)
        digits = value.lstrip('0')
        if len(digits) > len(str(INT64_MAX)) or int(value) > INT64_MAX:
            if len(value) > 40:
                value = f'{value[:20]}...{value[-20:]}'

            raise LexError(f'Integer literal {value} does not fit in 64 bits', span)

        return Token(TokenType.Integer, value, span)

    def parse_name(self) -> Token:
        start = self.location
        value = ""

        while is_name_char(self.current_char):
            value += self.current_char
            self.next()

        if value in KEYWORDS:
            return Token(KEYWORDS[value], value, self.make_span(start))

        return Token(TokenType.Name, value, self.make_span(start))

    def parse_symbol(self) -> Token:
        start = self.location
        char = self.current_char

        if char in DOUBLE_CHAR_TOKENS and self.peek() == '=':
            self.next()
            self.next()

            return Token(DOUBLE_CHAR_TOKENS[char], char + '=', self.make_span(start))

        if char in SINGLE_CHAR_TOKENS:
            self.next()
            return Token(SINGLE_CHAR_TOKENS[char], char, self.make_span(start))

        raise LexError(f'Unexpected character {char!r}', self.make_span(start))

    def lex(self) -> Token:
        while self.current_char:
            if self.current_char in WHITESPACE:
                self.next()
            elif self.current_char == '#':
                self.skip_comment()
            elif is_digit(self.current_char):
                return self.parse_integer()
            elif is_name_char(self.current_char):
                return self.parse_name()
            else:
                return self.parse_symbol()

        return Token(TokenType.EOF, "\0", self.make_span(self.location))

    def __iter__(self) -> Iterator[Token]:
        return self

    def __next__(self) -> Token:
        token = self.lex()
        if token.type is TokenType.EOF:
            raise StopIteration

        return token

def lex(source: str, filename: str = '<string>') -> List[Token]:
    return list(Lexer(source, filename))
