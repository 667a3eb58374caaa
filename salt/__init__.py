from typing import Optional, TextIO

from .lexer import Lexer, lex
from .ast import Parser, Program, parse
from .interpreter import Interpreter
from .value import Value, ValueType
from .errors import *

__version__ = '0.1.0'

def load(source: str, filename: str = '<string>', stdout: Optional[TextIO] = None) -> Interpreter:
    tokens = lex(source, filename)
    program = parse(tokens)

    return Interpreter(program, stdout)

def run(source: str, filename: str = '<string>', stdout: Optional[TextIO] = None) -> Value:
    return load(source, filename, stdout).run()
