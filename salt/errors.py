from typing import NoReturn, Optional, TextIO

from enum import Enum
import os
import sys

from .tokens import Span

__all__ = (
    'Colors',
    'SaltError',
    'LexError',
    'ParseError',
    'LoadError',
    'SaltTypeError',
    'SaltNameError',
    'ArityError',
    'SaltArithmeticError',
    'SaltZeroDivisionError',
    'SaltOverflowError',
    'report',
    'fatal',
)

class Colors(str, Enum):
    Reset = '\033[0m'
    Red = '\033[1;31m'
    White = '\033[1;37m'

    def __str__(self) -> str:
        if os.environ.get('NO_COLOR'):
            return ''

        return self.value

class SaltError(Exception):
    """Base class for every error a Salt program can abort with.

    Nothing inside the language catches these: the library raises them and
    the command line driver reports them through :func:`report`.
    """

    kind = 'Error'

    def __init__(self, message: str, span: Optional[Span] = None) -> None:
        super().__init__(message)

        self.message = message
        self.span = span

    def __repr__(self) -> str:
        return f'<{self.__class__.__name__} message={self.message!r}>'

class LexError(SaltError):
    kind = 'Lex error'

class ParseError(SaltError):
    kind = 'Parse error'

class LoadError(SaltError):
    kind = 'Load error'

class SaltTypeError(SaltError):
    kind = 'Type error'

class SaltNameError(SaltError):
    kind = 'Name error'

class ArityError(SaltError):
    kind = 'Arity error'

class SaltArithmeticError(SaltError):
    kind = 'Arithmetic error'

class SaltZeroDivisionError(SaltArithmeticError):
    pass

class SaltOverflowError(SaltArithmeticError):
    pass

def report(err: SaltError, stream: Optional[TextIO] = None) -> None:
    stream = stream or sys.stderr
    span = err.span

    if span is None:
        stream.write(f'{Colors.Red}{err.kind}:{Colors.Reset} {err.message}\n')
        stream.flush()
        return

    stream.write(f'{Colors.White}{span.filename}:{span.start.line}:{span.start.column}{Colors.Reset}')
    stream.write(f' {Colors.Red}{err.kind}:{Colors.Reset} {err.message}\n')

    stream.write(f'{Colors.White}{span.start.line} |{Colors.Reset} {span.line}\n')
    stream.flush()

def fatal(err: SaltError, stream: Optional[TextIO] = None) -> NoReturn:
    report(err, stream)
    sys.exit(1)
