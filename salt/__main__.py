from typing import List, Optional
import sys

from .lexer import Lexer
from .ast import Parser
from .interpreter import Interpreter
from .errors import SaltError, ParseError, Colors, fatal
from .value import format_value

USAGE = """\
usage: python -m salt FILE [OPTIONS]

Run a Salt program by calling its main function.

Options:
  --tokens   Print the token stream and exit
  --ast      Print the parsed program and exit
  --result   Print the value returned by main
  --help     Show this help message
"""

RECURSION_LIMIT = 10_000

def main(argv: Optional[List[str]] = None) -> int:
    args = argv if argv is not None else sys.argv[1:]

    filename: Optional[str] = None
    flags = set()

    for arg in args:
        if arg in ('--help', '-h'):
            sys.stdout.write(USAGE)
            return 0
        elif arg in ('--tokens', '--ast', '--result'):
            flags.add(arg)
        elif arg.startswith('-'):
            sys.stderr.write(f'Unknown option {arg!r}\n{USAGE}')
            return 1
        elif filename is None:
            filename = arg
        else:
            sys.stderr.write(f'Unexpected argument {arg!r}\n{USAGE}')
            return 1

    if filename is None:
        sys.stderr.write(f'No file specified\n{USAGE}')
        return 1

    try:
        with open(filename, 'r', encoding='utf-8') as file:
            source = file.read()
    except OSError as exc:
        sys.stderr.write(f'{Colors.Red}Error:{Colors.Reset} Could not read {filename!r}: {exc.strerror}\n')
        return 1

    sys.setrecursionlimit(max(sys.getrecursionlimit(), RECURSION_LIMIT))

    try:
        tokens = list(Lexer(source, filename))
        if '--tokens' in flags:
            for token in tokens:
                sys.stdout.write(f'{token.span.start.line}:{token.span.start.column} {token!r}\n')

            return 0

        try:
            program = Parser(tokens).parse()
        except RecursionError:
            fatal(ParseError('Program is nested too deeply to parse'))

        if '--ast' in flags:
            for function in program:
                sys.stdout.write(f'{function!r}\n')

            return 0

        interpreter = Interpreter(program)
        result = interpreter.run()
    except SaltError as err:
        fatal(err)
    except RecursionError:
        fatal(SaltError('Maximum call depth exceeded'))

    if '--result' in flags:
        sys.stdout.write(f'{format_value(result)}\n')

    return 0

if __name__ == '__main__':
    sys.exit(main())
