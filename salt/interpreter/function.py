from __future__ import annotations

from typing import NamedTuple, List, TYPE_CHECKING, Optional

from salt.ast import Block
from salt.errors import ArityError
from salt.tokens import Span
from salt.value import Value

from .environment import Environment

if TYPE_CHECKING:
    from .interpreter import Interpreter

class Function(NamedTuple):
    name: str
    params: List[str]
    body: Block
    span: Span

    def __repr__(self) -> str:
        return f'<Function name={self.name!r} params={self.params!r}>'

    @property
    def arity(self) -> int:
        return len(self.params)

    def call(self, args: List[Value], interpreter: Interpreter, span: Optional[Span] = None) -> Value:
        if len(args) != self.arity:
            noun = 'argument' if self.arity == 1 else 'arguments'
            raise ArityError(
                f'Function {self.name!r} expects {self.arity} {noun}, got {len(args)}',
                span or self.span
            )

        environment = Environment(interpreter, interpreter.environment)
        for param, arg in zip(self.params, args):
            environment.set(param, arg)

        with environment:
            result = interpreter.execute_block(self.body)

        if result is None:
            return Value.unit()

        return result
