from __future__ import annotations

from typing import Optional, TYPE_CHECKING, Dict, Any, Iterator

if TYPE_CHECKING:
    from salt.value import Value
    from .interpreter import Interpreter

class Environment:
    """The local bindings of a single function activation.

    There is no parent chain: `if` and `while` bodies read and write the
    environment of the function they appear in, and a called function never
    sees its caller's bindings. `previous` only records which environment to
    restore once the activation is over.
    """

    def __init__(self, interpreter: Interpreter, previous: Optional[Environment] = None) -> None:
        self._interpreter = interpreter

        self.previous = previous
        self.variables: Dict[str, Value] = {}

    def __repr__(self) -> str:
        return f'<Environment variables={self.variables!r}>'

    def __contains__(self, name: str) -> bool:
        return name in self.variables

    def __iter__(self) -> Iterator[str]:
        return iter(self.variables)

    def __len__(self) -> int:
        return len(self.variables)

    def get(self, name: str) -> Optional[Value]:
        return self.variables.get(name)

    def set(self, name: str, value: Value) -> None:
        self.variables[name] = value

    def __enter__(self) -> Environment:
        self._interpreter.environment = self
        return self

    def __exit__(self, *args: Any) -> None:
        self._interpreter.environment = self.previous
