from __future__ import annotations

from typing import Any, Union
from enum import IntEnum, auto

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

class ValueType(IntEnum):
    Unit = auto()
    Boolean = auto()
    Integer = auto()

class Value:
    """An immutable Salt value. Values are never aliased in a way that matters
    since nothing can mutate one after it has been created."""

    __slots__ = ('value', 'type')

    value: Union[None, bool, int]
    type: ValueType

    def __init__(self, value: Union[None, bool, int], type: ValueType) -> None:
        object.__setattr__(self, 'value', value)
        object.__setattr__(self, 'type', type)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f'{self.__class__.__name__} is immutable')

    def __repr__(self) -> str:
        return f'<Value value={self.value!r} type={self.type!r}>'

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Value):
            return False

        return self.value == other.value and self.type == other.type

    def __hash__(self) -> int:
        return hash((self.value, self.type))

    def __str__(self) -> str:
        return format_value(self)

    @classmethod
    def unit(cls) -> Value:
        return cls(None, ValueType.Unit)

    @classmethod
    def boolean(cls, value: bool) -> Value:
        return cls(bool(value), ValueType.Boolean)

    @classmethod
    def true(cls) -> Value:
        return cls.boolean(True)

    @classmethod
    def false(cls) -> Value:
        return cls.boolean(False)

    @classmethod
    def integer(cls, value: int) -> Value:
        return cls(int(value), ValueType.Integer)

    @property
    def kind(self) -> str:
        return self.type.name

def format_value(value: Value) -> str:
    if value.type is ValueType.Unit:
        return '()'
    elif value.type is ValueType.Boolean:
        return 'true' if value.value else 'false'

    return str(value.value)

def fits_int64(value: int) -> bool:
    return INT64_MIN <= value <= INT64_MAX
