from typing import Callable, Dict, Iterable, Optional, TextIO
import sys
import time

from salt.ast import *
from salt.tokens import Span
from salt.errors import (
    LoadError, SaltTypeError, SaltNameError, SaltZeroDivisionError, SaltOverflowError
)
from salt.value import Value, ValueType, format_value, fits_int64

from .environment import Environment
from .function import Function

ENTRY_POINT = 'main'

def truncating_div(lhs: int, rhs: int) -> int:
    quotient = abs(lhs) // abs(rhs)
    if (lhs < 0) != (rhs < 0):
        return -quotient

    return quotient

def truncating_mod(lhs: int, rhs: int) -> int:
    return lhs - rhs * truncating_div(lhs, rhs)

ARITHMETIC_OPS: Dict[BinaryOp, Callable[[int, int], int]] = {
    BinaryOp.Add: lambda lhs, rhs: lhs + rhs,
    BinaryOp.Sub: lambda lhs, rhs: lhs - rhs,
    BinaryOp.Mul: lambda lhs, rhs: lhs * rhs,
    BinaryOp.Div: truncating_div,
    BinaryOp.Mod: truncating_mod,
}

COMPARISON_OPS: Dict[BinaryOp, Callable[[int, int], bool]] = {
    BinaryOp.Eq: lambda lhs, rhs: lhs == rhs,
    BinaryOp.Ne: lambda lhs, rhs: lhs != rhs,
    BinaryOp.Lt: lambda lhs, rhs: lhs < rhs,
    BinaryOp.Le: lambda lhs, rhs: lhs <= rhs,
    BinaryOp.Gt: lambda lhs, rhs: lhs > rhs,
    BinaryOp.Ge: lambda lhs, rhs: lhs >= rhs,
}

class Interpreter:
    def __init__(self, program: Program, stdout: Optional[TextIO] = None) -> None:
        self.program = program
        self.stdout = stdout

        self.functions: Dict[str, Function] = {}
        self.environment: Optional[Environment] = None

        self.load(program)

    def load(self, program: Program) -> None:
        for definition in program:
            if definition.name in self.functions:
                raise LoadError(f'Function {definition.name!r} is defined more than once', definition.span)

            self.functions[definition.name] = Function(
                definition.name, definition.params, definition.body, definition.span
            )

        if ENTRY_POINT not in self.functions:
            raise LoadError(f'Could not find {ENTRY_POINT!r} function')

    def get_function(self, name: str, span: Optional[Span] = None) -> Function:
        function = self.functions.get(name)
        if function is None:
            raise SaltNameError(f'No such function {name!r}', span)

        return function

    def run(self) -> Value:
        return self.call_function(ENTRY_POINT)

    def call_function(self, name: str, args: Iterable[Value] = ()) -> Value:
        return self.get_function(name).call(list(args), self)

    def write(self, text: str) -> None:
        stream = self.stdout or sys.stdout

        stream.write(text)
        stream.flush()

    def expect_integer(self, value: Value, span: Span, message: str) -> int:
        if value.type is not ValueType.Integer:
            raise SaltTypeError(f'{message}, found {value.kind}', span)

        return value.value  # type: ignore

    def expect_boolean(self, value: Value, span: Span, message: str) -> bool:
        if value.type is not ValueType.Boolean:
            raise SaltTypeError(f'{message}, found {value.kind}', span)

        return value.value  # type: ignore

    def make_integer(self, result: int, span: Span) -> Value:
        if not fits_int64(result):
            raise SaltOverflowError(f'Integer overflow: {result} does not fit in 64 bits', span)

        return Value.integer(result)

    def execute_block(self, block: Block) -> Optional[Value]:
        for stmt in block:
            result = self.execute(stmt)
            if result is not None:
                return result

        return None

    def execute(self, stmt: Statement) -> Optional[Value]:
        method = getattr(self, f'execute_{stmt.__class__.__name__}')
        return method(stmt)

    def execute_IfStmt(self, stmt: IfStmt) -> Optional[Value]:
        condition = self.visit(stmt.condition)
        if self.expect_boolean(condition, stmt.condition.span, 'If condition must be a Boolean'):
            return self.execute_block(stmt.body)

        return None

    def execute_WhileStmt(self, stmt: WhileStmt) -> Optional[Value]:
        while True:
            condition = self.visit(stmt.condition)
            if not self.expect_boolean(condition, stmt.condition.span, 'While condition must be a Boolean'):
                return None

            result = self.execute_block(stmt.body)
            if result is not None:
                return result

    def execute_ReturnStmt(self, stmt: ReturnStmt) -> Optional[Value]:
        return self.visit(stmt.value)

    def execute_BindingStmt(self, stmt: BindingStmt) -> Optional[Value]:
        value = self.visit(stmt.value)
        self.environment.set(stmt.name, value)  # type: ignore

        return None

    def execute_PrintStmt(self, stmt: PrintStmt) -> Optional[Value]:
        value = self.visit(stmt.value)
        self.write(format_value(value) + '\n')

        return None

    def execute_ExpressionStmt(self, stmt: ExpressionStmt) -> Optional[Value]:
        self.visit(stmt.expr)
        return None

    def visit(self, expr: ASTExpr) -> Value:
        method = getattr(self, f'visit_{expr.__class__.__name__}')
        return method(expr)

    def visit_LiteralExpr(self, expr: LiteralExpr) -> Value:
        return expr.value

    def visit_NameExpr(self, expr: NameExpr) -> Value:
        value = self.environment.get(expr.name)  # type: ignore
        if value is None:
            raise SaltNameError(f'No such variable {expr.name!r}', expr.span)

        return value

    def visit_TimeExpr(self, expr: TimeExpr) -> Value:
        return Value.integer(time.time_ns() // 1_000_000)

    def visit_CallExpr(self, expr: CallExpr) -> Value:
        function = self.get_function(expr.name, expr.span)

        args = [self.visit(arg) for arg in expr.args]
        return function.call(args, self, expr.span)

    def visit_UnaryOpExpr(self, expr: UnaryOpExpr) -> Value:
        value = self.visit(expr.expr)

        # Negate is the only unary operator
        operand = self.expect_integer(value, expr.span, "Cannot apply unary '-' to a non-Integer value")
        return self.make_integer(-operand, expr.span)

    def visit_BinaryOpExpr(self, expr: BinaryOpExpr) -> Value:
        lhs, rhs = self.visit(expr.lhs), self.visit(expr.rhs)

        symbol = BINARY_OP_SYMBOLS[expr.op]
        if lhs.type is not ValueType.Integer or rhs.type is not ValueType.Integer:
            raise SaltTypeError(
                f'Cannot apply {symbol!r} to {lhs.kind} and {rhs.kind}, both operands must be Integer',
                expr.op_span
            )

        if expr.op in COMPARISON_OPS:
            return Value.boolean(COMPARISON_OPS[expr.op](lhs.value, rhs.value))  # type: ignore

        if expr.op in (BinaryOp.Div, BinaryOp.Mod) and rhs.value == 0:
            action = 'Division' if expr.op is BinaryOp.Div else 'Modulo'
            raise SaltZeroDivisionError(f'{action} by zero', expr.op_span)

        result = ARITHMETIC_OPS[expr.op](lhs.value, rhs.value)  # type: ignore
        return self.make_integer(result, expr.op_span)
