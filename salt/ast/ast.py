from typing import Dict, Iterator, List

from enum import IntEnum, auto

from salt.tokens import Span
from salt.value import Value

__all__ = (
    'BinaryOp',
    'UnaryOp',
    'BINARY_OP_SYMBOLS',
    'ASTNode',
    'ASTExpr',
    'LiteralExpr',
    'NameExpr',
    'UnaryOpExpr',
    'BinaryOpExpr',
    'CallExpr',
    'TimeExpr',
    'Statement',
    'Block',
    'IfStmt',
    'WhileStmt',
    'ReturnStmt',
    'BindingStmt',
    'PrintStmt',
    'ExpressionStmt',
    'FunctionDef',
    'Program',
)

class BinaryOp(IntEnum):
    Add = auto()
    Sub = auto()
    Mul = auto()
    Div = auto()
    Mod = auto()
    Eq = auto()
    Ne = auto()
    Lt = auto()
    Le = auto()
    Gt = auto()
    Ge = auto()

class UnaryOp(IntEnum):
    Negate = auto()

BINARY_OP_SYMBOLS: Dict[BinaryOp, str] = {
    BinaryOp.Add: '+',
    BinaryOp.Sub: '-',
    BinaryOp.Mul: '*',
    BinaryOp.Div: '/',
    BinaryOp.Mod: '%',
    BinaryOp.Eq: '==',
    BinaryOp.Ne: '!=',
    BinaryOp.Lt: '<',
    BinaryOp.Le: '<=',
    BinaryOp.Gt: '>',
    BinaryOp.Ge: '>=',
}

class ASTNode:
    span: Span

    def __init__(self, span: Span) -> None:
        self.span = span

    def __repr__(self) -> str:
        return f'<ASTNode>'

class ASTExpr(ASTNode):
    def __repr__(self) -> str:
        return f'<ASTExpr>'

class LiteralExpr(ASTExpr):
    def __init__(self, span: Span, value: Value) -> None:
        super().__init__(span)

        self.value = value

    def __repr__(self) -> str:
        return f'<LiteralExpr value={self.value!r}>'

class NameExpr(ASTExpr):
    def __init__(self, span: Span, name: str) -> None:
        super().__init__(span)

        self.name = name

    def __repr__(self) -> str:
        return f'<NameExpr name={self.name!r}>'

class UnaryOpExpr(ASTExpr):
    def __init__(self, span: Span, expr: ASTExpr, op: UnaryOp) -> None:
        super().__init__(Span.merge(span, expr.span))

        self.expr = expr
        self.op = op

    def __repr__(self) -> str:
        return f'<UnaryOpExpr expr={self.expr!r} op={self.op!r}>'

class BinaryOpExpr(ASTExpr):
    def __init__(self, lhs: ASTExpr, rhs: ASTExpr, op: BinaryOp, op_span: Span) -> None:
        super().__init__(Span.merge(lhs.span, rhs.span))

        self.lhs = lhs
        self.rhs = rhs
        self.op = op

        # Errors about the operator itself point here rather than at the lhs
        self.op_span = op_span

    def __repr__(self) -> str:
        return f'<BinaryOpExpr lhs={self.lhs!r} rhs={self.rhs!r} op={self.op!r}>'

class CallExpr(ASTExpr):
    def __init__(self, span: Span, name: str, args: List[ASTExpr]) -> None:
        super().__init__(span)

        self.name = name
        self.args = args

    def __repr__(self) -> str:
        return f'<CallExpr name={self.name!r} args={self.args!r}>'

class TimeExpr(ASTExpr):
    def __repr__(self) -> str:
        return f'<TimeExpr>'

class Statement(ASTNode):
    def __repr__(self) -> str:
        return f'<Statement>'

class Block(ASTNode):
    def __init__(self, span: Span, statements: List[Statement]) -> None:
        super().__init__(span)

        self.statements = statements

    def __repr__(self) -> str:
        return f'<Block statements={self.statements!r}>'

    def __iter__(self) -> Iterator[Statement]:
        return iter(self.statements)

    def __len__(self) -> int:
        return len(self.statements)

class IfStmt(Statement):
    def __init__(self, span: Span, condition: ASTExpr, body: Block) -> None:
        super().__init__(span)

        self.condition = condition
        self.body = body

    def __repr__(self) -> str:
        return f'<IfStmt condition={self.condition!r} body={self.body!r}>'

class WhileStmt(Statement):
    def __init__(self, span: Span, condition: ASTExpr, body: Block) -> None:
        super().__init__(span)

        self.condition = condition
        self.body = body

    def __repr__(self) -> str:
        return f'<WhileStmt condition={self.condition!r} body={self.body!r}>'

class ReturnStmt(Statement):
    def __init__(self, span: Span, value: ASTExpr) -> None:
        super().__init__(span)

        self.value = value

    def __repr__(self) -> str:
        return f'<ReturnStmt value={self.value!r}>'

class BindingStmt(Statement):
    def __init__(self, span: Span, name: str, value: ASTExpr) -> None:
        super().__init__(span)

        self.name = name
        self.value = value

    def __repr__(self) -> str:
        return f'<BindingStmt name={self.name!r} value={self.value!r}>'

class PrintStmt(Statement):
    def __init__(self, span: Span, value: ASTExpr) -> None:
        super().__init__(span)

        self.value = value

    def __repr__(self) -> str:
        return f'<PrintStmt value={self.value!r}>'

class ExpressionStmt(Statement):
    def __init__(self, span: Span, expr: ASTExpr) -> None:
        super().__init__(span)

        self.expr = expr

    def __repr__(self) -> str:
        return f'<ExpressionStmt expr={self.expr!r}>'

class FunctionDef(ASTNode):
    def __init__(self, span: Span, name: str, params: List[str], body: Block) -> None:
        super().__init__(span)

        self.name = name
        self.params = params
        self.body = body

    def __repr__(self) -> str:
        return f'<FunctionDef name={self.name!r} params={self.params!r} body={self.body!r}>'

class Program:
    def __init__(self, functions: List[FunctionDef]) -> None:
        self.functions = functions

    def __repr__(self) -> str:
        return f'<Program functions={self.functions!r}>'

    def __iter__(self) -> Iterator[FunctionDef]:
        return iter(self.functions)

    def __len__(self) -> int:
        return len(self.functions)
