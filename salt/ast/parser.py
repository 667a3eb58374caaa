from typing import Callable, Dict, List, NoReturn, Optional

from .ast import *
from salt.tokens import Token, TokenType, Location, Span, TOKENS_TO_STR
from salt.errors import ParseError
from salt.value import Value

COMPARISON_OPS: Dict[TokenType, BinaryOp] = {
    TokenType.Eq: BinaryOp.Eq,
    TokenType.NotEq: BinaryOp.Ne,
    TokenType.Lt: BinaryOp.Lt,
    TokenType.LtEq: BinaryOp.Le,
    TokenType.Gt: BinaryOp.Gt,
    TokenType.GtEq: BinaryOp.Ge,
}

ADDITIVE_OPS: Dict[TokenType, BinaryOp] = {
    TokenType.Plus: BinaryOp.Add,
    TokenType.Minus: BinaryOp.Sub,
}

MULTIPLICATIVE_OPS: Dict[TokenType, BinaryOp] = {
    TokenType.Mul: BinaryOp.Mul,
    TokenType.Div: BinaryOp.Div,
    TokenType.Mod: BinaryOp.Mod,
}

EMPTY_SPAN = Span(Location(1, 1, 0), Location(1, 1, 0), '<string>', '')

class Parser:
    def __init__(self, tokens: List[Token]) -> None:
        self.tokens = tokens
        self.index = -1

        self.current: Token = Token(TokenType.EOF, '\0', tokens[0].span if tokens else EMPTY_SPAN)
        self.next()

    def next(self) -> None:
        self.index += 1
        if self.index < len(self.tokens):
            self.current = self.tokens[self.index]
        else:
            self.current = Token(TokenType.EOF, '\0', self.current.span)

    def error(self, message: str, span: Optional[Span] = None) -> NoReturn:
        raise ParseError(message, span or self.current.span)

    def unexpected(self, expected: str) -> NoReturn:
        if self.current.type is TokenType.EOF:
            self.error(f'Unexpected end of input, expected {expected}')

        self.error(f'Expected {expected}, found {self.current.describe()}')

    def expect(self, type: TokenType, message: Optional[str] = None) -> Token:
        if self.current.type is not type:
            self.unexpected(message or repr(TOKENS_TO_STR[type]))

        token = self.current
        self.next()

        return token

    def parse(self) -> Program:
        functions = []
        while self.current.type is not TokenType.EOF:
            functions.append(self.parse_function_definition())

        return Program(functions)

    def parse_function_definition(self) -> FunctionDef:
        start = self.expect(TokenType.Function, "'fn'").span
        token = self.expect(TokenType.Name, 'function name')

        self.expect(TokenType.LParen)
        params: List[str] = []
        if self.current.type is not TokenType.RParen:
            while True:
                param = self.expect(TokenType.Name, 'parameter name')
                if param.value in params:
                    self.error(f'Duplicate parameter {param.value!r} in function {token.value!r}', param.span)

                params.append(param.value)
                if self.current.type is not TokenType.Comma:
                    break

                self.next()

        self.expect(TokenType.RParen, "',' or ')'")
        body = self.parse_block()

        return FunctionDef(Span.merge(start, body.span), token.value, params, body)

    def parse_block(self) -> Block:
        start = self.expect(TokenType.LBrace).span

        statements = []
        while self.current.type is not TokenType.RBrace:
            if self.current.type is TokenType.EOF:
                self.unexpected("'}'")

            statements.append(self.statement())

        end = self.current.span
        self.next()

        return Block(Span.merge(start, end), statements)

    def statement(self) -> Statement:
        span = self.current.span

        if self.current.type is TokenType.If:
            self.next()
            condition = self.expr()

            return IfStmt(span, condition, self.parse_block())
        elif self.current.type is TokenType.While:
            self.next()
            condition = self.expr()

            return WhileStmt(span, condition, self.parse_block())
        elif self.current.type is TokenType.Return:
            self.next()
            value = self.expr()

            self.expect(TokenType.SemiColon)
            return ReturnStmt(span, value)
        elif self.current.type is TokenType.Let:
            self.next()
            name = self.expect(TokenType.Name, 'variable name').value

            self.expect(TokenType.Assign)
            value = self.expr()

            self.expect(TokenType.SemiColon)
            return BindingStmt(span, name, value)
        elif self.current.type is TokenType.Print:
            self.next()

            self.expect(TokenType.LParen)
            value = self.expr()

            self.expect(TokenType.RParen)
            self.expect(TokenType.SemiColon)

            return PrintStmt(span, value)

        expr = self.expr()
        if self.current.type is TokenType.Assign:
            if not isinstance(expr, NameExpr):
                self.error('Cannot assign to this expression, expected a variable name', expr.span)

            self.next()
            value = self.expr()

            self.expect(TokenType.SemiColon)
            return BindingStmt(span, expr.name, value)

        self.expect(TokenType.SemiColon, "';'")
        return ExpressionStmt(span, expr)

    def expr(self) -> ASTExpr:
        return self.comparison()

    def comparison(self) -> ASTExpr:
        lhs = self.additive()
        if self.current.type not in COMPARISON_OPS:
            return lhs

        token = self.current
        self.next()

        rhs = self.additive()
        if self.current.type in COMPARISON_OPS:
            self.error('Comparison operators cannot be chained, use parentheses')

        return BinaryOpExpr(lhs, rhs, COMPARISON_OPS[token.type], token.span)

    def additive(self) -> ASTExpr:
        return self.binary(self.multiplicative, ADDITIVE_OPS)

    def multiplicative(self) -> ASTExpr:
        return self.binary(self.unary, MULTIPLICATIVE_OPS)

    def binary(self, operand: Callable[[], ASTExpr], ops: Dict[TokenType, BinaryOp]) -> ASTExpr:
        lhs = operand()
        while self.current.type in ops:
            token = self.current
            self.next()

            rhs = operand()
            lhs = BinaryOpExpr(lhs, rhs, ops[token.type], token.span)

        return lhs

    def unary(self) -> ASTExpr:
        if self.current.type is not TokenType.Minus:
            return self.primary()

        span = self.current.span
        self.next()

        return UnaryOpExpr(span, self.unary(), UnaryOp.Negate)

    def primary(self) -> ASTExpr:
        span = self.current.span

        if self.current.type is TokenType.Integer:
            value = int(self.current.value)
            self.next()

            return LiteralExpr(span, Value.integer(value))
        elif self.current.type is TokenType.True_:
            self.next()
            return LiteralExpr(span, Value.true())
        elif self.current.type is TokenType.False_:
            self.next()
            return LiteralExpr(span, Value.false())
        elif self.current.type is TokenType.Time:
            self.next()

            self.expect(TokenType.LParen)
            end = self.expect(TokenType.RParen).span

            return TimeExpr(Span.merge(span, end))
        elif self.current.type is TokenType.LParen:
            self.next()
            expr = self.expr()

            self.expect(TokenType.RParen)
            return expr
        elif self.current.type is TokenType.Name:
            name = self.current.value
            self.next()

            if self.current.type is not TokenType.LParen:
                return NameExpr(span, name)

            self.next()

            args = []
            if self.current.type is not TokenType.RParen:
                while True:
                    args.append(self.expr())
                    if self.current.type is not TokenType.Comma:
                        break

                    self.next()

            end = self.expect(TokenType.RParen, "',' or ')'").span
            return CallExpr(Span.merge(span, end), name, args)

        self.unexpected('an expression')

def parse(tokens: List[Token]) -> Program:
    return Parser(tokens).parse()
