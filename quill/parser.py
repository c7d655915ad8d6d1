"""Recursive-descent parser for the Quill language.

The parser consumes the token list produced by :mod:`quill.lexer` and
builds a :class:`~quill.ast.Program`. Comment tokens are dropped when
the parser is created, so the grammar never sees them.

Every ``parse_*`` method returns a :mod:`quill.result` value instead of
raising. The first unexpected token produces an ``Err`` carrying a
:class:`~quill.errors.QuillSyntaxError`, and every caller hands that
``Err`` straight back up. There is no recovery: one syntax error aborts
the whole parse.

Binding power, loosest first::

    expr        function declaration | logical
    logical     comparison (("&&" | "||") comparison)*
    comparison  object (("<" | ">" | "<=" | ">=" | "==" | "!=") object)*
    object      "{" properties "}" | additive
    additive    multiplicative (("+" | "-") multiplicative)*
    multiplic.  call (("*" | "/" | "%") call)*
    call        primary ("(" arguments ")")?
    primary     literals, identifiers, assignment, arrays, unary, "(" expr ")"
"""

from __future__ import annotations

from typing import Callable, Dict, List, Optional, Tuple, Type

from .ast import (
    Node, Program, NumericLiteral, StringLiteral, Literal, Identifier,
    ArrayLiteral, ObjectLiteral, VarDeclaration, VarAssignment, UnaryExpr,
    LogicalExpr, BinaryExpr, IfStatement, ForStatement, WhileStatement,
    BlockStatement, ReturnStatement, CallExpr, FunctionDeclaration,
)
from .errors import QuillSyntaxError
from .lexer import tokenize
from .position import Position, Span
from .result import Ok, Err, Result
from .tokens import Token, TokenKind, LITERAL_KEYWORDS

ADDITIVE_OPS = ('+', '-')
MULTIPLICATIVE_OPS = ('*', '/', '%')
COMPARISON_OPS = ('<', '>', '<=', '>=', '==', '!=')
LOGICAL_OPS = ('&&', '||')
UNARY_OPS = ('-', '!')


class Parser:
    def __init__(self, tokens: List[Token]):
        self.tokens = [t for t in tokens if t.kind != TokenKind.COMMENT]
        if not self.tokens or self.tokens[-1].kind != TokenKind.EOF:
            end = self.tokens[-1].span.right if self.tokens else Position('<stdin>')
            self.tokens.append(Token(TokenKind.EOF, None, Span.of(end)))
        self.pos = 0

    # Token helpers

    def peek(self) -> Token:
        return self.tokens[min(self.pos, len(self.tokens) - 1)]

    def advance(self) -> Token:
        token = self.peek()
        if token.kind != TokenKind.EOF:
            self.pos += 1
        return token

    def match(self, kind: TokenKind, literal: Optional[str] = None) -> bool:
        return self.peek().matches(kind, literal)

    def expect(self, kind: TokenKind, literal: Optional[str], expected: str) -> Result:
        if not self.match(kind, literal):
            return self.error(expected)
        return Ok(self.advance())

    def error(self, expected: str, token: Optional[Token] = None) -> Err:
        token = token or self.peek()
        return Err(QuillSyntaxError(token.span, f"Expected {expected}, got {token.describe()}"))

    # Program and statements

    def parse(self) -> Result:
        start = self.peek()
        body: List[Node] = []
        while not self.match(TokenKind.EOF):
            if self.match(TokenKind.SYMBOL, ';'):
                self.advance()
                continue
            stmt = self.parse_statement()
            if stmt.is_err:
                return stmt
            body.append(stmt.value)
        return Ok(Program(start.span.merge(self.peek().span), body))

    def parse_statement(self) -> Result:
        token = self.peek()
        if token.kind == TokenKind.KEYWORD:
            if token.literal in ('var', 'let'):
                return self.parse_var_declaration()
            if token.literal == 'if':
                return self.parse_if_statement()
            if token.literal == 'for':
                return self.parse_for_statement()
            if token.literal == 'while':
                return self.parse_while_statement()
            if token.literal == 'return':
                return self.parse_return_statement()
        return self.parse_expr()

    def parse_var_declaration(self) -> Result:
        keyword = self.advance()
        ident = self.expect(TokenKind.IDENT, None, 'an identifier')
        if ident.is_err:
            return ident
        name = ident.value
        if not self.match(TokenKind.SYMBOL, '='):
            return Ok(VarDeclaration(keyword.span.merge(name.span), name.literal, None))
        self.advance()
        value = self.parse_expr()
        if value.is_err:
            return value
        return Ok(VarDeclaration(keyword.span.merge(value.value.span), name.literal, value.value))

    def parse_block(self) -> Result:
        opening = self.expect(TokenKind.BRACE, '{', "'{'")
        if opening.is_err:
            return opening
        body: List[Node] = []
        while not self.match(TokenKind.BRACE, '}'):
            if self.match(TokenKind.EOF):
                return self.error("'}'")
            if self.match(TokenKind.SYMBOL, ';'):
                self.advance()
                continue
            stmt = self.parse_statement()
            if stmt.is_err:
                return stmt
            body.append(stmt.value)
        closing = self.advance()
        return Ok(BlockStatement(opening.value.span.merge(closing.span), body))

    def parse_if_statement(self) -> Result:
        keyword = self.advance()
        condition = self.parse_statement()
        if condition.is_err:
            return condition
        block = self.parse_block()
        if block.is_err:
            return block
        alternate = None
        if self.match(TokenKind.KEYWORD, 'else'):
            self.advance()
            if self.match(TokenKind.KEYWORD, 'if'):
                alt = self.parse_if_statement()
            else:
                alt = self.parse_block()
            if alt.is_err:
                return alt
            alternate = alt.value
        end = alternate if alternate is not None else block.value
        return Ok(IfStatement(keyword.span.merge(end.span), condition.value, block.value, alternate))

    def parse_for_statement(self) -> Result:
        keyword = self.advance()
        parts: List[Node] = []
        steps: Tuple[Tuple[Callable[[], Result], TokenKind, str], ...] = (
            (self.parse_statement, TokenKind.SYMBOL, ';'),
            (self.parse_expr, TokenKind.SYMBOL, ';'),
            (self.parse_expr, TokenKind.PAREN, ')'),
        )
        opening = self.expect(TokenKind.PAREN, '(', "'(' after 'for'")
        if opening.is_err:
            return opening
        for parse_part, kind, terminator in steps:
            part = parse_part()
            if part.is_err:
                return part
            closing = self.expect(kind, terminator, f"'{terminator}'")
            if closing.is_err:
                return closing
            parts.append(part.value)
        block = self.parse_block()
        if block.is_err:
            return block
        init, test, update = parts
        return Ok(ForStatement(keyword.span.merge(block.value.span), init, test, update, block.value))

    def parse_while_statement(self) -> Result:
        keyword = self.advance()
        opening = self.expect(TokenKind.PAREN, '(', "'(' after 'while'")
        if opening.is_err:
            return opening
        test = self.parse_expr()
        if test.is_err:
            return test
        closing = self.expect(TokenKind.PAREN, ')', "')'")
        if closing.is_err:
            return closing
        block = self.parse_block()
        if block.is_err:
            return block
        return Ok(WhileStatement(keyword.span.merge(block.value.span), test.value, block.value))

    def parse_return_statement(self) -> Result:
        keyword = self.advance()
        if self.match(TokenKind.SYMBOL, ';') or self.match(TokenKind.BRACE, '}') or self.match(TokenKind.EOF):
            return Ok(ReturnStatement(keyword.span, None))
        argument = self.parse_expr()
        if argument.is_err:
            return argument
        return Ok(ReturnStatement(keyword.span.merge(argument.value.span), argument.value))

    # Expressions

    def parse_expr(self) -> Result:
        if self.match(TokenKind.KEYWORD, 'function'):
            return self.parse_function_declaration()
        return self.parse_logical_expr()

    def parse_function_declaration(self) -> Result:
        keyword = self.advance()
        name = None
        if self.match(TokenKind.IDENT):
            name = self.advance().literal
        opening = self.expect(TokenKind.PAREN, '(', "'(' before parameters")
        if opening.is_err:
            return opening
        params: List[Identifier] = []
        while not self.match(TokenKind.PAREN, ')'):
            if params:
                comma = self.expect(TokenKind.SYMBOL, ',', "',' or ')'")
                if comma.is_err:
                    return comma
            param = self.expect(TokenKind.IDENT, None, 'a parameter name')
            if param.is_err:
                return param
            if any(p.name == param.value.literal for p in params):
                return self.error('a unique parameter name', param.value)
            params.append(Identifier(param.value.span, param.value.literal))
        self.advance()
        block = self.parse_block()
        if block.is_err:
            return block
        span = keyword.span.merge(block.value.span)
        return Ok(FunctionDeclaration(span, name, params, block.value, name is None))

    def parse_binary(self, operand: Callable[[], Result], kind: TokenKind,
                     operators: Tuple[str, ...], node_type: Type[Node]) -> Result:
        """Parse a left-associative chain of one precedence level."""
        left = operand()
        if left.is_err:
            return left
        node = left.value
        while self.peek().kind == kind and self.peek().literal in operators:
            operator = self.advance().literal
            right = operand()
            if right.is_err:
                return right
            node = node_type(node.span.merge(right.value.span), node, operator, right.value)
        return Ok(node)

    def parse_logical_expr(self) -> Result:
        return self.parse_binary(self.parse_comparison_expr, TokenKind.LOGICAL_OP, LOGICAL_OPS, LogicalExpr)

    def parse_comparison_expr(self) -> Result:
        return self.parse_binary(self.parse_object_expr, TokenKind.COMP_OP, COMPARISON_OPS, BinaryExpr)

    def parse_object_expr(self) -> Result:
        if not self.match(TokenKind.BRACE, '{'):
            return self.parse_additive_expr()
        opening = self.advance()
        properties: Dict[str, Optional[Node]] = {}
        while not self.match(TokenKind.BRACE, '}'):
            key = self.peek()
            if key.kind not in (TokenKind.IDENT, TokenKind.STRING):
                return self.error("a property name or '}'")
            if key.literal in properties:
                return self.error('a unique property name', key)
            self.advance()
            value = None
            if self.match(TokenKind.SYMBOL, ':'):
                self.advance()
                parsed = self.parse_expr()
                if parsed.is_err:
                    return parsed
                value = parsed.value
            elif key.kind == TokenKind.STRING:
                return self.error("':' after a quoted property name")
            properties[key.literal] = value
            if self.match(TokenKind.SYMBOL, ','):
                self.advance()
            elif not self.match(TokenKind.BRACE, '}'):
                return self.error("',' or '}'")
        closing = self.advance()
        return Ok(ObjectLiteral(opening.span.merge(closing.span), properties))

    def parse_additive_expr(self) -> Result:
        return self.parse_binary(self.parse_multiplicative_expr, TokenKind.OPERATOR, ADDITIVE_OPS, BinaryExpr)

    def parse_multiplicative_expr(self) -> Result:
        return self.parse_binary(self.parse_call_expr, TokenKind.OPERATOR, MULTIPLICATIVE_OPS, BinaryExpr)

    def parse_call_expr(self) -> Result:
        callee = self.parse_primary()
        if callee.is_err or not self.match(TokenKind.PAREN, '('):
            return callee
        self.advance()
        args = self.parse_list(TokenKind.PAREN, ')')
        if args.is_err:
            return args
        values, closing = args.value
        return Ok(CallExpr(callee.value.span.merge(closing.span), callee.value, values))

    def parse_list(self, kind: TokenKind, terminator: str) -> Result:
        """Parse comma separated expressions up to and including ``terminator``.

        A trailing comma before the terminator is accepted.
        """
        values: List[Node] = []
        while not self.match(kind, terminator):
            value = self.parse_expr()
            if value.is_err:
                return value
            values.append(value.value)
            if self.match(TokenKind.SYMBOL, ','):
                self.advance()
            elif not self.match(kind, terminator):
                return self.error(f"',' or '{terminator}'")
        return Ok((values, self.advance()))

    def parse_primary(self) -> Result:
        token = self.peek()
        if token.kind == TokenKind.NUMBER:
            self.advance()
            return Ok(NumericLiteral(token.span, token.literal))
        if token.kind == TokenKind.STRING:
            self.advance()
            return Ok(StringLiteral(token.span, token.literal))
        if token.kind == TokenKind.KEYWORD and token.literal in LITERAL_KEYWORDS:
            self.advance()
            return Ok(Literal(token.span, token.literal))
        if token.kind == TokenKind.IDENT:
            self.advance()
            if not self.match(TokenKind.SYMBOL, '='):
                return Ok(Identifier(token.span, token.literal))
            self.advance()
            value = self.parse_expr()
            if value.is_err:
                return value
            return Ok(VarAssignment(token.span.merge(value.value.span), token.literal, value.value))
        if token.matches(TokenKind.BRACKET, '['):
            self.advance()
            items = self.parse_list(TokenKind.BRACKET, ']')
            if items.is_err:
                return items
            values, closing = items.value
            return Ok(ArrayLiteral(token.span.merge(closing.span), values))
        if token.kind == TokenKind.OPERATOR and token.literal in UNARY_OPS:
            self.advance()
            operand = self.parse_call_expr()
            if operand.is_err:
                return operand
            return Ok(UnaryExpr(token.span.merge(operand.value.span), token.literal, operand.value))
        if token.matches(TokenKind.PAREN, '('):
            self.advance()
            inner = self.parse_expr()
            if inner.is_err:
                return inner
            closing = self.expect(TokenKind.PAREN, ')', "')'")
            if closing.is_err:
                return closing
            return inner
        return self.error('an expression')


def parse(tokens: List[Token]) -> Result:
    """Parse a token list into ``Ok(Program)`` or ``Err(QuillSyntaxError)``."""
    return Parser(tokens).parse()


def parse_program(source: str, filename: str = '<stdin>') -> Result:
    """Tokenize and parse Quill source code in one step."""
    return parse(tokenize(source, filename))
