"""Abstract Syntax Tree (AST) definitions for the Quill language.

The parser builds these nodes and the interpreter walks them. The set of
node classes is closed: the interpreter has a case for every class
defined here. Every node records the span of source text it came from so
that runtime errors can point back at it. Nodes are frozen once built.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Union

from .position import Span


@dataclass(frozen=True)
class Node:
    """Base class for all AST nodes."""
    span: Span


@dataclass(frozen=True)
class Program(Node):
    body: List[Node]


# Literals

@dataclass(frozen=True)
class NumericLiteral(Node):
    value: float


@dataclass(frozen=True)
class StringLiteral(Node):
    value: str


@dataclass(frozen=True)
class Literal(Node):
    value: str  # 'undefined', 'null', 'true' or 'false'


@dataclass(frozen=True)
class Identifier(Node):
    name: str


@dataclass(frozen=True)
class ArrayLiteral(Node):
    values: List[Node]


@dataclass(frozen=True)
class ObjectLiteral(Node):
    # a None value means "take the same-named variable"
    properties: Dict[str, Optional[Node]]


# Variables

@dataclass(frozen=True)
class VarDeclaration(Node):
    ident: str
    value: Optional[Node]


@dataclass(frozen=True)
class VarAssignment(Node):
    ident: str
    value: Node


# Expressions

@dataclass(frozen=True)
class UnaryExpr(Node):
    prefix: str
    operand: Node


@dataclass(frozen=True)
class LogicalExpr(Node):
    left: Node
    operator: str
    right: Node


@dataclass(frozen=True)
class BinaryExpr(Node):
    left: Node
    operator: str
    right: Node


@dataclass(frozen=True)
class CallExpr(Node):
    callee: Node
    args: List[Node]


@dataclass(frozen=True)
class FunctionDeclaration(Node):
    name: Optional[str]
    params: List[Identifier]
    block: 'BlockStatement'
    is_anonymous: bool


# Statements

@dataclass(frozen=True)
class BlockStatement(Node):
    body: List[Node]


@dataclass(frozen=True)
class IfStatement(Node):
    condition: Node
    block: BlockStatement
    alternate: Optional[Union['IfStatement', BlockStatement]]


@dataclass(frozen=True)
class ForStatement(Node):
    init: Node
    test: Node
    update: Node
    block: BlockStatement


@dataclass(frozen=True)
class WhileStatement(Node):
    test: Node
    block: BlockStatement


@dataclass(frozen=True)
class ReturnStatement(Node):
    argument: Optional[Node]
