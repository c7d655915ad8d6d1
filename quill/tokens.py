from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Optional

from .position import Span


class TokenKind(Enum):
    OPERATOR = auto()
    LOGICAL_OP = auto()
    COMP_OP = auto()
    NUMBER = auto()
    STRING = auto()
    PAREN = auto()
    BRACKET = auto()
    BRACE = auto()
    IDENT = auto()
    KEYWORD = auto()
    SYMBOL = auto()
    COMMENT = auto()
    EOF = auto()


LITERAL_KEYWORDS = ('undefined', 'null', 'true', 'false')

KEYWORDS = {
    'var',
    'let',
    'if',
    'else',
    'for',
    'while',
    'return',
    'function',
    *LITERAL_KEYWORDS,
}


@dataclass
class Token:
    kind: TokenKind
    literal: Any
    span: Span

    def matches(self, kind: TokenKind, literal: Optional[Any] = None) -> bool:
        if self.kind != kind:
            return False
        return literal is None or self.literal == literal

    def describe(self) -> str:
        """Human readable form used in parser messages."""
        if self.kind == TokenKind.EOF:
            return 'end of input'
        if self.kind == TokenKind.STRING:
            return f'string "{self.literal}"'
        if self.kind == TokenKind.NUMBER:
            return f'number {format_number(self.literal)}'
        return f"'{self.literal}'"

    def __repr__(self) -> str:
        return f"[{self.kind.name}: {self.literal!r}]"


def format_number(value: float) -> str:
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)
