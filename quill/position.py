"""Source positions and spans used for Quill diagnostics."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional


@dataclass
class Position:
    """A cursor into a source file. All fields are zero-based."""
    filename: str
    index: int = 0
    line: int = 0
    column: int = 0

    def advance(self, char: Optional[str] = None) -> 'Position':
        self.index += 1
        if char == '\n':
            self.line += 1
            self.column = 0
        else:
            self.column += 1
        return self

    def clone(self) -> 'Position':
        return replace(self)

    def __str__(self) -> str:
        return f"{self.filename}:{self.line + 1}:{self.column + 1}"


@dataclass
class Span:
    left: Position
    right: Position

    @staticmethod
    def of(left: Optional[Position], right: Optional[Position] = None) -> 'Span':
        """Build a span, filling a missing side with a single-width step."""
        if left is None and right is None:
            raise ValueError('a span needs at least one position')
        if right is None:
            right = left.clone().advance()
        elif left is None:
            left = replace(right, index=max(right.index - 1, 0), column=max(right.column - 1, 0))
        return Span(left.clone(), right.clone())

    def merge(self, other: 'Span') -> 'Span':
        return Span(self.left.clone(), other.right.clone())
