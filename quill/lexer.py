"""Tokenizer for the Quill language.

The lexer walks the source one character at a time and classifies each
position into exactly one token category. Categories are tried in a
fixed order, so two-character operators win over their one-character
prefixes. Characters that belong to no category (whitespace included)
are skipped without producing a token or an error.
"""

from __future__ import annotations

from typing import List, Optional

from .position import Position, Span
from .tokens import Token, TokenKind, KEYWORDS

LOGICAL_OPS = ('&&', '||')
COMPARISON_OPS_2 = ('<=', '>=', '==', '!=')
COMPARISON_OPS_1 = ('<', '>')
OPERATORS = '+-*/%!'
SYMBOLS = ',;:='
PARENS = '()'
BRACKETS = '[]'
BRACES = '{}'
DIGITS = '0123456789'
QUOTES = '"\''
IDENT_START = 'abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ_'

SINGLE_CHAR_KINDS = (
    (OPERATORS, TokenKind.OPERATOR),
    (SYMBOLS, TokenKind.SYMBOL),
    (PARENS, TokenKind.PAREN),
    (BRACKETS, TokenKind.BRACKET),
    (BRACES, TokenKind.BRACE),
)


def single_char_kind(c: str) -> Optional[TokenKind]:
    for chars, kind in SINGLE_CHAR_KINDS:
        if c in chars:
            return kind
    return None


class Lexer:
    def __init__(self, source: str, filename: str = '<stdin>'):
        self.source = source
        self.filename = filename
        self.pos = Position(filename)

    def at(self, width: int = 1) -> str:
        return self.source[self.pos.index:self.pos.index + width]

    def advance(self, count: int = 1) -> None:
        for _ in range(count):
            self.pos.advance(self.at())

    def not_eof(self) -> bool:
        return self.pos.index < len(self.source)

    def tokenize(self) -> List[Token]:
        tokens: List[Token] = []
        while self.not_eof():
            pair = self.at(2)
            c = self.at()
            if pair == '//':
                tokens.append(self.make_line_comment())
            elif pair == '/*':
                tokens.append(self.make_block_comment())
            elif pair in LOGICAL_OPS:
                tokens.append(self.make_fixed(TokenKind.LOGICAL_OP, pair))
            elif pair in COMPARISON_OPS_2:
                tokens.append(self.make_fixed(TokenKind.COMP_OP, pair))
            elif c in COMPARISON_OPS_1:
                tokens.append(self.make_fixed(TokenKind.COMP_OP, c))
            elif single_char_kind(c) is not None:
                tokens.append(self.make_fixed(single_char_kind(c), c))
            elif c in DIGITS:
                tokens.append(self.make_number())
            elif c in QUOTES:
                tokens.append(self.make_string())
            elif c in IDENT_START:
                tokens.append(self.make_ident())
            else:
                # whitespace and unrecognised characters
                self.advance()
        tokens.append(Token(TokenKind.EOF, None, Span.of(self.pos)))
        return tokens

    def make_fixed(self, kind: TokenKind, text: str) -> Token:
        left = self.pos.clone()
        self.advance(len(text))
        return Token(kind, text, Span(left, self.pos.clone()))

    def make_line_comment(self) -> Token:
        left = self.pos.clone()
        self.advance(2)
        start = self.pos.index
        while self.not_eof() and self.at() != '\n':
            self.advance()
        text = self.source[start:self.pos.index].rstrip('\r')
        return Token(TokenKind.COMMENT, text, Span(left, self.pos.clone()))

    def make_block_comment(self) -> Token:
        left = self.pos.clone()
        self.advance(2)
        start = self.pos.index
        while self.not_eof() and self.at(2) != '*/':
            self.advance()
        text = self.source[start:self.pos.index]
        if self.not_eof():
            self.advance(2)
        return Token(TokenKind.COMMENT, text, Span(left, self.pos.clone()))

    def make_number(self) -> Token:
        left = self.pos.clone()
        start = self.pos.index
        has_dot = False
        while self.not_eof() and (self.at() in DIGITS or self.at() == '.'):
            if self.at() == '.':
                # a second dot ends the number
                if has_dot:
                    break
                has_dot = True
            self.advance()
        text = self.source[start:self.pos.index]
        return Token(TokenKind.NUMBER, float(text), Span(left, self.pos.clone()))

    def make_string(self) -> Token:
        left = self.pos.clone()
        quote = self.at()
        self.advance()
        start = self.pos.index
        while self.not_eof() and self.at() != quote:
            self.advance()
        text = self.source[start:self.pos.index]
        if self.not_eof():
            self.advance()  # closing quote
        return Token(TokenKind.STRING, text, Span(left, self.pos.clone()))

    def make_ident(self) -> Token:
        left = self.pos.clone()
        start = self.pos.index
        while self.not_eof() and (self.at() in IDENT_START or self.at() in DIGITS):
            self.advance()
        name = self.source[start:self.pos.index]
        kind = TokenKind.KEYWORD if name in KEYWORDS else TokenKind.IDENT
        return Token(kind, name, Span(left, self.pos.clone()))


def tokenize(source: str, filename: str = '<stdin>') -> List[Token]:
    """Convert source code into a list of tokens ending with EOF."""
    return Lexer(source, filename).tokenize()
