from quill.lexer import tokenize, Lexer
from quill.position import Position, Span
from quill.tokens import TokenKind


def kinds_and_literals(source):
    return [(t.kind, t.literal) for t in tokenize(source)]


def test_declaration_tokens():
    assert kinds_and_literals("let x = 1.5;") == [
        (TokenKind.KEYWORD, 'let'),
        (TokenKind.IDENT, 'x'),
        (TokenKind.SYMBOL, '='),
        (TokenKind.NUMBER, 1.5),
        (TokenKind.SYMBOL, ';'),
        (TokenKind.EOF, None),
    ]


def test_two_character_operators_win():
    tokens = kinds_and_literals("a <= b && c != d || e == f >= g < h")
    ops = [(k, v) for k, v in tokens if k in (TokenKind.COMP_OP, TokenKind.LOGICAL_OP)]
    assert ops == [
        (TokenKind.COMP_OP, '<='),
        (TokenKind.LOGICAL_OP, '&&'),
        (TokenKind.COMP_OP, '!='),
        (TokenKind.LOGICAL_OP, '||'),
        (TokenKind.COMP_OP, '=='),
        (TokenKind.COMP_OP, '>='),
        (TokenKind.COMP_OP, '<'),
    ]


def test_single_character_categories():
    assert [k for k, _ in kinds_and_literals("!-(x)[y]{z},:")] == [
        TokenKind.OPERATOR, TokenKind.OPERATOR,
        TokenKind.PAREN, TokenKind.IDENT, TokenKind.PAREN,
        TokenKind.BRACKET, TokenKind.IDENT, TokenKind.BRACKET,
        TokenKind.BRACE, TokenKind.IDENT, TokenKind.BRACE,
        TokenKind.SYMBOL, TokenKind.SYMBOL,
        TokenKind.EOF,
    ]


def test_comments_are_tokenized():
    assert kinds_and_literals("// hi\nx /* block\ncomment */ y") == [
        (TokenKind.COMMENT, ' hi'),
        (TokenKind.IDENT, 'x'),
        (TokenKind.COMMENT, ' block\ncomment '),
        (TokenKind.IDENT, 'y'),
        (TokenKind.EOF, None),
    ]


def test_division_is_not_a_comment():
    assert kinds_and_literals("6 / 3") == [
        (TokenKind.NUMBER, 6.0),
        (TokenKind.OPERATOR, '/'),
        (TokenKind.NUMBER, 3.0),
        (TokenKind.EOF, None),
    ]


def test_second_decimal_point_ends_number():
    numbers = [v for k, v in kinds_and_literals("1.2.3") if k == TokenKind.NUMBER]
    assert numbers == [1.2, 3.0]


def test_integers_are_floats():
    token = tokenize("42")[0]
    assert isinstance(token.literal, float)
    assert token.literal == 42.0


def test_strings_without_escapes():
    tokens = tokenize("'a\\nb' \"it's\"")
    assert tokens[0].kind == TokenKind.STRING
    assert tokens[0].literal == 'a\\nb'
    assert tokens[1].literal == "it's"


def test_unterminated_string_runs_to_end():
    tokens = tokenize('"open')
    assert tokens[0].literal == 'open'
    assert tokens[1].kind == TokenKind.EOF


def test_keywords_and_identifiers():
    assert kinds_and_literals("function returns true _tmp1") == [
        (TokenKind.KEYWORD, 'function'),
        (TokenKind.IDENT, 'returns'),
        (TokenKind.KEYWORD, 'true'),
        (TokenKind.IDENT, '_tmp1'),
        (TokenKind.EOF, None),
    ]


def test_unknown_characters_are_skipped():
    assert kinds_and_literals("x @ y # $") == [
        (TokenKind.IDENT, 'x'),
        (TokenKind.IDENT, 'y'),
        (TokenKind.EOF, None),
    ]


def test_token_positions():
    tokens = tokenize("a\n  bc", 'pos.ql')
    a, bc, eof = tokens
    assert (a.span.left.line, a.span.left.column) == (0, 0)
    assert (bc.span.left.index, bc.span.left.line, bc.span.left.column) == (4, 1, 2)
    assert (bc.span.right.index, bc.span.right.column) == (6, 4)
    assert bc.span.left.filename == 'pos.ql'
    assert (eof.span.left.index, eof.span.left.line, eof.span.left.column) == (6, 1, 4)
    assert eof.span.right.index == 7


def test_token_positions_are_copies():
    lexer = Lexer("ab cd")
    tokens = lexer.tokenize()
    assert tokens[0].span.left is not tokens[1].span.left
    assert tokens[0].span.right is not lexer.pos
    assert tokens[0].span.left.index == 0


def test_position_advance():
    pos = Position('f')
    pos.advance('a').advance('\n')
    assert (pos.index, pos.line, pos.column) == (2, 1, 0)
    pos.advance('b')
    assert (pos.index, pos.line, pos.column) == (3, 1, 1)
    assert str(pos) == 'f:2:2'


def test_span_defaults_to_single_width():
    left = Position('f', 3, 0, 3)
    span = Span.of(left)
    assert (span.right.index, span.right.column) == (4, 4)
    assert span.left is not left

    right = Position('f', 3, 0, 3)
    span = Span.of(None, right)
    assert (span.left.index, span.left.column) == (2, 2)
