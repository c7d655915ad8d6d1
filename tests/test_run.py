import json

import pytest

from quill.errors import QuillSyntaxError
from quill.result import Ok, Err
from quill.run import run, RunFlags, Session
from quill.values import NumberVal


def test_lexer_flag_dumps_tokens(capsys):
    run('<test>', 'let x = 1', RunFlags(lexer=True))
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "[KEYWORD: 'let']"
    assert out[-1] == "[EOF: None]"


def test_parser_flag_dumps_ast_json(capsys):
    run('<test>', '1 + 2', RunFlags(parser=True))
    dumped = json.loads(capsys.readouterr().out)
    assert dumped['type'] == 'Program'
    expr = dumped['body'][0]
    assert expr['type'] == 'BinaryExpr'
    assert expr['operator'] == '+'
    assert expr['span']['left'] == {'index': 0, 'line': 0, 'column': 0}


def test_interpreter_flag_prints_final_value(capsys):
    result = run('<test>', '"a" + 1', RunFlags(interpreter=True))
    assert result.is_ok
    assert capsys.readouterr().out == '"a1"\n'


def test_no_dumps_by_default(capsys):
    run('<test>', '1 + 2')
    assert capsys.readouterr().out == ''


def test_syntax_error_skips_evaluation(capsys):
    result = run('<test>', 'writeln("x"); let = 1', RunFlags(interpreter=True))
    assert isinstance(result.error, QuillSyntaxError)
    assert capsys.readouterr().out == ''


def test_diagnostic_positions_are_one_based():
    result = run('prog.ql', 'let a = 1;\n  b = 2;')
    assert result.error.as_string() == "prog.ql:2:3: Cannot assign an undeclared variable 'b'"


def test_session_keeps_bindings_between_runs():
    session = Session()
    assert session.run('<stdin>', 'let x = 41').is_ok
    assert session.run('<stdin>', 'x + 1').value == NumberVal(42)
    # a failed run leaves earlier bindings alone
    assert session.run('<stdin>', 'let x = 0').is_err
    assert session.run('<stdin>', 'x').value == NumberVal(41)


def test_result_short_circuits():
    calls = []

    def step(value):
        calls.append(value)
        return Ok(value + 1)

    assert Ok(1).and_then(step).map(lambda v: v * 10) == Ok(20)
    poisoned = Err('boom')
    assert poisoned.and_then(step).map(lambda v: v * 10) is poisoned
    assert calls == [1]
    assert poisoned.unwrap_or(0) == 0


def test_err_unwrap_raises_the_error():
    result = run('<test>', 'let = 1')
    with pytest.raises(QuillSyntaxError) as excinfo:
        result.unwrap()
    assert excinfo.value is result.error
