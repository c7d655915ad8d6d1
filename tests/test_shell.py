import io

import pytest

from quill.__main__ import main
from quill.run import Session
from quill.shell import Shell


def make_shell():
    out = io.StringIO()
    return Shell(Session(), stdout=out), out


def test_shell_prints_values_and_keeps_state():
    shell, out = make_shell()
    assert not shell.onecmd('let x = 2')
    assert not shell.onecmd('x * 21')
    assert out.getvalue().splitlines() == ['-> 2', '-> 42']


def test_shell_reports_errors_and_continues():
    shell, out = make_shell()
    shell.onecmd('let x = 1')
    assert not shell.onecmd('let x = 2')
    assert "<stdin>:1:1: Cannot redeclare variable 'x'" in out.getvalue()
    assert not shell.onecmd('x')
    assert out.getvalue().splitlines()[-1] == '-> 1'


@pytest.mark.parametrize('command', ['.exit', '.quit', '.q', 'EOF'])
def test_shell_exit_commands(command):
    shell, _ = make_shell()
    assert shell.onecmd(command)


def test_shell_runs_lines_named_like_commands():
    shell, out = make_shell()
    assert not shell.onecmd('let help = 5')
    assert not shell.onecmd('help + 1')
    assert not shell.onecmd('let EOF = 2')
    assert not shell.onecmd('EOF * help')
    assert out.getvalue().splitlines() == ['-> 5', '-> 6', '-> 2', '-> 10']


def test_shell_toggles_flags():
    shell, out = make_shell()
    shell.onecmd('.lexer')
    assert shell.session.flags.lexer
    shell.onecmd('.lexer')
    assert not shell.session.flags.lexer
    assert out.getvalue().splitlines() == ['lexer dump on', 'lexer dump off']


def test_cli_runs_file(tmp_path, capsys):
    program = tmp_path / 'hello.ql'
    program.write_text('writeln("hi", 1 + 1);', encoding='utf-8')
    main([str(program)])
    assert capsys.readouterr().out == 'hi 2\n'


def test_cli_reports_runtime_error(tmp_path, capsys):
    program = tmp_path / 'bad.ql'
    program.write_text('writeln("start");\nlet y = 1 / 0;', encoding='utf-8')
    with pytest.raises(SystemExit) as excinfo:
        main([str(program)])
    assert excinfo.value.code == 1
    captured = capsys.readouterr()
    assert captured.out == 'start\n'
    assert 'bad.ql:2:13: Cannot divide by 0' in captured.err


def test_cli_missing_file(tmp_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main([str(tmp_path / 'nope.ql')])
    assert excinfo.value.code == 1
    assert 'not found' in capsys.readouterr().err


def test_cli_interpreter_flag(tmp_path, capsys):
    program = tmp_path / 'value.ql'
    program.write_text('[1, "two"]', encoding='utf-8')
    main(['--interpreter', str(program)])
    assert capsys.readouterr().out == '[1, "two"]\n'
