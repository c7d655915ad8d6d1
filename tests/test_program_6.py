from pathlib import Path

from quill.errors import RedeclarationError
from quill.run import run

EXAMPLES = Path(__file__).resolve().parents[1] / 'examples'


def test_program_6_redeclaration_stops_the_program(capsys):
    source = (EXAMPLES / 'program_6.ql').read_text(encoding='utf-8')
    result = run('program_6.ql', source)
    assert result.is_err
    assert isinstance(result.error, RedeclarationError)
    assert result.error.as_string() == "program_6.ql:3:1: Cannot redeclare variable 'a'"
    out = capsys.readouterr().out.strip()
    assert out == 'before'
