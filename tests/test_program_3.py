from pathlib import Path

from quill.run import run

EXAMPLES = Path(__file__).resolve().parents[1] / 'examples'


def test_program_3_closures(capsys):
    source = (EXAMPLES / 'program_3.ql').read_text(encoding='utf-8')
    result = run('program_3.ql', source)
    assert result.is_ok
    out = capsys.readouterr().out.strip()
    # the counter keeps its own scope; f sees the reassigned x
    assert out.splitlines() == ['3', '20']
