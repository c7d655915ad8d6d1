from pathlib import Path

from quill.run import run

EXAMPLES = Path(__file__).resolve().parents[1] / 'examples'


def test_program_2_recursive_fibonacci(capsys):
    source = (EXAMPLES / 'program_2.ql').read_text(encoding='utf-8')
    result = run('program_2.ql', source)
    assert result.is_ok
    out = capsys.readouterr().out.strip()
    assert out == '55'
