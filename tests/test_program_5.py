from pathlib import Path

from quill.run import run

EXAMPLES = Path(__file__).resolve().parents[1] / 'examples'


def test_program_5_objects_and_truthiness(capsys):
    source = (EXAMPLES / 'program_5.ql').read_text(encoding='utf-8')
    result = run('program_5.ql', source)
    assert result.is_ok
    out = capsys.readouterr().out.strip()
    assert out.splitlines() == [
        'quill 1.5',
        '["small", "dynamic"]',
        '3 [1, 2, 3]',
        'false true true',
        'zero is truthy',
    ]
