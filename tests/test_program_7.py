import builtins
from pathlib import Path

from quill.run import run

EXAMPLES = Path(__file__).resolve().parents[1] / 'examples'


def test_program_7_input_and_indexing(monkeypatch, capsys):
    """Test program 7: reads two lines, then hits end of input.

    The third readln() gets EOF and must come back as null. The rest of
    the program exercises str() and get() on strings, arrays and
    objects, including out-of-range and non-integer indices.
    """
    answers = iter(['Ada', '36'])
    prompts = []

    def fake_input(prompt=''):
        prompts.append(prompt)
        try:
            return next(answers)
        except StopIteration:
            raise EOFError

    monkeypatch.setattr(builtins, 'input', fake_input)
    source = (EXAMPLES / 'program_7.ql').read_text(encoding='utf-8')
    result = run('program_7.ql', source)
    assert result.is_ok
    out_lines = capsys.readouterr().out.strip().split('\n')
    assert out_lines == [
        'hello Ada',
        'age:36!',
        'true null',
        '1true[1, "a"]null',
        'q l',
        'undefined undefined undefined',
        '20 undefined',
        'v undefined',
    ]
    assert prompts == ['name? ', '', '']
