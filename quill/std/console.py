import builtins
import sys
from typing import Optional, TextIO

from quill.values import to_string, RuntimeValue


class Console:
    """Text streams used by the console builtins.

    ``output`` is looked up at call time when left unset so that test
    harnesses replacing ``sys.stdout`` still capture what is written.
    """
    def __init__(self, output: Optional[TextIO] = None):
        self._output = output

    @property
    def output(self) -> TextIO:
        return self._output if self._output is not None else sys.stdout

    def write(self, *values: RuntimeValue) -> None:
        self.output.write(' '.join(to_string(v) for v in values))
        self.output.flush()

    def writeln(self, *values: RuntimeValue) -> None:
        self.output.write(' '.join(to_string(v) for v in values) + '\n')
        self.output.flush()

    def readln(self, prompt: str = '') -> Optional[str]:
        try:
            return builtins.input(prompt)
        except EOFError:
            return None
