"""Console rendering of Quill errors. Uses termcolor for highlighting."""

import sys
from typing import Optional, TextIO

from termcolor import colored

from .errors import QuillError

ERROR = "red"


def diagnose(error: QuillError, source: str) -> str:
    """Return the offending source line with the error span underlined."""
    left, right = error.span.left, error.span.right
    lines = source.split('\n')
    if left.line >= len(lines):
        return ''
    line = lines[left.line]
    start = min(left.column, len(line))
    end = right.column if right.line == left.line else len(line)
    end = max(min(end, len(line)), start + 1)

    diagnosis = "  " + line[:start]
    diagnosis += colored(line[start:end], ERROR, attrs=["bold"])
    diagnosis += line[end:] + "\n"
    diagnosis += "  " + " " * start
    diagnosis += colored("^" + "~" * (end - start - 1), ERROR, attrs=["bold"])
    return diagnosis


def report(error: QuillError, source: Optional[str] = None, file: Optional[TextIO] = None) -> None:
    """Print ``error`` as its name followed by ``error.as_string()``."""
    file = file or sys.stderr
    message = colored(f"{error.name}: ", ERROR, attrs=["bold"]) + error.as_string()
    print(message, file=file)
    if source:
        diagnosis = diagnose(error, source)
        if diagnosis:
            print(diagnosis, file=file)
