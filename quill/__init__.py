# Quill language package
# This package provides the lexer, parser and tree-walking interpreter for Quill.
from .environment import Environment
from .errors import QuillError
from .interpreter import Interpreter
from .lexer import tokenize
from .parser import parse, parse_program
from .run import RunFlags, Session, global_environment

__all__ = [
    'Environment',
    'QuillError',
    'Interpreter',
    'tokenize',
    'parse',
    'parse_program',
    'RunFlags',
    'Session',
    'global_environment',
]
