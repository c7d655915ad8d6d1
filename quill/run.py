"""Pipeline entry point shared by the command line and the REPL.

``run`` pushes one piece of source text through lexer, parser and
interpreter and returns ``Ok(value)`` or the first ``Err``. Hosts keep
their state (flags, root environment, interpreter) in a ``Session`` and
pass it in explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .ast_json import dump_ast
from .environment import Environment
from .interpreter import Interpreter
from .lexer import tokenize
from .parser import parse
from .result import Result
from .std import populate_environment
from .values import to_string


@dataclass
class RunFlags:
    lexer: bool = False        # dump the token stream
    parser: bool = False       # dump the AST as JSON
    interpreter: bool = False  # dump the final value


def global_environment() -> Environment:
    """A fresh root environment holding the standard builtins."""
    return populate_environment(Environment())


def run(filename: str, source: str, flags: Optional[RunFlags] = None,
        env: Optional[Environment] = None, interpreter: Optional[Interpreter] = None) -> Result:
    flags = flags or RunFlags()
    env = env if env is not None else global_environment()
    interpreter = interpreter or Interpreter()

    tokens = tokenize(source, filename)
    interpreter.debug(1, f"{filename}: {len(tokens)} tokens")
    if flags.lexer:
        for token in tokens:
            print(repr(token))

    ast = parse(tokens)
    if ast.is_err:
        interpreter.debug(1, f"{filename}: parse failed: {ast.error.as_string()}")
        return ast
    if flags.parser:
        print(dump_ast(ast.value))

    result = interpreter.run(ast.value, env)
    if result.is_err:
        interpreter.debug(1, f"{filename}: runtime error: {result.error.as_string()}")
    elif flags.interpreter:
        print(to_string(result.value, True))
    return result


@dataclass
class Session:
    """State a host keeps between runs."""
    flags: RunFlags = field(default_factory=RunFlags)
    env: Environment = field(default_factory=global_environment)
    interpreter: Interpreter = field(default_factory=Interpreter)

    def run(self, filename: str, source: str) -> Result:
        return run(filename, source, self.flags, self.env, self.interpreter)

    def close(self) -> None:
        self.interpreter.close()
