"""Short-circuiting result values shared by the parser and interpreter.

A computation returns either ``Ok(value)`` or ``Err(error)``. Once an
``Err`` appears, ``map`` and ``and_then`` hand it back unchanged without
running the next step, so the first error poisons the whole chain.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Union


@dataclass(frozen=True)
class Ok:
    value: Any

    @property
    def is_ok(self) -> bool:
        return True

    @property
    def is_err(self) -> bool:
        return False

    def map(self, fn: Callable[[Any], Any]) -> 'Result':
        return Ok(fn(self.value))

    def and_then(self, fn: Callable[[Any], 'Result']) -> 'Result':
        return fn(self.value)

    def unwrap(self) -> Any:
        return self.value

    def unwrap_or(self, default: Any) -> Any:
        return self.value


@dataclass(frozen=True)
class Err:
    error: Any

    @property
    def is_ok(self) -> bool:
        return False

    @property
    def is_err(self) -> bool:
        return True

    def map(self, fn: Callable[[Any], Any]) -> 'Result':
        return self

    def and_then(self, fn: Callable[[Any], 'Result']) -> 'Result':
        return self

    def unwrap(self) -> Any:
        """Raise the carried error. Meant for hosts and tests."""
        if isinstance(self.error, BaseException):
            raise self.error
        raise RuntimeError(str(self.error))

    def unwrap_or(self, default: Any) -> Any:
        return default


Result = Union[Ok, Err]
