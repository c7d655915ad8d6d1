"""Runtime values for the Quill interpreter.

Every value the interpreter produces or consumes is an instance of one
of the ``RuntimeValue`` subclasses below. Each class carries a fixed
``type_name`` tag; equality and truthiness dispatch on that tag rather
than on the Python payload, so ``Number(1)`` and ``String("1")`` are
never equal.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Set, Tuple, TYPE_CHECKING

from .tokens import format_number

if TYPE_CHECKING:
    from .ast import Node
    from .environment import Environment


class RuntimeValue:
    type_name = 'value'


@dataclass
class UndefinedVal(RuntimeValue):
    type_name = 'undefined'

    def __repr__(self) -> str:
        return 'undefined'


@dataclass
class NullVal(RuntimeValue):
    type_name = 'null'

    def __repr__(self) -> str:
        return 'null'


@dataclass
class NumberVal(RuntimeValue):
    value: float
    type_name = 'number'


@dataclass
class StringVal(RuntimeValue):
    value: str
    type_name = 'string'


@dataclass
class BooleanVal(RuntimeValue):
    value: bool
    type_name = 'boolean'


@dataclass
class ArrayVal(RuntimeValue):
    items: List[RuntimeValue] = field(default_factory=list)
    type_name = 'array'


@dataclass
class ObjectVal(RuntimeValue):
    properties: Dict[str, RuntimeValue] = field(default_factory=dict)
    type_name = 'object'


NativeFn = Callable[[List[RuntimeValue], 'Environment'], RuntimeValue]


@dataclass(eq=False)
class FunctionVal(RuntimeValue):
    """A callable value.

    User functions keep their parameter names, their body statements and
    the environment they were declared in. Native functions supplied by a
    host set ``native`` instead and leave ``body`` empty.
    """
    name: Optional[str]
    params: List[str]
    body: List['Node']
    env: Optional['Environment']
    native: Optional[NativeFn] = None
    type_name = 'function'

    @classmethod
    def from_native(cls, name: str, fn: NativeFn, params: Optional[List[str]] = None) -> 'FunctionVal':
        return cls(name, list(params or []), [], None, fn)

    @property
    def is_native(self) -> bool:
        return self.native is not None

    def __repr__(self) -> str:
        if self.is_native:
            return f"<native function {self.name}>"
        return f"<function {self.name or 'anonymous'}>"


UNDEFINED = UndefinedVal()
NULL = NullVal()
TRUE = BooleanVal(True)
FALSE = BooleanVal(False)


def boolean(flag: bool) -> BooleanVal:
    return TRUE if flag else FALSE


def is_truthy(value: RuntimeValue) -> bool:
    """Only undefined, null and false are falsy. 0, "" and [] are truthy."""
    if isinstance(value, (UndefinedVal, NullVal)):
        return False
    if isinstance(value, BooleanVal):
        return value.value
    return True


def values_equal(a: RuntimeValue, b: RuntimeValue,
                 seen: Optional[Set[Tuple[int, int]]] = None) -> bool:
    if type(a) is not type(b):
        return False
    if isinstance(a, (UndefinedVal, NullVal)):
        return True
    if isinstance(a, (NumberVal, StringVal, BooleanVal)):
        return a.value == b.value
    if a is b:
        return True
    if not isinstance(a, (ArrayVal, ObjectVal)):
        return False
    # a pair already under comparison further up is assumed equal
    seen = set() if seen is None else seen
    pair = (id(a), id(b))
    if pair in seen:
        return True
    seen.add(pair)
    if isinstance(a, ArrayVal):
        if len(a.items) != len(b.items):
            return False
        return all(values_equal(x, y, seen) for x, y in zip(a.items, b.items))
    if a.properties.keys() != b.properties.keys():
        return False
    return all(values_equal(v, b.properties[k], seen) for k, v in a.properties.items())


def type_name(value: Any) -> str:
    if isinstance(value, RuntimeValue):
        return value.type_name
    return type(value).__name__


def to_string(value: RuntimeValue, nested: bool = False,
              seen: Optional[Set[int]] = None) -> str:
    """Render a value the way ``writeln`` prints it.

    Strings nested inside arrays or objects are quoted so that
    ``["1"]`` and ``[1]`` print differently. An array or object that
    contains itself prints as ``[...]`` or ``{...}`` at the point where
    it repeats.
    """
    if isinstance(value, NumberVal):
        return format_number(value.value)
    if isinstance(value, StringVal):
        return f'"{value.value}"' if nested else value.value
    if isinstance(value, BooleanVal):
        return 'true' if value.value else 'false'
    if not isinstance(value, (ArrayVal, ObjectVal)):
        return repr(value)

    seen = set() if seen is None else seen
    if id(value) in seen:
        return '[...]' if isinstance(value, ArrayVal) else '{...}'
    seen.add(id(value))
    try:
        if isinstance(value, ArrayVal):
            return '[' + ', '.join(to_string(item, True, seen) for item in value.items) + ']'
        entries = ', '.join(f"{k}: {to_string(v, True, seen)}" for k, v in value.properties.items())
        return '{' + entries + '}'
    finally:
        seen.discard(id(value))
