from typing import List, Optional

from .console import Console
from quill.environment import Environment
from quill.values import (
    RuntimeValue, FunctionVal, NumberVal, StringVal, ArrayVal, ObjectVal,
    UNDEFINED, NULL, to_string,
)


def populate_environment(env: Environment, console: Optional[Console] = None) -> Environment:
    """Declare the host builtins into ``env`` and return it."""
    console = console or Console()

    def std_write(args: List[RuntimeValue], env: Environment) -> RuntimeValue:
        console.write(*args)
        return UNDEFINED

    def std_writeln(args: List[RuntimeValue], env: Environment) -> RuntimeValue:
        console.writeln(*args)
        return UNDEFINED

    def std_readln(args: List[RuntimeValue], env: Environment) -> RuntimeValue:
        prompt = to_string(args[0]) if args else ''
        line = console.readln(prompt)
        return StringVal(line) if line is not None else NULL

    def std_len(args: List[RuntimeValue], env: Environment) -> RuntimeValue:
        if not args:
            return UNDEFINED
        value = args[0]
        if isinstance(value, StringVal):
            return NumberVal(float(len(value.value)))
        if isinstance(value, ArrayVal):
            return NumberVal(float(len(value.items)))
        if isinstance(value, ObjectVal):
            return NumberVal(float(len(value.properties)))
        return UNDEFINED

    def std_typeof(args: List[RuntimeValue], env: Environment) -> RuntimeValue:
        value = args[0] if args else UNDEFINED
        return StringVal(value.type_name)

    def std_str(args: List[RuntimeValue], env: Environment) -> RuntimeValue:
        return StringVal(''.join(to_string(a) for a in args))

    def std_push(args: List[RuntimeValue], env: Environment) -> RuntimeValue:
        if not args or not isinstance(args[0], ArrayVal):
            return UNDEFINED
        args[0].items.extend(args[1:])
        return NumberVal(float(len(args[0].items)))

    def std_get(args: List[RuntimeValue], env: Environment) -> RuntimeValue:
        if len(args) < 2:
            return UNDEFINED
        container, key = args[0], args[1]
        if isinstance(container, ArrayVal) and isinstance(key, NumberVal):
            index = key.value
            if index.is_integer() and 0 <= index < len(container.items):
                return container.items[int(index)]
            return UNDEFINED
        if isinstance(container, ObjectVal) and isinstance(key, StringVal):
            return container.properties.get(key.value, UNDEFINED)
        if isinstance(container, StringVal) and isinstance(key, NumberVal):
            index = key.value
            if index.is_integer() and 0 <= index < len(container.value):
                return StringVal(container.value[int(index)])
        return UNDEFINED

    builtins = {
        'write': (std_write, ['value']),
        'writeln': (std_writeln, ['value']),
        'readln': (std_readln, ['prompt']),
        'len': (std_len, ['value']),
        'typeof': (std_typeof, ['value']),
        'str': (std_str, ['value']),
        'push': (std_push, ['array', 'value']),
        'get': (std_get, ['container', 'key']),
    }
    for name, (fn, params) in builtins.items():
        env.declare(name, FunctionVal.from_native(name, fn, params))
    return env
