from typing import Dict, Optional

from quill.values import RuntimeValue


class Environment:
    """A scope mapping identifiers to runtime values.

    Each environment points at the scope that encloses it. Declaring only
    looks at this scope, so a child may shadow a parent binding, while
    assignment and lookup walk outwards through the parents.
    """
    def __init__(self, parent: Optional['Environment'] = None):
        self.parent = parent
        self.values: Dict[str, RuntimeValue] = {}

    def declare(self, name: str, value: RuntimeValue) -> bool:
        if name in self.values:
            return False
        self.values[name] = value
        return True

    def assign(self, name: str, value: RuntimeValue) -> bool:
        scope = self.resolve(name)
        if scope is None:
            return False
        scope.values[name] = value
        return True

    def lookup(self, name: str) -> Optional[RuntimeValue]:
        scope = self.resolve(name)
        if scope is None:
            return None
        return scope.values[name]

    def resolve(self, name: str) -> Optional['Environment']:
        """Return the innermost scope that binds ``name``."""
        env: Optional[Environment] = self
        while env is not None:
            if name in env.values:
                return env
            env = env.parent
        return None

    def has(self, name: str) -> bool:
        return name in self.values

    def child(self) -> 'Environment':
        return Environment(parent=self)

    def __repr__(self) -> str:
        return f"<Environment {sorted(self.values)}>"
