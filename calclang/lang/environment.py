"""Variable table for the calc language. A session owns one global Environment for its whole lifetime; function calls
extend the environment captured by the called function with a frame holding the parameter.
"""

from calclang.lang.error import UnboundIdentifierException


class Environment:
    """Mapping of identifier: Value, chained to an optional parent frame."""

    def __init__(self, bindings=None, parent=None):
        self.bindings = dict(bindings) if bindings else {}
        self.parent = parent

    def lookup(self, name):
        """Value bound to name in this frame or the closest enclosing one."""
        env = self
        while env is not None:
            if name in env.bindings:
                return env.bindings[name]
            env = env.parent
        raise UnboundIdentifierException(name)

    def define(self, name, value):
        """Binds name in this frame, overwriting any previous binding."""
        self.bindings[name] = value
        return value

    def extend(self, name, value):
        """New frame on top of this one with a single binding."""
        return Environment({name: value}, parent=self)

    def names(self):
        """Every visible name, innermost frame first."""
        seen = []
        env = self
        while env is not None:
            seen.extend(name for name in env.bindings if name not in seen)
            env = env.parent
        return seen

    def __contains__(self, name):
        return name in self.names()

    def __len__(self):
        return len(self.names())

    def __repr__(self):
        depth = 0
        env = self.parent
        while env is not None:
            depth += 1
            env = env.parent
        return f"Environment({self.bindings}, depth={depth})"
