"""Runtime values of the calc language: integers and single-parameter closures."""

from dataclasses import dataclass, field

from calclang.lang.environment import Environment
from calclang.pure.lexical import Exp


class Value:
    """Superclass of every calc value."""
    kind = "value"


@dataclass(frozen=True)
class IntegerValue(Value):
    n: int
    kind = "integer"

    def __str__(self):
        return str(self.n)


@dataclass(frozen=True)
class FunctionValue(Value):
    """A function literal together with the environment it was defined in. The environment is shared, not copied, so
    the function sees assignments made after its definition.
    """
    param: str
    body: Exp
    env: Environment = field(compare=False, repr=False)
    kind = "function"

    def __str__(self):
        return f"func ({self.param}) {{ {self.body.expr} }}"
