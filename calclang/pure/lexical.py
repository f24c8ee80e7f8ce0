"""Abstract syntax tree for the calc language.

The `pure` directory contains calc syntax only (scanning, trees, parsing): it knows nothing about values or
environments, which live in `lang`.

Formally, the language can be defined as

```
<exp> ::= <integer>                                          ; "IntegerExp"
        | <identifier>                                       ; "IdentifierExp"
        | <exp> <op> <exp>                                   ; "CompoundExp", op is one of + - * / =
                                                             ; - every level associates to the right: a-b-c = a-(b-c)
        | <exp> "(" <exp> ")"                                ; "CallExp", exactly one argument
        | "func" "(" <identifier> ")" "{" <exp> "}"          ; "FuncExp", exactly one parameter
        | "if" <exp> <relop> <exp> "then" <exp> "else" <exp> ; "IfExp"
```

Every node owns its children exclusively and trees are rebuilt for every line, so nothing here is ever shared or
mutated after construction.
"""

from abc import abstractmethod, ABC


OPERATORS = {"=": 1, "+": 2, "-": 2, "*": 3, "/": 3}
ATOMIC = 4  # level of anything that never needs parentheses around it


def precedence(token):
    """Rank of an operator token: '=' is 1, '+'/'-' are 2, '*'/'/' are 3, anything else (including multi-character
    tokens) is 0.
    """
    if len(token) != 1:
        return 0
    return OPERATORS.get(token, 0)


class Exp(ABC):
    """Superclass of every calc syntax tree node."""

    def __init__(self, *nodes):
        self.nodes = list(nodes)
        self.expr = ""
        self._cls = type(self).__name__
        self.update_expr()

    @abstractmethod
    def update_expr(self):
        """Sets self.expr, a rendering of this node that parses back to an equal tree."""

    @property
    def level(self):
        """Binding strength of this node when it appears as an operand."""
        return ATOMIC

    def wrap(self, min_level):
        """self.expr, parenthesized if this node binds weaker than min_level."""
        if self.level < min_level:
            return f"({self.expr})"
        return self.expr

    def walk(self):
        """Yields self and then every descendant, depth first."""
        yield self
        for node in self.nodes:
            yield from node.walk()

    def display(self, indents=0):
        """Recursively displays the tree with readable format.

        Format:
        <Exp>(expr='<expr>', nodes=[
            <Exp>(expr='<expr>', nodes=[
                ...
                <Exp>(expr='<expr>')  # <-- if nodes is empty
            ])
        ])
        """
        result = f"{'    ' * indents}{self._cls}(expr='{self.expr}'"
        if self.nodes:
            result += ", nodes=["
            for node in self.nodes:
                result += "\n" + node.display(indents + 1) + ","
            result = result[:-1] + f"\n{'    ' * indents}]"
        return result + ")"

    def __repr__(self):
        return f"{self._cls}('{self.expr}')"

    def __str__(self):
        return self.expr

    def __eq__(self, other):
        return isinstance(other, type(self)) and self.expr == other.expr

    def __hash__(self):
        return hash((self._cls, self.expr))


class IntegerExp(Exp):
    """Integer literal."""

    def __init__(self, value):
        self.value = value
        super().__init__()

    def update_expr(self):
        self.expr = str(self.value)


class IdentifierExp(Exp):
    """Variable reference. Also used as the placeholder result of unknown commands, e.g. IdentifierExp(':load')."""

    def __init__(self, name):
        self.name = name
        super().__init__()

    def update_expr(self):
        self.expr = self.name


class CompoundExp(Exp):
    """Binary operation. '=' is assignment and always has an IdentifierExp on its left."""

    def __init__(self, op, lhs, rhs):
        self.op = op
        super().__init__(lhs, rhs)

    @property
    def lhs(self):
        return self.nodes[0]

    @property
    def rhs(self):
        return self.nodes[1]

    @property
    def level(self):
        return precedence(self.op)

    def update_expr(self):
        # left operands are parsed one level up, right operands at the same level
        self.expr = f"{self.lhs.wrap(self.level + 1)} {self.op} {self.rhs.wrap(self.level)}"


class CallExp(Exp):
    """Application of a function value to a single argument."""

    def __init__(self, callee, arg):
        super().__init__(callee, arg)

    @property
    def callee(self):
        return self.nodes[0]

    @property
    def arg(self):
        return self.nodes[1]

    def update_expr(self):
        self.expr = f"{self.callee.wrap(ATOMIC)}({self.arg.expr})"


class FuncExp(Exp):
    """Single-parameter function literal."""

    def __init__(self, param, body):
        self.param = param
        super().__init__(body)

    @property
    def body(self):
        return self.nodes[0]

    def update_expr(self):
        self.expr = f"func ({self.param}) {{ {self.body.expr} }}"


class IfExp(Exp):
    """Conditional. rel_op is kept verbatim: whether it is a known relation is only checked during evaluation."""

    def __init__(self, lhs, rel_op, rhs, then_branch, else_branch):
        self.rel_op = rel_op
        super().__init__(lhs, rhs, then_branch, else_branch)

    @property
    def lhs(self):
        return self.nodes[0]

    @property
    def rhs(self):
        return self.nodes[1]

    @property
    def then_branch(self):
        return self.nodes[2]

    @property
    def else_branch(self):
        return self.nodes[3]

    @property
    def level(self):
        return 0  # the else branch is greedy, so a conditional operand always needs parentheses

    def update_expr(self):
        # relation operands are parsed at sum level
        lhs = self.lhs.wrap(OPERATORS["+"])
        rhs = self.rhs.wrap(OPERATORS["+"])
        self.expr = f"if {lhs} {self.rel_op} {rhs} then {self.then_branch.expr} else {self.else_branch.expr}"
