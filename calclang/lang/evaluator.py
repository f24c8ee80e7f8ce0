"""Tree-walking evaluator for the calc language. Turns a syntax tree from calclang.pure into a Value, reading and
writing variables through an Environment.

Nothing is rolled back when evaluation fails: an assignment that ran before the error keeps its effect.
"""

import logging
import operator

from calclang.lang.error import DivisionByZeroException, TypeMismatchException
from calclang.lang.value import FunctionValue, IntegerValue
from calclang.pure.lexical import IdentifierExp


logger = logging.getLogger("calclang.evaluator")


def divide(lhs, rhs):
    """Integer division truncating toward zero."""
    quotient = abs(lhs) // abs(rhs)
    return quotient if (lhs < 0) == (rhs < 0) else -quotient


class Evaluator:
    """Dispatches on node class name: IntegerExp is handled by eval_IntegerExp, etc."""
    ARITHMETIC = {"+": operator.add, "-": operator.sub, "*": operator.mul, "/": divide}
    RELATIONS = {
        "<": operator.lt, ">": operator.gt,
        "<=": operator.le, ">=": operator.ge,
        "==": operator.eq, "=": operator.eq, "!=": operator.ne,
    }

    def evaluate(self, node, env):
        """Value of node in env."""
        handler = getattr(self, f"eval_{type(node).__name__}", None)
        if handler is None:
            raise TypeMismatchException("cannot evaluate '{}'", repr(node))

        value = handler(node, env)
        logger.debug("%s => %s", node.expr, value)
        return value

    def eval_IntegerExp(self, node, env):
        return IntegerValue(node.value)

    def eval_IdentifierExp(self, node, env):
        return env.lookup(node.name)

    def eval_CompoundExp(self, node, env):
        if node.op == "=":
            if not isinstance(node.lhs, IdentifierExp):
                raise TypeMismatchException("cannot assign to '{}'", node.lhs.expr)
            return env.define(node.lhs.name, self.evaluate(node.rhs, env))

        if node.op not in Evaluator.ARITHMETIC:
            raise TypeMismatchException("unknown operator '{}'", node.op)

        lhs = self.integer(node.lhs, env, node.op)
        rhs = self.integer(node.rhs, env, node.op)

        if node.op == "/" and rhs == 0:
            raise DivisionByZeroException(node.expr)

        return IntegerValue(Evaluator.ARITHMETIC[node.op](lhs, rhs))

    def eval_CallExp(self, node, env):
        func = self.evaluate(node.callee, env)
        if not isinstance(func, FunctionValue):
            raise TypeMismatchException("'{}' is not a function", node.callee.expr)

        arg = self.evaluate(node.arg, env)
        return self.evaluate(func.body, func.env.extend(func.param, arg))

    def eval_FuncExp(self, node, env):
        return FunctionValue(node.param, node.body, env)

    def eval_IfExp(self, node, env):
        lhs = self.integer(node.lhs, env, node.rel_op)
        rhs = self.integer(node.rhs, env, node.rel_op)

        relation = Evaluator.RELATIONS.get(node.rel_op)
        if relation is None:
            raise TypeMismatchException("unknown relational operator '{}'", node.rel_op)

        if relation(lhs, rhs):
            return self.evaluate(node.then_branch, env)
        return self.evaluate(node.else_branch, env)

    def integer(self, node, env, op):
        """Evaluates node, which must produce an IntegerValue, and returns its int."""
        value = self.evaluate(node, env)
        if not isinstance(value, IntegerValue):
            raise TypeMismatchException("'{}' expects integers, got {} '{}'", (op, value.kind, node.expr))
        return value.n


def evaluate(node, env):
    """Value of node in env, using a default Evaluator."""
    return Evaluator().evaluate(node, env)
