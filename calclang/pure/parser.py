"""Recursive-descent parser for the calc language, using conventional precedence rules. Thus, the expression

```
x = 2 * x + y
```

is interpreted as if it had been written `x = ((2 * x) + y)`. The grammar, from lowest to highest precedence:

```
A  ->  E ('=' A)?                     ; assignment, left side must be an identifier
E  ->  T (('+' | '-') E)?
T  ->  C (('*' | '/') T)?
C  ->  F ('(' A ')')?
F  ->  integer | identifier | '(' A ')' | FUNC | IF
FUNC -> 'func' '(' identifier ')' '{' A '}'
IF   -> 'if' E relop E 'then' A 'else' A
```

Each binary level reads its left operand one level up and then, if it finds one of its own operators, recurses into
itself for the right operand and returns. Binary operators therefore group to the right: `20 - 8 - 2` is read as
`20 - (8 - 2)`.

A line starting with the command marker ':' is read as a command instead:

```
:define <identifier> = A              ; same as <identifier> = A
:load                                 ; placeholder, reads nothing
:<word>                               ; IdentifierExp(':<word>')
```

Whatever follows a command is left unread.
"""

import logging

from calclang.lang.error import SyntaxException
from calclang.pure.lexical import CallExp, CompoundExp, FuncExp, IdentifierExp, IfExp, IntegerExp, precedence
from calclang.pure.scanner import Scanner


logger = logging.getLogger("calclang.parser")

__all__ = ["Parser", "parse_exp", "precedence"]


class Parser:
    """Reads one syntax tree per line from a Scanner."""
    COMMAND_MARKER = ":"
    SUM_OPS = ["+", "-"]
    PRODUCT_OPS = ["*", "/"]

    def __init__(self, scanner):
        self.scanner = scanner

    def parse(self):
        """Reads a whole line: a command if it starts with the command marker, an expression otherwise. Raises
        SyntaxException if tokens are left over after an expression; the rest of a command line is ignored.
        """
        command = self.check_command_token()
        if command:
            exp = self.read_command(command)
        else:
            exp = self.read_exp()

            token = self.scanner.next()
            if token != Scanner.EOF:
                self._error("Unexpected '{1}' after end of expression", token)

        logger.debug("parsed %r\n%s", self.scanner.line, exp.display())
        return exp

    def check_command_token(self):
        """Returns the command (marker plus name) the line starts with, or '' if it is not a command."""
        token = self.scanner.next()
        if not token.startswith(Parser.COMMAND_MARKER):
            self.scanner.pushback(token)
            return ""
        return token + self.scanner.next()

    def read_command(self, command):
        if command == ":define":
            name = self._read_identifier("':define' expects an identifier, got '{1}'")
            op = self.scanner.next()
            if op != "=":
                self._error("':define' expects '=', got '{1}'", op)
            return CompoundExp(op, IdentifierExp(name), self.read_exp())

        elif command == ":load":
            return IdentifierExp(":load")  # file loading is not supported

        return IdentifierExp(command)

    def read_exp(self):
        """A -> E ('=' A)?"""
        position = self._peek_position()
        exp = self.read_sum()

        token = self.scanner.next()
        if token == "=":
            if not isinstance(exp, IdentifierExp):
                self._error("Illegal target '{1}' of assignment", exp, position)
            exp = CompoundExp(token, exp, self.read_exp())
        else:
            self.scanner.pushback(token)

        return exp

    def read_sum(self):
        """E -> T (('+' | '-') E)?"""
        return self._read_binary(self.read_product, self.read_sum, Parser.SUM_OPS)

    def read_product(self):
        """T -> C (('*' | '/') T)?"""
        return self._read_binary(self.read_call, self.read_product, Parser.PRODUCT_OPS)

    def _read_binary(self, read_operand, read_rest, ops):
        exp = read_operand()

        token = self.scanner.next()
        if token in ops:
            exp = CompoundExp(token, exp, read_rest())
        else:
            self.scanner.pushback(token)

        return exp

    def read_call(self):
        """C -> F ('(' A ')')?"""
        exp = self.read_factor()

        token = self.scanner.next()
        if token == "(":
            exp = CallExp(exp, self.read_exp())
            self.scanner.next()  # ')'
        else:
            self.scanner.pushback(token)

        return exp

    def read_factor(self):
        """F -> integer | identifier | '(' A ')' | FUNC | IF"""
        token = self.scanner.next()

        if token == "(":
            exp = self.read_exp()
            self.scanner.next()  # ')'
        elif token[:1].isdigit():
            if not token.isdecimal():
                self._error("Illegal integer '{1}'", token)
            try:
                exp = IntegerExp(int(token))
            except ValueError:
                self._error("Integer '{1}' is too long", token)
        elif token[:1].isalpha():
            if token == "func":
                exp = self.read_func()
            elif token == "if":
                exp = self.read_if()
            else:
                exp = IdentifierExp(token)
        else:
            self._error("Illegal term in expression")

        return exp

    def read_func(self):
        """FUNC -> 'func' '(' identifier ')' '{' A '}', with 'func' already read."""
        self.scanner.next()  # '('
        param = self.scanner.next()
        self.scanner.next()  # ')'
        self.scanner.next()  # '{'

        body = self.read_exp()
        self.scanner.next()  # '}'

        return FuncExp(param, body)

    def read_if(self):
        """IF -> 'if' E relop E 'then' A 'else' A, with 'if' already read."""
        lhs = self.read_sum()
        rel_op = self.scanner.next()
        rhs = self.read_sum()

        self._expect_keyword("then")
        then_branch = self.read_exp()

        self._expect_keyword("else")
        else_branch = self.read_exp()

        return IfExp(lhs, rel_op, rhs, then_branch, else_branch)

    def _expect_keyword(self, keyword):
        if self.scanner.next() != keyword:
            self._error("Syntactical error in 'if' statement: expected '{1}'", keyword)

    def _read_identifier(self, msg):
        token = self.scanner.next()
        if not token[:1].isalpha():
            self._error(msg, token)
        return token

    def _peek_position(self):
        """Position of the next token, without consuming it."""
        token = self.scanner.next()
        position = self.scanner.position
        self.scanner.pushback(token)
        return position

    def _error(self, msg, snippet="", position=None):
        """Raises a SyntaxException pointing at the current token (or at position) of the scanned line. In msg, '{1}'
        stands for snippet.
        """
        if position is None:
            position = self.scanner.position
        end = position + max(len(str(snippet)), 1)
        raise SyntaxException(msg, [self.scanner.line, snippet], start=position, end=end)


def parse_exp(line):
    """Parses line into a syntax tree."""
    return Parser(Scanner(line)).parse()
