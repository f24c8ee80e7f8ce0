import sys
import unittest

from calclang.lang.error import SyntaxException
from calclang.pure.lexical import CallExp, CompoundExp, FuncExp, IdentifierExp, IfExp, IntegerExp
from calclang.pure.parser import Parser, parse_exp, precedence
from calclang.pure.scanner import Scanner


def num(value):
    return IntegerExp(value)


def var(name):
    return IdentifierExp(name)


class ParserTestCase(unittest.TestCase):

    def test_parse_exp(self):
        cases = {
            "42": num(42),
            "x": var("x"),
            "20 - 8 - 2": CompoundExp("-", num(20), CompoundExp("-", num(8), num(2))),
            "100 / 10 / 5": CompoundExp("/", num(100), CompoundExp("/", num(10), num(5))),
            "2 * 3 + 4": CompoundExp("+", CompoundExp("*", num(2), num(3)), num(4)),
            "2 + 3 * 4": CompoundExp("+", num(2), CompoundExp("*", num(3), num(4))),
            "(1 + 2) * 3": CompoundExp("*", CompoundExp("+", num(1), num(2)), num(3)),
            "x = 2 * x + y": CompoundExp("=", var("x"), CompoundExp("+", CompoundExp("*", num(2), var("x")), var("y"))),
            "a = b = 1": CompoundExp("=", var("a"), CompoundExp("=", var("b"), num(1))),
            "f(21)": CallExp(var("f"), num(21)),
            "f(1 + 2) * 3": CompoundExp("*", CallExp(var("f"), CompoundExp("+", num(1), num(2))), num(3)),
            "func (n) { n * 2 }": FuncExp("n", CompoundExp("*", var("n"), num(2))),
            "f = func (n) { n * 2 }": CompoundExp("=", var("f"), FuncExp("n", CompoundExp("*", var("n"), num(2)))),
            "func (n) { n }(3)": CallExp(FuncExp("n", var("n")), num(3)),
            "if 1 < 2 then 10 else (1/0)": IfExp(num(1), "<", num(2), num(10), CompoundExp("/", num(1), num(0))),
            "if x = 1 then 2 else 3": IfExp(var("x"), "=", num(1), num(2), num(3)),
            "if a + 1 >= b then x = 1 else x = 2":
                IfExp(CompoundExp("+", var("a"), num(1)), ">=", var("b"),
                      CompoundExp("=", var("x"), num(1)), CompoundExp("=", var("x"), num(2))),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, parse_exp(case), case)

    def test_commands(self):
        cases = {
            ":define x = 5": CompoundExp("=", var("x"), num(5)),
            ":define f = func (n) { n }": CompoundExp("=", var("f"), FuncExp("n", var("n"))),
            ":load": var(":load"),
            ":help": var(":help"),
            ": load": var(":load"),
            ":load prog.lc": var(":load"),
            ":foo bar": var(":foo"),
            ":define x = 5 junk": CompoundExp("=", var("x"), num(5)),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, parse_exp(case), case)

    def test_unvalidated_delimiters(self):
        # closing tokens are consumed, whatever they are
        self.assertEqual(CompoundExp("+", num(1), num(2)), parse_exp("(1 + 2]"))
        self.assertEqual(CallExp(var("f"), num(1)), parse_exp("f(1"))
        self.assertEqual(FuncExp("n", var("n")), parse_exp("func [n] < n >"))

    def test_reparse(self):
        lines = ["20 - 8 - 2", "(20 - 8) - 2", "x = (y = 1) + 2", "f(g(1)) * 2",
                 "(if x < 1 then 1 else 2) * 3", "func (n) { if n < 2 then 1 else n * f(n - 1) }"]
        for line in lines:
            exp = parse_exp(line)
            self.assertEqual(exp, parse_exp(exp.expr), line)

    def test_syntax_errors(self):
        should_raise = ["", "1 2", ")", "+ 1", "1 +", "f(1)(2)", "3 = 4", "(a + b) = 1", "if 1 < 2 10 else 3",
                        "if 1 < 2 then 10 3", ":define 5 = 1", ":define x + 1", "1 + * 2", "x = ",
                        "f = func (n) { }", "2x + 1"]
        for case in should_raise:
            self.assertRaises(SyntaxException, parse_exp, case)

    def test_error_messages(self):
        cases = {
            ")": ("Illegal term in expression", 0),
            "1 + )": ("Illegal term in expression", 4),
            "1 2": ("Unexpected '2' after end of expression", 2),
            "if 1 < 2 then 3 4": ("Syntactical error in 'if' statement: expected 'else'", 16),
            "if 1 < 2 else 4": ("Syntactical error in 'if' statement: expected 'then'", 9),
            "x + 1 = 2": ("Illegal target 'x + 1' of assignment", 0),
            "1 + 2x": ("Illegal integer '2x'", 4),
            ":define x := 1": ("':define' expects '=', got ':'", 10),
        }
        for case, (msg, start) in cases.items():
            with self.assertRaises(SyntaxException) as context:
                parse_exp(case)
            self.assertEqual(msg, context.exception.msg, case)
            self.assertEqual(start, context.exception.start, case)
            self.assertEqual(case, context.exception.expr, case)

    def test_long_integers(self):
        digits = "9" * 5000
        self.assertEqual(num(int(digits)), parse_exp(digits))

    @unittest.skipUnless(hasattr(sys, "set_int_max_str_digits"), "no integer string conversion limit")
    def test_unconvertible_integer(self):
        self.addCleanup(sys.set_int_max_str_digits, 0)
        sys.set_int_max_str_digits(4300)

        with self.assertRaises(SyntaxException) as context:
            parse_exp("1 + " + "9" * 5000)
        self.assertEqual("Integer '" + "9" * 5000 + "' is too long", context.exception.msg)
        self.assertEqual(4, context.exception.start)

    def test_parser_reuse(self):
        scanner = Scanner()
        parser = Parser(scanner)

        scanner.set_line("1 +")
        self.assertRaises(SyntaxException, parser.parse)

        scanner.set_line("1 + 1")
        self.assertEqual(CompoundExp("+", num(1), num(1)), parser.parse())

    def test_precedence(self):
        self.assertEqual([1, 2, 2, 3, 3, 0], [precedence(op) for op in ["=", "+", "-", "*", "/", "<="]])


if __name__ == '__main__':
    unittest.main()
