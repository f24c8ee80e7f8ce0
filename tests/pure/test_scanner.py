import unittest

from calclang.lang.error import ScannerError
from calclang.pure.scanner import Scanner


class ScannerTestCase(unittest.TestCase):

    def test_tokens(self):
        cases = {
            "f(21)": ["f", "(", "21", ")"],
            "x=5": ["x", "=", "5"],
            "  12 +x1 ": ["12", "+", "x1"],
            ":define x = 3": [":", "define", "x", "=", "3"],
            "if a <= b then 1 else 0": ["if", "a", "<=", "b", "then", "1", "else", "0"],
            "a == b != c >= d": ["a", "==", "b", "!=", "c", ">=", "d"],
            "func (n) { n * 2 }": ["func", "(", "n", ")", "{", "n", "*", "2", "}"],
            "(1/0)": ["(", "1", "/", "0", ")"],
            "": [],
        }
        for case, expected in cases.items():
            self.assertEqual(expected, list(Scanner(case)), case)

    def test_spaces(self):
        self.assertEqual(["1", " ", "+", "  ", "2"], list(Scanner("1 +  2", ignore_spaces=False)))

    def test_eof(self):
        scanner = Scanner("1")
        self.assertEqual("1", scanner.next())
        for __ in range(3):
            self.assertEqual(Scanner.EOF, scanner.next())

    def test_pushback(self):
        scanner = Scanner("1 + 2")
        self.assertEqual("1", scanner.next())
        scanner.pushback("1")
        self.assertEqual("1", scanner.next())
        self.assertEqual("+", scanner.next())

        scanner.pushback("+")
        self.assertRaises(ScannerError, scanner.pushback, "+")

    def test_position(self):
        scanner = Scanner("  12 + x")
        for token, position in [("12", 2), ("+", 5), ("x", 7)]:
            self.assertEqual(token, scanner.next())
            self.assertEqual(position, scanner.position)

        scanner.pushback("x")
        scanner.position = 0
        scanner.next()
        self.assertEqual(7, scanner.position)

    def test_set_line(self):
        scanner = Scanner("1 2")
        scanner.next()
        scanner.pushback("1")

        scanner.set_line("3")
        self.assertEqual(["3"], list(scanner))

    def test_has_more(self):
        scanner = Scanner("1")
        self.assertTrue(scanner.has_more())
        self.assertEqual("1", scanner.next())
        self.assertFalse(scanner.has_more())


if __name__ == '__main__':
    unittest.main()
