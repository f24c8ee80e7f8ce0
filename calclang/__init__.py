"""Calculator-language interpreter.

Basic program flow:
    1. Scanner: splits one line into tokens, with a single token of pushback (see calclang/pure/scanner.py)
    2. Parser: recursive descent with conventional precedence, producing a syntax tree (see calclang/pure/parser.py)
        - binary operators group to the right: 20 - 8 - 2 = 20 - (8 - 2)
    3. Evaluator: walks the tree against the session's global environment (see calclang/lang/evaluator.py)
    4. Shell: prints the value, or an 'Error: ...' line, and reads the next line (see calclang/lang/shell.py)
"""

import sys


__version__ = "0.1.0"

if hasattr(sys, "set_int_max_str_digits"):
    sys.set_int_max_str_digits(0)  # integers are unbounded, and so is their printed form
