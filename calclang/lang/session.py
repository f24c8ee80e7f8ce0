"""Session control for the calc language. A session owns the global environment, so variables and functions defined on
one line stay visible on every later line until the process ends.
"""

import logging

from calclang.lang.environment import Environment
from calclang.lang.evaluator import Evaluator
from calclang.pure.parser import Parser
from calclang.pure.scanner import Scanner


logger = logging.getLogger("calclang.session")


class Session:
    """Governs a calc session: parses lines, evaluates them against the global environment and collects results."""
    QUIT = ":quit"
    COMMENT = ";;"

    def __init__(self, error_handler, environment=None):
        self.error_handler = error_handler
        self.environment = environment if environment is not None else Environment()

        self.scanner = Scanner(ignore_spaces=True)
        self.parser = Parser(self.scanner)
        self.evaluator = Evaluator()

        self.to_exec = []  # parsed trees waiting for run
        self.results = []  # values of executed trees, oldest first

    @staticmethod
    def preprocess_line(line):
        """Strips comments and surrounding whitespace. Returns '' if nothing is left to run."""
        if Session.COMMENT in line:
            line = line[:line.index(Session.COMMENT)]  # get rid of comments
        return line.strip()

    @staticmethod
    def is_quit(line):
        return Session.preprocess_line(line) == Session.QUIT

    def add(self, line):
        """Parses line and queues it for run. Raises ValueError if line is empty, SyntaxException if it does not
        parse.
        """
        line = Session.preprocess_line(line)
        if not line:
            raise ValueError("empty line")

        self.scanner.set_line(line)
        exp = self.parser.parse()
        self.to_exec.append(exp)
        return exp

    def run(self):
        """Evaluates queued trees in order. The queue is cleared even if evaluation fails."""
        try:
            while self.to_exec:
                exp = self.to_exec.pop(0)
                value = self.evaluator.evaluate(exp, self.environment)
                logger.info("%s => %s", exp.expr, value)
                self.results.append(value)
        finally:
            self.to_exec = []

    def pop(self):
        """Removes and returns the oldest result."""
        return self.results.pop(0)

    def execute(self, line):
        """Parses and evaluates line, returning its value."""
        self.add(line)
        self.run()
        return self.pop()
