"""Error handling for the calc language. Only GenericExceptions should be encountered while running a line: if another
type of error makes it all the way to ErrorHandler, it is assumed to be an internal issue.
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error message so that it can be used to throw a calc error. exprs are the snippets substituted into
    msg; exprs[0] should be the offending expr, and start/end delimit the part of it that gets underlined.
    """

    def __init__(self, msg, exprs=None, start=0, end=-1, diagnosis=True, internal=False):
        if exprs is None:
            exprs = ""
        if isinstance(exprs, str):
            exprs = [exprs]

        self.template = msg
        self.exprs = [str(expr) for expr in exprs]
        self.msg = msg.format(*self.exprs)
        self.expr = self.exprs[0]  # exprs[0] should be the offending expr that caused the error
        self.end = end if end != -1 else len(self.expr)  # needed for error display

        self.start = start
        self.diagnosis = diagnosis
        self.internal = internal

        super().__init__(self.msg)

    def highlighted(self):
        """Message with expr snippets bolded."""
        return self.template.format(*(colored(expr, attrs=["bold"]) for expr in self.exprs))


class SyntaxException(GenericException):
    """Malformed token sequence."""


class UnboundIdentifierException(GenericException):
    """Lookup of a name that has no binding."""

    def __init__(self, name):
        super().__init__("Undefined identifier '{}'", name, diagnosis=False)
        self.name = name


class TypeMismatchException(GenericException):
    """Operation applied to a value of the wrong kind."""

    def __init__(self, msg, exprs=None):
        super().__init__(msg, exprs, diagnosis=False)


class DivisionByZeroException(GenericException):

    def __init__(self, expr):
        super().__init__("Division by zero in '{}'", expr, diagnosis=False)


class ScannerError(GenericException):
    """Scanner used outside of its contract. Never caused by user input."""

    def __init__(self, msg, exprs=None):
        super().__init__(msg, exprs, diagnosis=False, internal=True)


class ErrorHandler:
    """Context manager that reports calc errors raised inside it. In fatal mode the process exits after the first
    error; otherwise the error is printed and suppressed so the caller can carry on with the next line.
    """
    ERROR = "red"
    PREFIX = "Error: "

    def __init__(self, fatal=True, color=True, diagnose=False, stream=None):
        self.fatal = fatal
        self.color = color
        self.diagnose = diagnose
        self.stream = stream  # None means sys.stdout at the time of printing
        self.errors = 0

    def _colored(self, text, color=None, attrs=None):
        if not self.color:
            return text
        return colored(text, color, attrs=attrs)

    def _print(self, text):
        print(text, file=self.stream if self.stream is not None else sys.stdout)

    def diagnosis(self, error):
        """Returns offending part of error.expr highlighted, with a caret line underneath."""
        diagnosis = "  " + error.expr[:error.start]

        end = max(error.end, error.start + 1)
        diagnosis += self._colored(error.expr[error.start:end], ErrorHandler.ERROR, attrs=["bold"])
        diagnosis += error.expr[end:] + "\n"

        diagnosis += "  " + " " * error.start
        diagnosis += self._colored("^" + "~" * (end - error.start - 1), ErrorHandler.ERROR, attrs=["bold"])

        return diagnosis

    def throw(self, error):
        """Prints error, which must be a GenericException. Exits with status 1 if self.fatal."""
        self.errors += 1

        error_msg = self._colored(ErrorHandler.PREFIX, ErrorHandler.ERROR, attrs=["bold"])
        if error.internal:
            error_msg += self._colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])
        error_msg += error.highlighted() if self.color else error.msg
        self._print(error_msg)

        if self.diagnose and not error.internal and error.expr and error.diagnosis:
            self._print(self.diagnosis(error))

        if self.fatal:
            sys.exit(1)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None or exc_type is SystemExit:
            return False
        elif exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt", diagnosis=False))
        elif exc_type is RecursionError:
            self.throw(GenericException("maximum recursion depth exceeded", diagnosis=False))
        elif issubclass(exc_type, GenericException):
            self.throw(exc_val)
        else:
            self.throw(GenericException("unknown error: '{}'", f"{exc_type.__name__}: {exc_val}", internal=True))
            return False

        return True
