"""Token source for the calc language. Splits a single line into tokens and keeps exactly one token of pushback, which
is all the lookahead the parser needs.

Token shapes:

```
<token> ::= <alnum>+                   ; integer literal if it starts with a digit, identifier/keyword otherwise
          | "<=" | ">=" | "==" | "!="  ; relational operators
          | <any other char>           ; single-character operator/delimiter/command marker
```
"""

from calclang.lang.error import ScannerError


class Scanner:
    """Line scanner with a single-token pushback cursor."""
    EOF = ""
    RELATIONAL = ["<=", ">=", "==", "!="]

    def __init__(self, line="", ignore_spaces=True):
        self.ignore_spaces = ignore_spaces
        self.set_line(line)

    def set_line(self, line):
        """Resets the scanner to the start of line, dropping any saved token."""
        self.line = line
        self.position = 0
        self._cursor = 0
        self._saved = None  # (token, position) or None

    def next(self):
        """Returns the next token, or Scanner.EOF once the line is exhausted."""
        if self._saved is not None:
            token, self.position = self._saved
            self._saved = None
            return token

        if self.ignore_spaces:
            while self._cursor < len(self.line) and self.line[self._cursor].isspace():
                self._cursor += 1

        start = self.position = self._cursor
        if start >= len(self.line):
            return Scanner.EOF

        char = self.line[start]
        if char.isalnum():
            end = start + 1
            while end < len(self.line) and self.line[end].isalnum():
                end += 1
        elif char.isspace():
            end = start + 1
            while end < len(self.line) and self.line[end].isspace():
                end += 1
        elif self.line[start:start + 2] in Scanner.RELATIONAL:
            end = start + 2
        else:
            end = start + 1

        self._cursor = end
        return self.line[start:end]

    def pushback(self, token):
        """Saves token so that the next call to next returns it. Only one token can be saved at a time."""
        if self._saved is not None:
            raise ScannerError("cannot push back '{}': '{}' is already saved", (token, self._saved[0]))
        self._saved = (token, self.position)

    def has_more(self):
        """Whether or not any token is left."""
        token = self.next()
        self.pushback(token)
        return token != Scanner.EOF

    def __iter__(self):
        token = self.next()
        while token != Scanner.EOF:
            yield token
            token = self.next()

    def __repr__(self):
        return f"Scanner('{self.line}', position={self.position})"
