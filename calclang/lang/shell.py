"""Handles interactive/command-line mode for the calc interpreter. Uses cmd as backend."""

import cmd

from calclang.lang.session import Session


class Shell(cmd.Cmd):
    """Calc interpreter shell. Every line is parsed, evaluated and printed; errors are printed and the loop goes on."""
    intro = "Calc interpreter :: Python backend\nType 'help' for more information, ':quit' to leave."
    prompt = "=> "

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.sess = sess

    def default(self, line):
        """Executes arbitrary calc line."""
        if Session.is_quit(line):
            return True

        if not Session.preprocess_line(line):
            return False

        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.sess.add(line)
            self.sess.run()

            if self.sess.results:
                print(self.sess.pop(), file=self.stdout)

        return False

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        if arg:
            return self.default(f"help {arg}")

        print("Welcome to the calc interpreter!\n\n"
              "Type an expression to evaluate it: integers, + - * / with the usual precedence (note that operators\n"
              "of the same precedence group to the right: 20 - 8 - 2 is 20 - (8 - 2)), and parentheses.\n\n"
              "Bind variables with 'x = 5' or ':define x = 5', write functions like 'f = func (n) { n * 2 }' and\n"
              "call them with 'f(21)'. Conditionals read 'if x < 2 then 1 else 0'.\n\n"
              "Type ':quit' to leave.", file=self.stdout)
        return False

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        if arg:
            return self.default(f"EOF {arg}")
        print(file=self.stdout)
        return True

    def do_exit(self, arg):
        """Exits interpreter."""
        if arg:
            return self.default(f"exit {arg}")
        return True
