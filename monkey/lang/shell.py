"""Handles interactive/command-line mode for the monkey interpreter. Uses cmd as backend."""

import cmd
import getpass


class Shell(cmd.Cmd):
    """monkey interpreter shell."""
    intro = "Hello {}! This is the monkey programming language.\nType in commands ('help' for more information)."
    prompt = ">> "
    secondary_prompt = ".. "  # used for line continuations
    _tmp_prompt = ">> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self.intro = Shell.intro.format(getpass.getuser())

        self._tmp_line = ""
        self.line_num = 0

    def default(self, line):
        """Executes arbitrary monkey source."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            if self._tmp_line:
                line = self._tmp_line + "\n" + line
            line, add_to_prev = self.sess.preprocess_line(line)

            if add_to_prev:
                self._tmp_line = line
                self.prompt = self.secondary_prompt
            else:
                self._tmp_line = ""
                self.prompt = self._tmp_prompt

                try:
                    self.sess.add(line, self.line_num)
                except ValueError:
                    return  # if line is empty, terminate

                self.sess.run()

                if self.sess.results:
                    print(self.sess.pop())

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the monkey interpreter!\n\n"
              "monkey is a small language with integers, booleans, first-class functions and closures. Try\n"
              "binding a value with 'let x = 5;', then type 'x * 2' to see the result. Functions are values:\n"
              "'let add = fn(a, b) { a + b }; add(1, 2)'. A line with an open '(' or '{' continues on the\n"
              "next one. Type 'exit' or press Ctrl-D to quit.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        if self._tmp_line:
            return self.default("")
        return False

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
