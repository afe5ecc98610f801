"""Session control for the monkey language. A Session owns one root Environment, so every program added to it (a whole
file, or one shell line after another) sees the bindings made by the programs before it.
"""

from monkey.grammar.parser import parse
from monkey.grammar.trace import Tracer
from monkey.lang.error import GenericException
from monkey.runtime.environment import Environment
from monkey.runtime.evaluator import evaluate
from monkey.runtime.objects import is_error


class Session:
    """Governs a monkey session, with control over its root scope."""
    SH_FILE = "<in>"  # command-line interpreter filename
    BRACKETS = {"(": ")", "{": "}"}

    def __init__(self, error_handler, path, cmd_line, trace=False):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path                                # used for error messages
        self.cmd_line = cmd_line                        # whether or not in command-line mode
        self.tracer = Tracer() if trace else None       # parse tracing

        self.env = Environment()  # root scope, lives as long as the session
        self.to_exec = {}         # dict of line num: (source, Program) to evaluate
        self.results = []         # Objects produced by run, in order

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            try:
                with open(path, "r") as file:
                    source = file.read()
            except OSError:
                raise GenericException("'{}' could not be opened", path)

            self.add(source, 1)

        elif not cmd_line:
            raise GenericException("'<in>' is a reserved filename")

    @staticmethod
    def preprocess_line(line):
        """Strips trailing whitespace from line. Returns updated line and whether the line continues on the next one,
        which is the case while any ( or { is left open.
        """
        line = line.rstrip()

        balance = 0
        for opener, closer in Session.BRACKETS.items():
            balance += line.count(opener) - line.count(closer)
        return line, balance > 0

    @staticmethod
    def summarize(source):
        """First line of source, used in tracebacks."""
        lines = source.strip().splitlines()
        if len(lines) > 1:
            return lines[0] + " ..."
        return lines[0]

    def add(self, source, line_num):
        """Parses source and queues it to be evaluated by run. Syntax errors are reported through the error handler and
        nothing is queued. Raises ValueError if source is blank.
        """
        if not source.strip():
            raise ValueError("source cannot be empty")

        self.error_handler.register_line(self.path, Session.summarize(source), line_num)

        program, errors = parse(source, self.tracer)
        if errors:
            self.error_handler.syntax(errors)
        else:
            if self.tracer is not None:
                self.tracer.tree(program)
            self.to_exec[line_num] = (source, program)

        self.error_handler.remove_line(self.path)

    def run(self):
        """Evaluates every queued program in the session's root scope. Runtime errors are thrown through the error
        handler; other results are appended to self.results.
        """
        for line_num, (source, program) in list(self.to_exec.items()):
            self.error_handler.register_line(self.path, Session.summarize(source), line_num)

            try:
                result = evaluate(program, self.env)
            finally:
                del self.to_exec[line_num]

            if is_error(result):
                self.error_handler.runtime(result)
            else:
                self.results.append(result)

            self.error_handler.remove_line(self.path)

    def pop(self):
        """Removes and returns the most recent result."""
        return self.results.pop()
