"""Parse tracing. Prints an indented BEGIN/END pair around every parse routine the parser enters, which makes the
precedence climbing visible:

```
>> -a * b
  BEGIN: parse_expression_statement
    BEGIN: parse_expression
      BEGIN: parse_prefix_expression
      ...
```
"""

from contextlib import contextmanager
from functools import wraps

from termcolor import colored

from monkey.lang.error import ErrorHandler


class Tracer:
    """Keeps the current trace depth. out is any callable that accepts a line (defaults to print)."""
    INDENT = "  "

    def __init__(self, out=print):
        self.out = out
        self.depth = 0

    def _emit(self, msg):
        self.out(colored(f"{Tracer.INDENT * self.depth}{msg}", ErrorHandler.TRACE))

    def trace(self, name):
        self.depth += 1
        self._emit(f"BEGIN: {name}")
        return name

    def untrace(self, name):
        self._emit(f"END: {name}")
        self.depth -= 1

    def tree(self, program):
        """Prints the parsed program, one node per line."""
        self.out(colored(program.display(self.depth), ErrorHandler.TRACE))

    @contextmanager
    def span(self, name):
        """Traces name for the duration of the with block."""
        self.trace(name)
        try:
            yield
        finally:
            self.untrace(name)


def traced(method):
    """Decorates a Parser method so that it is traced whenever the parser has a tracer."""

    @wraps(method)
    def wrapper(self, *args):
        if self.tracer is None:
            return method(self, *args)
        with self.tracer.span(method.__name__):
            return method(self, *args)

    return wrapper
