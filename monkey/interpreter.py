"""monkey: an interpreter for a small, dynamically typed, C-like language.

Basic program flow:
    1. Lexer (monkey/lang/lexical.py): source text -> Tokens, one at a time
    2. Parser (monkey/grammar/parser.py): Tokens -> Program, a tree of monkey/grammar/nodes.py nodes, plus a list of
       syntax errors
    3. Evaluator (monkey/runtime/evaluator.py): walks the Program in a root Environment and returns an Object. Runtime
       errors are Error objects, not exceptions

Sessions (monkey/lang/session.py) and the shell (monkey/lang/shell.py) are thin drivers over parse and evaluate.
"""

from monkey.grammar.parser import parse
from monkey.runtime.environment import Environment
from monkey.runtime.evaluator import evaluate

__all__ = ["parse", "evaluate", "run"]


def run(text, env=None):
    """Parses and evaluates text. Returns (Object, syntax errors); Object is None if there were syntax errors. A fresh
    root Environment is used unless env is given.
    """
    program, errors = parse(text)
    if errors:
        return None, errors

    if env is None:
        env = Environment()
    return evaluate(program, env), []
