"""Abstract syntax tree of the monkey language, produced by monkey.grammar.parser.

Formally, the language can be defined as

```
<program>    ::= <statement>*
<statement>  ::= <let_stmt> | <return_stmt> | <expr_stmt>
<let_stmt>   ::= "let" <ident> "=" <expr> ";"
<return_stmt>::= "return" [<expr>] ";"
<expr_stmt>  ::= <expr> [";"]
<block>      ::= "{" <statement>* "}"
<expr>       ::= <int> | "true" | "false" | <ident>
               | ("!" | "-") <expr>                          ; prefix
               | <expr> <infix_op> <expr>                    ; infix, see Precedence in parser.py
               | "(" <expr> ")"
               | "if" "(" <expr> ")" <block> ["else" <block>]
               | "fn" "(" [<ident> ("," <ident>)*] ")" <block>
               | <expr> "(" [<expr> ("," <expr>)*] ")"       ; call
```

Nodes are frozen once built. Every node keeps the token it started with, for token_literal and diagnostics, and
str(node) reconstructs canonical source: infix and prefix expressions are fully parenthesized, so parsing str(node)
again yields an equal tree.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, Tuple

from monkey.lang.lexical import Token


class Node(ABC):
    """Superclass of every AST node."""

    def token_literal(self):
        """Literal text of the first token of this node."""
        return self.token.literal

    @abstractmethod
    def __str__(self):
        """Canonical source reconstruction of this node."""


class Statement(Node, ABC):
    """Node that is evaluated for its effect on the enclosing statement sequence."""


class Expression(Node, ABC):
    """Node that produces a value."""


# --- Expressions ---
@dataclass(frozen=True)
class Identifier(Expression):
    token: Token
    value: str

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class IntegerLiteral(Expression):
    token: Token
    value: int

    def __str__(self):
        return self.token.literal


@dataclass(frozen=True)
class BooleanLiteral(Expression):
    token: Token
    value: bool

    def __str__(self):
        return self.token.literal


@dataclass(frozen=True)
class PrefixExpression(Expression):
    token: Token  # the operator token, ! or -
    operator: str
    right: Expression

    def __str__(self):
        return f"({self.operator}{self.right})"


@dataclass(frozen=True)
class InfixExpression(Expression):
    token: Token  # the operator token
    left: Expression
    operator: str
    right: Expression

    def __str__(self):
        return f"({self.left} {self.operator} {self.right})"


@dataclass(frozen=True)
class IfExpression(Expression):
    token: Token
    condition: Expression
    consequence: "BlockStatement"
    alternative: Optional["BlockStatement"] = None

    def __str__(self):
        result = f"if ({self.condition}) {self.consequence}"
        if self.alternative is not None:
            result += f" else {self.alternative}"
        return result


@dataclass(frozen=True)
class FunctionLiteral(Expression):
    token: Token
    parameters: Tuple[Identifier, ...]
    body: "BlockStatement"

    def __str__(self):
        params = ", ".join(str(param) for param in self.parameters)
        return f"{self.token.literal}({params}) {self.body}"


@dataclass(frozen=True)
class CallExpression(Expression):
    token: Token  # the ( token
    function: Expression  # Identifier or FunctionLiteral, or anything else that evaluates to a Function
    arguments: Tuple[Expression, ...]

    def __str__(self):
        args = ", ".join(str(arg) for arg in self.arguments)
        return f"{self.function}({args})"


# --- Statements ---
@dataclass(frozen=True)
class LetStatement(Statement):
    token: Token
    name: Identifier
    value: Expression

    def __str__(self):
        return f"{self.token_literal()} {self.name} = {self.value};"


@dataclass(frozen=True)
class ReturnStatement(Statement):
    token: Token
    return_value: Optional[Expression] = None

    def __str__(self):
        if self.return_value is None:
            return f"{self.token_literal()};"
        return f"{self.token_literal()} {self.return_value};"


@dataclass(frozen=True)
class ExpressionStatement(Statement):
    token: Token = field(compare=False)  # first token of the expression, not compared
    expression: Expression

    def __str__(self):
        return str(self.expression)


@dataclass(frozen=True)
class BlockStatement(Statement):
    token: Token  # the { token
    statements: Tuple[Statement, ...]

    def __str__(self):
        if not self.statements:
            return "{ }"
        return "{ " + " ".join(str(statement) for statement in self.statements) + " }"


@dataclass(frozen=True)
class Program(Node):
    """Root of every tree: the top-level statements of one parse."""
    statements: Tuple[Statement, ...]

    def token_literal(self):
        if self.statements:
            return self.statements[0].token_literal()
        return ""

    def __str__(self):
        return "".join(str(statement) for statement in self.statements)

    def display(self, indents=0):
        """Recursively displays the tree with readable format, one node per line."""
        return "\n".join(_display(statement, indents) for statement in self.statements)


def _display(node, indents):
    result = f"{'    ' * indents}{type(node).__name__}('{node}')"
    for child in children(node):
        result += "\n" + _display(child, indents + 1)
    return result


def children(node):
    """Returns the direct child nodes of node, in source order."""
    if isinstance(node, Program):
        return list(node.statements)
    elif isinstance(node, LetStatement):
        return [node.name, node.value]
    elif isinstance(node, ReturnStatement):
        return [] if node.return_value is None else [node.return_value]
    elif isinstance(node, ExpressionStatement):
        return [node.expression]
    elif isinstance(node, BlockStatement):
        return list(node.statements)
    elif isinstance(node, PrefixExpression):
        return [node.right]
    elif isinstance(node, InfixExpression):
        return [node.left, node.right]
    elif isinstance(node, IfExpression):
        return [node.condition, node.consequence] + ([] if node.alternative is None else [node.alternative])
    elif isinstance(node, FunctionLiteral):
        return list(node.parameters) + [node.body]
    elif isinstance(node, CallExpression):
        return [node.function] + list(node.arguments)
    return []
