"""Pratt (operator-precedence) parser for the monkey language.

Statements are dispatched on their leading token. Expressions are parsed by precedence climbing: every token that can
start an expression has a prefix parse function, every token that can continue one has an infix parse function and a
precedence in PRECEDENCES. parse_expression(precedence) runs the prefix function of the current token, then keeps
handing the expression parsed so far to the infix function of the next token for as long as that token binds tighter
than precedence. Operators of equal precedence therefore associate to the left:

```
a + b * c + d / e - f  ->  (((a + (b * c)) + (d / e)) - f)
```

The parser never raises on bad input. Every mismatch is appended to Parser.errors and parsing continues with the next
statement, so that a whole line's worth of errors can be reported at once. Check errors before using the Program.
"""

from enum import IntEnum

from monkey.grammar.nodes import (
    BlockStatement,
    BooleanLiteral,
    CallExpression,
    ExpressionStatement,
    FunctionLiteral,
    Identifier,
    IfExpression,
    InfixExpression,
    IntegerLiteral,
    LetStatement,
    PrefixExpression,
    Program,
    ReturnStatement,
)
from monkey.grammar.trace import traced
from monkey.lang.error import GenericException
from monkey.lang.lexical import Lexer, TokenType
from monkey.lang.numerical import number


class Precedence(IntEnum):
    LOWEST = 1
    EQUALS = 2       # ==
    LESSGREATER = 3  # > or <
    SUM = 4          # +
    PRODUCT = 5      # *
    PREFIX = 6       # -x or !x
    CALL = 7         # f(x)


PRECEDENCES = {
    TokenType.EQ: Precedence.EQUALS,
    TokenType.NOT_EQ: Precedence.EQUALS,
    TokenType.LT: Precedence.LESSGREATER,
    TokenType.GT: Precedence.LESSGREATER,
    TokenType.PLUS: Precedence.SUM,
    TokenType.MINUS: Precedence.SUM,
    TokenType.SLASH: Precedence.PRODUCT,
    TokenType.ASTERISK: Precedence.PRODUCT,
    TokenType.LPAREN: Precedence.CALL,
}


class Parser:
    """Consumes tokens from lexer with one token of lookahead (cur_token and peek_token). If tracer is given, every
    parse routine is traced through it.
    """

    def __init__(self, lexer, tracer=None):
        self.lexer = lexer
        self.tracer = tracer
        self.errors = []

        self.cur_token = None
        self.peek_token = None

        self.prefix_parse_fns = {}
        self.infix_parse_fns = {}

        self.register_prefix(TokenType.IDENT, self.parse_identifier)
        self.register_prefix(TokenType.INT, self.parse_integer_literal)
        self.register_prefix(TokenType.TRUE, self.parse_boolean)
        self.register_prefix(TokenType.FALSE, self.parse_boolean)
        self.register_prefix(TokenType.BANG, self.parse_prefix_expression)
        self.register_prefix(TokenType.MINUS, self.parse_prefix_expression)
        self.register_prefix(TokenType.LPAREN, self.parse_grouped_expression)
        self.register_prefix(TokenType.IF, self.parse_if_expression)
        self.register_prefix(TokenType.FUNCTION, self.parse_function_literal)

        for token_type in PRECEDENCES:
            self.register_infix(token_type, self.parse_infix_expression)
        self.register_infix(TokenType.LPAREN, self.parse_call_expression)

        # fill cur_token and peek_token
        self.next_token()
        self.next_token()

    def register_prefix(self, token_type, fn):
        self.prefix_parse_fns[token_type] = fn

    def register_infix(self, token_type, fn):
        self.infix_parse_fns[token_type] = fn

    def next_token(self):
        self.cur_token = self.peek_token
        self.peek_token = self.lexer.next_token()

    def cur_token_is(self, token_type):
        return self.cur_token.type is token_type

    def peek_token_is(self, token_type):
        return self.peek_token.type is token_type

    def expect_peek(self, token_type):
        """Advances if peek_token is of token_type, otherwise records an error. Returns whether it advanced."""
        if self.peek_token_is(token_type):
            self.next_token()
            return True

        self.peek_error(token_type)
        return False

    def peek_precedence(self):
        return PRECEDENCES.get(self.peek_token.type, Precedence.LOWEST)

    def cur_precedence(self):
        return PRECEDENCES.get(self.cur_token.type, Precedence.LOWEST)

    def peek_error(self, token_type):
        self.errors.append(f"expected next token to be {token_type}, got {self.peek_token.type} instead")

    def no_prefix_parse_fn_error(self, token_type):
        self.errors.append(f"no prefix parse function for {token_type} found")

    def synchronize(self):
        """Skips tokens until cur_token is at a statement boundary (; or end of input)."""
        while not self.cur_token_is(TokenType.SEMICOLON) and not self.cur_token_is(TokenType.EOF):
            self.next_token()

    def parse_program(self):
        """Parses every statement up to EOF. Statements that could not be parsed are left out of the Program."""
        statements = []
        while not self.cur_token_is(TokenType.EOF):
            statement = self.parse_statement()
            if statement is not None:
                statements.append(statement)
            self.next_token()

        return Program(tuple(statements))

    # --- Statements ---
    def parse_statement(self):
        if self.cur_token_is(TokenType.LET):
            return self.parse_let_statement()
        elif self.cur_token_is(TokenType.RETURN):
            return self.parse_return_statement()
        return self.parse_expression_statement()

    @traced
    def parse_let_statement(self):
        token = self.cur_token

        if not self.expect_peek(TokenType.IDENT):
            self.synchronize()
            return None
        name = Identifier(self.cur_token, self.cur_token.literal)

        if not self.expect_peek(TokenType.ASSIGN):
            self.synchronize()
            return None

        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)

        if self.peek_token_is(TokenType.SEMICOLON):
            self.next_token()

        if value is None:
            return None
        return LetStatement(token, name, value)

    @traced
    def parse_return_statement(self):
        token = self.cur_token

        if self.peek_token_is(TokenType.RBRACE) or self.peek_token_is(TokenType.EOF):
            return ReturnStatement(token)
        elif self.peek_token_is(TokenType.SEMICOLON):
            self.next_token()
            return ReturnStatement(token)

        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)

        if self.peek_token_is(TokenType.SEMICOLON):
            self.next_token()

        if value is None:
            return None
        return ReturnStatement(token, value)

    @traced
    def parse_expression_statement(self):
        token = self.cur_token
        expression = self.parse_expression(Precedence.LOWEST)

        if self.peek_token_is(TokenType.SEMICOLON):
            self.next_token()

        if expression is None:
            return None
        return ExpressionStatement(token, expression)

    @traced
    def parse_block_statement(self):
        token = self.cur_token
        statements = []

        self.next_token()
        while not self.cur_token_is(TokenType.RBRACE):
            if self.cur_token_is(TokenType.EOF):
                self.errors.append(f"expected next token to be {TokenType.RBRACE}, got {TokenType.EOF} instead")
                return None

            statement = self.parse_statement()
            if statement is not None:
                statements.append(statement)
            self.next_token()

        return BlockStatement(token, tuple(statements))

    # --- Expressions ---
    @traced
    def parse_expression(self, precedence):
        prefix = self.prefix_parse_fns.get(self.cur_token.type)
        if prefix is None:
            self.no_prefix_parse_fn_error(self.cur_token.type)
            return None
        left = prefix()

        while left is not None and not self.peek_token_is(TokenType.SEMICOLON) and precedence < self.peek_precedence():
            infix = self.infix_parse_fns.get(self.peek_token.type)
            if infix is None:
                return left

            self.next_token()
            left = infix(left)

        return left

    def parse_identifier(self):
        return Identifier(self.cur_token, self.cur_token.literal)

    @traced
    def parse_integer_literal(self):
        try:
            value = number(self.cur_token.literal)
        except GenericException:
            self.errors.append(f"could not parse {self.cur_token.literal} as integer")
            return None
        return IntegerLiteral(self.cur_token, value)

    def parse_boolean(self):
        return BooleanLiteral(self.cur_token, self.cur_token_is(TokenType.TRUE))

    @traced
    def parse_prefix_expression(self):
        token = self.cur_token

        self.next_token()
        right = self.parse_expression(Precedence.PREFIX)

        if right is None:
            return None
        return PrefixExpression(token, token.literal, right)

    @traced
    def parse_infix_expression(self, left):
        token = self.cur_token
        precedence = self.cur_precedence()

        self.next_token()
        right = self.parse_expression(precedence)

        if right is None:
            return None
        return InfixExpression(token, left, token.literal, right)

    def parse_grouped_expression(self):
        self.next_token()
        expression = self.parse_expression(Precedence.LOWEST)

        if expression is None or not self.expect_peek(TokenType.RPAREN):
            return None
        return expression

    @traced
    def parse_if_expression(self):
        token = self.cur_token

        if not self.expect_peek(TokenType.LPAREN):
            return None

        self.next_token()
        condition = self.parse_expression(Precedence.LOWEST)

        if condition is None or not self.expect_peek(TokenType.RPAREN):
            return None
        if not self.expect_peek(TokenType.LBRACE):
            return None

        consequence = self.parse_block_statement()
        if consequence is None:
            return None

        alternative = None
        if self.peek_token_is(TokenType.ELSE):
            self.next_token()

            if not self.expect_peek(TokenType.LBRACE):
                return None

            alternative = self.parse_block_statement()
            if alternative is None:
                return None

        return IfExpression(token, condition, consequence, alternative)

    @traced
    def parse_function_literal(self):
        token = self.cur_token

        if not self.expect_peek(TokenType.LPAREN):
            return None

        parameters = self.parse_function_parameters()
        if parameters is None or not self.expect_peek(TokenType.LBRACE):
            return None

        body = self.parse_block_statement()
        if body is None:
            return None
        return FunctionLiteral(token, parameters, body)

    def parse_function_parameters(self):
        """Parses comma-separated identifiers up to and including the closing ). Returns a tuple of Identifiers."""
        if self.peek_token_is(TokenType.RPAREN):
            self.next_token()
            return ()

        if not self.expect_peek(TokenType.IDENT):
            return None
        parameters = [Identifier(self.cur_token, self.cur_token.literal)]

        while self.peek_token_is(TokenType.COMMA):
            self.next_token()
            if not self.expect_peek(TokenType.IDENT):
                return None
            parameters.append(Identifier(self.cur_token, self.cur_token.literal))

        if not self.expect_peek(TokenType.RPAREN):
            return None
        return tuple(parameters)

    @traced
    def parse_call_expression(self, function):
        token = self.cur_token

        arguments = self.parse_expression_list(TokenType.RPAREN)
        if arguments is None:
            return None
        return CallExpression(token, function, arguments)

    def parse_expression_list(self, end):
        """Parses comma-separated expressions up to and including end. Returns a tuple of Expressions."""
        if self.peek_token_is(end):
            self.next_token()
            return ()

        self.next_token()
        expressions = [self.parse_expression(Precedence.LOWEST)]

        while self.peek_token_is(TokenType.COMMA):
            self.next_token()
            self.next_token()
            expressions.append(self.parse_expression(Precedence.LOWEST))

        if not self.expect_peek(end) or any(expression is None for expression in expressions):
            return None
        return tuple(expressions)


def parse(text, tracer=None):
    """Parses text into a Program. Returns (Program, list of syntax error messages)."""
    parser = Parser(Lexer(text), tracer)
    program = parser.parse_program()
    return program, parser.errors
