"""Lexical analysis for the monkey language. Turns raw source text into a stream of Tokens, one at a time, with a single
character of lookahead and no backtracking.

Token grammar can be loosely defined as follows:

```
<ident>    ::= (<letter> | "_")+                 ; keywords are identifiers found in Token.KEYWORDS
<int>      ::= <digit>+                          ; range is checked by the parser, not here
<operator> ::= "=" | "+" | "-" | "!" | "*" | "/" | "<" | ">" | "==" | "!="
<delim>    ::= "," | ";" | "(" | ")" | "{" | "}"
```

Whitespace separates tokens and is otherwise ignored. Anything else is an ILLEGAL token, which the parser reports.
"""

from dataclasses import dataclass, field
from enum import Enum


class TokenType(Enum):
    """Kind tag of a Token. The value doubles as the name printed in syntax errors."""
    ILLEGAL = "ILLEGAL"
    EOF = "EOF"

    IDENT = "IDENT"
    INT = "INT"

    ASSIGN = "="
    PLUS = "+"
    MINUS = "-"
    BANG = "!"
    ASTERISK = "*"
    SLASH = "/"
    LT = "<"
    GT = ">"
    EQ = "=="
    NOT_EQ = "!="

    COMMA = ","
    SEMICOLON = ";"
    LPAREN = "("
    RPAREN = ")"
    LBRACE = "{"
    RBRACE = "}"

    FUNCTION = "FUNCTION"
    LET = "LET"
    TRUE = "TRUE"
    FALSE = "FALSE"
    IF = "IF"
    ELSE = "ELSE"
    RETURN = "RETURN"

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class Token:
    """Smallest lexical unit: a kind and the literal text it was read from. line/column are only used for diagnostics
    and are ignored when comparing tokens.
    """
    type: TokenType
    literal: str
    line: int = field(default=0, compare=False)
    column: int = field(default=0, compare=False)

    KEYWORDS = {
        "fn": TokenType.FUNCTION,
        "let": TokenType.LET,
        "true": TokenType.TRUE,
        "false": TokenType.FALSE,
        "if": TokenType.IF,
        "else": TokenType.ELSE,
        "return": TokenType.RETURN,
    }

    @staticmethod
    def lookup_ident(ident):
        """Returns keyword TokenType of ident, or IDENT if ident isn't a keyword."""
        return Token.KEYWORDS.get(ident, TokenType.IDENT)

    def __str__(self):
        return f"{self.type}({self.literal!r})"


class Lexer:
    """Pull-based token source. Call next_token until it returns EOF (it will keep returning EOF afterwards)."""
    WHITESPACE = " \t\r\n"
    SINGLE = {
        "+": TokenType.PLUS,
        "-": TokenType.MINUS,
        "*": TokenType.ASTERISK,
        "/": TokenType.SLASH,
        "<": TokenType.LT,
        ">": TokenType.GT,
        ",": TokenType.COMMA,
        ";": TokenType.SEMICOLON,
        "(": TokenType.LPAREN,
        ")": TokenType.RPAREN,
        "{": TokenType.LBRACE,
        "}": TokenType.RBRACE,
    }

    def __init__(self, source):
        self.source = source

        self.position = 0       # index of self.char
        self.read_position = 0  # index of next char
        self.char = ""          # "" means end of input

        self.line = 1
        self.column = 0

        self._read_char()

    def _read_char(self):
        if self.char == "\n":
            self.line += 1
            self.column = 0

        if self.read_position >= len(self.source):
            self.char = ""
        else:
            self.char = self.source[self.read_position]

        self.position = self.read_position
        self.read_position += 1
        self.column += 1

    def _peek_char(self):
        if self.read_position >= len(self.source):
            return ""
        return self.source[self.read_position]

    def _skip_whitespace(self):
        while self.char and self.char in Lexer.WHITESPACE:
            self._read_char()

    def _read_while(self, predicate):
        start = self.position
        while self.char and predicate(self.char):
            self._read_char()
        return self.source[start:self.position]

    @staticmethod
    def is_letter(char):
        return char.isalpha() or char == "_"

    @staticmethod
    def is_digit(char):
        return "0" <= char <= "9"

    def next_token(self):
        """Scans and returns the next Token in self.source."""
        self._skip_whitespace()
        line, column = self.line, self.column

        if not self.char:
            return Token(TokenType.EOF, "", line, column)

        if self.char in "=!" and self._peek_char() == "=":
            literal = self.char + "="
            self._read_char()
            self._read_char()
            return Token(TokenType.EQ if literal == "==" else TokenType.NOT_EQ, literal, line, column)

        if self.char == "=":
            self._read_char()
            return Token(TokenType.ASSIGN, "=", line, column)

        if self.char == "!":
            self._read_char()
            return Token(TokenType.BANG, "!", line, column)

        if self.char in Lexer.SINGLE:
            char = self.char
            self._read_char()
            return Token(Lexer.SINGLE[char], char, line, column)

        if Lexer.is_letter(self.char):
            ident = self._read_while(Lexer.is_letter)
            return Token(Token.lookup_ident(ident), ident, line, column)

        if Lexer.is_digit(self.char):
            return Token(TokenType.INT, self._read_while(Lexer.is_digit), line, column)

        char = self.char
        self._read_char()
        return Token(TokenType.ILLEGAL, char, line, column)

    def __iter__(self):
        """Yields every remaining token, EOF included."""
        while True:
            token = self.next_token()
            yield token
            if token.type is TokenType.EOF:
                return
