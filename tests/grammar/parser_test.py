import unittest

from monkey.grammar.nodes import (
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
    ReturnStatement,
)
from monkey.grammar.parser import Parser, Precedence, parse
from monkey.grammar.trace import Tracer
from monkey.lang.lexical import Lexer


class ParserTestCase(unittest.TestCase):

    def parse_clean(self, source):
        program, errors = parse(source)
        self.assertEqual([], errors, source)
        return program

    def parse_expression(self, source):
        program = self.parse_clean(source)
        self.assertEqual(1, len(program.statements), source)
        statement = program.statements[0]
        self.assertIsInstance(statement, ExpressionStatement, source)
        return statement.expression

    def assert_literal(self, expected, expression):
        if isinstance(expected, bool):
            self.assertIsInstance(expression, BooleanLiteral)
            self.assertEqual(expected, expression.value)
            self.assertEqual(str(expected).lower(), expression.token_literal())
        elif isinstance(expected, int):
            self.assertIsInstance(expression, IntegerLiteral)
            self.assertEqual(expected, expression.value)
            self.assertEqual(str(expected), expression.token_literal())
        else:
            self.assertIsInstance(expression, Identifier)
            self.assertEqual(expected, expression.value)
            self.assertEqual(expected, expression.token_literal())

    def assert_infix(self, left, operator, right, expression):
        self.assertIsInstance(expression, InfixExpression)
        self.assert_literal(left, expression.left)
        self.assertEqual(operator, expression.operator)
        self.assert_literal(right, expression.right)

    def test_let_statements(self):
        cases = {
            "let x = 5;": ("x", 5),
            "let y = true;": ("y", True),
            "let foobar = y;": ("foobar", "y"),
            "let z = 10": ("z", 10),
        }
        for case, (name, value) in cases.items():
            program = self.parse_clean(case)
            self.assertEqual(1, len(program.statements), case)

            statement = program.statements[0]
            self.assertIsInstance(statement, LetStatement, case)
            self.assertEqual("let", statement.token_literal())
            self.assertEqual(name, statement.name.value)
            self.assertEqual(name, statement.name.token_literal())
            self.assert_literal(value, statement.value)

    def test_return_statements(self):
        cases = {"return 5;": 5, "return true;": True, "return foobar;": "foobar"}
        for case, value in cases.items():
            statement, = self.parse_clean(case).statements
            self.assertIsInstance(statement, ReturnStatement, case)
            self.assertEqual("return", statement.token_literal())
            self.assert_literal(value, statement.return_value)

        for case in ["return;", "return"]:
            statement, = self.parse_clean(case).statements
            self.assertIsInstance(statement, ReturnStatement, case)
            self.assertIsNone(statement.return_value, case)

    def test_literal_expressions(self):
        cases = {"foobar;": "foobar", "5;": 5, "true;": True, "false": False}
        for case, value in cases.items():
            self.assert_literal(value, self.parse_expression(case))

    def test_prefix_expressions(self):
        cases = {"!5;": ("!", 5), "-15;": ("-", 15), "!true;": ("!", True), "-a": ("-", "a")}
        for case, (operator, value) in cases.items():
            expression = self.parse_expression(case)
            self.assertIsInstance(expression, PrefixExpression, case)
            self.assertEqual(operator, expression.operator)
            self.assert_literal(value, expression.right)

    def test_infix_expressions(self):
        for operator in ["+", "-", "*", "/", ">", "<", "==", "!="]:
            case = f"5 {operator} 6;"
            self.assert_infix(5, operator, 6, self.parse_expression(case))

        self.assert_infix(True, "==", False, self.parse_expression("true == false"))
        self.assert_infix("a", "!=", "b", self.parse_expression("a != b"))

    def test_operator_precedence(self):
        cases = {
            "-a * b": "((-a) * b)",
            "!-a": "(!(-a))",
            "a + b + c": "((a + b) + c)",
            "a + b - c": "((a + b) - c)",
            "a * b * c": "((a * b) * c)",
            "a * b / c": "((a * b) / c)",
            "a + b / c": "(a + (b / c))",
            "a + b * c + d / e - f": "(((a + (b * c)) + (d / e)) - f)",
            "3 + 4; -5 * 5": "(3 + 4)((-5) * 5)",
            "5 > 4 == 3 < 4": "((5 > 4) == (3 < 4))",
            "5 < 4 != 3 > 4": "((5 < 4) != (3 > 4))",
            "3 + 4 * 5 == 3 * 1 + 4 * 5": "((3 + (4 * 5)) == ((3 * 1) + (4 * 5)))",
            "true": "true",
            "3 > 5 == false": "((3 > 5) == false)",
            "1 + (2 + 3) + 4": "((1 + (2 + 3)) + 4)",
            "(5 + 5) * 2": "((5 + 5) * 2)",
            "2 / (5 + 5)": "(2 / (5 + 5))",
            "-(5 + 5)": "(-(5 + 5))",
            "!(true == true)": "(!(true == true))",
            "a + add(b * c) + d": "((a + add((b * c))) + d)",
            "add(a, b, 1, 2 * 3, 4 + 5, add(6, 7 * 8))": "add(a, b, 1, (2 * 3), (4 + 5), add(6, (7 * 8)))",
            "add(a + b + c * d / f + g)": "add((((a + b) + ((c * d) / f)) + g))",
            "f(x)(y)": "f(x)(y)",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, str(self.parse_clean(case)), case)

    def test_round_trip(self):
        cases = [
            "-a * b",
            "a + b * c + d / e - f",
            "a + add(b * c) + d",
            "!(true == false) != x",
            "if (x < y) { x } else { y }",
            "if (x) { let z = x * 2; z }",
            "fn(x, y) { return x + y; }",
            "fn() { }",
            "let newAdder = fn(x) { fn(y) { x + y } };",
            "return;",
            "fn(a) { a }(1 + 2, 3)",
        ]
        for case in cases:
            program = self.parse_clean(case)
            reparsed = self.parse_clean(str(program))
            self.assertEqual(program, reparsed, case)
            self.assertEqual(str(program), str(reparsed), case)

    def test_if_expression(self):
        expression = self.parse_expression("if (x < y) { x }")
        self.assertIsInstance(expression, IfExpression)
        self.assert_infix("x", "<", "y", expression.condition)
        consequence, = expression.consequence.statements
        self.assert_literal("x", consequence.expression)
        self.assertIsNone(expression.alternative)

    def test_if_else_expression(self):
        expression = self.parse_expression("if (x < y) { x } else { y }")
        self.assertIsInstance(expression, IfExpression)
        alternative, = expression.alternative.statements
        self.assert_literal("y", alternative.expression)

    def test_function_literal(self):
        expression = self.parse_expression("fn(x, y) { x + y; }")
        self.assertIsInstance(expression, FunctionLiteral)
        self.assertEqual(["x", "y"], [param.value for param in expression.parameters])
        body, = expression.body.statements
        self.assert_infix("x", "+", "y", body.expression)

    def test_function_parameters(self):
        cases = {"fn() {};": [], "fn(x) {};": ["x"], "fn(x, y, z) {};": ["x", "y", "z"]}
        for case, expected in cases.items():
            expression = self.parse_expression(case)
            self.assertEqual(expected, [param.value for param in expression.parameters], case)

    def test_call_expression(self):
        expression = self.parse_expression("add(1, 2 * 3, 4 + 5);")
        self.assertIsInstance(expression, CallExpression)
        self.assert_literal("add", expression.function)
        self.assertEqual(3, len(expression.arguments))
        self.assert_literal(1, expression.arguments[0])
        self.assert_infix(2, "*", 3, expression.arguments[1])
        self.assert_infix(4, "+", 5, expression.arguments[2])

        self.assertEqual((), self.parse_expression("add()").arguments)

    def test_errors(self):
        cases = {
            "let = 5;": ["expected next token to be IDENT, got = instead"],
            "let x 5;": ["expected next token to be =, got INT instead"],
            "let 838383;": ["expected next token to be IDENT, got INT instead"],
            "+5": ["no prefix parse function for + found"],
            "(1 + 2": ["expected next token to be ), got EOF instead"],
            "if x { 1 }": ["expected next token to be (, got IDENT instead"],
            "fn(x, 1) { x }": ["expected next token to be IDENT, got INT instead"],
            "99999999999999999999": ["could not parse 99999999999999999999 as integer"],
            "x @ y": ["no prefix parse function for ILLEGAL found"],
            "fn() { 1": ["expected next token to be }, got EOF instead"],
        }
        for case, expected in cases.items():
            __, errors = parse(case)
            self.assertEqual(expected, errors[:len(expected)], case)

    def test_error_recovery(self):
        program, errors = parse("let x 5; let y = 10; let = 1; y;")
        self.assertEqual(2, len(errors))
        self.assertEqual(["let y = 10;", "y"], [str(statement) for statement in program.statements])

    def test_precedence_order(self):
        self.assertLess(Precedence.LOWEST, Precedence.EQUALS)
        self.assertLess(Precedence.EQUALS, Precedence.LESSGREATER)
        self.assertLess(Precedence.LESSGREATER, Precedence.SUM)
        self.assertLess(Precedence.SUM, Precedence.PRODUCT)
        self.assertLess(Precedence.PRODUCT, Precedence.PREFIX)
        self.assertLess(Precedence.PREFIX, Precedence.CALL)

    def test_trace(self):
        lines = []
        parser = Parser(Lexer("-a * b"), Tracer(lines.append))
        parser.parse_program()

        self.assertEqual([], parser.errors)
        output = "\n".join(lines)
        self.assertIn("BEGIN: parse_expression_statement", output)
        self.assertIn("BEGIN: parse_prefix_expression", output)
        self.assertIn("END: parse_infix_expression", output)
        self.assertEqual(0, parser.tracer.depth)
        self.assertEqual(
            len([line for line in lines if "BEGIN:" in line]),
            len([line for line in lines if "END:" in line])
        )


if __name__ == '__main__':
    unittest.main()
