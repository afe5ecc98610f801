"""Tree-walking evaluator for the monkey language.

evaluate(node, env) dispatches on the node's class and recurses into its children; the Python call stack is the
interpreter stack, and importing this module raises the host recursion limit to RECURSION_LIMIT. Control flow that
leaves a statement sequence early (return statements and runtime errors) is not done with
Python exceptions: ReturnValue and Error objects are returned like any other value, and every site that evaluates a
child checks for them before going on. A statement sequence is therefore in one of three states:

```
running  --normal result-->  running
running  --ReturnValue--->   returned   (stop, hand ReturnValue to the caller)
running  --Error--------->   errored    (stop, hand Error to the caller)
```

Function calls unwrap ReturnValue, so a return anywhere inside a body only ends that call. Errors are never unwrapped.
"""

import operator
import sys
from functools import singledispatch

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
from monkey.lang.numerical import divide
from monkey.runtime.environment import Environment
from monkey.runtime.objects import (
    FALSE,
    NULL,
    TRUE,
    Boolean,
    Error,
    Function,
    Integer,
    ReturnValue,
    is_error,
    is_truthy,
    native_bool,
)

# one monkey call takes about 15 Python frames
RECURSION_LIMIT = 30000

if sys.getrecursionlimit() < RECURSION_LIMIT:
    sys.setrecursionlimit(RECURSION_LIMIT)

INTEGER_ARITHMETIC = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": divide,
}

INTEGER_COMPARISON = {
    "==": operator.eq,
    "!=": operator.ne,
    "<": operator.lt,
    ">": operator.gt,
}


@singledispatch
def evaluate(node, env):
    """Evaluates node in env and returns the resulting Object."""
    raise TypeError(f"cannot evaluate {type(node).__name__}")


def eval_node(node, env):
    """Same as evaluate, but calls the registered implementation directly instead of going through the generic
    function's wrapper. Every recursive step uses this, so that one monkey call is a chain of plain Python calls.
    """
    return evaluate.dispatch(type(node))(node, env)


# --- Statements ---
@evaluate.register(Program)
def eval_program(node, env):
    return unwrap_return_value(eval_statements(node.statements, env))


@evaluate.register(BlockStatement)
def eval_block_statement(node, env):
    return eval_statements(node.statements, env)


@evaluate.register(ExpressionStatement)
def eval_expression_statement(node, env):
    return eval_node(node.expression, env)


@evaluate.register(LetStatement)
def eval_let_statement(node, env):
    value = eval_node(node.value, env)
    if is_error(value):
        return value
    return env.set(node.name.value, value)


@evaluate.register(ReturnStatement)
def eval_return_statement(node, env):
    if node.return_value is None:
        return ReturnValue(NULL)

    value = eval_node(node.return_value, env)
    if is_error(value):
        return value
    return ReturnValue(value)


def eval_statements(statements, env):
    """Evaluates statements in order. Stops at the first ReturnValue or Error and returns it as is; otherwise returns
    the value of the last statement (NULL if there are none).
    """
    result = NULL
    for statement in statements:
        result = eval_node(statement, env)
        if isinstance(result, (ReturnValue, Error)):
            return result
    return result


# --- Expressions ---
@evaluate.register(IntegerLiteral)
def eval_integer_literal(node, env):
    return Integer(node.value)


@evaluate.register(BooleanLiteral)
def eval_boolean_literal(node, env):
    return native_bool(node.value)


@evaluate.register(Identifier)
def eval_identifier(node, env):
    value = env.get(node.value)
    if value is None:
        return Error("identifier not found: {}", node.value)
    return value


@evaluate.register(PrefixExpression)
def eval_prefix_expression(node, env):
    right = eval_node(node.right, env)
    if is_error(right):
        return right

    if node.operator == "!":
        return eval_bang_operator(right)
    elif node.operator == "-":
        return eval_minus_operator(right)
    return Error("unknown operator: {}{}", node.operator, right.type)


def eval_bang_operator(right):
    if right is TRUE:
        return FALSE
    elif right is FALSE or right is NULL:
        return TRUE
    return FALSE


def eval_minus_operator(right):
    if not isinstance(right, Integer):
        return Error("unknown operator: -{}", right.type)
    return Integer(-right.value)


@evaluate.register(InfixExpression)
def eval_infix_expression(node, env):
    left = eval_node(node.left, env)
    if is_error(left):
        return left

    right = eval_node(node.right, env)
    if is_error(right):
        return right

    return infix(node.operator, left, right)


def infix(op, left, right):
    """Applies infix operator op to two evaluated operands."""
    if isinstance(left, Integer) and isinstance(right, Integer):
        return integer_infix(op, left, right)
    elif isinstance(left, Boolean) and isinstance(right, Boolean):
        return boolean_infix(op, left, right)
    elif left.type != right.type:
        return Error("type mismatch: {} {} {}", left.type, op, right.type)
    return Error("unknown operator: {} {} {}", left.type, op, right.type)


def integer_infix(op, left, right):
    if op in INTEGER_ARITHMETIC:
        try:
            return Integer(INTEGER_ARITHMETIC[op](left.value, right.value))
        except ZeroDivisionError:
            return Error("division by zero")
    elif op in INTEGER_COMPARISON:
        return native_bool(INTEGER_COMPARISON[op](left.value, right.value))
    return Error("unknown operator: {} {} {}", left.type, op, right.type)


def boolean_infix(op, left, right):
    # booleans are singletons
    if op == "==":
        return native_bool(left is right)
    elif op == "!=":
        return native_bool(left is not right)
    return Error("unknown operator: {} {} {}", left.type, op, right.type)


@evaluate.register(IfExpression)
def eval_if_expression(node, env):
    condition = eval_node(node.condition, env)
    if is_error(condition):
        return condition

    if is_truthy(condition):
        return eval_node(node.consequence, env)
    elif node.alternative is not None:
        return eval_node(node.alternative, env)
    return NULL


@evaluate.register(FunctionLiteral)
def eval_function_literal(node, env):
    return Function(node.parameters, node.body, env)


@evaluate.register(CallExpression)
def eval_call_expression(node, env):
    function = eval_node(node.function, env)
    if is_error(function):
        return function
    if not isinstance(function, Function):
        return Error("not a function: {}", function.type)

    args = eval_expressions(node.arguments, env)
    if is_error(args):
        return args

    return apply_function(function, args)


def eval_expressions(expressions, env):
    """Evaluates expressions left to right. Returns the list of results, or the first Error encountered."""
    results = []
    for expression in expressions:
        value = eval_node(expression, env)
        if is_error(value):
            return value
        results.append(value)
    return results


def apply_function(function, args):
    """Calls function with already evaluated args in a new frame enclosed by the function's definition frame."""
    if len(args) != len(function.parameters):
        return Error("wrong number of arguments: want={}, got={}", len(function.parameters), len(args))

    call_env = Environment.new_enclosed(function.env)
    for param, arg in zip(function.parameters, args):
        call_env.set(param.value, arg)

    return unwrap_return_value(eval_node(function.body, call_env))


def unwrap_return_value(obj):
    if isinstance(obj, ReturnValue):
        return obj.value
    return obj
