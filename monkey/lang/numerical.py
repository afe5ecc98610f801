"""Integer semantics for the monkey language. Integers are signed and 64 bits wide: results of arithmetic wrap around
on overflow and division truncates toward zero, so that -5 / 2 == -2 (Python's // would floor to -3).
"""

from monkey.lang.error import GenericException

INT_BITS = 64
INT_MIN = -(1 << (INT_BITS - 1))
INT_MAX = (1 << (INT_BITS - 1)) - 1


def wrap(num):
    """Returns num wrapped into the signed 64-bit range."""
    num &= (1 << INT_BITS) - 1
    if num > INT_MAX:
        num -= 1 << INT_BITS
    return num


def number(literal):
    """Returns int value of a decimal integer literal. Raises GenericException if literal isn't a decimal integer or
    doesn't fit in 64 bits.
    """
    if not literal.isdigit():
        raise GenericException("'{}' is not a decimal integer", literal)

    num = int(literal)
    if num > INT_MAX:
        raise GenericException("'{}' does not fit in a 64-bit integer", literal)
    return num


def divide(left, right):
    """Integer division truncating toward zero. Raises ZeroDivisionError if right is 0."""
    if right == 0:
        raise ZeroDivisionError("division by zero")

    quotient = abs(left) // abs(right)
    if (left < 0) != (right < 0):
        quotient = -quotient
    return wrap(quotient)
