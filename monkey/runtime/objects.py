"""Runtime values of the monkey language. Every evaluation step returns one of these.

TRUE, FALSE and NULL are the only Boolean and Null instances that ever exist, so they are compared by identity.
Integers are allocated per evaluation and compared by value. ReturnValue and Error are control signals: both travel
through the same channel as ordinary values and cut the enclosing statement sequence short (see evaluator.py).
"""

from abc import ABC, abstractmethod

from monkey.lang.numerical import wrap


class ObjectType:
    INTEGER = "Integer"
    BOOLEAN = "Boolean"
    NULL = "Null"
    RETURN_VALUE = "ReturnValue"
    ERROR = "Error"
    FUNCTION = "Function"


class Object(ABC):
    """Superclass of every runtime value."""

    @property
    @abstractmethod
    def type(self):
        """ObjectType tag of this object, used in runtime error messages."""

    @abstractmethod
    def inspect(self):
        """Textual representation printed by the shell."""

    def __repr__(self):
        return f"{type(self).__name__}({self.inspect()!r})"

    def __str__(self):
        return self.inspect()


class Integer(Object):

    def __init__(self, value):
        self.value = wrap(value)

    @property
    def type(self):
        return ObjectType.INTEGER

    def inspect(self):
        return str(self.value)

    def __eq__(self, other):
        return isinstance(other, Integer) and self.value == other.value

    def __hash__(self):
        return hash(self.value)


class Boolean(Object):
    """Use TRUE/FALSE (or native_bool) rather than instantiating this class."""

    def __init__(self, value):
        self.value = value

    @property
    def type(self):
        return ObjectType.BOOLEAN

    def inspect(self):
        return "true" if self.value else "false"


class Null(Object):
    """Use NULL rather than instantiating this class."""

    @property
    def type(self):
        return ObjectType.NULL

    def inspect(self):
        return "null"


TRUE = Boolean(True)
FALSE = Boolean(False)
NULL = Null()


def native_bool(value):
    """Returns the Boolean singleton for host bool value."""
    return TRUE if value else FALSE


class ReturnValue(Object):
    """Wraps the payload of a return statement while it propagates out of nested blocks. Never user-visible: function
    calls and the top-level program unwrap it.
    """

    def __init__(self, value):
        self.value = value

    @property
    def type(self):
        return ObjectType.RETURN_VALUE

    def inspect(self):
        return self.value.inspect()


class Error(Object):
    """Runtime error. Once produced, stops evaluation of the current statement sequence."""

    def __init__(self, msg, *args):
        self.message = msg.format(*args) if args else msg

    @property
    def type(self):
        return ObjectType.ERROR

    def inspect(self):
        return f"ERROR: {self.message}"

    def __eq__(self, other):
        return isinstance(other, Error) and self.message == other.message

    def __hash__(self):
        return hash(self.message)


class Function(Object):
    """Closure: parameters and body come from the FunctionLiteral, env is the Environment the literal was evaluated in
    (not the one it's called from). Free variables in body resolve against env.
    """

    def __init__(self, parameters, body, env):
        self.parameters = parameters
        self.body = body
        self.env = env

    @property
    def type(self):
        return ObjectType.FUNCTION

    def inspect(self):
        params = ", ".join(str(param) for param in self.parameters)
        return f"fn({params}) {self.body}"


def is_error(obj):
    return isinstance(obj, Error)


def is_truthy(obj):
    """Only FALSE and NULL are falsy. Every other object, including Integer 0, is truthy."""
    return obj is not FALSE and obj is not NULL
