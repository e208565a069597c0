"""Fixed catalog of the binary operators understood by the calculator."""
import math
import operator
from enum import Enum
from typing import Callable, Dict, Optional, Tuple

# Type alias for operator functions (taking two floats, returning a float)
OperatorFn = Callable[[float, float], float]


def _divide(lhs: float, rhs: float) -> float:
    """
    Divide following IEEE-754 rules instead of raising ZeroDivisionError.

    :param float lhs: Dividend
    :param float rhs: Divisor

    :return: Quotient, or +/-inf / nan when the divisor is zero
    :rtype: float
    """
    if rhs == 0.0:
        if lhs == 0.0 or math.isnan(lhs):
            return math.nan
        # Sign of the infinity is the XOR of both operand signs (signed zero included)
        return math.copysign(math.inf, lhs) * math.copysign(1.0, rhs)
    return operator.truediv(lhs, rhs)


class BinaryOperator(Enum):
    """
    Binary operator with a display symbol and a precedence rank.

    Precedence values only matter relative to each other: a higher rank binds tighter.
    """

    PLUS = ("+", 100)
    MINUS = ("-", 100)
    TIMES = ("*", 200)
    DIVIDED_BY = ("/", 200)

    def __init__(self, symbol: str, precedence: int) -> None:
        self.symbol = symbol
        self.precedence = precedence

    def reduce(self, lhs: float, rhs: float) -> float:
        """
        Apply this operator to two numbers.

        :param float lhs: Left-hand side operand
        :param float rhs: Right-hand side operand

        :return: Result of the operation
        :rtype: float
        """
        return _FUNCTIONS[self.symbol](lhs, rhs)

    @classmethod
    def from_symbol(cls, character: str) -> Optional["BinaryOperator"]:
        """
        Look up the operator whose symbol is the given character.

        :param str character: Candidate operator character

        :return: Matching operator, or None when the character is not an operator
        :rtype: Optional[BinaryOperator]
        """
        return _BY_SYMBOL.get(character)

    def __str__(self) -> str:
        return self.symbol


# Mapping of operator symbols to their reducing function
_FUNCTIONS: Dict[str, OperatorFn] = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": _divide,
}

OPERATORS: Tuple[BinaryOperator, ...] = tuple(BinaryOperator)

_BY_SYMBOL: Dict[str, BinaryOperator] = {op.symbol: op for op in OPERATORS}
