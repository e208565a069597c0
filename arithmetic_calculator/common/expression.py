"""Expression tree for arithmetic expressions and its simplification."""
import math
from typing import List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from arithmetic_calculator.common.operators import BinaryOperator


def format_number(value: float) -> str:
    """
    Render a number in its canonical textual form.

    The shortest round-trip decimal representation is used, with a bare trailing ".0"
    stripped so that integral values print without a fractional part.

    Examples:
        - 3.0 -> "3"
        - 0.5 -> "0.5"
        - float("inf") -> "Infinity"

    :param float value: Number to render

    :return: Canonical text of the number
    :rtype: str
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"

    text = repr(value)
    if text.endswith(".0"):
        text = text[:-2]
    return text


class NumberLiteral(BaseModel):
    """
    Leaf of an expression tree.

    The source text is kept exactly as parsed ("007", ".5", "3.140"); the numeric value
    is parsed from it on demand.
    """

    model_config = ConfigDict(frozen=True)

    text: str = Field(..., min_length=1, description="Literal text as written in the source")

    @classmethod
    def from_value(cls, value: float) -> "NumberLiteral":
        """
        Create a literal holding the canonical text of a number.

        :param float value: Number to wrap

        :return: New literal
        :rtype: NumberLiteral
        """
        return cls(text=format_number(value))

    @property
    def value(self) -> float:
        """Numeric value of the literal text."""
        return float(self.text)

    def __eq__(self, other: object) -> bool:
        # Same text, or different spellings of the same number ("2" and "2.0")
        if not isinstance(other, NumberLiteral):
            return NotImplemented
        return self.text == other.text or self.value == other.value

    def __hash__(self) -> int:
        return hash(self.value)

    def __str__(self) -> str:
        return to_text(self)


class BinaryNode(BaseModel):
    """
    Internal node of an expression tree: ``left operator right``.

    The parser fills ``right`` last; every node that leaves the parser has all three
    fields set.
    """

    # Fields are assigned one at a time while parsing, so validate every assignment
    model_config = ConfigDict(validate_assignment=True)

    left: "Expression" = Field(..., description="Left-hand side sub-expression")
    operator: BinaryOperator = Field(..., description="Operator joining both sides")
    right: Optional["Expression"] = Field(default=None, description="Right-hand side sub-expression")

    @property
    def is_complete(self) -> bool:
        """Whether the right-hand side has been supplied."""
        return self.right is not None

    def __str__(self) -> str:
        return to_text(self)


Expression = Union[NumberLiteral, BinaryNode]

BinaryNode.model_rebuild()


def to_text(expression: Expression) -> str:
    """
    Serialize an expression as left text, operator symbol, right text.

    No spaces or parentheses are emitted: grouping is already encoded in the tree shape.
    A node still waiting for its right-hand side renders without it (e.g. "1+").
    The tree is walked with an explicit stack, so its depth is not bounded by the
    interpreter's recursion limit.

    :param Expression expression: Expression to serialize

    :return: Textual form of the expression
    :rtype: str
    """
    parts: List[str] = []
    # Holds expressions still to visit and operator symbols still to emit
    stack: List[Union[Expression, str]] = [expression]
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            parts.append(item)
        elif isinstance(item, NumberLiteral):
            parts.append(item.text)
        elif isinstance(item, BinaryNode):
            if item.right is not None:
                stack.append(item.right)
            stack.append(item.operator.symbol)
            stack.append(item.left)
        else:
            raise TypeError(f"Not an expression: {item!r}")
    return "".join(parts)


def _simplify_literal(literal: NumberLiteral) -> NumberLiteral:
    canonical = format_number(literal.value)
    if canonical == literal.text:
        return literal
    return NumberLiteral(text=canonical)


def _combine(node: BinaryNode, left: Expression, right: Expression) -> Expression:
    if isinstance(left, NumberLiteral) and isinstance(right, NumberLiteral):
        return NumberLiteral.from_value(node.operator.reduce(left.value, right.value))

    # Only reachable once non-numeric leaves exist
    if left is not node.left or right is not node.right:
        return BinaryNode(left=left, operator=node.operator, right=right)
    return node


def simplify(expression: Expression) -> Expression:
    """
    Reduce an expression tree bottom-up.

    Both children of a binary node are simplified first; when both end up as number
    literals the operator is applied and a new literal holding the result is returned.
    Division by zero yields an IEEE-754 infinity or NaN, never an error.

    The post-order walk uses an explicit stack of nodes plus a stack of simplified
    operands, so arbitrarily long operator chains are handled.

    :param Expression expression: Fully built expression tree

    :return: Simplified expression (a single literal for every parsable input)
    :rtype: Expression
    :raises ValueError: If a binary node is still missing its right-hand side
    """
    operands: List[Expression] = []
    # (node, whether its children have already been simplified)
    stack: List[Tuple[Expression, bool]] = [(expression, False)]
    while stack:
        current, children_done = stack.pop()

        if isinstance(current, NumberLiteral):
            operands.append(_simplify_literal(current))

        elif isinstance(current, BinaryNode):
            if children_done:
                right = operands.pop()
                left = operands.pop()
                operands.append(_combine(current, left, right))
            else:
                if current.right is None:
                    raise ValueError(f"Cannot simplify incomplete expression: {to_text(current)}")
                stack.append((current, True))
                stack.append((current.right, False))
                stack.append((current.left, False))

        else:
            raise TypeError(f"Not an expression: {current!r}")

    return operands.pop()
