"""Test class ExpressionParser."""
import math

import pytest

from arithmetic_calculator.common.errors import (
    EmptyInput,
    InvalidLiteralStart,
    MissingFractionalDigit,
    MissingOperand,
    ParseError,
    UnexpectedNumber,
    UnexpectedOperator,
    UnrecognizedCharacter,
)
from arithmetic_calculator.common.expression import BinaryNode, NumberLiteral, to_text
from arithmetic_calculator.common.operators import BinaryOperator
from arithmetic_calculator.common.parser import CharacterCursor, ExpressionParser, parse, simplify


def node(left, op: BinaryOperator, right) -> BinaryNode:
    """Build a complete BinaryNode, wrapping plain strings as literals."""
    if isinstance(left, str):
        left = NumberLiteral(text=left)
    if isinstance(right, str):
        right = NumberLiteral(text=right)
    return BinaryNode(left=left, operator=op, right=right)


@pytest.mark.parametrize("text,expected_text,rest", [
    ("123", "123", None),
    ("007+1", "007", "+"),
    (".5", ".5", None),
    ("3.140 ", "3.140", " "),
    ("1.25.3", "1.25", "."),
])
def test_read_number(text: str, expected_text: str, rest) -> None:
    """read_number consumes the longest literal and keeps its text verbatim."""
    cursor = CharacterCursor(text)
    literal = ExpressionParser.read_number(cursor)
    assert literal.text == expected_text
    assert cursor.current == rest


@pytest.mark.parametrize("text", ["1.", "1.+2", "."])
def test_read_number_missing_fractional_digit(text: str) -> None:
    """A decimal point must be followed by a digit."""
    with pytest.raises(MissingFractionalDigit):
        ExpressionParser.read_number(CharacterCursor(text))


@pytest.mark.parametrize("text", ["+1", "a", ""])
def test_read_number_invalid_start(text: str) -> None:
    """read_number refuses to start on anything but a digit or '.'."""
    with pytest.raises(InvalidLiteralStart):
        ExpressionParser.read_number(CharacterCursor(text))


@pytest.mark.parametrize("character,expected", [
    ("0", True),
    ("9", True),
    (".", True),
    ("+", False),
    ("²", False),
    (None, False),
])
def test_is_number_start(character, expected: bool) -> None:
    """is_number_start accepts ASCII digits and '.' only."""
    assert ExpressionParser.is_number_start(character) == expected


@pytest.mark.parametrize("text,expected", [
    ("0", NumberLiteral(text="0")),
    ("123", NumberLiteral(text="123")),
    ("1+2", node("1", BinaryOperator.PLUS, "2")),
    ("1+2+3", node(node("1", BinaryOperator.PLUS, "2"), BinaryOperator.PLUS, "3")),
    ("1+2-3", node(node("1", BinaryOperator.PLUS, "2"), BinaryOperator.MINUS, "3")),
    ("1+2*3", node("1", BinaryOperator.PLUS, node("2", BinaryOperator.TIMES, "3"))),
    ("1*2-3", node(node("1", BinaryOperator.TIMES, "2"), BinaryOperator.MINUS, "3")),
    ("8/4/2", node(node("8", BinaryOperator.DIVIDED_BY, "4"), BinaryOperator.DIVIDED_BY, "2")),
    # Every stacked node that binds at least as tightly is folded, not just the top one,
    # so this is (1-(2*3))+4 rather than the single-fold shape 1-((2*3)+4)
    (
        "1-2*3+4",
        node(
            node("1", BinaryOperator.MINUS, node("2", BinaryOperator.TIMES, "3")),
            BinaryOperator.PLUS,
            "4",
        ),
    ),
])
def test_parse_tree_shape(text: str, expected) -> None:
    """parse groups by precedence, and left to right for equal precedence."""
    assert parse(text) == expected


@pytest.mark.parametrize("text,expected", [
    ("1", "1"),
    ("200", "200"),
    ("1+2", "3"),
    ("1 + 2", "3"),
    ("1-2", "-1"),
    ("1*2", "2"),
    ("1/2", "0.5"),
    ("1+2*3", "7"),
    ("1*2-3", "-1"),
    ("1+2-3", "0"),
    ("1-2-3", "-4"),
    ("8/4/2", "1"),
    ("1-2*3+4", "-1"),
    ("1-2*3-4", "-9"),
    ("1 * 4 / 2 + 7 * 3 - 8 + 16", "31"),
    ("1/0", "Infinity"),
    ("0/0", "NaN"),
    ("  .5\t*\n4 ", "2"),
])
def test_parse_and_simplify(text: str, expected: str) -> None:
    """Parsing then simplifying yields the canonical result text."""
    assert to_text(simplify(parse(text))) == expected


@pytest.mark.parametrize("text", ["1", "007", ".5", "3.140", "10.0"])
def test_single_literal_renders_canonically(text: str) -> None:
    """A lone literal simplifies to the canonical rendering of its value."""
    assert to_text(simplify(parse(text))) == repr(float(text)).removesuffix(".0")


@pytest.mark.parametrize("text", ["1+2*3", "1 - 2 - 3", "1*4/2+7*3-8+16", "2.5/.5"])
def test_simplify_is_idempotent(text: str) -> None:
    """Simplifying a simplified expression changes nothing."""
    once = simplify(parse(text))
    assert simplify(once) == once
    assert to_text(simplify(once)) == to_text(once)


@pytest.mark.parametrize("text", [
    "1 + 2 * 3",
    "007 - .5 / 3.140",
    "1*4/2+7*3-8+16",
    " 9 / 3 / 3 ",
])
def test_parse_round_trips_text(text: str) -> None:
    """Serializing a parsed tree reproduces the input without whitespace."""
    assert to_text(parse(text)) == "".join(text.split())


@pytest.mark.parametrize("text,error", [
    ("", EmptyInput),
    ("   ", EmptyInput),
    ("1 2", UnexpectedNumber),
    ("1+2 3", UnexpectedNumber),
    ("+1", UnexpectedOperator),
    ("1+*2", UnexpectedOperator),
    ("1+", MissingOperand),
    ("1+2*", MissingOperand),
    ("1.", MissingFractionalDigit),
    ("1.+2", MissingFractionalDigit),
    ("1@2", UnrecognizedCharacter),
    ("(1+2)", UnrecognizedCharacter),
    ("x", UnrecognizedCharacter),
])
def test_parse_errors(text: str, error) -> None:
    """Malformed expressions raise the matching ParseError subclass."""
    with pytest.raises(error):
        parse(text)


def test_parse_errors_are_value_errors() -> None:
    """Parse errors can be handled as ValueError."""
    with pytest.raises(ValueError):
        parse("1 +")


@pytest.mark.parametrize("text,position", [
    ("1 2", 2),
    ("1+*2", 2),
    ("1@2", 1),
])
def test_parse_error_position(text: str, position: int) -> None:
    """Errors report the zero-based position of the offending token."""
    with pytest.raises(ParseError) as exc_info:
        parse(text)
    assert exc_info.value.position == position


def test_missing_operand_message_names_expression() -> None:
    """MissingOperand names the incomplete sub-expression."""
    with pytest.raises(MissingOperand) as exc_info:
        parse("1 + 2 *")
    assert "2*" in str(exc_info.value)


def test_unrecognized_character_message() -> None:
    """UnrecognizedCharacter names the offending character."""
    with pytest.raises(UnrecognizedCharacter) as exc_info:
        parse("1@2")
    assert exc_info.value.character == "@"
    assert "'@'" in str(exc_info.value)


@pytest.mark.parametrize("expr,expected", [
    ("3 + 4", 7.0),
    ("10 - 2", 8.0),
    ("3 * 5", 15.0),
    ("8 / 2", 4.0),
    ("3 + 4 * 2", 11.0),
    ("7 + 3 * 2 - 4 / 2", 11.0),
])
def test_evaluate_valid(expr: str, expected: float) -> None:
    """evaluate returns the numeric result for valid expressions."""
    assert ExpressionParser.evaluate(expr) == expected


def test_evaluate_division_by_zero() -> None:
    """evaluate returns infinity for division by zero."""
    assert ExpressionParser.evaluate("1/0") == math.inf


@pytest.mark.parametrize("expr", ["3 +", "+ 3 4", "3 4 + 5", ""])
def test_evaluate_invalid_expression(expr: str) -> None:
    """evaluate raises ValueError for malformed expressions."""
    with pytest.raises(ValueError):
        ExpressionParser.evaluate(expr)


@pytest.mark.parametrize("text,expected", [
    ("+".join(["1"] * 5000), "5000"),
    ("-".join(["1"] * 5000), "-4998"),
    ("*".join(["1"] * 5000), "1"),
    (" + ".join(["2 * 3"] * 3000), "18000"),
], ids=["sum", "difference", "product", "mixed"])
def test_parse_and_simplify_long_chains(text: str, expected: str) -> None:
    """Chains of thousands of operators parse, serialize and simplify."""
    parsed = parse(text)
    assert to_text(parsed) == "".join(text.split())
    assert to_text(simplify(parsed)) == expected
