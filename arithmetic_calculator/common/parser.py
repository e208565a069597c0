"""Parse arithmetic expressions into expression trees."""
from typing import List, Optional

from arithmetic_calculator.common.errors import (
    EmptyInput,
    InvalidLiteralStart,
    MissingFractionalDigit,
    MissingOperand,
    UnexpectedNumber,
    UnexpectedOperator,
    UnrecognizedCharacter,
)
from arithmetic_calculator.common.expression import (
    BinaryNode,
    Expression,
    NumberLiteral,
    simplify,
    to_text,
)
from arithmetic_calculator.common.operators import BinaryOperator


class CharacterCursor:
    """Forward-only cursor over the characters of a string."""

    def __init__(self, text: str) -> None:
        self._text = text
        self.position = 0

    @property
    def has_current(self) -> bool:
        return self.position < len(self._text)

    @property
    def current(self) -> Optional[str]:
        return self._text[self.position] if self.has_current else None

    def next(self) -> None:
        self.position += 1

    def take_current(self) -> str:
        """Return the current character and advance past it."""
        character = self._text[self.position]
        self.position += 1
        return character


class ExpressionParser:
    """
    Parse arithmetic expressions made of numbers and the operators + - * /.

    Design constraints:
        - No eval(), no dynamic code execution
        - Single forward pass over the characters, no recursion into a grammar

    Algorithm:
        Completed sub-expressions are held in ``pending``; operators that still wait for
        their right-hand side sit on a stack of incomplete BinaryNode objects. When a new
        operator arrives, every stacked node whose precedence is greater than or equal to
        the new one is completed with ``pending`` first. The ">=" (rather than ">") makes
        operators of equal precedence group from left to right.

    Examples:
        - "1+2*3" -> 1+(2*3)
        - "1-2-3" -> (1-2)-3
    """

    @staticmethod
    def is_number_start(character: Optional[str]) -> bool:
        """
        Determine if a character can start a number literal.

        :param str character: Character to check

        :return: True for an ASCII digit or '.', else False
        :rtype: bool
        """
        return character is not None and (character == "." or ExpressionParser._is_digit(character))

    @staticmethod
    def _is_digit(character: Optional[str]) -> bool:
        # str.isdigit() also accepts non-ASCII digits such as '²'
        return character is not None and "0" <= character <= "9"

    @staticmethod
    def read_number(cursor: CharacterCursor) -> NumberLiteral:
        """
        Consume the longest number literal starting at the cursor.

        A literal is zero or more digits, optionally followed by '.' and one or more
        digits. Its text is kept verbatim.

        :param CharacterCursor cursor: Cursor positioned on the first character of the literal

        :return: Parsed literal
        :rtype: NumberLiteral
        :raises InvalidLiteralStart: If the cursor is not on a digit or '.'
        :raises MissingFractionalDigit: If the decimal point is not followed by a digit
        """
        start = cursor.position
        if not ExpressionParser.is_number_start(cursor.current):
            raise InvalidLiteralStart(cursor.current, start)

        characters: List[str] = []
        while ExpressionParser._is_digit(cursor.current):
            characters.append(cursor.take_current())

        if cursor.current == ".":
            characters.append(cursor.take_current())
            if not ExpressionParser._is_digit(cursor.current):
                raise MissingFractionalDigit("".join(characters), cursor.position)
            while ExpressionParser._is_digit(cursor.current):
                characters.append(cursor.take_current())

        return NumberLiteral(text="".join(characters))

    @staticmethod
    def parse(text: str) -> Expression:
        """
        Parse an arithmetic expression into an expression tree.

        Whitespace is allowed between any two tokens and ignored.

        :param str text: Arithmetic expression string

        :return: Root of the expression tree
        :rtype: Expression
        :raises ParseError: If the expression is empty or malformed
        """
        if not text or text.isspace():
            raise EmptyInput()

        cursor = CharacterCursor(text)
        pending: Optional[Expression] = None
        stack: List[BinaryNode] = []

        while cursor.has_current:
            character = cursor.current
            position = cursor.position
            current_operator = BinaryOperator.from_symbol(character)

            if ExpressionParser.is_number_start(character):
                number = ExpressionParser.read_number(cursor)
                if pending is not None:
                    raise UnexpectedNumber(number.text, position)
                pending = number

            elif current_operator is not None:
                cursor.next()
                if pending is None:
                    raise UnexpectedOperator(current_operator.symbol, position)

                # Fold every waiting node that binds at least as tightly as the new operator
                while stack and stack[-1].operator.precedence >= current_operator.precedence:
                    previous = stack.pop()
                    previous.right = pending
                    pending = previous

                stack.append(BinaryNode(left=pending, operator=current_operator))
                pending = None

            elif character.isspace():
                cursor.next()

            else:
                raise UnrecognizedCharacter(character, position)

        # Complete the remaining nodes, innermost first
        while stack:
            incomplete = stack.pop()
            if pending is None:
                raise MissingOperand(to_text(incomplete))
            incomplete.right = pending
            pending = incomplete

        return pending

    @staticmethod
    def evaluate(text: str) -> float:
        """
        Parse and simplify an arithmetic expression, returning its numeric value.

        :param str text: Arithmetic expression string

        :return: Computed result as float
        :rtype: float
        :raises ParseError: If the expression is empty or malformed
        """
        result = simplify(ExpressionParser.parse(text))
        if not isinstance(result, NumberLiteral):
            raise ValueError(f"Expression does not reduce to a number: {to_text(result)}")
        return result.value


parse = ExpressionParser.parse
