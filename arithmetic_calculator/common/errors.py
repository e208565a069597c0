"""Errors raised while parsing arithmetic expressions."""
from typing import Optional


class ParseError(ValueError):
    """
    Base class for every parse failure.

    Parse errors are terminal: ``parse`` never returns a partial tree.
    """

    def __init__(self, message: str, position: Optional[int] = None) -> None:
        if position is not None:
            super().__init__(f"{message} (at position {position})")
        else:
            super().__init__(message)
        self.message = message
        self.position = position


class EmptyInput(ParseError):
    """The input holds no expression at all."""

    def __init__(self) -> None:
        super().__init__("Missing expression.")


class UnexpectedNumber(ParseError):
    """A number literal follows another one with no operator between them."""

    def __init__(self, literal: str, position: int) -> None:
        super().__init__(f"Expected operator, but found number ({literal}) instead.", position)
        self.literal = literal


class UnexpectedOperator(ParseError):
    """An operator has no left operand (leading or doubled operator)."""

    def __init__(self, symbol: str, position: int) -> None:
        super().__init__(f"Expected number, but found operator ({symbol}) instead.", position)
        self.symbol = symbol


class UnrecognizedCharacter(ParseError):
    """A character is not a digit, '.', operator symbol or whitespace."""

    def __init__(self, character: str, position: int) -> None:
        super().__init__(f"Unrecognized expression character: {character!r}", position)
        self.character = character


class MissingFractionalDigit(ParseError):
    """A decimal point is not followed by at least one digit."""

    def __init__(self, literal: str, position: int) -> None:
        super().__init__(f"Missing fractional digit after decimal point in {literal!r}.", position)
        self.literal = literal


class MissingOperand(ParseError):
    """The input ends while an operator still waits for its right-hand side."""

    def __init__(self, incomplete: str) -> None:
        super().__init__(f"Missing right-hand side number for {incomplete}.")
        self.incomplete = incomplete


class InvalidLiteralStart(ParseError):
    """The number reader was invoked on a character that cannot start a literal."""

    def __init__(self, character: Optional[str], position: int) -> None:
        if character is None:
            message = "Missing number start character ('.' or digit)."
        else:
            message = f"Expected number start character ('.' or digit), but found {character!r} instead."
        super().__init__(message, position)
        self.character = character
