"""Pydantic models for evaluation requests and results."""
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class EvaluationRequest(BaseModel):
    """Represents a single arithmetic expression to evaluate."""

    expression: str = Field(..., description="Arithmetic expression as a string")
    line_number: int = Field(default=1, ge=1, description="Line number in the input file")

    @field_validator("expression")
    def expression_must_not_be_empty(cls, v: str) -> str:
        """Ensure that the expression is not empty."""
        if not v.strip():
            raise ValueError("Expression cannot be empty")
        return v


class EvaluationResult(BaseModel):
    """Represents the outcome of an evaluated arithmetic expression."""

    expression: str = Field(..., description="Original arithmetic expression")
    line_number: int = Field(default=1, ge=1, description="Line number in the input file")
    result: Optional[str] = Field(default=None, description="Simplified expression text")
    error: Optional[str] = Field(default=None, description="Error message if evaluation failed")

    @model_validator(mode="after")
    def exactly_one_outcome(self) -> "EvaluationResult":
        """Ensure that either a result or an error is set, never both."""
        if (self.result is None) == (self.error is None):
            raise ValueError("Exactly one of 'result' and 'error' must be set")
        return self

    @property
    def succeeded(self) -> bool:
        return self.error is None

    def to_line(self) -> str:
        """
        Format the outcome as one line of the results file.

        :return: "<expression> = <result>" or "<expression> -> ERROR: <error>"
        :rtype: str
        """
        if self.succeeded:
            return f"{self.expression} = {self.result}"
        return f"{self.expression} -> ERROR: {self.error}"
