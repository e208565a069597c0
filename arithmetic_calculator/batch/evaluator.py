"""Evaluate a file of arithmetic expressions, one result per line."""
from pathlib import Path
from typing import List

from pydantic import BaseModel, ConfigDict, Field, FilePath

from arithmetic_calculator.batch.reader import read_expressions
from arithmetic_calculator.common.errors import ParseError
from arithmetic_calculator.common.expression import simplify, to_text
from arithmetic_calculator.common.logger import logger
from arithmetic_calculator.common.models import EvaluationRequest, EvaluationResult
from arithmetic_calculator.common.parser import parse


def evaluate_request(request: EvaluationRequest) -> EvaluationResult:
    """
    Evaluate a single expression and capture either its result or its parse error.

    :param EvaluationRequest request: Expression to evaluate

    :return: Outcome of the evaluation
    :rtype: EvaluationResult
    """
    try:
        result = to_text(simplify(parse(request.expression)))
    except ParseError as exc:
        logger.error(
            f"🧮❌ Line {request.line_number} failed: {exc}\n"
            f"Invalid arithmetic expression, could not evaluate: {request.expression!r}"
        )
        return EvaluationResult(
            expression=request.expression, line_number=request.line_number, error=str(exc)
        )

    logger.info(f"🧮✅ Line {request.line_number}: {request.expression} = {result}")
    return EvaluationResult(
        expression=request.expression, line_number=request.line_number, result=result
    )


class BatchEvaluator(BaseModel):
    """
    Evaluate every expression of an input file or archive.

    Features:
        - Reads plain .txt files and .zip, .tar.xz or .7z archives.
        - Each line is evaluated independently; a malformed line never stops the batch.
        - Results are written and flushed as soon as each line is done.
    """

    # Paths are fixed for the lifetime of a batch
    model_config = ConfigDict(frozen=True)

    input_file: FilePath = Field(..., description="Text file or archive holding one expression per line")
    output_file: Path = Field(..., description="Path to write computation results")

    def run(self) -> List[EvaluationResult]:
        """
        Evaluate all expressions and write one result line per expression.

        :return: Outcomes in input order
        :rtype: List[EvaluationResult]
        :raises ValueError: If the input archive is unsupported or holds no .txt file
        """
        logger.info(f"📄 Evaluating expressions from {self.input_file}")
        expressions: List[str] = read_expressions(self.input_file)
        results: List[EvaluationResult] = []

        with self.output_file.open("w", encoding="utf-8") as f_out:
            for line_number, expr in enumerate(expressions, start=1):
                outcome = evaluate_request(EvaluationRequest(expression=expr, line_number=line_number))
                results.append(outcome)
                f_out.write(f"{outcome.to_line()}\n")
                f_out.flush()

        failed = sum(1 for outcome in results if not outcome.succeeded)
        logger.info(f"📄✅ {len(results)} expressions evaluated ({failed} failed), results in {self.output_file}")
        return results


def build_output_path(input_path: Path) -> Path:
    """
    Construct the default results path for an input file.

    - Preserves the original folder
    - Replaces dots in extensions with underscores
    - Appends '_results.txt' at the end

    Examples
    --------
    input: resources/operations.7z
    output: resources/operations_7z_results.txt

    :param input_path: Path to the input file
    :return: Path to the output file
    """
    # Path.stem keeps inner suffixes ("ops.tar" for "ops.tar.xz"), so strip them all
    base = input_path.name[: -len("".join(input_path.suffixes))] if input_path.suffixes else input_path.name
    suffix_safe = "".join(input_path.suffixes).replace(".", "_")
    return input_path.with_name(f"{base}{suffix_safe}_results.txt")
