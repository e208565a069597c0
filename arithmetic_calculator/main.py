"""
Command-line entrypoint of the calculator.

This script either:
- Evaluates the expression given as positional arguments and prints the result
- Evaluates every line of a text file or archive given with --file

Examples:
    arithmetic-calculator 1 + 2 '*' 3
    arithmetic-calculator --verbose "1/0"
    arithmetic-calculator --file resources/operations.7z
"""

import argparse
from pathlib import Path
import sys
from typing import List, Optional, TextIO

from pydantic import BaseModel, FilePath, ValidationError, model_validator

from arithmetic_calculator.batch.evaluator import BatchEvaluator, build_output_path
from arithmetic_calculator.common.errors import ParseError
from arithmetic_calculator.common.expression import simplify, to_text
from arithmetic_calculator.common.logger import configure_logging, logger
from arithmetic_calculator.common.parser import parse

APPLICATION_NAME = "arithmetic-calculator"
APPLICATION_DESCRIPTION = "Evaluate mathematical expressions and print the result."


class CliArgs(BaseModel):
    """
    Pydantic model used to validate CLI arguments.

    Attributes
    ----------
    expression : str
        Positional expression tokens joined with single spaces ("" when none were given).
    verbose : bool
        Whether to trace the raw and parsed expression on stderr.
    file_path : Optional[FilePath]
        File or archive holding one expression per line.
    output_path : Optional[Path]
        Where batch results are written.
    """

    expression: str = ""
    verbose: bool = False
    file_path: Optional[FilePath] = None
    output_path: Optional[Path] = None

    @model_validator(mode="after")
    def single_source(self) -> "CliArgs":
        """Ensure that an expression and an input file are not both given."""
        if self.expression and self.file_path is not None:
            raise ValueError("Give either an expression or --file, not both")
        if self.output_path is not None and self.file_path is None:
            raise ValueError("--output requires --file")
        return self

    @property
    def has_work(self) -> bool:
        return bool(self.expression) or self.file_path is not None


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argument parser of the application.

    :return: Configured parser
    :rtype: argparse.ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog=APPLICATION_NAME,
        description=APPLICATION_DESCRIPTION,
    )

    parser.add_argument(
        "expression",
        nargs="*",
        help="The expression to evaluate. Several arguments are joined with spaces.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Whether or not to show verbose logs.",
    )
    parser.add_argument(
        "-f",
        "--file",
        dest="file_path",
        help="Text file or .zip/.tar.xz/.7z archive with one expression per line.",
    )
    parser.add_argument(
        "-o",
        "--output",
        dest="output_path",
        help="Where to write batch results (default: <input>_results.txt next to the input).",
    )
    return parser


def parse_args(argv: Optional[List[str]] = None) -> CliArgs:
    """
    Parse and validate command-line arguments.

    :param argv: Arguments without the program name (defaults to sys.argv[1:])
    :return: Validated CLI arguments
    :rtype: CliArgs
    """
    parser = build_parser()
    args = parser.parse_intermixed_args(argv)

    try:
        return CliArgs(
            expression=" ".join(args.expression),
            verbose=args.verbose,
            file_path=args.file_path,
            output_path=args.output_path,
        )
    except ValidationError as exc:
        parser.error(str(exc))


def evaluate_expression(expression: str, output: TextIO) -> None:
    """
    Parse and simplify one expression and write the result followed by a newline.

    :param str expression: Expression text
    :param TextIO output: Stream receiving the result
    :raises ParseError: If the expression is malformed
    """
    logger.debug(f"Expression string: {expression!r}")

    parsed = parse(expression)
    logger.debug(f"Parsed expression: {to_text(parsed)!r}")

    output.write(f"{to_text(simplify(parsed))}\n")


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the calculator.

    :param argv: Arguments without the program name (defaults to sys.argv[1:])
    :return: Process exit status
    :rtype: int
    """
    cli_args = parse_args(argv)
    configure_logging(cli_args.verbose)

    if not cli_args.has_work:
        build_parser().print_help(sys.stdout)
        return 0

    if cli_args.file_path is not None:
        input_path = Path(cli_args.file_path)
        output_path = cli_args.output_path or build_output_path(input_path)
        try:
            results = BatchEvaluator(input_file=input_path, output_file=output_path).run()
        except ValueError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 1
        return 0 if all(result.succeeded for result in results) else 1

    try:
        evaluate_expression(cli_args.expression, sys.stdout)
    except ParseError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
