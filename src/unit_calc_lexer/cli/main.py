"""Main CLI entry point for the unit-calc-lex command-line tool.

Tokenizes or checks calculator expressions given on the command line and
reports the results as JSON, CSV or plain text.
"""

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, List, Optional

from unit_calc_lexer import __version__
from unit_calc_lexer.shared.config import ConfigError, TokenizationConfig
from unit_calc_lexer.shared.logging import get_logger
from unit_calc_lexer.tokenization import CalculatorTokenizer

class CLIConfig:
    """Configuration management for CLI operations."""

    def __init__(self):
        self.tokenization_config = TokenizationConfig.lenient()
        self.output_format = "json"

    @classmethod
    def from_file(cls, config_path: Path) -> "CLIConfig":
        """Load CLI configuration from a JSON file.

        A missing file yields the defaults; an unreadable or invalid one
        raises ConfigError.
        """
        config = cls()
        if not config_path.exists():
            return config

        try:
            with config_path.open() as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"Could not load config file {config_path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {config_path} must contain a JSON object")

        preset = data.get("preset")
        if preset == "strict":
            config.tokenization_config = TokenizationConfig.strict()
        elif preset not in (None, "lenient"):
            raise ConfigError(f"Unknown preset: {preset}")

        if "tokenization" in data:
            merged = config.tokenization_config.to_dict()
            merged.update(data["tokenization"])
            config.tokenization_config = TokenizationConfig.from_dict(merged)

        config.output_format = data.get("output_format", config.output_format)
        return config


class ExpressionProcessor:
    """Core expression processing logic for CLI operations."""

    def __init__(self, config: CLIConfig):
        self.config = config
        # The CLI always reports failures per expression
        self.tokenizer = CalculatorTokenizer(
            config=replace(config.tokenization_config, raise_on_error=False)
        )
        self.logger = get_logger(__name__, None, "cli_processor")

    def process_expression(self, expression: str) -> Dict[str, Any]:
        """Tokenize one expression and return a printable summary."""
        try:
            result = self.tokenizer.tokenize(expression)
        except ValueError as e:
            self.logger.warning("Expression refused", extra={"error": str(e)})
            return {
                "expression": expression,
                "success": False,
                "tokens": [],
                "processing_time_ms": 0.0,
                "diagnostics": [],
                "error": str(e),
                "offending_text": None,
                "offset": None,
            }

        record: Dict[str, Any] = {
            "expression": expression,
            "success": result.success,
            "tokens": [
                {"kind": token.kind.name, "text": token.lexeme, "offset": token.offset}
                for token in self.tokenizer.token_filter.apply_filters(result.tokens)
            ],
            "processing_time_ms": result.performance.processing_time_ms,
            "diagnostics": [diag.to_dict() for diag in result.diagnostics],
        }
        if result.error is not None:
            record["error"] = str(result.error)
            record["offending_text"] = result.error.offending_text
            record["offset"] = result.error.offset
        return record

    def process_all(self, expressions: List[str]) -> List[Dict[str, Any]]:
        results = [self.process_expression(expression) for expression in expressions]
        failed = sum(1 for r in results if not r["success"])
        self.logger.info(
            "Processed expressions",
            extra={"total": len(results), "failed": failed}
        )
        return results


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="unit-calc-lex",
        description="Tokenize unit-aware calculator expressions"
    )

    parser.add_argument("--version", action="version", version=__version__)

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Tokenize command
    tokenize_parser = subparsers.add_parser("tokenize", help="Print expression tokens")
    tokenize_parser.add_argument(
        "expressions",
        nargs="+",
        help="Expressions to tokenize (quote them to keep spaces)"
    )
    tokenize_parser.add_argument(
        "--format", "-f",
        choices=["json", "csv", "text"],
        default=None,
        help="Output format (default: json)"
    )
    tokenize_parser.add_argument(
        "--config", "-c",
        type=Path,
        help="Configuration file path"
    )

    # Check command
    check_parser = subparsers.add_parser("check", help="Check expressions for unsupported tokens")
    check_parser.add_argument(
        "expressions",
        nargs="+",
        help="Expressions to check"
    )
    check_parser.add_argument(
        "--format", "-f",
        choices=["json", "text"],
        default="text",
        help="Output format"
    )

    # Global options
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Quiet output"
    )

    return parser


def _csv_quote(value: Optional[str]) -> str:
    """Quote a CSV field, doubling embedded quotes."""
    if value is None:
        return ""
    return '"' + value.replace('"', '""') + '"'


def _csv_field(value: Any) -> str:
    return "" if value is None else str(value)


def format_results(results: List[Dict[str, Any]], format_type: str) -> str:
    """Format tokenization results for output."""
    if format_type == "csv":
        if not results:
            return ""

        lines = ["expression,index,kind,text,offset"]
        for result in results:
            if not result["success"]:
                lines.append(
                    f"{_csv_quote(result['expression'])},,ERROR,"
                    f"{_csv_quote(result['offending_text'])},{_csv_field(result['offset'])}"
                )
                continue
            for index, token in enumerate(result["tokens"]):
                lines.append(
                    f"{_csv_quote(result['expression'])},{index},{token['kind']},"
                    f"{_csv_quote(token['text'])},{_csv_field(token['offset'])}"
                )
        return "\n".join(lines)

    elif format_type == "text":
        if not results:
            return "No results to display."

        lines = []
        for result in results:
            status = "✓" if result["success"] else "✗"
            lines.append(f"{status} {result['expression']}")
            if result["success"]:
                for token in result["tokens"]:
                    lines.append(f"   {token['text']} {token['kind']}")
            else:
                lines.append(f"   Error: {result['error']}")
            lines.append("")
        return "\n".join(lines)

    return json.dumps(results, indent=2)


def cmd_tokenize(args: argparse.Namespace) -> int:
    """Handle tokenize command."""
    config = CLIConfig()
    if args.config:
        try:
            config = CLIConfig.from_file(args.config)
        except ConfigError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 2

    output_format = args.format or config.output_format

    processor = ExpressionProcessor(config)
    results = processor.process_all(args.expressions)
    print(format_results(results, output_format))

    return 0 if all(r["success"] for r in results) else 1


def cmd_check(args: argparse.Namespace) -> int:
    """Handle check command."""
    processor = ExpressionProcessor(CLIConfig())
    results = []
    for expression in args.expressions:
        result = processor.process_expression(expression)
        entry = {"expression": expression, "valid": result["success"]}
        if not result["success"]:
            entry["offending_text"] = result["offending_text"]
            entry["offset"] = result["offset"]
        results.append(entry)

    if args.format == "json":
        print(json.dumps(results, indent=2))
    else:
        valid_count = sum(1 for r in results if r["valid"])
        print(f"Checked {len(results)} expressions, {valid_count} valid")
        print("-" * 50)
        for entry in results:
            status = "✓" if entry["valid"] else "✗"
            line = f"{status} {entry['expression']}"
            if not entry["valid"]:
                line += f"  (unsupported token: {entry['offending_text']})"
            print(line)

    return 0 if all(r["valid"] for r in results) else 1


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)
    elif args.quiet:
        logging.basicConfig(level=logging.ERROR)

    try:
        if args.command == "tokenize":
            return cmd_tokenize(args)
        elif args.command == "check":
            return cmd_check(args)
        else:
            print(f"Unknown command: {args.command}", file=sys.stderr)
            return 1

    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return 130  # Standard exit code for SIGINT


if __name__ == "__main__":
    sys.exit(main())
