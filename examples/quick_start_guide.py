#!/usr/bin/env python3
"""
Quick Start Guide for the unit-aware calculator lexer.

Shows the three API levels: the tokenize() function, the Lexer object and
the configured CalculatorTokenizer with result objects.
"""

import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from unit_calc_lexer import (
    CalculatorTokenizer,
    Lexer,
    TokenizationConfig,
    UnsupportedTokenError,
    tokenize,
)


def quick_start_example():
    """Tokenize a few expressions with each API level."""

    print("QUICK START - Unit Calc Lexer")
    print("=" * 30)

    print("\nStep 1: tokenize()")
    for token in tokenize("(1.5in + 2) * 3pt"):
        print(f"  {token}")

    print("\nStep 2: Lexer")
    try:
        Lexer("6a")
    except UnsupportedTokenError as e:
        print(f"  {e} (offset {e.offset})")

    print("\nStep 3: CalculatorTokenizer")
    tokenizer = CalculatorTokenizer(TokenizationConfig.lenient())
    for expression in ["3.5in*2", ".5pt"]:
        result = tokenizer.tokenize(expression)
        print(f"  {expression!r}: {result.summary()}")


def main():
    """Main function."""
    quick_start_example()
    return 0


if __name__ == "__main__":
    sys.exit(main())
