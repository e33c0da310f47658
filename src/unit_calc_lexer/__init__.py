"""Unit-aware calculator lexer.

Tokenizes arithmetic expressions whose numbers may carry inch (``in``) or
point (``pt``) unit suffixes.

Progressive API Disclosure:
- Level 1: Simple function - tokenize()
- Level 2: Object wrapper - Lexer
- Level 3: Configured tokenizer with result objects - CalculatorTokenizer
"""

__version__ = "0.1.0"
__author__ = "Unit Calc Lexer Team"

from .shared.config import TokenizationConfig
from .tokenization import (
    CalculatorTokenizer,
    Lexer,
    LexerError,
    Token,
    TokenFilter,
    TokenizationResult,
    TokenKind,
    TokenStream,
    UnsupportedTokenError,
    tokenize,
)

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1 and 2
    "tokenize",
    "Lexer",

    # Level 3
    "CalculatorTokenizer",
    "TokenizationConfig",
    "TokenizationResult",
    "TokenFilter",

    # Data types and errors
    "Token",
    "TokenKind",
    "TokenStream",
    "LexerError",
    "UnsupportedTokenError",
]
