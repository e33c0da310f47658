"""Tokenization engine for unit-aware calculator expressions.

Key Components:
    tokenize: Pure function turning an expression into a TokenStream
    Lexer: Object wrapper that lexes its input on construction
    CalculatorTokenizer: Configured tokenizer returning result objects
    TokenKind: Enumeration of the supported symbol kinds
"""

from .api import (
    CalculatorTokenizer,
    TokenFilter,
    TokenizationResult,
)
from .tokenizer import (
    LITERAL_KINDS,
    Lexer,
    LexerError,
    Token,
    TokenKind,
    TokenStream,
    UnsupportedTokenError,
    tokenize,
)

__all__ = [
    "CalculatorTokenizer",
    "LITERAL_KINDS",
    "Lexer",
    "LexerError",
    "Token",
    "TokenFilter",
    "TokenKind",
    "TokenStream",
    "TokenizationResult",
    "UnsupportedTokenError",
    "tokenize",
]
