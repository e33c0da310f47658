"""Core lexer for unit-aware calculator expressions.

Expressions such as ``(1 + 2.5in) * 3pt`` are split into numbers, the four
arithmetic operators, parentheses and the ``in``/``pt`` unit suffixes.
Whitespace is removed before lexing and never produces a token.

Lexing runs in two passes over the cleaned text. The first pass checks
that the whole string can be covered by recognized symbols and raises
:class:`UnsupportedTokenError` on the first gap; only then does the second
pass collect tokens, so a caller never sees a truncated stream.
"""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Iterator, List, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")

# Individual symbol groups, combined below in precedence order
NUMBER_PATTERN = r"\d+(?:\.\d+)?"
OPERATOR_PATTERN = r"[+\-*/]"
PAREN_PATTERN = r"[()]"
UNIT_PATTERN = r"in|pt"

CALC_PATTERN = re.compile(
    "|".join(
        f"(?:{pattern})"
        for pattern in (NUMBER_PATTERN, OPERATOR_PATTERN, PAREN_PATTERN, UNIT_PATTERN)
    ),
    re.ASCII,
)


class TokenKind(Enum):
    """Symbol categories; the value is the fixed surface form, if any."""

    NUMBER = None
    PLUS = "+"
    MINUS = "-"
    TIMES = "*"
    DIVIDE = "/"
    L_PAREN = "("
    R_PAREN = ")"
    INCH = "in"
    POINT = "pt"

    @property
    def literal(self) -> Optional[str]:
        """Fixed surface form of the kind, ``None`` for numbers."""
        return self.value

    @property
    def is_unit(self) -> bool:
        return self in (TokenKind.INCH, TokenKind.POINT)

    @property
    def is_operator(self) -> bool:
        return self in (
            TokenKind.PLUS, TokenKind.MINUS, TokenKind.TIMES, TokenKind.DIVIDE
        )


LITERAL_KINDS: Mapping[str, TokenKind] = MappingProxyType({
    kind.literal: kind for kind in TokenKind if kind.literal is not None
})


class LexerError(Exception):
    """Base class for errors raised while lexing an expression."""


class UnsupportedTokenError(LexerError):
    """Raised when the input contains text no symbol pattern recognizes.

    Attributes:
        offending_text: The unrecognized run of characters
        offset: Position of that run in the whitespace-stripped input
    """

    def __init__(self, offending_text: str, offset: Optional[int] = None) -> None:
        super().__init__(f"Unsupported token: {offending_text}")
        self.offending_text = offending_text
        self.offset = offset


@dataclass(frozen=True)
class Token:
    """A classified fragment of the input.

    ``text`` may be left out for fixed-literal kinds; ``offset`` is the
    position in the cleaned input and takes no part in equality.
    """

    kind: TokenKind
    text: Optional[str] = None
    offset: Optional[int] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        """Validate token values."""
        if self.kind is TokenKind.NUMBER and not self.text:
            raise ValueError("NUMBER tokens must carry their text")
        if self.offset is not None and self.offset < 0:
            raise ValueError("Offset must be >= 0")

    @property
    def lexeme(self) -> str:
        """Matched text, falling back to the kind's surface form."""
        if self.text is not None:
            return self.text
        return self.kind.literal or ""

    def as_pair(self) -> Tuple[TokenKind, Optional[str]]:
        return (self.kind, self.text)

    def __str__(self) -> str:
        return f"{self.lexeme} {self.kind.name}"


@dataclass(frozen=True)
class TokenStream:
    """Immutable, ordered result of one tokenization call."""

    tokens: Tuple[Token, ...] = ()
    source: str = ""

    def __len__(self) -> int:
        return len(self.tokens)

    def __iter__(self) -> Iterator[Token]:
        return iter(self.tokens)

    def __getitem__(self, index: int) -> Token:
        return self.tokens[index]

    def __bool__(self) -> bool:
        return bool(self.tokens)

    def to_pairs(self) -> List[Tuple[TokenKind, Optional[str]]]:
        """List the stream as ``(kind, text)`` pairs."""
        return [token.as_pair() for token in self.tokens]

    def reconstruct(self) -> str:
        """Concatenate the lexemes; equals ``source`` for any lexed stream."""
        return "".join(token.lexeme for token in self.tokens)


def clean_input(text: str) -> str:
    """Trim the input and delete every whitespace character."""
    return _WHITESPACE.sub("", text.strip())


def find_unsupported(cleaned: str) -> Optional[Tuple[int, str]]:
    """Locate the first run of characters no symbol pattern covers.

    The cleaned input is walked with anchored matches; the first position
    where nothing matches opens the unsupported run, which continues up to
    the next position where some pattern matches again.

    Returns:
        ``(offset, text)`` of the unsupported run, or ``None`` when the
        whole input is covered
    """
    position = 0
    length = len(cleaned)
    while position < length:
        match = CALC_PATTERN.match(cleaned, position)
        if match is not None:
            position = match.end()
            continue

        end = position + 1
        while end < length and CALC_PATTERN.match(cleaned, end) is None:
            end += 1
        return position, cleaned[position:end]
    return None


def classify(text: str, offset: Optional[int] = None) -> Token:
    """Turn one matched run into a token using the literal table."""
    kind = LITERAL_KINDS.get(text)
    if kind is not None:
        return Token(kind, text, offset)
    return Token(TokenKind.NUMBER, text, offset)


def tokenize(text: str) -> TokenStream:
    """Tokenize a calculator expression.

    Args:
        text: Raw expression, whitespace allowed anywhere

    Returns:
        TokenStream in order of appearance; empty for blank input

    Raises:
        UnsupportedTokenError: If any part of the input is unrecognized
    """
    cleaned = clean_input(text)

    unsupported = find_unsupported(cleaned)
    if unsupported is not None:
        offset, offending = unsupported
        logger.debug(
            "Rejected expression with unsupported token",
            extra={
                "component": "lexer",
                "offending_text": offending,
                "offset": offset,
            }
        )
        raise UnsupportedTokenError(offending, offset)

    tokens = tuple(
        classify(match.group(), match.start())
        for match in CALC_PATTERN.finditer(cleaned)
    )

    logger.debug(
        "Tokenized expression",
        extra={
            "component": "lexer",
            "content_length": len(cleaned),
            "token_count": len(tokens),
        }
    )
    return TokenStream(tokens=tokens, source=cleaned)


class Lexer:
    """Object wrapper that lexes its input on construction.

    >>> [str(token) for token in Lexer("6+4").get_token_list()]
    ['6 NUMBER', '+ PLUS', '4 NUMBER']
    """

    def __init__(self, text: str) -> None:
        self._stream = tokenize(text)

    @property
    def tokens(self) -> TokenStream:
        return self._stream

    @property
    def source(self) -> str:
        return self._stream.source

    def get_token_list(self) -> Tuple[Token, ...]:
        """Snapshot of every token in order."""
        return self._stream.tokens

    def __iter__(self) -> Iterator[Token]:
        return iter(self._stream)

    def __len__(self) -> int:
        return len(self._stream)
