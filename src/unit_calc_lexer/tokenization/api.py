"""Result-object tokenization API with diagnostics and filtering.

:func:`~unit_calc_lexer.tokenization.tokenizer.tokenize` raises on bad
input. :class:`CalculatorTokenizer` wraps it for callers that prefer a
result object: failures are reported through ``success``, ``error`` and
diagnostics, unless the configuration asks for errors to propagate.
"""

import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set

from unit_calc_lexer.shared import (
    DiagnosticEntry,
    DiagnosticSeverity,
    PerformanceMetrics,
    TokenizationConfig,
    TokenizationMetadata,
    get_logger,
)
from unit_calc_lexer.shared.config import FilterMode

from .tokenizer import Token, TokenKind, TokenStream, UnsupportedTokenError, tokenize


@dataclass
class TokenizationResult:
    """Comprehensive result object for tokenization operations."""

    stream: TokenStream = field(default_factory=TokenStream)
    success: bool = True
    error: Optional[UnsupportedTokenError] = None

    metadata: TokenizationMetadata = field(default_factory=TokenizationMetadata)
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)
    performance: PerformanceMetrics = field(default_factory=PerformanceMetrics)

    source: str = ""
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Derive metadata from the stream."""
        if self.error is not None and self.success:
            raise ValueError("A result carrying an error cannot be successful")
        self._update_metadata()

    def _update_metadata(self) -> None:
        self.metadata.total_tokens = len(self.stream)
        self.metadata.number_tokens = 0
        self.metadata.unit_tokens = 0
        self.metadata.kind_distribution.clear()
        for token in self.stream:
            self.metadata.add_kind(token.kind.name)
            if token.kind is TokenKind.NUMBER:
                self.metadata.number_tokens += 1
            elif token.kind.is_unit:
                self.metadata.unit_tokens += 1

    @property
    def tokens(self) -> List[Token]:
        return list(self.stream)

    @property
    def token_count(self) -> int:
        return len(self.stream)

    def get_tokens_by_kind(self, kind: TokenKind) -> List[Token]:
        """Get all tokens of a specific kind."""
        return [token for token in self.stream if token.kind is kind]

    def add_diagnostic(
        self,
        severity: DiagnosticSeverity,
        message: str,
        component: str,
        offset: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        """Add a diagnostic entry."""
        self.diagnostics.append(DiagnosticEntry(
            severity=severity,
            message=message,
            component=component,
            offset=offset,
            details=details,
            correlation_id=self.correlation_id
        ))

    def has_errors(self) -> bool:
        """Check if result contains any error diagnostics."""
        return any(
            diag.severity is DiagnosticSeverity.ERROR for diag in self.diagnostics
        )

    def summary(self) -> Dict[str, Any]:
        """Get summary statistics for the tokenization result."""
        return {
            "success": self.success,
            "source": self.source,
            "token_count": self.token_count,
            "unit_tokens": self.metadata.unit_tokens,
            "kind_distribution": dict(self.metadata.kind_distribution),
            "processing_time_ms": self.performance.processing_time_ms,
            "error": str(self.error) if self.error else None,
            "diagnostics_count": len(self.diagnostics),
        }


class TokenFilter:
    """Token filtering and selection utilities."""

    def __init__(self, config: Optional[TokenizationConfig] = None) -> None:
        self.config = config or TokenizationConfig()
        self.filter_config = self.config.filtering

    def filter_by_kind(
        self,
        tokens: List[Token],
        kinds: Set[TokenKind]
    ) -> List[Token]:
        """Keep or drop tokens of the given kinds according to the filter mode."""
        if self.filter_config.mode is FilterMode.INCLUDE:
            return [token for token in tokens if token.kind in kinds]
        return [token for token in tokens if token.kind not in kinds]

    def filter_units(self, tokens: List[Token]) -> List[Token]:
        """Select the unit suffix tokens."""
        return [token for token in tokens if token.kind.is_unit]

    def apply_filters(
        self,
        tokens: List[Token],
        kinds: Optional[Set[TokenKind]] = None
    ) -> List[Token]:
        """Apply the kind filter and result limit.

        ``kinds`` overrides the configured kind names; with neither set,
        every token passes the kind filter.
        """
        if kinds is None and self.filter_config.token_kinds:
            kinds = {TokenKind[name] for name in self.filter_config.token_kinds}

        filtered = list(tokens)
        if kinds:
            filtered = self.filter_by_kind(filtered, kinds)

        max_results = self.filter_config.max_results
        if max_results is not None and len(filtered) > max_results:
            filtered = filtered[:max_results]
        return filtered


class CalculatorTokenizer:
    """Configured tokenizer returning :class:`TokenizationResult` objects."""

    def __init__(
        self,
        config: Optional[TokenizationConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize the tokenizer.

        Args:
            config: Configuration for tokenization behavior
            correlation_id: Optional correlation ID, overrides the config's
        """
        self.config = config or TokenizationConfig()
        self.correlation_id = correlation_id or self.config.correlation_id
        self.logger = get_logger(__name__, self.correlation_id, "calculator_tokenizer")
        self.token_filter = TokenFilter(self.config)

    def tokenize(self, text: str) -> TokenizationResult:
        """Tokenize an expression into a result object.

        Raises:
            ValueError: If the input exceeds ``max_input_length``
            UnsupportedTokenError: Only when ``raise_on_error`` is set
        """
        max_length = self.config.max_input_length
        if max_length is not None and len(text) > max_length:
            raise ValueError(
                f"Input length {len(text)} exceeds max_input_length {max_length}"
            )

        start_time = time.perf_counter()
        self.logger.debug("Starting tokenization", extra={"content_length": len(text)})

        try:
            stream = tokenize(text)
        except UnsupportedTokenError as e:
            self.logger.warning(
                "Tokenization rejected input",
                extra={"offending_text": e.offending_text, "offset": e.offset}
            )
            if self.config.raise_on_error:
                raise
            result = TokenizationResult(
                success=False,
                error=e,
                source=text,
                correlation_id=self.correlation_id
            )
            if self.config.enable_diagnostics:
                result.add_diagnostic(
                    DiagnosticSeverity.ERROR,
                    str(e),
                    "calculator_tokenizer",
                    offset=e.offset,
                    details={"offending_text": e.offending_text}
                )
            self._record_metrics(result, text, start_time)
            return result

        result = TokenizationResult(
            stream=stream,
            source=text,
            correlation_id=self.correlation_id
        )
        if self.config.enable_diagnostics and self.config.diagnostic_level in ("DEBUG", "INFO"):
            result.add_diagnostic(
                DiagnosticSeverity.INFO,
                f"Tokenized {len(stream)} tokens",
                "calculator_tokenizer"
            )
        self._record_metrics(result, text, start_time)

        self.logger.info(
            "Tokenization completed",
            extra={
                "token_count": result.token_count,
                "processing_time_ms": result.performance.processing_time_ms
            }
        )
        return result

    def tokenize_filtered(self, text: str) -> List[Token]:
        """Tokenize and apply the configured filters.

        Returns an empty list when the input is rejected in lenient mode.
        """
        result = self.tokenize(text)
        return self.token_filter.apply_filters(result.tokens)

    def is_valid(self, text: str) -> bool:
        """Check an expression without building a result object."""
        try:
            tokenize(text)
        except UnsupportedTokenError:
            return False
        return True

    def _record_metrics(
        self,
        result: TokenizationResult,
        text: str,
        start_time: float
    ) -> None:
        if not self.config.enable_metrics:
            return
        result.performance.processing_time_ms = (time.perf_counter() - start_time) * 1000
        result.performance.characters_processed = len(text)
        result.performance.tokens_generated = result.token_count
