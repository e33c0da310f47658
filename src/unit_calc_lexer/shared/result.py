"""Diagnostic and metric types attached to tokenization results.

These objects carry everything a caller may want to know about a
tokenization run beyond the tokens themselves: what went wrong, how long
it took and what kinds of symbols were seen.
"""

import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, Optional


class DiagnosticSeverity(Enum):
    """Severity levels for diagnostic entries."""

    DEBUG = auto()
    INFO = auto()
    WARNING = auto()
    ERROR = auto()


@dataclass
class DiagnosticEntry:
    """Single diagnostic entry with context information."""

    severity: DiagnosticSeverity
    message: str
    component: str
    offset: Optional[int] = None
    details: Optional[Dict[str, Any]] = None
    timestamp: float = field(default_factory=time.time)
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate diagnostic entry."""
        if not self.message:
            raise ValueError("Diagnostic message cannot be empty")
        if not self.component:
            raise ValueError("Diagnostic component cannot be empty")
        if self.offset is not None and self.offset < 0:
            raise ValueError("Diagnostic offset must be >= 0")

    def to_dict(self) -> Dict[str, Any]:
        """Plain-dict view used by the CLI output formatters."""
        return {
            "severity": self.severity.name,
            "message": self.message,
            "component": self.component,
            "offset": self.offset,
        }


@dataclass
class PerformanceMetrics:
    """Timing and volume counters for a tokenization run."""

    processing_time_ms: float = 0.0
    characters_processed: int = 0
    tokens_generated: int = 0

    @property
    def characters_per_second(self) -> float:
        """Calculate characters processed per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.characters_processed * 1000.0) / self.processing_time_ms

    @property
    def tokens_per_second(self) -> float:
        """Calculate tokens generated per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.tokens_generated * 1000.0) / self.processing_time_ms


@dataclass
class TokenizationMetadata:
    """Summary of the symbols produced by a tokenization run."""

    total_tokens: int = 0
    number_tokens: int = 0
    unit_tokens: int = 0
    kind_distribution: Dict[str, int] = field(default_factory=dict)

    @property
    def unit_ratio(self) -> float:
        """Share of numbers that are followed by an explicit unit."""
        if self.number_tokens == 0:
            return 0.0
        return self.unit_tokens / self.number_tokens

    def add_kind(self, kind_name: str) -> None:
        """Count one more token of the given kind."""
        self.kind_distribution[kind_name] = (
            self.kind_distribution.get(kind_name, 0) + 1
        )
