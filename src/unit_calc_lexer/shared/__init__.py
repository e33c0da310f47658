"""Shared utilities for calculator expression tokenization.

This module provides the configuration objects, result types and logging
helpers used by the tokenization and command-line layers.
"""

from .result import (
    DiagnosticEntry,
    DiagnosticSeverity,
    PerformanceMetrics,
    TokenizationMetadata,
)
from .config import (
    ConfigError,
    ConfigValidationError,
    FilterConfig,
    FilterMode,
    TokenizationConfig,
)
from .logging import (
    CorrelationLogger,
    get_logger,
)

__all__ = [
    "DiagnosticEntry",
    "DiagnosticSeverity",
    "PerformanceMetrics",
    "TokenizationMetadata",
    "ConfigError",
    "ConfigValidationError",
    "FilterConfig",
    "FilterMode",
    "TokenizationConfig",
    "CorrelationLogger",
    "get_logger",
]
