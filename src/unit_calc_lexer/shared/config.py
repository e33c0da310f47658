"""Configuration classes for calculator expression tokenization.

This module provides the configuration objects consumed by the
result-object tokenizer API and the command-line tool.
"""

import json
from dataclasses import dataclass, field, fields
from enum import Enum, auto
from typing import Any, Dict, List, Optional, Set

VALID_DIAGNOSTIC_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class FilterMode(Enum):
    """Token filtering mode options."""

    INCLUDE = auto()       # Keep only the listed kinds
    EXCLUDE = auto()       # Drop the listed kinds


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass
class FilterConfig:
    """Configuration for token filtering and selection.

    ``token_kinds`` holds kind names (``"NUMBER"``, ``"INCH"``...) rather
    than enum members so the configuration stays JSON friendly.
    """

    mode: FilterMode = FilterMode.INCLUDE
    token_kinds: Set[str] = field(default_factory=set)
    max_results: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate filter configuration."""
        if self.max_results is not None and self.max_results < 0:
            raise ValueError("max_results must be >= 0 or None")
        if isinstance(self.token_kinds, str):
            raise ValueError("token_kinds must be a collection of kind names, not a string")

        # Imported here to avoid a circular import with the tokenization package
        from unit_calc_lexer.tokenization.tokenizer import TokenKind

        names = set()
        for kind in self.token_kinds:
            if not isinstance(kind, str):
                raise ValueError(f"token_kinds entries must be strings, got {kind!r}")
            if kind.upper() not in TokenKind.__members__:
                raise ValueError(
                    f"Unknown token kind: {kind!r}, expected one of {list(TokenKind.__members__)}"
                )
            names.add(kind.upper())
        self.token_kinds = names


@dataclass
class TokenizationConfig:
    """Configuration for tokenization operations."""

    filtering: FilterConfig = field(default_factory=FilterConfig)

    correlation_id: Optional[str] = None
    enable_diagnostics: bool = True
    diagnostic_level: str = "INFO"
    enable_metrics: bool = True
    raise_on_error: bool = False
    max_input_length: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate tokenization configuration."""
        if self.diagnostic_level not in VALID_DIAGNOSTIC_LEVELS:
            raise ValueError(
                f"diagnostic_level must be one of {list(VALID_DIAGNOSTIC_LEVELS)}"
            )
        if self.max_input_length is not None and self.max_input_length <= 0:
            raise ValueError("max_input_length must be > 0 or None")

    @classmethod
    def strict(cls) -> "TokenizationConfig":
        """Create configuration that propagates lexer errors to the caller."""
        config = cls()
        config.raise_on_error = True
        config.diagnostic_level = "WARNING"
        return config

    @classmethod
    def lenient(cls) -> "TokenizationConfig":
        """Create configuration that reports errors through result objects."""
        return cls()  # Default configuration is lenient

    def validate(self) -> None:
        """Re-run validation after fields were mutated in place."""
        self.filtering.__post_init__()
        self.__post_init__()

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        def _to_plain(obj: Any) -> Any:
            if hasattr(obj, "__dataclass_fields__"):
                return {f.name: _to_plain(getattr(obj, f.name)) for f in fields(obj)}
            if isinstance(obj, Enum):
                return obj.name
            if isinstance(obj, set):
                return sorted(obj)
            return obj

        result = _to_plain(self)
        if not isinstance(result, dict):
            raise ConfigValidationError("Configuration serialization failed")
        return result

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TokenizationConfig":
        """Create configuration from dictionary.

        Unknown keys are rejected so that typos in configuration files do
        not go unnoticed.

        Raises:
            ConfigValidationError: If a key is unknown or a value is invalid
        """
        known = {f.name for f in fields(cls)}
        for key in data:
            if key not in known:
                raise ConfigValidationError(
                    f"Unknown configuration field: {key}",
                    field_name=key,
                    suggestions=sorted(known),
                )

        values = dict(data)
        try:
            filtering = values.pop("filtering", None)
            if filtering is not None:
                filtering = dict(filtering)
                if isinstance(filtering.get("mode"), str):
                    filtering["mode"] = FilterMode[filtering["mode"].upper()]
                values["filtering"] = FilterConfig(**filtering)
            return cls(**values)
        except (KeyError, TypeError, ValueError) as e:
            raise ConfigValidationError(f"Invalid configuration: {e}") from e

    @classmethod
    def from_json(cls, json_str: str) -> "TokenizationConfig":
        """Create configuration from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Configuration is not valid JSON: {e}") from e
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration JSON must be an object")
        return cls.from_dict(data)
