"""Tests for correlation-aware logging."""

import logging

from unit_calc_lexer.shared.logging import CorrelationLogger, get_logger


class TestCorrelationLogger:
    """Test CorrelationLogger behaviour."""

    def test_default_component(self):
        """Test component defaults to the last name segment."""
        logger = get_logger("unit_calc_lexer.tokenization.api")
        assert isinstance(logger, CorrelationLogger)
        assert logger.component == "api"
        assert logger.correlation_id is None

    def test_extra_fields_attached(self, caplog):
        """Test records carry component, correlation ID and extras."""
        logger = get_logger("unit_calc_lexer.test", "req-42", "tester")
        with caplog.at_level(logging.INFO, logger="unit_calc_lexer.test"):
            logger.info("hello", extra={"token_count": 3})

        record = caplog.records[-1]
        assert record.getMessage() == "hello"
        assert record.component == "tester"
        assert record.correlation_id == "req-42"
        assert record.token_count == 3

    def test_levels(self, caplog):
        """Test level filtering is delegated to the stdlib logger."""
        logger = get_logger("unit_calc_lexer.levels")
        with caplog.at_level(logging.WARNING, logger="unit_calc_lexer.levels"):
            logger.debug("hidden")
            logger.warning("shown")
            logger.error("also shown")
            assert not logger.is_enabled_for(logging.DEBUG)
        messages = [r.getMessage() for r in caplog.records]
        assert messages == ["shown", "also shown"]
