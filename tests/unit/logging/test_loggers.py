"""
Tests for CorrelatedLogger.
"""

import logging

import pytest

from correlate.core.correlation.context import CorrelationContext
from correlate.logging.loggers import CorrelatedLogger, get_logger

LOGGER_NAME = "correlate.tests.loggers"


@pytest.fixture
def logger():
    return CorrelatedLogger(LOGGER_NAME)


@pytest.mark.unit
class TestCorrelatedLogger:
    """Test correlation id stamping and context."""

    def test_no_correlation_id_outside_scope(self, logger, caplog):
        with caplog.at_level(logging.INFO, logger=LOGGER_NAME):
            logger.info("hello")

        record = caplog.records[-1]
        assert record.getMessage() == "hello"
        assert not hasattr(record, "correlation_id")

    def test_reads_ambient_correlation_id(self, logger, accessor, caplog):
        """Test that the id is read at call time, not at construction."""
        accessor.correlation_context = CorrelationContext("ambient")

        with caplog.at_level(logging.INFO, logger=LOGGER_NAME):
            logger.info("hello")

        assert caplog.records[-1].correlation_id == "ambient"
        assert logger.correlation_id == "ambient"

    def test_fixed_correlation_id(self, accessor, caplog):
        accessor.correlation_context = CorrelationContext("ambient")
        logger = CorrelatedLogger(LOGGER_NAME, correlation_id="fixed")

        with caplog.at_level(logging.INFO, logger=LOGGER_NAME):
            logger.warning("hello")

        assert caplog.records[-1].correlation_id == "fixed"

    def test_keyword_context(self, logger, caplog):
        with caplog.at_level(logging.INFO, logger=LOGGER_NAME):
            logger.info("hello", user="u1")

        assert caplog.records[-1].extra_context == {"user": "u1"}

    def test_persistent_context(self, logger, caplog):
        logger.add_context(service="api")

        with caplog.at_level(logging.INFO, logger=LOGGER_NAME):
            logger.error("hello", attempt=1)

        assert caplog.records[-1].extra_context == {"service": "api", "attempt": 1}

    def test_clear_context(self, logger, caplog):
        logger.add_context(service="api")
        logger.clear_context()

        with caplog.at_level(logging.INFO, logger=LOGGER_NAME):
            logger.info("hello")

        assert not hasattr(caplog.records[-1], "extra_context")

    def test_with_context_returns_copy(self, logger):
        logger.add_context(service="api")

        child = logger.with_context(request="r1")

        assert child.extra_context == {"service": "api", "request": "r1"}
        assert logger.extra_context == {"service": "api"}

    def test_temp_context(self, logger):
        logger.add_context(service="api")

        with logger.temp_context(request="r1"):
            assert logger.extra_context == {"service": "api", "request": "r1"}

        assert logger.extra_context == {"service": "api"}

    def test_exception_includes_traceback(self, logger, caplog):
        with caplog.at_level(logging.INFO, logger=LOGGER_NAME):
            try:
                raise ValueError("boom")
            except ValueError:
                logger.exception("failed")

        record = caplog.records[-1]
        assert record.levelno == logging.ERROR
        assert record.exc_info[0] is ValueError
        assert not hasattr(record, "extra_context")

    def test_disabled_level_not_emitted(self, logger, caplog):
        with caplog.at_level(logging.WARNING, logger=LOGGER_NAME):
            logger.debug("hidden")

        assert caplog.records == []

    def test_get_logger(self):
        logger = get_logger(LOGGER_NAME, correlation_id="abc")

        assert isinstance(logger, CorrelatedLogger)
        assert logger.logger.name == LOGGER_NAME
        assert logger.correlation_id == "abc"
