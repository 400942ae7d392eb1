"""Tests for logging helpers."""
import logging

import pytest

import adtpy
from adtpy.core.logging import get_logger, truncate


class TestGetLogger:
    """Test suite for get_logger."""

    def test_returns_named_logger(self):
        """Test the logger carries the requested name."""
        logger = get_logger('adtpy.test')

        assert logger.name == 'adtpy.test'
        assert logger.propagate

    def test_same_logger_for_same_name(self):
        """Test loggers are shared by name."""
        assert get_logger('adtpy.api') is get_logger('adtpy.api')

    def test_request_failures_are_logged(self, caplog):
        """Test records reach caplog through propagation."""
        logger = get_logger('adtpy.api')
        logger.setLevel(logging.DEBUG)

        with caplog.at_level(logging.ERROR, logger='adtpy.api'):
            logger.error("POST failed (500 Internal Server Error): dump")

        assert 'dump' in caplog.text


class TestSetupLogging:
    """Test suite for setup_logging."""

    def test_sets_level_on_all_loggers(self):
        """Test every adtpy logger gets the level."""
        adtpy.setup_logging(logging.DEBUG)

        for name in ('adtpy', 'adtpy.api', 'adtpy.navigation', 'adtpy.objects'):
            assert logging.getLogger(name).level == logging.DEBUG

        adtpy.setup_logging(logging.WARNING)


class TestTruncate:
    """Test suite for truncate."""

    def test_short_text_unchanged(self):
        """Test text below the limit is returned as is."""
        assert truncate('abc', 10) == 'abc'

    def test_long_text_shortened(self):
        """Test long payloads are cut and annotated."""
        result = truncate('x' * 50, 10)

        assert result == 'x' * 10 + '... (50 chars)'

    @pytest.mark.parametrize('value', [None, ''])
    def test_empty(self, value):
        """Test empty payloads."""
        assert truncate(value) == ''
