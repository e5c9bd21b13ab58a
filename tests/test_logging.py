"""Tests for logging configuration."""

import logging

import pytest

from telegraph_api import setup_logging
from telegraph_api.logging_config import TokenMaskingFilter, mask_tokens

TOKEN = "b968da509bb76866c35425099bc0989a5ec3b32997d55286c657e6994bbb"


@pytest.fixture(autouse=True)
def restore_package_logger():
    """Leave the package logger as we found it."""
    logger = logging.getLogger("telegraph_api")
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    logger.handlers.clear()
    yield
    for handler in logger.handlers:
        handler.close()
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_console_handler(self):
        """Test default configuration."""
        logger = setup_logging("debug")

        assert logger.name == "telegraph_api"
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert logger.propagate is False

    def test_unknown_level_defaults_to_info(self):
        """Test fallback for unrecognised level names."""
        logger = setup_logging("chatty")

        assert logger.level == logging.INFO

    def test_log_file(self, tmp_path):
        """Test writing records to a file."""
        log_file = tmp_path / "telegraph.log"
        logger = setup_logging("INFO", log_file=str(log_file), format_string="%(levelname)s %(message)s")

        logging.getLogger("telegraph_api.core.client").info("createPage succeeded")
        for handler in logger.handlers:
            handler.flush()

        assert "INFO createPage succeeded" in log_file.read_text()

    def test_existing_handlers_kept_without_force(self):
        """Test that a second call does not stack handlers."""
        setup_logging()
        logger = setup_logging()

        assert len(logger.handlers) == 1

    def test_force_reconfigures(self, tmp_path):
        """Test replacing handlers with force=True."""
        setup_logging()
        logger = setup_logging(log_file=str(tmp_path / "again.log"), force=True)

        assert len(logger.handlers) == 2

    def test_every_handler_masks_tokens(self, tmp_path):
        """Test that installed handlers carry the masking filter."""
        logger = setup_logging(log_file=str(tmp_path / "telegraph.log"))

        for handler in logger.handlers:
            assert any(isinstance(f, TokenMaskingFilter) for f in handler.filters)


class TestTokenMasking:
    """Tests for access token masking."""

    def test_token_never_written(self, tmp_path):
        """Test that a token logged from a child logger is masked in the file."""
        log_file = tmp_path / "telegraph.log"
        logger = setup_logging("DEBUG", log_file=str(log_file), format_string="%(message)s")

        child = logging.getLogger("telegraph_api.core.client")
        child.debug("Calling createPage with access_token=%s", TOKEN)
        child.warning(f"Unexpected body {{'access_token': '{TOKEN}', 'title': 'Sample'}}")
        for handler in logger.handlers:
            handler.flush()

        written = log_file.read_text()
        assert TOKEN not in written
        assert "access_token=***" in written
        assert "'title': 'Sample'" in written

    def test_mask_field_forms(self):
        """Test query, JSON and bare token forms."""
        assert mask_tokens("access_token=abc123&title=x") == "access_token=***&title=x"
        assert mask_tokens('{"access_token": "abc123"}') == '{"access_token": "***"}'
        assert mask_tokens(f"token {TOKEN} revoked") == "token *** revoked"

    def test_text_without_token_is_unchanged(self):
        """Test that ordinary messages pass through untouched."""
        record = logging.LogRecord("telegraph_api", logging.INFO, __file__, 1, "getPage %s", ("Sample-Page",), None)

        assert TokenMaskingFilter().filter(record) is True
        assert record.args == ("Sample-Page",)
        assert record.getMessage() == "getPage Sample-Page"
