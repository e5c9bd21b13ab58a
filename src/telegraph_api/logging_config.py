import logging
import re
import sys
from typing import Optional

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

MASK = "***"

# access_token=..., "access_token": "..." and the like
_TOKEN_FIELD = re.compile(r"""(access_token["']?\s*[:=]\s*["']?)[^"'\s,&}]+""")
# Telegraph access tokens are 60 hex characters
_BARE_TOKEN = re.compile(r"\b[0-9a-f]{60}\b")


def mask_tokens(text: str) -> str:
    """Replace access token values in text with a mask."""
    text = _TOKEN_FIELD.sub(rf"\g<1>{MASK}", text)
    return _BARE_TOKEN.sub(MASK, text)


class TokenMaskingFilter(logging.Filter):
    """
    Masks Telegraph access tokens in log records.

    Attached to handlers rather than the logger so records from child
    loggers (telegraph_api.core.client, ...) pass through it as well. The
    message is rendered once and stored back on the record with its args
    cleared.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        masked = mask_tokens(message)
        if masked != message:
            record.msg = masked
            record.args = None
        return True


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    format_string: Optional[str] = None,
    force: bool = False,
) -> logging.Logger:
    """
    Set up logging for telegraph_api.

    Configures the package logger only; the root logger is left alone. Every
    handler installed here masks access tokens.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path for logging output
        format_string: Optional custom format string for log messages
        force: If True, reconfigure even if handlers exist

    Returns:
        Configured "telegraph_api" logger
    """
    if format_string is None:
        format_string = DEFAULT_FORMAT

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logger = logging.getLogger("telegraph_api")
    logger.setLevel(numeric_level)

    if force or not logger.handlers:
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()

        handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
        if log_file:
            handlers.append(logging.FileHandler(log_file))

        formatter = logging.Formatter(format_string)
        token_filter = TokenMaskingFilter()
        for handler in handlers:
            handler.setLevel(numeric_level)
            handler.setFormatter(formatter)
            handler.addFilter(token_filter)
            logger.addHandler(handler)

    # Records stop here so unmasked copies never reach root handlers
    logger.propagate = False

    return logger
