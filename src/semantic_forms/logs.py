"""
Logging configuration for semantic-forms.

Everything in the package logs to the ``semantic-forms`` logger. This
module wires console and JSON Lines handlers onto it.
"""

import json
import logging

LOGGER_NAME = "semantic-forms"

logger = logging.getLogger(LOGGER_NAME)
logger.addHandler(logging.NullHandler())


class JsonLinesFormatter(logging.Formatter):
    """
    Formats each record as one JSON object per line.

    Useful for persistent logging and later analysis.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def _managed_handlers() -> list[logging.Handler]:
    return [h for h in logger.handlers if getattr(h, "_semantic_forms", False)]


def setup_logging(
    enabled: bool = True,
    console: bool = True,
    verbose: bool = False,
    file_path: str | None = None,
) -> None:
    """
    Configure logging for semantic-forms.

    Args:
        enabled: Whether logging is enabled.
        console: Whether to print log records to stderr.
        verbose: Whether to include DEBUG records (template lookups etc.).
        file_path: Optional file path to write JSON Lines records to.

    Example:
        >>> from semantic_forms.logs import setup_logging
        >>> setup_logging(console=True, verbose=True)
    """
    for handler in _managed_handlers():
        logger.removeHandler(handler)
        handler.close()

    if not enabled:
        disable_logging()
        return

    enable_logging()
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    handlers: list[logging.Handler] = []

    if console:
        stream = logging.StreamHandler()
        stream.setFormatter(logging.Formatter("[%(name)s] %(levelname)s %(message)s"))
        handlers.append(stream)

    if file_path:
        file_handler = logging.FileHandler(file_path)
        file_handler.setFormatter(JsonLinesFormatter())
        handlers.append(file_handler)

    for handler in handlers:
        handler._semantic_forms = True
        logger.addHandler(handler)


def disable_logging() -> None:
    """Disable all semantic-forms logging."""
    logger.disabled = True


def enable_logging() -> None:
    """Enable semantic-forms logging."""
    logger.disabled = False
