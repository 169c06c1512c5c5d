"""
Logging helpers shared by the connector components.

Two channels are used throughout the package:

- ``orient-connector.adapter``: lifecycle, type activation and
  create/update decisions.
- ``orient-connector.query``: every statement sent to the server.

Components receive their logger through the constructor and fall back to
``get_logger`` when none is given.
"""

import logging
import uuid

LOGGER_ROOT = "orient-connector"
ADAPTER_CHANNEL = "adapter"
QUERY_CHANNEL = "query"


def setup_logging(name: str = LOGGER_ROOT, level: str = "INFO") -> logging.Logger:
    """
    Configure process-wide logging and return a named logger.

    Args:
        name: Logger name.
        level: Log level string (e.g. 'INFO', 'DEBUG').

    Returns:
        Configured logger instance.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s  %(name)-30s  %(levelname)-7s  %(message)s",
    )
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    return logger


def get_logger(category: str) -> logging.Logger:
    """Return the logger for one connector channel."""
    return logging.getLogger(f"{LOGGER_ROOT}.{category}")


def generate_correlation_id() -> str:
    """Generate a short id tying together the statements of one batch."""
    return uuid.uuid4().hex[:12]
