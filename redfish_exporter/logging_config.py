"""
Logging setup for the exporter process.
"""

import logging

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(log_level: str = "INFO") -> None:
    """
    Configure the root logger with a single console handler.

    Args:
        log_level: Level name ('DEBUG', 'INFO', 'WARNING', 'ERROR')
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    root_logger.handlers.clear()

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(handler)

    # urllib3 is noisy at DEBUG when TLS verification is disabled
    logging.getLogger("urllib3").setLevel(logging.WARNING)
