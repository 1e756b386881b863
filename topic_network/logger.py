import logging
import os

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _log_level() -> int:
    level = os.getenv("LOG_LEVEL", "INFO").upper()
    if level not in VALID_LOG_LEVELS:
        level = "INFO"
    return getattr(logging, level, logging.INFO)


def get_logger(name: str) -> logging.Logger:
    """Get or create a logger with standard configuration."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        logger.addHandler(handler)
        logger.setLevel(_log_level())
    logger.propagate = False
    return logger
