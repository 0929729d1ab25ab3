"""
Logging setup
Configures the root logger once at application startup
Reference: https://docs.python.org/3/library/logging.html
"""
import logging
import sys

from closet_worthy.core.config import settings


def setup_logging() -> logging.Logger:
    """
    Configure the root logger from LOG_LEVEL.

    Safe to call more than once: existing handlers are replaced, so
    reloading under uvicorn does not duplicate every line.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )
    root_logger.addHandler(console_handler)

    # httpx logs every request at INFO, which drowns out our own lines
    logging.getLogger("httpx").setLevel(logging.WARNING)

    return root_logger
