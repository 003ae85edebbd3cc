# app/utils/my_logging.py
"""Logging setup shared by the API process and tests"""
import logging
import sys
from app.config.settings import get_settings

NOISY_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool", "httpx", "uvicorn.access")


def setup_logging(verbose=False):
    """Log to stdout at LOG_LEVEL; library chatter stays quiet unless verbose."""
    settings = get_settings()
    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)]
    )

    if not verbose:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
