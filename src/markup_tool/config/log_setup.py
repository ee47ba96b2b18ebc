"""Centralized logging configuration.
Call setup_logging() once at application startup.
"""
import logging
import sys
from typing import Optional

from .settings import get_settings


def setup_logging(level: Optional[str] = None) -> None:
    """Configure console logging for the drivers."""
    root = logging.getLogger()
    # Avoid duplicate handlers on repeated calls
    if root.handlers:
        return

    level = (level or get_settings().log_level).upper()
    root.setLevel(getattr(logging, level, logging.INFO))

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(
        fmt="%(asctime)s │ %(levelname)-8s │ %(name)s │ %(message)s",
        datefmt="%H:%M:%S",
    ))
    root.addHandler(handler)

    logging.getLogger("uvicorn").setLevel(logging.INFO)
    logging.getLogger("streamlit").setLevel(logging.WARNING)
