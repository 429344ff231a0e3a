"""Centralized logging configuration.
Call setup_logging() once at application startup.
"""

from __future__ import annotations

import logging
import sys

_NOISY_LOGGERS = {
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
    "urllib3": logging.WARNING,
    "groq": logging.WARNING,
    "langchain": logging.INFO,
    "langchain_core": logging.INFO,
    "langchain_groq": logging.INFO,
    "langgraph": logging.INFO,
    "pymongo": logging.WARNING,
    "uvicorn": logging.INFO,
    "fastapi": logging.INFO,
}


def setup_logging(level: str = "INFO") -> None:
    """Configure pipeline logging (single stream handler, multi-line records)."""
    root = logging.getLogger()
    # Avoid duplicate handlers on repeated calls
    if root.handlers:
        return

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    root.setLevel(numeric_level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(
        fmt=(
            "\n%(asctime)s │ %(levelname)-8s │ %(name)s │ %(funcName)s:%(lineno)d\n"
            "  %(message)s"
        ),
        datefmt="%H:%M:%S",
    ))
    root.addHandler(handler)

    # Quiet noisy libraries but keep our code at the requested level
    for name, lib_level in _NOISY_LOGGERS.items():
        logging.getLogger(name).setLevel(max(lib_level, numeric_level))
