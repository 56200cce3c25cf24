"""Logging configuration for the engine, the sandbox loop and the API server."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)-5s] %(name)-25s | %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger to write decision output to stdout."""
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%H:%M:%S"))

    root = logging.getLogger()
    root.setLevel(numeric_level)
    root.handlers.clear()
    root.addHandler(handler)

    # uvicorn's access log duplicates every API poll at INFO
    logging.getLogger("uvicorn.access").setLevel(max(numeric_level, logging.WARNING))
