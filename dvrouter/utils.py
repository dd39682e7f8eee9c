from __future__ import annotations
import logging
from typing import Sequence

def make_logger(name: str, level: str = "INFO") -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("[%(asctime)s] %(levelname)s %(name)s: %(message)s","%H:%M:%S"))
        logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    return logger

def format_vector(values: Sequence[int], infinity: int) -> str:
    """Compact rendering for log lines; unreachable entries show as '-'."""
    return "[" + ",".join("-" if v>=infinity else str(v) for v in values) + "]"
