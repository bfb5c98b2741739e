"""
Logging setup for the storefront.

The root handler is installed once, on first import. Modules ask for loggers
with `get_logger(__name__)`; request-supplied text (product titles, origins)
goes through `loggable()` before it reaches a log line.
"""

import logging
import os
import re
import sys
from functools import cache

# Stripe SDK and httpx log every outbound request at INFO
_NOISY_LOGGERS = ("httpx", "httpcore", "stripe")

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")


def configure_logging(level: str | None = None) -> None:
    """Install a stdout handler on the root logger unless one is already there.

    `level` overrides `LOG_LEVEL`. On Vercel the timestamp is dropped because
    the platform prefixes its own.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    level_name = (level or os.environ.get("LOG_LEVEL") or "INFO").upper()
    root.setLevel(getattr(logging, level_name, logging.INFO))

    if os.environ.get("VERCEL") == "1":
        fmt = "%(levelname)s %(name)s: %(message)s"
    else:
        fmt = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt))
    root.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


configure_logging()


@cache
def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def loggable(value, max_length: int = 80) -> str:
    """
    Render a client-supplied title or origin safe for a single log line.

    Control characters become `\\xNN` escapes so a crafted title cannot forge
    extra log records. Long values are cut at `max_length` and marked with
    `...`. Missing or empty values render as `-`.
    """
    if value is None or value == "":
        return "-"
    text = _CONTROL_CHARS.sub(lambda m: f"\\x{ord(m.group()):02x}", str(value))
    if len(text) > max_length:
        return text[:max_length] + "..."
    return text


__all__ = ["configure_logging", "get_logger", "loggable"]
