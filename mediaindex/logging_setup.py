from __future__ import annotations
import logging, logging.handlers, sys
from pathlib import Path

import structlog
from .paths import get_dirs

# Chatty at INFO, useless for crawl progress
_QUIET_LOGGERS = ("urllib3", "charset_normalizer")


def setup_logging(level: str = "INFO", logfile: str | Path | None = None):
    """JSON lines to a rotating file and to stderr (stdout stays free for --json output)."""
    level = level.upper()
    if logfile is None:
        logfile = get_dirs()["logs"] / "mediaindex.log"

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    fmt = logging.Formatter("%(message)s")
    for handler in (
        logging.handlers.RotatingFileHandler(logfile, maxBytes=10_000_000, backupCount=3, encoding="utf-8"),
        logging.StreamHandler(sys.stderr),
    ):
        handler.setFormatter(fmt)
        root.addHandler(handler)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level)),
    )
    return structlog.get_logger()
