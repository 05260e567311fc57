"""
Logging setup for the service.

``setup_logging`` attaches a console handler (and a file handler when
``LOG_FILE`` is set) to the root logger the first time it is called.
The HTTP client libraries log every request at INFO, so they are held
at WARNING unless the service itself runs at DEBUG.
"""

import logging
from pathlib import Path
from typing import Optional


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

CHATTY_LOGGERS = ("httpx", "httpcore", "urllib3", "google.auth")


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root logger once per process.

    Parameters
    ----------
    level : str
        Level name such as ``"DEBUG"`` or ``"info"``.  Unknown names
        fall back to INFO.
    logfile : Optional[str]
        Extra file to append log records to.
    """
    root = logging.getLogger()
    if root.handlers:
        # uvicorn or an earlier create_app call already configured logging.
        return

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    root.setLevel(numeric_level)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers = [logging.StreamHandler()]
    if logfile:
        handlers.append(logging.FileHandler(Path(logfile).resolve(), encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    if numeric_level > logging.DEBUG:
        for name in CHATTY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
