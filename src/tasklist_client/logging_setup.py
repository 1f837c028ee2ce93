# src/tasklist_client/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

PACKAGE_LOGGER = "tasklist_client"

# Per-request lines ("HTTP GET ... -> 200") are useful in the log file but
# would interleave with the console prompt.
_REQUEST_LOGGERS = (f"{PACKAGE_LOGGER}.net.",)


class ConsoleFilter(logging.Filter):
    """
    Decide what reaches the interactive console.

    Package records pass, except HTTP request traces below `http_level`.
    Everything else (httpx, asyncio, captured warnings) shows only at ERROR+.
    """

    def __init__(self, http_level: int = logging.WARNING) -> None:
        super().__init__()
        self.http_level = http_level

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if not name.startswith(PACKAGE_LOGGER + "."):
            return record.levelno >= logging.ERROR
        if name.startswith(_REQUEST_LOGGERS):
            return record.levelno >= self.http_level
        return True


def setup_logging(
    *,
    log_dir: str | Path = ".local/tasklist",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
    log_http_to_console: bool = False,
) -> Path:
    """
    Route logs to stderr (filtered by ConsoleFilter) and to <log_dir>/tasklist.log.

    Replaces any handlers already on the root logger. Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "tasklist.log"

    root = logging.getLogger()
    root.setLevel(min(console_level, file_level))
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(fmt)
    console.addFilter(ConsoleFilter(logging.DEBUG if log_http_to_console else logging.WARNING))
    root.addHandler(console)

    file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
    file_handler.setLevel(file_level)
    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)

    logging.captureWarnings(True)

    # httpx logs every request at INFO; ours already does
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    return log_file
