from __future__ import annotations

import logging
from pathlib import Path

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class _AppOnlyFilter(logging.Filter):
    """Keep terminaltask logs; let third-party loggers through only at WARNING+."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name == "terminaltask" or record.name.startswith("terminaltask."):
            return True
        return record.levelno >= logging.WARNING


def setup_logging(log_file: str | Path, level: int = logging.INFO) -> None:
    """
    Send all logs to ``log_file``.

    The terminal belongs to the TUI while it runs, so nothing is logged to
    stderr. Call this once, before the app starts.
    """
    log_file = Path(log_file)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(level)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    fh = logging.FileHandler(str(log_file), encoding="utf-8")
    fh.setLevel(level)
    fh.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    fh.addFilter(_AppOnlyFilter())
    root.addHandler(fh)

    logging.captureWarnings(True)
