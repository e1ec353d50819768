from __future__ import annotations

from pathlib import Path
from typing import Optional
import logging
import logging.handlers


def setup_logging(level: str = "INFO", log_file: Optional[Path] = None,
                  max_bytes: int = 5_000_000, backup_count: int = 3) -> None:
    """Configure root logging: console always, rotating file when log_file is set."""
    level_name = level.upper()
    lvl = getattr(logging, level_name, logging.INFO)

    root = logging.getLogger()
    root.setLevel(lvl)

    # Remove existing handlers to avoid dupes on re-run
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter('%(asctime)s %(levelname)s %(name)s - %(message)s')

    console = logging.StreamHandler()
    console.setFormatter(fmt)
    console.setLevel(lvl)
    root.addHandler(console)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
        )
        file_handler.setFormatter(fmt)
        file_handler.setLevel(lvl)
        root.addHandler(file_handler)

    logging.getLogger(__name__).info(
        "Logging initialized level=%s file=%s", level_name, log_file
    )
