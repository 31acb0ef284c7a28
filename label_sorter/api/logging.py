"""Logging setup for a label-sorter run."""

import logging
from datetime import datetime
from pathlib import Path

from label_sorter.config import LabelerConfig

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Per-request chatter from the server and form parser
QUIET_LOGGERS = ("uvicorn.access", "multipart", "python_multipart")


def setup_logging(config: LabelerConfig, console: bool = True) -> Path:
    """
    Send log records to a file for this run, and optionally the console.

    Each run gets its own folder, e.g. logs/2024-01-30_10-30-00/label_sorter.log.

    Returns:
        Path to the log file
    """
    run_dir = Path(config.log_dir) / datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
    run_dir.mkdir(parents=True, exist_ok=True)
    log_file = run_dir / "label_sorter.log"

    handlers = [logging.FileHandler(log_file, encoding='utf-8')]
    if console:
        handlers.append(logging.StreamHandler())

    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt='%Y-%m-%d %H:%M:%S',
        handlers=handlers,
        force=True
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return log_file
