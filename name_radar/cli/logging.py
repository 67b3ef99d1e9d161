"""
Logging utilities for the name_radar CLI.

Console output goes through TqdmLoggingHandler so progress bars stay intact;
an optional log file captures DEBUG and above.
"""

import logging
import time
from pathlib import Path

from name_radar.utils.tqdm_logging import TqdmLoggingHandler

NOISY_LOGGERS = ("httpx", "httpcore", "urllib3", "whois", "tldextract", "filelock")


class FlushingFileHandler(logging.FileHandler):
    """File handler that flushes after every record."""

    def emit(self, record):
        super().emit(record)
        self.flush()


def setup_logging(
    script_name: str,
    log_to_file: bool = False,
    log_dir: Path = Path("logs"),
    debug: bool = False,
) -> logging.Logger:
    """
    Set up logging for a CLI run.

    Args:
        script_name: Name used for the logger and the log file
        log_to_file: Also write a timestamped log file under log_dir
        log_dir: Directory for log files
        debug: Show DEBUG messages on the console

    Returns:
        Configured logger instance
    """
    console_level = logging.DEBUG if debug else logging.INFO
    console_handler = TqdmLoggingHandler(level=console_level)
    console_handler.setFormatter(logging.Formatter("%(message)s"))

    handlers: list[logging.Handler] = [console_handler]
    log_file = None
    if log_to_file:
        log_dir.mkdir(parents=True, exist_ok=True)
        timestamp = time.strftime("%Y%m%d_%H%M%S")
        log_file = log_dir / f"{script_name}_{timestamp}.log"
        file_handler = FlushingFileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter("%(asctime)s - %(levelname)s - %(message)s"))
        handlers.append(file_handler)

    # Script logger and package logger share the same handlers
    for name in (script_name, "name_radar"):
        target = logging.getLogger(name)
        target.setLevel(logging.DEBUG)
        target.handlers = list(handlers)
        target.propagate = False

    for noisy_logger in NOISY_LOGGERS:
        logging.getLogger(noisy_logger).setLevel(logging.ERROR)

    logger = logging.getLogger(script_name)
    if log_file is not None:
        logger.info(f"Log file: {log_file}")
    return logger


def print_run_header(title: str, logger: logging.Logger | None = None):
    """
    Print a standard run header.

    Args:
        title: Title for the run
        logger: Optional logger instance
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    logger.info("=" * 70)
    logger.info(title)
    logger.info("=" * 70)
