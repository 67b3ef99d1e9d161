"""
Tqdm-compatible logging.

Bulk runs show a per-name progress bar; log lines emitted while it is on
screen go through tqdm.write() so the bar is redrawn below them.
"""

import logging
import sys
from typing import TextIO

from tqdm import tqdm


class TqdmLoggingHandler(logging.Handler):
    """
    Console handler for CLI runs; installed by cli.logging.setup_logging().

    Args:
        level: Minimum level to emit
        stream: Target stream, stderr unless given (tqdm draws on stderr)
    """

    def __init__(self, level: int = logging.NOTSET, stream: TextIO | None = None):
        super().__init__(level)
        self.stream = stream if stream is not None else sys.stderr

    def emit(self, record: logging.LogRecord) -> None:
        try:
            tqdm.write(self.format(record), file=self.stream)
        except RecursionError:
            raise
        except Exception:
            self.handleError(record)
