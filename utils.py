# utils.py

import logging
import sys
from collections.abc import Mapping, Sequence
from queue import Queue
from logging.handlers import QueueHandler
from typing import Any
from config import LOG_FILE, LOG_LEVEL

# The formatter needs to be defined at the module level
# so the QueueHandler can format the record before putting it in the queue.
log_formatter = logging.Formatter(
    '%(asctime)s - %(name)s - %(levelname)s - [%(funcName)s] - %(message)s'
)

class FormattedQueueHandler(QueueHandler):
    """A QueueHandler that formats the record before putting it on the queue."""
    def emit(self, record):
        self.enqueue(self.format(record))

def setup_logger(log_queue: Queue):
    """Configures the application logger to send records to a queue, a file and stdout."""
    logger = logging.getLogger("GradeScraper")
    if not logger.handlers:
        logger.setLevel(LOG_LEVEL)

        # Formatted lines for the /stream-logs endpoint
        queue_handler = FormattedQueueHandler(log_queue)
        queue_handler.setFormatter(log_formatter)
        logger.addHandler(queue_handler)

        file_handler = logging.FileHandler(LOG_FILE, mode='a')
        file_handler.setFormatter(log_formatter)
        logger.addHandler(file_handler)

        stdout_handler = logging.StreamHandler(sys.stdout)
        stdout_handler.setFormatter(log_formatter)
        logger.addHandler(stdout_handler)
    return logger

# This global 'log' object will be configured by the lifespan manager in main.py
log = logging.getLogger("GradeScraper")


def dig(obj: Any, *path, default=None):
    """
    Walks `path` through nested mappings and sequences.
    Returns `default` as soon as a step is absent instead of raising:
    missing keys, out-of-range indices, None and non-container values all count as absent.
    """
    current = obj
    for step in path:
        if current is None:
            return default
        if isinstance(step, int) and isinstance(current, Sequence) and not isinstance(current, (str, bytes)):
            if not -len(current) <= step < len(current):
                return default
            current = current[step]
        elif isinstance(current, Mapping):
            if step not in current:
                return default
            current = current[step]
        else:
            return default
    return default if current is None else current
