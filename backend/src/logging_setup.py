"""Process-wide logging for the cleanup service.

Records go through a QueueHandler on the root logger and are written by a
background QueueListener. On Cloud Run (``K_SERVICE`` is set) only stderr is
used, since the platform ships it to Cloud Logging; elsewhere a rotating file
under ``LOG_DIR`` is added unless ``LOG_TO_FILE`` is off.
"""
import logging
import logging.handlers
import os
import queue
from typing import List, Optional

DEFAULT_FORMAT = '%(asctime)s %(levelname)s %(name)s %(message)s'

LOG_DIR = os.getenv('LOG_DIR', os.path.join(os.path.dirname(__file__), '../../logs'))
LOG_FILE = os.path.join(LOG_DIR, 'cleanup.log')
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()
LOG_FORMAT = os.getenv('LOG_FORMAT', DEFAULT_FORMAT)


def file_logging_enabled(environ=os.environ) -> bool:
    flag = environ.get('LOG_TO_FILE')
    if flag is not None:
        return flag.lower() in ('true', '1', 'yes', 'on')
    return 'K_SERVICE' not in environ


def build_handlers(to_file: bool, log_file: str = LOG_FILE, fmt: str = LOG_FORMAT) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if to_file:
        os.makedirs(os.path.dirname(log_file), exist_ok=True)
        handlers.append(logging.handlers.RotatingFileHandler(log_file, maxBytes=5 * 1024 * 1024, backupCount=3))
    formatter = logging.Formatter(fmt)
    for h in handlers:
        h.setFormatter(formatter)
    return handlers


_log_queue: "queue.Queue[logging.LogRecord]" = queue.Queue(-1)

_queue_listener: Optional[logging.handlers.QueueListener] = logging.handlers.QueueListener(
    _log_queue, *build_handlers(file_logging_enabled()), respect_handler_level=True
)

root_logger = logging.getLogger()
root_logger.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))
for h in list(root_logger.handlers):
    root_logger.removeHandler(h)
root_logger.addHandler(logging.handlers.QueueHandler(_log_queue))

logger = logging.getLogger('livecleanup')


def start_logging():
    """Start the background QueueListener. Safe to call more than once."""
    if _queue_listener and _queue_listener._thread is None:
        _queue_listener.start()


def stop_logging():
    """Flush and stop the background QueueListener. Call on shutdown."""
    if _queue_listener and _queue_listener._thread is not None:
        _queue_listener.stop()


start_logging()
