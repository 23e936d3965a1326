import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_handler = logging.StreamHandler(sys.stderr)
_handler.setFormatter(logging.Formatter(LOG_FORMAT))


def configure_logging(level: str = "INFO") -> None:
    """Send application logs to stderr. Safe to call more than once."""
    root = logging.getLogger()
    root.setLevel(level.upper())
    if _handler not in root.handlers:
        root.addHandler(_handler)
