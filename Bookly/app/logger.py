"""Loggers for the bookly package, all children of the ``bookly`` logger."""
import logging

ROOT_LOGGER = "bookly"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def get_logger(name=None):
    return logging.getLogger(f"{ROOT_LOGGER}.{name}" if name else ROOT_LOGGER)


def configure_logging(level="INFO"):
    """Attach the stream handler once and apply ``level`` (LOG_LEVEL from the config)."""
    root = get_logger()
    if not any(getattr(h, "_bookly", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._bookly = True
        root.addHandler(handler)
    root.setLevel(level.upper() if isinstance(level, str) else level)
    return root
