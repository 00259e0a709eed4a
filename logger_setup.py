import logging
import sys

DEFAULT_LOG_LEVEL = logging.INFO
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _is_console_handler(handler: logging.Handler) -> bool:
    # FileHandler subclasses StreamHandler
    return isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler)


def setup_logger(name: str, level: int | str = DEFAULT_LOG_LEVEL) -> logging.Logger:
    """Return a logger with exactly one console handler pointed at the current stdout."""
    logger = logging.getLogger(name)
    logger.setLevel(level)

    for handler in [h for h in logger.handlers if _is_console_handler(h)]:
        if getattr(handler.stream, "closed", False):
            # setStream would flush the closed stream first
            logger.removeHandler(handler)
        elif handler.stream is not sys.stdout:
            handler.setStream(sys.stdout)

    if not any(_is_console_handler(h) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)

    for handler in logger.handlers:
        handler.setLevel(level)
    return logger
