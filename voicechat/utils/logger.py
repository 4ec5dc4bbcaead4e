import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def setup_logger(level: str = "INFO", name: str = "voicechat") -> logging.Logger:
    logger = logging.getLogger(name)
    logger.setLevel(level.upper())

    # uvicorn reloads import the app module more than once
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger
