import logging
import sys

from pythonjsonlogger import jsonlogger

LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s: %(message)s'
JSON_LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s %(message)s'


def configure_logging(level='INFO', json=False, stream=None):
    """Attach a single stderr handler to the package logger."""
    handler = logging.StreamHandler(stream or sys.stderr)
    if json:
        handler.setFormatter(jsonlogger.JsonFormatter(JSON_LOG_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logger = logging.getLogger('jinja_gettext')
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger
