"""Custom logger for study view functionality."""
import logging
import re
from os import environ

LOG_LEVEL_VARIABLE = 'STUDY_VIEW_LOG_LEVEL'


class CustomFormatter(logging.Formatter):
    """A colorizing formatter, one color per level."""
    blue = '\u001b[34m'
    magenta = '\u001b[35m'
    cyan = '\u001b[0;36m'
    bold_green = '\u001b[32;1m'
    bold_yellow = '\u001b[33;1m'
    bold_red = '\u001b[31;1m'
    div = '┃'
    reset = '\u001b[0m'

    LEVEL_COLORS = {
        logging.DEBUG: reset,
        logging.INFO: bold_green,
        logging.WARNING: bold_yellow,
        logging.ERROR: bold_red,
        logging.CRITICAL: bold_red,
    }

    @classmethod
    def _format_string(cls, levelno: int) -> str:
        color = cls.LEVEL_COLORS.get(levelno, cls.reset)
        return ''.join([
            cls.blue, '%(asctime)s ', cls.reset,
            cls.magenta, '[ ', cls.reset, color, '%(levelname)-8s', cls.reset, cls.magenta, ' ] ',
            cls.blue, '%(lineno)4d ', cls.reset,
            cls.magenta, '%(name)-36s', cls.reset,
            cls.cyan, cls.div, cls.reset, ' %(message)s',
        ])

    def format(self, record):
        formatter = logging.Formatter(self._format_string(record.levelno), datefmt='%m-%d %H:%M:%S')
        return formatter.format(record)


def _configured_level() -> int:
    name = environ.get(LOG_LEVEL_VARIABLE, 'DEBUG').upper()
    level = logging.getLevelName(name)
    if isinstance(level, int):
        return level
    return logging.DEBUG


def colorized_logger(name: str) -> logging.Logger:
    """A lightweight customization of the Python standard library's ``logging`` module
    loggers, to provide colorized log messages.

    The level defaults to DEBUG and can be set with the ``STUDY_VIEW_LOG_LEVEL`` environment
    variable.

    Args:
        name (str):
            The name of the logger to requisition. Typically a module's
            ``__name__`` attribute.

    Returns:
        The logger.
    """
    logger = logging.getLogger(re.sub(r'^studyviewtoolbox\.', '', name))
    level = _configured_level()
    logger.setLevel(level)
    if not logger.handlers:
        stream_handler = logging.StreamHandler()
        stream_handler.setLevel(level)
        stream_handler.setFormatter(CustomFormatter())
        logger.addHandler(stream_handler)
    return logger
