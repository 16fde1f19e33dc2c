# This module contains a set of common routines for logging messages.
# Messages go through the 'bugzlink' logger of the logging module; the
# command line installs a handler that prints them with the usual symbols.

import logging
import sys

debugLevel = 0
quiet = False

logger = logging.getLogger('bugzlink')
logger.addHandler(logging.NullHandler())

LogSettings = {
    logging.WARNING: {
        'sym': '!',
        'word': 'Warn',
    },
    logging.ERROR: {
        'sym': '#',
        'word': 'Error',
    },
    logging.DEBUG: {
        'sym': '~',
        'word': 'Dbg',
    },
    logging.INFO: {
        'sym': '*',
        'word': 'Info',
    },
}


class SymbolFormatter(logging.Formatter):
    def format(self, record):
        sym = LogSettings.get(record.levelno, {'sym': '!'})['sym']
        lines = record.getMessage().split('\n')
        return '\n'.join(' ' + sym + ' ' + line for line in lines)


def log_setup(stream=None):
    """Attach a console handler to the bugzlink logger.

    Calling this more than once does not duplicate output.
    """
    for handler in logger.handlers:
        if isinstance(handler.formatter, SymbolFormatter):
            return handler
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(SymbolFormatter())
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    return handler


def log_setQuiet(newQuiet):
    global quiet
    quiet = newQuiet


def log_setDebugLevel(newLevel):
    global debugLevel
    if not newLevel:
        return
    if newLevel > 3:
        log_warn("bad debug level '{0}', using '3'".format(str(newLevel)))
        debugLevel = 3
    else:
        debugLevel = newLevel


def log_error(string):
    logger.error(str(string))


def log_warn(string):
    logger.warning(str(string))


def log_info(string):
    # debug implies info
    if not quiet or debugLevel:
        logger.info(str(string))


def log_debug(string, msgLevel=1):
    if debugLevel >= msgLevel:
        logger.debug(str(string))
