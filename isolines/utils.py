"""
Utility Functions
=================

Logging setup for the isolines package.

Functions
---------
configure_logging
    Attach a timestamped handler to the package logger, optionally mirrored
    to a file.
"""

import logging

import isolines


def configure_logging(level=logging.WARNING, logfile=None):
    """Configure logging for the isolines package.

    Called once when :mod:`isolines` is imported.  Calling it again replaces
    the handlers it installed earlier instead of stacking duplicates.

    Parameters
    ----------
    level : int, default logging.WARNING
        Logging level (e.g., logging.DEBUG, logging.INFO).
    logfile : str, optional
        Path to log file.  If provided, records go to both console and file.

    Examples
    --------
    >>> import logging
    >>> from isolines.utils import configure_logging
    >>> configure_logging(level=logging.DEBUG)
    """
    logger = logging.getLogger(isolines.__name__)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        if getattr(handler, "_isolines_handler", False):
            logger.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter("%(asctime)s %(name)s %(message)s", datefmt="%H:%M:%S")

    logger_handler = logging.StreamHandler()
    logger_handler.setFormatter(formatter)
    logger_handler._isolines_handler = True
    logger.addHandler(logger_handler)

    if logfile is not None:
        file_logger_handler = logging.FileHandler(logfile)
        file_logger_handler.setFormatter(formatter)
        file_logger_handler._isolines_handler = True
        logger.addHandler(file_logger_handler)
