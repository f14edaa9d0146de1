"""
GeoGrid Logging Configuration

This module provides logging configuration for the GeoGrid package.
Nothing is printed unless the application configures logging. The package
logs at three levels:

    DEBUG    engine decisions: which cross-section path a grid takes, how
             many points a point band keeps, resampling and UTM zones
    INFO     user-level steps: entry-point calls, forced interpolation of
             diagonal sections, vector rotation to ECEF axes
    WARNING  data-quality notices: suspicious axis ordering, datasets with
             too few valid cells to vote

Axis-ordering notices are also raised as ``AxisOrderWarning`` through the
warnings module; ``capture_warnings=True`` sends those to the log as well.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

ROOT_LOGGER_NAME = 'geogrid'


def _as_level(level: Union[int, str], default: int) -> int:
    """Turn a level name ('debug', 'INFO', ...) into a logging constant."""
    if isinstance(level, str):
        return getattr(logging, level.upper(), default)
    return level


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
    format_string: Optional[str] = None,
    date_format: Optional[str] = None,
    capture_warnings: bool = False
) -> logging.Logger:
    """
    Attach console (and optionally file) output to the ``geogrid`` logger.

    Calling it again replaces the previous handlers.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
               Can be string or logging constant
        log_file: Optional path to log file; parent folders are created
        format_string: Custom format string for log messages
        date_format: Custom date format string
        capture_warnings: Also route ``warnings.warn`` output (e.g. AxisOrderWarning)
                          through the logging system

    Returns:
        logging.Logger: Configured package logger

    Examples:
        # Follow every dispatch decision, e.g. why a diagonal section
        # was interpolated or how many earthquakes a band kept
        >>> from geogrid import setup_logging
        >>> setup_logging(level='DEBUG')

        # Entry-point calls and forced interpolation only
        >>> setup_logging(level='INFO')

        # Only data-quality notices, for batch vote map runs
        >>> setup_logging(level='WARNING', log_file='/path/to/votemap.log',
        ...               capture_warnings=True)

        # Terse console output
        >>> setup_logging(format_string='[%(levelname)s] %(name)s: %(message)s')
    """
    level = _as_level(level, logging.INFO)

    if format_string is None:
        format_string = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

    if date_format is None:
        date_format = '%Y-%m-%d %H:%M:%S'

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)

    # Clear existing handlers to avoid duplicates
    logger.handlers.clear()

    formatter = logging.Formatter(format_string, datefmt=date_format)
    handlers = [logging.StreamHandler(sys.stdout)]

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    if log_file:
        logger.info("Logging to file: %s", log_path)

    logging.captureWarnings(capture_warnings)

    logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger below the package logger.

    Accepts either a short name ('processing.votemap') or a module
    ``__name__`` that already starts with the package name.

    Args:
        name: Logger name

    Returns:
        logging.Logger: Logger instance

    Examples:
        >>> get_logger('processing.votemap').name
        'geogrid.processing.votemap'
        >>> get_logger('geogrid.main').name
        'geogrid.main'
    """
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + '.'):
        return logging.getLogger(name)
    return logging.getLogger(f'{ROOT_LOGGER_NAME}.{name}')


# No output unless the application configures logging
_default_logger = logging.getLogger(ROOT_LOGGER_NAME)
if not _default_logger.handlers:
    _default_logger.addHandler(logging.NullHandler())
_default_logger.setLevel(logging.WARNING)


def set_log_level(level: Union[int, str]) -> None:
    """
    Change the level of the ``geogrid`` logger and its handlers.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Examples:
        >>> from geogrid import set_log_level
        >>> set_log_level('DEBUG')     # engine dispatch and resampling
        >>> set_log_level('WARNING')   # axis-order and vote notices only
        >>> set_log_level('ERROR')     # silence the notices as well
    """
    level = _as_level(level, logging.WARNING)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)

    for handler in logger.handlers:
        handler.setLevel(level)
