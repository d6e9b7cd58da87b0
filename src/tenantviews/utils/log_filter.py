"""Logging level helpers for temporary log suppression.

The CLI builds registries and resolvers before printing its own formatted
output; these helpers keep INFO chatter from the ``registry`` and
``resolver`` loggers out of that output while preserving warnings and
errors.

Examples:
    Suppress only INFO-level messages::

        >>> with suppress_logger_level('registry', logging.WARNING):
        ...     build_registry()

    Quiet several loggers::

        >>> with quiet_logger(['registry', 'CONFIG']):
        ...     resolver = get_resolver()
"""

import logging
from contextlib import contextmanager


@contextmanager
def suppress_logger_level(logger_name: str | list[str], level: int):
    """Context manager to temporarily raise logger level to suppress messages.

    Args:
        logger_name: Name of logger(s) to modify. Can be a single string
            or list of strings for multiple loggers.
        level: The temporary log level to set. Messages below this level
            will be suppressed.

    Yields:
        Dictionary mapping logger names to their original levels
    """
    logger_names = [logger_name] if isinstance(logger_name, str) else logger_name

    loggers = [logging.getLogger(name) for name in logger_names]
    original_levels = {name: logger.level for name, logger in zip(logger_names, loggers)}

    for logger in loggers:
        logger.setLevel(level)

    try:
        yield original_levels
    finally:
        for name, logger in zip(logger_names, loggers):
            logger.setLevel(original_levels[name])


@contextmanager
def quiet_logger(logger_name: str | list[str]):
    """Context manager to temporarily suppress INFO-level messages from logger(s).

    Equivalent to ``suppress_logger_level(logger_name, logging.WARNING)``.

    Args:
        logger_name: Name of logger(s) to quiet.

    Yields:
        Dictionary mapping logger names to their original levels
    """
    with suppress_logger_level(logger_name, logging.WARNING) as levels:
        yield levels


__all__ = [
    "suppress_logger_level",
    "quiet_logger",
]
