import logging
import os
import sys

LOG_LEVEL_ENV = "FO2CALC_LOG_LEVEL"
LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s: %(message)s"


def level_for_verbosity(verbosity: int) -> int:
    """0 -> WARNING, 1 (-v) -> INFO, 2+ (-vv) -> DEBUG."""
    if verbosity <= 0:
        return logging.WARNING
    if verbosity == 1:
        return logging.INFO
    return logging.DEBUG


def configure_logging(verbosity: int = 0) -> int:
    """Send fo2calc logs to stderr and return the level in effect.

    FO2CALC_LOG_LEVEL (a level name such as ``DEBUG``) overrides the
    command-line verbosity. Results go to stdout, so logs never mix into
    ``table`` JSON.
    """
    level = level_for_verbosity(verbosity)
    level_name = os.getenv(LOG_LEVEL_ENV)
    if level_name:
        level = getattr(logging, level_name.strip().upper(), level)
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr, force=True)
    return level
