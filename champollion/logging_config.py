"""
Logging Configuration

One stdout stream shared by index builds, the CLI and the API server.
Index builds report per-file sentence counts at INFO; candidate walks and
search rounds are only visible at DEBUG (``DEBUG=1`` or ``champollion -v``).
"""
import logging
import os
import sys

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Request logs from the development server drown out translation logs
QUIET_LOGGERS = ('werkzeug',)

_logging_configured = False


def _debug_from_env():
    return os.environ.get('DEBUG', '').lower() in ('true', '1', 'yes')


def setup_logging(app_name='champollion', verbose=None):
    """Configure the champollion logger tree.

    The handler is installed once per process. Later calls only adjust the
    level, so the CLI can switch to DEBUG after the API or a script has
    already set things up.

    Args:
        app_name: Root logger namespace
        verbose: True for DEBUG, False for INFO, None to follow the DEBUG
            environment variable
    """
    global _logging_configured

    logger = logging.getLogger(app_name)
    if verbose is None and not _logging_configured:
        verbose = _debug_from_env()

    if _logging_configured:
        if verbose is not None:
            logger.setLevel(logging.DEBUG if verbose else logging.INFO)
        return logger

    log_level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)]
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger.setLevel(log_level)
    _logging_configured = True
    return logger


def get_logger(name):
    """Logger for one component, e.g. get_logger('translator') -> champollion.translator"""
    return logging.getLogger(f'champollion.{name}')
