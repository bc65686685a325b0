# cpsclient/utils/logger.py
"""
Logging configuration for the cpsclient package.

The library itself only creates module loggers; applications that want the
package's log output formatted and routed call setup_logger() once.
"""

import logging
from pathlib import Path
from sys import stdout

from .config_loader import LoggingSection

PACKAGE_LOGGER_NAME: str = 'cpsclient'

_LOG_FORMAT: logging.Formatter = logging.Formatter(
    fmt='%(asctime)s - %(levelname)-8s - [%(name)s] - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S',
)


def setup_logger(logging_config: LoggingSection | None = None) -> logging.Logger:
    """
    Set up logging for the cpsclient package.

    Configures the package-level logger so every module logger
    (cpsclient.client, cpsclient.transport, ...) inherits its handlers.
    A console handler is always attached; a file handler is added when the
    config names a file_path.

    The function is idempotent: calling it again updates handler levels
    instead of adding duplicate handlers.

    Args:
        logging_config: The 'logging' section of the configuration. If None,
                        console logging at INFO is used.

    Returns:
        The package logger.

    Example:
        >>> config = load_config()
        >>> setup_logger(config.logging)
    """
    config: LoggingSection = logging_config or LoggingSection()
    console_level: int = config.get_console_level_int()
    file_level: int | None = config.get_file_level_int()

    package_logger: logging.Logger = logging.getLogger(PACKAGE_LOGGER_NAME)

    # The logger passes everything any handler wants; handlers filter
    package_logger.setLevel(min(console_level, file_level or console_level))

    if not package_logger.handlers:
        console_handler: logging.Handler = logging.StreamHandler(stdout)
        console_handler.setFormatter(_LOG_FORMAT)
        console_handler.setLevel(console_level)
        package_logger.addHandler(console_handler)

        if config.file_path is not None and file_level is not None:
            log_file_path: Path = config.file_path
            log_file_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler: logging.Handler = logging.FileHandler(
                filename=str(log_file_path),
                mode='a',
                encoding='utf-8',
            )
            file_handler.setFormatter(_LOG_FORMAT)
            file_handler.setLevel(file_level)
            package_logger.addHandler(file_handler)
            package_logger.info('Logging to file: %s', log_file_path)

    else:
        for existing_handler in package_logger.handlers:
            if isinstance(existing_handler, logging.FileHandler):
                existing_handler.setLevel(file_level or console_level)
            else:
                existing_handler.setLevel(console_level)

    return package_logger
