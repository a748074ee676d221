"""Logging configuration for git-branch-sweeper"""
import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "branch_sweeper"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_log_file() -> Path:
    """Location of the debug log file."""
    return Path.home() / '.git-branch-sweeper' / 'git-branch-sweeper.log'


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """
    Configure diagnostic logging for the application.

    Log records go to stderr so they never interleave with the tagged status
    stream on stdout. Only the application's own loggers are configured;
    GitPython and PyGithub stay at their library defaults.

    Args:
        verbose: If True, show INFO level messages
        debug: If True, show DEBUG level messages and also write them to a log file
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    app_logger = logging.getLogger(LOGGER_NAME)
    app_logger.setLevel(level)
    app_logger.propagate = False

    # Calling setup twice must not duplicate output
    for handler in app_logger.handlers[:]:
        app_logger.removeHandler(handler)
        handler.close()

    stderr_handler = RichHandler(
        console=Console(stderr=True),
        level=level,
        show_time=debug,
        show_path=debug,
        markup=False,
    )
    stderr_handler.setFormatter(logging.Formatter("[%(name)s] %(message)s"))
    app_logger.addHandler(stderr_handler)

    if debug:
        log_file = get_log_file()
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode='w')  # Overwrite each run
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
        app_logger.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger under the application's namespace.

    Args:
        name: Name of the module (typically __name__)

    Returns:
        Logger instance
    """
    if not name.startswith(LOGGER_NAME):
        name = f"{LOGGER_NAME}.{name}"
    return logging.getLogger(name)
