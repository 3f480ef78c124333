"""
CLI Error Handling

Maps fatal pipeline exceptions to short console messages and exit codes.
"""

import functools
import logging
import sys

import click

from oews_import.lib.exceptions import (
    ConfigurationException,
    DatabaseException,
    OEWSException,
    format_exception_details,
)

logger = logging.getLogger(__name__)


class CLIError(Exception):
    """Base exception for CLI errors"""
    def __init__(self, message: str, exit_code: int = 1):
        self.message = message
        self.exit_code = exit_code
        super().__init__(self.message)


def handle_cli_error(error: CLIError):
    """
    Report a CLI error and exit

    Args:
        error: CLI error instance
    """
    logger.debug("%s: %s", error.__class__.__name__, error.message)
    click.echo(f"Error: {error.message}", err=True)
    sys.exit(error.exit_code)


def safe_execute(func):
    """
    Decorator for command execution with error handling

    Configuration and database errors are fatal: they are reported on one
    line and the process exits with status 1.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except CLIError as e:
            handle_cli_error(e)
        except (ConfigurationException, DatabaseException) as e:
            logger.debug(format_exception_details(e))
            handle_cli_error(CLIError(e.message))
        except OEWSException as e:
            logger.error(format_exception_details(e))
            handle_cli_error(CLIError(e.message))
        except click.Abort:
            click.echo("Operation aborted by user", err=True)
            sys.exit(1)

    return wrapper
