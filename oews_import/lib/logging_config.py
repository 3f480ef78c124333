"""
Logging Configuration

Console logging plus optional rotating file output (plain or JSON).
"""

import json
import logging
import logging.handlers
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

LOG_LEVELS = [logging.WARNING, logging.INFO, logging.DEBUG]


class JSONFormatter(logging.Formatter):
    """JSON log formatter for structured logging"""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno
        }

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        if hasattr(record, 'year'):
            log_data['year'] = record.year

        return json.dumps(log_data)


def resolve_log_level(verbose: int, quiet: bool, default: str = 'WARNING') -> str:
    """
    Map CLI verbosity flags to a logging level name

    Args:
        verbose: Number of -v flags given
        quiet: Whether -q was given (wins over -v)
        default: Level used when no flag is given

    Returns:
        Logging level name
    """
    if quiet:
        return 'ERROR'
    if not verbose:
        return default.upper()
    level_index = min(verbose, len(LOG_LEVELS) - 1)
    return logging.getLevelName(LOG_LEVELS[level_index])


def setup_logging(
    log_level: str = 'INFO',
    log_file: Optional[Path] = None,
    enable_json: bool = False,
) -> None:
    """
    Configure the root logger

    Args:
        log_level: Console logging level
        log_file: Path to a rotating log file (optional)
        enable_json: Use JSON formatting for the file handler
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    simple_formatter = logging.Formatter('%(levelname)s: %(message)s')
    detailed_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(min(numeric_level, logging.DEBUG) if log_file else numeric_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(simple_formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=5
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(JSONFormatter() if enable_json else detailed_formatter)
        root_logger.addHandler(file_handler)

        logging.getLogger(__name__).debug("Logging to file: %s", log_file)
