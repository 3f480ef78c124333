import json
import logging
import sys

import pytest

from oews_import.lib.logging_config import JSONFormatter, resolve_log_level, setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.mark.parametrize(
    "verbose,quiet,expected",
    [(0, False, "WARNING"), (1, False, "INFO"), (2, False, "DEBUG"), (5, False, "DEBUG"), (2, True, "ERROR")],
)
def test_resolve_log_level(verbose, quiet, expected):
    assert resolve_log_level(verbose, quiet) == expected


def test_resolve_log_level_uses_default():
    assert resolve_log_level(0, False, default="info") == "INFO"


def test_setup_logging_console_only():
    setup_logging("WARNING")

    root = logging.getLogger()
    assert len(root.handlers) == 1
    assert root.level == logging.WARNING


def test_setup_logging_writes_json_file(tmp_path):
    log_file = tmp_path / "logs" / "import.log"

    setup_logging("ERROR", log_file=log_file, enable_json=True)
    logging.getLogger("oews_import.test").info("Loaded year", extra={"year": 2015})
    for handler in logging.getLogger().handlers:
        handler.flush()

    lines = [json.loads(line) for line in log_file.read_text().splitlines()]
    entry = next(line for line in lines if line["message"] == "Loaded year")
    assert entry["level"] == "INFO"
    assert entry["year"] == 2015


def test_json_formatter_includes_exception():
    try:
        raise ValueError("bad cell")
    except ValueError:
        record = logging.LogRecord("test", logging.ERROR, "", 0, "failed", (), sys.exc_info())

    data = json.loads(JSONFormatter().format(record))

    assert data["message"] == "failed"
    assert "ValueError: bad cell" in data["exception"]
    assert "year" not in data
