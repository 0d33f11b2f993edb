"""Tests for hotln.log."""

import json
import logging

import pytest
from rich.logging import RichHandler

from hotln.log import JsonFormatter, configure_logging


def test_json_formatter_includes_extra_fields() -> None:
    record = logging.LogRecord("hotln.providers.direct", logging.INFO, __file__, 1, "Created %s", ("EMP-1",), None)
    record.identifier = "EMP-1"
    record.url = "https://linear.app/x/EMP-1"

    payload = json.loads(JsonFormatter().format(record))

    assert payload["level"] == "INFO"
    assert payload["logger"] == "hotln.providers.direct"
    assert payload["message"] == "Created EMP-1"
    assert payload["fields"] == {"identifier": "EMP-1", "url": "https://linear.app/x/EMP-1"}


def test_json_formatter_without_extra() -> None:
    record = logging.LogRecord("hotln", logging.WARNING, __file__, 1, "plain", (), None)
    assert "fields" not in json.loads(JsonFormatter().format(record))


def test_configure_logging_rich_by_default() -> None:
    configure_logging("debug")
    logger = logging.getLogger("hotln")
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0], RichHandler)


def test_configure_logging_replaces_handler(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging("INFO")
    configure_logging("INFO", json_output=True)
    logger = logging.getLogger("hotln")
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0].formatter, JsonFormatter)

    logging.getLogger("hotln.relay").info("hello", extra={"ip": "1.2.3.4"})
    line = capsys.readouterr().err.strip().splitlines()[-1]
    assert json.loads(line)["fields"] == {"ip": "1.2.3.4"}
