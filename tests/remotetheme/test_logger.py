"""
Tests for RemoteThemeLogger.
"""

import json
import logging

from remotetheme.remotetheme_logger import LOG_KEY, RemoteThemeLogger


def test_log_line_is_json_with_tag(caplog):
    """Test that each log record is a JSON line with the default tag."""
    caplog.set_level(logging.DEBUG, logger="remotetheme")
    RemoteThemeLogger().log("Downloading\nsomething", logging.DEBUG)

    record = caplog.records[-1]
    line = json.loads(record.getMessage())
    assert line["tag"] == LOG_KEY
    assert line["level"] == "DEBUG"
    assert line["message"] == "Downloading something"
    assert line["caller_name"] == "test_log_line_is_json_with_tag"
    assert line["caller_file"] == "test_logger.py"


def test_custom_tag(caplog):
    """Test logging with a custom tag."""
    caplog.set_level(logging.INFO, logger="remotetheme")
    RemoteThemeLogger().log("hello", logging.INFO, tag="Fetcher:")
    assert json.loads(caplog.records[-1].getMessage())["tag"] == "Fetcher:"


def test_disabled_level_is_skipped(caplog):
    """Test that records below the logger level are not emitted."""
    caplog.set_level(logging.WARNING, logger="remotetheme")
    RemoteThemeLogger().log("quiet", logging.DEBUG)
    assert not [r for r in caplog.records if r.name == "remotetheme"]
