"""Structured Logging — formatter output and idempotent setup."""

import json
import logging

import pytest

from geobookmarks.infrastructure.observability import (
    JSONFormatter, TextFormatter, setup_logging,
)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    geopy_level = logging.getLogger("geopy").level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.getLogger("geopy").setLevel(geopy_level)


def _record(msg="Name resolution failed", **extra):
    record = logging.makeLogRecord({
        "name": "geobookmarks.services.bookmark_store",
        "levelno": logging.WARNING,
        "levelname": "WARNING",
        "msg": msg,
    })
    record.__dict__.update(extra)
    return record


def test_json_includes_present_extras_only():
    out = json.loads(JSONFormatter().format(
        _record(geohash="u4prez", geohash_level="neighborhood", attempt=None),
    ))
    assert out["level"] == "WARNING"
    assert out["logger"] == "geobookmarks.services.bookmark_store"
    assert out["geohash"] == "u4prez"
    assert out["geohash_level"] == "neighborhood"
    assert "attempt" not in out
    assert "timestamp" in out


def test_json_keeps_non_ascii_names():
    out = JSONFormatter().format(_record(msg="Resolved Zürich", geohash="u0qj"))
    assert "Zürich" in out


def test_text_appends_extras():
    line = TextFormatter().format(_record(geohash="9q", attempt=3))
    assert line.endswith("Name resolution failed [geohash=9q attempt=3]")


def test_text_without_extras_is_plain():
    line = TextFormatter().format(_record())
    assert line.endswith("geobookmarks.services.bookmark_store: Name resolution failed")


def test_setup_logging_replaces_its_own_handler(restore_root_logger):
    root = restore_root_logger
    first = setup_logging("debug", "text")
    second = setup_logging("warning", "json")

    assert first not in root.handlers
    assert second in root.handlers
    assert isinstance(second.formatter, JSONFormatter)
    assert root.level == logging.WARNING


def test_setup_logging_caps_geopy_chatter(restore_root_logger):
    setup_logging("debug", "json")
    assert logging.getLogger("geopy").level == logging.WARNING
