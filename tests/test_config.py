"""Environment-driven configuration falls back to defaults on bad values."""

import logging

import pytest

from wortschatz.config import _f, _level


@pytest.mark.parametrize("raw, expected", [("debug", "DEBUG"), (" warning ", "WARNING"), ("ERROR", "ERROR")])
def test_log_level_accepts_known_names(monkeypatch, raw, expected):
    monkeypatch.setenv("WS_LOG_LEVEL", raw)
    assert _level("WS_LOG_LEVEL", "INFO") == expected


@pytest.mark.parametrize("raw", ["VERBOSE", "loud", ""])
def test_unknown_log_level_falls_back(monkeypatch, raw):
    monkeypatch.setenv("WS_LOG_LEVEL", raw)
    level = _level("WS_LOG_LEVEL", "INFO")
    assert level == "INFO"
    logging.getLogger("wortschatz.test").setLevel(level)


def test_unparsable_float_falls_back(monkeypatch):
    monkeypatch.setenv("WS_UPSTREAM_TIMEOUT_SEC", "soon")
    assert _f("WS_UPSTREAM_TIMEOUT_SEC", 60.0) == 60.0
