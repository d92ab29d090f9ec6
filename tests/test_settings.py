"""Tests for configuration parsing and timezone helpers."""

from __future__ import annotations

from datetime import timedelta, timezone

import pytest
from pydantic import ValidationError

from rounds.config import Settings
from rounds.utils import resolve_timezone


def test_log_level_is_normalized():
    assert Settings(log_level=" debug ").log_level == "DEBUG"


def test_unknown_log_level_is_rejected():
    with pytest.raises(ValidationError):
        Settings(log_level="chatty")


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("ACCESS_TOKEN_EXPIRE_MINUTES", "15")

    assert Settings().access_token_expire_minutes == 15


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("UTC+02:00", timezone(timedelta(hours=2))),
        ("GMT-0530", timezone(-timedelta(hours=5, minutes=30))),
        ("not/a-zone", timezone.utc),
        ("  ", timezone.utc),
    ],
)
def test_resolve_timezone(name, expected):
    assert resolve_timezone(name) == expected
