"""Tests for environment-driven configuration helpers."""

from __future__ import annotations

import pytest
from socialapp.core.config import (
    DevelopmentConfig,
    ProductionConfig,
    TestingConfig,
    env_bool,
    env_int,
    get_config,
)


@pytest.mark.parametrize(
    "name,expected",
    [("development", DevelopmentConfig), ("testing", TestingConfig), ("PRODUCTION", ProductionConfig)],
)
def test_get_config_selects_class(monkeypatch, name, expected):
    monkeypatch.setenv("APP_ENV", name)
    assert get_config() is expected


def test_get_config_falls_back_to_development(monkeypatch):
    monkeypatch.setenv("APP_ENV", "staging")
    assert get_config() is DevelopmentConfig


@pytest.mark.parametrize("raw,expected", [("1", True), ("YES", True), ("on", True), ("0", False), ("nope", False)])
def test_env_bool(monkeypatch, raw, expected):
    monkeypatch.setenv("SOCIALAPP_FLAG", raw)
    assert env_bool("SOCIALAPP_FLAG") is expected


def test_env_bool_default(monkeypatch):
    monkeypatch.delenv("SOCIALAPP_FLAG", raising=False)
    assert env_bool("SOCIALAPP_FLAG", True) is True


@pytest.mark.parametrize("raw,expected", [("12", 12), ("", 7), ("twelve", 7)])
def test_env_int(monkeypatch, raw, expected):
    monkeypatch.setenv("SOCIALAPP_NUMBER", raw)
    assert env_int("SOCIALAPP_NUMBER", 7) == expected


def test_testing_secrets_differ():
    assert TestingConfig.ACCESS_TOKEN_SECRET != TestingConfig.REFRESH_TOKEN_SECRET
