"""Tests for the environment configuration helpers."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from mongoenv.config import (
    DEFAULT_SERVER,
    DiscreteSettings,
    connection_url,
    load_discrete_settings,
    parse_bool,
)


@pytest.mark.parametrize("value", ["1", "t", "T", "TRUE", "true", "True"])
def test_parse_bool_true_spellings(value: str) -> None:
    assert parse_bool(value) is True


@pytest.mark.parametrize("value", ["0", "f", "F", "FALSE", "false", "False"])
def test_parse_bool_false_spellings(value: str) -> None:
    assert parse_bool(value) is False


@pytest.mark.parametrize("value", ["", "yes", "on", "tRuE", "2"])
def test_parse_bool_rejects_other_values(value: str) -> None:
    with pytest.raises(ValueError):
        parse_bool(value)


def test_connection_url_defaults_to_empty() -> None:
    assert connection_url({}) == ""
    assert connection_url({"MONGO": "mongodb://h/db"}) == "mongodb://h/db"


def test_connection_url_reads_process_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MONGO", raising=False)
    assert connection_url() == ""

    monkeypatch.setenv("MONGO", "mongodb://h/db")
    assert connection_url() == "mongodb://h/db"


def test_load_discrete_settings_reads_only_known_variables() -> None:
    settings = load_discrete_settings(
        {
            "MONGO_SERVERS": "a:1",
            "MONGO_USER": "u",
            "MONGO_PASSWORD": "",
            "MONGO_SSL": "0",
            "MONGO_EXTRA": "ignored",
        }
    )

    assert settings.servers == "a:1"
    assert settings.user == "u"
    assert settings.password is None
    assert settings.ssl is False
    assert not hasattr(settings, "extra")


def test_blank_ssl_means_disabled() -> None:
    assert load_discrete_settings({"MONGO_SSL": ""}).ssl is False
    assert load_discrete_settings({"MONGO_SSL": " true "}).ssl is True


def test_invalid_ssl_raises_validation_error() -> None:
    with pytest.raises(ValidationError):
        load_discrete_settings({"MONGO_SSL": "maybe"})


def test_addresses_split_and_default() -> None:
    assert DiscreteSettings().addresses() == (DEFAULT_SERVER,)
    assert DiscreteSettings(servers=" , ").addresses() == (DEFAULT_SERVER,)
    assert DiscreteSettings(servers="a:1,,b:2").addresses() == ("a:1", "b:2")
