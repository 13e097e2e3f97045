"""Tests for the command line entry point."""

from __future__ import annotations

import pytest

from mongoenv.app import main
from mongoenv.connections import DialError
from mongoenv.models import ConnectionDescriptor


class _FakeClient:
    def __init__(self) -> None:
        self.closed = False

    def close(self) -> None:
        self.closed = True


class _FakeDatabase:
    def __init__(self) -> None:
        self.client = _FakeClient()


class _StubDialer:
    def __init__(self, error: Exception | None = None) -> None:
        self.database = _FakeDatabase()
        self._error = error

    def dial(self, descriptor: ConnectionDescriptor) -> _FakeDatabase:
        if self._error is not None:
            raise self._error
        return self.database


def test_check_prints_redacted_descriptor(capsys: pytest.CaptureFixture[str]) -> None:
    status = main(["--check"], environ={"MONGO": "mongodb://u:secret@h:1/app"})

    out = capsys.readouterr().out
    assert status == 0
    assert "addresses=h:1" in out
    assert "secret" not in out


def test_connect_success_closes_client(capsys: pytest.CaptureFixture[str]) -> None:
    dialer = _StubDialer()

    status = main([], environ={"MONGO_SERVERS": "h:1", "MONGO_DATABASE": "app"}, dialer=dialer)

    assert status == 0
    assert "Connected:" in capsys.readouterr().out
    assert dialer.database.client.closed is True


def test_config_error_aborts_startup(caplog: pytest.LogCaptureFixture) -> None:
    status = main([], environ={"MONGO": "mongodb://h/db?foo=bar"}, dialer=_StubDialer())

    assert status == 1
    assert "foo=bar" in caplog.text


def test_dial_error_aborts_startup(caplog: pytest.LogCaptureFixture) -> None:
    status = main([], environ={"MONGO_SERVERS": "h:1"}, dialer=_StubDialer(DialError("unreachable")))

    assert status == 1
    assert "unreachable" in caplog.text


def test_client_option_rejection_aborts_startup(caplog: pytest.LogCaptureFixture) -> None:
    status = main(["--no-ping"], environ={"MONGO": "mongodb://h:1/db?authMechanism=BOGUS"})

    assert status == 1
    assert "Database connection failed" in caplog.text
