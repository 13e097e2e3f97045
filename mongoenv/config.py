"""Environment-driven configuration helpers."""

from __future__ import annotations

import os
from typing import Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator

MONGO_URL_ENV = "MONGO"
MONGO_SERVERS_ENV = "MONGO_SERVERS"
MONGO_USER_ENV = "MONGO_USER"
MONGO_PASSWORD_ENV = "MONGO_PASSWORD"
MONGO_DATABASE_ENV = "MONGO_DATABASE"
MONGO_REPLICA_SET_ENV = "MONGO_REPLICA_SET"
MONGO_AUTH_SOURCE_ENV = "MONGO_AUTH_SOURCE"
MONGO_SSL_ENV = "MONGO_SSL"

DISCRETE_VARIABLES: tuple[str, ...] = (
    MONGO_SERVERS_ENV,
    MONGO_USER_ENV,
    MONGO_PASSWORD_ENV,
    MONGO_DATABASE_ENV,
    MONGO_REPLICA_SET_ENV,
    MONGO_AUTH_SOURCE_ENV,
    MONGO_SSL_ENV,
)

DEFAULT_SERVER = "localhost:27017"

_TRUE_VALUES = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_VALUES = frozenset({"0", "f", "F", "FALSE", "false", "False"})


def parse_bool(value: str) -> bool:
    """Parse the boolean spellings accepted in URLs and environment variables."""

    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"invalid boolean value: {value!r}")


class DiscreteSettings(BaseModel):
    """Connection settings supplied as individual ``MONGO_*`` variables."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    servers: str | None = Field(default=None, alias=MONGO_SERVERS_ENV)
    user: str | None = Field(default=None, alias=MONGO_USER_ENV)
    password: str | None = Field(default=None, alias=MONGO_PASSWORD_ENV)
    database: str | None = Field(default=None, alias=MONGO_DATABASE_ENV)
    replica_set: str | None = Field(default=None, alias=MONGO_REPLICA_SET_ENV)
    auth_source: str | None = Field(default=None, alias=MONGO_AUTH_SOURCE_ENV)
    ssl: bool = Field(default=False, alias=MONGO_SSL_ENV)

    @field_validator("servers", "user", "password", "database", "replica_set", "auth_source", mode="before")
    @classmethod
    def _blank_to_none(cls, value: object) -> object:
        if isinstance(value, str) and not value:
            return None
        return value

    @field_validator("ssl", mode="before")
    @classmethod
    def _coerce_ssl(cls, value: object) -> object:
        if value is None:
            return False
        if isinstance(value, str):
            if not value.strip():
                return False
            return parse_bool(value.strip())
        return value

    def addresses(self) -> tuple[str, ...]:
        """Server list in declaration order, defaulting to the local server."""

        if not self.servers:
            return (DEFAULT_SERVER,)
        hosts = tuple(part.strip() for part in self.servers.split(",") if part.strip())
        return hosts or (DEFAULT_SERVER,)


def read_environment(environ: Mapping[str, str] | None = None) -> Mapping[str, str]:
    """Return the mapping to read from, defaulting to the process environment."""

    return os.environ if environ is None else environ


def connection_url(environ: Mapping[str, str] | None = None) -> str:
    """Value of the combined connection-string variable, or an empty string."""

    return read_environment(environ).get(MONGO_URL_ENV, "")


def load_discrete_settings(environ: Mapping[str, str] | None = None) -> DiscreteSettings:
    """Collect the fixed set of discrete variables; other variables are never read.

    Raises ``pydantic.ValidationError`` when ``MONGO_SSL`` is not a boolean.
    """

    source = read_environment(environ)
    data = {name: source[name] for name in DISCRETE_VARIABLES if name in source}
    return DiscreteSettings.model_validate(data)


__all__ = [
    "DEFAULT_SERVER",
    "DISCRETE_VARIABLES",
    "DiscreteSettings",
    "MONGO_AUTH_SOURCE_ENV",
    "MONGO_DATABASE_ENV",
    "MONGO_PASSWORD_ENV",
    "MONGO_REPLICA_SET_ENV",
    "MONGO_SERVERS_ENV",
    "MONGO_SSL_ENV",
    "MONGO_URL_ENV",
    "MONGO_USER_ENV",
    "connection_url",
    "load_discrete_settings",
    "parse_bool",
    "read_environment",
]
