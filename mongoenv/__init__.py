"""Environment-driven MongoDB connection bootstrap."""

from __future__ import annotations

from .connections import DialError, Dialer, PymongoDialer, client_kwargs
from .models import DEFAULT_URL_TIMEOUT, ConnectionDescriptor
from .resolver import (
    ConfigError,
    ConfigErrorKind,
    build_from_discrete_parameters,
    parse_connection_url,
    resolve,
)
from .session import DatabaseContext, bootstrap

__all__ = [
    "ConfigError",
    "ConfigErrorKind",
    "ConnectionDescriptor",
    "DEFAULT_URL_TIMEOUT",
    "DatabaseContext",
    "DialError",
    "Dialer",
    "PymongoDialer",
    "bootstrap",
    "build_from_discrete_parameters",
    "client_kwargs",
    "parse_connection_url",
    "resolve",
]
