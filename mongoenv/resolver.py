"""Resolve MongoDB connection settings from the environment or a connection URL."""

from __future__ import annotations

import logging
import re
from enum import Enum
from typing import Mapping
from urllib.parse import parse_qsl, unquote, urlsplit

from pydantic import ValidationError

from .config import (
    MONGO_SSL_ENV,
    MONGO_URL_ENV,
    connection_url,
    load_discrete_settings,
    parse_bool,
    read_environment,
)
from .models import DEFAULT_URL_TIMEOUT, ConnectionDescriptor

LOG = logging.getLogger(__name__)

_SCHEME_RE = re.compile(r"[A-Za-z][A-Za-z0-9+.\-]*")
_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f]")
_BAD_ESCAPE_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")
_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_PORT_RE = re.compile(r"[0-9]*")


class ConfigErrorKind(str, Enum):
    """Categories of configuration failures."""

    MALFORMED_URL = "malformed_url"
    INVALID_OPTION = "invalid_option"
    UNSUPPORTED_OPTION = "unsupported_option"


class ConfigError(ValueError):
    """Raised when connection configuration cannot be resolved.

    Every failure is terminal: retrying with the same input fails the same way.
    """

    def __init__(
        self,
        kind: ConfigErrorKind,
        message: str,
        *,
        key: str | None = None,
        value: str | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.key = key
        self.value = value


def resolve(environ: Mapping[str, str] | None = None) -> ConnectionDescriptor:
    """Build a descriptor from ``MONGO`` if set, else from the ``MONGO_*`` variables."""

    source = read_environment(environ)
    raw = connection_url(source)
    if raw:
        LOG.debug("Resolving connection from connection URL", extra={"variable": MONGO_URL_ENV})
        return parse_connection_url(raw)
    LOG.debug("Resolving connection from discrete variables")
    return build_from_discrete_parameters(source)


def build_from_discrete_parameters(environ: Mapping[str, str] | None = None) -> ConnectionDescriptor:
    """Assemble a descriptor from the fixed set of discrete variables."""

    source = read_environment(environ)
    try:
        settings = load_discrete_settings(source)
    except ValidationError as exc:
        value = source.get(MONGO_SSL_ENV)
        raise ConfigError(
            ConfigErrorKind.INVALID_OPTION,
            f"bad value for {MONGO_SSL_ENV}: {value}",
            key=MONGO_SSL_ENV,
            value=value,
        ) from exc
    return ConnectionDescriptor(
        addresses=settings.addresses(),
        database=settings.database or "",
        username=settings.user,
        password=settings.password,
        replica_set_name=settings.replica_set,
        auth_source=settings.auth_source,
        use_tls=settings.ssl,
    )


def parse_connection_url(raw: str) -> ConnectionDescriptor:
    """Parse a ``mongodb://`` style URL, rejecting any option it does not recognize."""

    scheme, separator, _ = raw.partition("://")
    if _CONTROL_RE.search(raw):
        raise _malformed("URL contains control characters")
    if not separator or not _SCHEME_RE.fullmatch(scheme):
        raise _malformed("missing or invalid scheme")
    if _BAD_ESCAPE_RE.search(raw):
        raise _malformed("invalid percent escape")
    try:
        parts = urlsplit(raw)
    except ValueError as exc:
        raise _malformed(str(exc)) from exc

    userinfo, at, hosts = parts.netloc.rpartition("@")
    if not hosts:
        raise _malformed("no host given")

    addresses = tuple(hosts.split(","))
    for address in addresses:
        _check_address(address)

    try:
        fields: dict[str, object] = {
            "addresses": addresses,
            "database": unquote(parts.path.removeprefix("/"), errors="strict"),
            "timeout": DEFAULT_URL_TIMEOUT,
        }
        if at:
            username, colon, password = userinfo.partition(":")
            fields["username"] = unquote(username, errors="strict")
            if colon:
                fields["password"] = unquote(password, errors="strict")
        options = parse_qsl(parts.query, keep_blank_values=True, errors="strict")
    except UnicodeDecodeError as exc:
        raise _malformed("percent escape is not valid UTF-8") from exc

    seen: set[str] = set()
    for key, value in options:
        if key in seen:
            continue
        seen.add(key)
        _apply_option(fields, key, value)

    return ConnectionDescriptor(**fields)  # type: ignore[arg-type]


def _check_address(address: str) -> None:
    if address.startswith("["):
        _, bracket, port_part = address.partition("]")
        if not bracket:
            raise _malformed("unterminated IPv6 address")
        if port_part and not port_part.startswith(":"):
            raise _malformed("invalid port")
        port = port_part[1:]
    else:
        if " " in address:
            raise _malformed("invalid character in host name")
        port = address.rpartition(":")[2] if ":" in address else ""
    if not _PORT_RE.fullmatch(port):
        raise _malformed("invalid port")


def _apply_option(fields: dict[str, object], key: str, value: str) -> None:
    if key == "authSource":
        fields["auth_source"] = value
    elif key == "authMechanism":
        fields["auth_mechanism"] = value
    elif key == "gssapiServiceName":
        fields["service_name"] = value
    elif key == "replicaSet":
        fields["replica_set_name"] = value
    elif key == "maxPoolSize":
        fields["pool_limit"] = _parse_pool_limit(value)
    elif key == "ssl":
        try:
            enabled = parse_bool(value)
        except ValueError as exc:
            raise _invalid(key, value) from exc
        if enabled:
            fields["use_tls"] = True
    elif key == "connect" and value == "direct":
        fields["direct_connect"] = True
    elif key == "connect" and value == "replicaSet":
        # Topology is inferred by the driver.
        pass
    else:
        raise ConfigError(
            ConfigErrorKind.UNSUPPORTED_OPTION,
            f"unsupported connection URL option: {key}={value}",
            key=key,
            value=value,
        )


def _parse_pool_limit(value: str) -> int:
    if not _INTEGER_RE.fullmatch(value):
        raise _invalid("maxPoolSize", value)
    limit = int(value)
    if limit <= 0:
        raise _invalid("maxPoolSize", value)
    return limit


def _invalid(key: str, value: str) -> ConfigError:
    return ConfigError(
        ConfigErrorKind.INVALID_OPTION,
        f"bad value for {key}: {value}",
        key=key,
        value=value,
    )


def _malformed(reason: str) -> ConfigError:
    return ConfigError(ConfigErrorKind.MALFORMED_URL, f"malformed connection URL: {reason}")


__all__ = [
    "ConfigError",
    "ConfigErrorKind",
    "build_from_discrete_parameters",
    "parse_connection_url",
    "resolve",
]
