"""Dial step: turn a connection descriptor into a live pymongo database handle."""

from __future__ import annotations

import logging
from typing import Any, Callable, Protocol, runtime_checkable

from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError

from .models import ConnectionDescriptor

LOG = logging.getLogger(__name__)

READ_PREFERENCE = "primaryPreferred"

ClientFactory = Callable[..., MongoClient]


class DialError(RuntimeError):
    """Raised when the client library cannot establish a session."""


@runtime_checkable
class Dialer(Protocol):
    """Protocol implemented by dial strategies."""

    def dial(self, descriptor: ConnectionDescriptor) -> Database:
        """Connect using the descriptor and return the target database."""


class PymongoDialer:
    """Dialer backed by ``pymongo.MongoClient``."""

    def __init__(self, client_factory: ClientFactory | None = None, *, ping: bool = True) -> None:
        self._client_factory = client_factory or MongoClient
        self._ping = ping

    def dial(self, descriptor: ConnectionDescriptor) -> Database:
        kwargs = client_kwargs(descriptor)
        LOG.info(
            "Dialing MongoDB",
            extra={"addresses": descriptor.addresses, "tls": descriptor.use_tls},
        )
        try:
            client = self._client_factory(**kwargs)
        except (PyMongoError, ValueError, TypeError) as exc:
            raise DialError(f"Failed to configure client for {_target(descriptor)}: {exc}") from exc
        try:
            if self._ping:
                client.admin.command("ping")
        except PyMongoError as exc:
            client.close()
            raise DialError(f"Failed to connect to {_target(descriptor)}: {exc}") from exc
        return client[descriptor.database]


def client_kwargs(descriptor: ConnectionDescriptor) -> dict[str, Any]:
    """Map descriptor fields onto ``MongoClient`` keyword arguments."""

    kwargs: dict[str, Any] = {
        "host": list(descriptor.addresses),
        "readPreference": READ_PREFERENCE,
    }
    if descriptor.username is not None:
        kwargs["username"] = descriptor.username
    if descriptor.password is not None:
        kwargs["password"] = descriptor.password
    if descriptor.replica_set_name:
        kwargs["replicaSet"] = descriptor.replica_set_name
    if descriptor.auth_source:
        kwargs["authSource"] = descriptor.auth_source
    if descriptor.auth_mechanism:
        kwargs["authMechanism"] = descriptor.auth_mechanism
    if descriptor.service_name:
        kwargs["authMechanismProperties"] = {"SERVICE_NAME": descriptor.service_name}
    if descriptor.pool_limit is not None:
        kwargs["maxPoolSize"] = descriptor.pool_limit
    if descriptor.direct_connect:
        kwargs["directConnection"] = True
    if descriptor.use_tls:
        kwargs["tls"] = True
    if descriptor.timeout is not None:
        timeout_ms = int(descriptor.timeout * 1000)
        kwargs["connectTimeoutMS"] = timeout_ms
        kwargs["serverSelectionTimeoutMS"] = timeout_ms
    return kwargs


def _target(descriptor: ConnectionDescriptor) -> str:
    return ",".join(descriptor.addresses)


__all__ = [
    "ClientFactory",
    "DialError",
    "Dialer",
    "PymongoDialer",
    "READ_PREFERENCE",
    "client_kwargs",
]
