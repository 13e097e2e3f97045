"""Application bootstrap wiring the resolver to the dial step."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping

from pymongo import MongoClient
from pymongo.database import Database

from .connections import Dialer, PymongoDialer
from .models import ConnectionDescriptor
from .resolver import resolve

LOG = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DatabaseContext:
    """Database handle built once at startup and passed to whatever needs it."""

    descriptor: ConnectionDescriptor
    database: Database

    @property
    def client(self) -> MongoClient:
        return self.database.client

    def close(self) -> None:
        """Release the underlying client."""

        self.client.close()


def bootstrap(
    environ: Mapping[str, str] | None = None,
    *,
    dialer: Dialer | None = None,
) -> DatabaseContext:
    """Resolve configuration and dial; errors propagate to the caller."""

    LOG.info("Starting database")
    descriptor = resolve(environ)
    LOG.debug("Resolved connection", extra={"descriptor": descriptor.redacted()})
    database = (dialer or PymongoDialer()).dial(descriptor)
    return DatabaseContext(descriptor=descriptor, database=database)


__all__ = ["DatabaseContext", "bootstrap"]
