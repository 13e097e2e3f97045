"""Shared dataclasses used across the resolver and dial modules."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_URL_TIMEOUT = 10.0


@dataclass(frozen=True, slots=True)
class ConnectionDescriptor:
    """Normalized connection parameters handed to the dial step."""

    addresses: tuple[str, ...]
    database: str = ""
    username: str | None = None
    password: str | None = None
    replica_set_name: str | None = None
    auth_source: str | None = None
    auth_mechanism: str | None = None
    service_name: str | None = None
    pool_limit: int | None = None
    direct_connect: bool = False
    use_tls: bool = False
    timeout: float | None = None

    def __post_init__(self) -> None:
        if not self.addresses:
            raise ValueError("A connection descriptor needs at least one address.")
        if self.pool_limit is not None and self.pool_limit <= 0:
            raise ValueError(f"Pool limit must be positive, got {self.pool_limit}.")

    def redacted(self) -> str:
        """Human-readable summary with the password masked."""

        parts = [f"addresses={','.join(self.addresses)}", f"database={self.database or '-'}"]
        if self.username is not None:
            secret = "" if self.password is None else ":***"
            parts.append(f"user={self.username}{secret}")
        optional = (
            ("replica_set", self.replica_set_name),
            ("auth_source", self.auth_source),
            ("auth_mechanism", self.auth_mechanism),
            ("service_name", self.service_name),
            ("pool_limit", self.pool_limit),
            ("timeout", self.timeout),
        )
        for label, value in optional:
            if value is not None:
                parts.append(f"{label}={value}")
        if self.direct_connect:
            parts.append("direct=true")
        if self.use_tls:
            parts.append("tls=true")
        return " ".join(parts)


__all__ = ["ConnectionDescriptor", "DEFAULT_URL_TIMEOUT"]
