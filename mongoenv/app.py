"""Command line entry point for mongoenv."""

from __future__ import annotations

import argparse
import logging
from typing import Mapping, Sequence

from .connections import DialError, Dialer, PymongoDialer
from .resolver import ConfigError, resolve
from .session import bootstrap

LOG = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mongoenv",
        description="Resolve MongoDB settings from MONGO / MONGO_* variables and connect.",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Only resolve the configuration and print it; do not connect.",
    )
    parser.add_argument(
        "--no-ping",
        action="store_true",
        help="Skip the ping round-trip after creating the client.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser


def main(
    argv: Sequence[str] | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    dialer: Dialer | None = None,
) -> int:
    """Run startup once; any configuration or dial failure aborts with status 1."""

    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        if args.check:
            descriptor = resolve(environ)
            print(descriptor.redacted())
            return 0
        context = bootstrap(environ, dialer=dialer or PymongoDialer(ping=not args.no_ping))
    except ConfigError as exc:
        LOG.error("Invalid database configuration: %s", exc, extra={"kind": exc.kind.value})
        return 1
    except DialError as exc:
        LOG.error("Database connection failed: %s", exc)
        return 1
    print(f"Connected: {context.descriptor.redacted()}")
    context.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
