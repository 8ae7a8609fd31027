"""Command-line entry point: ``python -m dump1090_exporter``."""

from __future__ import annotations

import argparse
import logging
from typing import Sequence

import uvicorn

from dump1090_exporter.config import settings

logger = logging.getLogger("dump1090_exporter.cli")


def parse_listen_address(value: str) -> tuple[str, int]:
    """Split a ``[host]:port`` listen address.

    An empty host (``:9190``) binds every interface. IPv6 hosts are written
    in brackets, e.g. ``[::1]:9190``.
    """

    host, sep, port_text = value.rpartition(":")
    if not sep or not port_text.isdigit():
        raise argparse.ArgumentTypeError(f"invalid listen address: {value!r}")
    port = int(port_text)
    if not 0 < port < 65536:
        raise argparse.ArgumentTypeError(f"port out of range in {value!r}")
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    return host or "0.0.0.0", port


def configure_argparser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dump1090-exporter",
        description="Prometheus exporter for dump1090 receivers, one target per scrape",
    )
    parser.add_argument(
        "--listen-address",
        type=parse_listen_address,
        default=settings.listen_address,
        help="The address to listen on for HTTP requests (default: %(default)s).",
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Process log level (default: %(default)s).",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    args = configure_argparser().parse_args(argv)
    settings.log_level = args.log_level

    # Imported late so logging picks up the command-line level.
    from dump1090_exporter.main import app

    logging.getLogger().setLevel(args.log_level)
    host, port = args.listen_address
    logger.info("Listening on %s:%s", host, port)
    uvicorn.run(app, host=host, port=port, log_level=args.log_level.lower())


if __name__ == "__main__":
    main()
