"""Upstream data sources for the dump1090 exporter."""

from .dump1090 import DATA_PATH, UPSTREAM_TIMEOUT, Dump1090Client, parse_base_url

__all__ = ["DATA_PATH", "Dump1090Client", "UPSTREAM_TIMEOUT", "parse_base_url"]
