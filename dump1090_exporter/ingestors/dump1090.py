"""Client for the dump1090 aircraft JSON endpoint."""

from __future__ import annotations

import asyncio
import logging
import re
from urllib.parse import urlsplit

import httpx
from pydantic import TypeAdapter, ValidationError

from dump1090_exporter.errors import (
    InvalidTargetAddress,
    MalformedUpstreamPayload,
    UpstreamHTTPError,
    UpstreamUnreachable,
)
from dump1090_exporter.models.records import NormalizedRecord, RawRecord

logger = logging.getLogger("dump1090_exporter.ingestors.dump1090")

DATA_PATH = "/dump1090/data.json"
# Ceiling for one whole exchange with a receiver. Callers can only shorten it.
UPSTREAM_TIMEOUT = 10.0

_HOST_RE = re.compile(r"[a-z0-9._-]+|[0-9a-f.]*:[0-9a-f:.]*")
_RAW_RECORDS = TypeAdapter(list[RawRecord])


def parse_base_url(url: str) -> httpx.URL:
    """Validate ``url`` as an absolute http(s) URL with a usable host."""

    if not url or any(ch.isspace() for ch in url):
        raise InvalidTargetAddress(f"failed to parse url: {url!r}")
    try:
        parts = urlsplit(url)
        port = parts.port
    except ValueError as exc:
        raise InvalidTargetAddress(f"failed to parse url: {url!r}: {exc}") from exc

    if port == 0:
        raise InvalidTargetAddress(f"failed to parse url: {url!r}: port 0")
    if parts.scheme not in {"http", "https"}:
        raise InvalidTargetAddress(f"failed to parse url: {url!r}: unsupported scheme")
    if not parts.hostname or not _HOST_RE.fullmatch(parts.hostname):
        raise InvalidTargetAddress(f"failed to parse url: {url!r}: invalid host")

    try:
        return httpx.URL(url)
    except httpx.InvalidURL as exc:
        raise InvalidTargetAddress(f"failed to parse url: {url!r}: {exc}") from exc


def _data_url(base: httpx.URL) -> httpx.URL:
    return base.copy_with(path=base.path.rstrip("/") + DATA_PATH)


class Dump1090Client:
    """Fetch and normalize the aircraft list of one dump1090 receiver.

    A client is cheap and meant to be built per scrape; it holds no
    connection pool between calls.
    """

    def __init__(
        self,
        base_url: str,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = parse_base_url(base_url)
        self.data_url = _data_url(self.base_url)
        self.transport = transport

    @classmethod
    def from_target(
        cls, target: str, *, transport: httpx.AsyncBaseTransport | None = None
    ) -> "Dump1090Client":
        """Build a client for a ``host:port`` target.

        Receivers are always addressed over plain HTTP, whatever the target
        looks like.
        """

        return cls(f"http://{target}", transport=transport)

    async def fetch_records(
        self, *, deadline: float | None = None
    ) -> list[NormalizedRecord]:
        """Return the receiver's current aircraft, in payload order.

        ``deadline`` (seconds) may tighten the request timeout but never
        extend it past ``UPSTREAM_TIMEOUT``.
        """

        timeout = UPSTREAM_TIMEOUT
        if deadline is not None:
            timeout = max(min(deadline, UPSTREAM_TIMEOUT), 0.0)

        try:
            response = await asyncio.wait_for(self._get(timeout), timeout=timeout)
        except (httpx.TimeoutException, asyncio.TimeoutError) as exc:
            logger.warning("dump1090 request to %s timed out: %r", self.data_url, exc)
            raise UpstreamUnreachable(
                f"request to {self.data_url} timed out after {timeout}s"
            ) from exc
        except httpx.RequestError as exc:
            logger.warning("dump1090 request to %s failed: %r", self.data_url, exc)
            raise UpstreamUnreachable(f"request to {self.data_url} failed: {exc}") from exc

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.warning(
                "dump1090 at %s returned HTTP %s: %s",
                self.data_url,
                exc.response.status_code,
                exc.response.text[:200],
            )
            raise UpstreamHTTPError(
                exc.response.status_code,
                f"{self.data_url} returned HTTP {exc.response.status_code}",
            ) from exc

        raw_records = self._decode(response)
        records = [NormalizedRecord.from_raw(raw) for raw in raw_records]
        logger.debug("Fetched %s aircraft records from %s", len(records), self.data_url)
        return records

    async def _get(self, timeout: float) -> httpx.Response:
        # The client context closes the connection and releases the body on
        # every path out of this block.
        async with httpx.AsyncClient(timeout=timeout, transport=self.transport) as client:
            return await client.get(
                self.data_url, headers={"Accept": "application/json"}
            )

    def _decode(self, response: httpx.Response) -> list[RawRecord]:
        try:
            payload = response.json()
        except ValueError as exc:
            logger.warning("Invalid JSON from %s: %s", self.data_url, exc)
            raise MalformedUpstreamPayload(
                f"{self.data_url} returned invalid JSON: {exc}"
            ) from exc

        if not isinstance(payload, list):
            logger.warning(
                "Expected a JSON array from %s, got %s",
                self.data_url,
                type(payload).__name__,
            )
            raise MalformedUpstreamPayload(
                f"{self.data_url} returned {type(payload).__name__}, expected array"
            )

        try:
            return _RAW_RECORDS.validate_python(payload)
        except ValidationError as exc:
            logger.warning(
                "Unexpected record shape from %s: %s", self.data_url, exc
            )
            raise MalformedUpstreamPayload(
                f"{self.data_url} returned records of unexpected shape"
            ) from exc


__all__ = ["DATA_PATH", "Dump1090Client", "UPSTREAM_TIMEOUT", "parse_base_url"]
