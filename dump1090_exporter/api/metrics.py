"""Multi-target scrape endpoint."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Optional

import httpx
from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status

from dump1090_exporter.errors import (
    ClientError,
    ExporterError,
    MissingTargetParameter,
    ScrapeCancelled,
    UpstreamError,
)
from dump1090_exporter.ingestors import Dump1090Client
from dump1090_exporter.models import NormalizedRecord
from dump1090_exporter.services import build_scrape_metrics

router = APIRouter(tags=["metrics"])

logger = logging.getLogger("dump1090_exporter.api.metrics")

DISCONNECT_POLL_INTERVAL = 0.1
SCRAPE_TIMEOUT_HEADER = "X-Prometheus-Scrape-Timeout-Seconds"
# Non-standard status used by proxies for "client closed request".
CLIENT_CLOSED_REQUEST = 499


def get_upstream_transport() -> Optional[httpx.AsyncBaseTransport]:
    """Transport used to reach receivers; ``None`` means real network I/O."""

    return None


def _http_error(status_code: int, error: ExporterError) -> HTTPException:
    return HTTPException(
        status_code=status_code, detail={"code": error.code, "message": error.message}
    )


def _scrape_deadline(request: Request) -> float | None:
    raw = request.headers.get(SCRAPE_TIMEOUT_HEADER)
    if not raw:
        return None
    try:
        deadline = float(raw)
    except ValueError:
        logger.debug("Ignoring unparsable %s header: %r", SCRAPE_TIMEOUT_HEADER, raw)
        return None
    return deadline if deadline > 0 else None


async def fetch_until_disconnect(
    request: Request, client: Dump1090Client, *, deadline: float | None = None
) -> list[NormalizedRecord]:
    """Fetch records while watching the scrape caller.

    If the caller disconnects before the receiver answers, the fetch is
    cancelled and ``ScrapeCancelled`` is raised.
    """

    fetch = asyncio.create_task(client.fetch_records(deadline=deadline))
    try:
        while True:
            done, _ = await asyncio.wait({fetch}, timeout=DISCONNECT_POLL_INTERVAL)
            if done:
                return fetch.result()
            if await request.is_disconnected():
                raise ScrapeCancelled(f"caller left while fetching {client.data_url}")
    finally:
        if not fetch.done():
            fetch.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await fetch


@router.get("/metrics", summary="Scrape one dump1090 receiver")
async def scrape_target(
    request: Request,
    target: Optional[str] = Query(
        default=None, description="Receiver address as host:port, queried over HTTP"
    ),
    transport: Optional[httpx.AsyncBaseTransport] = Depends(get_upstream_transport),
) -> Response:
    """Fetch aircraft from ``target`` and expose them as gauges."""

    try:
        if not target:
            raise MissingTargetParameter()
        client = Dump1090Client.from_target(target, transport=transport)
    except ClientError as exc:
        logger.info("Rejected scrape: target=%r error=%s", target, exc)
        raise _http_error(status.HTTP_400_BAD_REQUEST, exc) from exc

    try:
        records = await fetch_until_disconnect(
            request, client, deadline=_scrape_deadline(request)
        )
    except ScrapeCancelled as exc:
        logger.info("Abandoned scrape of %s: %s", target, exc)
        return Response(status_code=CLIENT_CLOSED_REQUEST)
    except UpstreamError as exc:
        logger.error("Failed to get data from dump1090 at %s: %s", target, exc)
        raise _http_error(status.HTTP_500_INTERNAL_SERVER_ERROR, exc) from exc

    metrics = build_scrape_metrics(records)
    body, content_type = metrics.render(request.headers.get("accept"))
    logger.info(
        "Scraped %s: records=%s exported=%s skipped=%s",
        target,
        len(records),
        metrics.emitted,
        metrics.skipped,
    )
    return Response(content=body, media_type=content_type)
