"""Error taxonomy for scrape handling.

Client errors describe a bad scrape request and map to HTTP 400. Upstream
errors describe a failed fetch from the receiver and map to HTTP 500; their
details belong in the process log, never in the response body.
"""

from __future__ import annotations


class ExporterError(Exception):
    """Base class for exporter errors.

    ``message`` is safe to return to the scrape caller; ``str(error)`` may
    carry upstream detail and is meant for logs only.
    """

    code = "exporter_error"
    message = "Exporter error"

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail or self.message)


class ClientError(ExporterError):
    """The scrape request itself is unusable."""


class MissingTargetParameter(ClientError):
    code = "target_missing"
    message = "Target parameter is missing"


class InvalidTargetAddress(ClientError):
    code = "target_invalid"
    message = "Target parameter is wrong"


class UpstreamError(ExporterError):
    """Fetching records from the receiver failed."""

    code = "upstream_failed"
    message = "Failed to get data from dump1090"


class UpstreamUnreachable(UpstreamError):
    """Network failure or timeout talking to the receiver."""


class UpstreamHTTPError(UpstreamError):
    """The receiver answered with a non-2xx status."""

    def __init__(self, status_code: int, detail: str | None = None) -> None:
        super().__init__(detail or f"Upstream returned HTTP {status_code}")
        self.status_code = status_code


class MalformedUpstreamPayload(UpstreamError):
    """The receiver body is not a JSON array of aircraft records."""


class ScrapeCancelled(ExporterError):
    """The scrape caller went away before records arrived."""

    code = "scrape_cancelled"
    message = "Scrape cancelled"


__all__ = [
    "ClientError",
    "ExporterError",
    "InvalidTargetAddress",
    "MalformedUpstreamPayload",
    "MissingTargetParameter",
    "ScrapeCancelled",
    "UpstreamError",
    "UpstreamHTTPError",
    "UpstreamUnreachable",
]
