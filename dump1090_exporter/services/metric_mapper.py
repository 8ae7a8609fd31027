"""Map normalized aircraft records onto a per-scrape Prometheus registry."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable

from prometheus_client import CollectorRegistry, Gauge
from prometheus_client.exposition import choose_encoder

from dump1090_exporter.models.records import NormalizedRecord

logger = logging.getLogger("dump1090_exporter.services.metric_mapper")

GAUGE_LABELS = ("flight", "hex", "squawk")
UNKNOWN_FLIGHT = "UNKNOWN"


@dataclass(frozen=True)
class GaugeSpec:
    """One exported gauge family and how to read it from a record."""

    name: str
    documentation: str
    value: Callable[[NormalizedRecord], float]


GAUGE_SPECS: tuple[GaugeSpec, ...] = (
    GaugeSpec("dump1090_latitude", "Latitude of the aircraft", lambda r: r.latitude),
    GaugeSpec("dump1090_longitude", "Longitude of the aircraft", lambda r: r.longitude),
    GaugeSpec("dump1090_altitude", "Altitude of the aircraft", lambda r: r.altitude),
    GaugeSpec(
        "dump1090_vertical_rate",
        "Vertical rate of the aircraft",
        lambda r: r.vertical_rate,
    ),
    GaugeSpec("dump1090_track", "Track of the aircraft", lambda r: r.track),
    GaugeSpec("dump1090_speed", "Speed of the aircraft", lambda r: r.speed),
    GaugeSpec("dump1090_messages", "Messages of the aircraft", lambda r: r.messages),
    GaugeSpec("dump1090_seen", "Seen of the aircraft", lambda r: r.seen),
)


def label_values(record: NormalizedRecord) -> dict[str, str]:
    """Label set for a record; an empty callsign becomes ``UNKNOWN``."""

    return {
        "flight": record.flight or UNKNOWN_FLIGHT,
        "hex": record.hex,
        "squawk": record.squawk,
    }


class ScrapeMetrics:
    """Gauges for exactly one scrape.

    Every instance owns a fresh ``CollectorRegistry``; nothing is registered
    on the process-wide default registry, so concurrent scrapes of different
    receivers never see each other's series. Drop the instance once rendered.
    """

    def __init__(self) -> None:
        self.registry = CollectorRegistry(auto_describe=True)
        self.gauges: dict[str, Gauge] = {
            spec.name: Gauge(
                spec.name, spec.documentation, GAUGE_LABELS, registry=self.registry
            )
            for spec in GAUGE_SPECS
        }
        self.emitted = 0
        self.skipped = 0

    def observe(self, record: NormalizedRecord) -> bool:
        """Set all gauges for ``record``, or none of them.

        Records without both a valid position and a valid track are skipped
        entirely, including their non-positional values.
        """

        if not record.is_reportable:
            self.skipped += 1
            logger.debug(
                "Skipping aircraft %s: valid_position=%s valid_track=%s",
                record.hex,
                record.valid_position,
                record.valid_track,
            )
            return False

        labels = label_values(record)
        values = [(spec.name, float(spec.value(record))) for spec in GAUGE_SPECS]
        for name, value in values:
            self.gauges[name].labels(**labels).set(value)
        self.emitted += 1
        logger.debug("Exported aircraft %s", record)
        return True

    def observe_all(self, records: Iterable[NormalizedRecord]) -> "ScrapeMetrics":
        for record in records:
            self.observe(record)
        return self

    def render(self, accept_header: str | None = None) -> tuple[bytes, str]:
        """Return the exposition body and its content type.

        The format follows ``accept_header`` the way Prometheus negotiates
        it: OpenMetrics when asked for, the classic text format otherwise.
        """

        encoder, content_type = choose_encoder(accept_header or "")
        return encoder(self.registry), content_type


def build_scrape_metrics(records: Iterable[NormalizedRecord]) -> ScrapeMetrics:
    """Create a new registry populated from ``records``."""

    metrics = ScrapeMetrics().observe_all(records)
    logger.debug(
        "Built scrape registry: emitted=%s skipped=%s", metrics.emitted, metrics.skipped
    )
    return metrics


__all__ = [
    "GAUGE_LABELS",
    "GAUGE_SPECS",
    "GaugeSpec",
    "ScrapeMetrics",
    "UNKNOWN_FLIGHT",
    "build_scrape_metrics",
    "label_values",
]
