"""Service-layer helpers for the dump1090 exporter."""

from .metric_mapper import (
    GAUGE_LABELS,
    GAUGE_SPECS,
    UNKNOWN_FLIGHT,
    ScrapeMetrics,
    build_scrape_metrics,
    label_values,
)

__all__ = [
    "GAUGE_LABELS",
    "GAUGE_SPECS",
    "ScrapeMetrics",
    "UNKNOWN_FLIGHT",
    "build_scrape_metrics",
    "label_values",
]
