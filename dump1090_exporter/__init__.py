"""Multi-target Prometheus exporter for dump1090 aircraft receivers."""

__version__ = "0.1.0"
