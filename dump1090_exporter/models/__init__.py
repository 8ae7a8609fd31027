"""Pydantic models for the dump1090 exporter."""

from .records import NormalizedRecord, RawRecord

__all__ = ["NormalizedRecord", "RawRecord"]
