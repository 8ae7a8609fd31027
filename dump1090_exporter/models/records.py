"""Aircraft record models for dump1090 telemetry."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


def _fold_keys(data: dict[str, Any]) -> dict[str, Any]:
    """Lower-case keys so ``Hex`` and ``hex`` land on the same field.

    An exact lower-case key wins over a differently cased duplicate. Null
    values are dropped so the field falls back to its zero value.
    """

    folded: dict[str, Any] = {}
    for key, value in data.items():
        if not isinstance(key, str) or value is None:
            continue
        name = key.lower()
        if name not in folded or key == name:
            folded[name] = value
    return folded


# Receivers are decoded into 64-bit fields; anything wider is malformed.
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def _int64(**kwargs: Any) -> Any:
    return Field(default=0, ge=INT64_MIN, le=INT64_MAX, **kwargs)


class RawRecord(BaseModel):
    """One aircraft entry as served by ``/dump1090/data.json``. Untrusted."""

    hex: str = Field(default="", description="ICAO 24-bit address")
    squawk: str = Field(default="", description="Transponder code")
    flight: str = Field(
        default="", description="Callsign, possibly space padded"
    )
    latitude: float = Field(default=0.0, alias="lat", allow_inf_nan=False)
    longitude: float = Field(default=0.0, alias="lon", allow_inf_nan=False)
    valid_position: int = _int64(
        alias="validposition", description="Non-zero when lat/lon are set"
    )
    altitude: int = _int64(description="Altitude in feet")
    vertical_rate: int = _int64(alias="vert_rate")
    track: int = _int64(description="Heading in degrees")
    valid_track: int = _int64(
        alias="validtrack", description="Non-zero when track is set"
    )
    speed: int = _int64(description="Ground speed in knots")
    messages: int = _int64(description="Messages received from the aircraft")
    seen: int = _int64(description="Seconds since last message")

    model_config = ConfigDict(extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _case_insensitive_keys(cls, data: Any) -> Any:
        # A null array element decodes to an all-zero record.
        if data is None:
            return {}
        if isinstance(data, dict):
            return _fold_keys(data)
        return data


class NormalizedRecord(BaseModel):
    """Cleaned aircraft record.

    When ``valid_position`` is false the latitude and longitude carry no
    information; the same holds for ``track`` when ``valid_track`` is false.
    Use :attr:`position` and :attr:`heading` to read them safely.
    """

    hex: str
    squawk: str
    flight: str
    latitude: float
    longitude: float
    valid_position: bool
    altitude: int
    vertical_rate: int
    track: int
    valid_track: bool
    speed: int
    messages: int
    seen: int

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_raw(cls, raw: RawRecord) -> "NormalizedRecord":
        # Any non-zero validity flag counts as true.
        return cls(
            hex=raw.hex,
            squawk=raw.squawk,
            flight=raw.flight.strip(" "),
            latitude=raw.latitude,
            longitude=raw.longitude,
            valid_position=raw.valid_position != 0,
            altitude=raw.altitude,
            vertical_rate=raw.vertical_rate,
            track=raw.track,
            valid_track=raw.valid_track != 0,
            speed=raw.speed,
            messages=raw.messages,
            seen=raw.seen,
        )

    @property
    def position(self) -> Optional[tuple[float, float]]:
        if not self.valid_position:
            return None
        return (self.latitude, self.longitude)

    @property
    def heading(self) -> Optional[int]:
        if not self.valid_track:
            return None
        return self.track

    @property
    def is_reportable(self) -> bool:
        """True when both position and track can be exported."""
        return self.valid_position and self.valid_track


__all__ = ["NormalizedRecord", "RawRecord"]
