"""Observer location value type."""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["Location"]


@dataclass(frozen=True)
class Location:
    """Observer on the Earth's surface.

    ``latitude`` and ``longitude`` are in degrees (north and east positive),
    ``elevation`` in meters above sea level and ``zone`` is the offset of the
    location's standard time from universal time, in days.
    """

    latitude: float
    longitude: float
    elevation: float = 0.0
    zone: float = 0.0

    def __post_init__(self) -> None:
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"latitude must be within [-90, 90]: {self.latitude}")
        if not -180.0 < self.longitude <= 180.0:
            raise ValueError(f"longitude must be within (-180, 180]: {self.longitude}")
        if self.elevation < 0.0:
            raise ValueError(f"elevation must be non-negative: {self.elevation}")
        if not -1.0 < self.zone < 1.0:
            raise ValueError(f"zone must be less than a day from UT: {self.zone}")

    @classmethod
    def from_hours(
        cls, latitude: float, longitude: float, elevation: float = 0.0, zone_hours: float = 0.0
    ) -> "Location":
        return cls(latitude, longitude, elevation, zone_hours / 24.0)
