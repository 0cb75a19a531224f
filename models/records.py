"""Domain models shared across services."""

from __future__ import annotations

import math
from dataclasses import dataclass

from influxdb_client import Point

WEATHER_MEASUREMENT = "weather"


@dataclass(frozen=True, slots=True)
class WeatherPoint:
    """A single weather sample destined for the time-series store.

    No timestamp is carried; the store stamps the point when it is written.
    """

    location: str
    temperature: float
    humidity: float
    measurement: str = WEATHER_MEASUREMENT

    def to_point(self) -> Point:
        """Render as an InfluxDB point: one ``location`` tag, two float fields.

        The client drops non-finite fields without complaint, so they are
        refused here instead.
        """
        for name in ("temperature", "humidity"):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise ValueError(f"Field {name!r} is not finite: {value!r}")
        return (
            Point(self.measurement)
            .tag("location", self.location)
            .field("temperature", float(self.temperature))
            .field("humidity", float(self.humidity))
        )
