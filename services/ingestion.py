"""Turns validated readings into flushed weather points."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from app.schemas import ReadingIn
from models.records import WeatherPoint
from storage.influx import StoreWriteError, WriteBuffer

logger = logging.getLogger(__name__)


class InvalidReadingError(ValueError):
    """Raised when an inbound payload is not a usable reading."""


class IngestionService:
    """Validates a reading, writes one point and waits for the store to acknowledge it."""

    def __init__(self, writer: WriteBuffer) -> None:
        self.writer = writer

    @staticmethod
    def parse_reading(payload: Any) -> ReadingIn:
        if not isinstance(payload, dict):
            raise InvalidReadingError("Reading payload must be a JSON object.")
        try:
            return ReadingIn.model_validate(payload)
        except ValidationError as exc:
            raise InvalidReadingError(str(exc)) from exc

    async def submit(self, payload: Any) -> WeatherPoint:
        try:
            reading = self.parse_reading(payload)
        except InvalidReadingError as exc:
            logger.debug("Rejected reading", extra={"reason": str(exc), "status": 400})
            raise

        try:
            point = WeatherPoint(
                location=reading.location,
                temperature=float(reading.temperature),
                humidity=float(reading.humidity),
            )
            self.writer.submit(point.to_point())
        except (OverflowError, ValueError) as exc:
            # Unrepresentable values fail the write rather than the validation.
            self._log_write_error(reading.location, exc)
            raise StoreWriteError(str(exc)) from exc

        try:
            await self.writer.flush()
        except StoreWriteError as exc:
            self._log_write_error(point.location, exc)
            raise

        logger.info(
            "Data written to InfluxDB",
            extra={"location": point.location, "measurement": point.measurement},
        )
        return point

    @staticmethod
    def _log_write_error(location: str, exc: Exception) -> None:
        logger.error(
            "Error writing data to InfluxDB",
            extra={"location": location, "reason": str(exc), "status": 500},
        )
