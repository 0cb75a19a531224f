"""Write boundary to the InfluxDB time-series store."""

from __future__ import annotations

import logging
from typing import List, Optional, Protocol

from influxdb_client import Point
from influxdb_client.client.influxdb_client_async import InfluxDBClientAsync

from settings import Settings

logger = logging.getLogger(__name__)


class StoreWriteError(Exception):
    """Raised when the store does not acknowledge a flush."""


class AsyncWriteApi(Protocol):
    async def write(self, bucket: str, org: Optional[str] = None, record=None, **kwargs) -> bool:
        ...


class WriteBuffer:
    """Write handle bound to one organization and bucket.

    ``submit`` only buffers. ``flush`` detaches everything pending at the time
    of the call before suspending, so concurrent callers each send the points
    they submitted and see only their own failures.
    """

    def __init__(self, write_api: AsyncWriteApi, org: str, bucket: str) -> None:
        self.org = org
        self.bucket = bucket
        self._write_api = write_api
        self._pending: List[Point] = []

    @property
    def pending(self) -> int:
        return len(self._pending)

    def submit(self, point: Point) -> None:
        self._pending.append(point)

    async def flush(self) -> None:
        batch, self._pending = self._pending, []
        if not batch:
            return
        try:
            acknowledged = await self._write_api.write(
                bucket=self.bucket, org=self.org, record=batch
            )
        except Exception as exc:
            raise StoreWriteError(str(exc) or exc.__class__.__name__) from exc
        if acknowledged is False:
            raise StoreWriteError(f"Store rejected write of {len(batch)} point(s).")
        logger.debug(
            "Flushed points", extra={"point_count": len(batch), "bucket": self.bucket}
        )


class InfluxStore:
    """Owns the long-lived async client shared by all requests."""

    def __init__(self, client: InfluxDBClientAsync) -> None:
        self._client = client

    def write_handle(self, org: str, bucket: str) -> WriteBuffer:
        return WriteBuffer(self._client.write_api(), org=org, bucket=bucket)

    async def close(self) -> None:
        await self._client.close()


def build_store(settings: Settings) -> InfluxStore:
    """Construct the store client; must be called from a running event loop."""
    logger.info(
        "Connecting to InfluxDB",
        extra={"url": settings.influx_url, "org": settings.influx_org, "bucket": settings.influx_bucket},
    )
    client = InfluxDBClientAsync(
        url=settings.influx_url,
        token=settings.influx_token,
        org=settings.influx_org,
    )
    return InfluxStore(client)
