from __future__ import annotations

import asyncio
from typing import Any, Iterator, List, Optional, Tuple

import pytest
from fastapi.testclient import TestClient
from influxdb_client import Point

from settings import get_settings
from storage.influx import WriteBuffer


class FakeWriteApi:
    """Records every write call; optionally fails the first ``fail_times`` calls."""

    def __init__(self, error: Optional[Exception] = None, fail_times: int = 0) -> None:
        self.calls: List[Tuple[str, Optional[str], List[Point]]] = []
        self.error = error
        self.fail_times = fail_times
        self.result = True

    async def write(self, bucket: str, org: Optional[str] = None, record: Any = None, **kwargs: Any) -> bool:
        self.calls.append((bucket, org, list(record)))
        # Yield so concurrent writers interleave.
        await asyncio.sleep(0)
        if self.error is not None and self.fail_times > 0:
            self.fail_times -= 1
            raise self.error
        return self.result

    @property
    def points(self) -> List[Point]:
        return [point for _, _, batch in self.calls for point in batch]


class FakeStore:
    def __init__(self, write_api: FakeWriteApi) -> None:
        self.write_api = write_api
        self.handles: List[Tuple[str, str]] = []
        self.closed = False

    def write_handle(self, org: str, bucket: str) -> WriteBuffer:
        self.handles.append((org, bucket))
        return WriteBuffer(self.write_api, org=org, bucket=bucket)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def influx_env(monkeypatch) -> Iterator[None]:
    monkeypatch.setenv("INFLUX_URL", "http://influx.test:8086")
    monkeypatch.setenv("INFLUX_TOKEN", "secret-token")
    monkeypatch.setenv("INFLUX_ORG", "home")
    monkeypatch.setenv("INFLUX_BUCKET", "sensors")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def write_api() -> FakeWriteApi:
    return FakeWriteApi()


@pytest.fixture
def fake_store(write_api: FakeWriteApi) -> FakeStore:
    return FakeStore(write_api)


@pytest.fixture
def api_client(influx_env, fake_store: FakeStore, monkeypatch) -> Iterator[TestClient]:
    from app.main import create_app

    monkeypatch.setattr("app.main.build_store", lambda _settings: fake_store)

    app = create_app()
    with TestClient(app) as client:
        yield client
