from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv


_INFLUX_URL_ENV = "INFLUX_URL"
_INFLUX_TOKEN_ENV = "INFLUX_TOKEN"
_INFLUX_ORG_ENV = "INFLUX_ORG"
_INFLUX_BUCKET_ENV = "INFLUX_BUCKET"
_HOST_ENV = "HOST"
_PORT_ENV = "PORT"
_LOG_LEVEL_ENV = "LOG_LEVEL"

DEFAULT_PORT = 6969


@dataclass(frozen=True)
class Settings:
    influx_url: str
    influx_token: Optional[str]
    influx_org: str
    influx_bucket: str
    host: str
    port: int
    log_level: str


def _read_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or default


def _read_optional_env(name: str, default: Optional[str]) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or None


def _read_port(default: int) -> int:
    value = os.getenv(_PORT_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = int(candidate)
    except ValueError:
        return default
    return parsed if 0 < parsed < 65536 else default


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    # Values already present in the environment take precedence over .env.
    load_dotenv()
    return Settings(
        influx_url=_read_str_env(_INFLUX_URL_ENV, ""),
        influx_token=_read_optional_env(_INFLUX_TOKEN_ENV, None),
        influx_org=_read_str_env(_INFLUX_ORG_ENV, ""),
        influx_bucket=_read_str_env(_INFLUX_BUCKET_ENV, ""),
        host=_read_str_env(_HOST_ENV, "0.0.0.0"),
        port=_read_port(DEFAULT_PORT),
        log_level=_read_log_level("INFO"),
    )
