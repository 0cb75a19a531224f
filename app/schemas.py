"""Pydantic schemas for the HTTP API layer."""

from __future__ import annotations

from typing import Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, StrictStr

# Strict types: numeric-looking strings and booleans are not numbers here.
Number = Union[StrictInt, StrictFloat]


class ReadingIn(BaseModel):
    """Inbound sensor reading posted to ``/data``."""

    model_config = ConfigDict(extra="ignore")

    location: StrictStr = Field(..., min_length=1, description="Tag value identifying the sensor site.")
    temperature: Number
    humidity: Number


class WriteAccepted(BaseModel):
    """Body returned once the point has been flushed to the store."""

    message: str = Field(..., examples=["Data written successfully"])


class ErrorBody(BaseModel):
    """Body returned for any rejected or failed request."""

    error: str = Field(..., examples=["Invalid input data"])
