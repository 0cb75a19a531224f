"""HTTP route definitions for the service."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Request, status
from fastapi.responses import JSONResponse

from app.schemas import ErrorBody, WriteAccepted
from services.ingestion import IngestionService, InvalidReadingError
from storage.influx import StoreWriteError

INVALID_INPUT_MESSAGE = "Invalid input data"
STORE_ERROR_MESSAGE = "Error writing data to InfluxDB"
WRITE_OK_MESSAGE = "Data written successfully"

router = APIRouter()


def get_ingestion_service(request: Request) -> IngestionService:
    return request.app.state.ingestion


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorBody(error=message).model_dump())


@router.post(
    "/data",
    response_model=WriteAccepted,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorBody},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorBody},
    },
    summary="Write one weather reading to the time-series store.",
)
async def submit_reading(
    payload: Any = Body(None),
    service: IngestionService = Depends(get_ingestion_service),
) -> Any:
    try:
        await service.submit(payload)
    except InvalidReadingError:
        return _error(status.HTTP_400_BAD_REQUEST, INVALID_INPUT_MESSAGE)
    except StoreWriteError:
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, STORE_ERROR_MESSAGE)
    return WriteAccepted(message=WRITE_OK_MESSAGE)
