"""Liveness, console and metrics endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from patchbridge.api.dependencies import get_facade
from patchbridge.models import ConsoleEntry, ConsoleResponse, StatusResponse
from patchbridge.orchestration.facade import PatcherFacade

router = APIRouter(tags=["status"])


@router.get("/", response_model=StatusResponse)
async def healthcheck() -> StatusResponse:
    """Liveness probe."""

    return StatusResponse()


@router.get("/console", response_model=ConsoleResponse)
async def read_console(
    level: str = Query("info", description="Minimum level: info, warning or error"),
    since_last_call: bool = Query(False, description="Only messages newer than the previous such call"),
    facade: PatcherFacade = Depends(get_facade),
) -> ConsoleResponse:
    """Return buffered host console output."""

    messages, overflow = facade.read_console(level, since_last_call)
    return ConsoleResponse(
        messages=[ConsoleEntry(**message.to_dict()) for message in messages],
        overflow=overflow,
    )


@router.get("/metrics", include_in_schema=False)
async def metrics() -> Response:
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
