"""Patchline endpoints."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Body, Depends

from patchbridge.api.dependencies import get_facade
from patchbridge.models import AckResponse, ConnectionRequest
from patchbridge.orchestration.facade import PatcherFacade

router = APIRouter(prefix="/connections", tags=["connections"])


@router.post("", response_model=AckResponse)
async def connect(
    body: Optional[ConnectionRequest] = Body(None),
    facade: PatcherFacade = Depends(get_facade),
) -> AckResponse:
    """Connect `src_varname`'s outlet to `dst_varname`'s inlet (both default to 0)."""

    body = body or ConnectionRequest()
    body.require(truthy=("src_varname", "dst_varname"))
    await facade.connect(body.src_varname, body.dst_varname, body.outlet, body.inlet)
    return AckResponse()


@router.delete("", response_model=AckResponse)
async def disconnect(
    body: Optional[ConnectionRequest] = Body(None),
    facade: PatcherFacade = Depends(get_facade),
) -> AckResponse:
    """Remove the patchline matching all four endpoints; absent lines are ignored."""

    body = body or ConnectionRequest()
    body.require(truthy=("src_varname", "dst_varname"))
    await facade.disconnect(body.src_varname, body.dst_varname, body.outlet, body.inlet)
    return AckResponse()
