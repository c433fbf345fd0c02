"""Box endpoints: listing, lookup, creation, deletion and per-box edits."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Body, Depends

from patchbridge.api.dependencies import get_facade
from patchbridge.models import (
    AckResponse,
    AttributeRequest,
    MessageRequest,
    NewObjectRequest,
    NumberRequest,
    ResultsResponse,
    TextRequest,
)
from patchbridge.orchestration.facade import PatcherFacade

router = APIRouter(prefix="/objects", tags=["objects"])


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


@router.get("", response_model=ResultsResponse)
async def list_objects(facade: PatcherFacade = Depends(get_facade)) -> ResultsResponse:
    """Every box and patchline in the patcher."""

    return ResultsResponse(results=await facade.list_objects())


@router.get("/selected", response_model=ResultsResponse)
async def list_selected(facade: PatcherFacade = Depends(get_facade)) -> ResultsResponse:
    """Boxes currently selected in the host editor."""

    return ResultsResponse(results=await facade.list_selected())


@router.get("/bounds", response_model=ResultsResponse)
async def get_bounds(facade: PatcherFacade = Depends(get_facade)) -> ResultsResponse:
    """Bounding rectangle `[left, top, right, bottom]` around all boxes."""

    return ResultsResponse(results=await facade.get_bounds())


@router.get("/{varname}/attributes", response_model=ResultsResponse)
async def get_attributes(varname: str, facade: PatcherFacade = Depends(get_facade)) -> ResultsResponse:
    """Class and rectangle of one box, or null when no such box exists."""

    return ResultsResponse(results=await facade.get_attributes(varname))


# ---------------------------------------------------------------------------
# Mutations
# ---------------------------------------------------------------------------


@router.post("", response_model=AckResponse)
async def add_object(
    body: Optional[NewObjectRequest] = Body(None),
    facade: PatcherFacade = Depends(get_facade),
) -> AckResponse:
    body = body or NewObjectRequest()
    body.require(truthy=("obj_type", "position", "varname"))
    await facade.add_object(body.varname, body.obj_type, body.position, body.args)
    return AckResponse()


@router.delete("/{varname}", response_model=AckResponse)
async def remove_object(varname: str, facade: PatcherFacade = Depends(get_facade)) -> AckResponse:
    await facade.remove_object(varname)
    return AckResponse()


@router.patch("/{varname}/attributes", response_model=AckResponse)
async def set_attribute(
    varname: str,
    body: Optional[AttributeRequest] = Body(None),
    facade: PatcherFacade = Depends(get_facade),
) -> AckResponse:
    body = body or AttributeRequest()
    body.require(truthy=("attr_name",), present=("attr_value",))
    await facade.set_attribute(varname, body.attr_name, body.attr_value)
    return AckResponse()


@router.patch("/{varname}/text", response_model=AckResponse)
async def set_text(
    varname: str,
    body: Optional[TextRequest] = Body(None),
    facade: PatcherFacade = Depends(get_facade),
) -> AckResponse:
    body = body or TextRequest()
    body.require(non_null=("new_text",))
    await facade.set_text(varname, body.new_text)
    return AckResponse()


@router.post("/{varname}/message", response_model=AckResponse)
async def send_message(
    varname: str,
    body: Optional[MessageRequest] = Body(None),
    facade: PatcherFacade = Depends(get_facade),
) -> AckResponse:
    body = body or MessageRequest()
    body.require(present=("message",))
    await facade.send_message(varname, body.message)
    return AckResponse()


@router.post("/{varname}/bang", response_model=AckResponse)
async def send_bang(varname: str, facade: PatcherFacade = Depends(get_facade)) -> AckResponse:
    await facade.send_bang(varname)
    return AckResponse()


@router.patch("/{varname}/number", response_model=AckResponse)
async def set_number(
    varname: str,
    body: Optional[NumberRequest] = Body(None),
    facade: PatcherFacade = Depends(get_facade),
) -> AckResponse:
    body = body or NumberRequest()
    body.require(non_null=("num",))
    await facade.set_number(varname, body.num)
    return AckResponse()
