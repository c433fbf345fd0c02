from __future__ import annotations

from fastapi import Request

from patchbridge.orchestration.facade import PatcherFacade


async def get_facade(request: Request) -> PatcherFacade:
    return request.app.state.facade
