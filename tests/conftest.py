from __future__ import annotations

from typing import Any, List, Tuple

import httpx
import pytest
import pytest_asyncio

from patchbridge.api.main import create_app
from patchbridge.host.document import InMemoryDocument
from patchbridge.orchestration.facade import PatcherFacade
from patchbridge.orchestration.transport import Dispatch, HostTransport, LoopbackHostTransport


class SilentTransport(HostTransport):
    """Accepts every message and never answers."""

    name = "silent"

    def __init__(self) -> None:
        self.sent: List[Tuple[Any, ...]] = []
        self.dispatch: Dispatch | None = None

    @property
    def available(self) -> bool:
        return self.dispatch is not None

    async def start(self, dispatch: Dispatch) -> None:
        self.dispatch = dispatch

    async def stop(self) -> None:
        self.dispatch = None

    async def send(self, selector: str, *args: Any) -> None:
        self.sent.append((selector, *args))


@pytest.fixture
def standalone_facade() -> PatcherFacade:
    return PatcherFacade()


@pytest.fixture
def document() -> InMemoryDocument:
    return InMemoryDocument()


@pytest_asyncio.fixture
async def loopback_facade(document):
    facade = PatcherFacade(LoopbackHostTransport(document), timeout=1.0)
    await facade.start()
    yield facade
    await facade.stop()


@pytest.fixture
def silent_transport() -> SilentTransport:
    return SilentTransport()


@pytest_asyncio.fixture
async def silent_facade(silent_transport):
    facade = PatcherFacade(silent_transport, timeout=0.05)
    await facade.start()
    yield facade
    await facade.stop()


def _client_for(facade: PatcherFacade) -> httpx.AsyncClient:
    app = create_app(facade)
    return httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://patchbridge.test")


@pytest_asyncio.fixture
async def client(standalone_facade):
    async with _client_for(standalone_facade) as http:
        yield http


@pytest_asyncio.fixture
async def host_client(loopback_facade):
    async with _client_for(loopback_facade) as http:
        yield http


@pytest_asyncio.fixture
async def silent_client(silent_facade):
    async with _client_for(silent_facade) as http:
        yield http
