"""Dispatch layer between the HTTP routes and the host (or the mirror)."""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence, Tuple

from patchbridge.core.config import settings
from patchbridge.orchestration.console import ConsoleBuffer, ConsoleMessage
from patchbridge.orchestration.consumer import InboundDispatcher
from patchbridge.orchestration.correlator import QueryCorrelator
from patchbridge.orchestration.messages import QueryAction
from patchbridge.orchestration.transport import HostTransport
from patchbridge.patcher.commands import PatcherCommands
from patchbridge.patcher.geometry import Number
from patchbridge.patcher.mirror import MirrorPatcher

logger = logging.getLogger(__name__)


class PatcherFacade:
    """Serves every patcher operation from the host when attached, else from the mirror."""

    def __init__(
        self,
        transport: Optional[HostTransport] = None,
        *,
        mirror: Optional[MirrorPatcher] = None,
        console: Optional[ConsoleBuffer] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.transport = transport
        self.mirror = mirror if mirror is not None else MirrorPatcher()
        self.console = console if console is not None else ConsoleBuffer(settings.CONSOLE_BUFFER_SIZE)
        self.correlator = QueryCorrelator(transport, timeout=timeout)
        self.commands = PatcherCommands(transport, self.mirror)
        self.inbound = InboundDispatcher(self.correlator, self.console)

    @property
    def host_attached(self) -> bool:
        return self.transport is not None and self.transport.available

    @property
    def mode(self) -> str:
        return self.transport.name if self.host_attached else "standalone"

    async def start(self) -> None:
        if self.transport is not None:
            await self.transport.start(self.inbound.dispatch)
        logger.info("Patcher facade running in %s mode", self.mode)

    async def stop(self) -> None:
        if self.transport is not None:
            await self.transport.stop()
        self.correlator.cancel_all()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def list_objects(self) -> Any:
        if not self.host_attached:
            return self.mirror.snapshot()
        return await self.correlator.issue(QueryAction.OBJECTS_IN_PATCH)

    async def list_selected(self) -> Any:
        if not self.host_attached:
            # Selection only exists in the host's editor.
            return {"boxes": [], "lines": []}
        return await self.correlator.issue(QueryAction.OBJECTS_IN_SELECTED)

    async def get_attributes(self, varname: str) -> Any:
        if not self.host_attached:
            return self.mirror.attributes(varname)
        return await self.correlator.issue(QueryAction.OBJECT_ATTRIBUTES, varname)

    async def get_bounds(self) -> Any:
        if not self.host_attached:
            return self.mirror.bounds()
        return await self.correlator.issue(QueryAction.AVOID_RECT_POSITION)

    def read_console(self, level: str = "info", since_last_call: bool = False) -> Tuple[List[ConsoleMessage], bool]:
        return self.console.read(level, since_last_call)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def add_object(self, varname: str, obj_type: str, position: Sequence[Number], args: Any = None) -> None:
        await self.commands.new_object(varname, obj_type, position, args)
        logger.info("[add_object] %s (%s) at %s", varname, obj_type, list(position))

    async def remove_object(self, varname: str) -> None:
        await self.commands.delete(varname)
        logger.info("[remove_object] %s", varname)

    async def connect(self, src: str, dst: str, outlet: int = 0, inlet: int = 0) -> None:
        await self.commands.connect(src, outlet, dst, inlet)
        logger.info("[connect] %s:%d -> %s:%d", src, outlet, dst, inlet)

    async def disconnect(self, src: str, dst: str, outlet: int = 0, inlet: int = 0) -> None:
        await self.commands.disconnect(src, outlet, dst, inlet)
        logger.info("[disconnect] %s:%d x %s:%d", src, outlet, dst, inlet)

    async def set_attribute(self, varname: str, name: str, value: Any) -> None:
        await self.commands.set_attribute(varname, name, value)
        logger.info("[set_attr] %s.%s = %r", varname, name, value)

    async def set_text(self, varname: str, text: str) -> None:
        await self.commands.set_text(varname, text)
        logger.info("[set_text] %s = %r", varname, text)

    async def send_message(self, varname: str, message: Any) -> None:
        await self.commands.send_message(varname, message)
        logger.info("[send_message] %s <- %r", varname, message)

    async def send_bang(self, varname: str) -> None:
        await self.commands.send_bang(varname)
        logger.info("[bang] %s", varname)

    async def set_number(self, varname: str, num: Number) -> None:
        await self.commands.set_number(varname, num)
        logger.info("[set_number] %s = %s", varname, num)
