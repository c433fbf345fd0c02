"""Patcher edits: script messages to the host, or direct edits to the mirror."""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from patchbridge.orchestration.messages import ScriptCommand, Selector, split_tokens
from patchbridge.orchestration.transport import HostTransport
from patchbridge.patcher.geometry import DEFAULT_BOX_HEIGHT, DEFAULT_BOX_WIDTH, Number
from patchbridge.patcher.mirror import MirrorPatcher

logger = logging.getLogger(__name__)

# Box classes whose displayed content is seeded from their creation arguments.
TEXT_SEEDED_CLASSES = frozenset({"message", "comment", "flonum"})
NUMERIC_CLASSES = frozenset({"flonum"})


class PatcherCommands:
    """Emit edits to the attached host, or apply them to the mirror in standalone mode.

    Host edits are fire-and-forget; nothing here waits for the host to act.
    """

    def __init__(self, transport: Optional[HostTransport], mirror: MirrorPatcher) -> None:
        self.transport = transport
        self.mirror = mirror

    @property
    def host_attached(self) -> bool:
        return self.transport is not None and self.transport.available

    async def new_object(self, varname: str, maxclass: str, position: Sequence[Number], args: Any = None) -> None:
        tokens = split_tokens(args)
        if not self.host_attached:
            self.mirror.add_box(varname, maxclass, position)
            return
        x, y = position[0], position[1]
        await self._script(ScriptCommand.NEW, varname, maxclass, *tokens)
        await self._script(ScriptCommand.SENDBOX, varname, "patching_rect", x, y, DEFAULT_BOX_WIDTH, DEFAULT_BOX_HEIGHT)
        if maxclass in TEXT_SEEDED_CLASSES:
            seed = [_numeric(token) for token in tokens] if maxclass in NUMERIC_CLASSES else tokens
            await self._script(ScriptCommand.SEND, varname, "set", *seed)

    async def delete(self, varname: str) -> None:
        if not self.host_attached:
            self.mirror.remove_box(varname)
            return
        await self._script(ScriptCommand.DELETE, varname)

    async def connect(self, src: str, outlet: int, dst: str, inlet: int) -> None:
        if not self.host_attached:
            self.mirror.connect(src, outlet, dst, inlet)
            return
        await self._script(ScriptCommand.CONNECT, src, outlet, dst, inlet)

    async def disconnect(self, src: str, outlet: int, dst: str, inlet: int) -> None:
        if not self.host_attached:
            self.mirror.disconnect(src, outlet, dst, inlet)
            return
        await self._script(ScriptCommand.DISCONNECT, src, outlet, dst, inlet)

    async def set_attribute(self, varname: str, name: str, value: Any) -> None:
        values = list(value) if isinstance(value, (list, tuple)) else [value]
        await self._host_only(ScriptCommand.SENDBOX, varname, name, *values)

    async def set_text(self, varname: str, text: str) -> None:
        await self._host_only(ScriptCommand.SEND, varname, "set", text)

    async def send_message(self, varname: str, message: Any) -> None:
        await self._host_only(ScriptCommand.SEND, varname, *split_tokens(message))

    async def send_bang(self, varname: str) -> None:
        await self._host_only(ScriptCommand.SEND, varname, "bang")

    async def set_number(self, varname: str, num: Number) -> None:
        await self._host_only(ScriptCommand.SEND, varname, "set", num)

    async def _host_only(self, command: ScriptCommand, *args: Any) -> None:
        if not self.host_attached:
            logger.debug("[standalone mode] %s %s not applied to mirror", command.value, args[0])
            return
        await self._script(command, *args)

    async def _script(self, command: ScriptCommand, *args: Any) -> None:
        assert self.transport is not None
        await self.transport.send(Selector.SCRIPT.value, command.value, *args)


def _numeric(token: Any) -> Any:
    if not isinstance(token, str):
        return token
    for cast in (int, float):
        try:
            return cast(token)
        except ValueError:
            continue
    return token
