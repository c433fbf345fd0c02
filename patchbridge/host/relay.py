"""Applies script commands from the facade to a host document."""

from __future__ import annotations

import logging
from numbers import Number as _NumberType
from typing import Any, Callable, Dict

from patchbridge.core.exceptions import UnknownCommandError
from patchbridge.host.document import HostDocument
from patchbridge.orchestration.messages import ScriptCommand
from patchbridge.patcher.geometry import DEFAULT_BOX_HEIGHT, DEFAULT_BOX_WIDTH

logger = logging.getLogger(__name__)


class MutationRelay:
    """Translate `script <command> ...` messages into document edits.

    The relay never answers; callers observe the effect with a later query.
    """

    def __init__(self, document: HostDocument) -> None:
        self.document = document
        self._commands: Dict[ScriptCommand, Callable[..., None]] = {
            ScriptCommand.NEW: self._new,
            ScriptCommand.DELETE: self._delete,
            ScriptCommand.CONNECT: self._connect,
            ScriptCommand.DISCONNECT: self._disconnect,
            ScriptCommand.SENDBOX: self._sendbox,
            ScriptCommand.SEND: self._send,
        }

    def apply(self, command: str, *args: Any) -> None:
        try:
            handler = self._commands[ScriptCommand(command)]
        except ValueError as exc:
            raise UnknownCommandError("UNKNOWN_COMMAND", f"unknown script command: {command}") from exc
        try:
            handler(*args)
        except (TypeError, ValueError) as exc:
            raise UnknownCommandError(
                "BAD_ARGUMENTS", f"wrong arguments for script {command}", {"args": list(args)}
            ) from exc

    def _new(self, varname: str, maxclass: str, *tokens: Any) -> None:
        # The facade follows up with `sendbox patching_rect` to place the box.
        self.document.create_node(varname, maxclass, [0, 0, DEFAULT_BOX_WIDTH, DEFAULT_BOX_HEIGHT], tokens)

    def _delete(self, varname: str) -> None:
        self.document.delete_node(varname)

    def _connect(self, src: str, outlet: Any, dst: str, inlet: Any) -> None:
        self.document.connect(src, int(outlet), dst, int(inlet))

    def _disconnect(self, src: str, outlet: Any, dst: str, inlet: Any) -> None:
        self.document.disconnect(src, int(outlet), dst, int(inlet))

    def _sendbox(self, varname: str, name: str, *values: Any) -> None:
        value = values[0] if len(values) == 1 else list(values)
        self.document.set_attribute(varname, name, value)

    def _send(self, varname: str, *payload: Any) -> None:
        if not payload:
            logger.debug("Ignoring empty send to %s", varname)
            return
        if list(payload) == ["bang"]:
            self.document.deliver_trigger(varname)
            return
        if payload[0] == "set":
            rest = payload[1:]
            if len(rest) == 1 and _is_number(rest[0]):
                self.document.set_number(varname, rest[0])
            else:
                self.document.replace_text(varname, " ".join(str(token) for token in rest))
            return
        self.document.deliver_message(varname, payload)


def _is_number(value: Any) -> bool:
    return isinstance(value, _NumberType) and not isinstance(value, bool)
