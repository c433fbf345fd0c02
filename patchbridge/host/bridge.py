"""Host-side message handler: answers queries and applies script commands."""

from __future__ import annotations

import logging
from typing import Any, Callable

from patchbridge.core.exceptions import BridgeError
from patchbridge.host.document import HostDocument
from patchbridge.host.relay import MutationRelay
from patchbridge.host.walker import GraphWalker
from patchbridge.orchestration.messages import Selector, encode_reply

logger = logging.getLogger(__name__)

ReplyCallback = Callable[..., None]


class HostBridge:
    """Receives `query` and `script` messages the way the host's script object does.

    Queries are answered with `response <json>` through `reply`; unknown
    actions are logged and left unanswered so the caller times out.
    """

    def __init__(self, document: HostDocument, reply: ReplyCallback) -> None:
        self.walker = GraphWalker(document)
        self.relay = MutationRelay(document)
        self._reply = reply

    def handle(self, selector: str, *args: Any) -> None:
        if selector == Selector.QUERY.value:
            self._answer(*args)
        elif selector == Selector.SCRIPT.value:
            self._script(*args)
        else:
            logger.warning("bridge: unknown selector %s", selector)

    def _answer(self, request_id: str = "", action: str = "", *extra: Any) -> None:
        try:
            result = self.walker.run(action, *extra)
        except BridgeError as exc:
            logger.warning("bridge: %s (request %s)", exc, request_id)
            return
        self._reply(Selector.RESPONSE.value, encode_reply(request_id, result))

    def _script(self, command: str = "", *args: Any) -> None:
        try:
            self.relay.apply(command, *args)
        except BridgeError as exc:
            logger.warning("bridge: %s", exc)
