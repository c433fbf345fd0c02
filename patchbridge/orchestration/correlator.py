"""Request/response correlation over the fire-and-forget host channel."""

from __future__ import annotations

import asyncio
import logging
import uuid
from dataclasses import dataclass
from typing import Any, Dict, Optional

from opentelemetry import trace

from patchbridge.core.config import settings
from patchbridge.core.exceptions import BridgeError, QueryTimeoutError
from patchbridge.orchestration.messages import QueryAction, Selector, parse_reply
from patchbridge.orchestration.transport import HostTransport
from patchbridge.utils.monitoring import host_pending_queries, observe_query

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


@dataclass
class PendingQuery:
    request_id: str
    action: str
    future: asyncio.Future
    timer: asyncio.TimerHandle


class QueryCorrelator:
    """Matches labelled host replies to the callers waiting on them.

    Every resolution path (reply, timeout) first pops the pending entry and
    only the path that obtained it touches the future, so a request
    resolves at most once and late replies are dropped.
    """

    def __init__(self, transport: Optional[HostTransport] = None, *, timeout: Optional[float] = None) -> None:
        self.transport = transport
        self.timeout = timeout if timeout is not None else settings.RESPONSE_TIMEOUT_SECONDS
        self._pending: Dict[str, PendingQuery] = {}

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def is_pending(self, request_id: str) -> bool:
        return request_id in self._pending

    async def issue(self, action: QueryAction | str, *args: Any) -> Any:
        """Send a query to the host and wait for its results.

        Resolves to `None` straight away when no host is attached; raises
        `QueryTimeoutError` when the host stays silent past the deadline.
        """

        action_name = action.value if isinstance(action, QueryAction) else str(action)
        request_id = str(uuid.uuid4())
        loop = asyncio.get_running_loop()
        future: asyncio.Future = loop.create_future()
        timer = loop.call_later(self.timeout, self._expire, request_id)
        self._register(PendingQuery(request_id, action_name, future, timer))

        if self.transport is None or not self.transport.available:
            self._discard(request_id)
            future.set_result(None)
            logger.info("[query] %s %s (standalone)", request_id, action_name)
            return await future

        with tracer.start_as_current_span("host.query") as span:
            span.set_attribute("patchbridge.request_id", request_id)
            span.set_attribute("patchbridge.action", action_name)
            try:
                await self.transport.send(Selector.QUERY.value, request_id, action_name, *args)
            except Exception:
                self._discard(request_id)
                observe_query(action_name, "send_failed")
                raise
            logger.info("[query] %s %s", request_id, action_name)
            return await future

    def deliver(self, request_id: str, payload: Any) -> bool:
        """Resolve the caller waiting on `request_id`; returns False when nobody is."""

        entry = self._pop(request_id)
        if entry is None:
            logger.debug("Dropping reply for unknown or settled request %s", request_id)
            return False
        entry.timer.cancel()
        if not entry.future.done():
            entry.future.set_result(payload)
        observe_query(entry.action, "ok")
        return True

    def handle_reply(self, *tokens: Any) -> None:
        """Entry point for inbound `response` messages."""

        try:
            reply = parse_reply(tokens)
        except BridgeError as exc:
            logger.warning("[response] %s", exc)
            return
        self.deliver(reply.request_id, reply.results)

    def cancel_all(self) -> None:
        """Fail every outstanding query; used when the transport goes away."""

        for request_id in list(self._pending):
            self._expire(request_id)

    def _expire(self, request_id: str) -> None:
        entry = self._pop(request_id)
        if entry is None:
            return
        entry.timer.cancel()
        if not entry.future.done():
            entry.future.set_exception(QueryTimeoutError(request_id))
        observe_query(entry.action, "timeout")
        logger.warning("[query] %s %s timed out", request_id, entry.action)

    def _register(self, entry: PendingQuery) -> None:
        self._pending[entry.request_id] = entry
        host_pending_queries.inc()

    def _pop(self, request_id: str) -> Optional[PendingQuery]:
        entry = self._pending.pop(request_id, None)
        if entry is not None:
            host_pending_queries.dec()
        return entry

    def _discard(self, request_id: str) -> None:
        entry = self._pop(request_id)
        if entry is not None:
            entry.timer.cancel()
