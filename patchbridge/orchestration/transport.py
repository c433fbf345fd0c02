"""Host transports: the outward message channel between facade and host."""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

from patchbridge.core.config import Settings, settings
from patchbridge.host.bridge import HostBridge
from patchbridge.host.document import HostDocument, InMemoryDocument
from patchbridge.utils.monitoring import host_messages_sent_total

logger = logging.getLogger(__name__)

Dispatch = Callable[..., None]


class HostTransport(ABC):
    """Fire-and-forget channel carrying `selector arg arg ...` messages.

    Inbound messages from the host are handed to the `dispatch` callable
    registered by `start`, on the event loop thread.
    """

    name: str = "transport"

    @property
    @abstractmethod
    def available(self) -> bool:
        """True while outbound messages can reach a host."""

    @abstractmethod
    async def start(self, dispatch: Dispatch) -> None: ...

    @abstractmethod
    async def stop(self) -> None: ...

    @abstractmethod
    async def send(self, selector: str, *args: Any) -> None: ...


class LoopbackHostTransport(HostTransport):
    """Runs a `HostBridge` in process against a local document."""

    name = "loopback"

    def __init__(self, document: Optional[HostDocument] = None) -> None:
        self.document = document if document is not None else InMemoryDocument()
        self.bridge = HostBridge(self.document, reply=self._reply)
        self._dispatch: Optional[Dispatch] = None

    @property
    def available(self) -> bool:
        return self._dispatch is not None

    async def start(self, dispatch: Dispatch) -> None:
        self._dispatch = dispatch
        logger.info("Loopback host attached.")

    async def stop(self) -> None:
        self._dispatch = None

    async def send(self, selector: str, *args: Any) -> None:
        host_messages_sent_total.labels(selector=selector).inc()
        self.bridge.handle(selector, *args)

    def _reply(self, selector: str, *args: Any) -> None:
        if self._dispatch is None:
            logger.debug("Loopback reply dropped; transport stopped.")
            return
        # Replies reach the facade on a later loop iteration, as they would from a real host.
        asyncio.get_running_loop().call_soon(self._dispatch, selector, *args)


def build_transport(config: Settings = settings) -> Optional[HostTransport]:
    """Select the host transport named by `HOST_TRANSPORT`; `None` means standalone."""

    if config.HOST_TRANSPORT == "loopback":
        return LoopbackHostTransport()
    if config.HOST_TRANSPORT == "kafka":
        if not config.KAFKA_BOOTSTRAP_SERVERS:
            logger.warning("Kafka bootstrap servers not configured; running standalone.")
            return None
        from patchbridge.orchestration.kafka import KafkaHostTransport

        return KafkaHostTransport(
            bootstrap_servers=config.KAFKA_BOOTSTRAP_SERVERS,
            command_topic=config.KAFKA_COMMAND_TOPIC,
            reply_topic=config.KAFKA_REPLY_TOPIC,
            group_id=config.KAFKA_CONSUMER_GROUP,
        )
    logger.info("[standalone mode] no host transport configured")
    return None
