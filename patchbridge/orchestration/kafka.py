"""Kafka-backed host transport: commands out on one topic, replies in on another."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Any, Optional

from aiokafka import AIOKafkaConsumer, AIOKafkaProducer
from opentelemetry import trace

from patchbridge.core.exceptions import BridgeError, HostUnavailableError
from patchbridge.orchestration.messages import decode_message, encode_message
from patchbridge.orchestration.transport import Dispatch, HostTransport
from patchbridge.utils.monitoring import host_messages_sent_total

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


class KafkaHostTransport(HostTransport):
    name = "kafka"

    def __init__(
        self,
        *,
        bootstrap_servers: str,
        command_topic: str,
        reply_topic: str,
        group_id: Optional[str] = None,
    ) -> None:
        self.bootstrap_servers = bootstrap_servers
        self.command_topic = command_topic
        self.reply_topic = reply_topic
        self.group_id = group_id
        self._producer: Optional[AIOKafkaProducer] = None
        self._consumer: Optional[AIOKafkaConsumer] = None
        self._task: Optional[asyncio.Task] = None
        self._dispatch: Optional[Dispatch] = None

    @property
    def available(self) -> bool:
        return self._producer is not None and self._consumer is not None

    async def start(self, dispatch: Dispatch) -> None:
        self._dispatch = dispatch
        producer = AIOKafkaProducer(bootstrap_servers=self.bootstrap_servers)
        consumer = AIOKafkaConsumer(
            self.reply_topic,
            bootstrap_servers=self.bootstrap_servers,
            group_id=self.group_id,
            enable_auto_commit=True,
            auto_offset_reset="latest",
        )

        try:
            await producer.start()
            await consumer.start()
        except Exception as exc:  # pragma: no cover - network errors
            logger.error("Failed to attach Kafka host transport: %s", exc)
            with contextlib.suppress(Exception):
                await producer.stop()
            with contextlib.suppress(Exception):
                await consumer.stop()
            return

        self._producer = producer
        self._consumer = consumer
        self._task = asyncio.create_task(self._consume())
        logger.info("Kafka host transport attached (commands=%s, replies=%s).", self.command_topic, self.reply_topic)

    async def stop(self) -> None:
        if self._task:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            self._task = None

        if self._consumer:
            await self._consumer.stop()
            self._consumer = None

        if self._producer:
            await self._producer.stop()
            self._producer = None

    async def send(self, selector: str, *args: Any) -> None:
        producer = self._producer
        if producer is None:
            raise HostUnavailableError("Kafka host transport is not attached")
        encoded = encode_message(selector, args)
        with tracer.start_as_current_span("kafka.publish") as span:
            span.set_attribute("messaging.system", "kafka")
            span.set_attribute("messaging.destination", self.command_topic)
            span.set_attribute("patchbridge.selector", selector)
            span.set_attribute("payload.bytes", len(encoded))
            try:
                await producer.send_and_wait(self.command_topic, encoded)
            except Exception as exc:
                span.record_exception(exc)
                logger.error("Failed to publish %s message: %s", selector, exc)
                raise HostUnavailableError(f"failed to reach host: {exc}") from exc
        host_messages_sent_total.labels(selector=selector).inc()

    async def _consume(self) -> None:
        assert self._consumer is not None
        try:
            async for message in self._consumer:
                try:
                    selector, args = decode_message(message.value)
                except BridgeError as exc:
                    logger.warning("Dropping host frame: %s", exc)
                    continue
                if self._dispatch is not None:
                    self._dispatch(selector, *args)
        except asyncio.CancelledError:
            raise
        except Exception as exc:  # pragma: no cover - consumer failures
            logger.exception("Kafka host consumer encountered an error: %s", exc)
