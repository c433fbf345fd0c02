"""Routes inbound host messages to the correlator and the console buffer."""

from __future__ import annotations

import logging
from typing import Any

from patchbridge.orchestration.console import ConsoleBuffer
from patchbridge.orchestration.correlator import QueryCorrelator
from patchbridge.orchestration.messages import Selector

logger = logging.getLogger(__name__)


class InboundDispatcher:
    """Its `dispatch` method is the hook handed to a host transport."""

    def __init__(self, correlator: QueryCorrelator, console: ConsoleBuffer) -> None:
        self.correlator = correlator
        self.console = console

    def dispatch(self, selector: str, *args: Any) -> None:
        if selector == Selector.RESPONSE.value:
            self.correlator.handle_reply(*args)
        elif selector == Selector.CONSOLE.value:
            self.console.push(" ".join(str(arg) for arg in args))
        else:
            logger.debug("Ignoring inbound %s message", selector)
