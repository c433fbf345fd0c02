"""Ring buffer of host console output."""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Deque, Dict, List, Tuple

LEVEL_PRIORITY: Dict[str, int] = {"error": 2, "warning": 1, "info": 0}


def detect_level(message: str) -> str:
    lower = message.lower()
    if "error" in lower:
        return "error"
    if "warning" in lower:
        return "warning"
    return "info"


@dataclass(frozen=True)
class ConsoleMessage:
    id: int
    level: str
    message: str
    timestamp: str

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


class ConsoleBuffer:
    """Keeps the newest `max_size` console lines and a read cursor."""

    def __init__(self, max_size: int = 1000) -> None:
        self._entries: Deque[ConsoleMessage] = deque(maxlen=max_size)
        self._next_id = 0
        self._last_read_id = -1
        self._lock = threading.Lock()

    def push(self, message: str, level: str | None = None) -> ConsoleMessage:
        with self._lock:
            entry = ConsoleMessage(
                id=self._next_id,
                level=level or detect_level(message),
                message=message,
                timestamp=datetime.now(timezone.utc).isoformat(),
            )
            self._next_id += 1
            self._entries.append(entry)
        return entry

    def read(self, level: str = "info", since_last_call: bool = False) -> Tuple[List[ConsoleMessage], bool]:
        """Return messages at or above `level` and whether unread ones were evicted."""

        min_priority = LEVEL_PRIORITY.get(level, LEVEL_PRIORITY["info"])
        with self._lock:
            start_id = self._last_read_id if since_last_call else -1
            messages = [
                entry
                for entry in self._entries
                if entry.id > start_id and LEVEL_PRIORITY.get(entry.level, 0) >= min_priority
            ]
            overflow = bool(since_last_call and self._entries and self._entries[0].id > self._last_read_id + 1)
            if since_last_call and self._entries:
                self._last_read_id = self._entries[-1].id
        return messages, overflow

    def __len__(self) -> int:
        return len(self._entries)
