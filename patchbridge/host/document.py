"""Host document contract and an in-memory document for loopback hosting."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Protocol, Sequence, Tuple

from patchbridge.patcher.geometry import Number, size_to_edges

logger = logging.getLogger(__name__)

Connection = Tuple[str, int, str, int]


class HostBox(Protocol):
    varname: str
    maxclass: str
    selected: bool

    @property
    def rect(self) -> Sequence[Number]:
        """Box edges as `[left, top, right, bottom]`."""


class HostDocument(Protocol):
    """What the walker and relay need from the host's patcher."""

    def boxes(self) -> Iterator[HostBox]: ...

    def getnamed(self, varname: str) -> Optional[HostBox]: ...

    def patchlines(self) -> Iterator[Connection]: ...

    def create_node(self, varname: str, maxclass: str, rect: Sequence[Number], tokens: Sequence[Any]) -> None: ...

    def delete_node(self, varname: str) -> None: ...

    def connect(self, src: str, outlet: int, dst: str, inlet: int) -> None: ...

    def disconnect(self, src: str, outlet: int, dst: str, inlet: int) -> None: ...

    def set_attribute(self, varname: str, name: str, value: Any) -> None: ...

    def replace_text(self, varname: str, text: str) -> None: ...

    def deliver_message(self, varname: str, payload: Sequence[Any]) -> None: ...

    def deliver_trigger(self, varname: str) -> None: ...

    def set_number(self, varname: str, value: Number) -> None: ...


@dataclass
class DocumentBox:
    varname: str
    maxclass: str
    rect: List[Number]
    args: List[Any] = field(default_factory=list)
    selected: bool = False
    text: str = ""
    value: Optional[Number] = None
    attributes: Dict[str, Any] = field(default_factory=dict)
    inbox: List[List[Any]] = field(default_factory=list)
    triggers: int = 0


class InMemoryDocument:
    """Patcher document held in process, driven by the loopback transport."""

    def __init__(self) -> None:
        self._boxes: Dict[str, DocumentBox] = {}
        self.connections: List[Connection] = []
        self._lock = threading.RLock()

    def boxes(self) -> Iterator[DocumentBox]:
        with self._lock:
            snapshot = list(self._boxes.values())
        return iter(snapshot)

    def getnamed(self, varname: str) -> Optional[DocumentBox]:
        with self._lock:
            return self._boxes.get(varname)

    def patchlines(self) -> Iterator[Connection]:
        with self._lock:
            snapshot = list(self.connections)
        return iter(snapshot)

    def select(self, *varnames: str) -> None:
        with self._lock:
            for box in self._boxes.values():
                box.selected = box.varname in varnames

    def create_node(self, varname: str, maxclass: str, rect: Sequence[Number], tokens: Sequence[Any]) -> None:
        with self._lock:
            if varname in self._boxes:
                logger.warning("Replacing existing box %s", varname)
            self._boxes[varname] = DocumentBox(varname=varname, maxclass=maxclass, rect=list(rect), args=list(tokens))

    def delete_node(self, varname: str) -> None:
        with self._lock:
            self._boxes.pop(varname, None)
            self.connections = [conn for conn in self.connections if varname not in (conn[0], conn[2])]

    def connect(self, src: str, outlet: int, dst: str, inlet: int) -> None:
        with self._lock:
            connection = (src, outlet, dst, inlet)
            if connection not in self.connections:
                self.connections.append(connection)

    def disconnect(self, src: str, outlet: int, dst: str, inlet: int) -> None:
        with self._lock:
            connection = (src, outlet, dst, inlet)
            if connection in self.connections:
                self.connections.remove(connection)

    def set_attribute(self, varname: str, name: str, value: Any) -> None:
        box = self._require(varname)
        if box is None:
            return
        if name == "patching_rect":
            # patching_rect arrives as [left, top, width, height]
            box.rect = size_to_edges(value)
            return
        box.attributes[name] = value

    def replace_text(self, varname: str, text: str) -> None:
        box = self._require(varname)
        if box is not None:
            box.text = text

    def deliver_message(self, varname: str, payload: Sequence[Any]) -> None:
        box = self._require(varname)
        if box is not None:
            box.inbox.append(list(payload))

    def deliver_trigger(self, varname: str) -> None:
        box = self._require(varname)
        if box is not None:
            box.triggers += 1

    def set_number(self, varname: str, value: Number) -> None:
        box = self._require(varname)
        if box is not None:
            box.value = value

    def _require(self, varname: str) -> Optional[DocumentBox]:
        box = self.getnamed(varname)
        if box is None:
            logger.warning("No box named %s in document", varname)
        return box
