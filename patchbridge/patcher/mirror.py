"""In-memory patcher used when no host is attached."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from patchbridge.core.exceptions import ObjectConflictError
from patchbridge.patcher.geometry import Number, default_rect, fold_bounds

logger = logging.getLogger(__name__)


@dataclass
class MirrorBox:
    varname: str
    maxclass: str
    patching_rect: List[Number]

    def to_payload(self) -> Dict[str, object]:
        return {
            "box": {
                "maxclass": self.maxclass,
                "varname": self.varname,
                "patching_rect": list(self.patching_rect),
            }
        }


@dataclass(frozen=True)
class MirrorLine:
    src: str
    outlet: int
    dst: str
    inlet: int

    def touches(self, varname: str) -> bool:
        return self.src == varname or self.dst == varname

    def to_payload(self) -> Dict[str, object]:
        return {"patchline": {"source": [self.src, self.outlet], "destination": [self.dst, self.inlet]}}


class MirrorPatcher:
    """Boxes keyed by varname plus an ordered set of patchlines.

    Lines reference boxes by varname only and are not checked against the
    box table, matching how the host accepts connections to boxes that are
    created later.
    """

    def __init__(self) -> None:
        self._boxes: Dict[str, MirrorBox] = {}
        self._lines: Dict[MirrorLine, None] = {}
        self._lock = threading.RLock()

    def add_box(self, varname: str, maxclass: str, position: Sequence[Number]) -> MirrorBox:
        with self._lock:
            if varname in self._boxes:
                raise ObjectConflictError(f"object with varname '{varname}' already exists")
            box = MirrorBox(varname=varname, maxclass=maxclass, patching_rect=default_rect(position[0], position[1]))
            self._boxes[varname] = box
        return box

    def remove_box(self, varname: str) -> bool:
        """Drop the box and every line attached to it; returns whether the box existed."""

        with self._lock:
            removed = self._boxes.pop(varname, None) is not None
            dangling = [line for line in self._lines if line.touches(varname)]
            for line in dangling:
                del self._lines[line]
        if dangling:
            logger.debug("Removed %d patchline(s) attached to %s", len(dangling), varname)
        return removed

    def connect(self, src: str, outlet: int, dst: str, inlet: int) -> None:
        with self._lock:
            self._lines.setdefault(MirrorLine(src, outlet, dst, inlet), None)

    def disconnect(self, src: str, outlet: int, dst: str, inlet: int) -> bool:
        line = MirrorLine(src, outlet, dst, inlet)
        with self._lock:
            if line not in self._lines:
                return False
            del self._lines[line]
        return True

    def get(self, varname: str) -> Optional[MirrorBox]:
        with self._lock:
            return self._boxes.get(varname)

    def snapshot(self) -> Dict[str, List[Dict[str, object]]]:
        with self._lock:
            return {
                "boxes": [box.to_payload() for box in self._boxes.values()],
                "lines": [line.to_payload() for line in self._lines],
            }

    def attributes(self, varname: str) -> Optional[Dict[str, object]]:
        box = self.get(varname)
        if box is None:
            return None
        return {"maxclass": box.maxclass, "patching_rect": list(box.patching_rect), "varname": box.varname}

    def bounds(self) -> List[Number]:
        with self._lock:
            return fold_bounds(box.patching_rect for box in self._boxes.values())

    def reset(self) -> None:
        with self._lock:
            self._boxes.clear()
            self._lines.clear()

    def __len__(self) -> int:
        return len(self._boxes)
