"""Read-side queries answered by the host against its document."""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

from patchbridge.core.exceptions import UnknownActionError
from patchbridge.host.document import HostBox, HostDocument
from patchbridge.orchestration.messages import QueryAction
from patchbridge.patcher.geometry import Number, edges_to_size, fold_bounds


class GraphWalker:
    """Traverses a host document and shapes results for the facade."""

    def __init__(self, document: HostDocument) -> None:
        self.document = document
        self._handlers: Dict[QueryAction, Callable[..., Any]] = {
            QueryAction.OBJECTS_IN_PATCH: lambda *_: self.objects_in_patch(selected_only=False),
            QueryAction.OBJECTS_IN_SELECTED: lambda *_: self.objects_in_patch(selected_only=True),
            QueryAction.OBJECT_ATTRIBUTES: self._attributes_of_first,
            QueryAction.AVOID_RECT_POSITION: lambda *_: self.avoid_rect(),
        }

    def run(self, action: str, *args: Any) -> Any:
        try:
            handler = self._handlers[QueryAction(action)]
        except ValueError as exc:
            raise UnknownActionError("UNKNOWN_ACTION", f"unknown action: {action}") from exc
        return handler(*args)

    def objects_in_patch(self, selected_only: bool = False) -> Dict[str, List[Dict[str, Any]]]:
        included = [box for box in self.document.boxes() if not selected_only or box.selected]
        names = {box.varname for box in included}
        lines = [
            {"patchline": {"source": [src, outlet], "destination": [dst, inlet]}}
            for src, outlet, dst, inlet in self.document.patchlines()
            if not selected_only or (src in names and dst in names)
        ]
        return {"boxes": [{"box": self._describe(box)} for box in included], "lines": lines}

    def object_attributes(self, varname: str) -> Optional[Dict[str, Any]]:
        box = self.document.getnamed(varname)
        if box is None:
            return None
        return self._describe(box)

    def avoid_rect(self) -> List[Number]:
        return fold_bounds(box.rect for box in self.document.boxes())

    def _attributes_of_first(self, varname: Any = None, *_: Any) -> Optional[Dict[str, Any]]:
        if varname is None:
            return None
        return self.object_attributes(str(varname))

    @staticmethod
    def _describe(box: HostBox) -> Dict[str, Any]:
        return {
            "maxclass": box.maxclass,
            "patching_rect": edges_to_size(box.rect),
            "varname": box.varname or "",
        }
