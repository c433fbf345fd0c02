"""Rectangle helpers shared by the mirror graph and the host walker."""

from __future__ import annotations

from typing import Iterable, List, Sequence, Union

Number = Union[int, float]

DEFAULT_BOX_WIDTH = 80
DEFAULT_BOX_HEIGHT = 22
EMPTY_BOUNDS: List[Number] = [0, 0, 0, 0]


def default_rect(x: Number, y: Number) -> List[Number]:
    """Edges of a freshly created box whose top-left corner is at (x, y)."""

    return [x, y, x + DEFAULT_BOX_WIDTH, y + DEFAULT_BOX_HEIGHT]


def edges_to_size(rect: Sequence[Number]) -> List[Number]:
    left, top, right, bottom = rect
    return [left, top, right - left, bottom - top]


def size_to_edges(rect: Sequence[Number]) -> List[Number]:
    left, top, width, height = rect
    return [left, top, left + width, top + height]


def fold_bounds(rects: Iterable[Sequence[Number]]) -> List[Number]:
    """Aggregate `[left, top, right, bottom]` edges; `EMPTY_BOUNDS` when there are none."""

    bounds: List[Number] | None = None
    for left, top, right, bottom in rects:
        if bounds is None:
            bounds = [left, top, right, bottom]
            continue
        bounds[0] = min(bounds[0], left)
        bounds[1] = min(bounds[1], top)
        bounds[2] = max(bounds[2], right)
        bounds[3] = max(bounds[3], bottom)
    return bounds if bounds is not None else list(EMPTY_BOUNDS)
