"""
Scene
=====
An ordered collection of drawables. Drawing follows insertion order (painter's
algorithm); `z` is only a hint the caller may use through `sort_by_z()`.
"""
from __future__ import annotations

import logging
from typing import Iterator, Optional

from canvasmap.canvas.elem.base import Drawable

logger = logging.getLogger(__name__)


class Scene:
    def __init__(self) -> None:
        self._items: list[Drawable] = []

    def __iter__(self) -> Iterator[Drawable]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item: object) -> bool:
        return item in self._items

    def add(self, item: Drawable) -> Drawable:
        if not isinstance(item, Drawable):
            raise TypeError(f"{type(item).__name__} is not drawable.")
        self._items.append(item)
        logger.debug(f"Scene: added {item!r} ({len(self._items)} items)")
        return item

    def remove(self, item: Drawable) -> None:
        self._items.remove(item)
        logger.debug(f"Scene: removed {item!r} ({len(self._items)} items)")

    def clear(self) -> None:
        self._items.clear()

    def sort_by_z(self) -> None:
        """Reorder the items by their z hint (stable for equal z)."""
        self._items.sort(key=lambda item: item.z)

    def draw(self, outline: bool = False) -> None:
        for item in self._items:
            item.draw(outline)

    def hit_test(self, x: float, y: float) -> Optional[Drawable]:
        """The top-most (last drawn) item containing the device point, or None."""
        for item in reversed(self._items):
            if item.is_point_inside(x, y):
                return item
        return None
