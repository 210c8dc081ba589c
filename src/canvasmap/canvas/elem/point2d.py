from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from PySide6.QtGui import QPainter

from canvasmap.canvas.draw import draw_rect, painter_state, set_painter_style
from canvasmap.canvas.elem.base import Elem2D
from canvasmap.canvas.style import ShapeStyle

POINT_STYLE = ShapeStyle(
    fill_style="yellow",
    fill_alpha=1.0,
    stroke_style="black",
    stroke_alpha=1.0,
    line_width=3.0,
)


@dataclass
class PointMarker:
    """A small filled square marking a world position."""
    style: ShapeStyle = POINT_STYLE

    def paint_local(self, painter: QPainter, width: float, height: float, alpha: float) -> None:
        with painter_state(painter):
            set_painter_style(painter, self.style.paint_style())
            draw_rect(
                painter,
                self.style.fill_alpha * alpha,
                self.style.stroke_alpha * alpha,
                0.0, 0.0, width, height,
            )


def point2d_elem(
    ctx: QPainter,
    x: float,
    y: float,
    style: Optional[ShapeStyle] = None,
    **options,
) -> Elem2D:
    """
    Create a point marker centered on (x, y).

    Args:
        ctx: Painter the marker draws with.
        x, y: World position of the marker center.
        style: Fields overriding the default yellow/black marker style.
        **options: Other `Elem2DOptions` fields (size defaults to 3x3).
    """
    options.setdefault("width", 3.0)
    options.setdefault("height", 3.0)
    options.pop("center_x", None)
    options.pop("center_y", None)

    marker_style = POINT_STYLE if style is None else style.over(POINT_STYLE)
    elem = Elem2D(ctx, PointMarker(marker_style), x=x, y=y, **options)
    elem.set_pivot(elem.width / 2, elem.height / 2)
    return elem

