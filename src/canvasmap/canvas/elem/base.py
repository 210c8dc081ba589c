"""
Scene Elements
==============
An `Elem2D` is a positioned, rotatable, scalable and transparent node with a
local shape used for hit-testing and outlining. What it looks like is
delegated to an `ElemContent`, which paints in local coordinates only: the node
folds position, rotation, pivot and scale into the painter transform before
calling it.

Local transform, applied on top of the camera transform:

    translate(x, y) -> rotate(angle) -> translate(-center_x, -center_y) -> scale(sx, sy)

so the local pivot (center_x, center_y) lands on the world point (x, y).
"""
from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Optional, Protocol, runtime_checkable

from PySide6.QtCore import QPointF, QRectF
from PySide6.QtGui import QPainter, QPainterPath, QTransform

from canvasmap.canvas.draw import draw_shape, painter_state, set_painter_style
from canvasmap.canvas.style import ShapeStyle
from canvasmap.model.geometry import clamp
from canvasmap.model.trigonometry import deg2rad, normalize_angle


@runtime_checkable
class Drawable(Protocol):
    """Anything the scene can paint and hit-test."""
    z: float

    def draw(self, outline: bool = False) -> None: ...

    def is_point_inside(self, x: float, y: float) -> bool: ...


class ElemContent(Protocol):
    """
    Paints an element assuming its local origin is (0, 0).

    `alpha` is the element opacity; implementations multiply their own alpha
    values by it.
    """
    def paint_local(self, painter: QPainter, width: float, height: float, alpha: float) -> None: ...


@dataclass(frozen=True)
class Elem2DOptions:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    width: float = 0.0
    height: float = 0.0
    center_x: float = 0.0
    center_y: float = 0.0
    angle: float = 0.0
    scale_x: float = 1.0
    scale_y: float = 1.0
    alpha: float = 1.0
    outline_style: Optional[ShapeStyle] = None


OUTLINE_STYLE = ShapeStyle(
    fill_style="white",
    fill_alpha=0.5,
    stroke_style="red",
    stroke_alpha=1.0,
    line_width=3.0,
)


class Elem2D:
    default_options = Elem2DOptions()
    default_outline_style = OUTLINE_STYLE

    def __init__(
        self,
        ctx: QPainter,
        content: ElemContent,
        options: Optional[Elem2DOptions] = None,
        **overrides,
    ) -> None:
        if ctx is None:
            raise RuntimeError("Elem2D requires a 2D drawing context.")
        self.ctx = ctx
        self.content = content

        opt = replace(options if options is not None else self.default_options, **overrides)

        self.x: float = opt.x
        self.y: float = opt.y
        self.z: float = opt.z
        self.width: float = opt.width
        self.height: float = opt.height
        self.center_x: float = opt.center_x
        self.center_y: float = opt.center_y
        self.scale_x: float = opt.scale_x
        self.scale_y: float = opt.scale_y
        self._angle_deg: float = normalize_angle(opt.angle)
        self._angle_rad: float = 0.0
        self._alpha: float = clamp(opt.alpha, 0.0, 1.0)
        self.outline_style: ShapeStyle = (
            opt.outline_style.over(self.default_outline_style)
            if opt.outline_style is not None
            else self.default_outline_style
        )

        self.shape = QPainterPath()
        self.shape.addRect(QRectF(0.0, 0.0, self.width, self.height))

        self._dirty = True

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({type(self.content).__name__}, x={self.x:g}, y={self.y:g}, "
            f"angle={self._angle_deg:g}, alpha={self._alpha:g})"
        )

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    @property
    def angle_deg(self) -> float:
        return self._angle_deg

    @property
    def angle_rad(self) -> float:
        self._update_values()
        return self._angle_rad

    @property
    def alpha(self) -> float:
        return self._alpha

    def draw(self, outline: bool = False) -> None:
        """Paint the element; the painter is left as it was found."""
        with painter_state(self.ctx):
            self._apply_local_transform()
            self.content.paint_local(self.ctx, self.width, self.height, self._alpha)
            if outline:
                self._draw_outline()

    def move(self, dx: float, dy: float) -> None:
        self.set_position(self.x + dx, self.y + dy)

    def set_position(self, x: float, y: float) -> None:
        self.x = x
        self.y = y

    def set_pivot(self, center_x: float, center_y: float) -> None:
        """Set the local point the element rotates around (and is positioned by)."""
        self.center_x = center_x
        self.center_y = center_y

    def rotate(self, degrees_diff: float) -> None:
        self.set_angle(self._angle_deg + degrees_diff)

    def set_angle(self, degrees: float) -> None:
        deg = normalize_angle(degrees)
        if self._angle_deg == deg:
            return

        self._angle_deg = deg
        self._dirty = True

    def set_scale(self, scale_x: float, scale_y: Optional[float] = None) -> None:
        self.scale_x = scale_x
        self.scale_y = scale_x if scale_y is None else scale_y

    def set_alpha(self, alpha: float) -> None:
        self._alpha = clamp(alpha, 0.0, 1.0)

    def local_transform(self) -> QTransform:
        """Local -> world transform of this element."""
        self._update_values()
        c = math.cos(self._angle_rad)
        s = math.sin(self._angle_rad)

        t = QTransform()
        t.translate(self.x, self.y)
        t = QTransform(c, s, -s, c, 0.0, 0.0) * t
        t.translate(-self.center_x, -self.center_y)
        t.scale(self.scale_x, self.scale_y)
        return t

    def is_point_inside(self, x: float, y: float) -> bool:
        """
        Whether the device point (x, y) is inside the element shape, using the
        painter's current (camera) transform plus the element transform.
        """
        with painter_state(self.ctx):
            self._apply_local_transform()
            device_transform = self.ctx.combinedTransform()

        return device_transform.map(self.shape).contains(QPointF(x, y))

    # ------------------------------------------------------------------------------
    # Internal methods
    # ------------------------------------------------------------------------------

    def _draw_outline(self) -> None:
        style = self.outline_style
        with painter_state(self.ctx):
            set_painter_style(self.ctx, style.paint_style())
            draw_shape(
                self.ctx,
                style.fill_alpha * self._alpha,
                style.stroke_alpha * self._alpha,
                self.shape,
            )

    def _apply_local_transform(self) -> None:
        self.ctx.setOpacity(self._alpha)
        self.ctx.setTransform(self.local_transform(), True)

    def _update_values(self) -> None:
        if not self._dirty:
            return
        self._dirty = False
        self._angle_rad = deg2rad(self._angle_deg)

