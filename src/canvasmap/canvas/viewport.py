"""
Viewport (2D Camera)
====================
Maps world coordinates to the pixels of a DrawingSurface.

The camera is defined by its center (world point shown in the middle of the
surface), a zoom factor and a rotation. A world point `p` lands on screen at

    screen = zoom * R(angle) * p + t,    t = size / 2 - zoom * R(angle) * center

which is: translate to the screen center, scale, rotate, translate back by the
camera center. `t` is rounded to whole pixels so lines stay crisp.

Derived values (transform, visible corners, visible bounds) are cached behind
three dirty flags and recomputed on first read after a camera change.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional

from PySide6.QtCore import QRectF, Qt
from PySide6.QtGui import QPainter, QTransform

from canvasmap.canvas.surface import DrawingSurface
from canvasmap.model.geometry import Bounds2D, Point2D, WorldLimits, clamp
from canvasmap.model.trigonometry import deg2rad, normalize_angle

logger = logging.getLogger(__name__)

Corners = tuple[Point2D, Point2D, Point2D, Point2D]

# default minimum zoom, also used when a requested zoom is not positive
MIN_ZOOM = 0.01


@dataclass(frozen=True)
class ViewportOptions:
    world_limits: Optional[WorldLimits] = None
    min_zoom: float = MIN_ZOOM
    max_zoom: float = math.inf


class Viewport2D:
    """
    Camera bound to a drawing surface.

    Public attributes are read-only; use the methods to change them so the
    caches are invalidated.
    """
    default_options = ViewportOptions()

    def __init__(self, surface: DrawingSurface, options: Optional[ViewportOptions] = None) -> None:
        if surface is None:
            raise RuntimeError("Viewport2D requires a drawing surface.")
        self.surface = surface
        # raises if the painter is not available
        self.ctx: QPainter = surface.painter

        self.options = options if options is not None else self.default_options
        if self.options.min_zoom > self.options.max_zoom:
            raise ValueError(
                f"min_zoom ({self.options.min_zoom}) must not be greater than max_zoom ({self.options.max_zoom})."
            )
        if not self.options.max_zoom > 0:
            raise ValueError(f"max_zoom must be positive, got {self.options.max_zoom}.")

        self.width: int = 0
        self.height: int = 0
        self.center_x: float = 0.0
        self.center_y: float = 0.0
        self.zoom: float = 1.0
        self.angle_deg: float = 0.0
        self.angle_rad: float = 0.0

        # number of times the transform has been recomputed
        self.transform_updates: int = 0

        self._tx: float = 0.0
        self._ty: float = 0.0
        self._transform = QTransform()
        self._bounds = Bounds2D(0.0, 0.0, 0.0, 0.0)
        self._corners: Corners = (Point2D(0, 0),) * 4

        self._dirty_transform = True
        self._dirty_bounds = True
        self._dirty_corners = True

        self.reset()

    # ------------------------------------------------------------------------------
    # Camera state
    # ------------------------------------------------------------------------------

    @property
    def tx(self) -> float:
        self._update_transform()
        return self._tx

    @property
    def ty(self) -> float:
        self._update_transform()
        return self._ty

    @property
    def is_dirty(self) -> bool:
        """True if any cached value must be recomputed."""
        return self._dirty_transform or self._dirty_bounds or self._dirty_corners

    def reset(self) -> None:
        """Center the camera on the middle of the surface, with no zoom nor rotation."""
        self.width = self.surface.width
        self.height = self.surface.height
        self.center_x = self.width / 2
        self.center_y = self.height / 2
        self.zoom = 1.0
        self.angle_deg = 0.0
        self.angle_rad = 0.0
        self._invalidate()

    def resize(self, width: int, height: int) -> None:
        if self.width == width and self.height == height:
            return

        self.width = width
        self.height = height
        self._invalidate()
        logger.debug(f"Viewport resized to {width}x{height}")

    def move_center(self, dx: float, dy: float) -> None:
        self.center(self.center_x + dx, self.center_y + dy)

    def center(self, x: float, y: float) -> None:
        """Set the world point shown in the middle of the surface."""
        world_limits = self.options.world_limits
        if world_limits is not None:
            x, y = world_limits.clamp(x, y)

        self.center_x = x
        self.center_y = y
        self._invalidate()

    def increase_zoom(
        self,
        zoom_diff: float,
        pivot_x: Optional[float] = None,
        pivot_y: Optional[float] = None,
    ) -> None:
        self.set_zoom(self.zoom + zoom_diff, pivot_x, pivot_y)

    def set_zoom(
        self,
        zoom: float,
        pivot_x: Optional[float] = None,
        pivot_y: Optional[float] = None,
    ) -> None:
        """
        Set the zoom, clamped into [min_zoom, max_zoom]. A result that is not
        positive falls back to MIN_ZOOM, so the mapping stays invertible.

        If a world pivot is given, the center moves so the pivot keeps its
        screen position.
        """
        new_zoom = clamp(zoom, self.options.min_zoom, self.options.max_zoom)
        if not new_zoom > 0:
            new_zoom = min(MIN_ZOOM, self.options.max_zoom)
        if pivot_x is not None and pivot_y is not None:
            k = 1 - self.zoom / new_zoom
            self.center_x += (pivot_x - self.center_x) * k
            self.center_y += (pivot_y - self.center_y) * k
        self.zoom = new_zoom
        self._invalidate()

    def rotate(self, degrees_diff: float) -> None:
        self.set_angle(self.angle_deg + degrees_diff)

    def set_angle(self, degrees: float) -> None:
        deg = normalize_angle(degrees)
        if self.angle_deg == deg:
            return

        self.angle_deg = deg
        self._invalidate()

    # ------------------------------------------------------------------------------
    # Drawing context
    # ------------------------------------------------------------------------------

    def transform(self) -> QTransform:
        """The world -> screen transform for the current camera."""
        self._update_transform()
        return QTransform(self._transform)

    def apply_transform(self) -> None:
        """Program the painter with the camera transform (recomputed only if dirty)."""
        self._update_transform()
        self.ctx.setTransform(self._transform)

    def clear(self) -> None:
        """Clear the whole surface and reapply the camera transform."""
        ctx = self.ctx
        ctx.resetTransform()
        mode = ctx.compositionMode()
        ctx.setCompositionMode(QPainter.CompositionMode.CompositionMode_Source)
        ctx.fillRect(QRectF(0, 0, self.width, self.height), Qt.GlobalColor.transparent)
        ctx.setCompositionMode(mode)
        self.apply_transform()

    # ------------------------------------------------------------------------------
    # Coordinate mapping
    # ------------------------------------------------------------------------------

    def get_canvas_point(self, world_x: float, world_y: float) -> Point2D:
        """World -> screen."""
        self._update_transform()
        zoom, angle_rad = self.zoom, self.angle_rad

        if not angle_rad:
            return Point2D(world_x * zoom + self._tx, world_y * zoom + self._ty)

        s = math.sin(angle_rad)
        c = math.cos(angle_rad)
        return Point2D(
            (world_x * c - world_y * s) * zoom + self._tx,
            (world_x * s + world_y * c) * zoom + self._ty,
        )

    def get_world_point(self, canvas_x: float, canvas_y: float) -> Point2D:
        """Screen -> world."""
        self._update_transform()
        x = (canvas_x - self._tx) / self.zoom
        y = (canvas_y - self._ty) / self.zoom

        if not self.angle_rad:
            return Point2D(x, y)

        s = math.sin(-self.angle_rad)
        c = math.cos(-self.angle_rad)
        return Point2D(x * c - y * s, x * s + y * c)

    def get_visible_world_bounds(self) -> Bounds2D:
        """
        Axis-aligned box covering the visible world region.

        When the camera is rotated this is larger than the visible quad; it is
        meant as a covering box (e.g. for the grid), not an exact region.
        """
        if self._dirty_bounds:
            self._dirty_bounds = False
            self._bounds = Bounds2D.from_points(self.get_visible_world_corners())
        return self._bounds

    def get_visible_world_corners(self) -> Corners:
        """World position of the surface pixel corners (TL, BL, TR, BR)."""
        if self._dirty_corners:
            self._dirty_corners = False
            w = self.width - 1
            h = self.height - 1
            self._corners = (
                self.get_world_point(0, 0),
                self.get_world_point(0, h),
                self.get_world_point(w, 0),
                self.get_world_point(w, h),
            )
        return self._corners

    # ------------------------------------------------------------------------------
    # Internal methods
    # ------------------------------------------------------------------------------

    def _invalidate(self) -> None:
        self._dirty_transform = True
        self._dirty_bounds = True
        self._dirty_corners = True

    def _update_transform(self) -> None:
        """
        Recompute the cached camera transform.

        The translation is `size / 2 - zoom * R * center` rather than the
        rotation-free `size / 2 - zoom * center`: rotating about the screen
        center keeps the camera center in the middle of the surface and keeps
        a zoom pivot in place at any angle.
        """
        if not self._dirty_transform:
            return
        self._dirty_transform = False
        self.transform_updates += 1

        zoom = self.zoom
        self.angle_rad = deg2rad(self.angle_deg)
        s = math.sin(self.angle_rad)
        c = math.cos(self.angle_rad)
        rcx = self.center_x * c - self.center_y * s
        rcy = self.center_x * s + self.center_y * c
        self._tx = _round_px(self.width / 2 - rcx * zoom)
        self._ty = _round_px(self.height / 2 - rcy * zoom)

        # rotate first, then scale and translate
        self._transform = QTransform(c * zoom, s * zoom, -s * zoom, c * zoom, self._tx, self._ty)


def _round_px(value: float) -> float:
    """Round half up to a whole pixel; non-finite values are kept as they are."""
    if not math.isfinite(value):
        return value
    return float(math.floor(value + 0.5))
