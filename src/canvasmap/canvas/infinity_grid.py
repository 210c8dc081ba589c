"""
Infinity Grid
=============
Draws a two-tier (major/minor) grid covering whatever part of the world the
viewport currently shows. Lines are recomputed from the visible bounds on every
draw, so the grid looks infinite while panning, zooming and rotating.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np
from PySide6.QtCore import QPointF
from PySide6.QtGui import QPainterPath, QPen

from canvasmap.canvas.draw import painter_state, to_brush
from canvasmap.canvas.style import LineConfig
from canvasmap.canvas.viewport import Viewport2D
from canvasmap.model.grid_math import division_points

if TYPE_CHECKING:
    import numpy.typing as npt


@dataclass(frozen=True)
class GridOptions:
    center_x: float = 0.0
    center_y: float = 0.0
    main_lines: LineConfig = field(
        default_factory=lambda: LineConfig(each=100.0, alpha=0.7, line_width=3.0, stroke_style="#aaa")
    )
    sub_lines: LineConfig = field(
        default_factory=lambda: LineConfig(each=25.0, alpha=0.4, line_width=1.0, stroke_style="#aaa")
    )


@dataclass(frozen=True)
class GridLines:
    """Division points of one frame, per tier and axis."""
    main_xs: npt.NDArray[np.float64]
    main_ys: npt.NDArray[np.float64]
    sub_xs: npt.NDArray[np.float64]
    sub_ys: npt.NDArray[np.float64]


class InfinityGrid:
    def __init__(self, viewport: Viewport2D, options: GridOptions | None = None) -> None:
        self.viewport = viewport
        self.ctx = viewport.ctx
        self.options = options if options is not None else GridOptions()

        for config in (self.options.main_lines, self.options.sub_lines):
            if not config.each > 0:
                raise ValueError(f"Grid spacing must be positive, got {config.each!r}.")

    def compute_lines(self) -> GridLines:
        """Grid lines covering the visible world; minor lines never repeat a major one."""
        opt = self.options
        bounds = self.viewport.get_visible_world_bounds()

        main_xs = division_points(opt.center_x, bounds.left, bounds.right, opt.main_lines.each)
        main_ys = division_points(opt.center_y, bounds.top, bounds.bottom, opt.main_lines.each)
        sub_xs = division_points(opt.center_x, bounds.left, bounds.right, opt.sub_lines.each, main_xs)
        sub_ys = division_points(opt.center_y, bounds.top, bounds.bottom, opt.sub_lines.each, main_ys)

        return GridLines(main_xs=main_xs, main_ys=main_ys, sub_xs=sub_xs, sub_ys=sub_ys)

    def draw(self) -> None:
        lines = self.compute_lines()
        with painter_state(self.ctx):
            # minor first so major lines paint over them
            self._draw_lines(lines.sub_xs, lines.sub_ys, lines.main_xs, lines.main_ys, self.options.sub_lines)
            self._draw_lines(lines.main_xs, lines.main_ys, lines.main_xs, lines.main_ys, self.options.main_lines)

    def _draw_lines(
        self,
        xs: npt.NDArray[np.float64],
        ys: npt.NDArray[np.float64],
        span_xs: npt.NDArray[np.float64],
        span_ys: npt.NDArray[np.float64],
        config: LineConfig,
    ) -> None:
        """Stroke vertical lines at `xs` then horizontal lines at `ys`, spanning the covered area."""
        if config.alpha == 0 or (xs.size == 0 and ys.size == 0):
            return

        x0, x1 = float(span_xs[0]), float(span_xs[-1])
        y0, y1 = float(span_ys[0]), float(span_ys[-1])

        path = QPainterPath()
        for x in xs:
            path.moveTo(QPointF(float(x), y0))
            path.lineTo(QPointF(float(x), y1))
        for y in ys:
            path.moveTo(QPointF(x0, float(y)))
            path.lineTo(QPointF(x1, float(y)))

        pen = QPen(to_brush(config.stroke_style), config.line_width)
        self.ctx.setOpacity(config.alpha)
        self.ctx.strokePath(path, pen)
