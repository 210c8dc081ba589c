"""
Paint Styles
============
Plain style values that are applied to a QPainter only inside a scoped
save/restore block (see `canvasmap.canvas.draw`).

Colors are anything `QColor` accepts: "#aaa", "red", QColor, Qt.GlobalColor...
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Union

from PySide6.QtCore import Qt
from PySide6.QtGui import QColor, QBrush, QGradient

ColorLike = Union[str, QColor, Qt.GlobalColor, QGradient, QBrush]


@dataclass(frozen=True)
class PaintStyle:
    """Pen/brush settings. Fields left as None are not applied."""
    alpha: Optional[float] = None
    line_cap: Optional[Qt.PenCapStyle] = None
    line_dash_offset: Optional[float] = None
    line_join: Optional[Qt.PenJoinStyle] = None
    line_width: Optional[float] = None
    line_dash: Optional[tuple[float, ...]] = None
    fill_style: Optional[ColorLike] = None
    stroke_style: Optional[ColorLike] = None

    def merged(self, **overrides) -> PaintStyle:
        return replace(self, **overrides)


@dataclass(frozen=True)
class ShapeStyle:
    """Like PaintStyle, with separate alpha values for filling and stroking."""
    fill_alpha: float = 1.0
    stroke_alpha: float = 1.0
    line_cap: Optional[Qt.PenCapStyle] = None
    line_dash_offset: Optional[float] = None
    line_join: Optional[Qt.PenJoinStyle] = None
    line_width: Optional[float] = None
    line_dash: Optional[tuple[float, ...]] = None
    fill_style: Optional[ColorLike] = None
    stroke_style: Optional[ColorLike] = None

    def merged(self, **overrides) -> ShapeStyle:
        return replace(self, **overrides)

    def over(self, base: ShapeStyle) -> ShapeStyle:
        """`base` with the fields of this (partial) style that differ from the defaults."""
        defaults = ShapeStyle()
        overrides = {
            name: getattr(self, name)
            for name in self.__dataclass_fields__
            if getattr(self, name) != getattr(defaults, name)
        }
        return base.merged(**overrides)

    def paint_style(self) -> PaintStyle:
        """The pen/brush part of this style (alphas are passed to the draw helpers)."""
        return PaintStyle(
            line_cap=self.line_cap,
            line_dash_offset=self.line_dash_offset,
            line_join=self.line_join,
            line_width=self.line_width,
            line_dash=self.line_dash,
            fill_style=self.fill_style,
            stroke_style=self.stroke_style,
        )


@dataclass(frozen=True)
class LineConfig:
    """Style of one tier of grid lines, drawn every `each` world units."""
    each: float
    alpha: float
    line_width: float
    stroke_style: ColorLike = "#aaa"
