from canvasmap.canvas.elem.base import Drawable, Elem2D, Elem2DOptions, ElemContent
from canvasmap.canvas.elem.pattern import HuePattern, pattern_elem
from canvasmap.canvas.elem.point2d import PointMarker, point2d_elem
from canvasmap.canvas.elem.transform_decorator import DecoratorStyle, TransformDecorator

__all__ = [
    "Drawable",
    "Elem2D",
    "Elem2DOptions",
    "ElemContent",
    "HuePattern",
    "pattern_elem",
    "PointMarker",
    "point2d_elem",
    "DecoratorStyle",
    "TransformDecorator",
]
