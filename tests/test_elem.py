import pytest
from PySide6.QtCore import QPointF
from PySide6.QtGui import QPainter

from canvasmap.canvas.elem import (
    Drawable, Elem2D, HuePattern, TransformDecorator, pattern_elem, point2d_elem
)
from canvasmap.canvas.style import ShapeStyle
from canvasmap.canvas.viewport import Viewport2D


@pytest.fixture
def viewport(surface):
    viewport = Viewport2D(surface)
    viewport.apply_transform()
    return viewport


@pytest.fixture
def ctx(viewport) -> QPainter:
    return viewport.ctx


def test_pivot_lands_on_the_position(ctx):
    elem = pattern_elem(ctx, x=30.0, y=-20.0, angle=70.0)
    mapped = elem.local_transform().map(QPointF(50.0, 50.0))
    assert mapped.x() == pytest.approx(30.0)
    assert mapped.y() == pytest.approx(-20.0)


def test_hit_test_follows_rotation(ctx):
    elem = pattern_elem(ctx, x=50.0, y=50.0, angle=45.0)
    assert elem.is_point_inside(50.0, 50.0)
    # inside the diamond, outside the unrotated square
    assert elem.is_point_inside(50.0, 110.0)
    assert not elem.is_point_inside(0.0, 0.0)
    assert not elem.is_point_inside(190.0, 95.0)


def test_hit_test_follows_scale(ctx):
    elem = pattern_elem(ctx, x=50.0, y=50.0)
    assert not elem.is_point_inside(50.0, 140.0)
    elem.set_scale(2.0)
    assert (elem.scale_x, elem.scale_y) == (2.0, 2.0)
    assert elem.is_point_inside(50.0, 140.0)


def test_hit_test_follows_position(ctx):
    elem = pattern_elem(ctx, x=50.0, y=50.0)
    elem.move(100.0, 0.0)
    assert (elem.x, elem.y) == (150.0, 50.0)
    assert elem.is_point_inside(150.0, 50.0)
    assert not elem.is_point_inside(20.0, 50.0)


def test_hit_test_composes_with_the_camera(viewport, ctx):
    elem = pattern_elem(ctx, x=50.0, y=50.0)
    viewport.set_zoom(2.0)
    viewport.apply_transform()
    screen = viewport.get_canvas_point(50.0, 50.0)
    assert (screen.x, screen.y) == pytest.approx((0.0, 50.0))
    assert elem.is_point_inside(screen.x + 1.0, screen.y)
    assert not elem.is_point_inside(screen.x + 150.0, screen.y)


def test_draw_leaves_the_painter_unchanged(ctx):
    elem = pattern_elem(ctx, x=50.0, y=50.0, angle=30.0, alpha=0.5)
    opacity = ctx.opacity()
    pen = ctx.pen()
    brush = ctx.brush()
    transform = ctx.transform()

    elem.draw(outline=True)
    elem.is_point_inside(10.0, 10.0)

    assert ctx.opacity() == opacity
    assert ctx.pen() == pen
    assert ctx.brush() == brush
    assert ctx.transform() == transform


def test_alpha_is_clamped(ctx):
    elem = pattern_elem(ctx, alpha=5.0)
    assert elem.alpha == 1.0
    elem.set_alpha(-1.0)
    assert elem.alpha == 0.0
    elem.set_alpha(0.25)
    assert elem.alpha == 0.25


def test_angle_is_normalized(ctx):
    elem = pattern_elem(ctx, angle=270.0)
    assert elem.angle_deg == -90.0
    elem.rotate(100.0)
    assert elem.angle_deg == 10.0
    elem.set_angle(370.0)
    assert elem.angle_deg == 10.0
    assert elem.angle_rad == pytest.approx(0.17453292519943295)


def test_requires_a_drawing_context():
    with pytest.raises(RuntimeError):
        Elem2D(None, HuePattern())


def test_pattern_has_fixed_size_and_pivot(ctx):
    elem = pattern_elem(ctx, width=5.0, center_x=0.0)
    assert (elem.width, elem.height) == (100.0, 100.0)
    assert (elem.center_x, elem.center_y) == (50.0, 50.0)
    assert isinstance(elem.content, HuePattern)


def test_point_marker_is_centered_on_its_position(ctx):
    elem = point2d_elem(ctx, 10.0, 20.0)
    assert (elem.width, elem.height) == (3.0, 3.0)
    assert (elem.center_x, elem.center_y) == (1.5, 1.5)
    mapped = elem.local_transform().map(QPointF(1.5, 1.5))
    assert (mapped.x(), mapped.y()) == pytest.approx((10.0, 20.0))
    assert elem.is_point_inside(10.0, 20.0)


def test_point_marker_style_overrides_the_defaults(ctx):
    elem = point2d_elem(ctx, 0.0, 0.0, style=ShapeStyle(fill_style="red"))
    style = elem.content.style
    assert style.fill_style == "red"
    assert style.stroke_style == "black"
    assert style.line_width == 3.0


def test_outline_style_is_merged(ctx):
    elem = pattern_elem(ctx, outline_style=ShapeStyle(stroke_style="blue"))
    assert elem.outline_style.stroke_style == "blue"
    assert elem.outline_style.fill_alpha == 0.5


def test_decorator_follows_its_target(ctx):
    elem = pattern_elem(ctx, x=50.0, y=50.0, z=3.0)
    decorator = TransformDecorator(ctx, elem)
    assert isinstance(decorator, Drawable)
    assert decorator.z == 3.0
    assert decorator.is_point_inside(50.0, 50.0)

    elem.set_position(150.0, 50.0)
    assert not decorator.is_point_inside(50.0, 10.0)
    assert decorator.is_point_inside(150.0, 50.0)


def test_decorator_draw_leaves_the_painter_unchanged(ctx):
    decorator = TransformDecorator(ctx, pattern_elem(ctx, angle=20.0))
    transform = ctx.transform()
    pen = ctx.pen()
    decorator.draw(outline=True)
    assert ctx.transform() == transform
    assert ctx.pen() == pen


@pytest.mark.parametrize(
    "x, y, angle, scale",
    [(0.0, 0.0, 0.0, 1.0), (120.0, -40.0, 120.0, 0.5), (-300.0, 75.0, -45.0, 3.0)],
)
def test_shape_center_is_inside_after_any_transform(ctx, x, y, angle, scale):
    elem = pattern_elem(ctx, x=x, y=y, angle=angle, scale_x=scale, scale_y=scale)
    center = ctx.transform().map(elem.local_transform().map(QPointF(50.0, 50.0)))
    assert elem.is_point_inside(center.x(), center.y())
    assert not elem.is_point_inside(center.x() + 200.0 * scale, center.y() + 200.0 * scale)
