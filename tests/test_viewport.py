import math

import pytest
from PySide6.QtCore import QPointF
from PySide6.QtGui import QColor

from canvasmap.canvas.surface import DrawingSurface
from canvasmap.canvas.infinity_grid import InfinityGrid
from canvasmap.canvas.viewport import MIN_ZOOM, Viewport2D, ViewportOptions
from canvasmap.model.geometry import WorldLimits


@pytest.fixture
def viewport(surface):
    return Viewport2D(surface)


def test_reset_centers_on_the_middle_of_the_surface(viewport):
    assert (viewport.width, viewport.height) == (200, 100)
    assert (viewport.center_x, viewport.center_y) == (100.0, 50.0)
    assert viewport.zoom == 1.0
    assert viewport.angle_deg == 0.0
    point = viewport.get_canvas_point(10.0, 20.0)
    assert (point.x, point.y) == pytest.approx((10.0, 20.0))


def test_world_screen_round_trip(viewport):
    viewport.center(-30.0, 12.5)
    viewport.set_zoom(2.5)
    viewport.set_angle(33.0)
    for x, y in [(0.0, 0.0), (17.0, -4.0), (-250.0, 80.0)]:
        canvas = viewport.get_canvas_point(x, y)
        world = viewport.get_world_point(canvas.x, canvas.y)
        assert world.x == pytest.approx(x)
        assert world.y == pytest.approx(y)


def test_transform_matches_point_mapping(viewport):
    viewport.center(20.0, -10.0)
    viewport.set_zoom(1.5)
    viewport.set_angle(-60.0)
    mapped = viewport.transform().map(QPointF(7.0, 3.0))
    expected = viewport.get_canvas_point(7.0, 3.0)
    assert mapped.x() == pytest.approx(expected.x)
    assert mapped.y() == pytest.approx(expected.y)


def test_center_is_shown_in_the_middle(viewport):
    viewport.center(40.0, 40.0)
    viewport.set_zoom(3.0)
    viewport.set_angle(90.0)
    middle = viewport.get_canvas_point(40.0, 40.0)
    assert middle.x == pytest.approx(100.0, abs=1.0)
    assert middle.y == pytest.approx(50.0, abs=1.0)


def test_translation_is_rounded_to_whole_pixels(viewport):
    viewport.center(0.3, 0.7)
    viewport.set_zoom(1.7)
    assert viewport.tx == math.floor(viewport.tx)
    assert viewport.ty == math.floor(viewport.ty)


def test_zoom_is_clamped(surface):
    viewport = Viewport2D(surface, ViewportOptions(min_zoom=0.5, max_zoom=4.0))
    viewport.set_zoom(10.0)
    assert viewport.zoom == 4.0
    viewport.increase_zoom(-100.0)
    assert viewport.zoom == 0.5
    viewport.set_zoom(math.inf)
    assert viewport.zoom == 4.0
    viewport.set_zoom(-math.inf)
    assert viewport.zoom == 0.5


def test_zoom_has_no_upper_bound_by_default(viewport):
    viewport.set_zoom(1e6)
    assert viewport.zoom == 1e6


@pytest.mark.parametrize("zoom_diff", [-1.0, -5.0, -math.inf])
def test_zoom_never_reaches_zero_by_default(viewport, zoom_diff):
    viewport.increase_zoom(zoom_diff)
    assert viewport.zoom == MIN_ZOOM

    grid = InfinityGrid(viewport)
    grid.draw()
    bounds = viewport.get_visible_world_bounds()
    assert math.isfinite(bounds.width) and bounds.width > 0


def test_non_positive_zoom_falls_back_to_the_floor(surface):
    viewport = Viewport2D(surface, ViewportOptions(min_zoom=-10.0, max_zoom=4.0))
    viewport.set_zoom(0.0, 30.0, 30.0)
    assert viewport.zoom == MIN_ZOOM
    world = viewport.get_world_point(0.0, 0.0)
    assert math.isfinite(world.x) and math.isfinite(world.y)


def test_non_positive_max_zoom_raises(surface):
    with pytest.raises(ValueError):
        Viewport2D(surface, ViewportOptions(min_zoom=-2.0, max_zoom=0.0))


def test_inverted_zoom_limits_raise(surface):
    with pytest.raises(ValueError):
        Viewport2D(surface, ViewportOptions(min_zoom=5.0, max_zoom=1.0))


def test_requires_an_active_painter():
    surface = DrawingSurface(10, 10)
    surface.close()
    with pytest.raises(RuntimeError):
        Viewport2D(surface)


@pytest.mark.parametrize("angle", [0.0, 30.0, -135.0])
def test_zoom_keeps_the_pivot_in_place(viewport, angle):
    viewport.center(0.0, 0.0)
    viewport.set_angle(angle)
    before = viewport.get_canvas_point(40.0, 10.0)

    viewport.set_zoom(3.0, 40.0, 10.0)

    after = viewport.get_canvas_point(40.0, 10.0)
    assert after.x == pytest.approx(before.x, abs=1.0)
    assert after.y == pytest.approx(before.y, abs=1.0)


def test_world_limits_clamp_the_center(surface):
    limits = WorldLimits(top=0.0, bottom=50.0, left=0.0, right=100.0)
    viewport = Viewport2D(surface, ViewportOptions(world_limits=limits))
    viewport.center(500.0, -20.0)
    assert (viewport.center_x, viewport.center_y) == (100.0, 0.0)
    viewport.move_center(-30.0, 10.0)
    assert (viewport.center_x, viewport.center_y) == (70.0, 10.0)


def test_transform_is_recomputed_lazily(viewport):
    assert viewport.transform_updates == 0
    viewport.get_canvas_point(0.0, 0.0)
    viewport.apply_transform()
    viewport.get_world_point(0.0, 0.0)
    assert viewport.transform_updates == 1

    viewport.resize(200, 100)
    viewport.apply_transform()
    assert viewport.transform_updates == 1

    viewport.resize(300, 100)
    viewport.apply_transform()
    assert viewport.transform_updates == 2


def test_set_angle_to_the_same_value_does_not_invalidate(viewport):
    viewport.set_angle(45.0)
    viewport.apply_transform()
    updates = viewport.transform_updates
    viewport.set_angle(405.0)
    viewport.apply_transform()
    assert viewport.transform_updates == updates
    assert viewport.angle_deg == 45.0


def test_apply_transform_programs_the_painter(viewport):
    viewport.set_zoom(2.0)
    viewport.set_angle(10.0)
    viewport.apply_transform()
    assert viewport.ctx.transform() == viewport.transform()


def test_visible_corners_without_rotation(viewport):
    tl, bl, tr, br = viewport.get_visible_world_corners()
    assert (tl.x, tl.y) == pytest.approx((0.0, 0.0))
    assert (bl.x, bl.y) == pytest.approx((0.0, 99.0))
    assert (tr.x, tr.y) == pytest.approx((199.0, 0.0))
    assert (br.x, br.y) == pytest.approx((199.0, 99.0))

    bounds = viewport.get_visible_world_bounds()
    assert (bounds.left, bounds.right, bounds.top, bounds.bottom) == pytest.approx((0.0, 199.0, 0.0, 99.0))


def test_visible_bounds_cover_the_rotated_view(viewport):
    viewport.set_angle(30.0)
    viewport.set_zoom(2.0)
    bounds = viewport.get_visible_world_bounds()
    for corner in viewport.get_visible_world_corners():
        assert bounds.contains(corner.x, corner.y)
    # the covering box grows with the rotation
    assert bounds.width > 199.0 / 2.0


def test_visible_bounds_follow_camera_changes(viewport):
    first = viewport.get_visible_world_bounds()
    viewport.move_center(50.0, 0.0)
    second = viewport.get_visible_world_bounds()
    assert second.left == pytest.approx(first.left + 50.0)


def test_clear_erases_the_surface(surface, viewport):
    viewport.ctx.fillRect(0, 0, 200, 100, QColor("red"))
    viewport.set_zoom(2.0)
    viewport.clear()
    assert viewport.ctx.transform() == viewport.transform()

    surface.close()
    assert surface.image.pixelColor(10, 10).alpha() == 0
    assert surface.image.pixelColor(190, 90).alpha() == 0


def test_resize_updates_the_size(viewport):
    viewport.resize(320, 240)
    assert (viewport.width, viewport.height) == (320, 240)
    _, _, _, br = viewport.get_visible_world_corners()
    assert br.x == pytest.approx(viewport.get_world_point(319, 239).x)
