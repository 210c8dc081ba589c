import numpy as np
import pytest

from canvasmap.canvas.infinity_grid import GridOptions, InfinityGrid
from canvasmap.canvas.style import LineConfig
from canvasmap.canvas.viewport import Viewport2D


@pytest.fixture
def viewport(surface):
    viewport = Viewport2D(surface)
    viewport.apply_transform()
    return viewport


def test_lines_cover_the_visible_world(viewport):
    grid = InfinityGrid(viewport)
    lines = grid.compute_lines()
    bounds = viewport.get_visible_world_bounds()

    np.testing.assert_allclose(lines.main_xs, [0.0, 100.0, 200.0])
    np.testing.assert_allclose(lines.main_ys, [0.0, 100.0])
    assert lines.sub_xs[0] >= bounds.left - 25.0
    assert lines.main_xs[0] <= bounds.left
    assert lines.main_xs[-1] >= bounds.right
    assert lines.main_ys[-1] >= bounds.bottom


def test_minor_lines_skip_major_lines(viewport):
    lines = InfinityGrid(viewport).compute_lines()
    np.testing.assert_allclose(lines.sub_xs, [25.0, 50.0, 75.0, 125.0, 150.0, 175.0])
    assert not np.isin(lines.sub_ys, lines.main_ys).any()


def test_lines_follow_the_camera(viewport):
    grid = InfinityGrid(viewport)
    viewport.set_zoom(0.5)
    viewport.set_angle(30.0)
    lines = grid.compute_lines()
    bounds = viewport.get_visible_world_bounds()
    assert lines.main_xs[0] <= bounds.left
    assert lines.main_xs[-1] >= bounds.right
    assert lines.main_ys[0] <= bounds.top
    assert lines.main_ys[-1] >= bounds.bottom


def test_lines_are_aligned_to_the_grid_center(viewport):
    options = GridOptions(center_x=10.0, center_y=-5.0)
    lines = InfinityGrid(viewport, options).compute_lines()
    np.testing.assert_allclose((lines.main_xs - 10.0) % 100.0, 0.0)
    np.testing.assert_allclose((lines.main_ys + 5.0) % 100.0, 0.0)


@pytest.mark.parametrize("each", [0.0, -10.0])
def test_non_positive_spacing_raises(viewport, each):
    options = GridOptions(main_lines=LineConfig(each=each, alpha=1.0, line_width=1.0))
    with pytest.raises(ValueError):
        InfinityGrid(viewport, options)


def test_draw_leaves_the_painter_unchanged(viewport):
    grid = InfinityGrid(viewport)
    ctx = viewport.ctx
    transform = ctx.transform()
    opacity = ctx.opacity()
    grid.draw()
    assert ctx.transform() == transform
    assert ctx.opacity() == opacity
