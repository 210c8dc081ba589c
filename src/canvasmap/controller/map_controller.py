"""
Map Controller
==============
Wires the demo map together: a camera, the infinity grid, a hue test pattern
with its transform decorator, and the point markers added by clicking.

Why is this file needed?
------------------------
1. Frame: It owns the fixed drawing order clear -> grid -> scene -> markers.
2. Policy: It maps normalized key and pointer events to camera and element
   operations.
3. Introspection: `init_map()` returns a `MapHandle` exposing the live objects,
   instead of publishing them globally.
"""
from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Callable, Optional

from PySide6.QtCore import QObject, Signal

from canvasmap.canvas.elem import Elem2D, TransformDecorator, pattern_elem, point2d_elem
from canvasmap.canvas.infinity_grid import InfinityGrid
from canvasmap.canvas.scene import Scene
from canvasmap.canvas.style import ShapeStyle
from canvasmap.canvas.surface import DrawingSurface
from canvasmap.canvas.viewport import Viewport2D, ViewportOptions
from canvasmap.config import MapConfig
from canvasmap.controller.events import (
    KeyInputEvent, KeyPressedEvent, MouseButtonEvent, MouseDragEvent, MouseWheelEvent
)
from canvasmap.controller.keyboard import KeyboardInput
from canvasmap.controller.mouse import MouseInput
from canvasmap.model.geometry import Point2D
from canvasmap.model.trigonometry import rotate_point

logger = logging.getLogger(__name__)

HIT_STYLE = ShapeStyle(fill_style="red", stroke_style="#550000")
MISS_STYLE = ShapeStyle(fill_style="yellow", stroke_style="black")

# keys that keep acting while held
REPEATABLE_KEYS = frozenset("12qezxwasd")


class MapController(QObject):
    # emitted after every frame so the host can blit the surface
    frame_drawn = Signal()

    def __init__(
        self,
        surface: DrawingSurface,
        config: Optional[MapConfig] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self.surface = surface
        self.config = config if config is not None else MapConfig()
        self.show_outline = False

        cfg = self.config
        self.viewport = Viewport2D(surface, ViewportOptions(min_zoom=cfg.min_zoom, max_zoom=cfg.max_zoom))
        self.viewport.center(0, 0)
        self.viewport.set_angle(0)
        self.viewport.set_zoom(cfg.initial_zoom)
        self.viewport.apply_transform()
        ctx = self.viewport.ctx

        self.grid = InfinityGrid(self.viewport)

        self.scene = Scene()
        self.selected: Elem2D = pattern_elem(ctx, x=50, y=50, angle=45, alpha=1.0)
        self.scene.add(self.selected)
        self.scene.add(TransformDecorator(ctx, self.selected))
        self.markers: deque[Elem2D] = deque(maxlen=cfg.max_markers)

        self.keyboard = KeyboardInput(repeat_interval=cfg.key_repeat_interval, parent=self)
        self.mouse = MouseInput(
            move_threshold=cfg.drag_threshold,
            double_click_max_time=cfg.double_click_max_time,
            track_dragging=(0,),
            parent=self,
        )
        self._drag_origin: Optional[Point2D] = None
        self._actions = self._key_actions()

        self.keyboard.press.connect(self.on_key_press)
        self.keyboard.pressed.connect(self.on_key_held)
        self.mouse.click.connect(self.on_click)
        self.mouse.drag_start.connect(self.on_drag_start)
        self.mouse.drag_move.connect(self.on_drag_move)
        self.mouse.drag_end.connect(self.on_drag_end)
        self.mouse.wheel.connect(self.on_wheel)

    # ------------------------------------------------------------------------------
    # Frame
    # ------------------------------------------------------------------------------

    def draw(self, outline: Optional[bool] = None) -> None:
        if outline is None:
            outline = self.show_outline
        self.viewport.clear()
        self.grid.draw()
        self.scene.draw(outline)
        for marker in self.markers:
            marker.draw()
        self.frame_drawn.emit()

    def resize(self, width: int, height: int) -> None:
        logger.info(f"Resize map to {width}x{height}")
        self.surface.resize(width, height)
        self.viewport.resize(width, height)
        self.draw()

    def close(self) -> None:
        self.keyboard.end()

    # ------------------------------------------------------------------------------
    # Keyboard
    # ------------------------------------------------------------------------------

    def _key_actions(self) -> dict[str, Callable[[], None]]:
        cfg, viewport = self.config, self.viewport
        return {
            "r": viewport.reset,
            "2": lambda: viewport.increase_zoom(cfg.zoom_speed),
            "1": lambda: viewport.increase_zoom(-cfg.zoom_speed),
            "q": lambda: viewport.rotate(-cfg.rotation_speed),
            "e": lambda: viewport.rotate(cfg.rotation_speed),
            "z": lambda: self.selected.rotate(-cfg.rotation_speed),
            "x": lambda: self.selected.rotate(cfg.rotation_speed),
            "s": lambda: viewport.move_center(0, cfg.move_speed),
            "w": lambda: viewport.move_center(0, -cfg.move_speed),
            "a": lambda: viewport.move_center(-cfg.move_speed, 0),
            "d": lambda: viewport.move_center(cfg.move_speed, 0),
            "o": self.toggle_outline,
            "p": lambda: None,
        }

    def toggle_outline(self) -> None:
        self.show_outline = not self.show_outline

    def handle_key(self, key: str) -> bool:
        """Run the action bound to `key` and redraw. Returns False for unbound keys."""
        action = self._actions.get(key.lower())
        if action is None:
            return False
        action()
        self.draw()
        return True

    def on_key_press(self, event: KeyInputEvent) -> None:
        self.handle_key(event.key)

    def on_key_held(self, event: KeyPressedEvent) -> None:
        if event.key.lower() in REPEATABLE_KEYS:
            self.handle_key(event.key)

    # ------------------------------------------------------------------------------
    # Pointer
    # ------------------------------------------------------------------------------

    def hit_test(self, canvas_x: float, canvas_y: float):
        """The top-most scene item under the device point, or None."""
        # hit-testing composes with the camera transform held by the painter
        self.viewport.apply_transform()
        return self.scene.hit_test(canvas_x, canvas_y)

    def on_click(self, event: MouseButtonEvent) -> None:
        if event.button != 0 or event.is_double_click:
            return

        world = self.viewport.get_world_point(event.x, event.y)
        hit = self.hit_test(event.x, event.y)
        logger.debug(
            f"[{'in' if hit else 'out'}] canvas({event.x:g}, {event.y:g}) "
            f"=> world({world.x:.2f}, {world.y:.2f})"
        )

        self.markers.append(
            point2d_elem(self.viewport.ctx, world.x, world.y, style=HIT_STYLE if hit else MISS_STYLE)
        )
        self.draw()

    def on_drag_start(self, event: MouseDragEvent) -> None:
        self._drag_origin = Point2D(self.viewport.center_x, self.viewport.center_y)

    def on_drag_move(self, event: MouseDragEvent) -> None:
        if self._drag_origin is None:
            return
        viewport = self.viewport
        dx, dy = rotate_point(event.drag_x, event.drag_y, -viewport.angle_rad)
        viewport.center(
            self._drag_origin.x - dx / viewport.zoom,
            self._drag_origin.y - dy / viewport.zoom,
        )
        self.draw()

    def on_drag_end(self, event: MouseDragEvent) -> None:
        self._drag_origin = None

    def on_wheel(self, event: MouseWheelEvent) -> None:
        if not event.delta_y:
            return
        pivot = self.viewport.get_world_point(event.x, event.y)
        step = self.config.wheel_zoom_speed if event.delta_y < 0 else -self.config.wheel_zoom_speed
        self.viewport.increase_zoom(step, pivot.x, pivot.y)
        self.draw()


@dataclass
class MapHandle:
    """Live objects of an initialized map, for debugging and tests."""
    controller: MapController
    viewport: Viewport2D
    grid: InfinityGrid
    scene: Scene
    keyboard: KeyboardInput
    mouse: MouseInput

    @property
    def selected(self) -> Elem2D:
        return self.controller.selected

    def draw(self, outline: Optional[bool] = None) -> None:
        self.controller.draw(outline)


def init_map(
    surface: DrawingSurface,
    config: Optional[MapConfig] = None,
    parent: Optional[QObject] = None,
) -> MapHandle:
    """Build the demo map on `surface`, draw the first frame and return its handle."""
    logger.info("Initializing map")
    controller = MapController(surface, config, parent)
    controller.draw()
    return MapHandle(
        controller=controller,
        viewport=controller.viewport,
        grid=controller.grid,
        scene=controller.scene,
        keyboard=controller.keyboard,
        mouse=controller.mouse,
    )
