"""
Canvas Map Widget
=================
Hosts the map: owns the DrawingSurface, blits it on paint, forwards resizes
and normalizes Qt key/mouse events into the map's input objects.
"""
from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import QPointF, Qt, Signal
from PySide6.QtGui import QEnterEvent, QKeyEvent, QMouseEvent, QPainter, QWheelEvent
from PySide6.QtWidgets import QSizePolicy, QWidget

from canvasmap.canvas.surface import DrawingSurface
from canvasmap.config import MapConfig
from canvasmap.controller.events import Modifiers
from canvasmap.controller.map_controller import MapHandle, init_map

logger = logging.getLogger(__name__)

MOUSE_BUTTONS = {
    Qt.MouseButton.LeftButton: 0,
    Qt.MouseButton.RightButton: 1,
    Qt.MouseButton.MiddleButton: 2,
}


def _modifiers(event) -> Modifiers:
    mods = event.modifiers()
    return Modifiers(
        alt=bool(mods & Qt.KeyboardModifier.AltModifier),
        ctrl=bool(mods & Qt.KeyboardModifier.ControlModifier),
        shift=bool(mods & Qt.KeyboardModifier.ShiftModifier),
    )


def _key_ids(event: QKeyEvent) -> tuple[str, str]:
    """(key, code): the produced character (or key name) and the Qt key name."""
    try:
        code = Qt.Key(event.key()).name
    except ValueError:
        code = str(event.key())
    key = event.text().lower() or code.removeprefix("Key_").lower()
    return key, code


class CanvasMapWidget(QWidget):
    # world position under the pointer
    world_position_changed = Signal(float, float)

    def __init__(self, config: Optional[MapConfig] = None, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.config = config if config is not None else MapConfig()

        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.setMouseTracking(True)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self.setMinimumSize(50, 50)

        self.surface = DrawingSurface(max(1, self.width()), max(1, self.height()))
        self.handle: MapHandle = init_map(self.surface, self.config, parent=self)
        self.handle.controller.frame_drawn.connect(self.update)
        self.handle.mouse.move.connect(self._on_pointer_move)

    # ---- Qt events ----

    def paintEvent(self, event) -> None:
        painter = QPainter(self)
        painter.fillRect(self.rect(), Qt.GlobalColor.white)
        painter.drawImage(QPointF(0, 0), self.surface.image)
        painter.end()

    def resizeEvent(self, event) -> None:
        size = event.size()
        self.handle.controller.resize(size.width(), size.height())
        super().resizeEvent(event)

    def closeEvent(self, event) -> None:
        self.handle.controller.close()
        self.surface.close()
        super().closeEvent(event)

    def keyPressEvent(self, event: QKeyEvent) -> None:
        if event.isAutoRepeat():
            # KeyboardInput does its own repeating
            return
        key, code = _key_ids(event)
        self.handle.keyboard.key_down(key, code, _modifiers(event))

    def keyReleaseEvent(self, event: QKeyEvent) -> None:
        if event.isAutoRepeat():
            return
        key, code = _key_ids(event)
        self.handle.keyboard.key_up(key, code, _modifiers(event))

    def mousePressEvent(self, event: QMouseEvent) -> None:
        button = MOUSE_BUTTONS.get(event.button())
        if button is None:
            return super().mousePressEvent(event)
        pos = event.position()
        self.handle.mouse.button_down(pos.x(), pos.y(), button, _modifiers(event))

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        button = MOUSE_BUTTONS.get(event.button())
        if button is None:
            return super().mouseReleaseEvent(event)
        pos = event.position()
        self.handle.mouse.button_up(pos.x(), pos.y(), button, _modifiers(event))

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        pos = event.position()
        self.handle.mouse.pointer_move(pos.x(), pos.y(), _modifiers(event))

    def enterEvent(self, event: QEnterEvent) -> None:
        pos = event.position()
        self.handle.mouse.pointer_enter(pos.x(), pos.y(), _modifiers(event))
        super().enterEvent(event)

    def leaveEvent(self, event) -> None:
        mouse = self.handle.mouse
        mouse.pointer_leave(mouse.x, mouse.y)
        super().leaveEvent(event)

    def wheelEvent(self, event: QWheelEvent) -> None:
        pos = event.position()
        delta = event.angleDelta()
        # browser convention: positive delta_y scrolls down
        self.handle.mouse.wheel_event(pos.x(), pos.y(), -delta.x(), -delta.y(), 0.0, _modifiers(event))
        event.accept()

    # ---- slots ----

    def _on_pointer_move(self, event) -> None:
        world = self.handle.viewport.get_world_point(event.x, event.y)
        self.world_position_changed.emit(world.x, world.y)
