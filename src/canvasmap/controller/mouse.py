"""
Mouse Input
===========
Normalizes pointer activity into click/release, drag start/move/end, wheel and
move/enter/leave events.

A drag starts once the pointer moved at least `move_threshold` pixels from the
press position while a button listed in `track_dragging` is held. Drag events
carry the delta accumulated since the press.
"""
from __future__ import annotations

import time
from typing import Callable, Iterable, Optional

from PySide6.QtCore import QObject, Signal

from canvasmap.controller.events import (
    Modifiers, MouseButtonEvent, MouseDragEvent, MouseMoveEvent, MouseWheelEvent, NO_MODIFIERS
)


class MouseInput(QObject):
    move = Signal(object)
    enter = Signal(object)
    leave = Signal(object)
    click = Signal(object)
    release = Signal(object)
    drag_start = Signal(object)
    drag_move = Signal(object)
    drag_end = Signal(object)
    wheel = Signal(object)

    def __init__(
        self,
        n_buttons: int = 2,
        move_threshold: float = 3.0,
        double_click_max_time: float = 500.0,
        track_dragging: Iterable[int] = (0,),
        parent: Optional[QObject] = None,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        super().__init__(parent)
        self.n_buttons = n_buttons
        self.move_threshold = move_threshold
        self.double_click_max_time = double_click_max_time
        self.track_dragging: frozenset[int] = frozenset(track_dragging)

        self.x: float = -1.0
        self.y: float = -1.0
        self.click_x: float = -1.0
        self.click_y: float = -1.0
        self.dragging_button: Optional[int] = None
        self.drag_x: float = 0.0
        self.drag_y: float = 0.0
        self.is_outside: bool = True
        self.last_click_time: float = -float("inf")
        self.last_click_button: Optional[int] = None

        self._buttons: list[bool] = [False] * n_buttons
        self._clock = clock if clock is not None else time.monotonic

    @property
    def dragging(self) -> bool:
        return self.dragging_button is not None

    def button_down(self, x: float, y: float, button: int, modifiers: Modifiers = NO_MODIFIERS) -> None:
        if not 0 <= button < self.n_buttons:
            return

        now = self._clock() * 1000.0
        is_double_click = (
            now - self.last_click_time < self.double_click_max_time
            and button == self.last_click_button
            and abs(x - self.click_x) < self.move_threshold
            and abs(y - self.click_y) < self.move_threshold
        )

        self.x, self.y = x, y
        self.click_x, self.click_y = x, y
        self.drag_x = self.drag_y = 0.0
        self.is_outside = False
        self._buttons[button] = True
        self.last_click_button = button
        self.last_click_time = now

        self.click.emit(MouseButtonEvent(
            type="click", x=x, y=y, button=button, click_x=x, click_y=y,
            dragging=self.dragging, is_double_click=is_double_click, modifiers=modifiers,
        ))

    def button_up(self, x: float, y: float, button: int, modifiers: Modifiers = NO_MODIFIERS) -> None:
        if not 0 <= button < self.n_buttons:
            return

        self.x, self.y = x, y
        self.is_outside = False
        self._buttons[button] = False

        self.release.emit(MouseButtonEvent(
            type="release", x=x, y=y, button=button, click_x=self.click_x, click_y=self.click_y,
            dragging=self.dragging, modifiers=modifiers,
        ))

        if self.dragging_button != button:
            return

        self.dragging_button = None
        self.drag_end.emit(MouseDragEvent(
            type="drag_end", x=x, y=y, button=button, click_x=self.click_x, click_y=self.click_y,
            drag_x=self.drag_x, drag_y=self.drag_y, dragging=False, modifiers=modifiers,
        ))

    def pointer_enter(self, x: float, y: float, modifiers: Modifiers = NO_MODIFIERS) -> None:
        self.x, self.y = x, y
        self.is_outside = False
        self.enter.emit(MouseMoveEvent(type="enter", x=x, y=y, dragging=self.dragging, modifiers=modifiers))

    def pointer_leave(self, x: float, y: float, modifiers: Modifiers = NO_MODIFIERS) -> None:
        self.x, self.y = x, y
        self.is_outside = True
        self.leave.emit(MouseMoveEvent(type="leave", x=x, y=y, dragging=self.dragging, modifiers=modifiers))

    def pointer_move(self, x: float, y: float, modifiers: Modifiers = NO_MODIFIERS) -> None:
        self.x, self.y = x, y
        self.move.emit(MouseMoveEvent(type="move", x=x, y=y, dragging=self.dragging, modifiers=modifiers))

        held = next((i for i, down in enumerate(self._buttons) if down), None)
        if held is None or held not in self.track_dragging:
            return

        drag_x = x - self.click_x
        drag_y = y - self.click_y

        if self.dragging_button is None:
            if abs(drag_x) < self.move_threshold and abs(drag_y) < self.move_threshold:
                # still a click
                return
            self.dragging_button = held
            self.drag_start.emit(MouseDragEvent(
                type="drag_start", x=x, y=y, button=held, click_x=self.click_x, click_y=self.click_y,
                drag_x=drag_x, drag_y=drag_y, dragging=True, modifiers=modifiers,
            ))

        self.drag_x, self.drag_y = drag_x, drag_y
        self.drag_move.emit(MouseDragEvent(
            type="drag_move", x=x, y=y, button=held, click_x=self.click_x, click_y=self.click_y,
            drag_x=drag_x, drag_y=drag_y, dragging=True, modifiers=modifiers,
        ))

    def wheel_event(
        self,
        x: float,
        y: float,
        delta_x: float,
        delta_y: float,
        delta_z: float = 0.0,
        modifiers: Modifiers = NO_MODIFIERS,
    ) -> None:
        self.x, self.y = x, y
        self.wheel.emit(MouseWheelEvent(
            type="wheel", x=x, y=y, delta_x=delta_x, delta_y=delta_y, delta_z=delta_z,
            dragging=self.dragging, modifiers=modifiers,
        ))
