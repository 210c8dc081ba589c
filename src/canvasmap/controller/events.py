"""
Input Events
============
Typed payloads emitted by `KeyboardInput` and `MouseInput`.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True)
class Modifiers:
    alt: bool = False
    ctrl: bool = False
    shift: bool = False


NO_MODIFIERS = Modifiers()


@dataclass(frozen=True)
class KeyInputEvent:
    type: Literal["press", "release", "pressed"]
    key: str
    code: str
    modifiers: Modifiers = NO_MODIFIERS


@dataclass(frozen=True)
class KeyPressedEvent(KeyInputEvent):
    """Emitted repeatedly while a key is held. `interval` is in milliseconds."""
    interval: float = 0.0


@dataclass(frozen=True)
class MouseMoveEvent:
    type: Literal["move", "enter", "leave"]
    x: float
    y: float
    dragging: bool = False
    modifiers: Modifiers = NO_MODIFIERS


@dataclass(frozen=True)
class MouseButtonEvent:
    type: Literal["click", "release"]
    x: float
    y: float
    button: int
    click_x: float
    click_y: float
    dragging: bool = False
    is_double_click: bool = False
    modifiers: Modifiers = NO_MODIFIERS


@dataclass(frozen=True)
class MouseDragEvent:
    """`drag_x`/`drag_y` are accumulated since the button was pressed."""
    type: Literal["drag_start", "drag_move", "drag_end"]
    x: float
    y: float
    button: int
    click_x: float
    click_y: float
    drag_x: float
    drag_y: float
    dragging: bool = False
    modifiers: Modifiers = NO_MODIFIERS


@dataclass(frozen=True)
class MouseWheelEvent:
    type: Literal["wheel"]
    x: float
    y: float
    delta_x: float
    delta_y: float
    delta_z: float = 0.0
    dragging: bool = False
    modifiers: Modifiers = NO_MODIFIERS
