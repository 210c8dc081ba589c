"""
Keyboard Input
==============
Tracks held keys and emits `press` (once per key), `release` and, while any
key is held, `pressed` every `repeat_interval` milliseconds for each held key.

The host forwards already-normalized key data through `key_down` / `key_up`
(its own auto-repeat events must not be forwarded).
"""
from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from PySide6.QtCore import QObject, QTimer, Signal

from canvasmap.controller.events import KeyInputEvent, KeyPressedEvent, Modifiers, NO_MODIFIERS


@dataclass
class _PressedKey:
    key: str
    code: str
    t: float


class KeyboardInput(QObject):
    press = Signal(object)
    release = Signal(object)
    pressed = Signal(object)

    def __init__(
        self,
        track_codes: Iterable[str] = (),
        repeat_interval: int = 10,
        parent: Optional[QObject] = None,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        super().__init__(parent)
        self.track_codes: frozenset[str] = frozenset(track_codes)
        self.repeat_interval = repeat_interval
        self.keys: dict[str, bool] = {}
        self.codes: dict[str, bool] = {}
        self.modifiers: Modifiers = NO_MODIFIERS

        self._clock = clock if clock is not None else time.monotonic
        self._pressed: list[_PressedKey] = []
        self._timer = QTimer(self)
        self._timer.setInterval(max(0, repeat_interval))
        self._timer.timeout.connect(self.repeat)

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    @property
    def is_repeating(self) -> bool:
        return self._timer.isActive()

    def held_codes(self) -> list[str]:
        return [k.code for k in self._pressed]

    def key_down(self, key: str, code: str, modifiers: Modifiers = NO_MODIFIERS) -> None:
        if not self._is_tracked(code):
            return

        self.keys[key] = True
        self.codes[code] = True
        self.modifiers = modifiers

        if not self._timer.isActive() and self.repeat_interval >= 0:
            self._timer.start()

        if any(k.code == code for k in self._pressed):
            return
        self._pressed.append(_PressedKey(key=key, code=code, t=self._now_ms()))
        self.press.emit(KeyInputEvent(type="press", key=key, code=code, modifiers=modifiers))

    def key_up(self, key: str, code: str, modifiers: Modifiers = NO_MODIFIERS) -> None:
        if not self._is_tracked(code):
            return

        self.keys[key] = False
        self.codes[code] = False
        self.modifiers = modifiers

        self._pressed = [k for k in self._pressed if k.code != code]
        if not self._pressed:
            self._timer.stop()

        self.release.emit(KeyInputEvent(type="release", key=key, code=code, modifiers=modifiers))

    def repeat(self) -> None:
        """Emit a `pressed` event for every held key (called by the repeat timer)."""
        now = self._now_ms()
        for pressed_key in list(self._pressed):
            self.pressed.emit(
                KeyPressedEvent(
                    type="pressed",
                    key=pressed_key.key,
                    code=pressed_key.code,
                    modifiers=self.modifiers,
                    interval=now - pressed_key.t,
                )
            )
            pressed_key.t = now

    def end(self) -> None:
        """Stop repeating and forget the held keys."""
        self._timer.stop()
        self._pressed.clear()

    # ------------------------------------------------------------------------------
    # Internal methods
    # ------------------------------------------------------------------------------

    def _is_tracked(self, code: str) -> bool:
        return not self.track_codes or code in self.track_codes

    def _now_ms(self) -> float:
        return self._clock() * 1000.0
