"""
Configuration
=============
Defaults for the interactive map and their user overrides.

Values can be overridden per user through QSettings under the "map/" group,
e.g. `map/max_zoom=20`, the same way the application stores UI preferences.

Exports:
    MapConfig: Camera limits, input speeds and window size.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from typing import Optional

from PySide6.QtCore import QSettings

logger = logging.getLogger(__name__)

ORG_ID = "canvasmap"
APP_ID = "canvas-map"
VISIBLE_APP_NAME = "Canvas Map"

SETTINGS_GROUP = "map"


@dataclass(frozen=True)
class MapConfig:
    # camera
    min_zoom: float = 0.5
    max_zoom: float = 10.0
    initial_zoom: float = 2.0

    # keyboard steps
    move_speed: float = 25.0
    zoom_speed: float = 0.5
    rotation_speed: float = 15.0
    key_repeat_interval: int = 100  # ms

    # pointer
    wheel_zoom_speed: float = 0.25
    drag_threshold: float = 3.0
    double_click_max_time: float = 500.0  # ms

    # scene
    max_markers: int = 100

    # window
    window_width: int = 1200
    window_height: int = 800

    @classmethod
    def from_settings(cls, settings: Optional[QSettings] = None) -> MapConfig:
        """Defaults overridden by the values stored under the "map/" group."""
        if settings is None:
            settings = QSettings()

        config = cls()
        overrides = {}
        settings.beginGroup(SETTINGS_GROUP)
        try:
            for f in fields(cls):
                if not settings.contains(f.name):
                    continue
                default = getattr(config, f.name)
                overrides[f.name] = settings.value(f.name, default, type=type(default))
        finally:
            settings.endGroup()

        if overrides:
            logger.info(f"Map settings overridden: {overrides}")
        return replace(config, **overrides)
