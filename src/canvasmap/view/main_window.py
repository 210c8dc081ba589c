"""
Main Application Window
=======================
Holds the map widget and a status bar with the camera state and the world
position under the pointer.
"""
from typing import Optional

from PySide6.QtWidgets import QLabel, QMainWindow

from canvasmap.config import MapConfig, VISIBLE_APP_NAME
from canvasmap.controller.map_controller import MapHandle
from canvasmap.view.map_widget import CanvasMapWidget

HELP_TEXT = "R reset | 1/2 zoom | Q/E rotate | WASD pan | Z/X rotate element | O outline | drag pan | wheel zoom"


class MainWindow(QMainWindow):
    def __init__(self, config: Optional[MapConfig] = None) -> None:
        super().__init__()
        self.config = config if config is not None else MapConfig()
        self.setWindowTitle(VISIBLE_APP_NAME)
        self.resize(self.config.window_width, self.config.window_height)

        self.map_widget = CanvasMapWidget(self.config, self)
        self.setCentralWidget(self.map_widget)

        self.position_label = QLabel()
        self.statusBar().addPermanentWidget(self.position_label)
        self.statusBar().showMessage(HELP_TEXT)

        self.map_widget.world_position_changed.connect(self.on_world_position)
        self.map_widget.setFocus()

    @property
    def handle(self) -> MapHandle:
        return self.map_widget.handle

    def on_world_position(self, x: float, y: float) -> None:
        viewport = self.handle.viewport
        self.position_label.setText(
            f"x={x:.1f}  y={y:.1f}  zoom={viewport.zoom:g}  angle={viewport.angle_deg:g}°"
        )
