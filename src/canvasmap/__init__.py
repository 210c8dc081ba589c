"""2D camera, adaptive grid and hit-testable scene elements on a QPainter."""
from canvasmap.canvas.elem import Elem2D, TransformDecorator, pattern_elem, point2d_elem
from canvasmap.canvas.infinity_grid import InfinityGrid
from canvasmap.canvas.scene import Scene
from canvasmap.canvas.surface import DrawingSurface
from canvasmap.canvas.viewport import Viewport2D, ViewportOptions
from canvasmap.model.geometry import Bounds2D, Point2D, WorldLimits

__version__ = "0.1.0"
