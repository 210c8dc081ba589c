"""
The CANVAS layer draws on a QPainter bound to a DrawingSurface.
It holds the camera (Viewport2D), the adaptive grid and the scene elements.
"""
