import math


def normalize_angle(angle: float) -> float:
    """
    Take an angle in degrees and return it in the (-180, 180] interval.

    Raises:
        ValueError: If the angle is not a finite number.
    """
    if not math.isfinite(angle):
        raise ValueError(f"Angle must be finite, got {angle!r}.")

    a = math.fmod(angle, 360.0)
    if a <= -180.0:
        a += 360.0
    elif a > 180.0:
        a -= 360.0
    return a


def deg2rad(degrees: float) -> float:
    """Convert degrees to radians."""
    return degrees * math.pi / 180.0


def rad2deg(radians: float) -> float:
    """Convert radians to degrees."""
    return radians * 180.0 / math.pi


def rotate_point(x: float, y: float, angle_rad: float) -> tuple[float, float]:
    """Rotate (x, y) around the origin (y axis pointing down, clockwise on screen)."""
    if not angle_rad:
        return x, y
    cos_a = math.cos(angle_rad)
    sin_a = math.sin(angle_rad)
    return x * cos_a - y * sin_a, x * sin_a + y * cos_a
