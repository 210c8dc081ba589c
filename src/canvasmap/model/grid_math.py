from __future__ import annotations

import math
from typing import Iterable, Optional, TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt


def division_points(
    center: float,
    first: float,
    last: float,
    each: float,
    excluded: Optional[Iterable[float]] = None,
) -> npt.NDArray[np.float64]:
    """
    Compute the grid division points covering [first, last].

    Points are aligned to `center + k * each` for integer k, so two grids
    sharing the same center never drift apart. The covered interval goes from
    `center - ceil(|first - center| / each) * each` to
    `center + ceil(|last - center| / each) * each`.

    Args:
        center: Value every point is aligned to.
        first: Lower bound that must be covered.
        last: Upper bound that must be covered.
        each: Spacing between two consecutive points (must be positive).
        excluded: Values to remove from the result (compared within a tiny
            fraction of `each`, so float noise does not keep a duplicate).

    Returns:
        A 1D float array of the points in increasing order.

    Raises:
        ValueError: If `each` is not positive or any bound is not finite.
    """
    if not each > 0 or not math.isfinite(each):
        raise ValueError(f"Grid step must be a positive finite number, got {each!r}.")
    if not (math.isfinite(center) and math.isfinite(first) and math.isfinite(last)):
        raise ValueError(f"Grid bounds must be finite, got center={center}, first={first}, last={last}.")

    k0 = -math.ceil(abs(first - center) / each)
    k1 = math.ceil(abs(last - center) / each)
    points = center + np.arange(k0, k1 + 1, dtype=np.float64) * each

    if excluded is not None:
        excluded = np.fromiter(excluded, dtype=np.float64)
        if excluded.size:
            # values computed with another step may differ in the last bits
            coincident = np.isclose(points[:, None], excluded[None, :], rtol=1e-9, atol=each * 1e-9)
            points = points[~coincident.any(axis=1)]

    return points
