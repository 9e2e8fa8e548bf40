"""Linear and point scales for mapping record values onto the drawing."""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class LinearScale:
    """Map a numeric domain linearly onto a numeric range.

    Inputs outside the domain are extrapolated, not clamped. A zero-width
    domain maps every input to the start of the range.
    """

    domain: tuple[float, float]
    range: tuple[float, float]

    def __call__(self, value: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        if d1 == d0:
            return r0
        try:
            value = float(value)
        except OverflowError:
            value = math.inf if value > 0 else -math.inf
        t = (value - d0) / (d1 - d0)
        return r0 + t * (r1 - r0)


def point_offsets(count: int, lo: float = -0.3, hi: float = 0.3) -> list[float]:
    """Spread count points evenly over [lo, hi], endpoints included.

    A single point sits at the middle of the span.

    Args:
        count: Number of points.
        lo: First point.
        hi: Last point.

    Returns:
        List of count offsets in ascending order.
    """
    if count <= 0:
        return []
    if count == 1:
        return [(lo + hi) / 2]
    step = (hi - lo) / (count - 1)
    return [lo + i * step for i in range(count)]


def circle_angles(count: int) -> list[float]:
    """Evenly spaced angles over [0, 2*pi), starting at 0."""
    return [2 * math.pi * i / count for i in range(count)]


def importance_scale() -> LinearScale:
    """Node circle radius from importance."""
    return LinearScale(domain=(0, 100), range=(8, 48))


def proximity_scale(max_radius: float) -> LinearScale:
    """Distance from the centre from proximity.

    Higher proximity values are drawn farther out.
    """
    return LinearScale(domain=(0, 100), range=(max_radius * 0.2, max_radius))


def strength_scale() -> LinearScale:
    """Stalk stroke width from relationship strength."""
    return LinearScale(domain=(0, 10), range=(1, 10))
