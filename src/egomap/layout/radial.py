"""Category-grouped radial placement of stakeholders around the centre."""

import math
from collections.abc import Sequence
from dataclasses import dataclass, field

from ..records import StakeholderRecord
from .scales import (
    circle_angles,
    importance_scale,
    point_offsets,
    proximity_scale,
    strength_scale,
)

# Proximity values of the background guide circles
RING_VALUES = (20, 40, 60, 80, 100)

# Fraction of the smaller viewport side used by the outermost ring
MAX_RADIUS_FACTOR = 0.42

# Half-width in radians of the arc a category's members are spread over
CATEGORY_SPREAD = 0.3


@dataclass(frozen=True)
class LayoutPosition:
    """Computed placement of one record."""

    record_id: str
    angle: float
    radius: float
    x: float
    y: float
    size: float  # node circle radius
    link_width: float
    record: StakeholderRecord


@dataclass(frozen=True)
class RadialLayout:
    """Result of one layout pass over the whole record list."""

    width: float
    height: float
    center_x: float
    center_y: float
    max_radius: float
    ring_values: tuple[int, ...] = RING_VALUES
    ring_radii: tuple[float, ...] = ()
    positions: tuple[LayoutPosition, ...] = field(default_factory=tuple)

    @property
    def is_empty_viewport(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def position(self, record_id: str) -> LayoutPosition | None:
        for pos in self.positions:
            if pos.record_id == record_id:
                return pos
        return None


def first_per_id(positions: Sequence[LayoutPosition]) -> list[LayoutPosition]:
    """Drop positions whose record id was already seen, keeping order.

    Records sharing an id are drawn once, as the first of them.
    """
    seen: set[str] = set()
    unique = []
    for pos in positions:
        if pos.record_id not in seen:
            seen.add(pos.record_id)
            unique.append(pos)
    return unique


def group_by_category(
    records: Sequence[StakeholderRecord],
) -> list[tuple[str, list[StakeholderRecord]]]:
    """Group records by category, keeping first-seen category order.

    Args:
        records: Records in store order.

    Returns:
        List of (category, members) with members in store order.
    """
    groups: dict[str, list[StakeholderRecord]] = {}
    for record in records:
        if record.category not in groups:
            groups[record.category] = []
        groups[record.category].append(record)
    return list(groups.items())


def category_angles(categories: Sequence[str]) -> dict[str, float]:
    """Base angle for each category, evenly spaced around the circle."""
    return dict(zip(categories, circle_angles(len(categories))))


def compute_layout(
    records: Sequence[StakeholderRecord],
    width: float,
    height: float,
) -> RadialLayout:
    """Place every record on the radial map.

    Each category gets an evenly spaced base angle. Members of a category are
    fanned out symmetrically within +/- CATEGORY_SPREAD radians of it, and
    sit at a distance from the centre given by their proximity.

    Args:
        records: Records in store order.
        width: Viewport width in pixels.
        height: Viewport height in pixels.

    Returns:
        RadialLayout with one LayoutPosition per record, in group order.
    """
    width = max(width, 0)
    height = max(height, 0)
    center_x = width / 2
    center_y = height / 2
    max_radius = min(width, height) * MAX_RADIUS_FACTOR

    size = importance_scale()
    radius = proximity_scale(max_radius)
    link_width = strength_scale()

    groups = group_by_category(records)
    base_angles = category_angles([category for category, _ in groups])

    positions: list[LayoutPosition] = []
    for category, members in groups:
        base = base_angles[category]
        offsets = point_offsets(len(members), -CATEGORY_SPREAD, CATEGORY_SPREAD)
        for record, offset in zip(members, offsets):
            angle = base + offset
            r = radius(record.proximity)
            positions.append(
                LayoutPosition(
                    record_id=record.id,
                    angle=angle,
                    radius=r,
                    x=center_x + math.cos(angle) * r,
                    y=center_y + math.sin(angle) * r,
                    size=size(record.importance),
                    link_width=link_width(record.strength),
                    record=record,
                )
            )

    return RadialLayout(
        width=width,
        height=height,
        center_x=center_x,
        center_y=center_y,
        max_radius=max_radius,
        ring_values=RING_VALUES,
        ring_radii=tuple(radius(v) for v in RING_VALUES),
        positions=tuple(positions),
    )
