"""Drawing the radial map and handling node drag interaction."""

from dataclasses import dataclass
from enum import Enum

from ..records import StakeholderRecord
from .radial import RadialLayout, first_per_id
from .surface import DrawingSurface, escape_html

CENTER_LABEL = "You"
CENTER_RADIUS = 12

# Legend block offset from the top-right corner
LEGEND_INSET_X = 210
LEGEND_INSET_Y = 20

# Tooltip offset from the pointer
TOOLTIP_OFFSET = 12


class DragState(Enum):
    """Interaction state of a single node."""

    IDLE = "idle"
    DRAGGING = "dragging"


class DragStateError(RuntimeError):
    """A drag event arrived in a state that does not accept it."""


@dataclass(frozen=True)
class Tooltip:
    """Hover details for a node."""

    visible: bool
    x: float = 0
    y: float = 0
    html: str = ""


HIDDEN_TOOLTIP = Tooltip(visible=False)


def tooltip_html(record: StakeholderRecord) -> str:
    """Build the escaped tooltip markup for a record.

    The notes line is left out when the record has no notes.
    """
    lines = [
        f"<strong>{escape_html(record.name)}</strong>",
        f"Category: {escape_html(record.category)}",
        f"Importance: {escape_html(record.importance)}",
        f"Proximity: {escape_html(record.proximity)}",
        f"Strength: {escape_html(record.strength)}",
    ]
    if record.notes:
        lines.append(f"Notes: {escape_html(record.notes)}")
    return "<br/>".join(lines)


class Renderer:
    """Paint a RadialLayout onto a surface and track drag overrides.

    Every call to `render` is a fresh layout pass: drag overrides and drag
    states from the previous pass are discarded.
    """

    def __init__(self, surface: DrawingSurface):
        self.surface = surface
        self.layout: RadialLayout | None = None
        self.overrides: dict[str, tuple[float, float]] = {}
        self.drag_states: dict[str, DragState] = {}
        self.tooltip: Tooltip = HIDDEN_TOOLTIP

    def render(self, layout: RadialLayout) -> bool:
        """Draw the whole map back to front.

        Args:
            layout: Output of compute_layout.

        Returns:
            False if nothing was drawn because the viewport has no area.
        """
        self.layout = layout
        self.overrides = {}
        self.drag_states = {pos.record_id: DragState.IDLE for pos in layout.positions}
        self.tooltip = HIDDEN_TOOLTIP

        self.surface.clear(layout.width, layout.height)
        if layout.is_empty_viewport:
            return False

        cx, cy = layout.center_x, layout.center_y
        for r in layout.ring_radii:
            self.surface.draw_ring(cx, cy, r)

        self.surface.draw_center(cx, cy, CENTER_RADIUS, CENTER_LABEL)

        positions = first_per_id(layout.positions)
        for pos in positions:
            self.surface.draw_link(pos.record_id, cx, cy, pos.x, pos.y, pos.link_width)

        for pos in positions:
            self.surface.draw_node(pos.record_id, pos.x, pos.y, pos.size, pos.record.name)

        self.surface.draw_legend(layout.width - LEGEND_INSET_X, LEGEND_INSET_Y)
        return True

    def _require_layout(self) -> RadialLayout:
        if self.layout is None:
            raise DragStateError("Nothing has been rendered yet")
        return self.layout

    def _require_node(self, record_id: str) -> None:
        if record_id not in self.drag_states:
            raise KeyError(f"Unknown node {record_id!r}")

    def node_position(self, record_id: str) -> tuple[float, float]:
        """Where the node is currently drawn: its drag override, else its layout spot."""
        if record_id in self.overrides:
            return self.overrides[record_id]
        pos = self._require_layout().position(record_id)
        if pos is None:
            raise KeyError(f"Unknown node {record_id!r}")
        return pos.x, pos.y

    def link_endpoints(self, record_id: str) -> tuple[tuple[float, float], tuple[float, float]]:
        """(near, far) endpoints of a node's stalk. The near end is always the centre."""
        layout = self._require_layout()
        return (layout.center_x, layout.center_y), self.node_position(record_id)

    def drag_start(self, record_id: str) -> None:
        """IDLE -> DRAGGING: lift the node above its siblings."""
        self._require_node(record_id)
        if self.drag_states[record_id] is DragState.DRAGGING:
            raise DragStateError(f"Node {record_id!r} is already being dragged")
        self.drag_states[record_id] = DragState.DRAGGING
        self.surface.raise_node(record_id)

    def drag_move(self, record_id: str, x: float, y: float) -> None:
        """DRAGGING -> DRAGGING: the node and the far end of its stalk follow the pointer."""
        self._require_node(record_id)
        if self.drag_states[record_id] is not DragState.DRAGGING:
            raise DragStateError(f"Node {record_id!r} is not being dragged")
        self.overrides[record_id] = (x, y)
        self.surface.move_node(record_id, x, y)
        self.surface.move_link_end(record_id, x, y)

    def drag_end(self, record_id: str) -> None:
        """DRAGGING -> IDLE. The node stays where it was dropped."""
        self._require_node(record_id)
        if self.drag_states[record_id] is not DragState.DRAGGING:
            raise DragStateError(f"Node {record_id!r} is not being dragged")
        self.drag_states[record_id] = DragState.IDLE

    def drag_to(self, record_id: str, x: float, y: float) -> None:
        """Run a complete start/move/end gesture."""
        self.drag_start(record_id)
        self.drag_move(record_id, x, y)
        self.drag_end(record_id)

    def hover(self, record_id: str, pointer_x: float, pointer_y: float) -> Tooltip:
        """Show the tooltip for a node next to the pointer."""
        pos = self._require_layout().position(record_id)
        if pos is None:
            raise KeyError(f"Unknown node {record_id!r}")
        self.tooltip = Tooltip(
            visible=True,
            x=pointer_x + TOOLTIP_OFFSET,
            y=pointer_y + TOOLTIP_OFFSET,
            html=tooltip_html(pos.record),
        )
        return self.tooltip

    def leave(self) -> Tooltip:
        """Hide the tooltip when the pointer leaves a node."""
        self.tooltip = HIDDEN_TOOLTIP
        return self.tooltip
