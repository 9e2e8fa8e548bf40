"""Radial layout and rendering of a stakeholder map.

Stakeholders are grouped into category wedges around a central "You" node,
at a distance from the centre given by their proximity.
"""

from .graph import CENTER_NODE, build_map_graph
from .html import render_html
from .radial import LayoutPosition, RadialLayout, compute_layout, group_by_category
from .render import DragState, DragStateError, Renderer, Tooltip, tooltip_html
from .scales import LinearScale, point_offsets
from .surface import DrawingSurface, SvgSurface, escape_html

__all__ = [
    "LinearScale",
    "point_offsets",
    "LayoutPosition",
    "RadialLayout",
    "compute_layout",
    "group_by_category",
    "CENTER_NODE",
    "build_map_graph",
    "DrawingSurface",
    "SvgSurface",
    "escape_html",
    "DragState",
    "DragStateError",
    "Renderer",
    "Tooltip",
    "tooltip_html",
    "render_html",
]
