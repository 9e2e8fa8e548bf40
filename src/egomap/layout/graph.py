"""Star graph view of a layout for graph-based renderers."""

import networkx as nx

from .radial import RadialLayout, first_per_id

# Synthetic hub node name
CENTER_NODE = "__you__"


def build_map_graph(layout: RadialLayout) -> nx.Graph:
    """Build the hub-and-spoke graph of a layout.

    Contains:
    - the centre node (CENTER_NODE) at the viewport centre
    - one node per positioned record, keyed by record id (first record wins)
    - one edge (stalk) from the centre to every record

    Args:
        layout: Output of compute_layout.

    Returns:
        NetworkX Graph with x/y/size/angle node attributes and width on edges.
    """
    G = nx.Graph()
    G.add_node(CENTER_NODE, x=layout.center_x, y=layout.center_y, size=0, angle=0.0)

    for pos in first_per_id(layout.positions):
        G.add_node(
            pos.record_id,
            x=pos.x,
            y=pos.y,
            size=pos.size,
            angle=pos.angle,
            record=pos.record,
        )
        G.add_edge(CENTER_NODE, pos.record_id, width=pos.link_width)

    return G


def categories_in_graph(G: nx.Graph) -> list[str]:
    """Distinct categories of the record nodes, in insertion order."""
    seen: dict[str, None] = {}
    for node, data in G.nodes(data=True):
        if node == CENTER_NODE:
            continue
        seen.setdefault(data["record"].category, None)
    return list(seen)
