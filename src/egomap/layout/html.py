"""Interactive HTML map rendered with pyvis."""

import json
from pathlib import Path

from .graph import CENTER_NODE, build_map_graph, categories_in_graph
from .radial import RadialLayout
from .render import CENTER_LABEL, CENTER_RADIUS, LEGEND_INSET_X, LEGEND_INSET_Y
from .surface import (
    BACKGROUND,
    CENTER_COLOR,
    LINK_COLOR,
    NODE_COLOR,
    RING_COLOR,
    TEXT_COLOR,
)


def _tooltip_text(record) -> str:
    """Plain-text tooltip; vis.js inserts string titles as text, not markup."""
    lines = [
        record.name,
        f"Category: {record.category}",
        f"Importance: {record.importance}",
        f"Proximity: {record.proximity}",
        f"Strength: {record.strength}",
    ]
    if record.notes:
        lines.append(f"Notes: {record.notes}")
    return "\n".join(lines)


def _script_json(value) -> str:
    """JSON for embedding inside a <script> block."""
    return json.dumps(value).replace("</", "<\\/")


def render_html(layout: RadialLayout, output_path: Path) -> None:
    """Render the map as a standalone interactive HTML page.

    Nodes start at their layout positions with physics disabled. They can be
    dragged freely in the browser and vis.js keeps each stalk attached to its
    node; reloading the page restores the computed layout.

    Args:
        layout: Output of compute_layout.
        output_path: Path to write the HTML file.
    """
    from pyvis.network import Network

    G = build_map_graph(layout)
    cx, cy = layout.center_x, layout.center_y

    net = Network(
        height=f"{max(layout.height, 1):.0f}px",
        width=f"{max(layout.width, 1):.0f}px",
        bgcolor=BACKGROUND,
        font_color=TEXT_COLOR,
        cdn_resources="remote",
    )
    net.toggle_physics(False)

    # Network coordinates are centred on "You"
    net.add_node(
        CENTER_NODE,
        label=CENTER_LABEL,
        title=CENTER_LABEL,
        x=0,
        y=0,
        fixed=True,
        shape="dot",
        size=CENTER_RADIUS,
        color=CENTER_COLOR,
    )

    for node, data in G.nodes(data=True):
        if node == CENTER_NODE:
            continue
        record = data["record"]
        net.add_node(
            node,
            label=record.name,
            title=_tooltip_text(record),
            x=data["x"] - cx,
            y=data["y"] - cy,
            shape="dot",
            size=data["size"],
            color=NODE_COLOR,
        )

    for u, v, data in G.edges(data=True):
        # Undirected edges may come back with either endpoint first
        target = v if u == CENTER_NODE else u
        net.add_edge(CENTER_NODE, target, width=data["width"], color=LINK_COLOR)

    net.set_options("""
    {
        "physics": {"enabled": false},
        "interaction": {
            "dragNodes": true,
            "dragView": false,
            "zoomView": false,
            "hover": true,
            "tooltipDelay": 50
        },
        "edges": {
            "smooth": false,
            "selectionWidth": 0,
            "hoverWidth": 0
        },
        "nodes": {
            "borderWidth": 1,
            "font": {"size": 12, "color": "#c7ced9", "vadjust": 0}
        }
    }
    """)

    net.save_graph(str(output_path))

    _inject_overlay_script(
        output_path,
        ring_radii=list(layout.ring_radii),
        legend_x=layout.width - LEGEND_INSET_X,
        legend_y=LEGEND_INSET_Y,
        categories=categories_in_graph(G),
    )


def _inject_overlay_script(
    output_file: Path,
    ring_radii: list[float],
    legend_x: float,
    legend_y: float,
    categories: list[str],
) -> None:
    """Inject the ring painter and the legend into a saved pyvis page.

    Rings are painted in network coordinates before every frame so they stay
    centred on "You". The legend is a fixed HTML block whose text is set with
    textContent.

    Args:
        output_file: Path to the HTML file to modify.
        ring_radii: Radii of the reference rings.
        legend_x: Horizontal offset of the legend block in pixels.
        legend_y: Vertical offset of the legend block in pixels.
        categories: Category names listed in the legend.
    """
    with open(output_file, "r") as f:
        html = f.read()

    custom_script = f"""
    <script type="text/javascript">
    var ringRadii = {_script_json(ring_radii)};
    var categories = {_script_json(categories)};

    document.addEventListener('DOMContentLoaded', function() {{
        setTimeout(function() {{
            if (typeof network === 'undefined') return;

            network.on('beforeDrawing', function(ctx) {{
                ctx.save();
                ctx.strokeStyle = '{RING_COLOR}';
                ctx.setLineDash([4, 4]);
                ringRadii.forEach(function(r) {{
                    ctx.beginPath();
                    ctx.arc(0, 0, r, 0, 2 * Math.PI);
                    ctx.stroke();
                }});
                ctx.restore();
            }});
            network.redraw();

            var legend = document.createElement('div');
            legend.style.cssText = 'position:absolute;' +
                'top:{legend_y:.0f}px;left:{legend_x:.0f}px;' +
                'font-family:system-ui,sans-serif;font-size:12px;color:{TEXT_COLOR};' +
                'pointer-events:none;';
            var lines = [
                'Legend',
                'Size = Importance',
                'Width = Strength',
                'Farther from center = higher proximity'
            ];
            if (categories.length) {{
                lines.push('Categories: ' + categories.join(', '));
            }}
            lines.forEach(function(text) {{
                var row = document.createElement('div');
                row.textContent = text;
                legend.appendChild(row);
            }});
            document.body.appendChild(legend);
        }}, 300);
    }});
    </script>
    """

    # Insert before closing body tag
    html = html.replace("</body>", custom_script + "</body>")

    with open(output_file, "w") as f:
        f.write(html)
