"""Generate map outputs from a record store."""

from collections.abc import Mapping
from pathlib import Path

from .export import export_png
from .layout import Renderer, SvgSurface, compute_layout, render_html
from .records import RecordStore

DEFAULT_WIDTH = 960
DEFAULT_HEIGHT = 720


def draw_map(
    store: RecordStore,
    width: float = DEFAULT_WIDTH,
    height: float = DEFAULT_HEIGHT,
    moves: Mapping[str, tuple[float, float]] | None = None,
) -> Renderer:
    """Lay out and draw the store onto a fresh SVG surface.

    Args:
        store: Records to draw.
        width: Viewport width in pixels.
        height: Viewport height in pixels.
        moves: Optional record id -> (x, y) drops, each applied as a full drag
            gesture after the layout pass.

    Returns:
        The renderer, holding the surface and any drag overrides.
    """
    layout = compute_layout(store.list(), width, height)
    renderer = Renderer(SvgSurface())
    renderer.render(layout)

    if moves and not layout.is_empty_viewport:
        for record_id, (x, y) in moves.items():
            renderer.drag_to(record_id, x, y)

    return renderer


def generate_svg(
    store: RecordStore,
    output_file: Path,
    width: float = DEFAULT_WIDTH,
    height: float = DEFAULT_HEIGHT,
    moves: Mapping[str, tuple[float, float]] | None = None,
) -> str:
    """Write the map as a standalone SVG file and return its text."""
    renderer = draw_map(store, width, height, moves)
    svg_text = renderer.surface.to_svg()
    with open(output_file, "w", encoding="utf-8") as f:
        f.write(svg_text)
    return svg_text


def generate_png(
    store: RecordStore,
    output_file: Path,
    width: float = DEFAULT_WIDTH,
    height: float = DEFAULT_HEIGHT,
    moves: Mapping[str, tuple[float, float]] | None = None,
) -> Path:
    """Write a 2x PNG snapshot of the map."""
    renderer = draw_map(store, width, height, moves)
    return export_png(renderer.surface.to_svg(), width, height, output_file)


def generate_html(
    store: RecordStore,
    output_file: Path,
    width: float = DEFAULT_WIDTH,
    height: float = DEFAULT_HEIGHT,
) -> None:
    """Write the interactive, draggable HTML map."""
    layout = compute_layout(store.list(), width, height)
    render_html(layout, output_file)


def format_table(store: RecordStore) -> str:
    """Plain-text table of the records, one row per stakeholder."""
    headers = ("ID", "Name", "Category", "Imp", "Prox", "Str")
    rows = [
        (r.id[:8], r.name, r.category, str(r.importance), str(r.proximity), str(r.strength))
        for r in store
    ]
    widths = [max([len(h)] + [len(row[i]) for row in rows]) for i, h in enumerate(headers)]
    lines = ["  ".join(h.ljust(w) for h, w in zip(headers, widths)).rstrip()]
    lines.append("  ".join("-" * w for w in widths))
    for row in rows:
        lines.append("  ".join(cell.ljust(w) for cell, w in zip(row, widths)).rstrip())
    return "\n".join(lines)
