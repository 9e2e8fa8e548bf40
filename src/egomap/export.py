"""Rasterise the SVG map to PNG."""

import os
import tempfile
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

DEFAULT_PNG_NAME = "stakeholder-map.png"

# Pixel density of the raster relative to the on-screen drawing
DEFAULT_SCALE = 2


class ExportError(RuntimeError):
    """The SVG could not be decoded or rasterised."""


def _rasterize(svg_path: str, width: int, height: int) -> bytes:
    """Decode an SVG file and draw it onto a bitmap of the given size."""
    import cairosvg

    return cairosvg.svg2png(url=svg_path, output_width=width, output_height=height)


def export_png(
    svg_text: str,
    width: float,
    height: float,
    output_path: Path,
    scale: int = DEFAULT_SCALE,
) -> Path:
    """Write a PNG snapshot of an SVG drawing at `scale` times its size.

    The SVG is staged in a temporary file, decoded and rasterised on a worker
    thread, and the PNG is written only once decoding has completed. The
    temporary file is removed whether or not the export succeeds.

    Args:
        svg_text: Serialised SVG document.
        width: Drawing width in pixels.
        height: Drawing height in pixels.
        output_path: Destination PNG file.
        scale: Pixel density multiplier.

    Returns:
        The path written.

    Raises:
        ExportError: If the drawing has no area or the SVG fails to decode.
    """
    out_w = int(round(width * scale))
    out_h = int(round(height * scale))
    if out_w <= 0 or out_h <= 0:
        raise ExportError(f"Nothing to export: drawing is {width}x{height}")

    fd, svg_path = tempfile.mkstemp(prefix="egomap_", suffix=".svg")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(svg_text)

        with ThreadPoolExecutor(max_workers=1) as executor:
            future = executor.submit(_rasterize, svg_path, out_w, out_h)
            try:
                png_bytes = future.result()
            except Exception as err:
                raise ExportError(f"Couldn't decode the drawing: {err}") from err

        with open(output_path, "wb") as f:
            f.write(png_bytes)
    finally:
        os.unlink(svg_path)

    return Path(output_path)
