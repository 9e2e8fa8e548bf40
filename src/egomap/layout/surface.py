"""Drawing surfaces the renderer paints onto."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

# Palette
BACKGROUND = "#0f141b"
RING_COLOR = "#2b3442"
CENTER_COLOR = "#ffd166"
LINK_COLOR = "#9fb6d4"
NODE_COLOR = "#6ea8fe"
TEXT_COLOR = "#c7ced9"
FONT_FAMILY = "system-ui, sans-serif"

_HTML_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#39;",
}


def escape_html(text) -> str:
    """Escape & < > " ' for safe insertion into HTML or SVG markup."""
    return "".join(_HTML_ESCAPES.get(ch, ch) for ch in str(text))


class DrawingSurface(ABC):
    """Primitive drawing operations used by the renderer.

    Links and nodes are addressed by key (the record id) so that drag
    interaction can update them after they have been drawn.
    """

    @abstractmethod
    def clear(self, width: float, height: float) -> None: ...

    @abstractmethod
    def draw_ring(self, cx: float, cy: float, r: float) -> None: ...

    @abstractmethod
    def draw_center(self, cx: float, cy: float, r: float, label: str) -> None: ...

    @abstractmethod
    def draw_link(
        self, key: str, x1: float, y1: float, x2: float, y2: float, width: float
    ) -> None: ...

    @abstractmethod
    def draw_node(self, key: str, x: float, y: float, r: float, label: str) -> None: ...

    @abstractmethod
    def draw_legend(self, x: float, y: float) -> None: ...

    @abstractmethod
    def move_node(self, key: str, x: float, y: float) -> None: ...

    @abstractmethod
    def move_link_end(self, key: str, x: float, y: float) -> None: ...

    @abstractmethod
    def raise_node(self, key: str) -> None: ...


@dataclass
class SvgElement:
    """One drawn element, kept so it can be updated before serialisation."""

    kind: str  # ring, center, link, node, legend
    key: str | None = None
    attrs: dict = field(default_factory=dict)


def _fmt(value: float) -> str:
    """Format a coordinate compactly."""
    rounded = round(value, 2) + 0.0  # folds -0.0 into 0.0
    return f"{rounded:.2f}".rstrip("0").rstrip(".")


class SvgSurface(DrawingSurface):
    """Retained-mode SVG surface.

    Elements are kept in draw order; `to_svg` serialises them back to front.
    """

    def __init__(self) -> None:
        self.width = 0.0
        self.height = 0.0
        self.elements: list[SvgElement] = []

    def clear(self, width: float, height: float) -> None:
        self.width = width
        self.height = height
        self.elements = []

    def draw_ring(self, cx: float, cy: float, r: float) -> None:
        self.elements.append(SvgElement("ring", attrs={"cx": cx, "cy": cy, "r": r}))

    def draw_center(self, cx: float, cy: float, r: float, label: str) -> None:
        self.elements.append(
            SvgElement("center", attrs={"cx": cx, "cy": cy, "r": r, "label": label})
        )

    def draw_link(
        self, key: str, x1: float, y1: float, x2: float, y2: float, width: float
    ) -> None:
        self.elements.append(
            SvgElement(
                "link",
                key=key,
                attrs={"x1": x1, "y1": y1, "x2": x2, "y2": y2, "width": width},
            )
        )

    def draw_node(self, key: str, x: float, y: float, r: float, label: str) -> None:
        self.elements.append(
            SvgElement("node", key=key, attrs={"x": x, "y": y, "r": r, "label": label})
        )

    def draw_legend(self, x: float, y: float) -> None:
        self.elements.append(SvgElement("legend", attrs={"x": x, "y": y}))

    def _find(self, kind: str, key: str) -> SvgElement:
        for element in self.elements:
            if element.kind == kind and element.key == key:
                return element
        raise KeyError(f"No {kind} drawn for {key!r}")

    def node(self, key: str) -> SvgElement:
        return self._find("node", key)

    def link(self, key: str) -> SvgElement:
        return self._find("link", key)

    def node_order(self) -> list[str]:
        """Keys of drawn nodes, bottom to top."""
        return [e.key for e in self.elements if e.kind == "node"]

    def move_node(self, key: str, x: float, y: float) -> None:
        attrs = self.node(key).attrs
        attrs["x"] = x
        attrs["y"] = y

    def move_link_end(self, key: str, x: float, y: float) -> None:
        attrs = self.link(key).attrs
        attrs["x2"] = x
        attrs["y2"] = y

    def raise_node(self, key: str) -> None:
        element = self.node(key)
        last_node = max(i for i, e in enumerate(self.elements) if e.kind == "node")
        self.elements.remove(element)
        self.elements.insert(last_node, element)

    def to_svg(self) -> str:
        """Serialise the surface to a standalone SVG document."""
        w, h = _fmt(self.width), _fmt(self.height)
        lines = [
            f'<svg xmlns="http://www.w3.org/2000/svg" width="{w}" height="{h}" '
            f'viewBox="0 0 {w} {h}" font-family="{FONT_FAMILY}">',
            f'  <rect width="{w}" height="{h}" fill="{BACKGROUND}"/>',
        ]
        for element in self.elements:
            lines.extend("  " + line for line in _SERIALIZERS[element.kind](element))
        lines.append("</svg>")
        return "\n".join(lines) + "\n"


def _ring_svg(element: SvgElement) -> list[str]:
    a = element.attrs
    return [
        f'<circle class="ring" cx="{_fmt(a["cx"])}" cy="{_fmt(a["cy"])}" r="{_fmt(a["r"])}" '
        f'fill="none" stroke="{RING_COLOR}" stroke-dasharray="4 4"/>'
    ]


def _center_svg(element: SvgElement) -> list[str]:
    a = element.attrs
    return [
        f'<circle class="center" cx="{_fmt(a["cx"])}" cy="{_fmt(a["cy"])}" r="{_fmt(a["r"])}" '
        f'fill="{CENTER_COLOR}"/>',
        f'<text x="{_fmt(a["cx"])}" y="{_fmt(a["cy"] - 22)}" text-anchor="middle" '
        f'fill="{TEXT_COLOR}" font-size="12">{escape_html(a["label"])}</text>',
    ]


def _link_svg(element: SvgElement) -> list[str]:
    a = element.attrs
    return [
        f'<line class="link" data-id="{escape_html(element.key)}" '
        f'x1="{_fmt(a["x1"])}" y1="{_fmt(a["y1"])}" x2="{_fmt(a["x2"])}" y2="{_fmt(a["y2"])}" '
        f'stroke="{LINK_COLOR}" stroke-opacity="0.7" stroke-linecap="round" '
        f'stroke-width="{_fmt(a["width"])}"/>'
    ]


def _node_svg(element: SvgElement) -> list[str]:
    a = element.attrs
    return [
        f'<g class="node" data-id="{escape_html(element.key)}" '
        f'transform="translate({_fmt(a["x"])},{_fmt(a["y"])})">',
        f'  <circle r="{_fmt(a["r"])}" fill="{NODE_COLOR}" fill-opacity="0.85" '
        f'stroke="{BACKGROUND}" stroke-width="1.5"/>',
        f'  <text text-anchor="middle" dy="0" fill="{TEXT_COLOR}" font-size="12">'
        f'{escape_html(a["label"])}</text>',
        "</g>",
    ]


def _legend_svg(element: SvgElement) -> list[str]:
    a = element.attrs
    text = f'fill="{TEXT_COLOR}" font-size="12"'
    return [
        f'<g class="legend" transform="translate({_fmt(a["x"])},{_fmt(a["y"])})">',
        f"  <text {text}>Legend</text>",
        f'  <circle cx="16" cy="26" r="8" fill="{NODE_COLOR}"/>',
        f'  <text x="36" y="30" {text}>Size = Importance</text>',
        f'  <line x1="8" x2="32" y1="48" y2="48" stroke-width="6" stroke="{LINK_COLOR}"/>',
        f'  <text x="36" y="52" {text}>Width = Strength</text>',
        f'  <text x="0" y="74" {text}>Farther from center = higher proximity</text>',
        "</g>",
    ]


_SERIALIZERS = {
    "ring": _ring_svg,
    "center": _center_svg,
    "link": _link_svg,
    "node": _node_svg,
    "legend": _legend_svg,
}
