"""Tests for the SVG surface and the renderer's drag interaction."""

import pytest

from egomap.layout.radial import compute_layout
from egomap.layout.render import DragState, DragStateError, Renderer, tooltip_html
from egomap.layout.surface import SvgSurface, escape_html

from conftest import make_record


@pytest.fixture
def rendered(mixed_categories):
    """Renderer that has drawn mixed_categories on a 800x600 viewport."""
    layout = compute_layout(mixed_categories, 800, 600)
    renderer = Renderer(SvgSurface())
    renderer.render(layout)
    return renderer


class TestEscapeHtml:
    """Tests for escape_html function."""

    def test_all_special_characters(self):
        assert escape_html("<a href=\"x\">Tom & Jerry's</a>") == (
            "&lt;a href=&quot;x&quot;&gt;Tom &amp; Jerry&#39;s&lt;/a&gt;"
        )

    def test_non_string(self):
        assert escape_html(42) == "42"


class TestRender:
    """Tests for Renderer.render drawing order."""

    def test_draw_order(self, rendered):
        """Rings, centre, links, nodes, legend from back to front."""
        kinds = [e.kind for e in rendered.surface.elements]
        assert kinds == ["ring"] * 5 + ["center"] + ["link"] * 6 + ["node"] * 6 + ["legend"]

    def test_links_start_at_center(self, rendered):
        layout = rendered.layout
        for pos in layout.positions:
            attrs = rendered.surface.link(pos.record_id).attrs
            assert (attrs["x1"], attrs["y1"]) == (layout.center_x, layout.center_y)
            assert (attrs["x2"], attrs["y2"]) == (pos.x, pos.y)
            assert attrs["width"] == pos.link_width

    def test_legend_top_right(self, rendered):
        legend = rendered.surface.elements[-1]
        assert legend.attrs == {"x": 590, "y": 20}

    def test_empty_store_still_draws_rings(self):
        renderer = Renderer(SvgSurface())
        assert renderer.render(compute_layout([], 400, 400))
        kinds = [e.kind for e in renderer.surface.elements]
        assert kinds == ["ring"] * 5 + ["center", "legend"]

    def test_zero_viewport_draws_nothing(self, mixed_categories):
        renderer = Renderer(SvgSurface())
        assert not renderer.render(compute_layout(mixed_categories, 0, 0))
        assert renderer.surface.elements == []

    def test_svg_escapes_labels(self):
        record = make_record("x", "<script>alert(1)</script>")
        renderer = Renderer(SvgSurface())
        renderer.render(compute_layout([record], 400, 400))

        svg = renderer.surface.to_svg()
        assert "<script>" not in svg
        assert "&lt;script&gt;" in svg
        assert svg.startswith("<svg")


class TestDrag:
    """Tests for the per-node drag state machine."""

    def test_move_updates_only_own_link(self, rendered):
        """Dragging A moves link A's far end; link B stays put."""
        b_before = dict(rendered.surface.link("b").attrs)

        rendered.drag_start("a")
        rendered.drag_move("a", 10, 20)

        a_link = rendered.surface.link("a").attrs
        assert (a_link["x2"], a_link["y2"]) == (10, 20)
        assert (a_link["x1"], a_link["y1"]) == (400, 300)
        assert rendered.surface.link("b").attrs == b_before
        assert rendered.link_endpoints("a") == ((400, 300), (10, 20))

    def test_node_follows_pointer(self, rendered):
        rendered.drag_start("a")
        rendered.drag_move("a", 10, 20)
        rendered.drag_move("a", 15, 25)

        node = rendered.surface.node("a").attrs
        assert (node["x"], node["y"]) == (15, 25)
        assert rendered.node_position("a") == (15, 25)

    def test_start_raises_node(self, rendered):
        rendered.drag_start("a")
        assert rendered.surface.node_order()[-1] == "a"
        assert rendered.surface.elements[-1].kind == "legend"

    def test_no_snap_back_on_end(self, rendered):
        rendered.drag_to("a", 50, 60)
        assert rendered.drag_states["a"] is DragState.IDLE
        assert rendered.node_position("a") == (50, 60)

    def test_fresh_layout_clears_overrides(self, rendered):
        """After a new layout pass the node is back at its computed position."""
        rendered.drag_to("a", 50, 60)

        rendered.render(rendered.layout)

        pos = rendered.layout.position("a")
        assert rendered.overrides == {}
        assert rendered.node_position("a") == (pos.x, pos.y)
        assert (rendered.surface.node("a").attrs["x"], rendered.surface.node("a").attrs["y"]) == (
            pos.x,
            pos.y,
        )

    def test_independent_concurrent_drags(self, rendered):
        rendered.drag_start("a")
        rendered.drag_start("b")
        rendered.drag_move("a", 1, 2)
        rendered.drag_move("b", 3, 4)
        rendered.drag_end("a")

        assert rendered.drag_states == {
            **{key: DragState.IDLE for key in "afbcgd"},
            "b": DragState.DRAGGING,
        }
        assert rendered.node_position("a") == (1, 2)
        assert rendered.node_position("b") == (3, 4)

    def test_move_while_idle_rejected(self, rendered):
        with pytest.raises(DragStateError):
            rendered.drag_move("a", 1, 2)
        assert rendered.overrides == {}

    def test_double_start_rejected(self, rendered):
        rendered.drag_start("a")
        with pytest.raises(DragStateError):
            rendered.drag_start("a")

    def test_end_while_idle_rejected(self, rendered):
        with pytest.raises(DragStateError):
            rendered.drag_end("a")

    def test_unknown_node(self, rendered):
        with pytest.raises(KeyError):
            rendered.drag_start("missing")

    def test_shared_id_drags_first_record(self):
        """Records sharing an id are drawn once, and drags land on that one node."""
        records = [make_record("1", "Ann"), make_record("1", "Bo"), make_record("2", "Cy")]
        layout = compute_layout(records, 800, 600)
        renderer = Renderer(SvgSurface())
        renderer.render(layout)

        assert renderer.surface.node_order() == ["1", "2"]
        assert renderer.surface.node("1").attrs["label"] == "Ann"

        renderer.drag_to("1", 10, 20)

        node = renderer.surface.node("1").attrs
        assert (node["x"], node["y"]) == (10, 20)
        assert renderer.surface.node_order() == ["2", "1"]
        assert renderer.hover("1", 0, 0).html == tooltip_html(records[0])


class TestTooltip:
    """Tests for hover tooltips."""

    def test_hover_shows_details(self, rendered):
        tooltip = rendered.hover("a", 100, 200)

        assert tooltip.visible
        assert (tooltip.x, tooltip.y) == (112, 212)
        assert "<strong>Ada</strong>" in tooltip.html
        assert "Category: Work" in tooltip.html
        assert "Notes:" not in tooltip.html

    def test_leave_hides(self, rendered):
        rendered.hover("a", 0, 0)
        assert not rendered.leave().visible
        assert not rendered.tooltip.visible

    def test_markup_escaped(self):
        record = make_record("x", "<img src=x>", category="R&D", notes="\"quoted\" 'note'")
        html = tooltip_html(record)

        assert "<img" not in html
        assert "&lt;img src=x&gt;" in html
        assert "Category: R&amp;D" in html
        assert "Notes: &quot;quoted&quot; &#39;note&#39;" in html
