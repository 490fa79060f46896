"""
Click point resolution tests
"""
import pytest

from conftest import make_cdp
from forensic_crawler.geometry import get_node_center, resolve_click_point
from forensic_crawler.models import BoundingBox, CandidateNode, NodeCenter

BOX = BoundingBox(10, 20, 100, 50)


class TestResolveClickPoint:

    def test_box_center_without_quads(self):
        assert resolve_click_point(BOX) == NodeCenter(60, 45)

    def test_first_quad_sets_vertical_midpoint(self):
        center = resolve_click_point(BOX, [[0, 0, 100, 0, 100, 60, 0, 60], [0, 0, 1, 1, 2, 2, 3, 3]])
        assert center.y == 30
        assert center.x == 60

    def test_empty_quads_use_box_center(self):
        """An empty quad list is not the same as no quads"""
        assert resolve_click_point(BOX, [], viewport_page_y=500) == NodeCenter(60, 45)

    def test_malformed_quad_is_ignored(self):
        assert resolve_click_point(BOX, [[1, 2, 3]]) == NodeCenter(60, 45)

    def test_viewport_offset_when_quads_missing(self):
        assert resolve_click_point(BOX, None, viewport_page_y=15) == NodeCenter(60, 30)


class TestGetNodeCenter:

    node = CandidateNode('BUTTON', frozenset(['click']), BOX, backend_id=7)

    @pytest.mark.asyncio
    async def test_uses_content_quads(self):
        cdp = make_cdp({'DOM.getContentQuads': {'quads': [[0, 0, 100, 0, 100, 60, 0, 60]]}})
        center = await get_node_center(cdp, self.node)
        assert center == NodeCenter(60, 30)
        cdp.send.assert_awaited_once_with('DOM.getContentQuads', {'backendNodeId': 7})

    @pytest.mark.asyncio
    async def test_quad_failure_falls_back_to_layout_metrics(self):
        cdp = make_cdp({
            'DOM.getContentQuads': RuntimeError("No node with given id found"),
            'Page.getLayoutMetrics': {'cssVisualViewport': {'pageX': 0, 'pageY': 20}},
        })
        center = await get_node_center(cdp, self.node)
        assert center == NodeCenter(60, 25)

    @pytest.mark.asyncio
    async def test_quad_failure_without_viewport_uses_box_center(self):
        cdp = make_cdp({'DOM.getContentQuads': RuntimeError("detached")})
        center = await get_node_center(cdp, self.node)
        assert center == NodeCenter(60, 45)
