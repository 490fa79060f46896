"""
Shared fakes for Playwright pages and CDP sessions
"""
import os
import sys
from unittest.mock import AsyncMock, MagicMock, Mock

import pytest

# プロジェクトルートをPythonパスに追加
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


SEED_URL = "https://example.com/"

SNAPSHOT = {
    'domNodes': [
        {'nodeName': 'DIV', 'backendNodeId': 1, 'eventListeners': [{'type': 'click'}]},
        {'nodeName': 'A', 'backendNodeId': 2},
        {'nodeName': 'BUTTON', 'backendNodeId': 3, 'eventListeners': [{'type': 'click'}]},
        {'nodeName': '#text', 'backendNodeId': 4},
    ],
    'layoutTreeNodes': [
        {'domNodeIndex': 0, 'boundingBox': {'x': -50, 'y': 10, 'width': 10, 'height': 10}},
        {'domNodeIndex': 1, 'boundingBox': {'x': 10, 'y': 10, 'width': 80, 'height': 20}},
        {'domNodeIndex': 2, 'boundingBox': {'x': 100, 'y': 200, 'width': 300, 'height': 100}},
    ],
}


def make_cdp(responses=None):
    """CDP session whose send() answers from ``responses`` keyed by method.

    A response may be an exception instance, which is raised instead.
    """
    responses = responses or {}
    cdp = MagicMock()
    cdp.on = Mock()
    cdp.detach = AsyncMock()

    async def send(method, params=None):
        result = responses.get(method, {})
        if isinstance(result, Exception):
            raise result
        return result

    cdp.send = AsyncMock(side_effect=send)
    return cdp


def make_page(url=SEED_URL, cdp=None):
    page = MagicMock()
    page.url = url
    for name in ('goto', 'go_back', 'bring_to_front', 'evaluate', 'screenshot'):
        setattr(page, name, AsyncMock())
    page.mouse.click = AsyncMock()
    page.context.new_cdp_session = AsyncMock(return_value=cdp or make_cdp())
    page.context.pages = [page]
    return page


@pytest.fixture
def cdp():
    return make_cdp({
        'DOMSnapshot.getSnapshot': SNAPSHOT,
        'DOM.getContentQuads': {'quads': [[100, 200, 400, 200, 400, 300, 100, 300]]},
        'Target.getTargetInfo': {'targetInfo': {'targetId': 'T1'}},
    })


@pytest.fixture
def page(cdp):
    return make_page(cdp=cdp)
