# geometry.py
import logging
from typing import List, Optional, Sequence

from .models import BoundingBox, CandidateNode, NodeCenter

logger = logging.getLogger(__name__)


def resolve_click_point(box: BoundingBox, quads: Optional[List[Sequence[float]]] = None,
                        viewport_page_y: Optional[float] = None) -> NodeCenter:
    """Pick the screen point to click for a box.

    ``quads`` is the DOM.getContentQuads result (None when it could not be
    fetched). Only the first quad is used; its corners are ordered top-left,
    top-right, bottom-right, bottom-left. ``viewport_page_y`` is the visual
    viewport's page offset and only matters when no quads were returned.
    """
    x = box.x + box.width / 2
    y = box.y + box.height / 2
    if quads is not None:
        if quads and len(quads[0]) == 8:
            point = quads[0]
            y = point[3] + (point[5] - point[3]) / 2
    elif viewport_page_y is not None:
        y = box.y - viewport_page_y + box.height / 2
    return NodeCenter(x=x, y=y)


async def get_node_center(cdp, candidate: CandidateNode) -> NodeCenter:
    quads = None
    try:
        content_quads = await cdp.send('DOM.getContentQuads', {'backendNodeId': candidate.backend_id})
        quads = content_quads.get('quads')
    except Exception as e:
        logger.warning(f"Unable to get quads for {candidate.node_tag} ({e})")

    page_y = None
    if quads is None:
        metrics = await cdp.send('Page.getLayoutMetrics')
        viewport = (metrics or {}).get('cssVisualViewport')
        if viewport and 'pageY' in viewport:
            logger.debug("Fall back to use cssVisualViewport")
            page_y = viewport['pageY']
    return resolve_click_point(candidate.bounding_box, quads, page_y)
