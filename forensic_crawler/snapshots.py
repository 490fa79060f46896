# snapshots.py
import logging
import random
from typing import Any, Dict, List, Optional

from .constants import ANCHOR_TAG, IGNORED_TAGS
from .models import BoundingBox, CandidateNode, Candidates
from .utils import is_mouse_event

logger = logging.getLogger(__name__)


async def get_dom_snapshot(cdp) -> Dict[str, Any]:
    logger.info("Get DOMSnapshot")
    return await cdp.send('DOMSnapshot.getSnapshot', {
        'computedStyleWhitelist': [],
        'includeEventListeners': True,
    })


def _join_layout(snapshot: Dict[str, Any]) -> List[CandidateNode]:
    layout_map: Dict[int, BoundingBox] = {}
    for layout_node in snapshot.get('layoutTreeNodes', []):
        if not layout_node.get('boundingBox'):
            continue
        layout_map[layout_node['domNodeIndex']] = BoundingBox.from_dict(layout_node['boundingBox'])

    nodes = []
    for idx, dom_node in enumerate(snapshot.get('domNodes', [])):
        box = layout_map.get(idx)
        if box is None:
            continue
        listeners = dom_node.get('eventListeners')
        nodes.append(CandidateNode(
            node_tag=dom_node.get('nodeName', ''),
            listener_types=frozenset(l.get('type', '') for l in listeners) if listeners is not None else None,
            bounding_box=box,
            backend_id=dom_node.get('backendNodeId'),
        ))
    return nodes


def is_visible(node: CandidateNode) -> bool:
    return not (node.bounding_box.x < 0 or node.bounding_box.y < 0)


def is_clickable(node: CandidateNode) -> bool:
    if not node.listener_types or node.node_tag in IGNORED_TAGS:
        return False
    return any(is_mouse_event(t) for t in node.listener_types)


def extract_candidates(snapshot: Dict[str, Any], rng: Optional[random.Random] = None) -> Candidates:
    """Split a DOMSnapshot.getSnapshot result into anchors and clickables.

    Anchors come back shuffled with ``rng``; clickables are ordered by box
    area, largest first.
    """
    logger.info("Extract clickable nodes")
    rng = rng or random.Random()
    valid_nodes = [node for node in _join_layout(snapshot) if is_visible(node)]

    anchors = [node for node in valid_nodes if node.node_tag == ANCHOR_TAG]
    rng.shuffle(anchors)

    clickables = sorted(
        (node for node in valid_nodes if is_clickable(node)),
        key=lambda node: node.bounding_box.area,
        reverse=True,
    )
    logger.debug(f"Found {len(anchors)} anchors and {len(clickables)} clickables")
    return Candidates(anchors=anchors, clickables=clickables)
