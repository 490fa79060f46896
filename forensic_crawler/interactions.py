# interactions.py
import logging
import random
from typing import Optional, Set
from urllib.parse import urlparse

from .constants import CLICK_DELAY, CLICK_EFFECT_SCRIPT, MOUSE_DOWN_DELAY, NAVIGATION_SCREENSHOT_DELAY, SETTLE_DELAY
from .forensics import take_screenshot
from .geometry import get_node_center
from .models import CandidateNode, Candidates, NodeCenter, RunContext, SeedIdentity, origin_of
from .snapshots import extract_candidates, get_dom_snapshot
from .utils import sleep

logger = logging.getLogger(__name__)


def has_navigated(page_url: str, current_url: str) -> bool:
    return page_url != current_url


def is_same_origin(url: str, seed: SeedIdentity) -> bool:
    try:
        return origin_of(url) == seed.origin
    except ValueError:
        return False


def is_same_page(url: str, seed: SeedIdentity) -> bool:
    """Same origin and path; query and fragment are ignored."""
    try:
        return is_same_origin(url, seed) and urlparse(url).path == seed.path
    except ValueError:
        return False


def should_screenshot_navigation(url: str, seed: SeedIdentity) -> bool:
    # Only cross-origin jumps are evidence; a same-page URL is also same-origin
    if is_same_origin(url, seed):
        return False
    return urlparse(url).scheme in ('http', 'https')


async def add_click_effect(page, debug: bool):
    if debug:
        await page.evaluate(CLICK_EFFECT_SCRIPT)


class ClickDriver:
    """Pops ranked candidates and clicks them, undoing any navigation a click causes."""

    def __init__(self, page, cdp, run: RunContext, seed: SeedIdentity, rng: Optional[random.Random] = None):
        self.page = page
        self.cdp = cdp
        self.run = run
        self.seed = seed
        self.rng = rng or random.Random()
        self.clicked: Set[str] = set()
        self.candidates = Candidates()

    async def refresh(self) -> Candidates:
        self.candidates = extract_candidates(await get_dom_snapshot(self.cdp), self.rng)
        return self.candidates

    async def click(self, node: CandidateNode) -> NodeCenter:
        self.clicked.add(node.bounding_box.key)
        center = await get_node_center(self.cdp, node)
        logger.debug(f"Clicking node {node.node_tag} at ({center.x}, {center.y})")
        await self.page.mouse.click(center.x, center.y, delay=MOUSE_DOWN_DELAY)
        return center

    async def recover_from_navigation(self) -> bool:
        url = self.page.url
        logger.info(f"Navigated away to {url}")
        try:
            if should_screenshot_navigation(url, self.seed):
                await sleep(NAVIGATION_SCREENSHOT_DELAY)
                await take_screenshot(self.page, self.run.log_dir, 'navigation')

            await self.page.go_back()
            await sleep(SETTLE_DELAY)
            if has_navigated(self.page.url, self.run.current_url):
                logger.error(f"Going back landed on {self.page.url} instead of {self.run.current_url}")
                return False
            await add_click_effect(self.page, self.run.debug)
            await self.refresh()
        except Exception as e:
            logger.error(f"Failed to go back to page: {self.run.current_url}. {e}", exc_info=self.run.debug)
            return False
        return True

    def _stack(self, kind: str):
        # Highest ranked candidate on top
        return list(reversed(self.candidates.get(kind)))

    async def drive(self, kind: str, budget: int) -> int:
        """Click up to ``budget`` candidates from the ``kind`` list.

        Returns the number of successful clicks. Stops early when the list
        runs out or when the page cannot be brought back after navigating.
        """
        stack = self._stack(kind)
        node = stack.pop() if stack else None
        clicks = 0
        while node is not None and clicks < budget:
            await self.page.bring_to_front()
            if has_navigated(self.page.url, self.run.current_url):
                if not await self.recover_from_navigation():
                    break
                stack = self._stack(kind)
            elif node.bounding_box.key not in self.clicked:
                try:
                    await self.click(node)
                    clicks += 1
                except Exception as e:
                    logger.error(f"Failed to click. {e}", exc_info=self.run.debug)
                await sleep(CLICK_DELAY)
            node = stack.pop() if stack else None
        logger.info(f"Clicked {clicks} {kind}")
        return clicks
