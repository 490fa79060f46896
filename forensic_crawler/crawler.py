# crawler.py
import logging
import random
from pathlib import Path
from typing import Optional, Sequence

from playwright.async_api import Page

from .constants import CLICK_BUDGET, SCROLL_DELAY, SCROLL_DISTANCE, SCROLL_TIMES, SETTLE_DELAY
from .forensics import take_screenshot
from .interactions import ClickDriver, add_click_effect
from .models import RunContext, SeedIdentity
from .utils import sleep

logger = logging.getLogger(__name__)


class Crawler:
    """Visits one seed URL: navigate, settle, click around, capture."""

    def __init__(self, page: Page, log_dir: Path, debug: bool = False, click_budget: int = CLICK_BUDGET,
                 interact: Sequence[str] = ('clickables', 'anchors'),
                 scroll_times: int = SCROLL_TIMES, scroll_distance: int = SCROLL_DISTANCE,
                 rng: Optional[random.Random] = None):
        self.page = page
        self.run = RunContext(log_dir=Path(log_dir), debug=debug, click_budget=click_budget or CLICK_BUDGET)
        self.interact_lists = list(interact)
        self.scroll_times = scroll_times
        self.scroll_distance = scroll_distance
        self.rng = rng or random.Random()
        self.seed: Optional[SeedIdentity] = None
        self.cdp = None
        self.driver: Optional[ClickDriver] = None

    def set_seed(self, url: str):
        if self.seed is None:
            self.seed = SeedIdentity.from_url(url)

    async def scroll_by(self, y: int, x: int = 0):
        await self.page.evaluate(f"window.scrollBy({x}, {y})")
        await sleep(SCROLL_DELAY)

    async def scroll_to(self, y: int, x: int = 0):
        await self.page.evaluate(f"window.scrollTo({x}, {y})")

    async def scroll(self):
        for _ in range(self.scroll_times):
            await self.scroll_by(self.scroll_distance)
            await sleep(SCROLL_DELAY)
        await self.scroll_to(0)

    async def visit(self, url: str) -> bool:
        self.cdp = await self.page.context.new_cdp_session(self.page)
        logger.info(f"Visit {url}")
        try:
            await self.page.goto(url)
            logger.info(f"Loaded {url}")
        except Exception as e:
            logger.error(f"Failed to visit page: {url}. {e}", exc_info=self.run.debug)
            return False

        self.run.current_url = self.page.url
        self.set_seed(self.page.url)
        try:
            await self.scroll()
            await sleep(SETTLE_DELAY)
            await self.interact()
        except Exception as e:
            logger.error(f"Failed to interact with {url}. {e}", exc_info=self.run.debug)
            return False
        logger.info(f"Visiting {url} is done")
        return True

    async def interact(self):
        logger.info("Start interacting with the page")
        await add_click_effect(self.page, self.run.debug)
        self.driver = ClickDriver(self.page, self.cdp, self.run, self.seed, self.rng)
        await self.driver.refresh()
        for kind in self.interact_lists:
            await self.driver.drive(kind, self.run.click_budget)
        await self.take_screenshots()

    async def take_screenshots(self):
        # context.pages holds top-level tabs only
        for p in self.page.context.pages:
            if p is self.page:
                continue
            if p.url.startswith('chrome') or p.url.startswith('about:blank'):
                continue
            await take_screenshot(p, self.run.log_dir, 'openWindow')
