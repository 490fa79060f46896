# manager.py
import logging
import random
from pathlib import Path
from typing import Optional

from playwright.async_api import async_playwright, Browser, BrowserContext

from .config import CrawlConfig, device_profile
from .constants import CHROME_ARGS
from .crawler import Crawler
from .forensics import ForensicSink

logger = logging.getLogger(__name__)


class Manager:
    """Owns the browser for one run and wires the forensic sink into every new page."""

    def __init__(self, config: CrawlConfig):
        self.config = config
        self.browser: Optional[Browser] = None
        self.context: Optional[BrowserContext] = None
        self.playwright = None
        self.sink = ForensicSink(config.log_dir, config.archive_dir, config.instrumentation_domain)
        self.sink.open()

    async def __aenter__(self):
        await self.launch()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def launch(self):
        self.playwright = await async_playwright().start()
        self.browser = await self.playwright.chromium.launch(
            headless=not self.config.interactive,
            executable_path=self.config.chrome_path,
            args=CHROME_ARGS + [f"--log-file={self.sink.forensic_log}"],
        )
        logger.info(f"Launched {self.browser.browser_type.name} {self.browser.version}")

    async def close(self):
        self.sink.close()
        if self.context:
            await self.context.close()
            self.context = None
        if self.browser:
            await self.browser.close()
            self.browser = None
        if self.playwright:
            await self.playwright.stop()
            self.playwright = None

    async def crawl(self, url: str, device: str, click_budget: int) -> bool:
        if not self.browser:
            logger.error("Browser is not running")
            return False
        try:
            if self.context:
                await self.context.close()
            self.context = await self.browser.new_context(**device_profile(device))
            self.context.on('page', self.sink.on_page)
            page = await self.context.new_page()
            # Hooks must be in place before the first navigation
            await self.sink.attach(page)

            crawler = Crawler(
                page,
                self.config.log_dir,
                debug=self.config.debug,
                click_budget=click_budget,
                interact=self.config.interact,
                scroll_times=self.config.scroll_times,
                scroll_distance=self.config.scroll_distance,
                rng=random.Random(self.config.random_seed),
            )
            return await crawler.visit(url)
        except Exception as e:
            logger.error(f"Crawler error: {e}", exc_info=self.config.debug)
            return False

    def archive(self, url: str, category: Optional[str] = None) -> Optional[Path]:
        return self.sink.archive_url(url, category or self.config.category)
