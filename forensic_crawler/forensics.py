# forensics.py
import logging
import os
import shutil
import tarfile
import time
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from .constants import CDP_LOG_NAME, FORENSIC_LOG_NAME, HOOKS, INSTRUMENTATION_DOMAIN
from .utils import url_to_slug

logger = logging.getLogger(__name__)


def reset_log_dir(log_dir: Path):
    log_dir.mkdir(parents=True, exist_ok=True)
    for entry in log_dir.iterdir():
        if entry.is_dir() and not entry.is_symlink():
            shutil.rmtree(entry)
        else:
            entry.unlink()


async def get_target_id(page) -> str:
    cdp = await page.context.new_cdp_session(page)
    try:
        info = await cdp.send('Target.getTargetInfo')
        return info['targetInfo']['targetId']
    finally:
        await cdp.detach()


async def take_screenshot(page, log_dir: Path, source: str) -> Optional[Path]:
    """Save a screenshot of ``page`` named after its target and host."""
    logger.info(f"Taking screenshot for {page.url}")
    try:
        target_id = await get_target_id(page)
        path = Path(log_dir) / f"{target_id}___{url_to_slug(page.url)}___{source}.png"
        await page.screenshot(path=str(path))
    except Exception as e:
        logger.error(f"Failed to take screenshot for {page.url}. {e}")
        return None
    return path


class ForensicSink:
    """Records instrumentation events of every attached page and archives the run's logs.

    Events are written unbuffered to ``cdp.log`` as they arrive; the browser
    itself writes ``forensics.log`` through its own logging flags.
    """

    def __init__(self, log_dir: Path, archive_dir: Path, domain: str = INSTRUMENTATION_DOMAIN):
        self.log_dir = Path(log_dir)
        self.archive_dir = Path(archive_dir)
        self.domain = domain
        self.forensic_log = self.log_dir / FORENSIC_LOG_NAME
        self.cdp_log = self.log_dir / CDP_LOG_NAME
        self.fd: Optional[int] = None
        self.hooks: Dict[str, Callable[[Dict[str, Any]], None]] = {
            f"{domain}.{hook}": self.write for hook in HOOKS
        }
        self._attached = set()

    def open(self):
        reset_log_dir(self.log_dir)
        self.fd = os.open(self.cdp_log, os.O_WRONLY | os.O_CREAT | os.O_TRUNC | os.O_APPEND, 0o644)

    def close(self):
        if self.fd is not None:
            os.close(self.fd)
            self.fd = None

    def write(self, params: Dict[str, Any]):
        if self.fd is None:
            return
        log = params.get('log')
        if log:
            os.write(self.fd, log.encode('utf-8') if isinstance(log, str) else log)

    async def attach(self, page):
        if page in self._attached:
            return
        self._attached.add(page)
        cdp = await page.context.new_cdp_session(page)
        try:
            await cdp.send(f"{self.domain}.enable")
            for event, handler in self.hooks.items():
                cdp.on(event, handler)
            logger.debug(f"Recording {len(self.hooks)} {self.domain} events for {page.url}")
        except Exception as e:
            logger.error(f"Unable to enable {self.domain} instrumentation for {page.url}. {e}")
        try:
            await cdp.send('Runtime.runIfWaitingForDebugger')
        except Exception as e:
            logger.warning(f"Unable to resume {page.url}. {e}")

    async def on_page(self, page):
        """Context 'page' listener; errors here have nobody to propagate to."""
        try:
            await self.attach(page)
        except Exception as e:
            logger.error(f"Failed to attach to new page. {e}")

    def archive(self, url_slug: str, category: str) -> Optional[Path]:
        archive_dir = self.archive_dir / category.replace(os.sep, '_')
        archive_dir.mkdir(parents=True, exist_ok=True)
        if not (self.forensic_log.exists() and self.cdp_log.exists()):
            logger.error("Log file is not stored!!!")
            return None
        tarball = archive_dir / f"{url_slug}.{int(time.time() * 1000)}.tar.gz"
        logger.info(f"Compressing {tarball.name} into {archive_dir}")
        with tarfile.open(tarball, 'w:gz') as tar:
            tar.add(self.log_dir, arcname='.')
        return tarball

    def archive_url(self, url: str, category: str) -> Optional[Path]:
        return self.archive(url_to_slug(url), category)
