# utils.py
import asyncio
from urllib.parse import urlparse

from .constants import MOUSE_EVENT_PREFIXES, MOUSE_EVENTS


async def sleep(ms: int):
    await asyncio.sleep(ms / 1000)


def url_to_slug(url: str, full: bool = False) -> str:
    parsed = urlparse(url)
    host = (parsed.hostname or '').replace('.', '_')
    if not full:
        return host
    return host + parsed.path.replace('/', '__')


def normalize_url(website: str) -> str:
    return website if website.startswith('http') else 'http://' + website


def is_mouse_event(event: str) -> bool:
    if not event:
        return False
    if event.startswith(MOUSE_EVENT_PREFIXES):
        return True
    if event.endswith('click'):
        return True
    return event in MOUSE_EVENTS
