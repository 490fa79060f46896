# config.py
import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .constants import (
    ARCHIVES_DIR, CLICK_BUDGET, DEFAULT_CATEGORY, DEFAULT_DEVICE, DEVICES,
    INSTRUMENTATION_DOMAIN, LOG_DIR, SCROLL_DISTANCE, SCROLL_TIMES, TIMEOUT_MINUTES,
)

logger = logging.getLogger(__name__)


@dataclass
class CrawlConfig:
    log_dir: Path = LOG_DIR
    archive_dir: Path = ARCHIVES_DIR
    debug: bool = False
    interactive: bool = False
    chrome_path: Optional[str] = None
    click_budget: int = CLICK_BUDGET
    timeout_minutes: float = TIMEOUT_MINUTES
    device: str = DEFAULT_DEVICE
    category: str = DEFAULT_CATEGORY
    interact: List[str] = field(default_factory=lambda: ['clickables', 'anchors'])
    scroll_times: int = SCROLL_TIMES
    scroll_distance: int = SCROLL_DISTANCE
    random_seed: Optional[int] = None
    instrumentation_domain: str = INSTRUMENTATION_DOMAIN

    def __post_init__(self):
        self.log_dir = Path(self.log_dir)
        self.archive_dir = Path(self.archive_dir)
        for kind in self.interact:
            if kind not in ('clickables', 'anchors'):
                raise ValueError(f"Unknown candidate list in 'interact': {kind}")

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> "CrawlConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(values) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(sorted(unknown))}")
        return cls(**values)

    @classmethod
    def from_yaml(cls, path, **overrides) -> "CrawlConfig":
        with open(path, encoding='utf-8') as f:
            values = yaml.safe_load(f) or {}
        if not isinstance(values, dict):
            raise ValueError(f"{path} must contain a mapping")
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls.from_dict(values)


def device_profile(name: Optional[str]) -> Dict[str, Any]:
    """Keyword arguments for Browser.new_context emulating ``name``."""
    if name not in DEVICES:
        logger.warning(f"Unknown device {name!r}, using {DEFAULT_DEVICE}")
        name = DEFAULT_DEVICE
    return dict(DEVICES[name])
