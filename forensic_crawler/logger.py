# logger.py
import logging
from pathlib import Path

from .constants import CRAWLER_LOG_NAME

LOG_FORMAT = '%(asctime)s::%(name)s::%(levelname)s: %(message)s'


def setup_logging(log_dir: Path, debug: bool = False):
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    handlers = [
        logging.StreamHandler(),
        logging.FileHandler(log_dir / CRAWLER_LOG_NAME, mode='w', encoding='utf-8'),
    ]
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )
