# main.py
import asyncio
import argparse
import logging
import sys

from .config import CrawlConfig
from .logger import setup_logging
from .manager import Manager
from .utils import normalize_url

logger = logging.getLogger(__name__)


def build_config(args) -> CrawlConfig:
    overrides = {
        'log_dir': args.log_dir,
        'archive_dir': args.archive_dir,
        'device': args.device,
        'click_budget': args.number_to_click,
        'timeout_minutes': args.timeout,
        'chrome_path': args.chrome,
        'category': args.category,
        'debug': args.debug or None,
        'interactive': args.interactive or None,
    }
    if args.config:
        return CrawlConfig.from_yaml(args.config, **overrides)
    return CrawlConfig.from_dict({k: v for k, v in overrides.items() if v is not None})


async def run(config: CrawlConfig, website: str) -> bool:
    manager = Manager(config)
    # After the manager has emptied the log directory
    setup_logging(config.log_dir, config.debug)

    url = normalize_url(website)
    success = False
    try:
        await manager.launch()
        logger.info(f"Start crawling {url}")
        success = await asyncio.wait_for(
            manager.crawl(url, config.device, config.click_budget),
            timeout=config.timeout_minutes * 60,
        )
        logger.info(f"{url} completed.")
    except asyncio.TimeoutError:
        logger.info(f"{url} reached the {config.timeout_minutes} minute limit")
        success = True
    except Exception as e:
        logger.error(f"Crawler error: {e}", exc_info=config.debug)
    finally:
        await manager.close()

    manager.archive(url)
    return success


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description='Click around a web page and record forensic browser logs')
    parser.add_argument('--website', required=True, help='URL (or domain) to crawl')
    parser.add_argument('--device', help='Device profile to emulate')
    parser.add_argument('--number-to-click', type=int, help='Click budget per candidate list')
    parser.add_argument('--timeout', type=float, help='Wall-clock limit in minutes')
    parser.add_argument('--chrome', help='Chromium executable with forensic instrumentation')
    parser.add_argument('--category', help='Archive category, e.g. the ad network under investigation')
    parser.add_argument('--config', help='YAML config file')
    parser.add_argument('--log-dir', help='Working directory for this run')
    parser.add_argument('--archive-dir', help='Root directory for archived runs')
    parser.add_argument('--debug', action='store_true', help='Verbose logs and click indicator')
    parser.add_argument('--interactive', action='store_true', help='Show browser')

    args = parser.parse_args(argv)
    config = build_config(args)
    return 0 if asyncio.run(run(config, args.website)) else 1


if __name__ == '__main__':
    sys.exit(main())
