"""
Configuration and CLI tests
"""
import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from forensic_crawler.config import CrawlConfig, device_profile
from forensic_crawler.constants import DEVICES
from forensic_crawler.main import build_config, main, run
from forensic_crawler.utils import normalize_url, url_to_slug


class TestCrawlConfig:

    def test_defaults(self):
        config = CrawlConfig()
        assert config.click_budget == 10
        assert config.device == 'win10'
        assert config.interact == ['clickables', 'anchors']

    def test_from_yaml_with_overrides(self, tmp_path):
        path = tmp_path / 'crawl.yaml'
        path.write_text("click_budget: 3\ndevice: ipad\nlog_dir: /var/crawl/logs\ninteract: [anchors]\n")
        config = CrawlConfig.from_yaml(path, device='macos', category=None)
        assert config.click_budget == 3
        assert config.device == 'macos'
        assert str(config.log_dir) == '/var/crawl/logs'
        assert config.interact == ['anchors']

    def test_unknown_keys_rejected(self, tmp_path):
        path = tmp_path / 'crawl.yaml'
        path.write_text("clicks: 3\n")
        with pytest.raises(ValueError):
            CrawlConfig.from_yaml(path)

    def test_unknown_list_rejected(self):
        with pytest.raises(ValueError):
            CrawlConfig(interact=['buttons'])

    def test_device_profile_fallback(self):
        assert device_profile('iphone') == DEVICES['iphone']
        assert device_profile('nokia') == DEVICES['win10']


class TestUtils:

    def test_url_to_slug(self):
        assert url_to_slug("https://www.example.com/a/b") == "www_example_com"
        assert url_to_slug("https://www.example.com/a/b", full=True) == "www_example_com__a__b"

    def test_normalize_url(self):
        assert normalize_url("example.com") == "http://example.com"
        assert normalize_url("https://example.com") == "https://example.com"


class TestMain:

    def test_build_config_from_flags(self, tmp_path):
        from argparse import Namespace
        args = Namespace(
            log_dir=str(tmp_path), archive_dir=None, device='linux', number_to_click=4,
            timeout=None, chrome=None, category='adnet', debug=False, interactive=False, config=None,
        )
        config = build_config(args)
        assert config.device == 'linux'
        assert config.click_budget == 4
        assert config.category == 'adnet'
        assert config.debug is False

    @pytest.fixture
    def fake_manager(self):
        with patch('forensic_crawler.main.Manager') as manager_class, \
                patch('forensic_crawler.main.setup_logging'):
            manager = manager_class.return_value
            manager.launch = AsyncMock()
            manager.close = AsyncMock()
            manager.archive = MagicMock()
            yield manager

    @pytest.mark.asyncio
    async def test_run_archives_after_crawl(self, fake_manager):
        fake_manager.crawl = AsyncMock(return_value=True)
        assert await run(CrawlConfig(category='adnet'), "example.com") is True
        fake_manager.crawl.assert_awaited_once_with("http://example.com", 'win10', 10)
        fake_manager.close.assert_awaited_once()
        fake_manager.archive.assert_called_once_with("http://example.com")

    @pytest.mark.asyncio
    async def test_timeout_tears_down_browser(self, fake_manager):
        async def endless(*args):
            await asyncio.sleep(60)

        fake_manager.crawl = AsyncMock(side_effect=endless)
        assert await run(CrawlConfig(timeout_minutes=0.001), "https://example.com") is True
        fake_manager.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_launch_failure_still_closes(self, fake_manager):
        fake_manager.launch.side_effect = RuntimeError("Executable doesn't exist")
        assert await run(CrawlConfig(), "https://example.com") is False
        fake_manager.close.assert_awaited_once()

    def test_main_exit_status(self):
        with patch('forensic_crawler.main.run', new=AsyncMock(return_value=False)):
            assert main(['--website', 'example.com']) == 1
