"""Tests for settings resolution (config.py) and logging setup."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from loguru import logger

from toxiproxy_cli.config import DEFAULT_URL, URL_ENV_VAR, normalize_url, resolve_settings
from toxiproxy_cli.core.admin_service import ProxyAdminService
from toxiproxy_cli.utils.log_config import configure_logging


class TestNormalizeUrl:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("localhost:8474", "http://localhost:8474"),
            ("http://localhost:8474/", "http://localhost:8474"),
            ("https://toxi.example.com", "https://toxi.example.com"),
            ("  toxiproxy:8474  ", "http://toxiproxy:8474"),
        ],
    )
    def test_normalize(self, raw: str, expected: str) -> None:
        assert normalize_url(raw) == expected


class TestResolveSettings:
    def test_default(self) -> None:
        assert resolve_settings(None, environ={}).base_url == DEFAULT_URL

    def test_env_var(self) -> None:
        settings = resolve_settings(None, environ={URL_ENV_VAR: "toxiproxy:9000"})
        assert settings.base_url == "http://toxiproxy:9000"

    def test_flag_beats_env(self) -> None:
        settings = resolve_settings("other:1", environ={URL_ENV_VAR: "toxiproxy:9000"})
        assert settings.base_url == "http://other:1"

    def test_reads_process_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(URL_ENV_VAR, "from-env:8474")
        assert resolve_settings(None).base_url == "http://from-env:8474"

    def test_verbose_flag(self) -> None:
        assert resolve_settings(None, verbose=True, environ={}).verbose is True


class TestConfigureLogging:
    def _capture(self, verbose: bool) -> list[str]:
        messages: list[str] = []
        client = MagicMock()
        client.list_proxies.return_value = {}
        configure_logging(verbose)
        sink_id = logger.add(messages.append, level="DEBUG", format="{message}")
        try:
            ProxyAdminService(client).list_proxies()
        finally:
            logger.remove(sink_id)
            configure_logging(False)
        return messages

    def test_verbose_emits_package_debug(self) -> None:
        assert any("retrieve proxies" in m for m in self._capture(True))

    def test_quiet_drops_package_logs(self) -> None:
        assert self._capture(False) == []
