"""Tests for environment-driven settings."""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest

from untagged_deps.core.config import (
    DEFAULT_PROXY_URL,
    Settings,
    load_settings,
    proxy_url_from_goproxy,
)

_ENV_KEYS = (
    "UNTAGGED_DEPS_RESOLVER",
    "UNTAGGED_DEPS_TIMEOUT",
    "UNTAGGED_DEPS_CONCURRENCY",
    "UNTAGGED_DEPS_GO_BIN",
    "GOPROXY",
)


@pytest.fixture
def clean_env():
    with patch.dict(os.environ, {}, clear=False):
        for key in _ENV_KEYS:
            os.environ.pop(key, None)
        yield


class TestProxyUrlFromGoproxy:
    def test_unset(self):
        assert proxy_url_from_goproxy(None) == DEFAULT_PROXY_URL

    def test_first_url_wins(self):
        value = "https://goproxy.corp.example/,https://proxy.golang.org,direct"
        assert proxy_url_from_goproxy(value) == "https://goproxy.corp.example"

    def test_skips_keywords(self):
        assert proxy_url_from_goproxy("direct|http://localhost:3000") == "http://localhost:3000"

    def test_no_url_entries(self):
        assert proxy_url_from_goproxy("off") == DEFAULT_PROXY_URL


class TestLoadSettings:
    def test_defaults(self, clean_env):
        assert load_settings() == Settings()

    def test_from_env(self, clean_env):
        env = {
            "UNTAGGED_DEPS_RESOLVER": "Proxy",
            "UNTAGGED_DEPS_TIMEOUT": "2.5",
            "UNTAGGED_DEPS_CONCURRENCY": "4",
            "UNTAGGED_DEPS_GO_BIN": "/usr/local/go/bin/go",
            "GOPROXY": "https://athens.example,direct",
        }
        with patch.dict(os.environ, env):
            settings = load_settings()
        assert settings == Settings(
            resolver="proxy",
            proxy_url="https://athens.example",
            timeout=2.5,
            concurrency=4,
            go_bin="/usr/local/go/bin/go",
        )

    def test_unknown_resolver(self, clean_env):
        with patch.dict(os.environ, {"UNTAGGED_DEPS_RESOLVER": "git"}):
            with pytest.raises(ValueError, match="UNTAGGED_DEPS_RESOLVER"):
                load_settings()

    def test_bad_number(self, clean_env):
        with patch.dict(os.environ, {"UNTAGGED_DEPS_TIMEOUT": "soon"}):
            with pytest.raises(ValueError):
                load_settings()

    def test_non_positive_concurrency(self, clean_env):
        with patch.dict(os.environ, {"UNTAGGED_DEPS_CONCURRENCY": "0"}):
            with pytest.raises(ValueError, match="at least 1"):
                load_settings()
