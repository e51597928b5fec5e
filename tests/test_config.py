"""Tests for cache configuration."""

import pytest

from cachefolio import FileHandler, MemoryHandler
from cachefolio.config import CacheConfig, merge_options, normalize_options
from cachefolio.exceptions import ConfigurationError
from cachefolio.utils import parse_mode


class TestOptionHelpers:
    def test_normalize_lowercases_keys(self):
        assert normalize_options({"Path": "/x", "MODE": 1}) == {"path": "/x", "mode": 1}

    def test_normalize_none(self):
        assert normalize_options(None) == {}

    def test_normalize_rejects_non_mapping(self):
        with pytest.raises(ConfigurationError, match="mapping"):
            normalize_options([("path", "/x")])

    def test_merge_last_writer_wins(self):
        """Test that later layers override earlier ones, case-insensitively."""
        merged = merge_options({"prefix": "cache_", "mode": 1}, None, {"PREFIX": "app_"})
        assert merged == {"prefix": "app_", "mode": 1}


class TestParseMode:
    @pytest.mark.parametrize(
        "mode,expected", [(0o640, 0o640), ("0640", 0o640), ("600", 0o600), ("0o755", 0o755)]
    )
    def test_valid(self, mode, expected):
        assert parse_mode(mode) == expected

    @pytest.mark.parametrize("mode", ["rwx", True, None, 1.5])
    def test_invalid(self, mode):
        with pytest.raises(ValueError):
            parse_mode(mode)


class TestCacheConfig:
    """Test CacheConfig loading and handler creation."""

    def test_defaults(self):
        config = CacheConfig()
        assert config.handler == "file"
        assert config.options == {}

    def test_options_normalized(self):
        assert CacheConfig(options={"PATH": "/x"}).options == {"path": "/x"}

    def test_save_and_load(self, temp_cache_dir):
        config_path = temp_cache_dir / "conf" / "cache.json"
        CacheConfig("memory", {"prefix": "app_", "default_ttl": 30}).save(config_path)

        loaded = CacheConfig.load(config_path)
        assert loaded.handler == "memory"
        assert loaded.options == {"prefix": "app_", "default_ttl": 30}

    def test_load_missing_file(self, temp_cache_dir):
        assert CacheConfig.load(temp_cache_dir / "absent.json") == CacheConfig()

    def test_load_invalid_file(self, temp_cache_dir):
        config_path = temp_cache_dir / "cache.json"
        config_path.write_text("[1, 2]")
        with pytest.raises(ConfigurationError):
            CacheConfig.load(config_path)

    def test_from_env(self, monkeypatch, temp_cache_dir):
        monkeypatch.setenv("CACHEFOLIO_HANDLER", "FILE")
        monkeypatch.setenv("CACHEFOLIO_PATH", str(temp_cache_dir))
        monkeypatch.setenv("CACHEFOLIO_PREFIX", "env_")
        monkeypatch.setenv("CACHEFOLIO_MODE", "0600")
        monkeypatch.setenv("CACHEFOLIO_DEFAULT_TTL", "120")

        config = CacheConfig.from_env()

        assert config.handler == "file"
        assert config.options == {
            "path": str(temp_cache_dir),
            "prefix": "env_",
            "mode": "0600",
            "default_ttl": 120,
        }

    def test_from_env_empty(self, monkeypatch):
        for name in ["HANDLER", "PATH", "PREFIX", "MODE", "DEFAULT_TTL"]:
            monkeypatch.delenv(f"CACHEFOLIO_{name}", raising=False)
        assert CacheConfig.from_env() == CacheConfig()

    def test_create_handler(self, temp_cache_dir, clock):
        config = CacheConfig("file", {"path": str(temp_cache_dir), "mode": "0600"})
        cache = config.create_handler()
        assert isinstance(cache, FileHandler)
        assert cache.set("k", 1) is True

    def test_create_memory_handler(self):
        assert isinstance(CacheConfig("memory").create_handler(), MemoryHandler)
