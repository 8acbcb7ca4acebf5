"""Configuration and helper tests."""

import json
import logging

import pytest
from funcrouter_core.utils.config import (
    Config,
    ConfigSource,
    JSONFormatter,
    configure_logging,
    load_config,
)
from funcrouter_core.utils.helpers import env, merge_headers, parse_query, pipe, to_namespace


class TestConfig:
    """Test Config class."""

    def test_defaults(self):
        """Test default values."""
        config = Config()
        assert config.router_prefix == ""
        assert config.cors_enabled is False
        assert config.cors_max_age == 86400
        assert config.source is ConfigSource.DEFAULT

    def test_from_dict_ignores_unknown(self):
        """Test unknown keys are dropped."""
        config = Config.from_dict({"router_prefix": "/api", "bogus": 1})
        assert config.router_prefix == "/api"
        assert config.source is ConfigSource.DICT

    def test_from_json(self, tmp_path):
        """Test loading a JSON file."""
        path = tmp_path / "router.json"
        path.write_text(json.dumps({"router_prefix": "/v1", "port": 9000}))
        config = Config.from_json(str(path))
        assert config.port == 9000
        assert config.source is ConfigSource.FILE

    def test_from_env(self, monkeypatch):
        """Test environment variables with type conversion."""
        monkeypatch.setenv("FUNCROUTER_PORT", "9001")
        monkeypatch.setenv("FUNCROUTER_CORS_ENABLED", "true")
        monkeypatch.setenv("FUNCROUTER_CORS_METHODS", "GET, POST")
        monkeypatch.setenv("FUNCROUTER_ROUTER_PREFIX", "/env")
        config = Config.from_env()
        assert config.port == 9001
        assert config.cors_enabled is True
        assert config.cors_methods == ["GET", "POST"]
        assert config.router_prefix == "/env"
        assert config.source is ConfigSource.ENV

    def test_from_env_keeps_string_fields(self, monkeypatch):
        """Test string fields stay strings whatever they look like."""
        monkeypatch.setenv("FUNCROUTER_ROUTER_PREFIX", "2024")
        monkeypatch.setenv("FUNCROUTER_VIEWS_DIRECTORY", "true")
        monkeypatch.setenv("FUNCROUTER_LOG_LEVEL", "10")
        config = Config.from_env()
        assert config.router_prefix == "2024"
        assert config.views_directory == "true"
        assert config.log_level == "10"

    def test_from_env_prefix_reaches_router(self, monkeypatch):
        """Test a numeric-looking prefix builds a router."""
        from funcrouter_core.routing.router import Router

        monkeypatch.setenv("FUNCROUTER_ROUTER_PREFIX", "2024")
        router = Router.from_config(load_config(env_prefix="FUNCROUTER_"))
        assert router.prefix == "/2024"

    def test_from_env_bool_field(self, monkeypatch):
        """Test boolean spellings for bool fields."""
        monkeypatch.setenv("FUNCROUTER_CORS_ENABLED", "0")
        assert Config.from_env().cors_enabled is False
        monkeypatch.setenv("FUNCROUTER_CORS_ENABLED", "yes")
        assert Config.from_env().cors_enabled is True

    @pytest.mark.parametrize("key,value", [
        ("FUNCROUTER_PORT", "eighty"),
        ("FUNCROUTER_CORS_ENABLED", "maybe"),
        ("FUNCROUTER_CORS_MAX_AGE", "1.5"),
    ])
    def test_from_env_rejects_bad_values(self, monkeypatch, key, value):
        """Test values that do not fit the field type raise."""
        monkeypatch.setenv(key, value)
        with pytest.raises(ValueError, match=key):
            Config.from_env()

    def test_load_config_priority(self, tmp_path, monkeypatch):
        """Test env beats file beats defaults."""
        path = tmp_path / "router.json"
        path.write_text(json.dumps({"router_prefix": "/file", "port": 9000}))
        monkeypatch.setenv("FUNCROUTER_ROUTER_PREFIX", "/env")

        config = load_config(str(path))
        assert config.router_prefix == "/env"
        assert config.port == 9000
        assert config.log_level == "INFO"

    def test_load_config_missing_file(self, tmp_path):
        """Test a missing file falls back to defaults."""
        config = load_config(str(tmp_path / "absent.json"), env_prefix="FUNCROUTER_TEST_NONE_")
        assert config.router_prefix == ""


class TestLogging:
    """Test logging setup."""

    def test_configure_logging(self):
        """Test the package logger gets a handler."""
        handler = configure_logging("debug", "json")
        package_logger = logging.getLogger("funcrouter_core")
        try:
            assert handler in package_logger.handlers
            assert package_logger.level == logging.DEBUG
            assert isinstance(handler.formatter, JSONFormatter)
        finally:
            package_logger.removeHandler(handler)
            package_logger.setLevel(logging.NOTSET)

    def test_json_formatter(self):
        """Test JSON log lines."""
        record = logging.LogRecord("funcrouter_core.x", logging.INFO, __file__, 1, "hi %s", ("there",), None)
        entry = json.loads(JSONFormatter().format(record))
        assert entry["message"] == "hi there"
        assert entry["level"] == "INFO"


class TestHelpers:
    """Test helper functions."""

    def test_pipe(self):
        """Test left-to-right composition."""
        assert pipe(str.strip, str.lower, str.title)("  jOHn dOE  ") == "John Doe"
        assert pipe()(5) == 5

    def test_to_namespace(self):
        """Test mapping to attributes."""
        ns = to_namespace({"id": "1", "slug": "x"})
        assert ns.id == "1"
        assert ns.slug == "x"

    def test_env(self, monkeypatch):
        """Test environment lookup with default."""
        monkeypatch.setenv("FUNCROUTER_TEST_VALUE", "abc")
        assert env(" FUNCROUTER_TEST_VALUE ") == "abc"
        assert env("FUNCROUTER_TEST_ABSENT", "dflt") == "dflt"

    def test_parse_query(self):
        """Test query parsing."""
        assert parse_query("a=1&b=&a=2") == {"a": "2", "b": ""}

    def test_merge_headers(self):
        """Test case-insensitive merging."""
        merged = merge_headers({"content-type": "a"}, None, {"Content-Type": "b"})
        assert merged == {"Content-Type": "b"}
