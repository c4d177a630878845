"""Tests for configuration loading."""

import pytest

from mcp_server_infakt.config import (
    PRODUCTION_URL,
    SANDBOX_URL,
    ConfigurationError,
    InfaktConfig,
    load_config,
)

API_KEY = "abcd1234567890wxyz"


def test_defaults_to_production():
    config = load_config({"INFAKT_API_KEY": API_KEY})
    assert config.base_url == PRODUCTION_URL
    assert config.use_sandbox is False
    assert config.timeout == 30


@pytest.mark.parametrize("flag", ["true", "1", "TRUE"])
def test_sandbox_flag(flag):
    config = load_config({"INFAKT_API_KEY": API_KEY, "INFAKT_USE_SANDBOX": flag})
    assert config.base_url == SANDBOX_URL
    assert config.use_sandbox is True


def test_sandbox_wins_over_override():
    config = load_config(
        {"INFAKT_API_KEY": API_KEY, "INFAKT_USE_SANDBOX": "true", "INFAKT_BASE_URL": "https://proxy.local/api/v3"}
    )
    assert config.base_url == SANDBOX_URL


def test_base_url_override():
    config = load_config({"INFAKT_API_KEY": API_KEY, "INFAKT_USE_SANDBOX": "no", "INFAKT_BASE_URL": "http://localhost:8080/api/v3/"})
    assert config.base_url == "http://localhost:8080/api/v3"


def test_missing_api_key():
    with pytest.raises(ConfigurationError, match="INFAKT_API_KEY"):
        load_config({})
    with pytest.raises(ConfigurationError, match="INFAKT_API_KEY"):
        load_config({"INFAKT_API_KEY": "   "})


def test_short_api_key():
    with pytest.raises(ConfigurationError, match="too short"):
        load_config({"INFAKT_API_KEY": "short"})


def test_malformed_url():
    with pytest.raises(ConfigurationError, match="Invalid URL format"):
        load_config({"INFAKT_API_KEY": API_KEY, "INFAKT_BASE_URL": "not a url"})


def test_config_is_immutable():
    config = InfaktConfig(api_key=API_KEY)
    with pytest.raises(Exception):
        config.api_key = "other-key-1234567890"


def test_masked_api_key():
    assert InfaktConfig(api_key=API_KEY).masked_api_key() == "abcd...wxyz"
