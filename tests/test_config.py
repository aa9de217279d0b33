"""Tests for AnalyzerConfig."""

import pytest

from salesreport.config import AnalyzerConfig, get_config, reload_config


def test_defaults(clean_config):
    config = AnalyzerConfig(_env_file=None)
    assert config.top_products_limit == 10
    assert config.bonus_rates() == {
        "first_place_rate": 0.15,
        "runner_up_rate": 0.10,
        "last_place_rate": 0.0,
        "default_rate": 0.05,
    }
    assert config.log_level == "INFO"


def test_settings_from_env(clean_config, monkeypatch):
    """Test settings can be loaded from environment."""
    monkeypatch.setenv("TOP_PRODUCTS_LIMIT", "5")
    monkeypatch.setenv("FIRST_PLACE_RATE", "0.2")
    config = AnalyzerConfig(_env_file=None)
    assert config.top_products_limit == 5
    assert config.first_place_rate == 0.2


def test_log_level_is_normalized():
    config = AnalyzerConfig(_env_file=None, log_level=" debug ")
    assert config.log_level == "DEBUG"


def test_invalid_log_level():
    with pytest.raises(ValueError, match="Invalid log level"):
        AnalyzerConfig(_env_file=None, log_level="chatty")


def test_rate_bounds():
    with pytest.raises(ValueError, match="less than or equal to 1"):
        AnalyzerConfig(_env_file=None, runner_up_rate=1.5)


def test_top_products_limit_validation():
    with pytest.raises(ValueError, match="greater than or equal to 1"):
        AnalyzerConfig(_env_file=None, top_products_limit=0)


def test_validate_config_valid():
    """Test that valid configuration passes validation."""
    config = AnalyzerConfig(_env_file=None, default_rate=0.08)
    config.validate_config()  # Should not raise


def test_validate_config_invalid_port():
    """Test that an out-of-range API port fails startup validation."""
    config = AnalyzerConfig(_env_file=None, api_port=70000)
    with pytest.raises(ValueError, match="API_PORT must be between 1 and 65535"):
        config.validate_config()


def test_config_singleton(clean_config):
    """Test that get_config returns singleton instance."""
    config1 = get_config()
    config2 = get_config()
    assert config1 is config2


def test_reload_config(clean_config, monkeypatch):
    """Test that reload_config creates new config instance."""
    config1 = get_config()
    monkeypatch.setenv("TOP_PRODUCTS_LIMIT", "3")
    config2 = reload_config()
    assert config1 is not config2
    assert config2.top_products_limit == 3
