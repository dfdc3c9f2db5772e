"""Tests for newspulse.core.config module."""

import pytest

from newspulse.core.config import get_api_key, load_config


class TestLoadConfig:
    def test_missing_file_raises(self, tmp_path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.yaml")

    def test_empty_file_raises(self, tmp_path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("", encoding="utf-8")
        with pytest.raises(ValueError):
            load_config(path)

    def test_non_mapping_raises(self, tmp_path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("- just\n- a list\n", encoding="utf-8")
        with pytest.raises(ValueError):
            load_config(path)

    def test_values_override_defaults(self, tmp_path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("ticker: MSFT\ntime_frame: weekly\n", encoding="utf-8")
        config = load_config(path)
        assert config["ticker"] == "MSFT"
        assert config["time_frame"] == "weekly"
        assert config["lookback_years"] == 2

    def test_nested_sections_merge(self, tmp_path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("news:\n  page_size: 10\nprices:\n  provider: yfinance\n", encoding="utf-8")
        config = load_config(path)
        assert config["news"] == {"max_articles": 400, "page_size": 10, "timeout_seconds": 15}
        assert config["prices"]["provider"] == "yfinance"
        assert config["prices"]["limit"] == 1000

    def test_defaults_not_mutated(self, tmp_path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("news:\n  page_size: 10\n", encoding="utf-8")
        load_config(path)
        path.write_text("ticker: AAPL\n", encoding="utf-8")
        assert load_config(path)["news"]["page_size"] == 50


class TestGetApiKey:
    def test_returns_value(self, monkeypatch) -> None:
        monkeypatch.setenv("POLYGON_API_KEY", " abc ")
        assert get_api_key("POLYGON_API_KEY") == "abc"

    def test_blank_is_none(self, monkeypatch) -> None:
        monkeypatch.setenv("POLYGON_API_KEY", "  ")
        assert get_api_key("POLYGON_API_KEY") is None

    def test_unset_is_none(self, monkeypatch) -> None:
        monkeypatch.delenv("POLYGON_API_KEY", raising=False)
        assert get_api_key("POLYGON_API_KEY") is None
