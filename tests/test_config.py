"""Unit tests for report configuration loading."""

import pytest

from sales_pipeline import config as config_module
from sales_pipeline.config import ReportConfig, load_report_config, profile_config

pytestmark = pytest.mark.unit


@pytest.fixture
def write_toml(tmp_path):
    def _write(body: str):
        path = tmp_path / "pyproject.toml"
        path.write_text(body, encoding="utf-8")
        return path
    return _write


def test_defaults():
    assert ReportConfig() == ReportConfig(
        top_n=3,
        top_products_mode="profit",
        senior_title="Senior Seller",
        senior_multiplier=1.5,
        include_inactive_sellers=False,
    )


def test_extended_profile():
    assert profile_config("extended") == ReportConfig(top_n=10, top_products_mode="quantity")


def test_unknown_profile():
    with pytest.raises(ValueError, match="Unknown report profile"):
        profile_config("weekly")


@pytest.mark.parametrize("kwargs", [
    {"top_n": 0},
    {"top_n": True},
    {"top_n": 2.5},
    {"top_products_mode": "revenue"},
    {"senior_multiplier": -1},
    {"include_inactive_sellers": "yes"},
])
def test_invalid_values(kwargs):
    with pytest.raises(ValueError):
        ReportConfig(**kwargs)


def test_overrides_from_file(write_toml):
    path = write_toml('[tool.sales_report]\ntop_n = 5\nsenior_title = "Lead Seller"\n')
    assert load_report_config(path) == ReportConfig(top_n=5, senior_title="Lead Seller")


def test_profile_named_in_file(write_toml):
    path = write_toml('[tool.sales_report]\nprofile = "extended"\ntop_n = 4\n')
    assert load_report_config(path) == ReportConfig(top_n=4, top_products_mode="quantity")


def test_profile_argument_wins_over_file(write_toml):
    path = write_toml('[tool.sales_report]\nprofile = "extended"\n')
    assert load_report_config(path, profile="default") == ReportConfig()


def test_file_without_table(write_toml):
    path = write_toml('[project]\nname = "x"\n')
    assert load_report_config(path) == ReportConfig()


def test_unknown_setting(write_toml):
    path = write_toml("[tool.sales_report]\ntop_m = 4\n")
    with pytest.raises(ValueError, match="top_m"):
        load_report_config(path)


def test_explicit_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_report_config(tmp_path / "missing.toml")


def test_missing_default_file(tmp_path, monkeypatch):
    monkeypatch.setattr(config_module, "DEFAULT_CONFIG_PATH", tmp_path / "pyproject.toml")
    assert load_report_config() == ReportConfig()
