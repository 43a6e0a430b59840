"""Report configuration: presets plus overrides from a TOML file."""

import tomllib
from dataclasses import dataclass, fields, replace
from pathlib import Path

type ConfigDict = dict[str, str | int | float | bool]

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "pyproject.toml"

TOP_PRODUCT_MODES = ("profit", "quantity")


@dataclass(frozen=True)
class ReportConfig:
    top_n: int = 3
    top_products_mode: str = "profit"
    senior_title: str = "Senior Seller"
    senior_multiplier: float = 1.5
    include_inactive_sellers: bool = False

    def __post_init__(self):
        if isinstance(self.top_n, bool) or not isinstance(self.top_n, int) or self.top_n < 1:
            raise ValueError(f"top_n must be a positive integer, got {self.top_n!r}")
        if self.top_products_mode not in TOP_PRODUCT_MODES:
            raise ValueError(
                f"top_products_mode must be one of {TOP_PRODUCT_MODES}, got {self.top_products_mode!r}"
            )
        if not isinstance(self.senior_title, str):
            raise ValueError(f"senior_title must be a string, got {self.senior_title!r}")
        if isinstance(self.senior_multiplier, bool) or not isinstance(self.senior_multiplier, (int, float)) \
                or self.senior_multiplier < 0:
            raise ValueError(f"senior_multiplier must be a non-negative number, got {self.senior_multiplier!r}")
        if not isinstance(self.include_inactive_sellers, bool):
            raise ValueError(f"include_inactive_sellers must be a boolean, got {self.include_inactive_sellers!r}")


def profile_config(profile: str = "default") -> ReportConfig:
    match profile:
        case "default":
            return ReportConfig()
        case "extended":
            return ReportConfig(top_n=10, top_products_mode="quantity")
        case other:
            raise ValueError(f"Unknown report profile: {other}")


def get_report_settings(path: str | Path | None = None) -> ConfigDict:
    """Read the [tool.sales_report] table. A missing default pyproject.toml yields no settings."""
    if path is None:
        if not DEFAULT_CONFIG_PATH.exists():
            return {}
        path = DEFAULT_CONFIG_PATH

    with open(path, "rb") as f:
        data = tomllib.load(f)
    return data.get("tool", {}).get("sales_report", {})


def load_report_config(path: str | Path | None = None, profile: str | None = None) -> ReportConfig:
    """Build a ReportConfig from a profile preset and the file's overrides.

    An explicit profile argument takes precedence over one named in the file.
    """
    settings = dict(get_report_settings(path))
    base = profile_config(profile or settings.pop("profile", "default"))
    settings.pop("profile", None)

    known = {f.name for f in fields(ReportConfig)}
    unknown = sorted(set(settings) - known)
    if unknown:
        raise ValueError(f"Unknown report settings: {', '.join(unknown)}")

    return replace(base, **settings)
