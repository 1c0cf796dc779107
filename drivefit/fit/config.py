"""Configuration settings for occupational-fit evaluation."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from drivefit.drives.models import Drive
from drivefit.fit.mismatch import WeightMode
from drivefit.fit.models import SortMode


class FitConfig(BaseSettings):
    """Fit evaluation settings.

    All settings have defaults and can be overridden via environment
    variables with the ``FIT_`` prefix or a .env file. Formula coefficients
    are constants and not exposed here.
    """

    model_config = SettingsConfigDict(
        env_prefix="FIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    catalog_path: Path = Field(
        default=Path("catalogs/occupations.yaml"),
        description="Path to the occupation catalog (YAML/JSON)",
    )

    top_n: Annotated[int, Field(gt=0)] = Field(
        default=3,
        description="Size of the best-fit and worst-fit slices of a ranking",
    )

    value_drive: Drive = Field(
        default=Drive.VALUE,
        description="Drive whose routes drive the aspiration adjustment",
    )

    raw_weight_mode: WeightMode = Field(
        default=WeightMode.PROF_DEMAND,
        description="Weighting for the pre-aspiration (raw) mismatch",
    )
    adjusted_weight_mode: WeightMode = Field(
        default=WeightMode.MIXED_MAX,
        description="Weighting for the final (adjusted) mismatch",
    )

    default_sort_mode: SortMode = Field(
        default=SortMode.MISMATCH,
        description="Ordering used by the CLI when none is given",
    )

    suppression_threshold: Annotated[float, Field(ge=0.0, le=5.0)] = Field(
        default=3.0,
        description="Satisfaction below which a route is labelled suppression",
    )

    @field_validator("value_drive", mode="before")
    @classmethod
    def parse_value_drive(cls, v: object) -> Drive:
        return Drive.parse(v)  # type: ignore[arg-type]

    @field_validator("raw_weight_mode", "adjusted_weight_mode", mode="before")
    @classmethod
    def parse_weight_mode(cls, v: object) -> WeightMode:
        return WeightMode.parse(v)  # type: ignore[arg-type]

    @field_validator("default_sort_mode", mode="before")
    @classmethod
    def parse_sort_mode(cls, v: object) -> SortMode:
        return SortMode.parse(v)  # type: ignore[arg-type]


_fit_config: FitConfig | None = None


def get_fit_config() -> FitConfig:
    """Get the fit configuration singleton."""
    global _fit_config
    if _fit_config is None:
        _fit_config = FitConfig()
    return _fit_config


def reset_fit_config() -> None:
    """Reset the fit configuration singleton (useful for testing)."""
    global _fit_config
    _fit_config = None
