"""Occupational-fit evaluation and ranking.

Public API:
    - ProfessionFitService: simulate, rank and sort occupation fits
    - CatalogService / OccupationCatalog: occupation reference data
    - compute_mismatch / WeightMode: weighted deficit against a demand vector
    - FitResult / RankingResult / OccupationSubtype: result and input models
    - FitConfig: configuration settings
"""

from drivefit.fit.adjust import (
    drained_energy,
    surface_adjusted,
    surface_adjusted_aspired,
    surface_drain,
    surface_transfer,
    total_drained_energy,
)
from drivefit.fit.catalog import (
    CatalogService,
    OccupationCatalog,
    average_drive_scores,
)
from drivefit.fit.config import FitConfig, get_fit_config, reset_fit_config
from drivefit.fit.mismatch import WeightMode, compute_mismatch
from drivefit.fit.models import (
    FitResult,
    MismatchProfile,
    OccupationSubtype,
    RankingResult,
    SortMode,
)
from drivefit.fit.service import ProfessionFitService, sort_fit_results

__all__ = [
    "CatalogService",
    "FitConfig",
    "FitResult",
    "MismatchProfile",
    "OccupationCatalog",
    "OccupationSubtype",
    "ProfessionFitService",
    "RankingResult",
    "SortMode",
    "WeightMode",
    "average_drive_scores",
    "compute_mismatch",
    "drained_energy",
    "get_fit_config",
    "reset_fit_config",
    "sort_fit_results",
    "surface_adjusted",
    "surface_adjusted_aspired",
    "surface_drain",
    "surface_transfer",
    "total_drained_energy",
]
