"""Occupation catalog loading and lookup."""

from __future__ import annotations

import json
import math
import re
from pathlib import Path
from typing import Annotated

import yaml
from pydantic import BaseModel, Field, field_validator

from drivefit.drives.models import DRIVES, Drive, DriveVector, clamp
from drivefit.fit.config import FitConfig, get_fit_config
from drivefit.fit.models import OccupationSubtype
from drivefit.utils.logging import get_logger

logger = get_logger("fit.catalog")

DemandScore = Annotated[float, Field(ge=0.0, le=5.0)]


class CatalogEntry(BaseModel):
    """One occupation subtype as written in a catalog file."""

    name: str = Field(..., min_length=1, description="Subtype name")
    drives: dict[Drive, DemandScore] = Field(
        default_factory=dict, description="Demand per drive (0..5); missing = 0"
    )

    @field_validator("drives", mode="before")
    @classmethod
    def parse_drive_names(cls, v: object) -> object:
        if isinstance(v, dict):
            return {Drive.parse(key): value for key, value in v.items()}
        return v


class CatalogMajor(BaseModel):
    """A major occupation group and its subtypes."""

    major: str = Field(..., min_length=1, description="Major group name")
    subtypes: list[CatalogEntry] = Field(default_factory=list)


def _norm(text: str) -> str:
    return re.sub(r"\s+", " ", text.strip().lower())


class OccupationCatalog:
    """Ordered collection of occupation majors and their subtypes."""

    def __init__(self, majors: list[CatalogMajor]) -> None:
        self._majors = list(majors)

    @property
    def subtypes(self) -> list[OccupationSubtype]:
        """All subtypes, flattened in catalog order."""
        return [
            _to_subtype(major.major, entry)
            for major in self._majors
            for entry in major.subtypes
        ]

    def __len__(self) -> int:
        return sum(len(m.subtypes) for m in self._majors)

    def list_majors(self) -> list[str]:
        return [m.major for m in self._majors]

    def get_major(self, major: str) -> CatalogMajor | None:
        key = _norm(major)
        return next((m for m in self._majors if _norm(m.major) == key), None)

    def list_subtypes(self, major: str) -> list[OccupationSubtype]:
        found = self.get_major(major)
        if found is None:
            return []
        return [_to_subtype(found.major, entry) for entry in found.subtypes]

    def get_subtype(self, major: str, name: str) -> OccupationSubtype | None:
        key = _norm(name)
        return next((s for s in self.list_subtypes(major) if _norm(s.name) == key), None)

    def search_subtypes(self, query: str) -> list[OccupationSubtype]:
        """Subtypes whose name or major contains ``query`` (case-insensitive)."""
        q = _norm(query)
        if not q:
            return []
        return [s for s in self.subtypes if q in _norm(s.name) or q in _norm(s.major)]

    def default_subtype_for_major(self, major: str) -> OccupationSubtype | None:
        """Representative subtype: a general/management one, else the first."""
        subtypes = self.list_subtypes(major)
        if not subtypes:
            return None
        pattern = re.compile(r"general|executive|management|industry|product", re.IGNORECASE)
        return next((s for s in subtypes if pattern.search(s.name)), subtypes[0])


def average_drive_scores(subtypes: list[OccupationSubtype]) -> DriveVector | None:
    """Mean demand per drive rounded half up, clamped to [1, 5]."""
    if not subtypes:
        return None
    return DriveVector(
        {
            d: clamp(_round_half_up(sum(s.drives[d] for s in subtypes) / len(subtypes)), 1, 5)
            for d in DRIVES
        }
    )


def _round_half_up(x: float) -> float:
    return float(math.floor(x + 0.5))


def _to_subtype(major: str, entry: CatalogEntry) -> OccupationSubtype:
    return OccupationSubtype(major=major, name=entry.name, drives=DriveVector(entry.drives))


class CatalogService:
    """Service for loading occupation catalogs (YAML or JSON)."""

    def __init__(self, config: FitConfig | None = None) -> None:
        self.config = config or get_fit_config()

    def load_catalog(self, path: Path | str | None = None) -> OccupationCatalog:
        """Load and validate a catalog file.

        Accepted shapes: ``{"majors": [...]}``, a list of majors
        (``{major, subtypes}``), or a flat list of ``{major, name, drives}``
        records, which are grouped by major in first-seen order.
        """
        catalog_path = Path(path) if path is not None else self.config.catalog_path
        if not catalog_path.exists():
            raise FileNotFoundError(f"Catalog not found: {catalog_path}")

        data = self._read(catalog_path)
        if isinstance(data, dict):
            data = data.get("majors")
        if not isinstance(data, list):
            raise ValueError(f"Catalog must be a list of majors or records: {catalog_path}")

        try:
            majors = self._parse_majors(data)
        except (TypeError, KeyError) as e:
            raise ValueError(f"Malformed catalog record in {catalog_path}") from e

        catalog = OccupationCatalog(majors)
        logger.debug(
            "Loaded %d occupation subtype(s) in %d major(s) from %s",
            len(catalog),
            len(majors),
            catalog_path,
        )
        return catalog

    def _read(self, path: Path) -> object:
        suffix = path.suffix.lower()
        raw = path.read_text(encoding="utf-8")
        if suffix == ".json":
            try:
                return json.loads(raw)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid JSON catalog: {path}") from e
        try:
            return yaml.safe_load(raw)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML catalog: {path}") from e

    def _parse_majors(self, items: list) -> list[CatalogMajor]:
        if items and all(isinstance(i, dict) and "subtypes" not in i for i in items):
            grouped: dict[str, list[dict]] = {}
            for record in items:
                grouped.setdefault(record["major"], []).append(
                    {"name": record["name"], "drives": record.get("drives", {})}
                )
            items = [{"major": m, "subtypes": subs} for m, subs in grouped.items()]
        return [CatalogMajor.model_validate(item) for item in items]
