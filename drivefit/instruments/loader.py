"""Loading a user's questionnaire answers from disk."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from drivefit.instruments.models import Instrument, PersonaInputs
from drivefit.utils.logging import get_logger

logger = get_logger("instruments.loader")


class AnswerFile(BaseModel):
    """On-disk shape of an answers file: one raw record per instrument."""

    innate: dict[Any, Any] | None = Field(default=None, description="Innate answers")
    surface: dict[Any, Any] | None = Field(
        default=None, description="Surface (private) answers"
    )
    imposed: dict[Any, Any] | None = Field(
        default=None, description="Imposed (public) answers"
    )

    def to_inputs(self) -> PersonaInputs:
        return PersonaInputs.from_records(
            innate=self.innate, surface=self.surface, imposed=self.imposed
        )


class AnswerFileService:
    """Service for loading answer files (YAML or JSON)."""

    def load_answers(self, path: Path | str) -> PersonaInputs:
        """Load and convert an answers file into :class:`PersonaInputs`."""
        answers_path = Path(path)
        if not answers_path.exists():
            raise FileNotFoundError(f"Answers file not found: {answers_path}")

        suffix = answers_path.suffix.lower()
        if suffix in {".yaml", ".yml"}:
            data = self._load_yaml(answers_path)
        elif suffix == ".json":
            data = self._load_json(answers_path)
        else:
            data = self._load_unknown(answers_path)

        inputs = AnswerFile.model_validate(data).to_inputs()
        missing = inputs.missing_instruments()
        if missing:
            logger.warning(
                "Answers file %s has no %s answers",
                answers_path,
                ", ".join(m.value for m in missing),
            )
        for instrument in Instrument:
            answers = getattr(inputs, instrument.value)
            if answers is not None and answers.answered_count() == 0:
                logger.warning(
                    "Answers file %s has a %s section with no usable answers",
                    answers_path,
                    instrument.value,
                )
        return inputs

    def _load_yaml(self, path: Path) -> dict:
        try:
            with path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML answers file: {path}") from e
        return _require_mapping(data, path)

    def _load_json(self, path: Path) -> dict:
        try:
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON answers file: {path}") from e
        return _require_mapping(data, path)

    def _load_unknown(self, path: Path) -> dict:
        raw = path.read_text(encoding="utf-8")
        if raw.lstrip().startswith("{"):
            try:
                return _require_mapping(json.loads(raw), path)
            except json.JSONDecodeError:
                pass
        try:
            data = yaml.safe_load(raw)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid answers file format: {path}") from e
        return _require_mapping(data, path)


def _require_mapping(data: object, path: Path) -> dict:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Answers file must be a mapping/dict: {path}")
    return data
