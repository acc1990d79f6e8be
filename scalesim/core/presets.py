from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List

from .models import ComponentConfig, LoadPattern, parse_components

logger = logging.getLogger(__name__)


class PresetLoadError(RuntimeError):
    pass


@dataclass(frozen=True)
class Preset:
    id: str
    name: str
    description: str
    components: List[ComponentConfig]
    load: LoadPattern

    @classmethod
    def from_dict(cls, data: Dict[str, object]) -> "Preset":
        preset_id = str(data.get("id", "")).strip()
        name = str(data.get("name", "")).strip()
        if not preset_id or not name:
            raise ValueError("Preset must include id and name.")
        components = parse_components(data.get("components"))
        if not components:
            raise ValueError("Preset must include at least one component.")
        return cls(
            id=preset_id,
            name=name,
            description=str(data.get("description", "")).strip(),
            components=components,
            load=LoadPattern.from_dict(data.get("load")),
        )

    def to_dict(self) -> Dict[str, object]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "components": [component.to_dict() for component in self.components],
            "load": self.load.to_dict(),
        }

    def summary(self) -> Dict[str, object]:
        return {"id": self.id, "name": self.name, "description": self.description}


def load_preset(path: Path) -> Preset:
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
    except (OSError, json.JSONDecodeError) as exc:
        raise PresetLoadError(f"Unable to load preset: {path.name}") from exc

    if not isinstance(data, dict):
        raise PresetLoadError(f"Preset {path.name} must contain a JSON object.")

    if "id" not in data:
        data = dict(data)
        data["id"] = path.stem

    try:
        return Preset.from_dict(data)
    except ValueError as exc:
        raise PresetLoadError(f"Preset {path.name} is invalid: {exc}") from exc


def default_presets_dir() -> Path:
    return Path(__file__).resolve().parents[1] / "presets"


@dataclass
class PresetRegistry:
    """Presets found as ``<id>.json`` files in ``presets_dir``, parsed once."""

    presets_dir: Path = field(default_factory=default_presets_dir)
    _cache: Dict[str, Preset] = field(default_factory=dict, init=False)

    def list_presets(self) -> List[Preset]:
        presets = []
        for preset_id in self.preset_ids():
            try:
                presets.append(self.get_preset(preset_id))
            except PresetLoadError as exc:
                logger.warning("Skipping preset %s: %s", preset_id, exc)
        return presets

    def preset_ids(self) -> List[str]:
        if not self.presets_dir.is_dir():
            return []
        return sorted(path.stem for path in self.presets_dir.glob("*.json"))

    def get_preset(self, preset_id: str) -> Preset:
        if preset_id not in self._cache:
            if preset_id not in self.preset_ids():
                raise FileNotFoundError(f"Preset {preset_id} not found.")
            self._cache[preset_id] = load_preset(self.presets_dir / f"{preset_id}.json")
        return self._cache[preset_id]
