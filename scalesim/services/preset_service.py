from __future__ import annotations

import logging
import re
from typing import Dict, List, Tuple

from ..core.presets import PresetLoadError, PresetRegistry

logger = logging.getLogger(__name__)

PRESET_ID_PATTERN = re.compile(r"[a-zA-Z0-9_-]+")


class PresetService:
    def __init__(self, registry: PresetRegistry | None = None) -> None:
        self._registry = registry or PresetRegistry()

    def list_presets(self) -> List[Dict[str, object]]:
        return [preset.summary() for preset in self._registry.list_presets()]

    def get_preset(self, name: str) -> Tuple[Dict[str, object], int]:
        if not PRESET_ID_PATTERN.fullmatch(name or ""):
            return {"error": "Invalid preset name."}, 400
        try:
            preset = self._registry.get_preset(name)
        except FileNotFoundError:
            return {"error": "Preset not found."}, 404
        except PresetLoadError as exc:
            logger.error("Preset %s could not be loaded: %s", name, exc)
            return {"error": "Preset could not be loaded."}, 500
        return preset.to_dict(), 200
