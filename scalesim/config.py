from __future__ import annotations

import os


def _optional_int(value: str | None) -> int | None:
    if value is None or value.strip() == "":
        return None
    return int(value)


class Config:
    LOG_LEVEL = os.getenv("SCALESIM_LOG_LEVEL", "INFO")
    SIMULATION_SEED = _optional_int(os.getenv("SCALESIM_SEED"))
    LATENCY_MODE = os.getenv("SCALESIM_LATENCY_MODE", "type_filter")
    MULTIPLIER_MODE = os.getenv("SCALESIM_MULTIPLIER_MODE", "first")
    STRICT_TOPOLOGY = os.getenv("SCALESIM_STRICT_TOPOLOGY", "false").lower() == "true"
