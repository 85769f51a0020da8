# ========================
# file: terrain_engine/core/preset/defaults.py
# ========================
from __future__ import annotations
from typing import Any, Dict

from .model import TerrainParameters

# Strict python-dict mirror of the "BOTW v9" terrain (snake_case keys).
# Собирается из дефолтов dataclass, чтобы не было двух источников правды.
DEFAULT_TERRAIN_PRESET: Dict[str, Any] = TerrainParameters().to_dict()
