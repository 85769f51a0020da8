# ==============================================================================
# Файл: terrain_engine/algorithms/terrain/__init__.py
# Назначение: Слои рельефа и их сборка в итоговую высоту.
# ==============================================================================
from __future__ import annotations

from .biome import region_mask, flatness_factor, mountain_mask
from .ridges import ridge_terrain
from .erosion import erosion_factor, apply_erosion
from .rivers import river_channels
from .combiner import base_terrain, altitude_offset, raw_height, safety_clamp, combine_height

__all__ = [
    "region_mask", "flatness_factor", "mountain_mask",
    "ridge_terrain",
    "erosion_factor", "apply_erosion",
    "river_channels",
    "base_terrain", "altitude_offset", "raw_height", "safety_clamp", "combine_height",
]
