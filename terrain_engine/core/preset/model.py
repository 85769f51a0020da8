# ========================
# file: terrain_engine/core/preset/model.py
# ========================
from __future__ import annotations
from dataclasses import dataclass, fields, replace
from typing import Any, Dict

from .version import CURRENT_PRESET_VERSION


# Имена ключей, которые хост-приложение передаёт "как есть" (camelCase).
# Пара snake_case -> camelCase; обратный словарь строится ниже.
CAMEL_KEYS: Dict[str, str] = {
    "height_scale": "heightScale",
    "seed": "seed",
    "mountain_intensity": "mountainIntensity",
    "flatness_threshold": "flatnessThreshold",
    "flatness_smooth": "flatnessSmooth",
    "ridge_sharpness": "ridgeSharpness",
    "valley_depth": "valleyDepth",
    "detail_amount": "detailAmount",
    "fbm_enabled": "fbmEnabled",
    "fbm_octaves": "fbmOctaves",
    "fbm_persistence": "fbmPersistence",
    "fbm_lacunarity": "fbmLacunarity",
    "fbm_base_frequency": "fbmBaseFrequency",
    "erosion_amount": "erosionAmount",
    "erosion_softness": "erosionSoftness",
    "smooth_lower_planes": "smoothLowerPlanes",
    "altitude_variation": "altitudeVariation",
    "river_amount": "riverAmount",
    "river_width": "riverWidth",
    "river_falloff": "riverFalloff",
    "chunk_size": "chunkSize",
    "world_size": "worldSize",
    "segments": "segments",
    "view_distance": "viewDistance",
    "lod_near": "lodNear",
    "lod_medium": "lodMedium",
    "lod_far": "lodFar",
    "enable_view_distance_culling": "enableViewDistanceCulling",
    "enable_chunks": "enableChunks",
    "enable_lod": "enableLOD",
}
SNAKE_KEYS: Dict[str, str] = {v: k for k, v in CAMEL_KEYS.items()}


@dataclass(frozen=True)
class TerrainParameters:
    """
    Неизменяемый набор ручек рельефа. Один экземпляр на "мир".
    Изменение любого поля = новый рельеф: используйте `replace(...)`.
    """
    id: str = "terrain/botw_v9"
    version: int = CURRENT_PRESET_VERSION

    # --- высота / форма ---
    height_scale: float = 85.0
    seed: int = 24601
    mountain_intensity: float = 4.5
    flatness_threshold: float = 0.35
    flatness_smooth: float = 0.25
    ridge_sharpness: float = 1.8
    valley_depth: float = 0.4
    detail_amount: float = 0.04

    # --- fBm ---
    fbm_enabled: bool = True
    fbm_octaves: int = 6
    fbm_persistence: float = 0.5
    fbm_lacunarity: float = 2.0
    fbm_base_frequency: float = 0.0005

    # --- эрозия / плато / реки ---
    erosion_amount: float = 0.3
    erosion_softness: float = 0.4
    smooth_lower_planes: float = 0.6
    altitude_variation: float = 0.4
    river_amount: float = 0.2
    river_width: float = 0.48
    river_falloff: float = 0.3

    # --- чанки / LOD ---
    chunk_size: float = 500.0
    world_size: float = 2500.0
    segments: int = 512
    view_distance: float = 1200.0
    lod_near: float = 400.0
    lod_medium: float = 800.0
    lod_far: float = 1200.0
    enable_view_distance_culling: bool = True
    enable_chunks: bool = True
    enable_lod: bool = False

    def replace(self, **changes: Any) -> "TerrainParameters":
        return replace(self, **changes)

    def to_dict(self, camel: bool = False) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for f in fields(self):
            key = CAMEL_KEYS.get(f.name, f.name) if camel else f.name
            out[key] = getattr(self, f.name)
        return out


FIELD_NAMES = tuple(f.name for f in fields(TerrainParameters))
