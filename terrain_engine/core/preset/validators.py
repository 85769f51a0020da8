# ========================
# file: terrain_engine/core/preset/validators.py
# ========================
from __future__ import annotations
import math
from typing import Any, Dict

from .errors import ValidationError
from .model import FIELD_NAMES

_BOOL_KEYS = ("fbm_enabled", "enable_view_distance_culling", "enable_chunks", "enable_lod")
_INT_KEYS = ("seed", "fbm_octaves", "segments", "version")

# Ключи с диапазоном [0, 1]
_UNIT_KEYS = (
    "flatness_threshold",
    "flatness_smooth",
    "erosion_amount",
    "erosion_softness",
    "smooth_lower_planes",
    "altitude_variation",
    "river_amount",
    "river_width",
)


def _require(cond: bool, msg: str) -> None:
    if not cond:
        raise ValidationError(msg)


def _num(cfg: Dict[str, Any], key: str) -> float:
    value = cfg.get(key)
    _require(
        isinstance(value, (int, float)) and not isinstance(value, bool),
        f"{key} must be a number, got {value!r}",
    )
    _require(math.isfinite(float(value)), f"{key} must be finite")
    return float(value)


def validate_dict(cfg: Dict[str, Any]) -> None:
    """Conservative validation for snake_case terrain preset dicts.

    Движок сам по себе параметры не проверяет (гарантирует только
    ограниченность высоты). Проверка живёт здесь, на этапе загрузки.
    Raises ValidationError on the first failing check.
    """
    unknown = sorted(set(cfg) - set(FIELD_NAMES))
    _require(not unknown, f"Unknown preset keys: {', '.join(unknown)}")

    _require(isinstance(cfg.get("id"), str) and cfg["id"], "Preset.id must be non-empty string")

    for key in _BOOL_KEYS:
        _require(isinstance(cfg.get(key), bool), f"{key} must be bool")
    for key in _INT_KEYS:
        value = cfg.get(key)
        _require(
            isinstance(value, int) and not isinstance(value, bool),
            f"{key} must be int, got {value!r}",
        )

    for key in _UNIT_KEYS:
        v = _num(cfg, key)
        _require(0.0 <= v <= 1.0, f"{key} must be in [0, 1]")

    _require(_num(cfg, "height_scale") > 0.0, "height_scale must be > 0")
    for key in ("mountain_intensity", "valley_depth", "detail_amount"):
        _require(_num(cfg, key) >= 0.0, f"{key} must be >= 0")
    _require(_num(cfg, "ridge_sharpness") > 0.0, "ridge_sharpness must be > 0")

    # fBm
    _require(0 <= cfg["fbm_octaves"] <= 16, "fbm_octaves must be in [0, 16]")
    _require(0.0 < _num(cfg, "fbm_persistence") <= 1.0, "fbm_persistence must be in (0, 1]")
    _require(_num(cfg, "fbm_lacunarity") > 0.0, "fbm_lacunarity must be > 0")
    _require(_num(cfg, "fbm_base_frequency") > 0.0, "fbm_base_frequency must be > 0")

    _require(_num(cfg, "river_falloff") > 0.0, "river_falloff must be > 0")

    # Чанки / LOD
    _require(_num(cfg, "chunk_size") > 0.0, "chunk_size must be > 0")
    _require(_num(cfg, "world_size") > 0.0, "world_size must be > 0")
    _require(cfg["segments"] >= 1, "segments must be >= 1")
    _require(_num(cfg, "view_distance") > 0.0, "view_distance must be > 0")
    near, medium, far = _num(cfg, "lod_near"), _num(cfg, "lod_medium"), _num(cfg, "lod_far")
    _require(0.0 <= near <= medium <= far, "LOD distances must satisfy 0 <= lod_near <= lod_medium <= lod_far")
