# ==============================================================================
# Файл: terrain_engine/algorithms/terrain/ridges.py
# Назначение: Острые горные хребты из инвертированного |fBm|.
# ==============================================================================
from __future__ import annotations

import math

from ...core import constants as C
from ...core.noise import NoiseFields, fbm_or_sample
from ...core.preset import TerrainParameters
from ...numerics.scalar import safe_pow


def _ridge(value: float, sharpness: float) -> float:
    # нули шума -> линии хребтов; две степени: "острота" и фиксированное смягчение
    r = 1.0 - abs(value)
    r = safe_pow(r, max(C.RIDGE_MIN_SHARPNESS, sharpness))
    return safe_pow(r, C.RIDGE_SOFTEN_POWER)


def ridge_terrain(
        fields: NoiseFields, params: TerrainParameters, x: float, z: float, m_mask: float
) -> float:
    """
    Смесь двух слоёв хребтов (75 / 25), умноженная на mountain_intensity и на
    маску гор. Где маска почти нулевая, слои не считаем вовсе.
    """
    if not m_mask > C.MOUNTAIN_MASK_MIN:
        return 0.0

    oct_ = params.fbm_octaves
    pers = params.fbm_persistence
    lac = params.fbm_lacunarity
    on = params.fbm_enabled
    f1 = C.RIDGE_FREQUENCY
    f2 = C.RIDGE_FREQUENCY * C.RIDGE_SECOND_FREQ_MUL

    n1 = fbm_or_sample(
        fields[2], x, z, on,
        int(math.floor(oct_ * C.RIDGE_PRIMARY_OCTAVES_MUL)), f1,
        pers * C.RIDGE_PRIMARY_PERSISTENCE_MUL, lac,
    )
    n2 = fbm_or_sample(
        fields[3], x, z, on,
        int(math.floor(oct_ * C.RIDGE_SECOND_OCTAVES_MUL)), f2,
        pers * C.RIDGE_SECOND_PERSISTENCE_MUL, lac,
        offset=C.RIDGE_SECOND_OFFSET,
    )

    r1 = _ridge(n1, params.ridge_sharpness * C.RIDGE_PRIMARY_SHARPNESS_MUL)
    r2 = _ridge(n2, params.ridge_sharpness * C.RIDGE_SECOND_SHARPNESS_MUL)

    blend = r1 * C.RIDGE_WEIGHT_PRIMARY + r2 * C.RIDGE_WEIGHT_SECONDARY
    return safe_pow(blend, C.RIDGE_BLEND_POWER) * params.mountain_intensity * m_mask
