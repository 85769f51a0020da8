# ==============================================================================
# Файл: terrain_engine/algorithms/terrain/combiner.py
# Назначение: Единый конвейер высоты: база, эрозия, высоты, хребты, плато,
# долины, холмы, детали, реки, масштаб и защитный clamp.
# ВЕРСИЯ 1.0: Порядок шагов фиксирован, последующие шаги зависят от величины
# предыдущих. Все "варианты" рельефа (только хребты, хребты+эрозия+реки, ...)
# выражаются параметрами (erosion_amount=0, river_amount=0, ...).
# ==============================================================================
from __future__ import annotations

import logging
import math

from ...core import constants as C
from ...core.noise import NoiseFields, fbm_or_sample
from ...core.preset import TerrainParameters
from ...numerics.scalar import lerp
from .biome import flatness_factor, mountain_mask, region_mask
from .erosion import apply_erosion, erosion_factor
from .ridges import ridge_terrain
from .rivers import river_channels

logger = logging.getLogger(__name__)


def base_terrain(fields: NoiseFields, params: TerrainParameters, x: float, z: float) -> float:
    """Два слоя fBm (0.65 / 0.35). При выключенном fBm - по одной выборке на 0.0005."""
    if params.fbm_enabled:
        f = params.fbm_base_frequency
        octaves = params.fbm_octaves
    else:
        f = C.BASE_FALLBACK_FREQUENCY
        octaves = 1
    b1 = fbm_or_sample(
        fields[0], x, z, params.fbm_enabled,
        octaves, f, params.fbm_persistence, params.fbm_lacunarity,
        offset=C.BASE_PRIMARY_OFFSET,
    )
    b2 = fbm_or_sample(
        fields[1], x, z, params.fbm_enabled,
        int(math.floor(octaves * C.BASE_SECONDARY_OCTAVES_MUL)), f * C.BASE_SECONDARY_FREQ_MUL,
        params.fbm_persistence, params.fbm_lacunarity,
        offset=C.BASE_SECONDARY_OFFSET,
    )
    return b1 * C.BASE_WEIGHT_PRIMARY + b2 * C.BASE_WEIGHT_SECONDARY


def altitude_offset(fields: NoiseFields, params: TerrainParameters, x: float, z: float) -> float:
    """Региональные возвышенности / низины: amp * noise * 1.4 - 0.75."""
    f = C.ALTITUDE_FREQUENCY
    n = fields[3].sample(x * f + C.ALTITUDE_OFFSET, z * f + C.ALTITUDE_OFFSET)
    return params.altitude_variation * n * C.ALTITUDE_GAIN - C.ALTITUDE_BIAS


def raw_height(fields: NoiseFields, params: TerrainParameters, x: float, z: float) -> float:
    """Шаги 1-10 без защитного clamp. Может вернуть inf/nan."""
    oct_ = params.fbm_octaves
    pers = params.fbm_persistence
    lac = params.fbm_lacunarity
    on = params.fbm_enabled

    mask = region_mask(fields, x, z)
    flat = flatness_factor(mask, params.flatness_threshold, params.flatness_smooth)

    # 1. база (+ эрозия)
    base = base_terrain(fields, params, x, z)
    if params.erosion_amount > 0:
        base = apply_erosion(base, erosion_factor(fields, params, x, z), params.erosion_amount)

    # 2. возвышенности / низины
    base += altitude_offset(fields, params, x, z)

    # 3. хребты
    ridges = ridge_terrain(fields, params, x, z, mountain_mask(mask, params.flatness_threshold))

    # 4. сглаживание низин: квадрат/куб гасит мелкое около нуля, крупное оставляет
    height = base + ridges
    height = lerp(height * height, height * height * height, params.smooth_lower_planes)

    # 5. долины
    if params.valley_depth > 0:
        f = C.VALLEY_FREQUENCY
        n = fields[2].sample(x * f + C.VALLEY_OFFSET, z * f + C.VALLEY_OFFSET)
        height += min(0.0, n * params.valley_depth * C.VALLEY_DEPTH_MUL)

    # 6. холмы
    hills = fbm_or_sample(
        fields[3], x, z, on,
        int(math.floor(oct_ * C.HILL_OCTAVES_MUL)), C.HILL_FREQUENCY,
        pers * C.HILL_PERSISTENCE_MUL, lac,
        offset=C.HILL_OFFSET,
    )
    height += hills * C.HILL_AMOUNT * flat

    # 7. мелкие детали
    detail = fbm_or_sample(
        fields[1], x, z, on,
        int(math.floor(oct_ * C.DETAIL_OCTAVES_MUL)), C.DETAIL_FREQUENCY,
        pers * C.DETAIL_PERSISTENCE_MUL, lac,
        offset=C.DETAIL_OFFSET,
    )
    height += detail * params.detail_amount * C.DETAIL_AMOUNT_MUL * flat

    # 8. общее выравнивание равнин
    height *= flat

    # 9. реки
    if params.river_amount > 0:
        height -= river_channels(fields, params, x, z) * params.river_amount

    # 10. масштаб
    return height * params.height_scale


def safety_clamp(value: float) -> float:
    """Не-конечное значение или |h| > 10000 -> 0."""
    if not math.isfinite(value) or abs(value) > C.HEIGHT_SAFETY_LIMIT:
        return 0.0
    return value


def combine_height(fields: NoiseFields, params: TerrainParameters, x: float, z: float) -> float:
    """
    Итоговая высота в точке (x, z). Никогда не бросает исключений: любое
    вырождение арифметики (кривые параметры, огромные координаты) даёт 0.
    """
    try:
        value = raw_height(fields, params, x, z)
    except (OverflowError, ZeroDivisionError, ValueError) as e:
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Height at (%r, %r) degenerated: %s", x, z, e)
        return 0.0

    result = safety_clamp(value)
    if result != value and logger.isEnabledFor(logging.DEBUG):
        logger.debug("Safety clamp tripped at (%r, %r): raw=%r", x, z, value)
    return result
