# ==============================================================================
# Файл: terrain_engine/algorithms/terrain/erosion.py
# Назначение: Дешёвая "фейковая" эрозия: smoothstep + pingpong поверх fBm.
# Настоящей гидравлики тут нет, только чередование полос долина/гребень.
# ==============================================================================
from __future__ import annotations

from ...core import constants as C
from ...core.noise import NoiseFields, fbm_or_sample
from ...core.preset import TerrainParameters
from ...numerics.scalar import clamp, lerp, pingpong, safe_pow, smoothstep


def erosion_factor(fields: NoiseFields, params: TerrainParameters, x: float, z: float) -> float:
    """Маска эрозии >= 0 (обычно в [0, 0.7])."""
    n = fbm_or_sample(
        fields[2], x, z, params.fbm_enabled,
        C.EROSION_OCTAVES, params.fbm_base_frequency,
        params.fbm_persistence * C.EROSION_PERSISTENCE_MUL, C.EROSION_LACUNARITY,
        amplitude=C.EROSION_AMPLITUDE,
        offset=C.EROSION_OFFSET,
        fallback_gain=C.EROSION_AMPLITUDE,
    )
    e = smoothstep(0.0, 1.0, n)
    e = safe_pow(e, 1.0 + params.erosion_softness)
    e = pingpong(e * C.EROSION_FOLD_SCALE, C.EROSION_FOLD_LENGTH)
    return clamp(e - C.EROSION_BIAS, 0.0, C.EROSION_CLAMP_MAX)


def apply_erosion(base: float, erosion: float, amount: float) -> float:
    """
    Множитель lerp(1, erosion, amount * base): чем выше база, тем сильнее эффект,
    плоские участки (base ~ 0) почти не трогаются.
    """
    return base * lerp(1.0, erosion, amount * base)
