# ==============================================================================
# Файл: terrain_engine/algorithms/terrain/rivers.py
# Назначение: Линейные русла рек (свёрнутый pingpong шум), только вычитаются.
# ==============================================================================
from __future__ import annotations

from ...core import constants as C
from ...core.noise import NoiseFields, fbm_or_sample
from ...core.preset import TerrainParameters
from ...numerics.scalar import clamp, lerp, pingpong, safe_div, smoothstep


def river_channels(fields: NoiseFields, params: TerrainParameters, x: float, z: float) -> float:
    """
    Глубина русла в [0, 0.5]; итоговая высота уменьшается на
    `river_channels(...) * river_amount`.
    """
    freq = params.fbm_base_frequency * C.RIVER_FREQ_MUL
    n = fbm_or_sample(
        fields[1], x, z, params.fbm_enabled,
        C.RIVER_OCTAVES, freq, C.RIVER_PERSISTENCE, C.RIVER_LACUNARITY,
        amplitude=C.RIVER_AMPLITUDE,
        offset=C.RIVER_OFFSET,
        fallback_gain=C.RIVER_AMPLITUDE,
    )

    r = (abs(n) - 0.5) * 2.0
    r = pingpong(r, C.RIVER_FOLD_LENGTH)

    width = lerp(params.river_width, C.RIVER_WIDTH_TARGET, C.RIVER_WIDTH_BLEND)
    falloff = params.river_falloff * C.RIVER_FALLOFF_MUL
    r = clamp(lerp(1.0, 0.0, safe_div(r - width, falloff)), 0.0, 1.0)
    return (1.0 - smoothstep(0.0, 1.0, r)) * C.RIVER_DEPTH_MUL
