# ==============================================================================
# Файл: terrain_engine/algorithms/terrain/biome.py
# Назначение: Макро-маска регионов (0..1): где равнины, а где горы.
# ==============================================================================
from __future__ import annotations

from ...core import constants as C
from ...core.noise import NoiseFields
from ...numerics.scalar import safe_div, safe_pow


def region_mask(fields: NoiseFields, x: float, z: float) -> float:
    """Две низкочастотные выборки (0.65 / 0.35), перенесённые из [-1, 1] в [0, 1]."""
    f = C.BIOME_FREQUENCY
    f2 = f * C.BIOME_SECOND_FREQ_MUL
    n1 = fields[0].sample(x * f, z * f)
    n2 = fields[1].sample(x * f2 + C.BIOME_SECOND_OFFSET, z * f2 + C.BIOME_SECOND_OFFSET)
    return (n1 * C.BIOME_WEIGHT_PRIMARY + n2 * C.BIOME_WEIGHT_SECONDARY) * 0.5 + 0.5


def flatness_factor(mask: float, threshold: float, smooth: float) -> float:
    """
    1.0 в "гористых" зонах; ниже порога плавно уходит к (1 - smooth).
    Чем больше `smooth`, тем сильнее давим рельеф на равнинах.
    """
    if mask < threshold:
        t = safe_div(mask, threshold)
        return safe_pow(t, C.FLATNESS_POWER) * smooth + (1.0 - smooth)
    return 1.0


def mountain_mask(mask: float, threshold: float) -> float:
    """max(0, mask - threshold) ^ 1.3: хребты только выше порога и без резкой ступени."""
    return safe_pow(max(0.0, mask - threshold), C.MOUNTAIN_MASK_POWER)
