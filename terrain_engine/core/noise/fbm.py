# ==============================================================================
# Файл: terrain_engine/core/noise/fbm.py
# Назначение: Фрактальное броуновское движение (fBm) поверх NoiseField.
# ==============================================================================
from __future__ import annotations

from .noise_field import NoiseField


def fbm(
        field: NoiseField,
        x: float,
        y: float,
        octaves: int = 6,
        frequency: float = 0.0005,
        persistence: float = 0.5,
        lacunarity: float = 2.0,
        amplitude: float = 1.0,
        offset_x: float = 0.0,
        offset_y: float = 0.0,
) -> float:
    """
    Складывает `octaves` октав шума: частота растёт в `lacunarity` раз,
    амплитуда падает в `persistence` раз на каждой октаве.

    Сумма делится на сумму использованных амплитуд, поэтому результат остаётся
    примерно в [-1, 1] при любом числе октав (и параметр `amplitude` на выход
    не влияет, только на веса октав внутри суммы).
    Если октав нет или сумма амплитуд не положительна, возвращается 0.
    """
    value = 0.0
    amp = amplitude
    freq = frequency
    max_value = 0.0

    for _ in range(int(octaves)):
        value += field.sample(x * freq + offset_x, y * freq + offset_y) * amp
        max_value += amp
        freq *= lacunarity
        amp *= persistence

    return value / max_value if max_value > 0 else 0.0


def fbm_or_sample(
        field: NoiseField,
        x: float,
        y: float,
        enabled: bool,
        octaves: int,
        frequency: float,
        persistence: float,
        lacunarity: float,
        amplitude: float = 1.0,
        offset: float = 0.0,
        fallback_gain: float = 1.0,
) -> float:
    """
    Слой рельефа: fBm, либо (если fBm выключен) одна выборка шума на базовой
    частоте, умноженная на `fallback_gain`. Смещение одинаково по обеим осям.
    """
    if enabled:
        return fbm(field, x, y, octaves, frequency, persistence, lacunarity, amplitude, offset, offset)
    return field.sample(x * frequency + offset, y * frequency + offset) * fallback_gain
