# ==============================================================================
# Файл: terrain_engine/core/noise/noise_field.py
# Назначение: Детерминированное 2D поле шума (OpenSimplex) с фиксированным сидом.
# ==============================================================================
from __future__ import annotations

import math
from typing import Tuple

from opensimplex import OpenSimplex

from ..constants import NOISE_SEED_OFFSETS


class NoiseField:
    """
    Сидированный источник 2D шума. Значения примерно в [-1, 1].

    Внутри только таблица перестановок OpenSimplex, которая строится один раз
    в конструкторе, поэтому экземпляр можно свободно делить между потоками.
    """

    __slots__ = ("_seed", "_gen")

    def __init__(self, seed: int):
        self._seed = int(seed)
        self._gen = OpenSimplex(seed=self._seed)

    @property
    def seed(self) -> int:
        return self._seed

    def sample(self, x: float, y: float) -> float:
        # inf/nan до OpenSimplex не доводим: там floor() бросает OverflowError
        if not (math.isfinite(x) and math.isfinite(y)):
            return float("nan")
        return float(self._gen.noise2(x, y))

    def __call__(self, x: float, y: float) -> float:
        return self.sample(x, y)

    def __repr__(self) -> str:
        return f"NoiseField(seed={self._seed})"


# Порядок полей фиксирован: 0 - база/биом, 1 - база/реки/детали, 2 - эрозия/хребты/долины, 3 - высоты/хребты/холмы
NoiseFields = Tuple[NoiseField, NoiseField, NoiseField, NoiseField]


def derive_noise_fields(seed: int) -> NoiseFields:
    """Четыре независимых поля от одного сида: seed, +1000, +2000, +3000."""
    s = int(seed)
    return tuple(NoiseField(s + off) for off in NOISE_SEED_OFFSETS)  # type: ignore[return-value]
