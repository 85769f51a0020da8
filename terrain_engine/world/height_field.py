# ==============================================================================
# Файл: terrain_engine/world/height_field.py
# Назначение: Неизменяемое поле высот: 4 шумовых поля + параметры рельефа.
# ==============================================================================
from __future__ import annotations

import logging
from typing import Any

from ..algorithms.terrain.combiner import combine_height
from ..core.noise import NoiseFields, derive_noise_fields
from ..core.preset import TerrainParameters

logger = logging.getLogger(__name__)


class HeightField:
    """
    Чистая функция высоты height(x, z) для одного набора параметров.

    Шумовые поля создаются в конструкторе из `params.seed` и дальше не меняются,
    поэтому один экземпляр можно читать из любого числа потоков.
    Смена параметров = новый HeightField (см. `with_params`).
    """

    __slots__ = ("_params", "_fields")

    def __init__(self, params: TerrainParameters | None = None):
        self._params = params if params is not None else TerrainParameters()
        self._fields: NoiseFields = derive_noise_fields(self._params.seed)
        logger.info(
            f"HeightField '{self._params.id}': seed={self._params.seed}, "
            f"scale={self._params.height_scale}, fbm={'on' if self._params.fbm_enabled else 'off'}"
        )

    @property
    def params(self) -> TerrainParameters:
        return self._params

    @property
    def fields(self) -> NoiseFields:
        return self._fields

    @property
    def seed(self) -> int:
        return self._params.seed

    def height(self, x: float, z: float) -> float:
        return combine_height(self._fields, self._params, float(x), float(z))

    def with_params(self, **changes: Any) -> "HeightField":
        """Новый HeightField с изменёнными параметрами; текущий не трогается."""
        return HeightField(self._params.replace(**changes))

    def __repr__(self) -> str:
        return f"HeightField(id={self._params.id!r}, seed={self._params.seed})"
