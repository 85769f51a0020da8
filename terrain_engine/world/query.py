# ==============================================================================
# Файл: terrain_engine/world/query.py
# Назначение: Точка входа для хоста: "какая высота в (x, z)?".
# Используется построителем сетки, размещением объектов, игроком и т.п.
# ==============================================================================
from __future__ import annotations

import numpy as np

from .height_field import HeightField


class HeightmapQuery:
    """
    Тонкая обёртка над HeightField.

    flip_z=True нужен хостам, у которых плоскость земли повёрнута так, что
    мировой +z соответствует -z рельефа: тогда запрос (x, z) читает высоту
    в (x, -z) и совпадает с тем, что нарисовано сеткой.
    """

    __slots__ = ("_field", "_flip_z")

    def __init__(self, height_field: HeightField, flip_z: bool = False):
        self._field = height_field
        self._flip_z = bool(flip_z)

    @property
    def height_field(self) -> HeightField:
        return self._field

    @property
    def flip_z(self) -> bool:
        return self._flip_z

    def height_at(self, x: float, z: float) -> float:
        if self._flip_z:
            z = -z
        return self._field.height(x, z)

    __call__ = height_at
    height = height_at

    def sample_grid(self, xs, zs) -> np.ndarray:
        """
        Высоты на прямоугольной сетке: результат формы (len(zs), len(xs)),
        строка = z, столбец = x. Тип float32, как у остальных карт высот.
        """
        xs = np.asarray(xs, dtype=np.float64).ravel()
        zs = np.asarray(zs, dtype=np.float64).ravel()
        out = np.empty((zs.size, xs.size), dtype=np.float32)
        for j, z in enumerate(zs):
            for i, x in enumerate(xs):
                out[j, i] = self.height_at(float(x), float(z))
        return out
