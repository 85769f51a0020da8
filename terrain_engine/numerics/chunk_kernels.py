# ======================================================================
# Файл: terrain_engine/numerics/chunk_kernels.py
# Назначение: Быстрые ядра менеджера чанков: расстояние до AABB чанка,
# видимость и уровень детализации. Каждый чанк независим -> prange.
# ======================================================================
from __future__ import annotations

import math

import numpy as np
from numba import njit, prange


def chunk_grid_origins(chunks_per_side: int, chunk_size: float, world_size: float):
    """
    Минимальные углы всех чанков сетки (по строкам: iz, затем ix).
    Возвращает (ix, iz, min_x, min_z) как плоские массивы.
    """
    n = int(chunks_per_side)
    idx = np.arange(n, dtype=np.int64)
    iz, ix = np.meshgrid(idx, idx, indexing="ij")
    ix = ix.ravel()
    iz = iz.ravel()
    half = world_size * 0.5
    min_x = ix.astype(np.float64) * chunk_size - half
    min_z = iz.astype(np.float64) * chunk_size - half
    return ix, iz, min_x, min_z


@njit(cache=True, parallel=True)
def box_distances(min_x: np.ndarray, min_z: np.ndarray, size: float,
                  vx: float, vz: float) -> np.ndarray:
    # расстояние от точки до ближайшей точки квадрата; внутри квадрата = 0
    n = min_x.shape[0]
    out = np.empty(n, dtype=np.float64)
    if not (math.isfinite(vx) and math.isfinite(vz)):
        # наблюдатель "нигде": все чанки бесконечно далеко
        out[:] = math.inf
        return out
    for i in prange(n):
        x0 = min_x[i]
        z0 = min_z[i]
        dx = max(x0 - vx, 0.0, vx - (x0 + size))
        dz = max(z0 - vz, 0.0, vz - (z0 + size))
        out[i] = math.sqrt(dx * dx + dz * dz)
    return out


@njit(cache=True, parallel=True)
def classify_chunks(distances: np.ndarray, view_distance: float, culling: bool,
                    lod_enabled: bool, full: int, lod_near: float, lod_medium: float,
                    medium_div: int, far_div: int):
    """
    Видимость (distance < view_distance, либо всё при выключенном отсечении)
    и сегменты на сторону: full / full//medium_div / full//far_div.
    """
    n = distances.shape[0]
    visible = np.empty(n, dtype=np.bool_)
    lods = np.empty(n, dtype=np.int64)
    for i in prange(n):
        d = distances[i]
        visible[i] = (not culling) or d < view_distance
        if not lod_enabled or d < lod_near:
            lods[i] = full
        elif d < lod_medium:
            lods[i] = full // medium_div
        else:
            lods[i] = full // far_div
    return visible, lods
