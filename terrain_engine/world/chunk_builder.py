# ==============================================================================
# Файл: terrain_engine/world/chunk_builder.py
# Назначение: Сетка высот чанка по его LOD + LRU-кэш и пакетная сборка в потоках.
# ==============================================================================
from __future__ import annotations

import concurrent.futures
import logging
import threading
import time
from collections import OrderedDict
from typing import Dict, Iterable, Optional, Tuple

import numpy as np

from ..core.types import Chunk, ChunkKey
from .chunk_manager import ChunkManager
from .query import HeightmapQuery

logger = logging.getLogger(__name__)

CacheKey = Tuple[int, int, int]


def chunk_vertex_coords(chunk: Chunk) -> Tuple[np.ndarray, np.ndarray]:
    """
    Мировые координаты вершин сетки: (lod + 1) точек на ось, шаг size / lod.
    Крайние вершины лежат ровно на границах, поэтому соседние чанки сшиваются.
    """
    n = max(1, int(chunk.lod))
    b = chunk.bounds
    xs = np.linspace(b.min_x, b.max_x, n + 1, dtype=np.float64)
    zs = np.linspace(b.min_z, b.max_z, n + 1, dtype=np.float64)
    return xs, zs


def build_chunk_heights(query: HeightmapQuery, chunk: Chunk) -> np.ndarray:
    """Карта высот чанка формы (lod + 1, lod + 1): строка = z, столбец = x."""
    xs, zs = chunk_vertex_coords(chunk)
    return query.sample_grid(xs, zs)


class ChunkHeightBuilder:
    """
    Строит сетки высот для видимых чанков.

    Кэш ключуется (cx, cz, lod): при смене LOD чанк пересчитывается, при
    возврате к прежнему LOD берётся из кэша. Если передан `manager`, каждый
    построенный чанк отмечается в нём как MATERIALIZED.
    """

    def __init__(self, query: HeightmapQuery, manager: Optional[ChunkManager] = None,
                 capacity: int = 64):
        self.query = query
        self.manager = manager
        self.capacity = max(1, int(capacity))
        self._cache: "OrderedDict[CacheKey, np.ndarray]" = OrderedDict()
        self._lock = threading.Lock()

    def _lru_put(self, key: CacheKey, value: np.ndarray) -> None:
        with self._lock:
            self._cache[key] = value
            self._cache.move_to_end(key)
            while len(self._cache) > self.capacity:
                self._cache.popitem(last=False)

    def _lru_get(self, key: CacheKey) -> Optional[np.ndarray]:
        with self._lock:
            if key in self._cache:
                self._cache.move_to_end(key)
                return self._cache[key]
        return None

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()

    def discard(self, cx: int, cz: int) -> int:
        """Убирает из кэша все LOD чанка (например, для evicted). Возвращает число удалённых."""
        with self._lock:
            keys = [k for k in self._cache if k[0] == cx and k[1] == cz]
            for k in keys:
                del self._cache[k]
        return len(keys)

    def build(self, chunk: Chunk) -> np.ndarray:
        key = (chunk.cx, chunk.cz, int(chunk.lod))
        grid = self._lru_get(key)
        if grid is None:
            t0 = time.perf_counter()
            grid = build_chunk_heights(self.query, chunk)
            grid.setflags(write=False)
            self._lru_put(key, grid)
            logger.debug(
                f"Chunk ({chunk.cx},{chunk.cz}) lod={chunk.lod} built in "
                f"{(time.perf_counter() - t0) * 1000:.1f} ms"
            )
        if self.manager is not None:
            self.manager.mark_materialized(chunk.cx, chunk.cz, chunk.lod)
        return grid

    def build_many(self, chunks: Iterable[Chunk], max_workers: Optional[int] = None) -> Dict[ChunkKey, np.ndarray]:
        """Строит несколько чанков в пуле потоков. Ошибка любого чанка пробрасывается."""
        chunks = list(chunks)
        out: Dict[ChunkKey, np.ndarray] = {}
        if not chunks:
            return out

        with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as executor:
            future_to_key = {executor.submit(self.build, c): c.key for c in chunks}
            for future in concurrent.futures.as_completed(future_to_key):
                out[future_to_key[future]] = future.result()

        logger.debug(f"Built {len(out)} chunk grids (cache size {len(self)})")
        return out
