# ==============================================================================
# Файл: terrain_engine/world/chunk_manager.py
# Назначение: Какие чанки видимы с позиции наблюдателя и с каким LOD.
# ВЕРСИЯ 1.0: Набор видимых чанков неизменяем и подменяется одной ссылкой;
# если ни состав, ни LOD не поменялись, возвращается тот же объект.
# ==============================================================================
from __future__ import annotations

import logging
import math
import threading
from typing import Dict, Optional, Sequence, Tuple

import numpy as np

from ..core import constants as C
from ..core.preset import TerrainParameters
from ..core.types import Chunk, ChunkBounds, ChunkKey, ChunkState, VisibleSet
from ..numerics.chunk_kernels import box_distances, chunk_grid_origins, classify_chunks

logger = logging.getLogger(__name__)


def _viewer_xz(viewer_position: Sequence[float]) -> Tuple[float, float]:
    # (x, z) или (x, y, z) как у камеры хоста; высота наблюдателя не учитывается
    if len(viewer_position) >= 3:
        return float(viewer_position[0]), float(viewer_position[2])
    return float(viewer_position[0]), float(viewer_position[1])


class ChunkManager:
    """
    Сетка чанков мира и их отбор по расстоянию до наблюдателя.

    Мир - квадрат world_size x world_size с центром в начале координат,
    разбитый на ceil(world_size / chunk_size) чанков на сторону. Чанк (ix, iz)
    начинается в (ix * chunk_size - world_size / 2, iz * chunk_size - world_size / 2).

    `tick()` вызывается хостом раз в кадр (или реже); `visible` можно читать
    из любого потока без блокировок.
    """

    def __init__(self, params: TerrainParameters | None = None):
        self.params = params if params is not None else TerrainParameters()
        p = self.params

        per_side, segments = self._grid_ratios(p)
        self.degenerate = per_side is None
        if self.degenerate:
            # кривые размеры: один чанк, планировщик не должен падать
            logger.debug(
                f"ChunkManager: degenerate grid (chunk_size={p.chunk_size!r}, "
                f"world_size={p.world_size!r}), falling back to a single chunk"
            )
            self.chunks_per_side = 1
            self.segments_per_chunk = C.MIN_SEGMENTS_PER_CHUNK
        else:
            self.chunks_per_side = max(1, int(math.ceil(per_side)))
            self.segments_per_chunk = max(C.MIN_SEGMENTS_PER_CHUNK, int(math.floor(segments)))
        self._ix, self._iz, self._min_x, self._min_z = chunk_grid_origins(
            self.chunks_per_side, p.chunk_size, p.world_size
        )

        self._lock = threading.Lock()
        self._visible = VisibleSet()
        logger.debug(
            f"ChunkManager: {self.chunks_per_side}x{self.chunks_per_side} chunks of {p.chunk_size} m, "
            f"{self.segments_per_chunk} segments/chunk, chunks={'on' if p.enable_chunks else 'off'}, "
            f"lod={'on' if p.enable_lod else 'off'}"
        )

    @staticmethod
    def _grid_ratios(p: TerrainParameters) -> Tuple[Optional[float], float]:
        """(чанков на сторону, сегментов на чанк) или (None, 0) для вырожденной сетки."""
        chunk, world = float(p.chunk_size), float(p.world_size)
        if not (math.isfinite(chunk) and math.isfinite(world) and chunk > 0.0 and world > 0.0):
            return None, 0.0
        per_side = world / chunk
        segments = p.segments * chunk / world
        if not (math.isfinite(per_side) and math.isfinite(segments)):
            return None, 0.0
        return per_side, segments

    # ------------------------------------------------------------------ geometry

    @property
    def visible(self) -> VisibleSet:
        return self._visible

    def chunk_bounds(self, cx: int, cz: int) -> ChunkBounds:
        p = self.params
        half = p.world_size * 0.5
        min_x = cx * p.chunk_size - half
        min_z = cz * p.chunk_size - half
        return ChunkBounds(min_x, min_z, min_x + p.chunk_size, min_z + p.chunk_size)

    def world_bounds(self) -> ChunkBounds:
        half = self.params.world_size * 0.5
        return ChunkBounds(-half, -half, half, half)

    def chunk_key_at(self, x: float, z: float) -> Optional[ChunkKey]:
        """Ключ чанка, содержащего точку, или None за пределами сетки."""
        p = self.params
        if self.degenerate or not (math.isfinite(x) and math.isfinite(z)):
            return None
        half = p.world_size * 0.5
        cx = int(math.floor((x + half) / p.chunk_size))
        cz = int(math.floor((z + half) / p.chunk_size))
        if 0 <= cx < self.chunks_per_side and 0 <= cz < self.chunks_per_side:
            return cx, cz
        return None

    def lod_for_distance(self, distance: float) -> int:
        """Сегменты на сторону: ступенчатая невозрастающая функция расстояния."""
        p = self.params
        full = self.segments_per_chunk
        if not p.enable_lod or distance < p.lod_near:
            return full
        if distance < p.lod_medium:
            return full // C.LOD_MEDIUM_DIVISOR
        return full // C.LOD_FAR_DIVISOR

    # ------------------------------------------------------------------ evaluation

    def evaluate(self, viewer_position: Sequence[float]) -> Dict[ChunkKey, Tuple[ChunkBounds, int, float]]:
        """
        Кандидаты без состояния: {(cx, cz): (bounds, lod, distance)}.
        Ничего не меняет; `tick()` строит по ним новый VisibleSet.
        """
        p = self.params
        vx, vz = _viewer_xz(viewer_position)

        if not p.enable_chunks:
            bounds = self.world_bounds()
            dist = float(box_distances(
                np.array([bounds.min_x]), np.array([bounds.min_z]), float(p.world_size), vx, vz
            )[0])
            return {(0, 0): (bounds, int(p.segments), dist)}

        dist = box_distances(self._min_x, self._min_z, float(p.chunk_size), vx, vz)
        visible, lods = classify_chunks(
            dist, float(p.view_distance), bool(p.enable_view_distance_culling),
            bool(p.enable_lod), int(self.segments_per_chunk),
            float(p.lod_near), float(p.lod_medium),
            C.LOD_MEDIUM_DIVISOR, C.LOD_FAR_DIVISOR,
        )

        out: Dict[ChunkKey, Tuple[ChunkBounds, int, float]] = {}
        for i in np.flatnonzero(visible):
            cx, cz = int(self._ix[i]), int(self._iz[i])
            out[(cx, cz)] = (self.chunk_bounds(cx, cz), int(lods[i]), float(dist[i]))
        return out

    def tick(self, viewer_position: Sequence[float]) -> VisibleSet:
        """
        Пересчитывает видимый набор. Новые чанки и чанки со сменившимся LOD
        получают PENDING, остальные сохраняют своё состояние. Если состав и
        LOD совпали с текущими, возвращается прежний объект (расстояния в нём
        остаются от последней замены).
        """
        candidates = self.evaluate(viewer_position)

        with self._lock:
            current = self._visible
            unchanged = (
                len(candidates) == len(current.chunks)
                and all(
                    key in current.chunks and current.chunks[key].lod == lod
                    for key, (_, lod, _) in candidates.items()
                )
            )
            if unchanged:
                return current

            chunks: Dict[ChunkKey, Chunk] = {}
            for (cx, cz), (bounds, lod, dist) in candidates.items():
                prev = current.chunks.get((cx, cz))
                state = prev.state if prev is not None and prev.lod == lod else ChunkState.PENDING
                chunks[(cx, cz)] = Chunk(cx, cz, bounds, lod, dist, state)

            evicted = {
                key: chunk.with_state(ChunkState.STALE)
                for key, chunk in current.chunks.items()
                if key not in chunks
            }

            new_set = VisibleSet(chunks, current.generation + 1, evicted)
            self._visible = new_set

        logger.debug(
            f"Visible set #{new_set.generation}: {len(new_set)} chunks, "
            f"{len(new_set.pending())} pending, {len(evicted)} evicted"
        )
        return new_set

    def mark_materialized(self, cx: int, cz: int, lod: Optional[int] = None) -> bool:
        """
        Отмечает видимый чанк как построенный. Если передан `lod` и он уже не
        совпадает с текущим LOD чанка (наблюдатель успел сдвинуться), ничего
        не делает. Возвращает True, если набор был заменён.
        """
        with self._lock:
            current = self._visible
            chunk = current.chunks.get((cx, cz))
            if chunk is None or chunk.state is ChunkState.MATERIALIZED:
                return False
            if lod is not None and chunk.lod != lod:
                return False

            chunks = dict(current.chunks)
            chunks[(cx, cz)] = chunk.with_state(ChunkState.MATERIALIZED)
            self._visible = VisibleSet(chunks, current.generation, current.evicted)
        return True
