# ==============================================================================
# Файл: terrain_engine/core/types.py
# Назначение: Типы данных менеджера чанков: границы, чанк, видимый набор.
# ==============================================================================
from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Iterator, Mapping, Optional, Tuple

ChunkKey = Tuple[int, int]


class ChunkState(str, Enum):
    """Жизненный цикл чанка в видимом наборе."""
    PENDING = "pending"            # нужно (пере)построить сетку
    MATERIALIZED = "materialized"  # сетка построена на текущем LOD
    STALE = "stale"                # вышел из набора, ресурсы можно освобождать


@dataclass(frozen=True)
class ChunkBounds:
    min_x: float
    min_z: float
    max_x: float
    max_z: float

    @property
    def size_x(self) -> float:
        return self.max_x - self.min_x

    @property
    def size_z(self) -> float:
        return self.max_z - self.min_z

    @property
    def center(self) -> Tuple[float, float]:
        return (self.min_x + self.max_x) * 0.5, (self.min_z + self.max_z) * 0.5

    def contains(self, x: float, z: float) -> bool:
        return self.min_x <= x <= self.max_x and self.min_z <= z <= self.max_z


@dataclass(frozen=True)
class Chunk:
    """Квадратный участок мира. `lod` = число сегментов сетки на сторону."""
    cx: int
    cz: int
    bounds: ChunkBounds
    lod: int
    distance: float = 0.0
    state: ChunkState = ChunkState.PENDING

    @property
    def key(self) -> ChunkKey:
        return self.cx, self.cz

    def with_state(self, state: ChunkState) -> "Chunk":
        return replace(self, state=state)


def _frozen(data: Optional[Mapping[ChunkKey, Chunk]]) -> Mapping[ChunkKey, Chunk]:
    return MappingProxyType(dict(data or {}))


@dataclass(frozen=True)
class VisibleSet:
    """
    Результат одного обновления менеджера чанков.

    Набор никогда не изменяется: менеджер подменяет ссылку целиком, поэтому
    читатель из другого потока видит либо старый, либо новый набор.
    `evicted` хранит чанки, покинувшие набор именно в этом обновлении (STALE).
    """
    chunks: Mapping[ChunkKey, Chunk] = field(default_factory=dict)
    generation: int = 0
    evicted: Mapping[ChunkKey, Chunk] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "chunks", _frozen(self.chunks))
        object.__setattr__(self, "evicted", _frozen(self.evicted))

    def __len__(self) -> int:
        return len(self.chunks)

    def __contains__(self, key: object) -> bool:
        return key in self.chunks

    def __iter__(self) -> Iterator[Chunk]:
        return iter(self.chunks.values())

    def get(self, cx: int, cz: int) -> Optional[Chunk]:
        return self.chunks.get((cx, cz))

    def keys(self):
        return self.chunks.keys()

    def lods(self) -> dict:
        return {k: c.lod for k, c in self.chunks.items()}

    def pending(self) -> Tuple[Chunk, ...]:
        return tuple(c for c in self.chunks.values() if c.state is ChunkState.PENDING)
