# ==============================================================================
# Файл: terrain_engine/world/__init__.py
# Назначение: Мир: поле высот, запросы высоты, чанки и их сетки.
# ==============================================================================
from __future__ import annotations

from .height_field import HeightField
from .query import HeightmapQuery
from .chunk_manager import ChunkManager
from .chunk_builder import ChunkHeightBuilder, build_chunk_heights, chunk_vertex_coords

__all__ = [
    "HeightField",
    "HeightmapQuery",
    "ChunkManager",
    "ChunkHeightBuilder",
    "build_chunk_heights",
    "chunk_vertex_coords",
]
