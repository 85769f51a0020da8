# ==============================================================================
# Файл: terrain_engine/__init__.py
# Назначение: Процедурный рельеф (поле высот) и управление чанками / LOD.
# ==============================================================================
from __future__ import annotations

from .core.preset import TerrainParameters, load_preset
from .core.types import Chunk, ChunkBounds, ChunkState, VisibleSet
from .world import ChunkHeightBuilder, ChunkManager, HeightField, HeightmapQuery

__version__ = "1.0.0"

__all__ = [
    "TerrainParameters",
    "load_preset",
    "Chunk",
    "ChunkBounds",
    "ChunkState",
    "VisibleSet",
    "HeightField",
    "HeightmapQuery",
    "ChunkManager",
    "ChunkHeightBuilder",
]
